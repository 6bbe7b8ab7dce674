"""
ArrayMutator for array-valued branches of a data instance.

Adds blank rows and removes or moves existing rows at a path, reading and
writing the array through path addressing so missing containers are created
on the way.
"""

import copy
import logging
from typing import Any, List

from .path_addressing import PathLike, get_value, parse_path, set_value
from .schema_nodes import ArraySchema, ObjectSchema, resolve_schema

logger = logging.getLogger(__name__)


class ArrayMutator:
    """Creates blank array items and inserts, removes or moves them."""
    
    @staticmethod
    def create_blank_item(item_schema: Any) -> Any:
        """
        Create a zero-valued item matching an item schema.
        
        Leaves take their default when one is given, else "", 0 or False.
        Nested arrays start empty. Objects carry every property whose blank
        value is not None.
        
        Args:
            item_schema: Raw item schema dictionary or resolved node
            
        Returns:
            Blank item; an empty dict when the schema is absent
        """
        if item_schema is None:
            return {}
        return ArrayMutator._blank_node(resolve_schema(item_schema))
    
    @staticmethod
    def _blank_node(node: Any) -> Any:
        if isinstance(node, ObjectSchema):
            item = {}
            for name, child in node.properties.items():
                value = ArrayMutator._blank_node(child)
                # Same shape as sample data: None values are left out
                if value is None:
                    continue
                item[name] = value
            return item
        
        if isinstance(node, ArraySchema):
            return []
        
        if node.has_default:
            return copy.deepcopy(node.default)
        
        if node.type == 'number':
            return 0
        if node.type == 'boolean':
            return False
        return ""
    
    @staticmethod
    def _read_array(data: Any, array_path: PathLike) -> List[Any]:
        """Read the array at a path, treating a missing value as empty."""
        current = get_value(data, array_path)
        if current is None:
            return []
        if not isinstance(current, list):
            logger.warning(
                f"Value at '{array_path}' is {type(current).__name__}, not a list; treating it as empty"
            )
            return []
        return current
    
    @staticmethod
    def _write_array(data: Any, array_path: PathLike, items: List[Any]) -> None:
        segments = array_path if isinstance(array_path, list) else parse_path(array_path)
        if not segments:
            # The root itself is the array: it is owned by the caller, so update it in place
            if isinstance(data, list):
                data[:] = items
            else:
                logger.warning("Cannot write an array at the empty path of a non-list root")
            return
        set_value(data, segments, items)
    
    @staticmethod
    def add_item(data: Any, array_path: PathLike, item_schema: Any) -> Any:
        """
        Append a blank item to the array at a path.
        
        Existing items keep their identity and order; the array grows by one.
        
        Args:
            data: Data instance, mutated in place
            array_path: Path of the array
            item_schema: Item schema of the array
            
        Returns:
            The same data object
        """
        current = ArrayMutator._read_array(data, array_path)
        updated = list(current)
        updated.append(ArrayMutator.create_blank_item(item_schema))
        
        ArrayMutator._write_array(data, array_path, updated)
        logger.debug(f"[add_item] {array_path}: {len(current)} -> {len(updated)} items")
        return data
    
    @staticmethod
    def remove_item(data: Any, array_path: PathLike, index: int) -> Any:
        """
        Remove the item at an index from the array at a path.
        
        An out-of-range index is a no-op.
        
        Args:
            data: Data instance, mutated in place
            array_path: Path of the array
            index: Zero-based index of the item to remove
            
        Returns:
            The same data object
        """
        current = ArrayMutator._read_array(data, array_path)
        if not 0 <= index < len(current):
            logger.debug(f"[remove_item] Index {index} out of range for '{array_path}' ({len(current)} items)")
            return data
        
        updated = current[:index] + current[index + 1:]
        ArrayMutator._write_array(data, array_path, updated)
        logger.debug(f"[remove_item] {array_path}: removed item {index}, {len(updated)} left")
        return data
    
    @staticmethod
    def move_item(data: Any, array_path: PathLike, from_index: int, to_index: int) -> Any:
        """
        Move an item to a new position inside the array at a path.
        
        Either index out of range is a no-op.
        
        Args:
            data: Data instance, mutated in place
            array_path: Path of the array
            from_index: Current index of the item
            to_index: Index the item should end up at
            
        Returns:
            The same data object
        """
        current = ArrayMutator._read_array(data, array_path)
        if not (0 <= from_index < len(current) and 0 <= to_index < len(current)):
            logger.debug(f"[move_item] Indices {from_index}->{to_index} out of range for '{array_path}'")
            return data
        
        updated = list(current)
        updated.insert(to_index, updated.pop(from_index))
        ArrayMutator._write_array(data, array_path, updated)
        return data
