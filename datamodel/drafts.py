"""
Drafts: separately owned data instances for the create and edit flows.

Each draft holds its own schema and data instance and hands them explicitly
to the engine functions. There is no shared "current draft"; two drafts never
share mutable objects.
"""

import copy
import json
import logging
from typing import Any, Iterable, Iterator, List, Optional

from .array_mutator import ArrayMutator
from .changes import Change, calculate_changes
from .exceptions import SchemaPathError
from .path_addressing import PathLike, format_path, get_value, parse_path, set_value
from .sample_data import generate_sample
from .schema_nodes import ArraySchema, ObjectSchema, resolve_schema
from .schema_walker import FieldDescriptor, walk_array_items, walk_schema
from .tree_serializer import DisplayLine, to_display_tree

logger = logging.getLogger(__name__)

CREATE = "create"
EDIT = "edit"


def schema_at(schema: Any, path: PathLike) -> Optional[Any]:
    """
    Find the schema node that describes the value at a data path.

    Name segments step into object properties, index segments into array items.

    Args:
        schema: Raw schema dictionary or resolved node
        path: Data path, e.g. "positions[0].qty"

    Returns:
        Resolved schema node, or None when the path leaves the schema
    """
    node = resolve_schema(schema)
    segments = path if isinstance(path, list) else parse_path(path)

    for segment in segments:
        if isinstance(segment, int):
            if not isinstance(node, ArraySchema) or node.items is None:
                return None
            node = node.items
        else:
            if not isinstance(node, ObjectSchema) or segment not in node.properties:
                return None
            node = node.properties[segment]

    return node


class Draft:
    """A schema plus the data instance one create or edit flow is working on."""

    def __init__(self, schema: Any, data: Optional[Any] = None, flow: str = CREATE):
        if flow not in (CREATE, EDIT):
            raise ValueError(f"Unknown draft flow '{flow}', expected '{CREATE}' or '{EDIT}'")

        self.flow = flow
        self.schema = resolve_schema(schema)

        if data is not None:
            self.data = copy.deepcopy(data)
        elif flow == CREATE:
            self.data = generate_sample(self.schema)
        else:
            self.data = {}

        # Starting point for change tracking
        self.original = copy.deepcopy(self.data)
        logger.debug(f"Draft opened for {flow} flow")

    @classmethod
    def create(cls, schema: Any) -> "Draft":
        """Open a create draft seeded with sample data."""
        return cls(schema, flow=CREATE)

    @classmethod
    def edit(cls, schema: Any, data: Any) -> "Draft":
        """Open an edit draft on a copy of stored data."""
        return cls(schema, data=data, flow=EDIT)

    def get(self, path: PathLike, default: Any = None) -> Any:
        return get_value(self.data, path, default)

    def set(self, path: PathLike, value: Any) -> "Draft":
        set_value(self.data, path, value)
        return self

    def _array_schema(self, array_path: PathLike) -> ArraySchema:
        node = schema_at(self.schema, array_path)
        if not isinstance(node, ArraySchema):
            path_str = array_path if isinstance(array_path, str) else format_path(array_path)
            raise SchemaPathError(path_str, 'array', node.kind if node is not None else None)
        return node

    def add_item(self, array_path: PathLike) -> "Draft":
        """
        Append a blank item to an array field.

        Raises:
            SchemaPathError: If the path is not an array in the draft's schema
        """
        node = self._array_schema(array_path)
        ArrayMutator.add_item(self.data, array_path, node.items)
        return self

    def remove_item(self, array_path: PathLike, index: int) -> "Draft":
        """
        Remove an item from an array field; out-of-range indices are ignored.

        Raises:
            SchemaPathError: If the path is not an array in the draft's schema
        """
        self._array_schema(array_path)
        ArrayMutator.remove_item(self.data, array_path, index)
        return self

    def move_item(self, array_path: PathLike, from_index: int, to_index: int) -> "Draft":
        self._array_schema(array_path)
        ArrayMutator.move_item(self.data, array_path, from_index, to_index)
        return self

    def fields(self) -> List[FieldDescriptor]:
        """
        List the fields of the draft, with arrays expanded to their current items.
        """
        return list(self._expand_fields(walk_schema(self.schema)))

    def _expand_fields(self, descriptors: Iterable[FieldDescriptor]) -> Iterator[FieldDescriptor]:
        for descriptor in descriptors:
            yield descriptor
            if descriptor.kind == 'array':
                items = get_value(self.data, descriptor.path)
                count = len(items) if isinstance(items, list) else 0
                yield from self._expand_fields(
                    walk_array_items(descriptor.item_schema, descriptor.path, count)
                )

    def display_tree(self) -> List[DisplayLine]:
        return to_display_tree(self.data)

    def to_payload(self, **json_kwargs) -> str:
        """Serialize the data instance as the JSON wire payload."""
        return json.dumps(self.data, ensure_ascii=False, **json_kwargs)

    def changes(self) -> List[Change]:
        """Changes made since the draft was opened."""
        return calculate_changes(self.original, self.data)

    def has_changes(self) -> bool:
        return bool(self.changes())
