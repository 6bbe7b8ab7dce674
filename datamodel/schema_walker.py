"""
Schema walker producing field descriptors for form generation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
import logging

from .path_addressing import Segment, join_path, parse_path
from .schema_nodes import ArraySchema, LeafSchema, ObjectSchema, resolve_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One field of a schema, as seen by a form renderer.

    Attributes:
        name: Property name (or "<array>[i]" for an expanded array item)
        path: Dot/bracket path of the field in the data instance
        kind: "object", "array" or "leaf"
        leaf_type: "string", "number" or "boolean" for leaves
        item_schema: Item schema of an array field
        child_schemas: Child schemas of an object field
    """
    name: str
    path: str
    kind: str
    leaf_type: Optional[str] = None
    item_schema: Optional[Any] = None
    child_schemas: Dict[str, Any] = field(default_factory=dict)

    @property
    def segments(self) -> List[Segment]:
        return parse_path(self.path)


def describe_field(name: str, path: str, node: Any) -> FieldDescriptor:
    """Build the descriptor of a single resolved schema node."""
    if isinstance(node, ObjectSchema):
        return FieldDescriptor(name=name, path=path, kind='object', child_schemas=dict(node.properties))
    if isinstance(node, ArraySchema):
        return FieldDescriptor(name=name, path=path, kind='array', item_schema=node.items)
    return FieldDescriptor(name=name, path=path, kind='leaf', leaf_type=node.type)


def walk_schema(schema: Any, path_prefix: str = '') -> Iterator[FieldDescriptor]:
    """
    Walk a schema depth-first, pre-order, yielding one descriptor per field.

    The object node passed in is not emitted itself, only its children. Nested
    objects are emitted and then walked. Arrays are emitted once and never
    walked, since their cardinality belongs to the data, not the schema.

    Args:
        schema: Raw schema dictionary or resolved node
        path_prefix: Path of the object node being walked

    Yields:
        FieldDescriptor for every field below the node
    """
    if schema is None:
        return

    node = resolve_schema(schema)
    if not isinstance(node, ObjectSchema):
        logger.debug(f"Nothing to walk at '{path_prefix}': node is {node.kind}")
        return

    for name, child in node.properties.items():
        child_path = join_path(path_prefix, name)
        yield describe_field(name, child_path, child)
        if isinstance(child, ObjectSchema):
            yield from walk_schema(child, child_path)


def walk_array_items(item_schema: Any, array_path: str, count: int) -> Iterator[FieldDescriptor]:
    """
    Expand an array field against the number of items currently in the data.

    Object items are walked like any object under ``array_path[i]``; other
    items are emitted as a single descriptor each.

    Args:
        item_schema: Item schema of the array (raw or resolved)
        array_path: Path of the array field
        count: Number of items the array currently holds

    Yields:
        FieldDescriptor for every item field
    """
    if item_schema is None or count <= 0:
        return

    node = resolve_schema(item_schema)
    segments = parse_path(array_path)
    array_name = str(segments[-1]) if segments else 'item'

    for index in range(count):
        item_path = f"{array_path}[{index}]"
        if isinstance(node, ObjectSchema):
            yield from walk_schema(node, item_path)
        elif isinstance(node, (ArraySchema, LeafSchema)):
            yield describe_field(f"{array_name}[{index}]", item_path, node)
