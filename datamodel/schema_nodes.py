"""
Resolved schema tree for the data model.

Raw schemas are JSON-Schema-like dictionaries (``type``, ``properties``,
``items``, ``default``). They are resolved once into immutable tagged nodes so
the generators and the walker dispatch on ``kind`` instead of re-reading the
raw ``type`` string on every recursive call.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

NUMBER_TYPES = {'number', 'integer', 'float'}


class LeafSchema(BaseModel):
    """A string, number or boolean field, optionally with a default."""
    model_config = ConfigDict(frozen=True)

    kind: Literal['leaf'] = 'leaf'
    type: Literal['string', 'number', 'boolean'] = 'string'
    default: Any = None
    has_default: bool = False


class ArraySchema(BaseModel):
    """An array whose items all share one schema. items is None when absent."""
    model_config = ConfigDict(frozen=True)

    kind: Literal['array'] = 'array'
    items: Optional['SchemaNode'] = None


class ObjectSchema(BaseModel):
    """An object with named child schemas, in declaration order."""
    model_config = ConfigDict(frozen=True)

    kind: Literal['object'] = 'object'
    properties: Dict[str, 'SchemaNode'] = Field(default_factory=dict)


SchemaNode = Annotated[Union[ObjectSchema, ArraySchema, LeafSchema], Field(discriminator='kind')]

ArraySchema.model_rebuild()
ObjectSchema.model_rebuild()

_NODE_CLASSES = (ObjectSchema, ArraySchema, LeafSchema)


def is_schema_node(value: Any) -> bool:
    """Check whether value is an already resolved schema node."""
    return isinstance(value, _NODE_CLASSES)


def resolve_schema(raw: Any) -> Union[ObjectSchema, ArraySchema, LeafSchema]:
    """
    Resolve a raw schema dictionary into a tagged schema node.

    Never raises. Non-dict input resolves to an empty object node. A root
    that lists its children under ``fields`` instead of ``properties`` is
    accepted as an object.

    Args:
        raw: Raw schema dictionary or an already resolved node

    Returns:
        Resolved schema node
    """
    if is_schema_node(raw):
        return raw

    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning(f"Schema must be a dictionary, got {type(raw).__name__}; using empty object")
        return ObjectSchema()

    if 'type' not in raw and 'properties' not in raw and 'items' not in raw:
        return ObjectSchema(properties=_resolve_properties(raw.get('fields'), ''))

    return _resolve_node(raw, '')


def _resolve_properties(properties: Any, path: str) -> Dict[str, Any]:
    if not isinstance(properties, dict):
        if properties is not None:
            logger.warning(f"Ignoring non-dict 'properties' at '{path or '<root>'}'")
        return {}

    resolved = {}
    for name, config in properties.items():
        child_path = f"{path}.{name}" if path else str(name)
        if not isinstance(config, dict):
            logger.warning(f"Ignoring malformed property '{child_path}': {config!r}")
            continue
        resolved[str(name)] = _resolve_node(config, child_path)
    return resolved


def _resolve_node(raw: Dict[str, Any], path: str) -> Union[ObjectSchema, ArraySchema, LeafSchema]:
    node_type = raw.get('type')

    if node_type == 'object' or (node_type is None and 'properties' in raw):
        return ObjectSchema(properties=_resolve_properties(raw.get('properties'), path))

    if node_type == 'array' or (node_type is None and 'items' in raw):
        items = raw.get('items')
        if isinstance(items, dict):
            return ArraySchema(items=_resolve_node(items, f"{path}[]"))
        return ArraySchema()

    if node_type in NUMBER_TYPES:
        leaf_type = 'number'
    elif node_type == 'boolean':
        leaf_type = 'boolean'
    else:
        if node_type not in (None, 'string'):
            logger.debug(f"Treating unsupported type '{node_type}' at '{path}' as string")
        leaf_type = 'string'

    return LeafSchema(
        type=leaf_type,
        default=raw.get('default'),
        has_default='default' in raw
    )


def schema_to_dict(node: Any) -> Dict[str, Any]:
    """
    Convert a resolved node back into a raw schema dictionary.

    Args:
        node: Resolved schema node (raw dictionaries are resolved first)

    Returns:
        Raw JSON-Schema-like dictionary
    """
    node = resolve_schema(node)

    if isinstance(node, ObjectSchema):
        return {
            'type': 'object',
            'properties': {name: schema_to_dict(child) for name, child in node.properties.items()}
        }

    if isinstance(node, ArraySchema):
        raw: Dict[str, Any] = {'type': 'array'}
        if node.items is not None:
            raw['items'] = schema_to_dict(node.items)
        return raw

    raw = {'type': node.type}
    if node.has_default:
        raw['default'] = node.default
    return raw
