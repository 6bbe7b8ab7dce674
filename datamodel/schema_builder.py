"""
Schema builder for template field lists.

Templates expose their user fields as dot-notation names ("customer.name")
and their repetition groups as array paths ("positions"). This module turns
both lists into a raw object schema:

- "customer.name" -> {customer: {type: object, properties: {name: {type: string}}}}
- a name whose path-so-far is a repetition group becomes an array of objects,
  and the remaining segments become properties of the array items
- leaf types are inferred from the field name, defaulting to string
"""

from typing import Any, Dict, Iterable, List, Set
import logging

logger = logging.getLogger(__name__)

# Checked as case-insensitive substrings, numeric first
NUMBER_KEYWORDS = (
    'price', 'amount', 'quantity', 'total', 'rate', 'discount', 'tax', 'fee',
    'cost', 'salary', 'percentage', 'percent', 'weight', 'height', 'width',
    'depth', 'volume', 'area', 'temperature', 'subtotal'
)

BOOLEAN_KEYWORDS = (
    'active', 'enabled', 'deleted', 'flag', 'checked', 'is', 'has', 'success',
    'valid', 'approved', 'confirmed', 'required'
)


def infer_type(field_name: str) -> str:
    """
    Infer a leaf type from a field name.

    Deliberately conservative: identifiers such as "number", "id" or "code"
    stay strings.

    Args:
        field_name: Last segment of a field name

    Returns:
        "number", "boolean" or "string"
    """
    lower = field_name.lower()

    if any(keyword in lower for keyword in NUMBER_KEYWORDS):
        return 'number'

    if any(keyword in lower for keyword in BOOLEAN_KEYWORDS):
        return 'boolean'

    return 'string'


def _new_array() -> Dict[str, Any]:
    return {'type': 'array', 'items': {'type': 'object', 'properties': {}}}


def _new_object() -> Dict[str, Any]:
    return {'type': 'object', 'properties': {}}


def _item_properties(array_node: Dict[str, Any]) -> Dict[str, Any]:
    items = array_node.setdefault('items', {'type': 'object'})
    return items.setdefault('properties', {})


def _add_property(properties: Dict[str, Any], parts: List[str], depth: int, array_paths: Set[str]) -> None:
    name = parts[depth]
    full_path = '.'.join(parts[:depth + 1])
    existing = properties.get(name)
    is_last = depth == len(parts) - 1

    if full_path in array_paths:
        if existing is None or existing.get('type') != 'array':
            if existing is not None:
                logger.debug(f"Replacing {existing.get('type')} node at '{full_path}' with repetition group")
            existing = _new_array()
            properties[name] = existing
        if not is_last:
            _add_property(_item_properties(existing), parts, depth + 1, array_paths)
        return

    if is_last:
        # Existing nodes are never overwritten by a later, shorter name
        if existing is None:
            properties[name] = {'type': infer_type(name)}
        return

    if existing is None or existing.get('type') != 'object':
        if existing is not None:
            logger.debug(f"Promoting {existing.get('type')} node at '{full_path}' to object")
        existing = _new_object()
        properties[name] = existing
    _add_property(existing.setdefault('properties', {}), parts, depth + 1, array_paths)


def build_schema(field_names: Iterable[str], array_paths: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Build a raw object schema from template field names and repetition groups.

    Args:
        field_names: Dot-notation field names, duplicates allowed
        array_paths: Dot-notation paths of repetition groups

    Returns:
        Raw schema dictionary with type "object"
    """
    schema = _new_object()
    groups = {path.strip() for path in array_paths if path and path.strip()}

    seen: Set[str] = set()
    for field_name in field_names:
        if not isinstance(field_name, str):
            logger.warning(f"Skipping non-string field name: {field_name!r}")
            continue
        parts = [part for part in field_name.strip().split('.') if part]
        if not parts:
            continue
        key = '.'.join(parts)
        if key in seen:
            continue
        seen.add(key)
        _add_property(schema['properties'], parts, 0, groups)

    # A repetition group without any fields still shows up as an empty array of objects
    for group in sorted(groups):
        parts = [part for part in group.split('.') if part]
        if parts:
            _add_property(schema['properties'], parts, 0, groups)

    logger.info(f"Built schema from {len(seen)} fields and {len(groups)} repetition groups")
    return schema
