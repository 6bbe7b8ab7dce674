"""
Sample data generation from a schema tree.

Samples are meant to look like placeholders: string leaves without a default
become "<field>_example", numbers 0, booleans False, and every array holds a
single representative item so nested rows are visible in a new draft.
"""

import copy
import logging
from typing import Any

from .schema_nodes import ArraySchema, ObjectSchema, resolve_schema

logger = logging.getLogger(__name__)

SAMPLE_SUFFIX = "_example"
ANONYMOUS_FIELD = "item"


def generate_sample(schema: Any, field_name: str = ANONYMOUS_FIELD) -> Any:
    """
    Generate a fully populated sample instance for a schema.

    Deterministic and pure: repeated calls return deep-equal values that share
    no mutable objects.

    Args:
        schema: Raw schema dictionary or resolved node
        field_name: Name used for a top-level string leaf

    Returns:
        Sample data instance; an empty dict for an absent schema
    """
    if schema is None:
        return {}

    return _sample_node(resolve_schema(schema), field_name)


def _sample_node(node: Any, field_name: str) -> Any:
    if isinstance(node, ObjectSchema):
        sample = {}
        for name, child in node.properties.items():
            value = _sample_node(child, name)
            # None is the "no value" sentinel and is never emitted
            if value is None:
                continue
            sample[name] = value
        return sample

    if isinstance(node, ArraySchema):
        if node.items is None:
            return []
        return [_sample_node(node.items, field_name)]

    if node.has_default:
        return copy.deepcopy(node.default)

    if node.type == 'number':
        return 0
    if node.type == 'boolean':
        return False
    return f"{field_name}{SAMPLE_SUFFIX}"
