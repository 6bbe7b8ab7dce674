"""
Read-only display tree for stored data instances.

Object keys are listed in ascending order at every level, arrays get an
"Array (<n> items)" header and 1-based "Item <i>" labels. The tree is rebuilt on
every call; nothing is cached.
"""

from dataclasses import dataclass
from typing import Any, List, Optional
import logging

from .path_addressing import join_path

logger = logging.getLogger(__name__)

EMPTY_LABEL = "(empty)"


@dataclass(frozen=True)
class DisplayLine:
    """
    One line of a display tree.

    Attributes:
        label: Key, "Item <i>" or array header; empty for a bare value
        value: Rendered scalar, or None for lines that introduce a nested tree
        depth: Indentation level, presentational only
        path: Path of the value the line describes
    """
    label: str
    value: Optional[str]
    depth: int
    path: str


def format_scalar(value: Any) -> str:
    """Render a scalar the way it appears on the wire."""
    if value is None:
        return EMPTY_LABEL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def to_display_tree(value: Any, path: str = "", depth: int = 0) -> List[DisplayLine]:
    """
    Render a data value as an ordered list of display lines.

    Args:
        value: Data value (dict, list or scalar)
        path: Path of the value inside its data instance
        depth: Indentation level of the first line

    Returns:
        Display lines in top-to-bottom order
    """
    if isinstance(value, list):
        return _array_lines(value, path, depth)

    if isinstance(value, dict):
        return _object_lines(value, path, depth)

    return [DisplayLine(label="", value=format_scalar(value), depth=depth, path=path)]


def _array_lines(items: List[Any], path: str, depth: int) -> List[DisplayLine]:
    lines = [DisplayLine(label=f"Array ({len(items)} items)", value=None, depth=depth, path=path)]

    for index, item in enumerate(items):
        item_path = f"{path}[{index}]"
        label = f"Item {index + 1}"
        if _is_container(item):
            lines.append(DisplayLine(label=label, value=None, depth=depth + 1, path=item_path))
            lines.extend(to_display_tree(item, item_path, depth + 2))
        else:
            lines.append(DisplayLine(label=label, value=format_scalar(item), depth=depth + 1, path=item_path))

    return lines


def _object_lines(mapping: dict, path: str, depth: int) -> List[DisplayLine]:
    lines: List[DisplayLine] = []

    # Sort on the string form so mixed key types still order deterministically
    for key in sorted(mapping, key=str):
        child = mapping[key]
        child_path = join_path(path, str(key))
        if _is_container(child):
            lines.append(DisplayLine(label=str(key), value=None, depth=depth, path=child_path))
            lines.extend(to_display_tree(child, child_path, depth + 1))
        else:
            lines.append(DisplayLine(label=str(key), value=format_scalar(child), depth=depth, path=child_path))

    return lines


def format_display_tree(lines: List[DisplayLine], indent: str = "  ") -> str:
    """
    Render display lines as indented plain text.

    Args:
        lines: Output of to_display_tree
        indent: Text repeated once per depth level

    Returns:
        Multi-line string
    """
    rendered = []
    for line in lines:
        prefix = indent * line.depth
        if line.label and line.value is not None:
            rendered.append(f"{prefix}{line.label}: {line.value}")
        elif line.label:
            rendered.append(f"{prefix}{line.label}")
        else:
            rendered.append(f"{prefix}{line.value}")
    return "\n".join(rendered)
