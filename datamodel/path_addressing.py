"""
Path addressing for nested data instances.

Paths mix dotted property names and bracketed array indices, e.g.
``customer.positions[2].name``. A path is parsed into an ordered list of
segments where names are ``str`` and indices are ``int``.
"""

import re
import logging
from typing import Any, List, Union

logger = logging.getLogger(__name__)

# A run of word characters is a property name, a bracketed run of digits is an index
_PATH_TOKEN_PATTERN = re.compile(r"(\w+)|\[(\d+)\]")

Segment = Union[str, int]
PathLike = Union[str, List[Segment]]


def parse_path(path: Any) -> List[Segment]:
    """
    Parse a path string into segments, left to right.

    Args:
        path: Path string such as "a.b[0].c"

    Returns:
        List of segments, e.g. ["a", "b", 0, "c"]. Empty for empty or non-string input.
    """
    if not isinstance(path, str) or not path:
        return []

    segments: List[Segment] = []
    for name, index in _PATH_TOKEN_PATTERN.findall(path):
        if index:
            segments.append(int(index))
        else:
            segments.append(name)

    return segments


def format_path(segments: List[Segment]) -> str:
    """
    Format segments back into a path string.

    Args:
        segments: List of name and index segments

    Returns:
        Path string, e.g. "a[0].b"
    """
    parts: List[str] = []
    for segment in segments:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)


def join_path(prefix: str, name: str) -> str:
    """Append a property name to a path prefix."""
    return f"{prefix}.{name}" if prefix else name


def _segments(path: PathLike) -> List[Segment]:
    if isinstance(path, list):
        return path
    return parse_path(path)


def _fits(container: Any, segment: Segment) -> bool:
    """Check whether container is the kind of container segment indexes into."""
    if isinstance(segment, int):
        return isinstance(container, list)
    return isinstance(container, dict)


def get_value(data: Any, path: PathLike, default: Any = None) -> Any:
    """
    Read the value at a path.

    Args:
        data: Nested data instance
        path: Path string or list of segments
        default: Value returned when the path does not resolve

    Returns:
        The value at the path, or default as soon as a segment does not resolve.
        An empty path returns data itself.
    """
    current = data
    for segment in _segments(path):
        if isinstance(segment, int):
            if isinstance(current, list) and 0 <= segment < len(current):
                current = current[segment]
            else:
                return default
        else:
            if isinstance(current, dict) and segment in current:
                current = current[segment]
            else:
                return default
    return current


def _write_slot(container: Any, segment: Segment, value: Any) -> None:
    if isinstance(segment, int):
        # Writing past the end pads the list
        while len(container) <= segment:
            container.append(None)
    container[segment] = value


def set_value(data: Any, path: PathLike, value: Any) -> Any:
    """
    Write a value at a path, creating intermediate containers as needed.

    A dict is created when the next segment is a name and a list when it is an
    index. An existing value of the wrong kind is replaced with a new empty
    container; this loses the old value and is logged as a warning.

    Args:
        data: Nested data instance, mutated in place
        path: Path string or list of segments
        value: Value to write at the final segment

    Returns:
        The same data object
    """
    segments = _segments(path)
    if not segments:
        logger.warning(f"Ignoring write with empty path: {path!r}")
        return data

    if not _fits(data, segments[0]):
        logger.warning(
            f"Cannot write '{path}': root is {type(data).__name__}, "
            f"segment {segments[0]!r} needs {'list' if isinstance(segments[0], int) else 'dict'}"
        )
        return data

    current = data
    for position, segment in enumerate(segments[:-1]):
        next_segment = segments[position + 1]
        child = get_value(current, [segment])

        if not _fits(child, next_segment):
            if child is not None:
                logger.warning(
                    f"Lossy overwrite at '{format_path(segments[:position + 1])}': "
                    f"replacing {type(child).__name__} with "
                    f"{'list' if isinstance(next_segment, int) else 'dict'}"
                )
            child = [] if isinstance(next_segment, int) else {}
            _write_slot(current, segment, child)

        current = child

    _write_slot(current, segments[-1], value)
    return data
