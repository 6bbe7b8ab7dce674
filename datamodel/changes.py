"""
Change tracking between two versions of a data instance.

Uses DeepDiff's tree view and reports every difference under the same
dot/bracket path notation the rest of the data model uses, so a change can be
fed straight back into get_value/set_value.
"""

from dataclasses import dataclass
from typing import Any, Dict, List
import logging

from deepdiff import DeepDiff

from .path_addressing import format_path

logger = logging.getLogger(__name__)

# DeepDiff report type -> change kind
_REPORT_KINDS = {
    'values_changed': 'changed',
    'type_changes': 'changed',
    'dictionary_item_added': 'added',
    'iterable_item_added': 'added',
    'dictionary_item_removed': 'removed',
    'iterable_item_removed': 'removed',
}


@dataclass(frozen=True)
class Change:
    """
    A single difference between two data instances.

    Attributes:
        path: Path of the changed value
        kind: "added", "removed" or "changed"
        old: Previous value (None when added)
        new: Current value (None when removed)
    """
    path: str
    kind: str
    old: Any = None
    new: Any = None


def calculate_changes(original: Any, modified: Any) -> List[Change]:
    """
    Calculate differences between an original and a modified data instance.

    Array order is significant: moving a row is reported as changes.

    Args:
        original: Data instance before editing
        modified: Data instance after editing

    Returns:
        Changes sorted by path
    """
    diff = DeepDiff(original, modified, ignore_order=False, verbose_level=2, view='tree')

    changes: List[Change] = []
    for report_type, kind in _REPORT_KINDS.items():
        for level in diff.get(report_type, []):
            path = format_path(level.path(output_format='list'))
            old = None if kind == 'added' else level.t1
            new = None if kind == 'removed' else level.t2
            changes.append(Change(path=path, kind=kind, old=old, new=new))

    changes.sort(key=lambda change: change.path)
    logger.debug(f"[calculate_changes] {len(changes)} changes")
    return changes


def has_changes(changes: List[Change]) -> bool:
    """Check if there are any changes."""
    return bool(changes)


def get_change_summary(changes: List[Change]) -> Dict[str, int]:
    """
    Count changes by kind.

    Args:
        changes: Output of calculate_changes

    Returns:
        Dictionary with added/removed/changed/total counts
    """
    summary = {'added': 0, 'removed': 0, 'changed': 0}
    for change in changes:
        summary[change.kind] += 1
    summary['total'] = sum(summary.values())
    return summary
