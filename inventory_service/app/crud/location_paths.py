"""Materialized path helpers for the location tree.

Every location stores two slash-joined strings covering the chain from the
root down to itself: ``path`` over names (``/Shop/Bench1``) and
``path_ids`` over ids (``/<id-shop>/<id-bench1>``).
"""

from typing import Callable, Optional

SEPARATOR = "/"


def join_path(parent_path: Optional[str], segment: str) -> str:
    if parent_path:
        return f"{parent_path}{SEPARATOR}{segment}"
    return f"{SEPARATOR}{segment}"


def leaf_segment(path: str) -> str:
    """Last component of a stored path; '' for an empty path."""
    return (path or "").split(SEPARATOR)[-1]


def rebase_path(new_parent_path: str, stored_child_path: str) -> str:
    """Re-root a child under its parent's new path, keeping the child's own leaf."""
    return join_path(new_parent_path, leaf_segment(stored_child_path))


def creates_cycle(node_id: str, new_parent_id: Optional[str], get_parent_id: Callable[[str], Optional[str]]) -> bool:
    """True when moving ``node_id`` under ``new_parent_id`` would close a loop.

    Walks upward from the proposed parent through ``get_parent_id``; hitting
    the node being moved means the proposed parent is the node itself or one
    of its descendants. A corrupt chain that loops without reaching the node
    is also reported as a cycle.
    """
    seen = set()
    current = new_parent_id
    while current is not None:
        if current == node_id or current in seen:
            return True
        seen.add(current)
        current = get_parent_id(current)
    return False
