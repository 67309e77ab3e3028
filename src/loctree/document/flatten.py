"""Flatten a combined document tree into a FlatTable.

Depth-first walk keeping the current path as a stack of object-key
segments. Per node kind:

    object  push each key, recurse into its value, pop
    array   one entry under the joined path holding every string element,
            in order; non-strings skipped; nothing written if none remain
    string  one entry under the joined path with a single variant
    other   ignored (numbers, booleans, null)

Keys are built by trimming KEY_TRIM_CHARS from each segment, joining with
KEY_SEPARATOR and trimming the joined result again.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from loctree.constants import KEY_SEPARATOR, KEY_TRIM_CHARS, MAX_DEPTH
from loctree.core.depth_guard import DepthGuard
from loctree.document.table import FlatTable
from loctree.document.tree import DocumentTree, node_kind
from loctree.enums import NodeKind

__all__ = ["build_flat_key", "flatten_document"]

logger = logging.getLogger(__name__)


def build_flat_key(segments: Sequence[str]) -> str:
    """Join path segments into a flat key.

    Example:
        >>> build_flat_key(["ui", "menu", "play"])
        'ui/menu/play'
        >>> build_flat_key([' "ui" ', "menu/\\n"])
        'ui/menu'
    """
    joined = KEY_SEPARATOR.join(segment.strip(KEY_TRIM_CHARS) for segment in segments)
    return joined.strip(KEY_TRIM_CHARS)


def flatten_document(tree: DocumentTree, *, max_depth: int = MAX_DEPTH) -> FlatTable:
    """Flatten tree into a new FlatTable.

    Two leaves that map to the same flat key (possible only through
    trimming, e.g. "a " and "a") resolve last-written-wins.

    Args:
        tree: Combined document (normally an object)
        max_depth: Nesting cap (see DepthGuard)

    Returns:
        Table whose every value has at least one variant

    Raises:
        DepthLimitExceededError: If tree nests deeper than max_depth

    Example:
        >>> table = flatten_document({"a": {"b": ["x", 1, "y"]}, "n": 3})
        >>> dict(table)
        {'a/b': ('x', 'y')}
    """
    entries: dict[str, list[str]] = {}
    guard = DepthGuard(max_depth=max_depth, label="<flatten>")
    _walk(tree, guard, entries)
    logger.debug("Flattened document into %d key(s)", len(entries))
    return FlatTable(entries)


def _walk(node: DocumentTree, guard: DepthGuard, entries: dict[str, list[str]]) -> None:
    # guard.path is the segment stack.
    match node_kind(node):
        case NodeKind.OBJECT:
            for key, value in node.items():  # type: ignore[union-attr]
                with guard.descend(str(key)):
                    _walk(value, guard, entries)
        case NodeKind.ARRAY:
            variants = [item for item in node if isinstance(item, str)]  # type: ignore[union-attr]
            if variants:
                entries[build_flat_key(guard.path)] = variants
        case NodeKind.STRING:
            entries[build_flat_key(guard.path)] = [node]  # type: ignore[list-item]
        case _:
            pass
