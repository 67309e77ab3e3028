"""Recursive merge of the documents belonging to one language.

Rule, applied key by key for every key of the source object:
    - key already in target: recurse into target[key] with source[key]
    - key absent: copy source[key] into target, whole subtree included

Consequences:
    - First document wins at every leaf. A later document can only add
      keys; it never replaces an existing string, array or number.
    - Recursing into a leaf is a no-op, so a later object that collides
      with an earlier leaf (or the reverse) is dropped silently.
    - Load order is significant and must be preserved by the caller.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from loctree.constants import MAX_DEPTH
from loctree.core.depth_guard import DepthGuard
from loctree.document.tree import DocumentObject, DocumentTree, is_array, is_object

__all__ = ["copy_tree", "merge_documents", "merge_into"]

logger = logging.getLogger(__name__)


def merge_into(
    target: DocumentObject,
    source: Mapping[str, DocumentTree],
    *,
    guard: DepthGuard | None = None,
) -> DocumentObject:
    """Merge source into target in place.

    Args:
        target: Accumulated object; mutated and returned
        source: Next document (or sub-object) in load order
        guard: Depth guard shared across the recursion

    Returns:
        target

    Raises:
        DepthLimitExceededError: If nesting exceeds the guard's limit

    Example:
        >>> merge_into({"greet": "hi"}, {"greet": "bye", "farewell": "later"})
        {'greet': 'hi', 'farewell': 'later'}
    """
    if guard is None:
        guard = DepthGuard()

    for raw_key, value in source.items():
        key = str(raw_key)
        with guard.descend(key):
            if key not in target:
                target[key] = copy_tree(value, guard=guard)
                continue
            existing = target[key]
            if isinstance(existing, dict) and is_object(value):
                merge_into(existing, value, guard=guard)
    return target


def merge_documents(
    documents: Iterable[Mapping[str, DocumentTree]],
    *,
    max_depth: int = MAX_DEPTH,
) -> DocumentObject:
    """Combine documents, in order, into one new object.

    Inputs are never mutated; the result shares no containers with them.

    Args:
        documents: Object documents in load order
        max_depth: Nesting cap (see DepthGuard)

    Returns:
        Combined object (empty dict for no documents)
    """
    combined: DocumentObject = {}
    guard = DepthGuard(max_depth=max_depth, label="<merge>")
    count = 0
    for document in documents:
        merge_into(combined, document, guard=guard)
        count += 1
    logger.debug("Merged %d document(s) into %d top-level key(s)", count, len(combined))
    return combined


def copy_tree(node: DocumentTree, *, guard: DepthGuard | None = None) -> DocumentTree:
    """Deep-copy a node into plain dicts and lists.

    Object nodes become dict, array nodes become list, scalars are returned
    as-is. Inline documents built from read-only mappings or tuples are
    normalized this way so later merges can mutate the copy.
    """
    if guard is None:
        guard = DepthGuard()

    if is_object(node):
        copied: DocumentObject = {}
        for raw_key, value in node.items():
            key = str(raw_key)
            with guard.descend(key):
                copied[key] = copy_tree(value, guard=guard)
        return copied
    if is_array(node):
        items: list[DocumentTree] = []
        for position, item in enumerate(node):
            if not (is_object(item) or is_array(item)):
                # Array elements are leaves of the key path, as in flatten.
                items.append(item)
                continue
            with guard.descend(position):
                items.append(copy_tree(item, guard=guard))
        return items
    return node
