"""Generic document tree produced by parsing one source document.

A document is an object (ordered key -> value), an array, or a scalar.
Only strings are meaningful leaves; numbers, booleans and nulls are
carried through merge but ignored by flatten.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeIs

from loctree.enums import NodeKind

__all__ = [
    "DocumentObject",
    "DocumentTree",
    "Scalar",
    "is_array",
    "is_object",
    "node_kind",
]

type Scalar = str | int | float | bool | None
"""Leaf value of a parsed document."""

type DocumentTree = Mapping[str, DocumentTree] | list[DocumentTree] | tuple[DocumentTree, ...] | Scalar
"""Any node of a parsed document."""

type DocumentObject = dict[str, DocumentTree]
"""Mutable object node; the shape merge accumulates into."""


def node_kind(node: object) -> NodeKind:
    """Classify a node.

    Strings are checked first: a str is a Sequence but never an array here.

    Example:
        >>> node_kind({"a": "x"})
        <NodeKind.OBJECT: 'object'>
        >>> node_kind(["x", 1])
        <NodeKind.ARRAY: 'array'>
        >>> node_kind(3)
        <NodeKind.OTHER: 'other'>
    """
    match node:
        case str():
            return NodeKind.STRING
        case Mapping():
            return NodeKind.OBJECT
        case list() | tuple():
            return NodeKind.ARRAY
        case _:
            return NodeKind.OTHER


def is_object(node: object) -> TypeIs[Mapping[str, DocumentTree]]:
    """Check whether node is an object node."""
    return isinstance(node, Mapping)


def is_array(node: object) -> TypeIs[list[DocumentTree] | tuple[DocumentTree, ...]]:
    """Check whether node is an array node."""
    return isinstance(node, (list, tuple))
