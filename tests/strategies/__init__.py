"""Hypothesis strategies for loctree property-based testing.

Strategies are organized by domain:

- documents: key segments, document trees and flat tables

Usage:
    from tests.strategies import document_objects, key_segments
    from tests.strategies.documents import flat_tables
"""

from .documents import (
    KEY_ALPHABET,
    document_objects,
    document_trees,
    flat_tables,
    key_segments,
    scalars,
    string_arrays,
)

__all__ = [
    "KEY_ALPHABET",
    "document_objects",
    "document_trees",
    "flat_tables",
    "key_segments",
    "scalars",
    "string_arrays",
]
