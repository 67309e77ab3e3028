"""Hypothesis strategies for document trees and flat tables.

Event-Emitting Strategies (HypoFuzz-Optimized):
- string_arrays: Emits doc_array=all_strings|mixed|no_strings

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

# Segment alphabet excludes the key separator and the trim set so that a
# generated path maps to exactly one flat key.
KEY_ALPHABET = string.ascii_letters + string.digits + "_-."


def key_segments() -> SearchStrategy[str]:
    """Object keys that survive trimming unchanged."""
    return st.text(alphabet=KEY_ALPHABET, min_size=1, max_size=8)


def scalars() -> SearchStrategy[object]:
    """Non-string leaves ignored by flatten."""
    return st.one_of(
        st.none(),
        st.booleans(),
        st.integers(min_value=-1000, max_value=1000),
        st.floats(allow_nan=False, allow_infinity=False),
    )


@st.composite
def string_arrays(draw: DrawFn) -> list[object]:
    """Arrays mixing strings and other scalars.

    Events emitted:
    - doc_array=all_strings|mixed|no_strings
    """
    items = draw(st.lists(st.one_of(st.text(max_size=10), scalars()), max_size=6))
    strings = sum(1 for item in items if isinstance(item, str))
    kind = (
        "no_strings" if strings == 0
        else "all_strings" if strings == len(items)
        else "mixed"
    )
    event(f"doc_array={kind}")
    return items


def document_trees(max_leaves: int = 20) -> SearchStrategy[object]:
    """Arbitrary document nodes: objects, arrays, strings and scalars."""
    leaves = st.one_of(st.text(max_size=12), scalars(), string_arrays())
    return st.recursive(
        leaves,
        lambda children: st.dictionaries(key_segments(), children, max_size=4),
        max_leaves=max_leaves,
    )


def document_objects(max_leaves: int = 20) -> SearchStrategy[dict[str, object]]:
    """Document roots (always objects)."""
    return st.dictionaries(key_segments(), document_trees(max_leaves), max_size=5)


@st.composite
def flat_tables(draw: DrawFn) -> dict[str, list[str]]:
    """Key -> non-empty variant list mappings."""
    keys = draw(
        st.lists(
            st.lists(key_segments(), min_size=1, max_size=3).map("/".join),
            max_size=8,
            unique=True,
        )
    )
    return {
        key: draw(st.lists(st.text(max_size=10), min_size=1, max_size=4)) for key in keys
    }
