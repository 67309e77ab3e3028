"""Tests for document/merge.py: first-wins recursive merge.

Python 3.13+.
"""

from __future__ import annotations

from types import MappingProxyType

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from loctree.core.depth_guard import DepthGuard, DepthLimitExceededError
from loctree.document.merge import copy_tree, merge_documents, merge_into
from tests.strategies import document_objects, key_segments


class TestMergeInto:
    """Test merge_into key-by-key rules."""

    def test_absent_key_copied(self) -> None:
        """Keys missing from target are copied in."""
        target: dict[str, object] = {"a": "x"}
        merge_into(target, {"b": "y"})

        assert target == {"a": "x", "b": "y"}

    def test_existing_leaf_kept(self) -> None:
        """A later scalar never replaces an earlier one."""
        target: dict[str, object] = {"greet": "hi"}
        merge_into(target, {"greet": "bye", "farewell": "later"})

        assert target == {"greet": "hi", "farewell": "later"}

    def test_nested_objects_recursed(self) -> None:
        """Objects present in both are merged recursively."""
        target: dict[str, object] = {"ui": {"play": "Play"}}
        merge_into(target, {"ui": {"play": "Go", "quit": "Quit"}})

        assert target == {"ui": {"play": "Play", "quit": "Quit"}}

    def test_object_over_leaf_dropped(self) -> None:
        """An object colliding with an earlier leaf is dropped silently."""
        target: dict[str, object] = {"ui": "flat"}
        merge_into(target, {"ui": {"play": "Play"}})

        assert target == {"ui": "flat"}

    def test_leaf_over_object_dropped(self) -> None:
        """A leaf colliding with an earlier object is dropped silently."""
        target: dict[str, object] = {"ui": {"play": "Play"}}
        merge_into(target, {"ui": "flat"})

        assert target == {"ui": {"play": "Play"}}

    def test_array_leaf_kept(self) -> None:
        """Arrays are leaves: the first one wins whole."""
        target: dict[str, object] = {"tips": ["a", "b"]}
        merge_into(target, {"tips": ["c"]})

        assert target == {"tips": ["a", "b"]}

    def test_returns_target(self) -> None:
        """merge_into returns the mutated target."""
        target: dict[str, object] = {}

        assert merge_into(target, {"a": "x"}) is target

    def test_copied_subtree_not_shared(self) -> None:
        """Copied subtrees do not alias the source."""
        source = {"ui": {"play": "Play"}}
        target: dict[str, object] = {}
        merge_into(target, source)
        target["ui"]["quit"] = "Quit"  # type: ignore[index]

        assert source == {"ui": {"play": "Play"}}

    def test_read_only_mapping_source(self) -> None:
        """Read-only mappings are normalized into dicts."""
        target: dict[str, object] = {}
        merge_into(target, MappingProxyType({"ui": MappingProxyType({"play": "Play"})}))

        assert target == {"ui": {"play": "Play"}}
        assert isinstance(target["ui"], dict)

    def test_non_string_keys_stringified(self) -> None:
        """Keys are converted to strings."""
        target: dict[str, object] = {}
        merge_into(target, {1: "one"})  # type: ignore[dict-item]

        assert target == {"1": "one"}


class TestMergeDocuments:
    """Test merge_documents over several documents."""

    def test_end_to_end_precedence(self) -> None:
        """First document wins; second adds keys."""
        merged = merge_documents([{"greet": "hi"}, {"greet": "bye", "farewell": "later"}])

        assert merged == {"greet": "hi", "farewell": "later"}

    def test_no_documents(self) -> None:
        """No documents merge into an empty object."""
        assert merge_documents([]) == {}

    def test_inputs_not_mutated(self) -> None:
        """Inputs are left untouched."""
        first = {"ui": {"play": "Play"}}
        second = {"ui": {"quit": "Quit"}}
        merge_documents([first, second])

        assert first == {"ui": {"play": "Play"}}
        assert second == {"ui": {"quit": "Quit"}}

    def test_order_significant(self) -> None:
        """Swapping documents swaps the winner."""
        a = {"k": "a"}
        b = {"k": "b"}

        assert merge_documents([a, b])["k"] == "a"
        assert merge_documents([b, a])["k"] == "b"

    def test_depth_cap(self) -> None:
        """Nesting past max_depth raises DepthLimitExceededError."""
        deep: dict[str, object] = {"leaf": "x"}
        for _ in range(10):
            deep = {"n": deep}

        with pytest.raises(DepthLimitExceededError):
            merge_documents([deep], max_depth=5)


class TestCopyTree:
    """Test copy_tree normalization."""

    def test_tuple_becomes_list(self) -> None:
        """Tuples are copied as lists."""
        assert copy_tree(("a", "b")) == ["a", "b"]

    def test_scalar_returned(self) -> None:
        """Scalars are returned as-is."""
        assert copy_tree(3) == 3
        assert copy_tree(None) is None

    def test_guard_restored(self) -> None:
        """The shared guard is back at zero afterwards."""
        guard = DepthGuard(max_depth=10)
        copy_tree({"a": {"b": ["c"]}}, guard=guard)

        assert guard.current_depth == 0


class TestMergeProperties:
    """Property tests for merge precedence and additivity."""

    @given(
        key=key_segments(),
        first=st.text(max_size=10),
        second=st.text(max_size=10),
        prefix=st.lists(key_segments(), max_size=3),
    )
    def test_first_wins_at_shared_leaf(
        self, key: str, first: str, second: str, prefix: list[str]
    ) -> None:
        """PROPERTY: a shared scalar path keeps the first document's value."""
        doc_a: dict[str, object] = {key: first}
        doc_b: dict[str, object] = {key: second}
        for segment in reversed(prefix):
            doc_a = {segment: doc_a}
            doc_b = {segment: doc_b}

        node: object = merge_documents([doc_a, doc_b])
        for segment in [*prefix, key]:
            node = node[segment]  # type: ignore[index]

        event(f"merge_prefix_len={len(prefix)}")
        assert node == first

    @given(doc_a=document_objects(), doc_b=document_objects())
    def test_keys_only_in_second_added_unchanged(
        self, doc_a: dict[str, object], doc_b: dict[str, object]
    ) -> None:
        """PROPERTY: top-level keys absent from A carry B's subtree unchanged."""
        merged = merge_documents([doc_a, doc_b])

        for key, value in doc_b.items():
            if key not in doc_a:
                assert merged[key] == value

    @given(doc_a=document_objects(), doc_b=document_objects())
    def test_keys_of_first_preserved(
        self, doc_a: dict[str, object], doc_b: dict[str, object]
    ) -> None:
        """PROPERTY: every top-level non-object value of A survives unchanged."""
        merged = merge_documents([doc_a, doc_b])

        for key, value in doc_a.items():
            if not isinstance(value, dict):
                assert merged[key] == value

    @given(doc=document_objects())
    def test_merge_with_self_is_identity(self, doc: dict[str, object]) -> None:
        """PROPERTY: merging a document with itself yields the document."""
        assert merge_documents([doc, doc]) == doc
