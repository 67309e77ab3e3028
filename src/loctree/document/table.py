"""Flat lookup table: flat key -> ordered, non-empty variant list.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

__all__ = ["FlatTable"]


class FlatTable(Mapping[str, tuple[str, ...]]):
    """Read-mostly mapping from flat keys to string variants.

    Invariant: every value holds at least one string. The constructor and
    set_variant() both enforce it.

    Values are exposed as tuples; the only mutation path is set_variant(),
    used for runtime text patching.

    Example:
        >>> table = FlatTable({"ui/play": ["Play"], "tips": ["a", "b"]})
        >>> table["tips"]
        ('a', 'b')
        >>> table.variants("missing")
        ()
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Sequence[str]] | None = None) -> None:
        """Initialize table.

        Args:
            entries: Initial key -> variants mapping

        Raises:
            ValueError: If a variant list is empty
            TypeError: If a variant list is a bare string or holds non-strings
        """
        self._entries: dict[str, list[str]] = {}
        if entries:
            for key, variants in entries.items():
                self._entries[key] = self._checked(key, variants)

    @staticmethod
    def _checked(key: str, variants: Sequence[str]) -> list[str]:
        if isinstance(variants, str):
            msg = f"Variants for '{key}' must be a sequence of strings, not a string"
            raise TypeError(msg)
        values = list(variants)
        if not values:
            msg = f"Variants for '{key}' must not be empty"
            raise ValueError(msg)
        for value in values:
            if not isinstance(value, str):
                msg = f"Variants for '{key}' must be strings, got {type(value).__name__}"
                raise TypeError(msg)
        return values

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return tuple(self._entries[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"FlatTable(keys={len(self._entries)})"

    def variants(self, key: str) -> tuple[str, ...]:
        """All variants for key, or an empty tuple if absent."""
        found = self._entries.get(key)
        return tuple(found) if found is not None else ()

    def variant_count(self, key: str) -> int:
        """Number of variants for key (0 if absent)."""
        found = self._entries.get(key)
        return len(found) if found is not None else 0

    def variant(self, key: str, index: int = 0) -> str:
        """Return one variant.

        Raises:
            KeyError: If key is absent
            IndexError: Unless 0 <= index < variant count
        """
        values = self._entries[key]
        if not 0 <= index < len(values):
            msg = f"Variant index {index} out of range for '{key}' ({len(values)} present)"
            raise IndexError(msg)
        return values[index]

    def set_variant(self, key: str, value: str, index: int | None = None) -> None:
        """Set one variant, creating the key if absent.

        index None replaces the sole (first) variant. index equal to the
        current count appends. Anything else out of range is rejected so
        the table never holds gaps.

        Raises:
            IndexError: If index is negative or past the end
            TypeError: If value is not a string
        """
        if not isinstance(value, str):
            msg = f"Variant for '{key}' must be a string, got {type(value).__name__}"
            raise TypeError(msg)
        position = 0 if index is None else index
        values = self._entries.get(key)
        count = len(values) if values is not None else 0
        if not 0 <= position <= count:
            msg = f"Cannot set variant {position} of '{key}' ({count} present)"
            raise IndexError(msg)
        if values is None:
            self._entries[key] = [value]
        elif position == count:
            values.append(value)
        else:
            values[position] = value

    def copy(self) -> FlatTable:
        """Independent copy (variant lists are not shared)."""
        return FlatTable(self._entries)
