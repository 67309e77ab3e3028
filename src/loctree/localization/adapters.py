"""Text adapters: keep display targets in sync with the active language.

A LocalisedText binds one key (plus variant options) to one or more
targets and subscribes itself to a LocalisationService. On every language
switch it resolves the key again and pushes the text to each target.

Targets only need ``apply_text(text)``. AttributeTarget covers the common
case of widgets that expose their text as a plain attribute.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from loctree.localization.service import LocalisationService
    from loctree.localization.types import FlatKey

__all__ = ["AttributeTarget", "LocalisedText", "TextTarget"]

logger = logging.getLogger(__name__)


@runtime_checkable
class TextTarget(Protocol):
    """Anything that can display a string."""

    def apply_text(self, text: str) -> None:
        """Display text."""


@dataclass(slots=True)
class AttributeTarget:
    """Writes text to an attribute of an arbitrary object.

    Example:
        >>> class Label:
        ...     text = ""
        >>> label = Label()
        >>> AttributeTarget(label).apply_text("Play")
        >>> label.text
        'Play'
    """

    obj: object
    attribute: str = "text"

    def apply_text(self, text: str) -> None:
        """Set the attribute."""
        setattr(self.obj, self.attribute, text)


class LocalisedText:
    """One key rendered into one or more targets.

    Args:
        service: Service the key is resolved against
        key: Flat key
        targets: Where the text goes
        variant_index: Variant to show; negative values are clamped to 0
        convert_escapes: Convert literal ``\\n`` / ``\\t`` sequences
        random_variant: Pick a random variant on every localise() instead

    Example:
        >>> text = LocalisedText(service, "ui/play", [AttributeTarget(button)])
        >>> with text:
        ...     service.switch_language("de")
        >>> button.text
        'Spielen'
    """

    __slots__ = (
        "_bound",
        "_targets",
        "convert_escapes",
        "key",
        "random_variant",
        "service",
        "variant_index",
    )

    def __init__(
        self,
        service: LocalisationService,
        key: FlatKey,
        targets: list[TextTarget] | tuple[TextTarget, ...] = (),
        *,
        variant_index: int = 0,
        convert_escapes: bool = True,
        random_variant: bool = False,
    ) -> None:
        self.service = service
        self.key = key
        self.variant_index = max(0, variant_index)
        self.convert_escapes = convert_escapes
        self.random_variant = random_variant
        self._targets: list[TextTarget] = list(targets)
        self._bound = False

    def __repr__(self) -> str:
        return (
            f"LocalisedText(key={self.key!r}, targets={len(self._targets)}, "
            f"bound={self._bound})"
        )

    def __enter__(self) -> Self:
        self.bind()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def targets(self) -> tuple[TextTarget, ...]:
        """Current targets."""
        return tuple(self._targets)

    @property
    def is_bound(self) -> bool:
        """True while subscribed to the service."""
        return self._bound

    @property
    def text(self) -> str:
        """Text for the current settings, resolved now."""
        if self.random_variant:
            return self.service.resolve_random_variant(self.key, self.convert_escapes)
        return self.service.resolve(self.key, self.variant_index, self.convert_escapes)

    def add_target(self, target: TextTarget) -> None:
        """Add a target; it receives text immediately if bound."""
        self._targets.append(target)
        if self._bound and self.service.is_active:
            target.apply_text(self.text)

    def bind(self) -> bool:
        """Subscribe to the service (renders at once if a language is active).

        Returns:
            False if there is nothing to render into, or already bound
        """
        if not self._targets:
            logger.warning("No text targets for key '%s'; not subscribing", self.key)
            return False
        if self._bound:
            return False
        self._bound = self.service.register(self)
        return self._bound

    def close(self) -> None:
        """Unsubscribe from the service."""
        if self._bound:
            self.service.unregister(self)
            self._bound = False

    def localise(self) -> None:
        """Resolve the key and push the text to every target."""
        text = self.text
        for target in self._targets:
            target.apply_text(text)
