"""LocalisationService: active table, lookups and the language-switch protocol.

State machine:

    UNINITIALIZED --switch_language(i)--> ACTIVE(i)
    ACTIVE(i)     --switch_language(j)--> ACTIVE(j)    j != i
    ACTIVE(i)     --switch_language(i)--> ACTIVE(i)    no-op: no reload, no notification

Lookups never raise in the default mode. A missing key, an out-of-range
variant index or a lookup before any activation returns a marker string
embedding the key, and the condition is logged. ``strict=True`` raises
instead.

Thread safety: table replacement, overrides and lookups go through a
readers-writer lock. Subscribers and listeners run after the lock is
released, so they may resolve keys or switch language again.

Python 3.13+.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loctree.constants import (
    ESCAPE_SEQUENCES,
    MARKER_BAD_INDEX,
    MARKER_MISSING_KEY,
    MARKER_NOT_READY,
)
from loctree.core.rwlock import RWLock
from loctree.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    KeyLookupError,
    LanguageNotFoundError,
    MisuseError,
)
from loctree.document.table import FlatTable
from loctree.enums import EngineState
from loctree.localization.registry import LanguageDescriptor, LanguageRegistry
from loctree.localization.subscribers import Subscriber, SubscriberRegistry, try_invoke
from loctree.localization.types import FlatKey, LanguageCode, LanguageTag

if TYPE_CHECKING:
    from loctree.config import LocalisationConfig
    from loctree.localization.definitions import LanguageDefinition
    from loctree.localization.loading import DocumentLoader

__all__ = ["LanguageChange", "LanguageListener", "LocalisationService", "convert_escapes"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageChange:
    """Payload handed to language-change listeners.

    Attributes:
        previous_index: Index active before the switch (None on first activation)
        current_index: Index active now
        language_tag: Tag of the now-active language
        language_code: Code of the now-active language
    """

    previous_index: int | None
    current_index: int
    language_tag: LanguageTag
    language_code: LanguageCode


type LanguageListener = Callable[[LanguageChange], object]


def convert_escapes(text: str) -> str:
    r"""Replace literal ``\n`` and ``\t`` sequences with control characters.

    Example:
        >>> convert_escapes("line1\\nline2")
        'line1\nline2'
    """
    for literal, control in ESCAPE_SEQUENCES:
        text = text.replace(literal, control)
    return text


def _finish(text: str, convert: bool) -> str:
    return convert_escapes(text) if convert else text


class LocalisationService:
    """Resolution engine for one set of configured languages.

    Owns the single active FlatTable, the subscriber registry and the
    language-change listeners. Instances are independent: nothing is
    shared through module state.

    Example:
        >>> registry = LanguageRegistry.build(inline=[
        ...     LanguageDescriptor.inline("English", "en", {"ui": {"play": "Play"}}),
        ...     LanguageDescriptor.inline("German", "de", {"ui": {"play": "Spielen"}}),
        ... ])
        >>> service = LocalisationService(registry)
        >>> service.switch_language("de")
        True
        >>> service.resolve("ui/play")
        'Spielen'
        >>> service.resolve("ui/quit")
        "'ui/quit' NOT FOUND!"
    """

    __slots__ = (
        "_active_index",
        "_listeners",
        "_lock",
        "_registry",
        "_rng",
        "_strict",
        "_subscribers",
        "_table",
    )

    def __init__(
        self,
        registry: LanguageRegistry,
        *,
        strict: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize an UNINITIALIZED service.

        Args:
            registry: Configured languages
            strict: Raise on lookup misses and invalid switches instead of
                returning markers / False
            rng: Random source for resolve_random_variant (default: new Random())
        """
        self._registry = registry
        self._strict = strict
        self._rng = rng if rng is not None else random.Random()
        self._table: FlatTable | None = None
        self._active_index: int | None = None
        self._subscribers = SubscriberRegistry()
        # Copy-on-write: replaced, never mutated.
        self._listeners: tuple[LanguageListener, ...] = ()
        self._lock = RWLock()

    @classmethod
    def from_config(
        cls,
        config: LocalisationConfig,
        inline: Iterable[LanguageDescriptor | LanguageDefinition] = (),
        loader: DocumentLoader | None = None,
        *,
        rng: random.Random | None = None,
    ) -> LocalisationService:
        """Build registry and service from a configuration.

        Activates ``config.initial_language`` unless it is None.

        Raises:
            ConfigurationError: In strict mode, if no languages are configured
            LanguageNotFoundError: In strict mode, if initial_language is unknown
        """
        registry = LanguageRegistry.from_config(config, inline, loader)
        service = cls(registry, strict=config.strict, rng=rng)
        if config.initial_language is not None:
            service.switch_language(config.initial_language)
        return service

    def __repr__(self) -> str:
        return (
            f"LocalisationService(state={self.state}, "
            f"language={self.current_language_tag!r}, "
            f"languages={len(self._registry)})"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def registry(self) -> LanguageRegistry:
        """Registry of configured languages."""
        return self._registry

    @property
    def strict(self) -> bool:
        """Whether misses and invalid switches raise."""
        return self._strict

    @property
    def state(self) -> EngineState:
        """UNINITIALIZED until the first successful activation."""
        return EngineState.UNINITIALIZED if self._active_index is None else EngineState.ACTIVE

    @property
    def is_active(self) -> bool:
        """True once a language is active."""
        return self._active_index is not None

    @property
    def current_language_index(self) -> int | None:
        """Index of the active language, or None."""
        return self._active_index

    @property
    def current_language(self) -> LanguageDescriptor | None:
        """Descriptor of the active language, or None."""
        index = self._active_index
        return None if index is None else self._registry[index]

    @property
    def current_language_tag(self) -> LanguageTag | None:
        """Tag of the active language, or None."""
        language = self.current_language
        return None if language is None else language.tag

    @property
    def current_language_code(self) -> LanguageCode | None:
        """Code of the active language, or None."""
        language = self.current_language
        return None if language is None else language.code

    @property
    def available_languages(self) -> tuple[LanguageTag, ...]:
        """Tags of every configured language, in index order."""
        return tuple(language.tag for language in self._registry)

    @property
    def active_table(self) -> FlatTable | None:
        """Copy of the active table, or None before activation."""
        with self._lock.read():
            return None if self._table is None else self._table.copy()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def resolve(
        self, key: FlatKey, variant_index: int = 0, convert_escapes: bool = True
    ) -> str:
        """Text for key in the active language.

        Args:
            key: Flat key (e.g., 'ui/menu/play')
            variant_index: Which variant; valid iff 0 <= index < count
            convert_escapes: Turn literal ``\\n`` / ``\\t`` into control characters

        Returns:
            The variant, or a marker string embedding the key

        Raises:
            KeyLookupError: In strict mode, for a missing key or bad index
            MisuseError: In strict mode, before any activation
        """
        with self._lock.read():
            text, found = self._lookup(key, variant_index)
        return _finish(text, convert_escapes) if found else text

    def resolve_random_variant(self, key: FlatKey, convert_escapes: bool = True) -> str:
        """Like resolve(), with the variant chosen uniformly at random."""
        with self._lock.read():
            count = 0 if self._table is None else self._table.variant_count(key)
            index = self._rng.randrange(count) if count else 0
            text, found = self._lookup(key, index)
        return _finish(text, convert_escapes) if found else text

    def _lookup(self, key: FlatKey, variant_index: int) -> tuple[str, bool]:
        # Caller holds the read lock.
        if self._table is None:
            diagnostic = ErrorTemplate.not_activated(key)
            if self._strict:
                raise MisuseError(diagnostic)
            logger.error("%s", diagnostic)
            return MARKER_NOT_READY.format(key=key), False

        variants = self._table.variants(key)
        if not variants:
            marker = MARKER_MISSING_KEY.format(key=key)
            diagnostic = ErrorTemplate.key_not_found(key)
            if self._strict:
                raise KeyLookupError(diagnostic, marker)
            logger.warning("%s", diagnostic)
            return marker, False

        if not 0 <= variant_index < len(variants):
            marker = MARKER_BAD_INDEX.format(key=key, index=variant_index)
            diagnostic = ErrorTemplate.variant_out_of_range(key, variant_index, len(variants))
            if self._strict:
                raise KeyLookupError(diagnostic, marker)
            logger.warning("%s", diagnostic)
            return marker, False

        return variants[variant_index], True

    def get_variants(self, key: FlatKey) -> tuple[str, ...]:
        """Every variant stored under key (empty tuple if absent or inactive)."""
        with self._lock.read():
            if self._table is None:
                return ()
            return self._table.variants(key)

    def has_key(self, key: FlatKey) -> bool:
        """True if the active table holds key."""
        with self._lock.read():
            return self._table is not None and key in self._table

    def keys(self) -> tuple[FlatKey, ...]:
        """Keys of the active table in document order."""
        with self._lock.read():
            return () if self._table is None else tuple(self._table)

    # ------------------------------------------------------------------
    # Switching
    # ------------------------------------------------------------------

    def switch_language(self, target: int | LanguageCode) -> bool:
        """Activate a language by index or by code.

        Codes are matched against the LAST language carrying them. Switching
        to the active index does nothing: no reload, no notification.

        On a genuine change the new table is installed, then every
        subscriber is notified in registration order, then every listener
        receives a LanguageChange. A subscriber or listener that raises is
        logged and the rest are still notified.

        Returns:
            True if the active language changed

        Raises:
            TypeError: If target is neither int nor str
            ConfigurationError: In strict mode, if no languages are configured
            LanguageNotFoundError: In strict mode, for an unknown code or index
        """
        match target:
            case bool():
                msg = "Language must be selected by index or code, not bool"
                raise TypeError(msg)
            case int():
                index = target
            case str():
                found = self._registry.find_index(target)
                if found is None:
                    diagnostic = ErrorTemplate.unknown_language_code(target)
                    if self._strict:
                        raise LanguageNotFoundError(diagnostic)
                    logger.warning("%s", diagnostic)
                    return False
                index = found
            case _:
                msg = f"Language must be selected by index or code, got {type(target).__name__}"
                raise TypeError(msg)

        with self._lock.write():
            if index == self._active_index:
                logger.warning("%s", ErrorTemplate.language_already_active(index))
                return False
            try:
                table = self._registry.activate(index)
            except ConfigurationError as e:
                if self._strict:
                    raise
                logger.error("%s", e.diagnostic or e)
                return False
            except LanguageNotFoundError as e:
                if self._strict:
                    raise
                logger.warning("%s", e.diagnostic or e)
                return False
            previous = self._active_index
            self._table = table
            self._active_index = index
            language = self._registry[index]

        self._subscribers.notify_all()
        self._notify_listeners(
            LanguageChange(
                previous_index=previous,
                current_index=index,
                language_tag=language.tag,
                language_code=language.code,
            )
        )
        return True

    def reload(self) -> bool:
        """Re-read the active language from its sources and re-notify.

        Listeners are not called: the language did not change.

        Returns:
            False if no language is active
        """
        with self._lock.write():
            index = self._active_index
            if index is None:
                logger.warning("Nothing to reload: no language is active")
                return False
            self._registry.invalidate(index)
            self._table = self._registry.activate(index)
        self._subscribers.notify_all()
        return True

    def refresh(self) -> int:
        """Notify every subscriber without switching.

        Returns:
            Number of subscribers that completed without raising
        """
        return self._subscribers.notify_all()

    # ------------------------------------------------------------------
    # Runtime patching
    # ------------------------------------------------------------------

    def override(self, key: FlatKey, value: str, variant_index: int | None = None) -> bool:
        """Set one variant in the active table, creating the key if absent.

        Source documents and the cached tree are untouched; the patch lasts
        until the next switch or reload.

        Args:
            key: Flat key
            value: New text
            variant_index: Variant to replace; None replaces the first, the
                current count appends

        Returns:
            False if nothing was changed

        Raises:
            MisuseError: In strict mode, before activation or for an index
                that would leave a gap
        """
        with self._lock.write():
            if self._table is None:
                diagnostic = ErrorTemplate.not_activated(key)
                if self._strict:
                    raise MisuseError(diagnostic)
                logger.error("%s", diagnostic)
                return False
            count = self._table.variant_count(key)
            try:
                self._table.set_variant(key, value, variant_index)
            except IndexError:
                diagnostic = ErrorTemplate.override_index_invalid(
                    key, 0 if variant_index is None else variant_index, count
                )
                if self._strict:
                    raise MisuseError(diagnostic) from None
                logger.warning("%s", diagnostic)
                return False
        return True

    # ------------------------------------------------------------------
    # Subscribers and listeners
    # ------------------------------------------------------------------

    @property
    def subscribers(self) -> SubscriberRegistry:
        """Registry of subscribers notified on every switch."""
        return self._subscribers

    def register(self, subscriber: Subscriber) -> bool:
        """Subscribe to language changes.

        If a language is already active the subscriber is invoked once
        immediately; a failure there is logged, not raised.

        Returns:
            False if subscriber was already registered
        """
        if not self._subscribers.register(subscriber):
            return False
        if self.is_active:
            try_invoke(subscriber)
        return True

    def unregister(self, subscriber: Subscriber) -> bool:
        """Unsubscribe; False (with a warning) if not registered."""
        return self._subscribers.unregister(subscriber)

    def add_listener(self, listener: LanguageListener) -> bool:
        """Receive a LanguageChange after every genuine switch.

        Listeners are not invoked on registration.
        """
        listeners = self._listeners
        if listener in listeners:
            logger.warning("%s", ErrorTemplate.duplicate_subscriber(listener))
            return False
        self._listeners = (*listeners, listener)
        return True

    def remove_listener(self, listener: LanguageListener) -> bool:
        """Stop receiving LanguageChange events."""
        listeners = self._listeners
        if listener not in listeners:
            logger.warning("%s", ErrorTemplate.unknown_subscriber(listener))
            return False
        remaining = list(listeners)
        remaining.remove(listener)
        self._listeners = tuple(remaining)
        return True

    def _notify_listeners(self, change: LanguageChange) -> None:
        for listener in self._listeners:
            try:
                listener(change)
            except Exception:
                logger.exception(
                    "Listener %r failed for switch to %s", listener, change.language_code
                )
