"""Tests for localization/adapters.py: LocalisedText and targets.

Python 3.13+.
"""

from __future__ import annotations

import logging
import random

import pytest

from loctree.localization.adapters import AttributeTarget, LocalisedText, TextTarget
from loctree.localization.registry import LanguageDescriptor, LanguageRegistry
from loctree.localization.service import LocalisationService


class Label:
    """Stand-in for a widget with a text attribute."""

    def __init__(self) -> None:
        self.text = ""
        self.caption = ""


class RecordingTarget:
    """TextTarget keeping every text it was given."""

    def __init__(self) -> None:
        self.texts: list[str] = []

    def apply_text(self, text: str) -> None:
        self.texts.append(text)


@pytest.fixture
def service() -> LocalisationService:
    registry = LanguageRegistry.build(
        inline=[
            LanguageDescriptor.inline(
                "English", "en", {"ui": {"play": "Play"}, "tips": ["a", "b"], "ml": "x\\ny"}
            ),
            LanguageDescriptor.inline("German", "de", {"ui": {"play": "Spielen"}}),
        ]
    )
    return LocalisationService(registry, rng=random.Random(0))


class TestAttributeTarget:
    """Test AttributeTarget."""

    def test_default_attribute(self) -> None:
        """Writes to .text by default."""
        label = Label()
        AttributeTarget(label).apply_text("Play")

        assert label.text == "Play"

    def test_custom_attribute(self) -> None:
        """Writes to the named attribute."""
        label = Label()
        AttributeTarget(label, "caption").apply_text("Play")

        assert label.caption == "Play"
        assert label.text == ""

    def test_satisfies_protocol(self) -> None:
        """AttributeTarget is a TextTarget."""
        assert isinstance(AttributeTarget(Label()), TextTarget)
        assert isinstance(RecordingTarget(), TextTarget)


class TestLocalisedText:
    """Test binding, rendering and unbinding."""

    def test_bind_while_active_renders(self, service: LocalisationService) -> None:
        """Binding while a language is active renders immediately."""
        service.switch_language(0)
        label = Label()
        text = LocalisedText(service, "ui/play", [AttributeTarget(label)])

        assert text.bind()
        assert label.text == "Play"
        assert text.is_bound

    def test_bind_before_activation_waits(self, service: LocalisationService) -> None:
        """Binding early renders on the first switch."""
        target = RecordingTarget()
        text = LocalisedText(service, "ui/play", [target])
        text.bind()

        assert target.texts == []
        service.switch_language("de")
        assert target.texts == ["Spielen"]

    def test_follows_switches(self, service: LocalisationService) -> None:
        """Every switch re-renders every target."""
        first, second = RecordingTarget(), RecordingTarget()
        LocalisedText(service, "ui/play", [first, second]).bind()

        service.switch_language(0)
        service.switch_language(1)

        assert first.texts == ["Play", "Spielen"]
        assert second.texts == ["Play", "Spielen"]

    def test_missing_key_shows_marker(self, service: LocalisationService) -> None:
        """Keys missing in the new language show the marker."""
        target = RecordingTarget()
        LocalisedText(service, "tips", [target]).bind()
        service.switch_language(0)
        service.switch_language(1)

        assert target.texts == ["a", "'tips' NOT FOUND!"]

    def test_no_targets_not_bound(
        self, service: LocalisationService, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Without targets bind() refuses to subscribe."""
        text = LocalisedText(service, "ui/play")

        with caplog.at_level(logging.WARNING):
            assert not text.bind()

        assert not text.is_bound
        assert len(service.subscribers) == 0
        assert "No text targets" in caplog.text

    def test_bind_twice(self, service: LocalisationService) -> None:
        """A second bind() is a no-op."""
        text = LocalisedText(service, "ui/play", [RecordingTarget()])

        assert text.bind()
        assert not text.bind()
        assert len(service.subscribers) == 1

    def test_close(self, service: LocalisationService) -> None:
        """close() unsubscribes."""
        target = RecordingTarget()
        text = LocalisedText(service, "ui/play", [target])
        text.bind()
        text.close()
        service.switch_language(0)

        assert target.texts == []
        assert not text.is_bound
        text.close()

    def test_context_manager(self, service: LocalisationService) -> None:
        """The with-block bounds the subscription."""
        service.switch_language(0)
        target = RecordingTarget()

        with LocalisedText(service, "ui/play", [target]) as text:
            assert text.is_bound
            service.switch_language(1)

        service.switch_language(0)
        assert target.texts == ["Play", "Spielen"]

    def test_add_target_while_bound(self, service: LocalisationService) -> None:
        """Targets added to a bound text render at once."""
        service.switch_language(0)
        text = LocalisedText(service, "ui/play", [RecordingTarget()])
        text.bind()
        late = RecordingTarget()

        text.add_target(late)

        assert late.texts == ["Play"]
        assert len(text.targets) == 2

    def test_add_target_unbound(self, service: LocalisationService) -> None:
        """Targets added to an unbound text wait."""
        service.switch_language(0)
        text = LocalisedText(service, "ui/play")
        target = RecordingTarget()

        text.add_target(target)

        assert target.texts == []

    def test_variant_index(self, service: LocalisationService) -> None:
        """variant_index selects the variant."""
        service.switch_language(0)

        assert LocalisedText(service, "tips", variant_index=1).text == "b"

    def test_negative_variant_index_clamped(self, service: LocalisationService) -> None:
        """Negative indexes are clamped to 0."""
        service.switch_language(0)
        text = LocalisedText(service, "tips", variant_index=-4)

        assert text.variant_index == 0
        assert text.text == "a"

    def test_random_variant(self, service: LocalisationService) -> None:
        """random_variant draws from the variants."""
        service.switch_language(0)
        text = LocalisedText(service, "tips", random_variant=True)

        assert {text.text for _ in range(50)} == {"a", "b"}

    def test_escape_conversion(self, service: LocalisationService) -> None:
        """convert_escapes is forwarded to the service."""
        service.switch_language(0)

        assert LocalisedText(service, "ml").text == "x\ny"
        assert LocalisedText(service, "ml", convert_escapes=False).text == "x\\ny"

    def test_repr(self, service: LocalisationService) -> None:
        """repr shows key, target count and binding."""
        text = LocalisedText(service, "ui/play", [RecordingTarget()])

        assert repr(text) == "LocalisedText(key='ui/play', targets=1, bound=False)"
