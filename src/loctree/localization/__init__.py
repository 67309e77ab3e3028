"""Localisation package: languages, loading, resolution and notification.

Submodules:
    types        - PEP 695 type aliases (LanguageTag, LanguageCode, FlatKey, DocumentPath)
    loading      - DocumentLoader protocol, JsonDocumentLoader, DocumentSource,
                   DocumentLoadResult, LoadSummary
    definitions  - LanguageDefinition and the definitions document parser
    registry     - LanguageDescriptor, LanguageRegistry (load, merge, flatten, cache)
    subscribers  - Localisable protocol, SubscriberRegistry
    service      - LocalisationService (resolve, switch, override, notify)
    adapters     - TextTarget, AttributeTarget, LocalisedText

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from loctree.enums import LoadStatus, SourceKind
from loctree.localization.adapters import AttributeTarget, LocalisedText, TextTarget
from loctree.localization.definitions import (
    LanguageDefinition,
    load_definitions,
    parse_definitions,
)
from loctree.localization.loading import (
    DocumentLoader,
    DocumentLoadResult,
    DocumentSource,
    JsonDocumentLoader,
    LoadSummary,
)
from loctree.localization.registry import LanguageDescriptor, LanguageRegistry
from loctree.localization.service import (
    LanguageChange,
    LanguageListener,
    LocalisationService,
    convert_escapes,
)
from loctree.localization.subscribers import Localisable, Subscriber, SubscriberRegistry
from loctree.localization.types import DocumentPath, FlatKey, LanguageCode, LanguageTag

__all__ = [
    # Resolution engine
    "LocalisationService",
    "LanguageChange",
    "LanguageListener",
    "convert_escapes",
    # Languages
    "LanguageRegistry",
    "LanguageDescriptor",
    "LanguageDefinition",
    "load_definitions",
    "parse_definitions",
    # Loader protocol and implementation
    "DocumentLoader",
    "JsonDocumentLoader",
    "DocumentSource",
    "SourceKind",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "DocumentLoadResult",
    # Subscribers and adapters
    "Localisable",
    "Subscriber",
    "SubscriberRegistry",
    "TextTarget",
    "AttributeTarget",
    "LocalisedText",
    # Type aliases for user code type annotations
    "DocumentPath",
    "FlatKey",
    "LanguageCode",
    "LanguageTag",
]
