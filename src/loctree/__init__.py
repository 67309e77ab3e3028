"""loctree - hierarchical text keys resolved against a switchable active language.

Language definitions point at structured text documents; a language's
documents are merged (first document wins), flattened into slash-joined
keys with one or more string variants, and served by a LocalisationService
that notifies subscribers whenever the active language changes.

Public API:
    LocalisationService - Active table, resolve, switch_language, override
    LanguageRegistry - Configured languages with lazy, cached loading
    LanguageDescriptor - One language: identity, sources, cached tree
    LocalisationConfig - Frozen configuration
    LocalisedText - Adapter keeping display targets in sync
    FlatTable - Flat key -> variants mapping
    merge_documents / flatten_document - Document tree operations

Exceptions:
    LocalisationError - Base exception class
    ConfigurationError - No usable language configuration
    MalformedDocumentError - Document unusable
    KeyLookupError - Lookup miss (strict mode)
    LanguageNotFoundError - Unknown language index or code

Submodules:
    loctree.document - Tree queries, merge, flatten, FlatTable
    loctree.localization - Loading, registry, service, subscribers, adapters
    loctree.diagnostics - Diagnostic codes, templates and exceptions
    loctree.locale_utils - Babel-backed language metadata
"""

from .config import LocalisationConfig
from .diagnostics import (
    ConfigurationError,
    KeyLookupError,
    LanguageNotFoundError,
    LocalisationError,
    MalformedDocumentError,
    MissingSourceError,
    MisuseError,
)
from .document import FlatTable, flatten_document, merge_documents
from .enums import EngineState
from .localization import (
    AttributeTarget,
    JsonDocumentLoader,
    LanguageChange,
    LanguageDescriptor,
    LanguageRegistry,
    LocalisationService,
    LocalisedText,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("loctree")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AttributeTarget",
    "ConfigurationError",
    "EngineState",
    "FlatTable",
    "JsonDocumentLoader",
    "KeyLookupError",
    "LanguageChange",
    "LanguageDescriptor",
    "LanguageNotFoundError",
    "LanguageRegistry",
    "LocalisationConfig",
    "LocalisationError",
    "LocalisationService",
    "LocalisedText",
    "MalformedDocumentError",
    "MisuseError",
    "MissingSourceError",
    "__version__",
    "flatten_document",
    "merge_documents",
]
