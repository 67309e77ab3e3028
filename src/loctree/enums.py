"""Enumerations for loctree type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class SourceKind(StrEnum):
    """Kind of document source attached to a language.

    StrEnum provides automatic string conversion: str(SourceKind.FILE) == "file"
    """

    INLINE = "inline"
    """Pre-parsed document supplied directly by the caller."""

    FILE = "file"
    """Single document file read and parsed at activation time."""

    FOLDER = "folder"
    """Directory scanned for document files at activation time."""


class LoadStatus(StrEnum):
    """Outcome of loading one document.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Document loaded and merged."""

    NOT_FOUND = "not_found"
    """Referenced file or folder does not exist; source skipped."""

    MALFORMED = "malformed"
    """Document failed to parse or is not an object; document skipped."""

    ERROR = "error"
    """Other I/O failure (permissions, path confinement); source skipped."""


class NodeKind(StrEnum):
    """Structural kind of a document tree node.

    StrEnum provides automatic string conversion: str(NodeKind.OBJECT) == "object"
    """

    OBJECT = "object"
    """Ordered key to value mapping."""

    ARRAY = "array"
    """Ordered sequence of values."""

    STRING = "string"
    """Text scalar."""

    OTHER = "other"
    """Number, boolean, null or anything else; ignored by flatten."""


class EngineState(StrEnum):
    """Lifecycle state of a LocalisationService.

    StrEnum provides automatic string conversion: str(EngineState.ACTIVE) == "active"
    """

    UNINITIALIZED = "uninitialized"
    """No language has ever been activated."""

    ACTIVE = "active"
    """Exactly one language is active and its table is installed."""


__all__ = [
    "EngineState",
    "LoadStatus",
    "NodeKind",
    "SourceKind",
]
