"""Diagnostic codes and data structures.

Defines the reported-condition codes and the structured diagnostic record
attached to errors and log lines.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Condition codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (no languages, broken definitions)
        2000-2999: Missing sources (absent file or folder)
        3000-3999: Malformed documents (parse failure, wrong shape)
        4000-4999: Lookup misses (absent key, variant out of range)
        5000-5999: Misuse (duplicate subscriber, unknown language, bad index)
    """

    # Configuration errors (1000-1999)
    NO_LANGUAGES = 1001
    DEFINITIONS_MALFORMED = 1002
    NO_LANGUAGE_DATA = 1003

    # Missing sources (2000-2999)
    SOURCE_NOT_FOUND = 2001
    SOURCE_UNREADABLE = 2002
    SOURCE_OUTSIDE_ROOT = 2003

    # Malformed documents (3000-3999)
    DOCUMENT_PARSE_FAILED = 3001
    DOCUMENT_NOT_OBJECT = 3002
    DOCUMENT_EMPTY = 3003
    DEFINITION_ENTRY_MALFORMED = 3004
    NESTING_DEPTH_EXCEEDED = 3005

    # Lookup misses (4000-4999)
    KEY_NOT_FOUND = 4001
    VARIANT_OUT_OF_RANGE = 4002
    NOT_ACTIVATED = 4003

    # Misuse (5000-5999)
    DUPLICATE_SUBSCRIBER = 5001
    UNKNOWN_SUBSCRIBER = 5002
    LANGUAGE_ALREADY_ACTIVE = 5003
    UNKNOWN_LANGUAGE_CODE = 5004
    LANGUAGE_INDEX_OUT_OF_RANGE = 5005
    OVERRIDE_INDEX_INVALID = 5006


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique condition code
        message: Human-readable description
        hint: Suggestion for fixing the condition
        source: Document, file or key the condition refers to
        severity: "error" for conditions that block an operation,
            "warning" for conditions that are skipped or ignored
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    source: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic for logs and exception messages.

        Control characters in the message and source are escaped so that a
        hostile key or path cannot forge extra log lines.

        Example output:
            warning[SOURCE_NOT_FOUND]: Document file does not exist
              --> lang/en/menu.json
              = help: Check the path in the definitions document

        Returns:
            Formatted diagnostic text
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.source:
            lines.append(f"  --> {_escape(self.source)}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    return text.encode("unicode_escape").decode("ascii")
