"""Diagnostic templates.

Centralized message templates for testable, consistent diagnostics.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized diagnostic templates.

    Every reported condition is built here. NO f-strings in exception
    constructors or log calls elsewhere in the package.
    """

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def no_languages() -> Diagnostic:
        """Activation attempted with an empty registry."""
        return Diagnostic(
            code=DiagnosticCode.NO_LANGUAGES,
            message="No languages configured",
            hint="Pass inline languages or a definitions document to the registry",
        )

    @staticmethod
    def definitions_malformed(found_type: str, source: str | None = None) -> Diagnostic:
        """Definitions document is not an object.

        Args:
            found_type: Python type name of the parsed document
            source: Path of the definitions file, if any
        """
        return Diagnostic(
            code=DiagnosticCode.DEFINITIONS_MALFORMED,
            message=f"Malformed definitions document: expected object, got {found_type}",
            hint="The top level must map language tags to language entries",
            source=source,
        )

    @staticmethod
    def no_language_data(tag: str) -> Diagnostic:
        """Language has no sources and no cached tree."""
        return Diagnostic(
            code=DiagnosticCode.NO_LANGUAGE_DATA,
            message=f"No data for language '{tag}'",
            hint="Add 'files' or 'folders' to the language entry",
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Missing sources
    # ------------------------------------------------------------------

    @staticmethod
    def source_not_found(source: str) -> Diagnostic:
        """Referenced document file or folder is absent."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_NOT_FOUND,
            message="Document source does not exist",
            hint="Check the path in the definitions document",
            source=source,
            severity="warning",
        )

    @staticmethod
    def source_unreadable(source: str, reason: str) -> Diagnostic:
        """Document source exists but could not be read."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_UNREADABLE,
            message=f"Document source could not be read: {reason}",
            source=source,
            severity="warning",
        )

    @staticmethod
    def source_outside_root(source: str, root: str) -> Diagnostic:
        """Resolved document path escapes the configured root directory."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_OUTSIDE_ROOT,
            message=f"Document path escapes root directory '{root}'",
            hint="Remove '..' segments or absolute paths from the reference",
            source=source,
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Malformed documents
    # ------------------------------------------------------------------

    @staticmethod
    def document_parse_failed(source: str, reason: str) -> Diagnostic:
        """Document text is not valid for the parser."""
        return Diagnostic(
            code=DiagnosticCode.DOCUMENT_PARSE_FAILED,
            message=f"Document failed to parse: {reason}",
            source=source,
            severity="warning",
        )

    @staticmethod
    def document_not_object(source: str, found_type: str) -> Diagnostic:
        """Document parsed but its root is not an object."""
        return Diagnostic(
            code=DiagnosticCode.DOCUMENT_NOT_OBJECT,
            message=f"Document root must be an object, got {found_type}",
            source=source,
            severity="warning",
        )

    @staticmethod
    def document_empty(source: str) -> Diagnostic:
        """Document file is empty or whitespace only."""
        return Diagnostic(
            code=DiagnosticCode.DOCUMENT_EMPTY,
            message="Document is empty",
            source=source,
            severity="warning",
        )

    @staticmethod
    def definition_entry_malformed(tag: str, reason: str) -> Diagnostic:
        """One language entry of the definitions document is unusable."""
        return Diagnostic(
            code=DiagnosticCode.DEFINITION_ENTRY_MALFORMED,
            message=f"Language entry '{tag}' is malformed: {reason}",
            hint="Entries need at least 'code' and one of 'files' or 'folders'",
            source=tag,
            severity="warning",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, path: str) -> Diagnostic:
        """Document nests deeper than the safety cap."""
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Document nesting exceeds maximum depth ({max_depth})",
            hint="Flatten the document or raise max_depth in the configuration",
            source=path,
        )

    # ------------------------------------------------------------------
    # Lookup misses
    # ------------------------------------------------------------------

    @staticmethod
    def key_not_found(key: str) -> Diagnostic:
        """Key absent from the active table."""
        return Diagnostic(
            code=DiagnosticCode.KEY_NOT_FOUND,
            message=f"Key '{key}' not found",
            hint="Check that the key exists in the active language's documents",
            source=key,
            severity="warning",
        )

    @staticmethod
    def variant_out_of_range(key: str, index: int, count: int) -> Diagnostic:
        """Variant index outside 0 <= index < count."""
        return Diagnostic(
            code=DiagnosticCode.VARIANT_OUT_OF_RANGE,
            message=f"Key '{key}' has {count} variant(s), index {index} requested",
            source=key,
            severity="warning",
        )

    @staticmethod
    def not_activated(key: str) -> Diagnostic:
        """Lookup before any language was activated."""
        return Diagnostic(
            code=DiagnosticCode.NOT_ACTIVATED,
            message=f"Key '{key}' requested before any language was activated",
            hint="Call switch_language() before resolving keys",
            source=key,
        )

    # ------------------------------------------------------------------
    # Misuse
    # ------------------------------------------------------------------

    @staticmethod
    def duplicate_subscriber(subscriber: object) -> Diagnostic:
        """Subscriber registered twice."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_SUBSCRIBER,
            message=f"Subscriber {subscriber!r} is already registered",
            severity="warning",
        )

    @staticmethod
    def unknown_subscriber(subscriber: object) -> Diagnostic:
        """Unregistering something that was never registered."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_SUBSCRIBER,
            message=f"Subscriber {subscriber!r} is not registered",
            severity="warning",
        )

    @staticmethod
    def language_already_active(index: int) -> Diagnostic:
        """Switch to the language that is already active."""
        return Diagnostic(
            code=DiagnosticCode.LANGUAGE_ALREADY_ACTIVE,
            message=f"Language {index} is already active",
            severity="warning",
        )

    @staticmethod
    def unknown_language_code(code: str) -> Diagnostic:
        """No registered language carries the code."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LANGUAGE_CODE,
            message=f"Language '{code}' not found",
            source=code,
            severity="warning",
        )

    @staticmethod
    def language_index_out_of_range(index: int, count: int) -> Diagnostic:
        """Language index outside the registry."""
        return Diagnostic(
            code=DiagnosticCode.LANGUAGE_INDEX_OUT_OF_RANGE,
            message=f"Language index {index} out of range ({count} configured)",
            severity="warning",
        )

    @staticmethod
    def override_index_invalid(key: str, index: int, count: int) -> Diagnostic:
        """Override would leave a gap in, or index before, the variant list."""
        return Diagnostic(
            code=DiagnosticCode.OVERRIDE_INDEX_INVALID,
            message=f"Cannot set variant {index} of key '{key}' ({count} present)",
            hint="Variants can be replaced or appended, not placed past the end",
            source=key,
            severity="warning",
        )
