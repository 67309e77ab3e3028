"""Document loading infrastructure for LanguageRegistry.

Provides the loader protocol, a JSON filesystem implementation with
optional path confinement, document source references, and result/summary
records for tracking load attempts.

Components:
    DocumentLoader - Protocol for reading and parsing documents (structural typing)
    JsonDocumentLoader - Filesystem loader for JSON documents and folders
    DocumentSource - One source attached to a language (inline, file, folder)
    DocumentLoadResult - Immutable result of a single document load attempt
    LoadSummary - Immutable aggregate of all load results

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from loctree.constants import DEFAULT_DOCUMENT_SUFFIXES, DEFAULT_ENCODING
from loctree.diagnostics import ErrorTemplate, MalformedDocumentError, MissingSourceError
from loctree.document.tree import DocumentTree
from loctree.enums import LoadStatus, SourceKind
from loctree.localization.types import DocumentPath, LanguageTag

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DocumentLoader",
    # Concrete loader
    "JsonDocumentLoader",
    # Source references
    "DocumentSource",
    # Load result types
    "DocumentLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


class DocumentLoader(Protocol):
    """Protocol for reading and parsing document files.

    Implementations turn a path reference into a generic DocumentTree and
    enumerate the documents below a folder. Parsing format is up to the
    implementation; the registry only needs the tree shape.

    Example:
        >>> class YamlLoader:
        ...     def load(self, path: str) -> DocumentTree:
        ...         return yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        ...     def scan(self, folder: str) -> list[str]:
        ...         return sorted(str(p) for p in Path(folder).rglob("*.yaml"))
        ...     def describe_path(self, path: str) -> str:
        ...         return path
    """

    def load(self, path: DocumentPath) -> DocumentTree:
        """Read and parse one document.

        Raises:
            MissingSourceError: If the file does not exist (FileNotFoundError
                is accepted too)
            MalformedDocumentError: If the content cannot be parsed
            OSError: If the file cannot be read
            ValueError: If the path is rejected (e.g. escapes a root)
        """

    def scan(self, folder: DocumentPath) -> list[DocumentPath]:
        """List document files under folder, in load order.

        Raises:
            MissingSourceError: If the folder does not exist (FileNotFoundError
                is accepted too)
            OSError: If the folder cannot be listed
            ValueError: If the path is rejected
        """

    def describe_path(self, path: DocumentPath) -> str:
        """Return human-readable path for diagnostics."""
        return path


@dataclass(frozen=True, slots=True)
class JsonDocumentLoader:
    """Filesystem loader for JSON documents.

    Relative references resolve against base_dir. When root_dir is set,
    every resolved path must stay inside it; references escaping it are
    rejected with ValueError before any file is opened.

    Folder scans are deterministic: entries of each directory are sorted by
    name, files come before subdirectories, and only files whose suffix is
    in suffixes are returned.

    Example:
        >>> loader = JsonDocumentLoader(base_dir="lang")
        >>> loader.load("en/menu.json")
        # Reads: lang/en/menu.json

    Attributes:
        base_dir: Directory relative references resolve against (None: cwd)
        root_dir: Optional confinement directory
        suffixes: File suffixes collected by scan()
        recursive: Descend into subdirectories during scan()
        encoding: Text encoding of document files
    """

    base_dir: str | None = None
    root_dir: str | None = None
    suffixes: tuple[str, ...] = DEFAULT_DOCUMENT_SUFFIXES
    recursive: bool = True
    encoding: str = DEFAULT_ENCODING
    _resolved_root: Path | None = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        """Cache the resolved confinement root."""
        if self.root_dir is not None:
            object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())
        object.__setattr__(
            self, "suffixes", tuple(suffix.lower() for suffix in self.suffixes)
        )

    def _join(self, path: DocumentPath) -> Path:
        candidate = Path(path)
        if not candidate.is_absolute() and self.base_dir is not None:
            candidate = Path(self.base_dir) / candidate
        return candidate

    def _resolve(self, path: DocumentPath) -> Path:
        full_path = self._join(path).resolve()
        if self._resolved_root is not None and not full_path.is_relative_to(
            self._resolved_root
        ):
            msg = str(
                ErrorTemplate.source_outside_root(path, str(self._resolved_root))
            )
            raise ValueError(msg)
        return full_path

    def describe_path(self, path: DocumentPath) -> str:
        """Return the base-joined (unresolved) path for diagnostics."""
        return str(self._join(path))

    def load(self, path: DocumentPath) -> DocumentTree:
        """Read and parse one JSON document.

        Raises:
            MissingSourceError: If the file does not exist
            MalformedDocumentError: If the file is empty or not valid JSON
            OSError: If the file cannot be read
            ValueError: If the path escapes root_dir
        """
        full_path = self._resolve(path)
        try:
            text = full_path.read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            raise MissingSourceError(
                ErrorTemplate.source_not_found(self.describe_path(path))
            ) from e
        if not text.strip():
            raise MalformedDocumentError(ErrorTemplate.document_empty(self.describe_path(path)))
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            diagnostic = ErrorTemplate.document_parse_failed(
                self.describe_path(path), f"{e.msg} (line {e.lineno}, column {e.colno})"
            )
            raise MalformedDocumentError(diagnostic) from e

    def scan(self, folder: DocumentPath) -> list[DocumentPath]:
        """List matching document files under folder.

        Raises:
            MissingSourceError: If folder does not exist
            NotADirectoryError: If folder is a file
            ValueError: If folder escapes root_dir
        """
        directory = self._resolve(folder)
        if not directory.exists():
            raise MissingSourceError(ErrorTemplate.source_not_found(self.describe_path(folder)))
        if not directory.is_dir():
            msg = f"Document folder is not a directory: {self.describe_path(folder)}"
            raise NotADirectoryError(msg)
        found: list[DocumentPath] = []
        self._scan_directory(directory, found)
        logger.debug("Scanned %s: %d document(s)", directory, len(found))
        return found

    def _scan_directory(self, directory: Path, found: list[DocumentPath]) -> None:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
        subdirectories: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                subdirectories.append(entry)
            elif entry.suffix.lower() in self.suffixes:
                found.append(str(entry))
        if self.recursive:
            for subdirectory in subdirectories:
                self._scan_directory(subdirectory, found)


@dataclass(frozen=True, slots=True)
class DocumentSource:
    """One document source attached to a language.

    INLINE sources carry pre-parsed content; FILE and FOLDER sources carry
    a path handed to the DocumentLoader at activation time.

    Attributes:
        kind: Source kind
        location: File or folder path (FILE/FOLDER only)
        content: Pre-parsed document (INLINE only)
        label: Name used in diagnostics for inline content
    """

    kind: SourceKind
    location: DocumentPath | None = None
    content: Mapping[str, DocumentTree] | None = field(default=None, hash=False)
    label: str = "<inline>"

    def __post_init__(self) -> None:
        """Validate that the fields match the kind.

        Raises:
            ValueError: If an INLINE source has no content, or a FILE/FOLDER
                source has no location
        """
        match self.kind:
            case SourceKind.INLINE if self.content is None:
                msg = "Inline document source requires content"
                raise ValueError(msg)
            case SourceKind.FILE | SourceKind.FOLDER if not self.location:
                msg = f"{self.kind} document source requires a location"
                raise ValueError(msg)

    @classmethod
    def inline(cls, content: Mapping[str, DocumentTree], label: str = "<inline>") -> DocumentSource:
        """Source for a document that is already parsed."""
        return cls(SourceKind.INLINE, content=content, label=label)

    @classmethod
    def file(cls, path: DocumentPath) -> DocumentSource:
        """Source for one document file."""
        return cls(SourceKind.FILE, location=path)

    @classmethod
    def folder(cls, path: DocumentPath) -> DocumentSource:
        """Source for every document below a folder."""
        return cls(SourceKind.FOLDER, location=path)

    def describe(self) -> str:
        """Short description for diagnostics."""
        if self.kind is SourceKind.INLINE:
            return self.label
        return f"{self.kind}:{self.location}"


@dataclass(frozen=True, slots=True)
class DocumentLoadResult:
    """Result of loading one document for one language.

    Attributes:
        language: Tag of the language being activated
        source: Human-readable path or inline label
        status: Load status
        error: Exception for NOT_FOUND, MALFORMED and ERROR outcomes
    """

    language: LanguageTag
    source: str
    status: LoadStatus
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the document loaded and merged."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the source was missing."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_malformed(self) -> bool:
        """Check if the document was skipped as malformed."""
        return self.status == LoadStatus.MALFORMED

    @property
    def is_error(self) -> bool:
        """Check if the source failed with another error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of document load results.

    Example:
        >>> summary = registry.get_load_summary()
        >>> for result in summary.get_not_found():
        ...     print(f"Missing: {result.language}: {result.source}")
    """

    results: tuple[DocumentLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"malformed={self.malformed}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of missing sources."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def malformed(self) -> int:
        """Number of malformed documents."""
        return sum(1 for r in self.results if r.is_malformed)

    @property
    def errors(self) -> int:
        """Number of other load errors."""
        return sum(1 for r in self.results if r.is_error)

    def get_successful(self) -> tuple[DocumentLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_not_found(self) -> tuple[DocumentLoadResult, ...]:
        """Get all results where the source was missing."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_malformed(self) -> tuple[DocumentLoadResult, ...]:
        """Get all results for malformed documents."""
        return tuple(r for r in self.results if r.is_malformed)

    def get_errors(self) -> tuple[DocumentLoadResult, ...]:
        """Get all results with other errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_by_language(self, language: LanguageTag) -> tuple[DocumentLoadResult, ...]:
        """Get all results for one language."""
        return tuple(r for r in self.results if r.language == language)

    @property
    def all_successful(self) -> bool:
        """True if every attempted document loaded."""
        return self.successful == self.total_attempted
