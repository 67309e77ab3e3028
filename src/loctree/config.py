"""Localisation configuration.

A single frozen dataclass carrying every tunable of the registry and the
service. Constructing ``LocalisationConfig()`` with no arguments yields a
usable in-memory setup (no definitions file, first language activated).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path

from loctree.constants import DEFAULT_DOCUMENT_SUFFIXES, DEFAULT_ENCODING, MAX_DEPTH

__all__ = ["LocalisationConfig"]


@dataclass(frozen=True, slots=True)
class LocalisationConfig:
    """Immutable configuration for LanguageRegistry and LocalisationService.

    Attributes:
        definitions_path: Optional definitions document (JSON) listing the
            languages and their files/folders.
        base_dir: Directory that relative paths in the definitions document
            resolve against. Defaults to the definitions file's directory,
            or the working directory without one.
        root_dir: Optional confinement root. Resolved document paths that
            escape it are rejected as ERROR loads.
        document_suffixes: File suffixes collected by folder scans.
        recursive_folders: Scan folders recursively (default True).
        encoding: Text encoding of document files.
        max_depth: Nesting cap for merge and flatten.
        strict: Raise instead of degrading to marker strings.
        initial_language: Index or code activated by
            ``LocalisationService.from_config``; None leaves the service
            uninitialized.

    Example:
        >>> config = LocalisationConfig(definitions_path="lang/languages.json")
        >>> config.resolved_base_dir().name
        'lang'
    """

    definitions_path: str | None = None
    base_dir: str | None = None
    root_dir: str | None = None
    document_suffixes: tuple[str, ...] = DEFAULT_DOCUMENT_SUFFIXES
    recursive_folders: bool = True
    encoding: str = DEFAULT_ENCODING
    max_depth: int = MAX_DEPTH
    strict: bool = False
    initial_language: int | str | None = 0

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_depth is not positive, document_suffixes is
                empty or holds a suffix without a leading dot, or
                initial_language is a negative index or blank code.
        """
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        if isinstance(self.document_suffixes, str):
            object.__setattr__(self, "document_suffixes", (self.document_suffixes,))
        if not self.document_suffixes:
            msg = "document_suffixes must not be empty"
            raise ValueError(msg)
        for suffix in self.document_suffixes:
            if not suffix.startswith("."):
                msg = f"document suffix must start with '.', got {suffix!r}"
                raise ValueError(msg)
        match self.initial_language:
            case bool():
                msg = "initial_language must be an index, a code or None"
                raise ValueError(msg)
            case int() as index if index < 0:
                msg = f"initial_language index must be >= 0, got {index}"
                raise ValueError(msg)
            case str() as code if not code.strip():
                msg = "initial_language code must not be blank"
                raise ValueError(msg)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> LocalisationConfig:
        """Build a configuration from a plain mapping (e.g. parsed settings).

        Raises:
            ValueError: If values holds keys that are not configuration fields
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            msg = f"Unknown configuration keys: {', '.join(unknown)}"
            raise ValueError(msg)
        data = dict(values)
        if "document_suffixes" in data and isinstance(data["document_suffixes"], list):
            data["document_suffixes"] = tuple(data["document_suffixes"])
        return cls(**data)  # type: ignore[arg-type]

    def resolved_base_dir(self) -> Path:
        """Directory relative document paths resolve against."""
        if self.base_dir is not None:
            return Path(self.base_dir)
        if self.definitions_path is not None:
            return Path(self.definitions_path).parent
        return Path.cwd()
