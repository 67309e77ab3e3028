"""Definitions document: which languages exist and where their text lives.

Schema (top-level object, one entry per language tag):

    {
        "English": {"name": "English", "code": "en", "files": ["a.json", "b.json"]},
        "German":  {"code": "de", "folders": "lang/de"}
    }

- ``files`` / ``folders``: a single path or a list of paths. Both may be
  present; file sources come first, then folder sources.
- ``file``: accepted as an alias of ``files``.
- ``name``: optional; Babel's display name for ``code`` is used when absent.
- ``code``: required. Entries without it are skipped.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from loctree.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    MalformedDocumentError,
    MissingSourceError,
)
from loctree.document.tree import DocumentTree, is_array, is_object
from loctree.locale_utils import language_display_name
from loctree.localization.loading import DocumentLoader, DocumentSource, JsonDocumentLoader
from loctree.localization.types import DocumentPath, LanguageCode, LanguageTag

__all__ = [
    "LanguageDefinition",
    "definitions_from_mapping",
    "load_definitions",
    "parse_definitions",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageDefinition:
    """One validated entry of a definitions document.

    Attributes:
        tag: Top-level key of the entry
        name: Human-readable language name
        code: Short language code
        files: Document files in the order given
        folders: Folders scanned after the files
    """

    tag: LanguageTag
    name: str
    code: LanguageCode
    files: tuple[DocumentPath, ...] = ()
    folders: tuple[DocumentPath, ...] = ()

    def sources(self) -> list[DocumentSource]:
        """Document sources in load order: files, then folders."""
        return [DocumentSource.file(path) for path in self.files] + [
            DocumentSource.folder(path) for path in self.folders
        ]


class _EntryError(ValueError):
    """One definitions entry is unusable (internal; becomes a warning)."""


def parse_definitions(
    document: DocumentTree, *, source: str | None = None
) -> list[LanguageDefinition]:
    """Validate a parsed definitions document.

    Malformed entries are skipped with a warning; the rest are returned in
    document order.

    Args:
        document: Parsed definitions document
        source: Path of the definitions file, for diagnostics

    Returns:
        Language definitions in document order

    Raises:
        ConfigurationError: If the document is not an object
    """
    if not is_object(document):
        raise ConfigurationError(
            ErrorTemplate.definitions_malformed(type(document).__name__, source)
        )

    definitions: list[LanguageDefinition] = []
    for raw_tag, entry in document.items():
        tag = str(raw_tag)
        try:
            definitions.append(_parse_entry(tag, entry))
        except _EntryError as e:
            diagnostic = ErrorTemplate.definition_entry_malformed(tag, str(e))
            logger.warning("Skipping language entry: %s", diagnostic)
    logger.debug("Parsed %d language definition(s)", len(definitions))
    return definitions


def _parse_entry(tag: LanguageTag, entry: DocumentTree) -> LanguageDefinition:
    if not is_object(entry):
        msg = f"expected object, got {type(entry).__name__}"
        raise _EntryError(msg)

    code = entry.get("code")
    if not isinstance(code, str) or not code.strip():
        msg = "missing 'code'"
        raise _EntryError(msg)
    code = code.strip()

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        name = language_display_name(code, default=tag)

    files = entry.get("files", entry.get("file"))
    return LanguageDefinition(
        tag=tag,
        name=name,
        code=code,
        files=_as_paths(tag, "files", files),
        folders=_as_paths(tag, "folders", entry.get("folders")),
    )


def _as_paths(tag: LanguageTag, field_name: str, value: DocumentTree) -> tuple[DocumentPath, ...]:
    match value:
        case None:
            return ()
        case str() if value.strip():
            return (value.strip(),)
        case str():
            return ()
        case _ if is_array(value):
            paths: list[DocumentPath] = []
            for item in value:
                if isinstance(item, str) and item.strip():
                    paths.append(item.strip())
                else:
                    logger.warning(
                        "Ignoring non-path entry %r in '%s' of language '%s'",
                        item,
                        field_name,
                        tag,
                    )
            return tuple(paths)
        case _:
            msg = f"'{field_name}' must be a path or a list of paths"
            raise _EntryError(msg)


def load_definitions(
    path: DocumentPath, loader: DocumentLoader | None = None
) -> list[LanguageDefinition]:
    """Read, parse and validate a definitions file.

    Args:
        path: Definitions file path
        loader: Loader used to read it (default: JsonDocumentLoader())

    Returns:
        Language definitions in document order

    Raises:
        ConfigurationError: If the file is missing, unreadable, not parseable
            or not an object
    """
    active_loader = loader if loader is not None else JsonDocumentLoader()
    try:
        document = active_loader.load(path)
    except (FileNotFoundError, MissingSourceError) as e:
        diagnostic = ErrorTemplate.source_not_found(active_loader.describe_path(path))
        raise ConfigurationError(diagnostic) from e
    except MalformedDocumentError as e:
        raise ConfigurationError(e.diagnostic or str(e)) from e
    except (OSError, ValueError) as e:
        diagnostic = ErrorTemplate.source_unreadable(active_loader.describe_path(path), str(e))
        raise ConfigurationError(diagnostic) from e
    return parse_definitions(document, source=active_loader.describe_path(path))


def definitions_from_mapping(
    definitions: Mapping[str, DocumentTree] | list[LanguageDefinition],
) -> list[LanguageDefinition]:
    """Accept either a raw definitions document or parsed definitions.

    Raises:
        ConfigurationError: If a raw document is not an object
    """
    if isinstance(definitions, list) and all(
        isinstance(definition, LanguageDefinition) for definition in definitions
    ):
        return definitions
    return parse_definitions(definitions)
