"""Language registry: configured languages, their sources and cached trees.

The registry owns every LanguageDescriptor. Activation loads a language's
documents through the injected DocumentLoader, merges them in source order,
caches the combined tree on the descriptor and flattens it into a fresh
FlatTable. The cache is filled once; only invalidate() clears it.

Load failures never abort activation. Each document attempt is recorded as
a DocumentLoadResult:

    NOT_FOUND   file or folder absent (FileNotFoundError, MissingSourceError)
    MALFORMED   parse failure, empty document, non-object root, too deep
    ERROR       other I/O failure or a path rejected by the loader

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loctree.constants import MAX_DEPTH
from loctree.core.depth_guard import DepthGuard
from loctree.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    LanguageNotFoundError,
    MalformedDocumentError,
    MissingSourceError,
)
from loctree.document.flatten import flatten_document
from loctree.document.merge import copy_tree, merge_documents
from loctree.document.table import FlatTable
from loctree.document.tree import DocumentObject, DocumentTree, is_object
from loctree.enums import LoadStatus, SourceKind
from loctree.localization.definitions import (
    LanguageDefinition,
    definitions_from_mapping,
    load_definitions,
)
from loctree.localization.loading import (
    DocumentLoader,
    DocumentLoadResult,
    DocumentSource,
    JsonDocumentLoader,
    LoadSummary,
)
from loctree.localization.types import DocumentPath, LanguageCode, LanguageTag

if TYPE_CHECKING:
    from loctree.config import LocalisationConfig

__all__ = ["LanguageDescriptor", "LanguageRegistry"]

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class LanguageDescriptor:
    """Per-language record: identity, document sources and cached tree.

    Mutability Note:
        Sources may be appended when a later registration shares this
        language's code. The combined tree is filled on first activation
        and kept until clear_cache().

    Attributes:
        tag: Registry identity (e.g., 'English')
        name: Human-readable name
        code: Short code used by switch-by-code (e.g., 'en')
        sources: Document sources in load order
    """

    tag: LanguageTag
    name: str
    code: LanguageCode
    sources: list[DocumentSource] = field(default_factory=list)
    _tree: DocumentObject | None = field(default=None, init=False, repr=False)

    @classmethod
    def inline(
        cls,
        tag: LanguageTag,
        code: LanguageCode,
        *documents: Mapping[str, DocumentTree],
        name: str | None = None,
    ) -> LanguageDescriptor:
        """Descriptor whose documents are already parsed.

        Example:
            >>> english = LanguageDescriptor.inline("English", "en", {"greet": "hi"})
            >>> english.sources[0].kind
            <SourceKind.INLINE: 'inline'>
        """
        sources = [
            DocumentSource.inline(document, label=f"<inline {tag}#{position}>")
            for position, document in enumerate(documents)
        ]
        return cls(tag=tag, name=name or tag, code=code, sources=sources)

    @classmethod
    def from_definition(cls, definition: LanguageDefinition) -> LanguageDescriptor:
        """Descriptor for one parsed definitions entry."""
        return cls(
            tag=definition.tag,
            name=definition.name,
            code=definition.code,
            sources=definition.sources(),
        )

    @property
    def tree(self) -> DocumentObject | None:
        """Cached combined tree, or None before first activation."""
        return self._tree

    @property
    def is_loaded(self) -> bool:
        """True once the combined tree is cached."""
        return self._tree is not None

    def add_sources(self, sources: Iterable[DocumentSource]) -> int:
        """Append sources after the existing ones.

        A cached tree no longer reflects the source list afterwards, so it
        is dropped.

        Returns:
            Number of sources appended
        """
        added = list(sources)
        if added:
            self.sources.extend(added)
            self._tree = None
        return len(added)

    def clear_cache(self) -> None:
        """Drop the cached combined tree."""
        self._tree = None


class LanguageRegistry:
    """Ordered set of languages with lazy, cached document loading.

    Language identity is unique: registering a language whose code (or,
    failing that, tag) is already present appends its sources to the
    existing descriptor. The first registration keeps its tag, name and
    position.

    Not thread-safe on its own. LocalisationService serializes activation
    behind its write lock.

    Example:
        >>> registry = LanguageRegistry.build(
        ...     inline=[LanguageDescriptor.inline("English", "en", {"greet": "hi"})]
        ... )
        >>> registry.activate(0)["greet"]
        ('hi',)
    """

    __slots__ = ("_languages", "_load_results", "_loader", "_max_depth")

    def __init__(
        self,
        loader: DocumentLoader | None = None,
        *,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize an empty registry.

        Args:
            loader: Reads FILE and FOLDER sources (default: JsonDocumentLoader())
            max_depth: Nesting cap for copy, merge and flatten
        """
        self._loader: DocumentLoader = loader if loader is not None else JsonDocumentLoader()
        self._max_depth = max_depth
        self._languages: list[LanguageDescriptor] = []
        self._load_results: list[DocumentLoadResult] = []

    @classmethod
    def build(
        cls,
        inline: Iterable[LanguageDescriptor | LanguageDefinition] = (),
        definitions: Mapping[str, DocumentTree] | list[LanguageDefinition] | None = None,
        *,
        loader: DocumentLoader | None = None,
        max_depth: int = MAX_DEPTH,
    ) -> LanguageRegistry:
        """Build a registry from inline languages and a definitions document.

        Inline languages are registered first, then each definitions entry
        in document order. Definitions entries sharing an inline language's
        code extend that language.

        Args:
            inline: Languages supplied directly by the caller
            definitions: Parsed definitions document, or definitions already
                validated by parse_definitions()
            loader: Reads FILE and FOLDER sources
            max_depth: Nesting cap

        Raises:
            ConfigurationError: If definitions is not an object
        """
        registry = cls(loader, max_depth=max_depth)
        for language in inline:
            registry.register(language)
        if definitions is not None:
            registry.add_definitions(definitions)
        logger.info("Language registry built with %d language(s)", len(registry))
        return registry

    @classmethod
    def from_config(
        cls,
        config: LocalisationConfig,
        inline: Iterable[LanguageDescriptor | LanguageDefinition] = (),
        loader: DocumentLoader | None = None,
    ) -> LanguageRegistry:
        """Build a registry from a LocalisationConfig.

        A definitions file that cannot be loaded is reported and ignored;
        inline languages are still registered.
        """
        if loader is None:
            loader = JsonDocumentLoader(
                base_dir=str(config.resolved_base_dir()),
                root_dir=config.root_dir,
                suffixes=config.document_suffixes,
                recursive=config.recursive_folders,
                encoding=config.encoding,
            )
        definitions: list[LanguageDefinition] | None = None
        if config.definitions_path is not None:
            try:
                definitions = load_definitions(
                    config.definitions_path, JsonDocumentLoader(encoding=config.encoding)
                )
            except ConfigurationError as e:
                logger.error("Definitions not loaded: %s", e)
        return cls.build(inline, definitions, loader=loader, max_depth=config.max_depth)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, language: LanguageDescriptor | LanguageDefinition) -> LanguageDescriptor:
        """Add a language, or extend the one already holding its identity.

        Returns:
            The descriptor now holding the language's sources
        """
        descriptor = (
            language
            if isinstance(language, LanguageDescriptor)
            else LanguageDescriptor.from_definition(language)
        )
        existing = self._find_existing(descriptor)
        if existing is None:
            self._languages.append(descriptor)
            logger.debug(
                "Registered language '%s' (%s) with %d source(s)",
                descriptor.tag,
                descriptor.code,
                len(descriptor.sources),
            )
            return descriptor

        if existing.tag != descriptor.tag or existing.code != descriptor.code:
            logger.warning(
                "Language '%s' (%s) shares identity with '%s' (%s); sources appended",
                descriptor.tag,
                descriptor.code,
                existing.tag,
                existing.code,
            )
        added = existing.add_sources(descriptor.sources)
        self._drop_results(existing.tag)
        logger.debug("Appended %d source(s) to language '%s'", added, existing.tag)
        return existing

    def _find_existing(self, descriptor: LanguageDescriptor) -> LanguageDescriptor | None:
        for existing in self._languages:
            if existing.code == descriptor.code:
                return existing
        for existing in self._languages:
            if existing.tag == descriptor.tag:
                return existing
        return None

    def add_definitions(
        self, definitions: Mapping[str, DocumentTree] | list[LanguageDefinition]
    ) -> None:
        """Register every entry of a definitions document, in order.

        Raises:
            ConfigurationError: If definitions is not an object
        """
        for definition in definitions_from_mapping(definitions):
            self.register(definition)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def languages(self) -> tuple[LanguageDescriptor, ...]:
        """Registered languages in index order."""
        return tuple(self._languages)

    @property
    def loader(self) -> DocumentLoader:
        """Loader used for FILE and FOLDER sources."""
        return self._loader

    def __len__(self) -> int:
        return len(self._languages)

    def __getitem__(self, index: int) -> LanguageDescriptor:
        return self._languages[index]

    def __iter__(self) -> Iterator[LanguageDescriptor]:
        return iter(self._languages)

    def __repr__(self) -> str:
        return f"LanguageRegistry(languages={[d.tag for d in self._languages]!r})"

    def find_index(self, code: LanguageCode) -> int | None:
        """Index of the LAST language carrying code, or None.

        Later registrations shadow earlier ones for the same code.
        """
        for index in range(len(self._languages) - 1, -1, -1):
            if self._languages[index].code == code:
                return index
        return None

    def get_load_summary(self) -> LoadSummary:
        """Outcomes of every document load since the caches were last cleared.

        Example:
            >>> summary = registry.get_load_summary()
            >>> for result in summary.get_not_found():
            ...     print(f"Missing: {result.source}")
        """
        return LoadSummary(results=tuple(self._load_results))

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self, index: int) -> FlatTable:
        """Load (once), merge and flatten one language.

        Args:
            index: Position of the language in the registry

        Returns:
            Freshly built FlatTable; the registry keeps no reference to it

        Raises:
            ConfigurationError: If no languages are registered
            LanguageNotFoundError: If index is out of range
        """
        if not self._languages:
            raise ConfigurationError(ErrorTemplate.no_languages())
        if not 0 <= index < len(self._languages):
            raise LanguageNotFoundError(
                ErrorTemplate.language_index_out_of_range(index, len(self._languages))
            )

        descriptor = self._languages[index]
        table = flatten_document(self._ensure_tree(descriptor), max_depth=self._max_depth)
        logger.info(
            "Activated language '%s' (%s): %d key(s)",
            descriptor.tag,
            descriptor.code,
            len(table),
        )
        return table

    def invalidate(self, index: int | None = None) -> None:
        """Clear one cached tree (or all of them) and their load results.

        Raises:
            LanguageNotFoundError: If index is out of range
        """
        if index is None:
            for descriptor in self._languages:
                descriptor.clear_cache()
            self._load_results.clear()
            logger.debug("Invalidated all cached language trees")
            return
        if not 0 <= index < len(self._languages):
            raise LanguageNotFoundError(
                ErrorTemplate.language_index_out_of_range(index, len(self._languages))
            )
        descriptor = self._languages[index]
        descriptor.clear_cache()
        self._drop_results(descriptor.tag)
        logger.debug("Invalidated cached tree of language '%s'", descriptor.tag)

    def _drop_results(self, tag: LanguageTag) -> None:
        self._load_results[:] = [r for r in self._load_results if r.language != tag]

    def _ensure_tree(self, descriptor: LanguageDescriptor) -> DocumentObject:
        if descriptor._tree is not None:
            return descriptor._tree
        if not descriptor.sources:
            logger.warning("%s", ErrorTemplate.no_language_data(descriptor.tag))
            return {}
        tree = merge_documents(self._load_documents(descriptor), max_depth=self._max_depth)
        descriptor._tree = tree
        return tree

    def _load_documents(self, descriptor: LanguageDescriptor) -> Iterator[DocumentObject]:
        for source in descriptor.sources:
            match source.kind:
                case SourceKind.INLINE:
                    document = self._accept(descriptor.tag, source.describe(), source.content)
                    if document is not None:
                        yield document
                case SourceKind.FILE:
                    document = self._load_file(descriptor.tag, source.location)  # type: ignore[arg-type]
                    if document is not None:
                        yield document
                case SourceKind.FOLDER:
                    for path in self._scan_folder(descriptor.tag, source.location):  # type: ignore[arg-type]
                        document = self._load_file(descriptor.tag, path)
                        if document is not None:
                            yield document

    def _scan_folder(self, tag: LanguageTag, folder: DocumentPath) -> Sequence[DocumentPath]:
        described = self._loader.describe_path(folder)
        try:
            return self._loader.scan(folder)
        except (FileNotFoundError, MissingSourceError) as e:
            logger.warning("%s: %s", ErrorTemplate.source_not_found(described), described)
            self._record(tag, described, LoadStatus.NOT_FOUND, e)
        except (OSError, ValueError) as e:
            logger.warning("%s", ErrorTemplate.source_unreadable(described, str(e)))
            self._record(tag, described, LoadStatus.ERROR, e)
        return ()

    def _load_file(self, tag: LanguageTag, path: DocumentPath) -> DocumentObject | None:
        described = self._loader.describe_path(path)
        try:
            document = self._loader.load(path)
        except (FileNotFoundError, MissingSourceError) as e:
            logger.warning("%s: %s", ErrorTemplate.source_not_found(described), described)
            self._record(tag, described, LoadStatus.NOT_FOUND, e)
            return None
        except MalformedDocumentError as e:
            logger.warning("Skipping document: %s", e.diagnostic or e)
            self._record(tag, described, LoadStatus.MALFORMED, e)
            return None
        except (OSError, ValueError) as e:
            logger.warning("%s", ErrorTemplate.source_unreadable(described, str(e)))
            self._record(tag, described, LoadStatus.ERROR, e)
            return None
        return self._accept(tag, described, document)

    def _accept(
        self, tag: LanguageTag, described: str, document: DocumentTree
    ) -> DocumentObject | None:
        if not is_object(document):
            diagnostic = ErrorTemplate.document_not_object(described, type(document).__name__)
            logger.warning("Skipping document: %s", diagnostic)
            self._record(tag, described, LoadStatus.MALFORMED, MalformedDocumentError(diagnostic))
            return None
        try:
            copied = copy_tree(document, guard=DepthGuard(self._max_depth, label=described))
        except MalformedDocumentError as e:
            logger.warning("Skipping document: %s", e.diagnostic or e)
            self._record(tag, described, LoadStatus.MALFORMED, e)
            return None
        self._record(tag, described, LoadStatus.SUCCESS)
        logger.debug("Loaded document %s for language '%s'", described, tag)
        return copied  # type: ignore[return-value]

    def _record(
        self,
        tag: LanguageTag,
        described: str,
        status: LoadStatus,
        error: Exception | None = None,
    ) -> None:
        self._load_results.append(
            DocumentLoadResult(language=tag, source=described, status=status, error=error)
        )
