"""Inverted index keyed by phonetic code prefixes, and the builder that fills it."""

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import date as date_type
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

import structlog

from ..models.document import Document, DocumentEntry
from .cleaners import Cleaner, CleanerSpec, resolve_cleaners
from .normalizer import TextNormalizer
from .phonetic import PhoneticEncoder

logger = structlog.get_logger(__name__)

# Shortest code prefix stored in the index
MIN_PREFIX_LENGTH = 2

DEFAULT_INDEX_FIELDS: Dict[str, CleanerSpec] = {
    "title": True,
    "keywords": True,
    "contents": "html",
}


class IndexFormatError(ValueError):
    """Raised when a serialized index artifact is malformed."""


def default_transform_url(path: str, prefix: str = "/") -> str:
    """
    Derive a URL from a document path.

    ``docs/index.html`` becomes ``/docs`` and ``about.html`` becomes ``/about``.
    """
    url = f"{prefix}{path}"
    if url.endswith("/index.html"):
        url = url[: -len("/index.html")]
    if url.endswith(".html"):
        url = url[: -len(".html")]
    return url


def stringify_value(value: Any) -> str:
    """Convert a raw field value to text: lists are space-joined, bytes decoded as UTF-8."""
    if isinstance(value, (list, tuple)):
        return " ".join(stringify_value(item) for item in value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


def format_date(value: Any) -> Optional[str]:
    """Format a date as ``"March 2021"``; strings pass through unchanged."""
    if not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, date_type):
        return value.strftime("%B %Y")
    return None


class InvertedIndex:
    """Mutable build-time mapping from code prefix to entry ids."""

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._postings: Dict[str, List[int]] = {}

    def add(self, key: str, entry_id: int) -> None:
        """
        Append an entry id under a key.

        The id is skipped only when it equals the last id already stored
        under the key, so no two consecutive ids for a key are identical.
        The same id may still appear again later if others were added between.
        """
        postings = self._postings.get(key)
        if postings is None:
            self._postings[key] = [entry_id]
        elif postings[-1] != entry_id:
            postings.append(entry_id)

    def add_code(self, code: str, entry_id: int) -> None:
        """Store an entry id under every prefix of a code, longest first, down to two characters."""
        for length in range(len(code), MIN_PREFIX_LENGTH - 1, -1):
            self.add(code[:length], entry_id)

    def get(self, key: str) -> List[int]:
        """Get a copy of the posting list for a key."""
        return list(self._postings.get(key, []))

    def __contains__(self, key: str) -> bool:
        return key in self._postings

    def __len__(self) -> int:
        return len(self._postings)

    def freeze(self) -> Dict[str, Tuple[int, ...]]:
        """Snapshot the postings as tuples, preserving key order."""
        return {key: tuple(ids) for key, ids in self._postings.items()}


class SearchIndex:
    """Immutable index artifact: the document entries plus their inverted index."""

    def __init__(
        self,
        entries: Iterable[DocumentEntry],
        postings: Mapping[str, Iterable[int]]
    ) -> None:
        """
        Initialize the artifact.

        Args:
            entries: Document entries, where each entry's id is its position
            postings: Code prefix to entry ids
        """
        self._entries: Tuple[DocumentEntry, ...] = tuple(entries)
        self._postings: Dict[str, Tuple[int, ...]] = {
            key: tuple(ids) for key, ids in postings.items()
        }

    @property
    def entries(self) -> Tuple[DocumentEntry, ...]:
        return self._entries

    def entry(self, entry_id: int) -> DocumentEntry:
        """Get an entry by id."""
        if entry_id < 0:
            raise IndexError(entry_id)
        return self._entries[entry_id]

    def get(self, key: str) -> Tuple[int, ...]:
        """Get the entry ids stored under a key."""
        return self._postings.get(key, ())

    def keys(self) -> List[str]:
        """All keys, in insertion order."""
        return list(self._postings)

    def __contains__(self, key: str) -> bool:
        return key in self._postings

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, int]:
        """Get index statistics."""
        lengths = [len(ids) for ids in self._postings.values()]
        return {
            "total_entries": len(self._entries),
            "total_keys": len(self._postings),
            "total_postings": sum(lengths),
            "max_posting_length": max(lengths, default=0),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to ``{"entries": [...], "index": {code: [ids]}}``."""
        return {
            "entries": [entry.to_artifact() for entry in self._entries],
            "index": {key: list(ids) for key, ids in self._postings.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchIndex":
        """
        Load an artifact produced by :meth:`to_dict`.

        Raises:
            IndexFormatError: If the artifact is malformed
        """
        if not isinstance(data, Mapping):
            raise IndexFormatError("index artifact must be an object")
        raw_entries = data.get("entries")
        raw_index = data.get("index")
        if not isinstance(raw_entries, list):
            raise IndexFormatError("'entries' must be a list")
        if not isinstance(raw_index, Mapping):
            raise IndexFormatError("'index' must be an object")

        entries = []
        for position, raw in enumerate(raw_entries):
            if not isinstance(raw, Mapping):
                raise IndexFormatError(f"entry {position} must be an object")
            try:
                entries.append(DocumentEntry(id=position, **raw))
            except (TypeError, ValueError) as e:
                raise IndexFormatError(f"entry {position} is invalid: {e}") from e

        postings = {}
        for key, ids in raw_index.items():
            if not isinstance(ids, list) or not all(
                isinstance(i, int) and 0 <= i < len(entries) for i in ids
            ):
                raise IndexFormatError(f"posting list for '{key}' references unknown entries")
            postings[key] = ids

        return cls(entries, postings)

    def save(self, path: Union[str, Path]) -> Path:
        """Write the artifact as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False)
        return path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SearchIndex":
        """Read an artifact written by :meth:`save`."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise IndexFormatError(f"{path} is not valid JSON: {e}") from e
        return cls.from_dict(data)


class _Extracted(NamedTuple):
    title: Optional[str]
    url: str
    date: Optional[str]
    codes: List[str]


class IndexBuilder:
    """Builds a SearchIndex from a complete document set in one pass."""

    def __init__(
        self,
        index_fields: Optional[Mapping[str, CleanerSpec]] = None,
        transform_url: Optional[Callable[[str], str]] = None,
        workers: int = 1,
        normalizer: Optional[TextNormalizer] = None,
        encoder: Optional[PhoneticEncoder] = None
    ) -> None:
        """
        Initialize the builder.

        Args:
            index_fields: Field name to cleaning spec (see ``resolve_cleaner``)
            transform_url: Document path to URL
            workers: Threads used to tokenize and encode documents
            normalizer: Tokenizer to use
            encoder: Phonetic encoder to use
        """
        fields = DEFAULT_INDEX_FIELDS if index_fields is None else index_fields
        self.cleaners: Dict[str, Cleaner] = resolve_cleaners(dict(fields))
        self.transform_url = transform_url or default_transform_url
        self.workers = max(1, workers)
        self.normalizer = normalizer or TextNormalizer()
        self.encoder = encoder or PhoneticEncoder()

    def build(self, documents: Iterable[Document]) -> SearchIndex:
        """
        Index documents in order.

        Tokenizing and encoding may run on several threads, but entries and
        postings are always merged sequentially in document order.
        """
        documents = list(documents)
        if self.workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                extracted = list(executor.map(self._extract, documents))
        else:
            extracted = [self._extract(document) for document in documents]

        entries: List[DocumentEntry] = []
        inverted = InvertedIndex()
        for item in extracted:
            entry_id = len(entries)
            entries.append(
                DocumentEntry(id=entry_id, title=item.title, url=item.url, date=item.date)
            )
            for code in item.codes:
                inverted.add_code(code, entry_id)

        index = SearchIndex(entries, inverted.freeze())
        logger.info("index_built", **index.get_stats())
        return index

    def _extract(self, document: Document) -> _Extracted:
        title = None
        if document.title:
            try:
                title = stringify_value(document.title)
            except Exception as e:
                logger.warning("title_skipped", path=document.path, error=str(e))

        codes: List[str] = []
        for field, cleaner in self.cleaners.items():
            value = document.metadata.get(field)
            if not value:
                continue
            try:
                text = cleaner(stringify_value(value))
            except Exception as e:
                logger.warning("field_skipped", path=document.path, field=field, error=str(e))
                continue
            codes.extend(self.encoder.encode_all(self.normalizer.tokenize(text)))

        return _Extracted(
            title=title,
            url=self.transform_url(document.path),
            date=format_date(document.date),
            codes=codes,
        )


def build_index(
    documents: Iterable[Document],
    index_fields: Optional[Mapping[str, CleanerSpec]] = None,
    transform_url: Optional[Callable[[str], str]] = None,
    workers: int = 1
) -> SearchIndex:
    """Build a SearchIndex from documents."""
    builder = IndexBuilder(index_fields=index_fields, transform_url=transform_url, workers=workers)
    return builder.build(documents)
