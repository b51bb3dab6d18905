"""Discover source files on disk and turn them into Documents."""

from datetime import date, datetime
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterable, List, Union

import structlog
from bs4 import BeautifulSoup

from .core.index import default_transform_url
from .models.document import Document

logger = structlog.get_logger(__name__)

DEFAULT_MATCH = ["**/*.htm", "**/*.html"]

HTML_SUFFIXES = {".htm", ".html"}
MARKDOWN_SUFFIXES = {".md", ".markdown"}

__all__ = [
    "DEFAULT_MATCH",
    "default_transform_url",
    "discover_documents",
    "matches",
    "parse_document",
]


def matches(relative_path: str, patterns: Iterable[str]) -> bool:
    """
    Check a relative POSIX path against glob patterns.

    A leading ``**/`` also matches files at the top level.
    """
    path = PurePosixPath(relative_path)
    for pattern in patterns:
        if path.match(pattern):
            return True
        if pattern.startswith("**/") and path.match(pattern[len("**/"):]):
            return True
    return False


def _parse_date(value: str) -> Union[date, str]:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return value


def _parse_html(text: str) -> Dict[str, Any]:
    soup = BeautifulSoup(text, "html.parser")
    metadata: Dict[str, Any] = {"contents": text}

    if soup.title and soup.title.string:
        metadata["title"] = soup.title.string.strip()

    for name in ("keywords", "date"):
        tag = soup.find("meta", attrs={"name": name})
        content = tag.get("content") if tag else None
        if isinstance(content, list):
            content = " ".join(content)
        if content:
            metadata[name] = _parse_date(content) if name == "date" else content

    return metadata


def _parse_markdown(text: str) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {"contents": text}
    for line in text.splitlines():
        if line.startswith("# "):
            metadata["title"] = line[2:].strip()
            break
    return metadata


def parse_document(relative_path: str, text: str) -> Document:
    """Build a Document from a file's path and contents."""
    suffix = PurePosixPath(relative_path).suffix.lower()
    if suffix in HTML_SUFFIXES:
        metadata = _parse_html(text)
    elif suffix in MARKDOWN_SUFFIXES:
        metadata = _parse_markdown(text)
    else:
        metadata = {"contents": text}
    return Document(path=relative_path, metadata=metadata)


def discover_documents(root: Union[str, Path], match: Iterable[str] = DEFAULT_MATCH) -> List[Document]:
    """
    Load every file under ``root`` matching any of the glob patterns.

    Files are returned sorted by relative path. Unreadable files are
    logged and skipped.
    """
    root = Path(root)
    patterns = list(match)
    documents = []

    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        relative = path.relative_to(root).as_posix()
        if not matches(relative, patterns):
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("document_unreadable", path=relative, error=str(e))
            continue
        documents.append(parse_document(relative, text))

    logger.info("documents_discovered", root=str(root), total_documents=len(documents))
    return documents
