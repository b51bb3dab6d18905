"""Cleaning functions that turn raw field values into indexable text."""

import re
from typing import Callable, Dict, Optional, Union

from bs4 import BeautifulSoup

Cleaner = Callable[[str], str]
CleanerSpec = Union[bool, str, Cleaner, None]

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[\\$!?|`.,;:()<>{}#*@/=\"\[\]]")
_LEADING_PUNCTUATION = re.compile(r" [-+_']+")
_TRAILING_PUNCTUATION = re.compile(r"[-+_']+ ")
_WORD_CHARACTER = re.compile(r"[a-z0-9]")
_MULTI_SPACE = re.compile(r"\s\s+")
_LINK_DEFINITION = re.compile(r"^\s*\[[^\]]*\]:.*$", re.MULTILINE)
_INLINE_LINK = re.compile(r"\[([^\]]*)\](\[[^\]]*\]|\([^)]*\))?")


def make_keywords(text: str) -> str:
    """
    Convert text into a sorted, space separated list of unique keywords.

    Example:
        >>> make_keywords("Hi! ONE*two, pro- and anti- (whatever)")
        'and anti hi one pro two whatever'
    """
    # Pad so every word is surrounded by spaces
    text = _WHITESPACE.sub(" ", f" {text} ")
    text = _SEPARATORS.sub(" ", text)
    text = _LEADING_PUNCTUATION.sub(" ", text)
    text = _TRAILING_PUNCTUATION.sub(" ", text)
    text = text.lower()

    words = sorted({word for word in text.split(" ") if word})
    return " ".join(word for word in words if _WORD_CHARACTER.search(word))


def strip_html(text: str) -> str:
    """
    Remove HTML tags, leaving a space where each tag was, and decode entities.

    Example:
        >>> strip_html("<div>This <i>is</i> <b>bold</b>.</div><div>hi</div>")
        'This is bold . hi'
    """
    text = BeautifulSoup(text, "html.parser").get_text(" ")
    return _MULTI_SPACE.sub(" ", text).strip()


def strip_markdown(text: str) -> str:
    """
    Remove markdown links so URLs are not indexed; link text is kept.

    Example:
        >>> strip_markdown("a [link](example.com)")
        'a link'
    """
    text = _LINK_DEFINITION.sub("", text)
    return _INLINE_LINK.sub(r"\1", text)


def _identity(text: str) -> str:
    return text


def _html_keywords(text: str) -> str:
    return make_keywords(strip_html(text))


def _markdown_keywords(text: str) -> str:
    return make_keywords(strip_markdown(text))


_NAMED_CLEANERS: Dict[str, Cleaner] = {
    "html": _html_keywords,
    "markdown": _markdown_keywords,
    "md": _markdown_keywords,
    "keywords": make_keywords,
}


def resolve_cleaner(spec: CleanerSpec) -> Optional[Cleaner]:
    """
    Turn a field configuration value into a cleaning function.

    Falsy values mean "do not index" and yield None. Callables are used
    as-is, the names ``html``, ``markdown``/``md`` and ``keywords`` select a
    built-in cleaner, and any other truthy value keeps the text unchanged.
    """
    if not spec:
        return None
    if callable(spec):
        return spec
    if isinstance(spec, str) and spec in _NAMED_CLEANERS:
        return _NAMED_CLEANERS[spec]
    return _identity


def resolve_cleaners(fields: Dict[str, CleanerSpec]) -> Dict[str, Cleaner]:
    """Resolve a field configuration, dropping fields that are not indexed."""
    resolved = {}
    for name, spec in fields.items():
        cleaner = resolve_cleaner(spec)
        if cleaner is not None:
            resolved[name] = cleaner
    return resolved
