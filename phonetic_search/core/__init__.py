"""Core indexing and matching functionality."""

from .engine import QueryMatcher, SearchEngine, search, search_artifact
from .index import IndexBuilder, IndexFormatError, InvertedIndex, SearchIndex, build_index
from .normalizer import TextNormalizer, tokenize
from .phonetic import PhoneticEncoder, encode
from .ranker import Ranker

__all__ = [
    "SearchEngine",
    "QueryMatcher",
    "search",
    "search_artifact",
    "IndexBuilder",
    "IndexFormatError",
    "InvertedIndex",
    "SearchIndex",
    "build_index",
    "TextNormalizer",
    "tokenize",
    "PhoneticEncoder",
    "encode",
    "Ranker",
]
