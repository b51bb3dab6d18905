"""
Phonetic Search - fuzzy full-text search using sound-alike codes.

Documents are tokenized, each token is reduced to a metaphone-style
phonetic code, and every prefix of each code down to two characters is
stored in an inverted index. Queries are encoded the same way, so typos
and alternate spellings still find their documents.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine, search, search_artifact
from .core.index import IndexBuilder, SearchIndex, build_index
from .models.document import Document, DocumentEntry

__all__ = [
    "SearchEngine",
    "search",
    "search_artifact",
    "IndexBuilder",
    "SearchIndex",
    "build_index",
    "Document",
    "DocumentEntry",
]
