"""Query matching against a built index."""

import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import structlog

from ..models.document import DocumentEntry
from ..models.response import SearchHit, SearchResponse
from .index import SearchIndex
from .normalizer import TextNormalizer
from .phonetic import PhoneticEncoder
from .ranker import Ranker

logger = structlog.get_logger(__name__)


class QueryMatcher:
    """Gathers and ranks candidate documents for a free-text query."""

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        encoder: Optional[PhoneticEncoder] = None
    ) -> None:
        self.normalizer = normalizer or TextNormalizer()
        self.encoder = encoder or PhoneticEncoder()
        self.ranker = Ranker(self.normalizer, self.encoder)

    def analyze(self, query: str) -> Tuple[List[str], List[str]]:
        """Return the query tokens and their non-empty phonetic codes, in order."""
        tokens = self.normalizer.tokenize(query)
        return tokens, self.encoder.encode_all(tokens)

    def candidates(self, index: SearchIndex, query_codes: List[str]) -> List[int]:
        """
        Collect the ids stored under every index key equal to a query code.

        Keys are visited in index order and each id is kept once, at its
        first occurrence.
        """
        if not query_codes:
            return []
        wanted = set(query_codes)
        hits: Dict[int, None] = {}
        for key in index.keys():
            if key in wanted:
                for entry_id in index.get(key):
                    hits.setdefault(entry_id, None)
        return list(hits)

    def match(self, query: str, index: SearchIndex) -> List[Tuple[DocumentEntry, int]]:
        """
        Find and rank documents for a query.

        Returns:
            List of (entry, score), best first; empty for an empty query
        """
        query = query or ""
        query_tokens, query_codes = self.analyze(query)
        candidates = self.candidates(index, query_codes)
        ranked = self.ranker.rank(
            candidates,
            lambda entry_id: index.entry(entry_id).title,
            query,
            query_tokens,
            query_codes,
        )
        return [(index.entry(entry_id), score) for entry_id, score in ranked]


_default_matcher = QueryMatcher()


def search(query: str, index: SearchIndex) -> List[DocumentEntry]:
    """Return the entries matching a query, best first."""
    return [entry for entry, _ in _default_matcher.match(query, index)]


def search_artifact(query: str, artifact: Mapping[str, Any]) -> List[Dict[str, Optional[str]]]:
    """
    Run a query against a serialized index artifact.

    Returns:
        List of ``{"title", "url", "date"}`` dictionaries, best first
    """
    index = SearchIndex.from_dict(artifact)
    return [
        {"title": entry.title, "url": entry.url, "date": entry.date}
        for entry in search(query, index)
    ]


class SearchEngine:
    """Serves queries against one immutable SearchIndex and tracks statistics."""

    def __init__(self, index: SearchIndex, matcher: Optional[QueryMatcher] = None) -> None:
        """
        Initialize the search engine.

        Args:
            index: Built index to query
            matcher: Matcher to use (defaults to the standard tokenizer and encoder)
        """
        self.index = index
        self.matcher = matcher or QueryMatcher()

        # Performance tracking
        self._stats = {
            "total_queries": 0,
            "queries_with_results": 0,
            "no_matches": 0,
            "total_execution_time": 0.0,
        }

    def search(self, query: str, max_results: Optional[int] = None) -> SearchResponse:
        """
        Search for documents matching a query.

        Args:
            query: Free-text query
            max_results: Truncate the returned results (the total is unaffected)

        Returns:
            SearchResponse with ranked hits
        """
        start_time = time.time()
        query = query or ""

        ranked = self.matcher.match(query, self.index)
        hits = [
            SearchHit(id=entry.id, title=entry.title, url=entry.url, date=entry.date, score=score)
            for entry, score in ranked
        ]
        if max_results is not None:
            hits = hits[:max_results]

        execution_time = (time.time() - start_time) * 1000
        self._stats["total_queries"] += 1
        self._stats["total_execution_time"] += execution_time
        if ranked:
            self._stats["queries_with_results"] += 1
        else:
            self._stats["no_matches"] += 1

        logger.debug(
            "search_completed",
            query=query,
            total_results=len(ranked),
            execution_time_ms=round(execution_time, 3),
        )

        return SearchResponse(
            query=query,
            total_results=len(ranked),
            results=hits,
            execution_time_ms=execution_time,
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        stats = self._stats.copy()

        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
        else:
            stats["average_execution_time_ms"] = 0.0

        stats["index_stats"] = self.index.get_stats()
        return stats
