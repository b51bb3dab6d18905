"""Additive relevance scoring and ordering of candidate documents."""

from functools import cmp_to_key
from typing import Callable, List, Optional, Sequence, Tuple

from .normalizer import TextNormalizer
from .phonetic import PhoneticEncoder

# Score components
SUBSTRING_BONUS = 100
TOKEN_BASE = 20
TOKEN_SPREAD = 40
CODE_BASE = 5
CODE_SPREAD = 10


class Ranker:
    """Scores document titles against a query and orders candidates."""

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        encoder: Optional[PhoneticEncoder] = None
    ) -> None:
        self.normalizer = normalizer or TextNormalizer()
        self.encoder = encoder or PhoneticEncoder()

    def score_title(
        self,
        title: Optional[str],
        query: str,
        query_tokens: Sequence[str],
        query_codes: Sequence[str]
    ) -> int:
        """
        Score a title against a query.

        Args:
            title: Document title (None scores as empty)
            query: Original query string
            query_tokens: Tokens of the query
            query_codes: Non-empty phonetic codes of the query tokens

        Returns:
            Additive score; higher is more relevant
        """
        title = title or ""
        score = 0

        if query.lower() in title.lower():
            score += SUBSTRING_BONUS

        # Shorter titles give a larger bonus per matching token
        title_tokens = self.normalizer.tokenize(title)
        for token in title_tokens:
            if token in query_tokens:
                score += TOKEN_BASE + TOKEN_SPREAD // len(title_tokens)

        title_codes = self.encoder.encode_all(title_tokens)
        for code in title_codes:
            if code in query_codes:
                score += CODE_BASE + CODE_SPREAD // len(title_codes)

        return score

    def rank(
        self,
        candidates: Sequence[int],
        title_of: Callable[[int], Optional[str]],
        query: str,
        query_tokens: Sequence[str],
        query_codes: Sequence[str]
    ) -> List[Tuple[int, int]]:
        """
        Order candidate ids by descending score.

        Returns:
            List of (entry_id, score), best first
        """
        scored = [
            (entry_id, self.score_title(title_of(entry_id), query, query_tokens, query_codes))
            for entry_id in candidates
        ]
        return sorted(scored, key=cmp_to_key(compare_scored))


def compare_scored(first: Tuple[int, int], second: Tuple[int, int]) -> int:
    """
    Order two (entry_id, score) pairs, higher score first.

    Equal scores compare as "first sorts before second" from either side,
    so this is not a strict weak ordering and the relative order of ties
    depends on the sort algorithm and the input order.
    """
    return 1 if first[1] < second[1] else -1
