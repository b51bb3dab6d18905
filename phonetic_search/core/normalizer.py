"""Text normalization and tokenization for indexing and querying."""

import re
from typing import Dict, List, Optional


# Latin letters expanded to their ASCII digraphs before tokenizing.
DEFAULT_TRANSLITERATIONS: Dict[str, str] = {
    "ü": "ue",
    "ö": "oe",
    "ä": "ae",
    "ß": "ss",
}


class TextNormalizer:
    """Turns raw text into lowercase alphabetic word tokens."""

    def __init__(self, transliterations: Optional[Dict[str, str]] = None) -> None:
        """
        Initialize the normalizer.

        Args:
            transliterations: Extra letter-to-ASCII mappings applied after the defaults
        """
        self.transliterations = dict(DEFAULT_TRANSLITERATIONS)
        if transliterations:
            self.transliterations.update(transliterations)

        # Compile regex patterns for performance
        self.token_regex = re.compile(r"[a-z]+")

    def normalize(self, text: str) -> str:
        """
        Lowercase text and expand transliterated letters.

        Args:
            text: Input text to normalize

        Returns:
            Normalized text
        """
        if not text:
            return ""

        normalized = text.lower()
        for letter, replacement in self.transliterations.items():
            normalized = normalized.replace(letter, replacement)

        return normalized

    def tokenize(self, text: str) -> List[str]:
        """
        Split text into maximal runs of ``a-z`` after normalization.

        Digits, punctuation and whitespace all separate tokens.

        Args:
            text: Input text

        Returns:
            List of tokens in order of occurrence
        """
        if not text:
            return []

        return self.token_regex.findall(self.normalize(text))


_default_normalizer = TextNormalizer()


def tokenize(text: str) -> List[str]:
    """Tokenize text with the default transliteration table."""
    return _default_normalizer.tokenize(text)
