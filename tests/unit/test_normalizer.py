"""Unit tests for text normalization and tokenization."""

import re

import pytest
from phonetic_search.core.normalizer import TextNormalizer, tokenize


class TestTokenize:
    """Test cases for the tokenizer."""

    @pytest.fixture
    def normalizer(self):
        """Create a normalizer instance for testing."""
        return TextNormalizer()

    def test_empty_string(self):
        """Empty input produces no tokens."""
        assert tokenize("") == []

    def test_none_input(self, normalizer):
        """None is treated as empty text."""
        assert normalizer.tokenize(None) == []

    def test_digits_separate_tokens(self):
        """Digits split letter runs."""
        assert tokenize("a1b") == ["a", "b"]

    def test_diacritic_expansion(self):
        """Umlauts expand to their ASCII digraphs."""
        assert tokenize("Müller") == ["mueller"]
        assert tokenize("Straße") == ["strasse"]
        assert tokenize("ÄÖÜ") == ["aeoeue"]

    def test_punctuation_and_whitespace(self):
        """Punctuation and whitespace separate tokens, order is preserved."""
        assert tokenize("Hello, World! 42 times") == ["hello", "world", "times"]

    def test_unmapped_letters_are_separators(self):
        """Letters outside the transliteration table break tokens."""
        assert tokenize("café au lait") == ["caf", "au", "lait"]

    def test_custom_transliterations(self):
        """Extra mappings extend the default table."""
        normalizer = TextNormalizer({"é": "e"})
        assert normalizer.tokenize("Café Müller") == ["cafe", "mueller"]

    def test_tokens_are_lowercase_letters(self, normalizer):
        """Every token satisfies the encoder's input contract."""
        text = "Ünïcode & <b>markup</b> -- it's 2024, NO_limits!"
        tokens = normalizer.tokenize(text)

        assert tokens
        for token in tokens:
            assert re.fullmatch(r"[a-z]+", token)

    def test_normalize(self, normalizer):
        """Normalization lowercases and transliterates without splitting."""
        assert normalizer.normalize("Grüße, Welt") == "gruesse, welt"
        assert normalizer.normalize("") == ""
