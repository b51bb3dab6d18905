"""Metaphone-style phonetic encoding of word tokens.

A token is reduced to a coarse sound-alike code by a fixed cascade of
rewrite steps. The order of the steps matters: each step sees the output
of the previous one, so the cascade is not confluent and codes are not
idempotent under re-encoding.

Tokens must consist of lowercase ASCII letters only; the tokenizer
guarantees this. Other input still terminates but the code is unspecified.
"""

import re
from typing import Callable, List, Optional, Pattern, Tuple

VOWELS = "aeiou"

Rule = Tuple[Pattern[str], str]


def _rules(*pairs: Tuple[str, str]) -> List[Rule]:
    return [(re.compile(pattern), replacement) for pattern, replacement in pairs]


def _apply(rules: List[Rule], word: str) -> str:
    for pattern, replacement in rules:
        word = pattern.sub(replacement, word)
    return word


# Rewrite rules grouped by step, in application order.
PHONETIC_RULES = {
    "initial_silent": _rules(
        (r"^kn", "n"),
        (r"^gn", "n"),
        (r"^pn", "n"),
        (r"^ae", "e"),
        (r"^wr", "r"),
    ),
    "final_mb": _rules((r"mb$", "m"),),
    "c": _rules(
        (r"sch", "skh"),
        (r"cia", "xia"),
        (r"ch", "xh"),
        (r"ci", "si"),
        (r"ce", "se"),
        (r"cy", "sy"),
        (r"c", "k"),
    ),
    "d": _rules(
        (r"dge", "jge"),
        (r"dgy", "jgy"),
        (r"dgi", "jgi"),
        (r"d", "t"),
    ),
    "silent_g": _rules(
        (r"g(h[^aeiou])", r"\1"),
        (r"gn", "n"),
    ),
    "g": _rules(
        (r"gg", "kk"),
        (r"gi", "ji"),
        (r"ge", "je"),
        (r"gy", "jy"),
        (r"g", "k"),
    ),
    "silent_h": _rules((r"([aeiou])h([^aeiou])", r"\1\2"),),
    "ck": _rules((r"ck", "k"),),
    "ph": _rules((r"ph", "f"),),
    "q": _rules((r"q", "k"),),
    "s": _rules((r"s(h|io|ia)", r"x\1"),),
    "t": _rules(
        (r"t(io|ia)", r"x\1"),
        (r"th", "0"),
        (r"tch", "ch"),
    ),
    "v": _rules((r"v", "f"),),
    "w": _rules(
        (r"^wh", "w"),
        (r"w([^aeiou])", r"\1"),
    ),
    "x": _rules(
        (r"^x", "s"),
        (r"x", "ks"),
    ),
    "y": _rules((r"y([^aeiou])", r"\1"),),
    "z": _rules((r"z", "s"),),
}


def collapse_duplicates(word: str) -> str:
    """Drop adjacent duplicate letters, except for ``c``."""
    collapsed = []
    last = None
    for letter in word:
        if letter != last or letter == "c":
            collapsed.append(letter)
        last = letter
    return "".join(collapsed)


def drop_vowels(word: str) -> str:
    """Keep the first character and remove vowels from the rest."""
    if not word:
        return ""
    return word[0] + "".join(letter for letter in word[1:] if letter not in VOWELS)


def _step(name: str) -> Callable[[str], str]:
    rules = PHONETIC_RULES[name]

    def step(word: str) -> str:
        return _apply(rules, word)

    step.__name__ = f"rewrite_{name}"
    step.__doc__ = f"Apply the '{name}' rewrite rules."
    return step


# The full cascade. Every step is a total str -> str function.
PIPELINE: List[Callable[[str], str]] = (
    [collapse_duplicates]
    + [_step(name) for name in PHONETIC_RULES]
    + [drop_vowels]
)


class PhoneticEncoder:
    """Encodes tokens into phonetic codes using the rewrite cascade."""

    def __init__(self, pipeline: Optional[List[Callable[[str], str]]] = None) -> None:
        """
        Initialize the encoder.

        Args:
            pipeline: Ordered rewrite steps (defaults to the standard cascade)
        """
        self.pipeline = list(pipeline or PIPELINE)

    def encode(self, token: str) -> str:
        """
        Encode a single ``[a-z]+`` token.

        Args:
            token: Lowercase alphabetic token

        Returns:
            Phonetic code, possibly empty
        """
        code = token
        for step in self.pipeline:
            code = step(code)
        return code

    def encode_all(self, tokens: List[str]) -> List[str]:
        """Encode tokens in order, dropping empty codes."""
        return [code for code in map(self.encode, tokens) if code]


_default_encoder = PhoneticEncoder()


def encode(token: str) -> str:
    """Encode a token with the standard cascade."""
    return _default_encoder.encode(token)
