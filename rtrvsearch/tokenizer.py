"""Text tokenization: word splitting, case folding, stop-word removal and stemming."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from enum import Enum

__all__ = ["DEFAULT_STOP_WORDS", "StemmerType", "Token", "Tokenizer", "simple_stem"]

DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for",
        "from", "has", "he", "in", "is", "it", "its", "of", "on",
        "that", "the", "to", "was", "will", "with", "this",
        "but", "they", "have", "had", "what", "when", "where", "who",
        "which", "why", "how", "all", "each", "every", "both", "few",
        "more", "most", "other", "some", "such", "no", "nor", "not",
        "only", "own", "same", "so", "than", "too", "very", "can",
        "just", "should", "now",
    }
)

# Words are runs of ASCII letters, digits and apostrophes (for contractions).
_WORD_RE = re.compile(r"[A-Za-z0-9']+")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class StemmerType(Enum):
    """Which stemming algorithm a tokenizer applies to its tokens."""

    NONE = "none"
    SIMPLE = "simple"


@dataclass(frozen=True)
class Token:
    """A token with its ordinal position and character offsets in the source text."""

    text: str
    position: int
    start_offset: int
    end_offset: int


def simple_stem(token: str) -> str:
    """Strip one common English suffix from ``token``."""
    if len(token) < 4:
        return token
    if len(token) > 6 and token.endswith("tional"):
        return token[:-6] + "tion"
    if len(token) > 5 and token.endswith("ional"):
        return token[:-2]
    if token.endswith("ing"):
        return token[:-3]
    if token.endswith("ed"):
        return token[:-2]
    if token.endswith("ly"):
        return token[:-2]
    if token.endswith("s") and token[-2] != "s":
        return token[:-1]
    return token


@dataclass
class Tokenizer:
    """Splits text into normalised terms."""

    lowercase: bool = True
    remove_stopwords: bool = True
    stemmer: StemmerType = StemmerType.NONE
    stop_words: set[str] = field(default_factory=lambda: set(DEFAULT_STOP_WORDS))

    def tokenize(self, text: str) -> list[str]:
        """Return the terms of ``text`` in order."""
        return [token.text for token in self.tokenize_with_positions(text)]

    def tokenize_with_positions(self, text: str) -> list[Token]:
        """Return the tokens of ``text`` with positions and character offsets.

        Positions count only the tokens that are kept, so they stay
        consecutive after stop words are removed.
        """
        normalized = text.translate(_ASCII_LOWER) if self.lowercase else text
        tokens: list[Token] = []
        for match in _WORD_RE.finditer(normalized):
            word = match.group()
            if self.remove_stopwords and self.is_stopword(word):
                continue
            tokens.append(
                Token(self.apply_stemming(word), len(tokens), match.start(), match.end())
            )
        return tokens

    def is_stopword(self, term: str) -> bool:
        """Whether ``term`` is in the stop-word set."""
        return term in self.stop_words

    def apply_stemming(self, token: str) -> str:
        """Stem ``token`` with the configured stemmer."""
        if self.stemmer is StemmerType.SIMPLE:
            return simple_stem(token)
        return token