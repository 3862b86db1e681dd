"""Snippet extraction: pick the passages densest in query terms and highlight them."""

from __future__ import annotations

import re
import string
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple, Optional

__all__ = ["SnippetOptions", "generate_snippets", "highlight_terms"]

_WORD_RE = re.compile(r"[A-Za-z0-9']+")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ELLIPSIS = "..."


@dataclass(frozen=True)
class SnippetOptions:
    """How long snippets are, how many to produce and how to mark matches."""

    max_snippet_length: int = 150
    num_snippets: int = 3
    highlight_open: str = "<b>"
    highlight_close: str = "</b>"


class _Window(NamedTuple):
    start: int
    end: int
    match_count: int


def _lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _term_set(query_terms: Iterable[str]) -> set[str]:
    return {_lower(term) for term in query_terms}


def _is_word_char(char: str) -> bool:
    return char == "'" or (char.isascii() and char.isalnum())


def highlight_terms(text: str, query_terms: list[str], open_tag: str, close_tag: str) -> str:
    """Wrap every whole word of ``text`` that matches a query term in the given tags.

    Matching ignores case; the word keeps its original case.
    """
    if not text or not query_terms:
        return text
    terms = _term_set(query_terms)

    def mark(match: re.Match[str]) -> str:
        word = match.group()
        return f"{open_tag}{word}{close_tag}" if _lower(word) in terms else word

    return _WORD_RE.sub(mark, text)


def _find_best_windows(
    text: str, query_terms: list[str], window_size: int, num_windows: int
) -> list[_Window]:
    terms = _term_set(query_terms)
    words = [(m.start(), _lower(m.group())) for m in _WORD_RE.finditer(text)]
    if not words:
        return []

    scored: list[_Window] = []
    for index, (start, _) in enumerate(words):
        end = min(start + window_size, len(text))
        score = 0
        for word_start, word in words[index:]:
            if word_start >= end:
                break
            if word in terms:
                score += 1
        if score > 0:
            scored.append(_Window(start, end, score))

    if not scored:
        return [_Window(0, min(window_size, len(text)), 0)]

    scored.sort(key=lambda window: (-window.match_count, window.start))

    chosen: list[_Window] = []
    for window in scored:
        if len(chosen) >= num_windows:
            break
        if not any(window.start < other.end and window.end > other.start for other in chosen):
            chosen.append(window)

    chosen.sort(key=lambda window: window.start)
    return chosen


def _snap_to_word_boundaries(text: str, start: int, end: int) -> tuple[int, int]:
    size = len(text)
    if 0 < start < size and _is_word_char(text[start]) and _is_word_char(text[start - 1]):
        while start < size and _is_word_char(text[start]):
            start += 1
        while start < size and not _is_word_char(text[start]):
            start += 1
    if 0 < end < size and _is_word_char(text[end - 1]) and _is_word_char(text[end]):
        while end < size and _is_word_char(text[end]):
            end += 1
    if start >= end:
        end = min(start + 1, size)
    return start, end


def generate_snippets(
    text: str, query_terms: list[str], options: Optional[SnippetOptions] = None
) -> list[str]:
    """Return highlighted passages of ``text`` around the query terms, in reading order.

    Passages cut from the middle of the text are marked with an ellipsis on
    the side where text was left out.
    """
    options = options or SnippetOptions()
    if not text or not query_terms:
        return []

    highlight = (options.highlight_open, options.highlight_close)
    if len(text) <= options.max_snippet_length:
        return [highlight_terms(text, query_terms, *highlight)]

    snippets: list[str] = []
    windows = _find_best_windows(
        text, query_terms, options.max_snippet_length, options.num_snippets
    )
    for window in windows:
        start, end = _snap_to_word_boundaries(text, window.start, window.end)
        snippet = highlight_terms(text[start:end], query_terms, *highlight)
        if start > 0:
            snippet = _ELLIPSIS + snippet
        if end < len(text):
            snippet += _ELLIPSIS
        snippets.append(snippet)
    return snippets