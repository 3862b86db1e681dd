"""Relevance ranking: TF-IDF, BM25, a feature-weighted ranker and a ranker registry."""

from __future__ import annotations

import math
import string
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

__all__ = [
    "Bm25Ranker",
    "CustomMLRanker",
    "IndexStats",
    "Query",
    "RankableDocument",
    "Ranker",
    "RankerRegistry",
    "TfIdfRanker",
]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass
class RankableDocument:
    """A document as seen by a ranker: named text fields and its indexed term count."""

    fields: dict[str, str] = field(default_factory=dict)
    term_count: int = 0
    id: int = 0

    def all_text(self) -> str:
        """The values of all fields joined by spaces, in field order."""
        return " ".join(self.fields.values())

    def get_field(self, name: str) -> str:
        """The text of field ``name``, or an empty string if it is absent."""
        return self.fields.get(name, "")

    @property
    def length(self) -> float:
        """Term count, or the character length of the text when no terms were counted."""
        return float(self.term_count if self.term_count > 0 else len(self.all_text()))


@dataclass
class Query:
    """The terms a document is scored against."""

    terms: list[str] = field(default_factory=list)


@dataclass
class IndexStats:
    """Collection-wide statistics used by the rankers."""

    total_docs: int = 0
    avg_doc_length: float = 0.0
    doc_frequency: dict[str, int] = field(default_factory=dict)

    def df(self, term: str) -> int:
        """Document frequency of ``term``, taken as 1 when it is unknown."""
        return self.doc_frequency.get(term, 1)


def _term_frequencies(query: Query, doc: RankableDocument) -> Iterable[tuple[str, int]]:
    """Yield each query term with its non-overlapping occurrence count in the document."""
    content = doc.all_text().translate(_ASCII_LOWER)
    for term in query.terms:
        yield term, (content.count(term) if term else 0)


class Ranker(ABC):
    """Scores a document's relevance to a query."""

    name: str = ""

    @abstractmethod
    def score(self, query: Query, doc: RankableDocument, stats: IndexStats) -> float:
        """Return the relevance of ``doc`` to ``query``; higher is better."""


class TfIdfRanker(Ranker):
    """Sum over query terms of log(1 + tf) * log(N / df)."""

    name = "TF-IDF"

    def score(self, query: Query, doc: RankableDocument, stats: IndexStats) -> float:
        if stats.total_docs == 0:
            return 0.0
        total = 0.0
        for term, tf in _term_frequencies(query, doc):
            if tf == 0:
                continue
            df = stats.df(term)
            idf = math.log(stats.total_docs / df) if df else math.inf
            total += math.log(1.0 + tf) * idf
        return total


class Bm25Ranker(Ranker):
    """Okapi BM25 with length normalisation."""

    name = "BM25"

    def __init__(self, k1: float = 1.2, b: float = 0.75) -> None:
        self.k1 = k1
        self.b = b

    def score(self, query: Query, doc: RankableDocument, stats: IndexStats) -> float:
        if stats.total_docs == 0 or stats.avg_doc_length == 0:
            return 0.0
        total = 0.0
        for term, tf in _term_frequencies(query, doc):
            if tf == 0:
                continue
            df = stats.df(term)
            idf = math.log((stats.total_docs - df + 0.5) / (df + 0.5) + 1.0)
            normalized_length = 1.0 - self.b + self.b * (doc.length / stats.avg_doc_length)
            total += idf * (tf * (self.k1 + 1.0)) / (tf + self.k1 * normalized_length)
        return total


class CustomMLRanker(Ranker):
    """A linear model over BM25, TF-IDF, term coverage, length ratio and title matches."""

    name = "ML-Ranker"
    weights: tuple[float, ...] = (0.4, 0.2, 0.2, 0.05, 0.15)

    def extract_features(
        self, query: Query, doc: RankableDocument, stats: IndexStats
    ) -> list[float]:
        """Return the feature vector the model weighs."""
        content = doc.all_text().translate(_ASCII_LOWER)
        matched = sum(1 for term in query.terms if term in content)
        coverage = matched / len(query.terms) if query.terms else 0.0
        length_ratio = doc.length / stats.avg_doc_length if stats.avg_doc_length > 0 else 1.0
        title = doc.get_field("title").translate(_ASCII_LOWER)
        title_matches = sum(1 for term in query.terms if term in title)
        return [
            Bm25Ranker().score(query, doc, stats),
            TfIdfRanker().score(query, doc, stats),
            coverage,
            length_ratio,
            float(title_matches),
        ]

    def score(self, query: Query, doc: RankableDocument, stats: IndexStats) -> float:
        features = self.extract_features(query, doc, stats)
        return sum(value * weight for value, weight in zip(features, self.weights))


class RankerRegistry:
    """Rankers by name, with a default used when a requested name is unknown."""

    def __init__(self) -> None:
        self._rankers: dict[str, Ranker] = {}
        self.default_name = "BM25"
        for ranker in (TfIdfRanker(), Bm25Ranker(), CustomMLRanker()):
            self.register(ranker)

    def register(self, ranker: Ranker) -> None:
        """Add ``ranker`` under its name, replacing any ranker of the same name."""
        if ranker is None:
            raise ValueError("cannot register a missing ranker")
        self._rankers[ranker.name] = ranker

    def get(self, name: str) -> Optional[Ranker]:
        """The ranker called ``name``, else the default ranker, else None."""
        ranker = self._rankers.get(name)
        if ranker is not None:
            return ranker
        return self._rankers.get(self.default_name)

    def default_ranker(self) -> Optional[Ranker]:
        """The default ranker, if it is registered."""
        return self.get(self.default_name)

    def names(self) -> list[str]:
        """Names of all registered rankers, sorted."""
        return sorted(self._rankers)

    def set_default(self, name: str) -> None:
        """Make ``name`` the default ranker; raise KeyError if it is not registered."""
        if name not in self._rankers:
            raise KeyError(name)
        self.default_name = name

    def __contains__(self, name: object) -> bool:
        return name in self._rankers