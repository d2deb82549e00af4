"""Cosine-similarity ranking of documents against a free-text query."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from fractions import Fraction
from math import sqrt

from bookmark_search.config import RankingConfig
from bookmark_search.errors import InvalidInputError
from bookmark_search.ranking.cache import CorpusVectors, VectorCache, corpus_fingerprint
from bookmark_search.ranking.vectorizer import vectorize, vectorize_many
from bookmark_search.ranking.vocabulary import Vocabulary, collect_documents
from bookmark_search.types import DocT, ScoredDocument

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of two vectors, 0.0 when either is empty or has zero norm.

    Both squared norms are multiplied before the single square root, so
    integer count vectors pointing the same way score exactly 1.0.
    """
    if not a or not b or len(a) != len(b):
        return 0.0
    numerator = sum(x * y for x, y in zip(a, b, strict=True))
    norms = sum(x * x for x in a) * sum(y * y for y in b)
    if norms == 0:
        return 0.0
    return max(-1.0, min(1.0, numerator / sqrt(norms)))


def squared_cosine(query_vector: Sequence[int], query_norm: int, vector: Sequence[int]) -> Fraction:
    """Exact squared cosine of two non-negative count vectors.

    `query_norm` is the query's squared norm. Equal similarities give equal
    fractions, which keeps tied documents tied when sorting.
    """
    if query_norm == 0 or len(vector) != len(query_vector):
        return Fraction(0)
    norm = sum(x * x for x in vector)
    if norm == 0:
        return Fraction(0)
    dot = sum(x * y for x, y in zip(query_vector, vector, strict=True))
    return Fraction(dot * dot, query_norm * norm)


class Ranker:
    """Orders documents by term-frequency cosine similarity to a query.

    Every call builds its own vocabulary and vectors. Passing a `VectorCache`
    lets repeated queries over an unchanged corpus reuse the document side of
    that work; the query is always vectorized fresh.
    """

    def __init__(
        self,
        config: RankingConfig | None = None,
        cache: VectorCache | None = None,
    ) -> None:
        self.config = config or RankingConfig()
        self.cache = cache

    def score(self, query: str, documents: Sequence[DocT]) -> list[ScoredDocument[DocT]]:
        """Score every document and return them best first.

        Documents are ordered on the exact squared cosine, so mathematically
        tied documents keep their input order since `sorted` is stable.
        """

        if not isinstance(query, str):
            raise InvalidInputError(f"query must be a string, got {type(query).__name__}")
        items, texts = collect_documents(documents)
        if not items:
            return []

        corpus = self._corpus_vectors(texts)
        query_vector = vectorize(query, corpus.vocabulary)
        query_norm = sum(x * x for x in query_vector)

        keyed = [
            (squared_cosine(query_vector, query_norm, vector), document)
            for document, vector in zip(items, corpus.document_vectors, strict=True)
        ]
        keyed.sort(key=lambda pair: pair[0], reverse=True)
        return [
            ScoredDocument(document=document, score=sqrt(key), rank=position)
            for position, (key, document) in enumerate(keyed, start=1)
        ]

    def rank(self, query: str, documents: Sequence[DocT]) -> list[DocT]:
        """Return `documents` reordered from most to least similar to `query`."""

        return [item.document for item in self.score(query, documents)]

    def _corpus_vectors(self, texts: list[str]) -> CorpusVectors:
        fingerprint: str | None = None
        if self.cache is not None:
            fingerprint = corpus_fingerprint(texts)
            cached = self.cache.get(fingerprint)
            if cached is not None:
                logger.debug("Corpus vector cache hit for %d documents", len(texts))
                return cached

        vocabulary = Vocabulary.from_texts(texts)
        workers = self.config.max_workers if len(texts) >= self.config.parallel_threshold else None
        vectors = vectorize_many(texts, vocabulary, max_workers=workers)
        corpus = CorpusVectors(
            vocabulary=vocabulary,
            document_vectors=tuple(tuple(vector) for vector in vectors),
        )
        logger.debug(
            "Vectorized %d documents over %d terms", len(texts), len(vocabulary)
        )

        if self.cache is not None and fingerprint is not None:
            self.cache.put(fingerprint, corpus)
        return corpus


def rank(query: str, documents: Sequence[DocT]) -> list[DocT]:
    """Rank `documents` against `query` with a fresh, uncached `Ranker`."""

    return Ranker().rank(query, documents)
