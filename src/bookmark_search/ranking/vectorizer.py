"""Term-frequency vectorization against a fixed vocabulary."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from bookmark_search.ranking.text import tokenize
from bookmark_search.ranking.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


def vectorize(text: str, vocabulary: Vocabulary) -> list[int]:
    """Count occurrences of each vocabulary term in `text`.

    Tokens absent from the vocabulary are ignored.
    """

    vector = [0] * len(vocabulary)
    for token in tokenize(text):
        index = vocabulary.index_of(token)
        if index is not None:
            vector[index] += 1
    return vector


def vectorize_many(
    texts: Sequence[str],
    vocabulary: Vocabulary,
    *,
    max_workers: int | None = None,
) -> list[list[int]]:
    """Vectorize a batch of texts, in input order.

    With `max_workers` greater than one the texts are spread over a thread
    pool; `Executor.map` keeps results aligned with `texts`.
    """

    if not max_workers or max_workers <= 1 or len(texts) < 2:
        return [vectorize(text, vocabulary) for text in texts]

    logger.debug("Vectorizing %d texts across %d workers", len(texts), max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda text: vectorize(text, vocabulary), texts))
