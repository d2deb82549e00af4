"""Vocabulary construction from a document corpus."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from bookmark_search.errors import InvalidInputError
from bookmark_search.ranking.text import tokenize
from bookmark_search.types import DocT, Document

logger = logging.getLogger(__name__)


class Vocabulary:
    """Ordered, deduplicated term set defining vector dimensions.

    The position of each term is fixed for the lifetime of the instance and is
    the vector index that term maps to.
    """

    __slots__ = ("_terms", "_index")

    def __init__(self, terms: Iterable[str] = ()) -> None:
        index: dict[str, int] = {}
        for term in terms:
            if term not in index:
                index[term] = len(index)
        self._index = index
        self._terms = tuple(index)

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> "Vocabulary":
        return cls(tokenize(" ".join(texts)))

    @property
    def terms(self) -> tuple[str, ...]:
        return self._terms

    def index_of(self, term: str) -> int | None:
        return self._index.get(term)

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __contains__(self, term: object) -> bool:
        return term in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self._terms == other._terms

    def __hash__(self) -> int:
        return hash(self._terms)

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self._terms)})"


def build_vocabulary(documents: Sequence[Document]) -> Vocabulary:
    """Build the vocabulary of every term appearing in `documents`."""

    _, texts = collect_documents(documents)
    vocabulary = Vocabulary.from_texts(texts)
    logger.debug(
        "Built vocabulary of %d terms from %d documents", len(vocabulary), len(texts)
    )
    return vocabulary


def collect_documents(documents: Iterable[DocT]) -> tuple[list[DocT], list[str]]:
    """Materialize `documents` alongside their searchable texts.

    Raises `InvalidInputError` when `documents` is absent or not iterable, or
    when a document's searchable text is missing or not a string.
    """

    if documents is None:
        raise InvalidInputError("documents must be a sequence, got None")
    if isinstance(documents, (str, bytes)):
        raise InvalidInputError("documents must be a sequence of documents, not a string")
    try:
        items = list(documents)
    except TypeError as exc:
        raise InvalidInputError(
            f"documents must be iterable, got {type(documents).__name__}"
        ) from exc

    texts: list[str] = []
    for position, document in enumerate(items):
        text = getattr(document, "searchable_text", None)
        if text is None:
            raise InvalidInputError(f"document at position {position} has no searchable text")
        if not isinstance(text, str):
            raise InvalidInputError(
                f"document at position {position} has non-string searchable text: "
                f"{type(text).__name__}"
            )
        texts.append(text)
    return items, texts
