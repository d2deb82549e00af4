"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar, Union, runtime_checkable


@runtime_checkable
class Document(Protocol):
    """Anything the ranker can order: it only reads `searchable_text`."""

    @property
    def searchable_text(self) -> str: ...


DocT = TypeVar("DocT", bound=Document)


@dataclass(slots=True, frozen=True)
class BookmarkDocument:
    """A flattened bookmark with its folder ancestry."""

    title: str
    url: str
    folder: str = ""
    bookmark_id: str | None = None

    @property
    def searchable_text(self) -> str:
        return f"{self.title} {self.url} {self.folder}"

    @property
    def label(self) -> str:
        return f"{self.title} ({self.folder})"


@dataclass(slots=True, frozen=True)
class TextDocument:
    """A plain text record."""

    text: str
    doc_id: str | None = None

    @property
    def searchable_text(self) -> str:
        return self.text


@dataclass(slots=True)
class ScoredDocument(Generic[DocT]):
    """A ranking result with its cosine score."""

    document: DocT
    score: float
    rank: int = 0


@dataclass(slots=True, frozen=True)
class BookmarkLeaf:
    """A bookmark node in the host tree."""

    title: str
    url: str
    node_id: str | None = None


@dataclass(slots=True, frozen=True)
class BookmarkFolder:
    """A folder node in the host tree."""

    title: str
    children: tuple["BookmarkNode", ...] = field(default_factory=tuple)
    node_id: str | None = None


BookmarkNode = Union[BookmarkLeaf, BookmarkFolder]

