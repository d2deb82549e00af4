"""Bookmark search package."""

from .config import CacheConfig, RankingConfig
from .errors import InvalidInputError
from .ranking.ranker import Ranker, rank
from .types import BookmarkDocument, TextDocument

__all__ = [
    "BookmarkDocument",
    "CacheConfig",
    "InvalidInputError",
    "Ranker",
    "RankingConfig",
    "TextDocument",
    "rank",
]
