"""Opt-in memoization of corpus vectors keyed by corpus fingerprint."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass
from hashlib import sha1

from bookmark_search.config import CacheConfig
from bookmark_search.ranking.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

_SEPARATOR = "\x1f"


@dataclass(slots=True, frozen=True)
class CorpusVectors:
    """Vocabulary and per-document vectors for one corpus snapshot."""

    vocabulary: Vocabulary
    document_vectors: tuple[tuple[int, ...], ...]


def corpus_fingerprint(texts: Sequence[str]) -> str:
    """Digest of the ordered searchable texts of a corpus.

    Each text is length-prefixed so that different splits of the same
    characters never share a fingerprint.
    """

    digest = sha1()
    for text in texts:
        encoded = text.encode("utf-8")
        digest.update(f"{len(encoded)}{_SEPARATOR}".encode("ascii"))
        digest.update(encoded)
    return digest.hexdigest()


class VectorCache:
    """Bounded LRU cache of `CorpusVectors`.

    A changed corpus produces a new fingerprint, so stale entries are never
    served; they simply age out of the cache.
    """

    def __init__(self, config: CacheConfig | None = None) -> None:
        self.config = config or CacheConfig(enabled=True)
        self._entries: OrderedDict[str, CorpusVectors] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, fingerprint: str) -> CorpusVectors | None:
        with self._lock:
            entry = self._entries.get(fingerprint)
            if entry is None:
                self.misses += 1
                return None
            self._entries.move_to_end(fingerprint)
            self.hits += 1
            return entry

    def put(self, fingerprint: str, entry: CorpusVectors) -> None:
        with self._lock:
            self._entries[fingerprint] = entry
            self._entries.move_to_end(fingerprint)
            while len(self._entries) > self.config.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted corpus vectors %s", evicted[:12])

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        with self._lock:
            return fingerprint in self._entries
