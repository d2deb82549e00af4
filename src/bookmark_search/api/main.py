"""FastAPI entrypoint for search/trace endpoints."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError, model_validator

from bookmark_search.config import ApiConfig, CacheConfig, RankingConfig
from bookmark_search.errors import InvalidInputError
from bookmark_search.obs.tracing import SearchTraceStore, Timer
from bookmark_search.ranking.cache import VectorCache
from bookmark_search.ranking.ranker import Ranker
from bookmark_search.source.bookmarks import flatten_bookmarks, parse_bookmark_tree
from bookmark_search.types import BookmarkDocument

logger = logging.getLogger(__name__)


def _cache_config() -> CacheConfig:
    enabled = os.getenv("BOOKMARK_SEARCH_CACHE", "").lower() in {"1", "true", "yes"}
    raw_entries = os.getenv("BOOKMARK_SEARCH_CACHE_ENTRIES")
    if raw_entries is None:
        return CacheConfig(enabled=enabled)
    try:
        return CacheConfig(enabled=enabled, max_entries=raw_entries)
    except ValidationError:
        logger.warning(
            "Ignoring invalid BOOKMARK_SEARCH_CACHE_ENTRIES=%r; using default", raw_entries
        )
        return CacheConfig(enabled=enabled)


class FlatBookmark(BaseModel):
    title: str = ""
    url: str
    folder: str = ""
    id: str | None = None


class SearchRequest(BaseModel):
    query: str
    bookmarks: list[dict[str, Any]] | None = None
    documents: list[FlatBookmark] | None = None
    limit: int | None = Field(default=None, ge=1)
    include_scores: bool = False

    @model_validator(mode="after")
    def _require_collection(self) -> "SearchRequest":
        if self.bookmarks is None and self.documents is None:
            raise ValueError("either 'bookmarks' or 'documents' must be provided")
        return self


_api_config = ApiConfig()
_cache_settings = _cache_config()
_ranker = Ranker(
    RankingConfig(),
    cache=VectorCache(_cache_settings) if _cache_settings.enabled else None,
)
_trace_store = SearchTraceStore(capacity=_api_config.trace_capacity)

app = FastAPI(title="Bookmark Search", version="0.1.0")


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "cache_enabled": _ranker.cache is not None,
        "trace_count": len(_trace_store),
    }


@app.post("/search")
def search(request: SearchRequest) -> dict[str, Any]:
    try:
        documents = _collect_documents(request)
        with Timer() as timer:
            hits = _ranker.score(request.query, documents)
    except InvalidInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    limit = min(request.limit or _api_config.default_limit, _api_config.max_limit)
    record = _trace_store.create_record(
        query=request.query,
        document_count=len(documents),
        result_count=min(limit, len(hits)),
        top_score=hits[0].score if hits else 0.0,
        latency_ms=timer.elapsed_ms,
    )

    items = []
    for hit in hits[:limit]:
        item: dict[str, Any] = {
            "title": hit.document.title,
            "url": hit.document.url,
            "folder": hit.document.folder,
            "label": hit.document.label,
        }
        if request.include_scores:
            item["score"] = hit.score
        items.append(item)
    return {"items": items, "trace_id": record.trace_id}


@app.get("/traces")
def traces(limit: int = 20) -> dict[str, Any]:
    records = [asdict(record) for record in _trace_store.list_recent(limit=limit)]
    return {"items": records}


@app.get("/traces/{trace_id}")
def trace_detail(trace_id: str) -> dict[str, Any]:
    try:
        record = _trace_store.get(trace_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return asdict(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    summary: dict[str, Any] = dict(_trace_store.summary())
    if _ranker.cache is not None:
        summary["cache_hits"] = _ranker.cache.hits
        summary["cache_misses"] = _ranker.cache.misses
    return summary


def _collect_documents(request: SearchRequest) -> list[BookmarkDocument]:
    documents: list[BookmarkDocument] = []
    if request.bookmarks is not None:
        documents.extend(flatten_bookmarks(parse_bookmark_tree(request.bookmarks)))
    if request.documents is not None:
        documents.extend(
            BookmarkDocument(title=doc.title, url=doc.url, folder=doc.folder, bookmark_id=doc.id)
            for doc in request.documents
        )
    return documents
