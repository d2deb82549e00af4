"""Configuration models for bookmark search."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RankingConfig(BaseModel):
    """Configures vectorization behavior of the ranker."""

    parallel_threshold: int = Field(default=2000, ge=1)
    max_workers: int = Field(default=4, ge=1)


class CacheConfig(BaseModel):
    """Configures the opt-in corpus vector cache."""

    enabled: bool = False
    max_entries: int = Field(default=8, ge=1)


class ApiConfig(BaseModel):
    """Configures the HTTP result presenter."""

    default_limit: int = Field(default=50, ge=1)
    max_limit: int = Field(default=1000, ge=1)
    trace_capacity: int = Field(default=500, ge=1)
