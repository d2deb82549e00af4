"""Search tracing and latency accounting."""

from __future__ import annotations

import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(slots=True)
class SearchTraceRecord:
    trace_id: str
    timestamp_utc: str
    query: str
    document_count: int
    result_count: int
    top_score: float
    latency_ms: float


class SearchTraceStore:
    """Bounded in-memory trace storage for API-level observability."""

    def __init__(self, capacity: int = 500) -> None:
        self._records: OrderedDict[str, SearchTraceRecord] = OrderedDict()
        self._capacity = capacity

    def create_record(
        self,
        *,
        query: str,
        document_count: int,
        result_count: int,
        top_score: float,
        latency_ms: float,
    ) -> SearchTraceRecord:
        record = SearchTraceRecord(
            trace_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            query=query,
            document_count=document_count,
            result_count=result_count,
            top_score=top_score,
            latency_ms=latency_ms,
        )
        self._records[record.trace_id] = record
        while len(self._records) > self._capacity:
            self._records.popitem(last=False)
        return record

    def get(self, trace_id: str) -> SearchTraceRecord:
        record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Trace not found: {trace_id}")
        return record

    def list_recent(self, limit: int = 20) -> list[SearchTraceRecord]:
        if limit <= 0:
            return []
        return list(self._records.values())[-limit:]

    def __len__(self) -> int:
        return len(self._records)

    def summary(self) -> dict[str, float | int]:
        """Aggregate search metrics for dashboard display."""
        records = list(self._records.values())
        total = len(records)
        if total == 0:
            return {
                "total_requests": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "avg_document_count": 0.0,
                "zero_match_requests": 0,
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        return {
            "total_requests": total,
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "avg_document_count": sum(record.document_count for record in records) / total,
            "zero_match_requests": sum(1 for record in records if record.top_score == 0.0),
        }


class Timer:
    """Simple context timer used around ranking calls."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
