import pytest

from bookmark_search.obs.tracing import SearchTraceStore, Timer


def _record(store: SearchTraceStore, *, latency_ms: float, top_score: float = 0.5) -> str:
    return store.create_record(
        query="q",
        document_count=10,
        result_count=3,
        top_score=top_score,
        latency_ms=latency_ms,
    ).trace_id


def test_trace_store_get_and_missing() -> None:
    store = SearchTraceStore()
    trace_id = _record(store, latency_ms=1.0)

    assert store.get(trace_id).query == "q"
    with pytest.raises(KeyError):
        store.get("missing")


def test_trace_store_is_bounded() -> None:
    store = SearchTraceStore(capacity=2)
    first = _record(store, latency_ms=1.0)
    _record(store, latency_ms=2.0)
    _record(store, latency_ms=3.0)

    assert len(store) == 2
    with pytest.raises(KeyError):
        store.get(first)
    assert [record.latency_ms for record in store.list_recent()] == [2.0, 3.0]


def test_summary_aggregates() -> None:
    store = SearchTraceStore()
    assert store.summary()["total_requests"] == 0

    _record(store, latency_ms=2.0)
    _record(store, latency_ms=4.0, top_score=0.0)
    summary = store.summary()

    assert summary["total_requests"] == 2
    assert summary["avg_latency_ms"] == pytest.approx(3.0)
    assert summary["zero_match_requests"] == 1
    assert summary["avg_document_count"] == pytest.approx(10.0)


def test_timer_measures_elapsed() -> None:
    with Timer() as timer:
        sum(range(1000))

    assert timer.elapsed_ms >= 0.0
