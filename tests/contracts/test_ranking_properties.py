import math
import random

import pytest

from bookmark_search.ranking.ranker import Ranker, rank
from bookmark_search.types import TextDocument

_WORDS = ["alpha", "beta", "gamma", "delta", "docs", "notes", "cat", "dog", "x", "y"]


def _random_corpus(seed: int, size: int = 25) -> list[TextDocument]:
    rng = random.Random(seed)
    return [
        TextDocument(" ".join(rng.choice(_WORDS) for _ in range(rng.randint(0, 6))), doc_id=str(i))
        for i in range(size)
    ]


@pytest.mark.parametrize("seed", range(5))
def test_rank_is_deterministic_and_a_permutation(seed: int) -> None:
    docs = _random_corpus(seed)
    query = " ".join(random.Random(seed + 100).sample(_WORDS, 3))

    first = rank(query, docs)
    second = rank(query, docs)

    assert first == second
    assert len(first) == len(docs)
    assert sorted(id(doc) for doc in first) == sorted(id(doc) for doc in docs)


@pytest.mark.parametrize("seed", range(5))
def test_equal_scores_keep_input_order(seed: int) -> None:
    docs = _random_corpus(seed)
    hits = Ranker().score("alpha docs", docs)
    position = {id(doc): i for i, doc in enumerate(docs)}

    for previous, current in zip(hits, hits[1:]):
        assert previous.score >= current.score
        if previous.score == current.score:
            assert position[id(previous.document)] < position[id(current.document)]


@pytest.mark.parametrize("seed", range(5))
def test_scores_are_finite_and_bounded(seed: int) -> None:
    docs = _random_corpus(seed) + [TextDocument(""), TextDocument("!!!")]

    for query in ["", "???", "unknownword", "cat dog"]:
        for hit in Ranker().score(query, docs):
            assert not math.isnan(hit.score)
            assert 0.0 <= hit.score <= 1.0


def test_zero_vector_scores_are_exactly_zero() -> None:
    docs = [TextDocument("alpha"), TextDocument(""), TextDocument("--")]

    hits = Ranker().score("alpha", docs)

    assert [hit.score for hit in hits[1:]] == [0.0, 0.0]
    assert all(hit.score == 0.0 for hit in Ranker().score("", docs))


def test_self_similarity_is_maximal() -> None:
    docs = [
        TextDocument("alpha beta beta"),
        TextDocument("Gamma, delta!"),
        TextDocument("gamma delta docs"),
        TextDocument("delta"),
    ]

    hits = Ranker().score("gamma delta", docs)

    assert hits[0].document is docs[1]
    assert hits[0].score == pytest.approx(1.0)


def test_empty_corpus_returns_empty_list() -> None:
    assert rank("anything", []) == []


def test_example_alpha_ranks_first() -> None:
    docs = [TextDocument("alpha project docs"), TextDocument("beta notes")]

    hits = Ranker().score("alpha", docs)

    assert [hit.document for hit in hits] == docs
    assert hits[0].score > hits[1].score


def test_example_unmatched_query_keeps_input_order() -> None:
    docs = [TextDocument("x"), TextDocument("y")]

    assert rank("z", docs) == docs


def test_example_identical_vectors_keep_input_order() -> None:
    docs = [TextDocument("cat dog"), TextDocument("dog cat")]

    hits = Ranker().score("cat dog", docs)

    assert [hit.document for hit in hits] == docs
    assert hits[0].score == pytest.approx(1.0)
    assert hits[0].score == hits[1].score


def test_empty_query_preserves_input_order() -> None:
    docs = _random_corpus(7)

    assert rank("", docs) == docs


@pytest.mark.parametrize("terms", [3, 6])
@pytest.mark.parametrize("repeat", [3, 5, 6, 7])
def test_scaled_duplicates_tie_with_the_query_itself(terms: int, repeat: int) -> None:
    query = " ".join(f"w{i}" for i in range(terms))
    docs = [TextDocument(f"{query} " * repeat), TextDocument(query)]

    hits = Ranker().score(query, docs)

    assert [hit.document for hit in hits] == docs
    assert hits[0].score == hits[1].score == 1.0


def test_proportional_partial_matches_tie() -> None:
    docs = [TextDocument("alpha beta beta alpha gamma gamma"), TextDocument("alpha beta gamma")]

    hits = Ranker().score("alpha zeta", docs)

    assert [hit.document for hit in hits] == docs
    assert hits[0].score == hits[1].score
