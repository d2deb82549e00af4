from bookmark_search.ranking.vectorizer import vectorize, vectorize_many
from bookmark_search.ranking.vocabulary import Vocabulary


def test_vectorize_counts_terms_at_vocabulary_positions() -> None:
    vocabulary = Vocabulary(["cat", "dog", "bird"])

    assert vectorize("Dog cat DOG", vocabulary) == [1, 2, 0]


def test_vectorize_ignores_out_of_vocabulary_tokens() -> None:
    vocabulary = Vocabulary(["cat"])

    assert vectorize("zebra lion", vocabulary) == [0]


def test_vectorize_length_matches_vocabulary() -> None:
    assert vectorize("anything", Vocabulary()) == []
    assert len(vectorize("", Vocabulary(["a", "b"]))) == 2


def test_vectorize_does_not_mutate_vocabulary() -> None:
    vocabulary = Vocabulary(["a"])
    vectorize("a b c", vocabulary)

    assert vocabulary.terms == ("a",)


def test_vectorize_many_parallel_matches_serial() -> None:
    vocabulary = Vocabulary(["a", "b", "c"])
    texts = [f"a {'b ' * i} c" for i in range(50)]

    serial = vectorize_many(texts, vocabulary)
    parallel = vectorize_many(texts, vocabulary, max_workers=4)

    assert parallel == serial
    assert parallel[3] == [1, 3, 1]
