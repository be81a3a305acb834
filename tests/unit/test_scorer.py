"""Tests for term scoring and the ranked term queue."""

import math

import pytest

from fakes import FakeReader
from kindred.core.contracts import Config, ScoredTerm
from kindred.core.errors import TransientIOError
from kindred.search.scorer import ScoredTermQueue, TermScorer
from kindred.search.similarity import BM25Similarity, ClassicSimilarity


def scored(term, score):
    return ScoredTerm(term=term, field="f", score=score, idf=1.0, doc_freq=1, term_freq=1)


def make_scorer(doc_freqs, config=None, num_docs=100, reader=None):
    return TermScorer(
        reader=reader or FakeReader(num_docs=num_docs, doc_freqs=doc_freqs),
        similarity=ClassicSimilarity(),
        config=config or Config(),
        num_docs=num_docs,
        entity_type="Book",
    )


def test_rarer_term_ranks_first():
    """tf=3/df=5 outranks tf=1/df=50 in a 100 document corpus."""
    scorer = make_scorer({("title", "cat"): 5, ("title", "dog"): 50})

    queue = scorer.score_field("title", {"cat": 3, "dog": 1})

    ranked = list(queue.drain())
    assert [t.term for t in ranked] == ["cat", "dog"]
    cat = ranked[0]
    assert cat.field == "title"
    assert cat.doc_freq == 5
    assert cat.term_freq == 3
    assert cat.idf == pytest.approx(1 + math.log(100 / 6))
    assert cat.score == pytest.approx(3 * cat.idf)


def test_incompatible_field_has_no_queue():
    assert make_scorer({}).score_field("title", None) is None


def test_frequency_filters():
    """Terms below min tf, outside [min df, max df] or with df 0 are skipped."""
    doc_freqs = {
        ("body", "ok"): 10,
        ("body", "rare_in_doc"): 10,
        ("body", "too_rare"): 1,
        ("body", "too_common"): 90,
        # ("body", "stale") missing: df 0
    }
    config = Config(min_term_freq=2, min_doc_freq=2, max_doc_freq=50)
    queue = make_scorer(doc_freqs, config).score_field(
        "body", {"ok": 2, "rare_in_doc": 1, "too_rare": 5, "too_common": 5, "stale": 4}
    )
    assert [t.term for t in queue.drain()] == ["ok"]


def test_zero_doc_freq_skipped_even_without_minimum():
    """A term with df 0 is silently skipped when min_doc_freq is disabled."""
    queue = make_scorer({("body", "fox"): 3}, Config(min_doc_freq=0)).score_field(
        "body", {"fox": 1, "ghost": 2}
    )
    assert [t.term for t in queue.drain()] == ["fox"]


def test_ranked_list_is_non_increasing():
    """Draining yields scores in descending order."""
    doc_freqs = {("body", t): df for t, df in [("a", 1), ("b", 20), ("c", 3), ("d", 60), ("e", 8)]}
    queue = make_scorer(doc_freqs).score_field("body", {"a": 1, "b": 4, "c": 2, "d": 7, "e": 1})
    scores = [t.score for t in queue.drain()]
    assert len(scores) == 5
    assert scores == sorted(scores, reverse=True)


def test_doc_freq_failure_is_wrapped():
    reader = FakeReader(failing="doc_freq")
    with pytest.raises(TransientIOError) as excinfo:
        make_scorer({}, reader=reader).score_field("body", {"fox": 1})
    assert excinfo.value.operation == "doc_freq"


def test_queue_pops_highest_first_with_stable_ties():
    queue = ScoredTermQueue(10)
    for term, score in [("b", 1.0), ("a", 3.0), ("c", 1.0), ("d", 2.0)]:
        queue.insert_with_overflow(scored(term, score))

    assert queue.top().term == "a"
    assert len(queue) == 4
    assert [t.term for t in queue.drain()] == ["a", "d", "b", "c"]
    assert queue.top() is None


def test_queue_overflow_evicts_lowest():
    """A full queue keeps the highest-scoring entries."""
    queue = ScoredTermQueue(2)
    assert queue.insert_with_overflow(scored("low", 1.0)) is None
    assert queue.insert_with_overflow(scored("high", 5.0)) is None
    assert queue.insert_with_overflow(scored("mid", 3.0)).term == "low"
    assert queue.insert_with_overflow(scored("tiny", 0.5)).term == "tiny"
    assert [t.term for t in queue.drain()] == ["high", "mid"]


def test_similarity_idf_values():
    """Both idf functions decrease with document frequency and stay non-negative."""
    for similarity in (ClassicSimilarity(), BM25Similarity()):
        idfs = [similarity.idf(df, 100) for df in (1, 10, 50, 100)]
        assert idfs == sorted(idfs, reverse=True)
        assert all(idf >= 0 for idf in idfs)
    assert BM25Similarity().idf(5, 100) == pytest.approx(math.log(1 + 95.5 / 5.5))
