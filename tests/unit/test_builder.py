"""Tests for the builder's request-wide reads."""

from fakes import FakeReader
from kindred.search.more_like_this import MoreLikeThisBuilder
from kindred.search.similarity import ClassicSimilarity


class RecordingSimilarity(ClassicSimilarity):
    """Classic idf that records the (doc_freq, num_docs) pairs it is asked for."""

    def __init__(self):
        self.requests = []

    def idf(self, doc_freq, num_docs):
        self.requests.append((doc_freq, num_docs))
        return super().idf(doc_freq, num_docs)


def test_num_docs_read_once_for_all_fields():
    """The corpus size is read once and shared by every field's idf."""
    reader = FakeReader(
        num_docs=40,
        doc_freqs={("title", "cat"): 5, ("body", "cat"): 5, ("body", "fox"): 10, ("tags", "pet"): 2},
        vectors={
            (0, "title"): {"cat": 2},
            (0, "body"): {"cat": 1, "fox": 3},
            (0, "tags"): {"pet": 1},
        },
    )
    similarity = RecordingSimilarity()

    query = (
        MoreLikeThisBuilder(reader, similarity=similarity)
        .fields("title", "body", "tags")
        .document_number(0)
        .build()
    )

    assert reader.calls.count(("num_docs",)) == 1
    assert sorted(query.terms()) == [("body", "cat"), ("body", "fox"), ("tags", "pet"), ("title", "cat")]
    assert len(similarity.requests) == 4
    assert {num_docs for _, num_docs in similarity.requests} == {40}
