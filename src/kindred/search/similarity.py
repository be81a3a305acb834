"""
Inverse document frequency functions.

The builder only consumes ``idf(doc_freq, num_docs)``; any object providing it
can be plugged in.
"""

import math
from typing import Protocol


class Similarity(Protocol):
    def idf(self, doc_freq: int, num_docs: int) -> float:
        ...


class ClassicSimilarity:
    """
    TF-IDF similarity (Lucene classic):

        idf(t) = 1 + ln(N / (df(t) + 1))
    """

    def idf(self, doc_freq: int, num_docs: int) -> float:
        return math.log(num_docs / (doc_freq + 1)) + 1.0


class BM25Similarity:
    """
    BM25 idf, always non-negative while df <= N:

        idf(t) = ln(1 + (N - df(t) + 0.5) / (df(t) + 0.5))
    """

    def idf(self, doc_freq: int, num_docs: int) -> float:
        return math.log(1 + (num_docs - doc_freq + 0.5) / (doc_freq + 0.5))
