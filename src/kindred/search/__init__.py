"""
Search layer: similarity query building.
"""

from kindred.search.assembler import QueryAssembler
from kindred.search.collector import TermFrequencyCollector, is_noise_word
from kindred.search.compatibility import FieldCompatibilityFilter
from kindred.search.more_like_this import MoreLikeThisBuilder, build_similarity_query
from kindred.search.query import BooleanQuery, FieldCustomizer, Query, Term, TermQuery
from kindred.search.scorer import ScoredTermQueue, TermScorer
from kindred.search.similarity import BM25Similarity, ClassicSimilarity

__all__ = [
    "MoreLikeThisBuilder",
    "build_similarity_query",
    "FieldCompatibilityFilter",
    "TermFrequencyCollector",
    "is_noise_word",
    "TermScorer",
    "ScoredTermQueue",
    "QueryAssembler",
    "Query",
    "Term",
    "TermQuery",
    "BooleanQuery",
    "FieldCustomizer",
    "ClassicSimilarity",
    "BM25Similarity",
]
