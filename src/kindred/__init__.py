"""
Kindred - "more like this" similarity query builder.
"""

from kindred.core import ByFieldValues, ByIndexPosition, Config, FieldSpec
from kindred.core.errors import ConfigurationError, KindredError, TransientIOError
from kindred.index import MemoryIndexReader
from kindred.search import MoreLikeThisBuilder, build_similarity_query

__version__ = "0.1.0"

__all__ = [
    "build_similarity_query",
    "MoreLikeThisBuilder",
    "MemoryIndexReader",
    "Config",
    "FieldSpec",
    "ByIndexPosition",
    "ByFieldValues",
    "KindredError",
    "ConfigurationError",
    "TransientIOError",
]
