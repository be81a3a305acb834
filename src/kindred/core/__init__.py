"""
Core contracts and errors for Kindred.
"""

from kindred.core.contracts import (
    ByFieldValues,
    ByIndexPosition,
    Config,
    FieldSpec,
    ReferenceDocument,
    ScoredTerm,
)
from kindred.core.errors import (
    ConfigurationError,
    KindredError,
    TooManyClauses,
    TransientIOError,
    index_operation,
)

__all__ = [
    "Config",
    "FieldSpec",
    "ByIndexPosition",
    "ByFieldValues",
    "ReferenceDocument",
    "ScoredTerm",
    "KindredError",
    "ConfigurationError",
    "TransientIOError",
    "TooManyClauses",
    "index_operation",
]
