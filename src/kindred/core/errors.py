"""
Error types for Kindred.

Configuration and index read failures propagate to the caller. Clause
ceilings are soft limits: ``TooManyClauses`` is raised by the query tree and
always absorbed by the assembler.
"""

from contextlib import contextmanager
from typing import Iterator, Optional


class KindredError(Exception):
    """Base class for all Kindred errors."""


class ConfigurationError(KindredError, ValueError):
    """Invalid builder configuration or an unanswerable similarity request."""


class TransientIOError(KindredError, OSError):
    """
    A read against the index reader or document projector failed.

    Attributes:
        entity_type: Name of the entity type the query was built for
        operation: Reader operation that failed ("doc_freq", "document", ...)
    """

    def __init__(self, message: str, entity_type: Optional[str] = None, operation: Optional[str] = None):
        super().__init__(message)
        self.entity_type = entity_type
        self.operation = operation


class TooManyClauses(KindredError):
    """A disjunction reached its clause-count ceiling."""

    def __init__(self, max_clause_count: int):
        super().__init__(f"Maximum clause count of {max_clause_count} reached")
        self.max_clause_count = max_clause_count


@contextmanager
def index_operation(entity_type: Optional[str], operation: str) -> Iterator[None]:
    """
    Re-raise reader failures inside the block as TransientIOError.

    Args:
        entity_type: Entity type name for the error context
        operation: Name of the reader operation being performed
    """
    try:
        yield
    except TransientIOError:
        raise
    except OSError as e:
        raise TransientIOError(
            f"Unable to read index ({operation}) for entity {entity_type}: {e}",
            entity_type=entity_type,
            operation=operation,
        ) from e
