"""
Collaborator interfaces consumed by the similarity query builder.

Implementations signal read failures with OSError; the builder re-raises them
as TransientIOError with entity/operation context.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol


class IndexReader(Protocol):
    """Read-only view of an index snapshot."""

    def num_docs(self) -> int:
        """Total number of documents in the corpus."""
        ...

    def term_vector(self, doc_id: int, field: str) -> Optional[Mapping[str, int]]:
        """Term -> total term frequency for one document/field, or None if not recorded."""
        ...

    def document(self, doc_id: int) -> Mapping[str, List[Any]]:
        """Stored field values of one document."""
        ...

    def doc_freq(self, field: str, term: str) -> int:
        """Number of documents containing ``term`` in ``field``."""
        ...


class DocumentProjector(Protocol):
    """Extracts indexable field values from an application entity."""

    def project(self, entity: Any, field_names: Iterable[str]) -> Dict[str, List[Any]]:
        """Return field name -> raw values, for the requested fields only."""
        ...
