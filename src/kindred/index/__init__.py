"""
Index layer: reader interfaces, in-memory reader and document projection.
"""

from kindred.index.memory import MemoryIndexReader
from kindred.index.projection import AttributeProjector
from kindred.index.reader import DocumentProjector, IndexReader

__all__ = [
    "IndexReader",
    "DocumentProjector",
    "MemoryIndexReader",
    "AttributeProjector",
]
