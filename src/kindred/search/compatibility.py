"""
Field compatibility for term extraction.
"""

from typing import Iterable


class FieldCompatibilityFilter:
    """
    Decides whether terms can be extracted from a field.

    The list of eligible fields comes from schema/indexing configuration; an
    ineligible field is a normal outcome, not an error.
    """

    def __init__(self, compatible_field_names: Iterable[str]):
        self.compatible_field_names = frozenset(compatible_field_names)

    def is_compatible(self, field_name: str) -> bool:
        return field_name in self.compatible_field_names
