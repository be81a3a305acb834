"""Tests for field compatibility."""

from kindred.search.compatibility import FieldCompatibilityFilter


def test_is_compatible():
    """Only fields from the supplied list are eligible."""
    compatibility = FieldCompatibilityFilter(["title", "body"])
    assert compatibility.is_compatible("title")
    assert compatibility.is_compatible("body")
    assert not compatibility.is_compatible("year")


def test_empty_list_rejects_everything():
    assert not FieldCompatibilityFilter([]).is_compatible("title")
