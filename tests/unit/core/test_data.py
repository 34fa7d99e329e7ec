"""Unit tests for core/data.py"""

from datetime import datetime

import pytest

from sitedoc.core.data import FrontMatter, deep_merge, merge_data
from sitedoc.errors import InvalidDateError


# --- FrontMatter ---

def test_front_matter_falls_back_on_miss():
    """A missing key is looked up through the fallback."""
    fm = FrontMatter({"title": "T"}, fallback=lambda key: {"layout": "post"}.get(key))
    assert fm["layout"] == "post"
    assert fm.get("layout") == "post"
    assert fm["title"] == "T"


def test_front_matter_contains_sees_stored_keys_only():
    """`in`, len and iteration ignore fallback values."""
    fm = FrontMatter({"title": "T"}, fallback=lambda key: "default")
    assert "layout" not in fm
    assert list(fm) == ["title"]
    assert len(fm) == 1


def test_front_matter_missing_raises_key_error():
    fm = FrontMatter(fallback=lambda key: None)
    with pytest.raises(KeyError):
        fm["nope"]
    assert fm.get("nope") is None


def test_front_matter_get_or():
    fm = FrontMatter({"a": 1})
    assert fm.get_or("a", 2) == 1
    assert fm.get_or("b", 2) == 2


def test_front_matter_revision_bumps_on_writes():
    """Top-level assignment, deletion and replace() each bump the revision."""
    fm = FrontMatter()
    start = fm.revision
    fm["a"] = 1
    del fm["a"]
    fm.replace({"b": 2})
    assert fm.revision == start + 3
    assert fm.to_dict() == {"b": 2}


# --- deep_merge ---

def test_deep_merge_nested_mappings():
    """Nested mappings merge key by key, incoming wins on conflicts."""
    target = {"author": {"name": "Ann", "email": "a@x"}}
    deep_merge(target, {"author": {"name": "Bob"}})
    assert target == {"author": {"name": "Bob", "email": "a@x"}}


def test_deep_merge_lists_are_replaced():
    """Sequences are overwritten, not concatenated."""
    target = {"tags": ["a", "b"]}
    deep_merge(target, {"tags": ["c"]})
    assert target == {"tags": ["c"]}


def test_deep_merge_none_keeps_existing():
    target = {"title": "Kept"}
    deep_merge(target, {"title": None, "new": None})
    assert target == {"title": "Kept", "new": None}


def test_deep_merge_does_not_alias_incoming():
    incoming = {"author": {"name": "Ann"}}
    target = {}
    deep_merge(target, incoming)
    target["author"]["name"] = "Changed"
    assert incoming["author"]["name"] == "Ann"


# --- merge_data ---

def test_merge_empty_is_noop():
    """Merging an empty mapping leaves data untouched."""
    data = {"title": "T", "tags": ["x"]}
    merge_data(data, {})
    assert data == {"title": "T", "tags": ["x"]}


def test_merge_categories_set_union():
    """['a', 'b'] then 'b c' gives {'a', 'b', 'c'} with no duplicates."""
    data = {}
    merge_data(data, {"categories": ["a", "b"]})
    merge_data(data, {"categories": "b c"})
    assert set(data["categories"]) == {"a", "b", "c"}
    assert len(data["categories"]) == 3


def test_merge_categories_existing_and_split_string():
    data = {"categories": ["x"]}
    merge_data(data, {"categories": "y z"})
    assert set(data["categories"]) == {"x", "y", "z"}


def test_merge_categories_coerced_to_strings():
    data = {"categories": [2023]}
    merge_data(data, {"categories": [1, "news"]})
    assert data["categories"] == ["2023", "1", "news"]


def test_merge_does_not_mutate_incoming():
    incoming = {"categories": "a b"}
    merge_data({}, incoming)
    assert incoming == {"categories": "a b"}


def test_merge_coerces_date_string():
    data = {}
    merge_data(data, {"date": "2023-05-01 10:30:00"})
    assert data["date"] == datetime(2023, 5, 1, 10, 30)


def test_merge_invalid_date_raises_with_context():
    """InvalidDateError carries the bad value, the source label and the path."""
    with pytest.raises(InvalidDateError) as exc:
        merge_data({}, {"date": "not-a-date"}, source="YAML front matter", relative_path="_posts/x.md")
    assert exc.value.value == "not-a-date"
    assert exc.value.source == "YAML front matter"
    assert "_posts/x.md" in str(exc.value)


def test_merge_invalid_date_keeps_other_fields():
    """A date failure does not roll back the rest of the merge."""
    data = {}
    with pytest.raises(InvalidDateError):
        merge_data(data, {"title": "Kept", "date": "garbage"})
    assert data["title"] == "Kept"
    assert data["date"] == "garbage"
