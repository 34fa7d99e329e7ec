"""Unit tests for core/defaults.py"""

from sitedoc.config import DefaultRule, DefaultScope
from sitedoc.core.defaults import DefaultsCascade


def _rule(values, path="", type=None):
    return DefaultRule(scope=DefaultScope(path=path, type=type), values=values)


def test_find_unscoped_rule_applies_everywhere():
    cascade = DefaultsCascade([_rule({"layout": "default"})])
    assert cascade.find("_posts/x.md", "posts", "layout") == "default"
    assert cascade.find("about.md", "pages", "layout") == "default"


def test_find_missing_key_is_none():
    cascade = DefaultsCascade([_rule({"layout": "default"})])
    assert cascade.find("_posts/x.md", "posts", "author") is None


def test_type_scope_filters():
    cascade = DefaultsCascade([_rule({"layout": "post"}, type="posts")])
    assert cascade.find("_posts/x.md", "posts", "layout") == "post"
    assert cascade.find("_docs/x.md", "docs", "layout") is None


def test_path_scope_matches_ancestor_directories_only():
    """'_posts/news' covers files under it, not '_posts/newsletter'."""
    cascade = DefaultsCascade([_rule({"author": "Ann"}, path="_posts/news")])
    assert cascade.find("_posts/news/x.md", "posts", "author") == "Ann"
    assert cascade.find("_posts/newsletter/x.md", "posts", "author") is None


def test_glob_scope():
    cascade = DefaultsCascade([_rule({"draft": True}, path="_posts/*/drafts")])
    assert cascade.find("_posts/2023/drafts/x.md", "posts", "draft") is True
    assert cascade.find("_posts/2023/x.md", "posts", "draft") is None


def test_longer_path_has_precedence():
    """The more specific scope wins whatever the rule order."""
    cascade = DefaultsCascade([
        _rule({"layout": "deep"}, path="_posts/news"),
        _rule({"layout": "shallow"}, path="_posts"),
    ])
    assert cascade.find("_posts/news/x.md", "posts", "layout") == "deep"


def test_typed_rule_wins_at_equal_path_length():
    cascade = DefaultsCascade([
        _rule({"layout": "typed"}, path="_posts", type="posts"),
        _rule({"layout": "untyped"}, path="_posts"),
    ])
    assert cascade.find("_posts/x.md", "posts", "layout") == "typed"


def test_all_merges_by_precedence():
    cascade = DefaultsCascade([
        _rule({"layout": "shallow", "author": {"name": "Ann", "site": "a.org"}}, path="_posts"),
        _rule({"layout": "deep", "author": {"name": "Bob"}}, path="_posts/news"),
        _rule({"layout": "other"}, path="_docs"),
    ])
    assert cascade.all("_posts/news/x.md", "posts") == {
        "layout": "deep",
        "author": {"name": "Bob", "site": "a.org"},
    }


def test_all_lower_precedence_fills_gaps():
    """A later but less specific rule only adds keys the specific one lacks."""
    cascade = DefaultsCascade([
        _rule({"layout": "deep"}, path="_posts/news"),
        _rule({"layout": "shallow", "comments": True}, path="_posts"),
    ])
    assert cascade.all("_posts/news/x.md", "posts") == {"layout": "deep", "comments": True}


def test_returned_values_are_copies():
    cascade = DefaultsCascade([_rule({"tags": ["a"]})])
    cascade.find("x.md", "posts", "tags").append("b")
    cascade.all("x.md", "posts")["tags"].append("c")
    assert cascade.find("x.md", "posts", "tags") == ["a"]


def test_collections_dir_prefix_is_stripped():
    cascade = DefaultsCascade([_rule({"layout": "post"}, path="content/_posts")], collections_dir="content")
    assert cascade.find("_posts/x.md", "posts", "layout") == "post"
