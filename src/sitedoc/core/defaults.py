"""Front matter defaults: scoped values that fill keys documents leave unset"""

import copy
import fnmatch
import threading
from pathlib import PurePosixPath
from typing import Any, Optional

from sitedoc.config import DefaultRule, DefaultScope
from sitedoc.core.data import deep_merge


def _sanitize(path: Optional[str]) -> str:
    return (path or "").strip("/")


class DefaultsCascade:
    """Resolve configured defaults for a (relative path, collection type) pair.

    A rule applies when its scope type (if any) equals the document type and
    its scope path is empty, a glob matching the path, or an ancestor directory
    of the path. Between two matching rules the one with the longer scope path
    wins; at equal length a rule naming a type wins.
    """

    def __init__(self, rules: list[DefaultRule], collections_dir: str = ""):
        self.rules = list(rules)
        self.collections_dir = _sanitize(collections_dir)
        self._cache: dict[tuple[str, Optional[str]], list[DefaultRule]] = {}
        self._lock = threading.Lock()

    def find(self, path: str, type: Optional[str], key: str) -> Any:
        """Value of key from the highest-precedence matching rule, or None."""
        value = None
        old_scope = None
        for rule in self._matching(path, type):
            if key in rule.values and self._has_precedence(old_scope, rule.scope):
                value = rule.values[key]
                old_scope = rule.scope
        return copy.deepcopy(value)

    def all(self, path: str, type: Optional[str]) -> dict[str, Any]:
        """All default values for the document, merged by precedence."""
        defaults: dict[str, Any] = {}
        old_scope = None
        for rule in self._matching(path, type):
            if self._has_precedence(old_scope, rule.scope):
                defaults = deep_merge(defaults, rule.values)
                old_scope = rule.scope
            else:
                defaults = deep_merge(copy.deepcopy(rule.values), defaults)
        return copy.deepcopy(defaults)

    def _matching(self, path: str, type: Optional[str]) -> list[DefaultRule]:
        key = (path, type)
        hit = self._cache.get(key)
        if hit is None:
            hit = [r for r in self.rules if self._applies(r.scope, path, type)]
            with self._lock:
                self._cache[key] = hit
        return hit

    def _applies(self, scope: DefaultScope, path: str, type: Optional[str]) -> bool:
        return self._applies_type(scope, type) and self._applies_path(scope, path)

    @staticmethod
    def _applies_type(scope: DefaultScope, type: Optional[str]) -> bool:
        return scope.type is None or scope.type == type

    def _applies_path(self, scope: DefaultScope, path: str) -> bool:
        scope_path = self._strip_collections_dir(_sanitize(scope.path))
        if not scope_path:
            return True
        path = _sanitize(path)
        if "*" in scope_path:
            return fnmatch.fnmatchcase(path, scope_path) or fnmatch.fnmatchcase(path, f"{scope_path}/*")
        doc = PurePosixPath(path)
        parent = PurePosixPath(scope_path)
        return doc == parent or parent in doc.parents

    def _strip_collections_dir(self, scope_path: str) -> str:
        prefix = self.collections_dir
        if prefix and scope_path.startswith(prefix + "/"):
            return scope_path[len(prefix) + 1:]
        return scope_path

    @staticmethod
    def _has_precedence(old_scope: Optional[DefaultScope], new_scope: DefaultScope) -> bool:
        if old_scope is None:
            return True
        new_path = _sanitize(new_scope.path)
        old_path = _sanitize(old_scope.path)
        if len(new_path) != len(old_path):
            return len(new_path) >= len(old_path)
        if new_scope.type is not None:
            return True
        return old_scope.type is None
