"""Front matter storage with defaults fallback, and the data merge rules"""

import copy
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Iterator, Optional

from sitedoc.core.utils.dates import parse_date
from sitedoc.errors import InvalidDateError


_MISSING = object()


class FrontMatter(MutableMapping):
    """Ordered key/value metadata for a document.

    Reading a key that is not stored asks ``fallback(key)`` (the defaults
    cascade) before giving up, so ``fm[key]`` and ``fm.get(key)`` see
    defaults. ``key in fm``, ``len`` and iteration only see stored keys.
    """

    def __init__(self, initial: Mapping = None, fallback: Optional[Callable[[str], Any]] = None):
        self._data: dict[str, Any] = dict(initial or {})
        self._fallback = fallback
        self.revision = 0

    def __getitem__(self, key: str) -> Any:
        try:
            return self._data[key]
        except KeyError:
            pass
        if self._fallback is not None:
            value = self._fallback(key)
            if value is not None:
                return value
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.revision += 1

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        self.revision += 1

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrontMatter({self._data!r})"

    def get_or(self, key: str, default: Any) -> Any:
        """Stored or defaulted value for key, else default."""
        value = self.get(key, _MISSING)
        return default if value is _MISSING else value

    def replace(self, data: Mapping) -> None:
        """Swap in a whole new mapping (data files), keeping the fallback."""
        self._data = dict(data)
        self.revision += 1

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


def _mergeable(value: Any) -> bool:
    return isinstance(value, Mapping)


def deep_merge(target: MutableMapping, overwrite: Mapping) -> MutableMapping:
    """Merge overwrite into target in place and return target.

    Mappings merge recursively; everything else (lists included) is replaced by
    the incoming value. An incoming None never clobbers an existing key.
    """
    for key, new_val in overwrite.items():
        if key in target:
            old_val = target[key]
            if new_val is None:
                continue
            if _mergeable(old_val) and _mergeable(new_val):
                merged = deep_merge(dict(old_val), new_val)
                target[key] = merged
                continue
        target[key] = copy.deepcopy(new_val) if _mergeable(new_val) else new_val
    return target


def _merged_categories(existing: Any, incoming: Any) -> list[str]:
    """Ordered union of two category values, as strings."""
    if isinstance(incoming, str):
        incoming = incoming.split()
    elif not isinstance(incoming, (list, tuple, set)):
        incoming = [incoming]
    if existing is None:
        existing = []
    elif isinstance(existing, str):
        existing = existing.split()
    elif not isinstance(existing, (list, tuple, set)):
        existing = [existing]
    return list(dict.fromkeys(str(c) for c in [*existing, *incoming] if c is not None))


def merge_data(
    into: MutableMapping,
    incoming: Mapping,
    source: str = "YAML front matter",
    relative_path: str = None,
    ) -> MutableMapping:
    """Merge incoming into a document's data and re-validate its date.

    Categories are unioned rather than replaced. Not transactional: when the
    date is invalid the other keys stay merged and InvalidDateError is raised.
    """
    incoming = dict(incoming)
    if incoming.get("categories") is not None:
        incoming["categories"] = _merged_categories(into.get("categories"), incoming["categories"])

    deep_merge(into, incoming)

    if "date" in into:
        raw = into["date"]
        try:
            into["date"] = parse_date(raw)
        except ValueError as e:
            raise InvalidDateError(raw, source, relative_path) from e
    return into
