"""Filename conventions: dated and dateless names, and path-derived categories"""

import re
import threading
from typing import NamedTuple, Optional


DATE_FILENAME_RE = re.compile(r'^(?:.+/)*?(\d{2,4}-\d{1,2}-\d{1,2})-([^/]*)(\.[^.]+)$')
DATELESS_FILENAME_RE = re.compile(r'^(?:.+/)*(.*)(\.[^.]+)$')


class FilenameParts(NamedTuple):
    date: Optional[str]
    slug: str
    ext: str


class FilenameResolver:
    """Split relative paths into date, slug and extension.

    ``YYYY-MM-DD-slug.ext`` wins over ``slug.ext``; only the last path segment
    is tested for the date. Slugs lose any trailing periods.
    """

    def __init__(self):
        self._dir_patterns: dict[str, re.Pattern] = {}
        self._lock = threading.Lock()

    def resolve(self, relative_path: str) -> FilenameParts:
        date = None
        m = DATE_FILENAME_RE.match(relative_path)
        if m:
            date, slug, ext = m.groups()
        else:
            m = DATELESS_FILENAME_RE.match(relative_path)
            if m:
                slug, ext = m.groups()
            else:
                slug, ext = relative_path.rsplit('/', 1)[-1], ''
        return FilenameParts(date, slug.rstrip('.'), ext)

    def dir_pattern(self, dirname: str) -> re.Pattern:
        """Pattern matching everything up to and including dirname/, compiled once per dirname."""
        pattern = self._dir_patterns.get(dirname)
        if pattern is None:
            with self._lock:
                pattern = self._dir_patterns.setdefault(dirname, re.compile(r'^(?:.*/)?' + re.escape(dirname) + '/'))
        return pattern

    def subdirs(self, relative_path: str, special_dir: str) -> list[str]:
        """Directory names between special_dir and the file, e.g. '_posts/a/b/x.md' -> ['a', 'b']."""
        rest = self.dir_pattern(special_dir).sub('', relative_path, count=1)
        return [d for d in rest.split('/')[:-1] if d]
