"""Document records: read a content file, resolve its metadata, URL and output path"""

import logging
import threading
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from sitedoc.core import parse
from sitedoc.core.data import FrontMatter, merge_data
from sitedoc.core.render import generate_excerpt
from sitedoc.core.url import URL, destination, document_id, url_placeholders
from sitedoc.core.utils.dates import epoch_seconds, parse_date, timestamp_or_none
from sitedoc.core.utils.memo import memoized
from sitedoc.core.utils.slug import titleize_slug
from sitedoc.errors import FatalError, ReadError, SitedocError, StructuredDataSyntaxError


logger = logging.getLogger(__name__)


def _flatten(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [item for v in value for item in _flatten(v)]
    return [value]


def _pluralized_list(data: Mapping, singular: str, plural: str) -> list:
    """Values under singular (taken as-is) or else plural (strings split on whitespace)."""
    value = data.get(singular)
    if value is None:
        value = data.get(plural)
        if isinstance(value, str):
            value = value.split()
        elif not isinstance(value, (list, tuple, set)):
            value = None
    return _flatten(value)


def _cmp(a: Any, b: Any) -> Optional[int]:
    """-1/0/1, or None when either side is missing or the two don't compare."""
    if a is None or b is None:
        return None
    try:
        return (a > b) - (a < b)
    except TypeError:
        return None


class DocumentRecord:
    """One source file of a collection and everything resolved from it.

    Lifecycle: created when a collection enumerates its files, ``read()``
    fills ``data`` and ``content``, then the record is queried (``url``,
    ``id``, ``destination``, ordering) and finally written. Derived fields are
    computed once; those that depend on ``data`` are recomputed after a
    top-level key of ``data`` is reassigned.
    """

    def __init__(self, path, site, collection):
        self.site = site
        self.path = Path(path).resolve()
        self.extname = self.path.suffix
        self.collection = collection
        self.type = collection.label
        self.content = ""
        self.output = None
        self._memo: dict[str, tuple] = {}
        self._memo_lock = threading.RLock()
        self.data = FrontMatter(fallback=self._default_for)
        self._trigger_hooks("post_init")

    def _default_for(self, key: str) -> Any:
        return self.site.frontmatter_defaults.find(self.relative_path, self.type, key)

    # --- paths ---

    @memoized
    def relative_path(self) -> str:
        """POSIX path from the collections root to this file."""
        try:
            return self.path.relative_to(self.site.collections_path).as_posix()
        except ValueError:
            return self.path.as_posix()

    @property
    def basename(self) -> str:
        return self.path.name

    @property
    def basename_without_ext(self) -> str:
        return self.path.stem

    @memoized
    def cleaned_relative_path(self) -> str:
        """Relative path without extension, collection directory or trailing periods.

        '_methods/site/generate...md' -> '/site/generate'
        """
        rel = self.relative_path
        if self.extname:
            rel = rel[:-len(self.extname)]
        rel = rel.replace(self.collection.relative_directory, "", 1)
        return rel.rstrip(".")

    @property
    def yaml_file(self) -> bool:
        return parse.is_structured_data_file(self.extname)

    # --- derived fields ---

    @property
    def date(self) -> datetime:
        """Document date; site time is stored when nothing else supplied one.

        A stored value that is not a date (left by a lenient read) is kept in
        data, logged, and site time is used in its place.
        """
        value = self.data.get("date")
        if value is None:
            value = self.data["date"] = self.site.time
        try:
            return parse_date(value)
        except ValueError:
            logger.warning("Invalid date %r in %s, using site time", value, self.relative_path)
            return self.site.time

    @property
    def permalink(self) -> Optional[str]:
        return self.data.get("permalink")

    @property
    def url_template(self) -> str:
        return self.collection.url_template

    @memoized(tracks_data=True)
    def url_placeholders(self) -> dict[str, Any]:
        return url_placeholders(self)

    @memoized(tracks_data=True)
    def url(self) -> str:
        return URL(
            template=self.url_template,
            placeholders=self.url_placeholders,
            permalink=self.permalink,
        ).to_string()

    @memoized
    def output_ext(self) -> str:
        return self.site.renderer.output_ext(self)

    @memoized(tracks_data=True)
    def id(self) -> str:
        return document_id(self.url, self.data.get("slug") or self.basename_without_ext)

    def destination(self, base_directory) -> Path:
        """Full path of the output file under base_directory; cached per directory."""
        key = f"destination:{base_directory}"
        hit = self._memo.get(key)
        if hit is not None and hit[0] == self.data.revision:
            return hit[1]
        with self._memo_lock:
            path = destination(Path(base_directory), self.url, self.output_ext)
            self._memo[key] = (self.data.revision, path)
            return path

    @memoized(tracks_data=True)
    def excerpt_separator(self) -> str:
        return str(self.data.get("excerpt_separator") or self.site.config.excerpt_separator or "")

    @property
    def generates_excerpt(self) -> bool:
        return bool(self.excerpt_separator)

    @property
    def writable(self) -> bool:
        """True if the collection writes output and the publish policy allows this document."""
        return bool(self.collection is not None and self.collection.write and self.site.publisher.publish(self))

    # --- reading ---

    def merge_data(self, other: Mapping, source: str = "YAML front matter") -> FrontMatter:
        return merge_data(self.data, other, source, self.relative_path)

    def read(self) -> None:
        """Load data and content from disk.

        Errors are logged; they propagate only when strict front matter is
        configured or they are fatal. Otherwise the document keeps whatever it
        had merged so far.
        """
        logger.debug("Reading: %s", self.relative_path)
        try:
            if self.yaml_file:
                self.data.replace(parse.load_file(self.path, self.site.config.encoding))
                self.content = ""
            else:
                self._merge_defaults()
                self._read_content()
                self.post_read()
        except Exception as e:
            if self._handle_read_error(e):
                if isinstance(e, SitedocError):
                    raise
                raise ReadError(f"Could not read file {self.path}: {e}") from e

    def _merge_defaults(self) -> None:
        defaults = self.site.frontmatter_defaults.all(self.relative_path, self.type)
        if defaults:
            self.merge_data(defaults, source="front matter defaults")

    def _read_content(self) -> None:
        text = self.path.read_text(encoding=self.site.config.encoding)
        block, self.content = parse.split_front_matter(text)
        if block is not None:
            front = parse.load(block, self.path)
            if front:
                self.merge_data(front, source="YAML front matter")

    def _handle_read_error(self, error: Exception) -> bool:
        """Log a read error; True when it must be re-raised."""
        if isinstance(error, StructuredDataSyntaxError):
            logger.error("Error: YAML Exception reading %s: %s", self.path, error)
        else:
            logger.error("Error: could not read file %s: %s", self.path, error)
        return self.site.config.strict_front_matter or isinstance(error, FatalError)

    def post_read(self) -> None:
        self._populate_title()
        self._populate_categories()
        self._populate_tags()
        self.determine_locale()
        self._generate_excerpt()

    def _populate_title(self) -> None:
        date, slug, ext = self.site.filenames.resolve(self.relative_path)
        if date:
            self._modify_date(date)

        if self.data.get("title") is None:
            self.data["title"] = titleize_slug(slug)
        # front matter wins over the filename for these
        if self.data.get("slug") is None:
            self.data["slug"] = slug
        if self.data.get("ext") is None:
            self.data["ext"] = ext

    def _modify_date(self, date: str) -> None:
        # The filename date replaces an unset date or one equal to site time,
        # never a different explicit date.
        current = self.data.get("date")
        if current is None or epoch_seconds(parse_date(current)) == epoch_seconds(self.site.time):
            self.merge_data({"date": date}, source="filename")

    def _populate_categories(self) -> None:
        categories = _pluralized_list(self.data, "category", "categories")
        if self.collection.config.categories_from_path:
            categories = self.site.filenames.subdirs(
                self.relative_path, self.collection.relative_directory
            ) + categories
        self.data["categories"] = list(dict.fromkeys(str(c) for c in categories))

    def _populate_tags(self) -> None:
        self.data["tags"] = _pluralized_list(self.data, "tag", "tags")

    def determine_locale(self) -> None:
        """Set data['locale'] from language/lang or a 'slug.locale.ext' filename.

        Candidates outside the configured locales are ignored.
        """
        if self.data.get("locale") is not None:
            return
        candidate = self.data.get("language")
        if candidate is None:
            candidate = self.data.get("lang")
        if candidate is None:
            segments = self.basename_without_ext.split(".")[1:]
            candidate = segments[-1] if segments else None
        if candidate is not None and candidate in self.site.config.available_locales:
            self.data["locale"] = candidate

    def _generate_excerpt(self) -> None:
        if self.generates_excerpt and not self.data.get("excerpt"):
            self.data["excerpt"] = generate_excerpt(self)

    # --- writing ---

    def write(self, dest) -> Path:
        """Write output bytes to this document's destination under dest."""
        path = self.destination(dest)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Writing: %s", path)
        output = self.output
        if isinstance(output, str):
            output = output.encode("utf-8")
        with open(path, "wb") as f:
            f.write(output or b"")
        self._trigger_hooks("post_write")
        return path

    def _trigger_hooks(self, event: str) -> None:
        if self.collection is not None:
            self.site.hooks.trigger(self.collection.label, event, self)
        self.site.hooks.trigger("documents", event, self)

    # --- ordering and navigation ---

    def compare(self, other) -> Optional[int]:
        """Order by date, then path. None when other has no data mapping."""
        other_data = getattr(other, "data", None)
        if not isinstance(other_data, Mapping):
            return None
        cmp = _cmp(timestamp_or_none(self.data.get("date")), timestamp_or_none(other_data.get("date")))
        if not cmp:
            cmp = _cmp(str(self.path), str(getattr(other, "path", "")))
        return cmp

    def __lt__(self, other):
        cmp = self.compare(other)
        return NotImplemented if cmp is None else cmp < 0

    def __le__(self, other):
        cmp = self.compare(other)
        return NotImplemented if cmp is None else cmp <= 0

    def __gt__(self, other):
        cmp = self.compare(other)
        return NotImplemented if cmp is None else cmp > 0

    def __ge__(self, other):
        cmp = self.compare(other)
        return NotImplemented if cmp is None else cmp >= 0

    def __eq__(self, other):
        if not isinstance(other, DocumentRecord):
            return NotImplemented
        return self.path == other.path

    def __hash__(self):
        return hash(self.path)

    def _position(self) -> Optional[int]:
        return next((i for i, d in enumerate(self.collection.docs) if d is self), None)

    @property
    def next_doc(self) -> Optional["DocumentRecord"]:
        pos = self._position()
        docs = self.collection.docs
        if pos is not None and pos < len(docs) - 1:
            return docs[pos + 1]
        return None

    @property
    def previous_doc(self) -> Optional["DocumentRecord"]:
        pos = self._position()
        if pos:
            return self.collection.docs[pos - 1]
        return None

    # --- presentation ---

    def to_dict(self, base_directory=None) -> dict[str, Any]:
        """Resolved record as plain data (for JSON output)."""
        record = {
            "relative_path": self.relative_path,
            "collection": self.type,
            "id": self.id,
            "url": self.url,
            "data": self.data.to_dict(),
        }
        if base_directory is not None:
            record["destination"] = str(self.destination(base_directory))
        return record

    def __repr__(self) -> str:
        return f"<DocumentRecord {self.relative_path} collection={self.type}>"
