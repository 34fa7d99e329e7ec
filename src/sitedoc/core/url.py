"""URL templates, placeholder substitution, and output destination paths"""

import os
import posixpath
import re
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import quote, unquote

from sitedoc.core.utils.slug import slugify
from sitedoc.errors import UrlTemplateError


PLACEHOLDER_RE = re.compile(r':([a-z_]+)')
SAFE_PATH_RE = re.compile(r'^[a-zA-Z0-9./-]+$')
POSTS_TEMPLATE = "/:categories/:year/:month/:day/:title:output_ext"
COLLECTION_TEMPLATE = "/:collection/:path:output_ext"


def escape_path(path: str) -> str:
    """Percent-encode a URL path, leaving already-safe paths untouched."""
    if not path or SAFE_PATH_RE.match(path):
        return path
    return quote(path, safe="/!$&'()*+,;=:@-._~")


def unescape_path(path: str) -> str:
    if "%" not in path:
        return path
    return unquote(path)


def _squeeze_slashes(text: str) -> str:
    return re.sub(r'/{2,}', '/', text)


class URL:
    """A document URL built from a permalink or a ``:placeholder`` template.

    An explicit permalink wins over the template. Each ``:key`` token is
    replaced with the escaped placeholder value; ``:key_`` also accepts
    ``key``. Unknown tokens raise UrlTemplateError.
    """

    def __init__(self, template: str = None, placeholders: Mapping[str, Any] = None, permalink: str = None):
        if template is None and permalink is None:
            raise ValueError("One of template or permalink must be supplied.")
        self.template = template
        self.placeholders = placeholders or {}
        self.permalink = permalink

    def __str__(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        source = self.permalink if self.permalink else self.template
        return self.sanitize(self.generate(str(source)))

    def generate(self, template: str) -> str:
        def _replace(match: re.Match) -> str:
            pool = self._possible_keys(match.group(1))
            winner = next((k for k in pool if k in self.placeholders), None)
            if winner is None:
                raise UrlTemplateError(
                    f"The URL template doesn't have {' or '.join(pool)} keys. "
                    "Check your permalink template!"
                )
            value = self.placeholders[winner]
            replacement = escape_path("" if value is None else str(value))
            # ":title_" matched as "title" keeps its trailing underscore
            return replacement + match.group(1)[len(winner):]

        return _squeeze_slashes(PLACEHOLDER_RE.sub(_replace, template))

    @staticmethod
    def _possible_keys(key: str) -> list[str]:
        return [key, key[:-1]] if key.endswith("_") else [key]

    @staticmethod
    def sanitize(url: str) -> str:
        url = f"/{url}".replace("..", "/").replace("./", "")
        return _squeeze_slashes(url)


def in_dest_dir(base: Path, *paths: str) -> Path:
    """Join paths under base, refusing to climb out of it."""
    base = Path(os.path.abspath(base))
    joined = base
    for p in paths:
        parts = [seg for seg in str(p).split("/") if seg and seg not in (".", "..")]
        joined = joined.joinpath(*parts)
    return joined


def destination(base_dir: Path, url: str, output_ext: str) -> Path:
    """Output file path for url under base_dir.

    A URL ending in '/' becomes '<url>/index.html'; otherwise output_ext is
    appended unless the URL already ends with it.
    """
    path = in_dest_dir(base_dir, unescape_path(url))
    if url.endswith("/"):
        return path / "index.html"
    text = str(path)
    if output_ext and not text.endswith(output_ext):
        text += output_ext
    return Path(text)


def default_template(label: str, permalink: Optional[str] = None) -> str:
    """URL template for a collection: its configured permalink or the built-in style."""
    if permalink:
        return permalink
    return POSTS_TEMPLATE if label == "posts" else COLLECTION_TEMPLATE


def url_placeholders(doc) -> dict[str, Any]:
    """Placeholder values for a document's URL template."""
    date = doc.date
    slug_source = doc.data.get("slug") or doc.basename_without_ext
    categories = [slugify(c) for c in doc.data.get("categories") or []]
    return {
        "collection":  doc.collection.label,
        "path":        doc.cleaned_relative_path,
        "name":        slugify(doc.basename_without_ext),
        "title":       slugify(slug_source, cased=True),
        "slug":        slugify(slug_source),
        "categories":  "/".join(c for c in categories if c),
        "year":        date.strftime("%Y"),
        "month":       date.strftime("%m"),
        "day":         date.strftime("%d"),
        "hour":        date.strftime("%H"),
        "minute":      date.strftime("%M"),
        "second":      date.strftime("%S"),
        "i_day":       str(date.day),
        "i_month":     str(date.month),
        "short_month": date.strftime("%b"),
        "long_month":  date.strftime("%B"),
        "short_year":  date.strftime("%y"),
        "y_day":       date.strftime("%j"),
        "output_ext":  doc.output_ext,
        "locale":      doc.data.get("locale"),
    }


def document_id(url: str, slug: str) -> str:
    """Identifier for a document: its URL directory joined with its slug."""
    return posixpath.join(posixpath.dirname(url.rstrip("/") or "/"), str(slug))
