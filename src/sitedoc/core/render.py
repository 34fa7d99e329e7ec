"""Markdown conversion, output extensions, and excerpts"""

import logging

from markdown_it import MarkdownIt


logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = {'.md', '.markdown', '.mkdn', '.mkd'}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


class Renderer:
    """Turns a document's body into output and reports the output extension."""

    def __init__(self, preset: str = "gfm-like"):
        self._md = _make_parser(preset)

    def converts(self, doc) -> bool:
        return doc.extname.lower() in MARKDOWN_EXTENSIONS

    def output_ext(self, doc) -> str:
        return ".html" if self.converts(doc) else doc.extname

    def render(self, doc) -> bytes:
        """Convert doc.content, store it on doc.output and return it."""
        logger.debug("Rendering: %s", doc.relative_path)
        body = doc.content or ""
        text = self._md.render(body) if self.converts(doc) else body
        doc.output = text.encode("utf-8")
        return doc.output


def generate_excerpt(doc) -> str:
    """Leading part of the body, up to the first excerpt separator."""
    head, _, _ = (doc.content or "").partition(doc.excerpt_separator)
    return head
