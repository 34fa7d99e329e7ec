"""Slug generation and slug-to-title conversion"""

import re


def slugify(text: str, cased: bool = False) -> str:
    """Convert text to a hyphen-separated URL-safe slug; lowercase unless cased."""
    if text is None:
        return None
    text = str(text)
    if not cased:
        text = text.lower()
    text = re.sub(r'[^\w\s.~-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def titleize_slug(slug: str) -> str:
    """Turn 'hello-world' into 'Hello World'."""
    return " ".join(word.capitalize() for word in slug.split("-") if word)
