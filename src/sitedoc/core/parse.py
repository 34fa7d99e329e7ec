"""File discovery, front matter splitting, and YAML loading"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml

from sitedoc.errors import StructuredDataSyntaxError


FRONTMATTER_RE = re.compile(r'\A(---\s*\n.*?\n?)^((---|\.\.\.)\s*$\n?)', re.DOTALL | re.MULTILINE)
YAML_EXTENSIONS = {'.yaml', '.yml'}
CONTENT_EXTENSIONS = {'.md', '.markdown', '.mkdn', '.mkd', '.html', '.htm', '.txt', '.yaml', '.yml'}


def split_front_matter(text: str) -> tuple[Optional[str], str]:
    """Return (front_matter_block, body); the block is None when the text has none."""
    m = FRONTMATTER_RE.match(text)
    if m:
        return m.group(1), text[m.end():]
    return None, text


def is_structured_data_file(extname: str) -> bool:
    """True for .yaml/.yml documents, which are read whole as data."""
    return extname in YAML_EXTENSIONS


def load(text: str, path: Path = None) -> Optional[dict[str, Any]]:
    """Parse a YAML mapping; None for an empty document."""
    where = f" in {path}" if path else ""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StructuredDataSyntaxError(f"Invalid YAML{where}: {e}") from e
    if data is None:
        return None
    if not isinstance(data, dict):
        raise StructuredDataSyntaxError(f"Invalid YAML{where}: expected a mapping, got {type(data).__name__}")
    return data


def load_file(path: Path, encoding: str = 'utf-8') -> dict[str, Any]:
    """Parse a whole YAML file as a mapping; an empty file yields {}."""
    return load(Path(path).read_text(encoding=encoding), path) or {}


def discover_files(path: Path) -> list[Path]:
    """Return sorted content files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in CONTENT_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in CONTENT_EXTENSIONS)
