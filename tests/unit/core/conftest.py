"""Shared fixtures for core unit tests"""

from datetime import datetime

import pytest

from sitedoc.config import Settings
from sitedoc.core.document import DocumentRecord
from sitedoc.core.site import Site


SITE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(name="make_site")
def make_site_fixture(tmp_path):
    """Factory for a Site rooted at tmp_path with a fixed site time."""
    def _make(**overrides):
        overrides.setdefault("time", SITE_TIME)
        return Site(Settings(source=str(tmp_path), **overrides))
    return _make


@pytest.fixture(name="site")
def site_fixture(make_site):
    return make_site()


@pytest.fixture(name="make_doc")
def make_doc_fixture(tmp_path):
    """Factory writing a content file under tmp_path and wrapping it in a DocumentRecord."""
    def _make(site, relpath, text="", collection="posts"):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return DocumentRecord(path, site, site.collection(collection))
    return _make
