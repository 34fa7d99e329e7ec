"""Site-wide collaborators shared by every document, and collections"""

from datetime import datetime
from pathlib import Path

from sitedoc.config import CollectionConfig, Settings
from sitedoc.core.defaults import DefaultsCascade
from sitedoc.core.document import DocumentRecord
from sitedoc.core.filename import FilenameResolver
from sitedoc.core.hooks import Hooks
from sitedoc.core.parse import discover_files
from sitedoc.core.publisher import Publisher
from sitedoc.core.render import Renderer
from sitedoc.core.url import default_template


class Site:
    """Configuration plus the read-only collaborators documents consult.

    Nothing here is mutated while documents are being read, so one Site can be
    shared by reader threads.
    """

    def __init__(self, config: Settings, hooks: Hooks = None, renderer: Renderer = None):
        self.config = config
        self.source = Path(config.source).resolve()
        self.collections_path = self.source / config.collections_dir if config.collections_dir else self.source
        self.time = config.time or datetime.now()
        self.frontmatter_defaults = DefaultsCascade(config.defaults, config.collections_dir)
        self.filenames = FilenameResolver()
        self.publisher = Publisher(self)
        self.hooks = hooks or Hooks()
        self.renderer = renderer or Renderer(config.markdown_preset)
        self.collections = {
            label: Collection(self, label, cfg) for label, cfg in config.collections.items()
        }

    def collection(self, label: str) -> "Collection":
        """Collection by label, created on first use when it is not configured."""
        if label not in self.collections:
            self.collections[label] = Collection(self, label, CollectionConfig())
        return self.collections[label]


class Collection:
    """A named group of documents under ``_<label>`` sharing a URL template."""

    def __init__(self, site: Site, label: str, config: CollectionConfig):
        self.site = site
        self.label = label
        self.config = config
        self.docs: list[DocumentRecord] = []

    @property
    def relative_directory(self) -> str:
        return f"_{self.label}"

    @property
    def directory(self) -> Path:
        return self.site.collections_path / self.relative_directory

    @property
    def url_template(self) -> str:
        return default_template(self.label, self.config.permalink)

    @property
    def write(self) -> bool:
        return self.config.output

    def collect(self) -> list[DocumentRecord]:
        """Create (unread) documents for every content file in the collection directory."""
        if not self.directory.is_dir():
            return []
        self.docs = [DocumentRecord(p, self.site, self) for p in discover_files(self.directory)]
        return self.docs

    def sort(self) -> None:
        self.docs.sort()

    def __repr__(self) -> str:
        return f"<Collection {self.label} docs={len(self.docs)}>"
