"""Pipeline step functions: collect, read, and write orchestration"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from sitedoc.core.document import DocumentRecord
from sitedoc.core.site import Site
from sitedoc.errors import FatalError, SitedocError


logger = logging.getLogger(__name__)


def run_collect(site: Site) -> list[DocumentRecord]:
    """Create document records for every configured collection."""
    docs = []
    for collection in site.collections.values():
        found = collection.collect()
        logger.info("Collection %s: %d document(s)", collection.label, len(found))
        docs.extend(found)
    return docs


def read_documents(docs: list[DocumentRecord], max_workers: int = 4) -> list[DocumentRecord]:
    """Read documents in parallel; each document's own steps run in order on one worker.

    A document whose read error is re-raised (strict mode or fatal) aborts the run.
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for doc, _ in zip(docs, executor.map(DocumentRecord.read, docs)):
            logger.debug("Read: %s", doc.relative_path)
    return docs


def run_read(site: Site, max_workers: int = None) -> list[DocumentRecord]:
    """Collect, read, and sort every collection. Returns all documents."""
    docs = read_documents(run_collect(site), max_workers or site.config.max_workers)
    for collection in site.collections.values():
        collection.sort()
    return docs


def write_documents(site: Site, docs: list[DocumentRecord], dest: Path) -> list[tuple[DocumentRecord, Path]]:
    """Render and write each writable document. Returns (document, output_path) pairs.

    A document that cannot be resolved is logged and skipped unless strict
    front matter is configured. Filesystem errors always propagate.
    """
    results = []
    for doc in docs:
        try:
            if not doc.writable:
                logger.debug("Skipping: %s", doc.relative_path)
                continue
            site.renderer.render(doc)
            results.append((doc, doc.write(dest)))
        except SitedocError as e:
            logger.error("Error: could not write %s: %s", doc.relative_path, e)
            if site.config.strict_front_matter or isinstance(e, FatalError):
                raise
    return results
