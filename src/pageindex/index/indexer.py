"""Page indexing pipeline."""

from __future__ import annotations

import logging
import threading
from itertools import islice
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from pageindex.config import AppConfig
from pageindex.index.builder import build_document
from pageindex.index.publisher import IndexPublisher
from pageindex.index.throttle import limiter_for
from pageindex.ingestion.html_loader import extract_fields
from pageindex.ingestion.url_map import load_url_map
from pageindex.models import CorpusEntry, SkipReason
from pageindex.utils.files import walk_corpus

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    published: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "published":
            self.published += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


class Indexer:
    """Coordinates page extraction and publishing."""

    def __init__(
        self,
        publisher: IndexPublisher,
        url_map: Mapping[str, str],
        *,
        workers: int = 1,
    ) -> None:
        self.publisher = publisher
        self.url_map = url_map
        self.workers = max(workers, 1)

    def index(self, root: Path) -> IndexStats:
        """Walk ``root`` and publish a document for every page that extracts."""
        stats = IndexStats()
        entries = walk_corpus(Path(root))

        if self.workers == 1:
            for entry in entries:
                stats.increment(self._safe_index_single(entry), entry.path)
            return stats

        lock = threading.Lock()

        def task(entry: CorpusEntry) -> None:
            status = self._safe_index_single(entry)
            with lock:
                stats.increment(status, entry.path)

        # at most batch_size pages are pulled from the walk at a time
        batch_size = self.workers * 4
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            while True:
                batch = list(islice(entries, batch_size))
                if not batch:
                    break
                list(pool.map(task, batch))
        return stats

    def _safe_index_single(self, entry: CorpusEntry) -> str:
        try:
            LOGGER.debug("Processing: %s", entry.path)
            return self._index_single(entry)
        except Exception as exc:
            LOGGER.error("Failed to process %s: %s", entry.path, exc)
            return "failed"

    def _index_single(self, entry: CorpusEntry) -> str:
        """Index a single page."""
        result = extract_fields(entry.path)
        if not result.ok:
            return "failed" if result.skip_reason is SkipReason.READ_ERROR else "skipped"

        document = build_document(result.fields, self.url_map, entry.dir_name, entry.file_name)
        if document.url is None:
            LOGGER.debug("No url mapped for %s", entry.key)

        if self.publisher.publish(document, entry.dir_name, entry.file_name):
            return "published"
        return "failed"


def run_indexing(
    config: AppConfig,
    *,
    publisher_factory: Callable[[AppConfig], IndexPublisher] | None = None,
) -> IndexStats | None:
    """Run one full indexing pass.

    Returns ``None`` when indexing is switched off. Raises ``ConfigError`` when
    the url map cannot be loaded; nothing is published in that case.
    """
    if not config.run_index:
        LOGGER.warning("Skipping indexing...")
        return None

    url_map = load_url_map(config.resolve_url_map_path())

    factory = publisher_factory or _default_publisher
    publisher = factory(config)
    try:
        indexer = Indexer(publisher, url_map, workers=config.workers)
        stats = indexer.index(config.corpus_dir)
    finally:
        publisher.close()

    LOGGER.info(
        "Indexed %s: %d published, %d skipped, %d failed",
        config.corpus_dir,
        stats.published,
        stats.skipped,
        stats.failed,
    )
    return stats


def _default_publisher(config: AppConfig) -> IndexPublisher:
    return IndexPublisher(
        config.index_url,
        index_name=config.index_name,
        limiter=limiter_for(config.throttle_seconds, config.workers),
        timeout=config.timeout,
    )
