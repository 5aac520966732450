"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_INDEX_URL = "http://localhost:9200"
DEFAULT_INDEX_NAME = "html_index"
DEFAULT_URL_MAP_FILE = "urls.json"


@dataclass(slots=True, frozen=True)
class AppConfig:
    run_index: bool = True
    corpus_dir: Path = Path("data/pages")
    url_map_file: str = DEFAULT_URL_MAP_FILE
    index_url: str = DEFAULT_INDEX_URL
    index_name: str = DEFAULT_INDEX_NAME
    throttle_seconds: float = 0.1
    timeout: float = 10.0
    workers: int = 1

    def resolve_url_map_path(self) -> Path:
        """The url map file lives next to the pages unless given as an absolute path."""
        url_map = Path(self.url_map_file)
        if url_map.is_absolute():
            return url_map
        return Path(self.corpus_dir) / url_map
