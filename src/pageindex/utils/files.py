"""Utility helpers for walking the page corpus."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Set, Tuple

from pageindex.models import CorpusEntry

LOGGER = logging.getLogger(__name__)


def walk_corpus(root: Path) -> Iterator[CorpusEntry]:
    """Yield every file below ``root`` in pre-order.

    Each file is paired with the name of the directory that listed it, so only
    ``parent/file`` is available for url lookups however deep the tree is.
    Missing, unlistable and special entries are logged and skipped.
    """
    root = Path(root)
    # "." has no name of its own
    root_dir = root.resolve()
    # (path, name of the directory that listed it)
    stack: List[Tuple[Path, str]] = [(root, root_dir.parent.name if root.is_file() else root_dir.name)]
    visited: Set[Path] = set()

    while stack:
        path, dir_name = stack.pop()

        if not path.exists():
            LOGGER.warning("File %s does not exist.", path.name)
            continue

        if path.is_dir():
            resolved = path.resolve()
            if resolved in visited:
                LOGGER.warning("Skipping %s: directory %s already visited.", path, resolved)
                continue
            visited.add(resolved)
            try:
                children = sorted(path.iterdir())
            except OSError as exc:
                LOGGER.warning("Could not list directory %s: %s", path, exc)
                continue
            listing_name = path.name or resolved.name
            # reversed so the first child is popped first
            stack.extend((child, listing_name) for child in reversed(children))
        elif path.is_file():
            yield CorpusEntry(path=path, dir_name=dir_name)
        else:
            LOGGER.warning("%s is neither a directory nor file.", path.name)
