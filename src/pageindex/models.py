"""Core pageindex data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(slots=True, frozen=True)
class CorpusEntry:
    """A file reached by the corpus walk and the directory name it resolves under."""

    path: Path
    dir_name: str

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def key(self) -> str:
        return f"{self.dir_name}/{self.file_name}"


@dataclass(slots=True)
class ExtractedFields:
    """Text regions captured from one HTML page."""

    path: Path
    headings: str
    title: str
    bold: str
    italic: str
    body: str
    links: str

    def spans(self) -> List[str]:
        """Return the six regions in publishing order."""
        return [self.headings, self.title, self.bold, self.italic, self.body, self.links]


class SkipReason(str, Enum):
    MISSING_TITLE = "missing_title"
    MISSING_BODY = "missing_body"
    READ_ERROR = "read_error"


@dataclass(slots=True)
class ExtractionResult:
    """Either extracted fields or the reason the page was skipped."""

    path: Path
    fields: Optional[ExtractedFields] = None
    skip_reason: Optional[SkipReason] = None

    @property
    def ok(self) -> bool:
        return self.fields is not None

    @classmethod
    def success(cls, fields: ExtractedFields) -> "ExtractionResult":
        return cls(path=fields.path, fields=fields)

    @classmethod
    def skipped(cls, path: Path, reason: SkipReason) -> "ExtractionResult":
        return cls(path=path, skip_reason=reason)


@dataclass(slots=True)
class IndexDocument:
    """Record published to the search backend for one page."""

    url: Optional[str]
    title: List[str] = field(default_factory=list)
    tokens: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {"url": self.url, "title": list(self.title), "tokens": list(self.tokens)}
