"""Shared ingestion data types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class InputRecord:
    """One crawl record as read from a JSONL line.

    Only `url` is required; everything else may be absent in the source data.
    """

    url: str
    title: Optional[str] = None
    content_text: Optional[str] = None
    meta_content: Optional[str] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class IndexableDocument:
    """Fields written to the search index for one accepted record."""

    url: str
    title: str
    content: str
    preview: str
    language: str
    meta_tags: str
    nsfw: bool

    def as_fields(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "preview": self.preview,
            "language": self.language,
            "meta_tags": self.meta_tags,
            "nsfw": self.nsfw,
        }


@dataclass(frozen=True)
class LineOutcome:
    """Result of reading one physical line of an input file.

    status is "ok" (record set) or "skipped" (reason + error set).
    """

    line_no: int
    status: str
    record: Optional[InputRecord] = None
    reason: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"
