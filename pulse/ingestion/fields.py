"""Derive the indexed fields for a record (preview, language, nsfw)."""

from __future__ import annotations

from typing import Container, Optional

from pulse.ingestion.record_types import IndexableDocument, InputRecord
from pulse.ingestion.url_utils import extract_domain, is_nsfw_domain


DEFAULT_PREVIEW_CHARS = 500
DEFAULT_LANGUAGE = "en"
ELLIPSIS = "..."


def generate_preview(text: str, max_chars: int = DEFAULT_PREVIEW_CHARS) -> str:
    text = (text or "").strip()
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS


def resolve_language(language: Optional[str]) -> str:
    if language and language.strip():
        return language
    return DEFAULT_LANGUAGE


def classify_nsfw(record: InputRecord, blocklist: Container[str]) -> bool:
    """True if any text field or the url host is a blocklisted domain.

    Free text (content/title/meta) goes through the same domain extraction as
    the url, so it only matches when the text itself looks like a listed host.
    """
    url = record.url
    host = extract_domain(url)
    checks = [
        is_nsfw_domain(record.content_text or "", blocklist),
        is_nsfw_domain(record.title or "", blocklist),
        is_nsfw_domain(record.meta_content or "", blocklist),
        is_nsfw_domain(url, blocklist),
        host is not None and host in blocklist,
    ]
    return any(checks)


def derive_document(
    record: InputRecord,
    blocklist: Container[str],
    *,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
) -> IndexableDocument:
    content = record.content_text or ""
    return IndexableDocument(
        url=record.url,
        title=record.title or "",
        content=content,
        preview=generate_preview(content, preview_chars),
        language=resolve_language(record.language),
        meta_tags=record.meta_content or "",
        nsfw=classify_nsfw(record, blocklist),
    )
