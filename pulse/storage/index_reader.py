"""Read-side helpers for committed indexes (latest index lookup, search)."""

from __future__ import annotations

import os
import re
from typing import Any, Dict, List, Optional

from whoosh import index
from whoosh.qparser import MultifieldParser
from whoosh.query import Term

from pulse.storage.index_schema import INDEX_DIR_PREFIX


SEARCH_FIELDS = ["url", "title", "content", "meta_tags"]

_INDEX_DIR_RE = re.compile(r"^" + re.escape(INDEX_DIR_PREFIX) + r"(\d+)$")


def latest_index_dir(index_root: str) -> Optional[str]:
    """Newest index_<ts> directory under `index_root` that holds an index."""
    if not os.path.isdir(index_root):
        return None
    found = []
    for name in os.listdir(index_root):
        m = _INDEX_DIR_RE.match(name)
        path = os.path.join(index_root, name)
        if m and index.exists_in(path):
            found.append((int(m.group(1)), path))
    if not found:
        return None
    return max(found)[1]


def get_document(index_dir: str, url: str) -> Optional[Dict[str, Any]]:
    """Stored fields of the first document whose url equals `url` exactly."""
    ix = index.open_dir(index_dir)
    try:
        with ix.searcher() as searcher:
            fields = searcher.document(url_exact=url)
    finally:
        ix.close()
    return dict(fields) if fields is not None else None


def count_documents(index_dir: str) -> int:
    ix = index.open_dir(index_dir)
    try:
        return ix.doc_count()
    finally:
        ix.close()


def search(index_dir: str, query: str, *, limit: int = 10, nsfw: Optional[bool] = None) -> List[Dict[str, Any]]:
    """Keyword search over url/title/content/meta_tags, optionally filtered on nsfw."""
    qtext = (query or "").strip()
    if not qtext:
        return []
    ix = index.open_dir(index_dir)
    try:
        parser = MultifieldParser(SEARCH_FIELDS, schema=ix.schema)
        q = parser.parse(qtext)
        flt = Term("nsfw", nsfw) if nsfw is not None else None
        with ix.searcher() as searcher:
            out = []
            for hit in searcher.search(q, limit=limit, filter=flt):
                row = dict(hit.fields())
                row["score"] = float(hit.score)
                out.append(row)
            return out
    finally:
        ix.close()
