"""Search index layout.

One index directory per job run: <index_root>/index_<epoch seconds>.
Creation refuses to touch a directory that already holds an index.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Optional

from whoosh import index
from whoosh.fields import BOOLEAN, ID, TEXT, Schema

from pulse.pipeline.errors import IndexCreationError


logger = logging.getLogger(__name__)

DEFAULT_INDEX_ROOT = "pulse_indexes"
INDEX_DIR_PREFIX = "index_"


def build_schema() -> Schema:
    # content is searchable but not stored; language is a sortable column for filtering.
    # url_exact is the untokenized url used for point lookups.
    return Schema(
        url=TEXT(stored=True),
        url_exact=ID(stored=False),
        title=TEXT(stored=True),
        content=TEXT(stored=False),
        preview=ID(stored=True),
        language=ID(stored=True, sortable=True),
        meta_tags=TEXT(stored=True),
        nsfw=BOOLEAN(stored=True),
    )


def index_dir_for(index_root: str, index_id: int) -> str:
    return os.path.join(index_root, f"{INDEX_DIR_PREFIX}{index_id}")


def create_search_index(index_root: str, index_id: Optional[int] = None) -> index.Index:
    """Create a fresh index under `index_root` named after `index_id` (default: now)."""
    if index_id is None:
        index_id = int(time.time())
    path = index_dir_for(index_root, index_id)
    try:
        os.makedirs(path, exist_ok=True)
        if index.exists_in(path):
            raise IndexCreationError(f"Index already exists at: {path}")
        ix = index.create_in(path, build_schema())
    except IndexCreationError:
        raise
    except Exception as e:
        raise IndexCreationError(f"Could not create index at {path}: {e}") from e
    logger.info("Creating index at: %s", path)
    return ix
