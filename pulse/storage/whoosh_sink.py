"""Whoosh-backed index sink.

A Whoosh writer is closed by commit(), so a new writer is opened lazily for the
next document. Writes between commits live in the writer until the next commit.
"""

from __future__ import annotations

import logging
from typing import Optional

from whoosh.index import Index
from whoosh.writing import IndexWriter

from pulse.ingestion.record_types import IndexableDocument
from pulse.storage.sink import IndexSink, SinkError


logger = logging.getLogger(__name__)


class WhooshIndexSink(IndexSink):
    def __init__(self, ix: Index, *, procs: int = 1, limitmb: int = 256):
        self.ix = ix
        self.procs = procs
        self.limitmb = limitmb
        self._writer: Optional[IndexWriter] = None
        self.pending = 0

    def _get_writer(self) -> IndexWriter:
        if self._writer is None or self._writer.is_closed:
            self._writer = self.ix.writer(procs=self.procs, limitmb=self.limitmb)
        return self._writer

    def add_document(self, doc: IndexableDocument) -> None:
        try:
            self._get_writer().add_document(url_exact=doc.url, **doc.as_fields())
        except Exception as e:
            raise SinkError(f"Failed to add document {doc.url}: {e}") from e
        self.pending += 1

    def commit(self) -> None:
        try:
            self._get_writer().commit()
        except Exception as e:
            raise SinkError(f"Commit failed with {self.pending} pending documents: {e}") from e
        logger.debug("[whoosh] committed %d documents", self.pending)
        self._writer = None
        self.pending = 0

    def close(self) -> None:
        # Only reached with uncommitted writes if the job aborted.
        if self._writer is not None and not self._writer.is_closed:
            self._writer.cancel()
        self._writer = None
        self.ix.close()
