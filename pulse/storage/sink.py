"""Index sink interface.

The ingestion pipeline only ever adds documents and commits. Anything that
implements these two calls can receive a job's output.
"""

from __future__ import annotations

from pulse.ingestion.record_types import IndexableDocument


class SinkError(RuntimeError):
    """The underlying index rejected an add or commit."""


class IndexSink:
    def add_document(self, doc: IndexableDocument) -> None:
        raise NotImplementedError

    def commit(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass
