"""Periodic + final commit policy for the index sink."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from pulse.ingestion.record_types import IndexableDocument
from pulse.pipeline.errors import FinalCommitError
from pulse.storage.sink import IndexSink, SinkError

if TYPE_CHECKING:
    from pulse.pipeline.job import JobRun


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitOutcome:
    status: str  # ok|failed
    processed: int
    final: bool = False
    error: Optional[str] = None


class BatchCommitController:
    """Adds documents to the sink and commits every `commit_every` documents.

    Periodic commit failures are logged and counted; the next commit picks the
    writes up. Only the final commit is allowed to fail the job.
    """

    def __init__(self, sink: IndexSink, run: "JobRun", *, commit_every: int = 1000):
        if commit_every <= 0:
            raise ValueError("commit_every must be positive")
        self.sink = sink
        self.run = run
        self.commit_every = commit_every

    def add(self, doc: IndexableDocument) -> Optional[CommitOutcome]:
        self.sink.add_document(doc)
        self.run.processed += 1
        if doc.nsfw:
            self.run.nsfw_documents += 1
        if self.run.processed % self.commit_every == 0:
            return self._periodic_commit()
        return None

    def _periodic_commit(self) -> CommitOutcome:
        run = self.run
        try:
            self.sink.commit()
        except SinkError as e:
            run.commit_failures += 1
            logger.warning("Periodic commit failed at %d documents: %s", run.processed, e)
            return CommitOutcome(status="failed", processed=run.processed, error=str(e))
        run.commits += 1
        rate = run.rate()
        logger.info(
            "Processing at %.2f docs/second (%d total)",
            rate,
            run.processed,
            extra={"total_processed": run.processed, "rate": rate},
        )
        return CommitOutcome(status="ok", processed=run.processed)

    def finish(self) -> CommitOutcome:
        run = self.run
        logger.info("Performing final commit...")
        try:
            self.sink.commit()
        except SinkError as e:
            run.commit_failures += 1
            raise FinalCommitError(f"Final commit failed after {run.processed} documents: {e}") from e
        run.commits += 1
        return CommitOutcome(status="ok", processed=run.processed, final=True)
