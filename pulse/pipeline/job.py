"""One indexing job: discover inputs, load the blocklist, build the index.

Order matters for the failure modes:
1. File discovery (no matches -> abort before any index directory exists)
2. Blocklist load (missing file -> empty blocklist)
3. Index creation
4. Per-file, per-line ingestion with periodic commits
5. Final commit (failure -> abort)
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, Optional

from pulse.config import PulseConfig
from pulse.ingestion.discovery import discover_files
from pulse.ingestion.fields import DEFAULT_PREVIEW_CHARS, derive_document
from pulse.ingestion.reader import iter_file_records
from pulse.pipeline.batch_commit import BatchCommitController
from pulse.scoring.nsfw import DomainBlocklist, load_blocklist_or_empty
from pulse.storage.index_schema import create_search_index, index_dir_for
from pulse.storage.sink import IndexSink
from pulse.storage.whoosh_sink import WhooshIndexSink


logger = logging.getLogger(__name__)


@dataclass
class JobRun:
    """Mutable state of a single run. Not persisted."""

    index_id: int
    index_dir: Optional[str] = None
    started: float = field(default_factory=time.monotonic)
    processed: int = 0
    nsfw_documents: int = 0
    files_processed: int = 0
    current_file: Optional[str] = None
    lines_read: int = 0
    skipped: Dict[str, int] = field(default_factory=dict)
    commits: int = 0
    commit_failures: int = 0

    def elapsed(self) -> float:
        return time.monotonic() - self.started

    def rate(self) -> float:
        elapsed = self.elapsed()
        if elapsed <= 0:
            return 0.0
        return self.processed / elapsed

    def record_skip(self, reason: str) -> None:
        self.skipped[reason] = self.skipped.get(reason, 0) + 1

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())


@dataclass(frozen=True)
class JobResult:
    index_id: int
    index_dir: Optional[str]
    documents: int
    files: int
    lines: int
    skipped: Dict[str, int]
    nsfw_documents: int
    commits: int
    commit_failures: int
    elapsed_s: float

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())

    def as_dict(self) -> dict:
        return asdict(self)


def index_documents(
    files: Iterable[str],
    sink: IndexSink,
    blocklist: DomainBlocklist,
    run: JobRun,
    *,
    commit_every: int = 1000,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
) -> JobResult:
    controller = BatchCommitController(sink, run, commit_every=commit_every)

    logger.info("Starting to process files...")
    for path in files:
        run.files_processed += 1
        run.current_file = path
        logger.info("Processing file [%d]: %s", run.files_processed, path)
        file_started = time.monotonic()
        line_count = 0
        for outcome in iter_file_records(path):
            line_count += 1
            run.lines_read += 1
            if not outcome.ok:
                run.record_skip(outcome.reason or "unknown")
                continue
            doc = derive_document(outcome.record, blocklist, preview_chars=preview_chars)
            controller.add(doc)
        logger.info(
            "Finished file %s (%d lines) in %.2fs",
            path,
            line_count,
            time.monotonic() - file_started,
        )
    run.current_file = None

    controller.finish()

    elapsed = run.elapsed()
    result = JobResult(
        index_id=run.index_id,
        index_dir=run.index_dir,
        documents=run.processed,
        files=run.files_processed,
        lines=run.lines_read,
        skipped=dict(run.skipped),
        nsfw_documents=run.nsfw_documents,
        commits=run.commits,
        commit_failures=run.commit_failures,
        elapsed_s=elapsed,
    )
    logger.info(
        "Indexing completed: %d documents from %d files in %.2fs (%d skipped lines, %d nsfw)",
        result.documents,
        result.files,
        elapsed,
        result.skipped_total,
        result.nsfw_documents,
        extra={"total_processed": result.documents, "total_files": result.files, "duration_s": elapsed},
    )
    return result


def run_job(
    config: PulseConfig,
    *,
    sink: Optional[IndexSink] = None,
    index_id: Optional[int] = None,
) -> JobResult:
    """Run a full job. Pass `sink` to write somewhere other than a new Whoosh index."""
    logger.info("Looking for files matching: %s", config.input_glob)
    files = discover_files(config.input_glob)

    blocklist = load_blocklist_or_empty(config.blocklist_path)

    run = JobRun(index_id=index_id if index_id is not None else int(time.time()))
    owns_sink = sink is None
    if owns_sink:
        ix = create_search_index(config.index_root, run.index_id)
        run.index_dir = index_dir_for(config.index_root, run.index_id)
        sink = WhooshIndexSink(ix, procs=config.writer_procs, limitmb=config.writer_limitmb)
        logger.info("Search index created")

    try:
        return index_documents(
            files,
            sink,
            blocklist,
            run,
            commit_every=config.commit_every,
            preview_chars=config.preview_chars,
        )
    finally:
        if owns_sink:
            sink.close()
