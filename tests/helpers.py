import json
import os
from typing import Iterable, List, Optional

from pulse.ingestion.record_types import IndexableDocument
from pulse.storage.sink import IndexSink, SinkError


class RecordingSink(IndexSink):
    """In-memory sink that remembers documents and commit calls."""

    def __init__(self, fail_commits: Optional[Iterable[int]] = None):
        self.documents: List[IndexableDocument] = []
        self.committed: List[IndexableDocument] = []
        self.commit_calls = 0
        self.fail_commits = set(fail_commits or ())

    def add_document(self, doc: IndexableDocument) -> None:
        self.documents.append(doc)

    def commit(self) -> None:
        self.commit_calls += 1
        if self.commit_calls in self.fail_commits:
            raise SinkError(f"commit {self.commit_calls} rejected")
        self.committed = list(self.documents)


def write_jsonl(path: str, lines: Iterable[object]) -> str:
    """Write dicts as JSON lines; str items are written verbatim."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for item in lines:
            f.write(item if isinstance(item, str) else json.dumps(item, ensure_ascii=False))
            f.write("\n")
    return path
