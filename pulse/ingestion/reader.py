"""Line-by-line JSONL reader.

Every physical line is handled on its own: a bad line is reported as a skipped
LineOutcome and reading continues with the next one.
"""

from __future__ import annotations

import logging
from typing import Iterator

from pulse.contracts.input_record import RecordError, parse_record_line
from pulse.ingestion.record_types import LineOutcome


logger = logging.getLogger(__name__)


def _decode(raw: bytes, line_no: int) -> str:
    text = raw.decode("utf-8-sig" if line_no == 1 else "utf-8")
    return text.rstrip("\r\n")


def iter_file_records(path: str) -> Iterator[LineOutcome]:
    with open(path, "rb") as f:
        for line_no, raw in enumerate(f, start=1):
            try:
                record = parse_record_line(_decode(raw, line_no))
            except UnicodeDecodeError as e:
                outcome = LineOutcome(line_no=line_no, status="skipped", reason="invalid_utf8", error=str(e))
            except RecordError as e:
                outcome = LineOutcome(line_no=line_no, status="skipped", reason=e.reason, error=str(e))
            else:
                yield LineOutcome(line_no=line_no, status="ok", record=record)
                continue
            logger.warning("Failed to parse JSON line %d in file %s: %s", line_no, path, outcome.error)
            yield outcome
