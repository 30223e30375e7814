"""Input record contract.

Each line of an input file is one JSON object describing a crawled page:

    {"url": "...", "title": "...", "content_text": "...", "meta_content": "...", "language": "en"}

Only `url` is required. Optional fields may be missing or null. Unknown keys are
ignored so upstream crawlers can add fields without breaking the indexer.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from pulse.ingestion.record_types import InputRecord


_OPTIONAL_STRING = {"type": ["string", "null"]}

INPUT_RECORD_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["url"],
    "properties": {
        "url": {"type": "string", "minLength": 1},
        "title": _OPTIONAL_STRING,
        "content_text": _OPTIONAL_STRING,
        "meta_content": _OPTIONAL_STRING,
        "language": _OPTIONAL_STRING,
    },
    "additionalProperties": True,
}


_VALIDATOR = Draft202012Validator(INPUT_RECORD_SCHEMA)


class RecordError(ValueError):
    """A single input line could not be turned into an InputRecord."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


def validate_input_record(payload: Any) -> List[str]:
    """Return a list of human-readable validation errors (empty means valid)."""
    errors = []
    for e in sorted(_VALIDATOR.iter_errors(payload), key=lambda x: list(x.path)):
        path = ".".join(str(p) for p in e.path) if e.path else "<root>"
        errors.append(f"{path}: {e.message}")
    return errors


def parse_record_line(text: str) -> InputRecord:
    if not text.strip():
        raise RecordError("empty_line", "empty line")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordError("invalid_json", str(e)) from e
    except RecursionError as e:
        # nesting deeper than the interpreter recursion limit
        raise RecordError("invalid_json", f"JSON nested too deeply: {e}") from e
    errors = validate_input_record(payload)
    if errors:
        raise RecordError("invalid_record", "; ".join(errors))
    return InputRecord(
        url=payload["url"],
        title=payload.get("title"),
        content_text=payload.get("content_text"),
        meta_content=payload.get("meta_content"),
        language=payload.get("language"),
    )
