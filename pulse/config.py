"""Runtime configuration read from the environment (.env supported by the worker)."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from pulse.ingestion.discovery import DEFAULT_INPUT_GLOB
from pulse.ingestion.fields import DEFAULT_PREVIEW_CHARS
from pulse.scoring.nsfw import DEFAULT_BLOCKLIST_PATH
from pulse.storage.index_schema import DEFAULT_INDEX_ROOT


DEFAULT_COMMIT_EVERY = 1000


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class PulseConfig:
    input_glob: str = DEFAULT_INPUT_GLOB
    index_root: str = DEFAULT_INDEX_ROOT
    blocklist_path: str = DEFAULT_BLOCKLIST_PATH
    commit_every: int = DEFAULT_COMMIT_EVERY
    preview_chars: int = DEFAULT_PREVIEW_CHARS
    writer_procs: int = 1
    writer_limitmb: int = 256
    log_level: str = "INFO"

    def __post_init__(self):
        if self.commit_every <= 0:
            raise ValueError("commit_every must be positive")
        if self.preview_chars < 0:
            raise ValueError("preview_chars must not be negative")

    @classmethod
    def from_env(cls) -> "PulseConfig":
        return cls(
            input_glob=os.environ.get("PULSE_INPUT_GLOB") or DEFAULT_INPUT_GLOB,
            index_root=os.environ.get("PULSE_INDEX_ROOT") or DEFAULT_INDEX_ROOT,
            blocklist_path=os.environ.get("PULSE_BLOCKLIST_PATH") or DEFAULT_BLOCKLIST_PATH,
            commit_every=_env_int("PULSE_COMMIT_EVERY", DEFAULT_COMMIT_EVERY),
            preview_chars=_env_int("PULSE_PREVIEW_CHARS", DEFAULT_PREVIEW_CHARS),
            writer_procs=_env_int("PULSE_WRITER_PROCS", 1),
            writer_limitmb=_env_int("PULSE_WRITER_LIMITMB", 256),
            log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
        )

    def with_overrides(self, **overrides: Any) -> "PulseConfig":
        """Copy with every non-None override applied (CLI flags over env)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
