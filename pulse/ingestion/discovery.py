"""Input file discovery."""

from __future__ import annotations

import glob
import logging
import os
from typing import Tuple

from pulse.pipeline.errors import NoInputFilesError


logger = logging.getLogger(__name__)

DEFAULT_INPUT_GLOB = "analyses/partition=*/*.jsonl"


def discover_files(pattern: str = DEFAULT_INPUT_GLOB) -> Tuple[str, ...]:
    """Resolve `pattern` once and return the matching files in sorted order.

    The result is a snapshot; files created later are not picked up.
    """
    matches = sorted(p for p in glob.glob(pattern, recursive=True) if os.path.isfile(p))
    if not matches:
        raise NoInputFilesError(f"No files found matching pattern: {pattern}")
    logger.info("Found %d files to process", len(matches))
    return tuple(matches)
