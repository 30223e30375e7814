#!/usr/bin/env python3
"""Build a search index from crawled JSONL analyses.

One-shot batch job:
- Finds input files (default: analyses/partition=*/*.jsonl)
- Loads the NSFW domain list (optional)
- Creates pulse_indexes/index_<timestamp> and indexes every valid line

Exit code is 1 if there are no input files, the index cannot be created,
or the final commit fails.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from pulse.config import PulseConfig
from pulse.pipeline.errors import IngestFatalError
from pulse.pipeline.job import run_job


logger = logging.getLogger("pulse.index_worker")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index JSONL crawl records into a Whoosh search index")
    parser.add_argument("--input-glob", default=None, help="Glob for input files (env PULSE_INPUT_GLOB)")
    parser.add_argument("--index-root", default=None, help="Directory that receives index_<ts> (env PULSE_INDEX_ROOT)")
    parser.add_argument("--blocklist", dest="blocklist_path", default=None, help="NSFW domain list (env PULSE_BLOCKLIST_PATH)")
    parser.add_argument("--commit-every", type=int, default=None, help="Commit every N documents (default 1000)")
    parser.add_argument("--log-level", default=None, help="Logging level (env LOG_LEVEL)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    try:
        config = PulseConfig.from_env().with_overrides(
            input_glob=args.input_glob,
            index_root=args.index_root,
            blocklist_path=args.blocklist_path,
            commit_every=args.commit_every,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    _configure_logging(config.log_level)

    logger.info("Starting search indexer from JSONL files")
    try:
        result = run_job(config)
    except IngestFatalError as e:
        logger.error("Indexing aborted: %s", e)
        return 1

    logger.info("Search indexing completed successfully: %s", result.index_dir)
    logger.info("You can use the latest index in the '%s' directory for search operations", config.index_root)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
