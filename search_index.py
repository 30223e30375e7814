#!/usr/bin/env python3
"""Query the newest (or a given) Pulse index from the command line."""

from __future__ import annotations

import argparse
import json
import os

from dotenv import load_dotenv

from pulse.storage.index_reader import count_documents, latest_index_dir, search
from pulse.storage.index_schema import DEFAULT_INDEX_ROOT


def main() -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Search a Pulse index")
    parser.add_argument("query", help="Keyword query (url/title/content/meta_tags)")
    parser.add_argument("--index-dir", default=None, help="Index directory (default: newest under the index root)")
    parser.add_argument("--index-root", default=os.environ.get("PULSE_INDEX_ROOT", DEFAULT_INDEX_ROOT))
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--safe", action="store_true", help="Exclude documents flagged nsfw")
    args = parser.parse_args()

    index_dir = args.index_dir or latest_index_dir(args.index_root)
    if not index_dir:
        print(f"No index found under {args.index_root}")
        return 1

    print(f"Index: {index_dir} ({count_documents(index_dir)} documents)")
    hits = search(index_dir, args.query, limit=args.limit, nsfw=False if args.safe else None)
    for h in hits:
        print(json.dumps(h, ensure_ascii=False))
    print(f"{len(hits)} hits")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
