"""NSFW domain blocklist.

The blocklist is a plain text file with one domain per line. It is loaded once
per job and only read afterwards. A missing file is not an error for the job:
classification simply never matches on the domain branch.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, Optional


logger = logging.getLogger(__name__)

DEFAULT_BLOCKLIST_PATH = "top_1m_nsfw_sites.txt"


@dataclass(frozen=True)
class DomainBlocklist:
    domains: FrozenSet[str] = field(default_factory=frozenset)
    source: Optional[str] = None

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, source: Optional[str] = None) -> "DomainBlocklist":
        out = set()
        for line in lines:
            d = line.strip().lower()
            if d:
                out.add(d)
        return cls(domains=frozenset(out), source=source)

    @property
    def loaded(self) -> bool:
        return self.source is not None

    def __contains__(self, domain: object) -> bool:
        return domain in self.domains

    def __len__(self) -> int:
        return len(self.domains)

    def __iter__(self) -> Iterator[str]:
        return iter(self.domains)


def load_blocklist(path: str = DEFAULT_BLOCKLIST_PATH) -> DomainBlocklist:
    """Read the blocklist file. Raises OSError/UnicodeError if it cannot be read."""
    with open(path, "r", encoding="utf-8") as f:
        blocklist = DomainBlocklist.from_lines(f, source=os.path.abspath(path))
    logger.info("Loaded %d NSFW domains from %s", len(blocklist), path)
    return blocklist


def load_blocklist_or_empty(path: str = DEFAULT_BLOCKLIST_PATH) -> DomainBlocklist:
    try:
        return load_blocklist(path)
    except (OSError, UnicodeError) as e:
        logger.info("Could not load NSFW domains list (%s), continuing without it", e)
        return DomainBlocklist()
