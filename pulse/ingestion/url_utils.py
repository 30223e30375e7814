"""Domain extraction helpers used for blocklist matching."""

from __future__ import annotations

from typing import Container, Optional


SCHEME_PREFIXES = ("http://", "https://")
WWW_PREFIX = "www."


def extract_domain(url: str) -> Optional[str]:
    """Return the lowercased host part of `url`, or None if nothing is left.

    - Strip one leading http:// or https://
    - Strip one leading www.
    - Keep everything before the first "/"

    This is applied to free text as well as URLs, so no URL parsing is done.
    """
    if not url:
        return None
    s = url
    for prefix in SCHEME_PREFIXES:
        if s.startswith(prefix):
            s = s[len(prefix):]
            break
    if s.startswith(WWW_PREFIX):
        s = s[len(WWW_PREFIX):]
    host = s.split("/", 1)[0].lower()
    return host or None


def is_nsfw_domain(text: str, blocklist: Container[str]) -> bool:
    domain = extract_domain(text)
    if domain is None:
        return False
    return domain in blocklist
