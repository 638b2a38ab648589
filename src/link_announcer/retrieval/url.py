"""URL candidate extraction from chat text.

One combined pattern finds either dotted-quad IP hosts or domain-like hosts,
with an http(s) scheme or, when schemeless detection is on, without one.
"""

import re
from typing import Iterator, List
from ..schemas.links import Candidate

# Characters chat users commonly put right after a link
TRAILING_CHARS = ", ].?!;"

_SCHEME = r"https?://(?:[^\s/@]+@)?"
_HOST = r"""
    (?:
        (?P<ip>[0-9]{1,3}(?:\.[0-9]{1,3}){3})(?![^\s:/?#.,;!\]]|\.[a-z0-9_-])
      | (?P<domain>(?:[a-z0-9_-]+\.)+[a-z]{2,63})\b(?!@)
    )
    \S*
"""

URL_REGEX = re.compile(rf"(?P<scheme>{_SCHEME}){_HOST}", re.IGNORECASE | re.VERBOSE)

# Bare domains are allowed, but ones glued to @, / or \ are flagged so they can
# be thrown out as email addresses and file paths.
SCHEMELESS_URL_REGEX = re.compile(
    rf"(?:(?P<scheme>{_SCHEME})|(?P<suspect>[@/\\]))?{_HOST}",
    re.IGNORECASE | re.VERBOSE,
)

def clean_match(raw: str) -> str:
    return raw.rstrip(TRAILING_CHARS).strip()

def extract_candidates(text: str, detect_schemeless: bool = False) -> Iterator[Candidate]:
    """
    Lazily yield every URL-like substring in text, in order.
    Each call starts a fresh scan.
    """
    regex = SCHEMELESS_URL_REGEX if detect_schemeless else URL_REGEX
    for match in regex.finditer(text or ""):
        url = clean_match(match.group(0))
        if not url:
            continue
        yield Candidate(
            url=url,
            is_ip=match.group("ip") is not None,
            suspect=bool(match.groupdict().get("suspect")),
        )

def extract_urls(text: str, detect_schemeless: bool = False) -> List[str]:
    """
    Extracts unique, non-suspect URLs from text, keeping first-seen order.
    """
    clean_urls = []
    seen = set()

    for candidate in extract_candidates(text, detect_schemeless):
        if candidate.suspect or candidate.url in seen:
            continue
        clean_urls.append(candidate.url)
        seen.add(candidate.url)

    return clean_urls
