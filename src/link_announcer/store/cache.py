"""In-memory repeat-link cache, per channel.

Links are stored as CRC32 checksums of their canonical base form, so the
same page posted as http://www.example.com/ and EXAMPLE.com counts as one
link. Two namespaces are kept: the full URL and the shortened URL.
Nothing is persisted; the cache lives as long as the process.
"""

import re
import time
import zlib
from typing import Dict, Optional
from urllib.parse import unquote

from ..errors import MalformedURL
from ..retrieval.normalize import canonicalize, parse_url

_WHITESPACE_RE = re.compile(r"\s")


def url_checksum(url: str) -> str:
    """Lower-case hex CRC32 of the case-folded, percent-decoded base URL."""
    try:
        base = canonicalize(parse_url(url), base=True)
    except MalformedURL:
        base = url
    cleaned = _WHITESPACE_RE.sub("", unquote(base).lower())
    return format(zlib.crc32(cleaned.encode("utf-8")) & 0xFFFFFFFF, "x")


class LinkCache:
    def __init__(self, expire_seconds: int = 1800, limit: int = 10):
        self.expire_seconds = expire_seconds
        self.limit = limit
        # channel -> checksum -> last seen (epoch seconds)
        self._urls: Dict[str, Dict[str, float]] = {}
        self._shorts: Dict[str, Dict[str, float]] = {}

    def _is_live(self, timestamp: Optional[float], now: float) -> bool:
        if timestamp is None:
            return False
        if self.expire_seconds <= 0:
            return True
        return timestamp + self.expire_seconds > now

    def seen(self, channel: str, url: str, short_url: str, now: Optional[float] = None) -> bool:
        """True if either form of the link was posted in channel recently."""
        now = time.time() if now is None else now
        url_ts = self._urls.get(channel, {}).get(url_checksum(url))
        short_ts = self._shorts.get(channel, {}).get(url_checksum(short_url))
        return self._is_live(url_ts, now) or self._is_live(short_ts, now)

    def record(self, channel: str, url: str, short_url: str, now: Optional[float] = None) -> None:
        now = time.time() if now is None else now
        self._insert(self._urls.setdefault(channel, {}), url_checksum(url), now)
        self._insert(self._shorts.setdefault(channel, {}), url_checksum(short_url), now)

    def _insert(self, entries: Dict[str, float], checksum: str, now: float) -> None:
        entries[checksum] = now
        if self.limit > 0 and len(entries) > self.limit:
            # Oldest timestamp goes first; min() keeps insertion order on ties
            oldest = min(entries, key=entries.__getitem__)
            del entries[oldest]

    def size(self, channel: str) -> Dict[str, int]:
        return {
            "url": len(self._urls.get(channel, {})),
            "short": len(self._shorts.get(channel, {})),
        }
