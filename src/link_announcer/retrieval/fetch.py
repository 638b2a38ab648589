"""HTTP fetching for title lookups and shortener APIs.

One attempt per URL with a short timeout. Network problems come back as a
FetchResult with a failure marker instead of an exception.

httpx applies its timeout per network operation, so a server that trickles
bytes can outlast it. Both fetch() and get_text() also hold an overall
deadline of `timeout` seconds across the whole body read.
"""

import time
from typing import Optional
import httpx
from ..config import get_settings
from ..errors import FetchFailure
from ..log import get_logger
from ..schemas.links import FetchResult

logger = get_logger("fetch")

# <title> lives in <head>; no need to pull whole pages or downloads
MAX_BODY_BYTES = 256 * 1024

def _read_capped(resp: httpx.Response, deadline: float, limit: int = MAX_BODY_BYTES) -> bytes:
    body = bytearray()
    for chunk in resp.iter_bytes():
        body.extend(chunk)
        if len(body) >= limit:
            break
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout("Overall fetch deadline exceeded", request=resp.request)
    return bytes(body[:limit])

class Fetcher:
    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        settings = get_settings()
        self.timeout = settings.URL_FETCH_TIMEOUT if timeout is None else timeout
        self.headers = {
            "User-Agent": user_agent or settings.URL_USER_AGENT
        }

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, follow_redirects=True, headers=self.headers)

    def fetch(self, url: str) -> FetchResult:
        """
        GET a URL and return status, headers and (capped) body.
        Never raises for network errors.
        """
        deadline = time.monotonic() + self.timeout
        try:
            with self._client() as client:
                with client.stream("GET", url) as resp:
                    body = _read_capped(resp, deadline)
                    return FetchResult(
                        url=url,
                        status_code=resp.status_code,
                        headers=dict(resp.headers),
                        body=body,
                        encoding=resp.charset_encoding,
                        is_error=resp.is_error,
                        failure=FetchFailure.HTTP_STATUS if resp.is_error else None,
                        reason=resp.reason_phrase or None,
                    )
        except httpx.TimeoutException as e:
            logger.debug(f"Timed out fetching {url}: {e}")
            return FetchResult(url=url, is_error=True, failure=FetchFailure.TIMEOUT, reason=str(e) or None)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Transport error fetching {url}: {e}")
            return FetchResult(url=url, is_error=True, failure=FetchFailure.TRANSPORT, reason=str(e) or None)

    def get_text(self, url: str, params: Optional[dict] = None) -> Optional[str]:
        """
        Small GET for API-style endpoints (URL shorteners).
        Returns the stripped response text, or None on any failure.
        """
        deadline = time.monotonic() + self.timeout
        try:
            with self._client() as client:
                with client.stream("GET", url, params=params) as resp:
                    resp.raise_for_status()
                    body = _read_capped(resp, deadline)
                    return body.decode(resp.encoding or "utf-8", errors="replace").strip()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Request to {url} failed: {e}")
            return None
