"""Display titles for links.

HTML pages give their <title>; anything else is described by its
Content-Type. Failed fetches turn into a status string or a placeholder.
"""

from __future__ import annotations

import html
import re
from typing import Dict, Optional

import httpx

from ..config import load_http_reasons
from ..errors import FetchFailure
from ..log import get_logger
from ..schemas.links import FetchResult
from .fetch import Fetcher

logger = get_logger("title")

HTML_CONTENT_TYPE_RE = re.compile(r"^(text/x?html|application/xhtml\+xml)(?:;.*)?$", re.IGNORECASE)
TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)

NO_TITLE = "No Title"
ERROR_TITLE = "Error"
TIMEOUT_TITLE = "Request Timeout"
CONNECTION_FAILED_TITLE = "Connection Failed"
ELLIPSIS = "..."


def extract_title(markup: str) -> Optional[str]:
    match = TITLE_RE.search(markup)
    if not match:
        return None
    title = " ".join(html.unescape(match.group(1)).split())
    return title or None


def truncate(text: str, length: int) -> str:
    if length > 0 and len(text) > length:
        return text[:length] + ELLIPSIS
    return text


class TitleResolver:
    def __init__(
        self,
        fetcher: Fetcher,
        title_length: int = 40,
        show_errors: bool = True,
        reasons: Optional[Dict[int, str]] = None,
    ):
        self.fetcher = fetcher
        self.title_length = title_length
        self.show_errors = show_errors
        self.reasons = load_http_reasons() if reasons is None else reasons

    def status_text(self, result: FetchResult) -> str:
        if result.failure == FetchFailure.TIMEOUT:
            return TIMEOUT_TITLE
        if result.status_code is None:
            return CONNECTION_FAILED_TITLE
        code = result.status_code
        if code in self.reasons:
            return self.reasons[code]
        phrase = httpx.codes.get_reason_phrase(code) or result.reason
        return f"{code} {phrase}" if phrase else str(code)

    def title_from_result(self, result: FetchResult) -> str:
        title = None

        content_type = (result.header("Content-Type") or "").strip()
        if content_type and not HTML_CONTENT_TYPE_RE.match(content_type):
            # Not a document: tell the channel what it is instead
            title = content_type
        elif result.body:
            title = extract_title(result.text)

        if not title:
            if result.is_error:
                title = self.status_text(result) if self.show_errors else ERROR_TITLE
            else:
                title = NO_TITLE

        return truncate(title, self.title_length)

    def resolve(self, url: str) -> str:
        """Fetch url once and return its display title. Never raises."""
        try:
            result = self.fetcher.fetch(url)
        except Exception:
            logger.exception(f"Unexpected error fetching {url}")
            return ERROR_TITLE
        return self.title_from_result(result)
