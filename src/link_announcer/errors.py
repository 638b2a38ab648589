"""Error taxonomy for link processing.

Per-link problems are reported as RejectReason values (wrapped in LinkRejected
while a candidate is being checked) and never abort a message. The only fatal
error is ShortenerConfigError, raised while wiring the app at startup.
"""

from enum import Enum


class RejectReason(str, Enum):
    MALFORMED_URL = "malformed_url"
    LOOKS_LIKE_EMAIL_OR_PATH = "looks_like_email_or_path"
    INVALID_IP = "invalid_ip"
    UNKNOWN_TLD = "unknown_tld"
    SECURE_TRANSPORT_UNAVAILABLE = "secure_transport_unavailable"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    SHORTEN_FAILED = "shorten_failed"
    CACHE_SUPPRESSED = "cache_suppressed"


class FetchFailure(str, Enum):
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"


class MalformedURL(ValueError):
    def __init__(self, url: str, detail: str = ""):
        self.url = url
        self.detail = detail
        super().__init__(f"Could not parse URL {url!r}" + (f": {detail}" if detail else ""))


class LinkRejected(Exception):
    def __init__(self, reason: RejectReason, url: str, detail: str = ""):
        self.reason = reason
        self.url = url
        self.detail = detail
        super().__init__(f"{reason.value}: {detail or url}")


class ShortenerConfigError(RuntimeError):
    """Configured shortener is unknown or does not implement the shortener contract."""
