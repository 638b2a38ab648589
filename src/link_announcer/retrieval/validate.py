"""Candidate validation: email/path false positives, IP literals, TLDs and schemes.

Each check raises LinkRejected with its own reason; callers skip the candidate
and move on to the next one.
"""

from __future__ import annotations

import importlib.util
import ipaddress
from typing import Iterable, Optional

from ..errors import LinkRejected, RejectReason
from ..schemas.links import Candidate, ParsedURL

SUPPORTED_SCHEMES = ("http", "https")


def secure_transport_available() -> bool:
    return importlib.util.find_spec("ssl") is not None


def is_valid_ipv4(host: str) -> bool:
    """Strict dotted quad: four octets 0-255, no leading zeros or extra text."""
    try:
        return str(ipaddress.IPv4Address(host)) == host
    except ValueError:
        return False


def host_tld(host: str) -> str:
    _, dot, tail = host.rpartition(".")
    return tail if dot else ""


class LinkValidator:
    def __init__(
        self,
        tlds: Iterable[str] = (),
        ssl_fallback: bool = True,
        secure_transport: Optional[bool] = None,
    ):
        self.tlds = frozenset(t.lower() for t in tlds)
        self.ssl_fallback = ssl_fallback
        self.secure_transport = (
            secure_transport_available() if secure_transport is None else secure_transport
        )

    def check_candidate(self, candidate: Candidate) -> None:
        if candidate.suspect:
            raise LinkRejected(
                RejectReason.LOOKS_LIKE_EMAIL_OR_PATH,
                candidate.url,
                "URL is either an email or a directory path",
            )

    def check_parsed(self, candidate: Candidate, parsed: ParsedURL) -> ParsedURL:
        """
        Run the host, TLD and scheme checks in order.
        Fills in parsed.tld and may downgrade https to http; returns parsed.
        """
        if candidate.is_ip:
            if not is_valid_ipv4(parsed.host):
                raise LinkRejected(
                    RejectReason.INVALID_IP,
                    candidate.url,
                    f"{parsed.host} is not a valid IP address",
                )
        else:
            parsed.tld = host_tld(parsed.host)
            if self.tlds and parsed.tld.lower() not in self.tlds:
                raise LinkRejected(
                    RejectReason.UNKNOWN_TLD,
                    candidate.url,
                    f"{parsed.tld} is not a supported TLD",
                )

        if parsed.scheme == "https" and not self.secure_transport:
            if not self.ssl_fallback:
                raise LinkRejected(
                    RejectReason.SECURE_TRANSPORT_UNAVAILABLE,
                    candidate.url,
                    "HTTPS is unavailable, no TLS support",
                )
            parsed.scheme = "http"

        if parsed.scheme not in SUPPORTED_SCHEMES:
            raise LinkRejected(
                RejectReason.UNSUPPORTED_SCHEME,
                candidate.url,
                f"{parsed.scheme} is not a supported scheme",
            )
        return parsed
