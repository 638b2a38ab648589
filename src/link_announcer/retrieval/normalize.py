"""URL parsing and canonical re-serialization.

parse_url() turns a raw candidate into a ParsedURL; canonicalize() glues it
back together. The base form (no scheme, credentials, fragment or leading
"www.") is what repeat detection keys on.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple
from urllib.parse import urlsplit

from ..errors import MalformedURL
from ..schemas.links import ParsedURL

# "scheme:" prefix, but not "host:8080" which is a host with a port
_SCHEME_RE = re.compile(r"^[a-z][-+.a-z0-9]*:(?![0-9]+(?:[/?#]|$))", re.IGNORECASE)

DEFAULT_PORTS = {"http": 80, "https": 443}

# Slashes and @ left over when extraction grabbed too much on the left
_LEADING_JUNK = " /@\\"


def _split_netloc(netloc: str) -> Tuple[Optional[str], Optional[str], str]:
    userinfo, _, hostport = netloc.rpartition("@")
    user = password = None
    if userinfo:
        user, sep, pw = userinfo.partition(":")
        password = pw if sep else None
    if hostport.startswith("["):
        host = hostport.partition("]")[0] + "]"
    else:
        host = hostport.partition(":")[0]
    return user or None, password or None, host


def parse_url(raw: str) -> ParsedURL:
    """
    Parse a raw URL string, defaulting the scheme to http.
    Raises MalformedURL when the string can't be split or has no host.
    """
    url = (raw or "").strip().lstrip(_LEADING_JUNK)
    if not _SCHEME_RE.match(url):
        url = "http://" + url

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise MalformedURL(raw, str(e)) from e

    scheme = (parts.scheme or "http").lower()
    user, password, host = _split_netloc(parts.netloc)
    path = parts.path

    # No "//" after the scheme: urlsplit puts everything in the path
    if path and not host:
        host, sep, rest = path.partition("/")
        path = rest if sep else ""

    if not host.strip():
        raise MalformedURL(raw, "missing host")

    return ParsedURL(
        scheme=scheme,
        user=user,
        password=password,
        host=host,
        port=port,
        path=path or None,
        query=parts.query or None,
        fragment=parts.fragment or None,
    )


def canonicalize(parsed: ParsedURL, base: bool = False) -> str:
    """
    Rebuild a URL string from its parts.

    With base=True the scheme, credentials and fragment are dropped and a
    leading "www." is stripped from the host, so that trivially different
    spellings of the same link compare equal.
    """
    uri = ""
    if not base:
        if parsed.scheme:
            uri += parsed.scheme + ":" + ("" if parsed.scheme.lower() == "mailto" else "//")
        if parsed.user:
            uri += parsed.user + (":" + parsed.password if parsed.password else "") + "@"

    host = parsed.host or ""
    if base:
        host = host.strip()
        if host[:4].lower() == "www.":
            host = host[4:]
    uri += host

    port = parsed.port
    if port and DEFAULT_PORTS.get(parsed.scheme) == port:
        port = None
    if port:
        uri += f":{port}"

    path = parsed.path
    if path and not (base and path == "/"):
        uri += path if path.startswith("/") else "/" + path

    if parsed.query:
        uri += "?" + parsed.query
    if not base and parsed.fragment:
        uri += "#" + parsed.fragment
    return uri
