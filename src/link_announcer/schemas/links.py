"""Pydantic schemas for link candidates, parsed URLs and per-link outcomes.

Defines Candidate, ParsedURL, FetchResult and MatchResult models.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional
from ..errors import FetchFailure, RejectReason

class Candidate(BaseModel):
    url: str
    is_ip: bool = False
    suspect: bool = False # preceded by @, / or \ (email address or file path)

class ParsedURL(BaseModel):
    scheme: str = "http"
    user: Optional[str] = None
    password: Optional[str] = None
    host: str
    port: Optional[int] = None
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None
    tld: Optional[str] = None

class FetchResult(BaseModel):
    url: str
    status_code: Optional[int] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
    encoding: Optional[str] = None
    is_error: bool = False
    failure: Optional[FetchFailure] = None
    reason: Optional[str] = None

    def header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.encoding or "utf-8", errors="replace")
        except LookupError:
            # Server announced a charset Python doesn't know
            return self.body.decode("utf-8", errors="replace")

class MatchResult(BaseModel):
    url: str
    parsed: Optional[ParsedURL] = None
    short_url: Optional[str] = None
    title: Optional[str] = None
    rejected_reason: Optional[RejectReason] = None
    handled_by: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.rejected_reason is None and self.handled_by is None and bool(self.title)
