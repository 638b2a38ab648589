"""Slack message payload builders.

Provides build_post_payload() for chat.postMessage calls.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


def build_post_payload(
    channel: str,
    text: str,
    thread_ts: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Payload for chat.postMessage.
    Unfurling stays off: the title line is our own preview of the link.
    """
    payload: Dict[str, Any] = {
        "channel": channel,
        "text": text,
        "mrkdwn": False,
        "unfurl_links": False,
        "unfurl_media": False,
    }
    if thread_ts:
        payload["thread_ts"] = thread_ts
    return payload
