import re
from typing import Dict, Any, Optional
from ..config import get_settings

# Slack sends links as <https://example.com> or <https://example.com|example.com>
_SLACK_LINK_RE = re.compile(r"<((?:https?|mailto):[^>|]+)(?:\|[^>]*)?>")

def unwrap_slack_links(text: str) -> str:
    """Replace Slack link markup with the bare URL so extraction sees plain text."""
    return _SLACK_LINK_RE.sub(r"\1", text)

# Slack escapes only these three in message text; &amp; goes last so "&amp;lt;" stays "&lt;"
_SLACK_ENTITIES = (("&lt;", "<"), ("&gt;", ">"), ("&amp;", "&"))

def decode_slack_entities(text: str) -> str:
    for entity, char in _SLACK_ENTITIES:
        text = text.replace(entity, char)
    return text

def parse_event(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Parse a Slack message event.
    Returns a simplified event dict if valid and relevant, else None.
    """
    # 1. Filter by Channel (empty list = every channel the bot is in)
    channel = event.get("channel")
    allowed = get_settings().channel_ids
    if allowed and channel not in allowed:
        return None

    # 2. Ignore Bots (including our own replies)
    if event.get("subtype") == "bot_message":
        return None
    if event.get("bot_id"):
        return None

    # 3. Ignore edits/deletions, a link is announced when first posted
    if event.get("subtype") in ["message_changed", "message_deleted"]:
        return None

    text = event.get("text", "")
    if not text:
        return None

    return {
        "channel": channel,
        "ts": event.get("ts"),
        "thread_ts": event.get("thread_ts"),
        "user": event.get("user"),
        "text": decode_slack_entities(unwrap_slack_links(text))
    }
