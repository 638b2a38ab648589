"""Chat message formatting for link titles.

Per-link template placeholders: %title%, %link%, %nick%.
Outer template placeholders: %message% (the joined per-link strings), %nick%.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from link_announcer.schemas.links import MatchResult

LINK_SEPARATOR = "; "


def fill_template(template: str, values: Dict[str, str]) -> str:
    out = template
    for key, value in values.items():
        out = out.replace(f"%{key}%", value)
    return out


def render_link(template: str, result: MatchResult, nick: str) -> str:
    return fill_template(template, {
        "title": result.title or "",
        "link": result.short_url or result.url,
        "nick": nick,
    })


def render_messages(
    results: Iterable[MatchResult],
    nick: str,
    message_format: str,
    base_format: str,
    merge_links: bool = True,
) -> List[str]:
    """
    Turn the accepted links of one incoming line into outgoing messages.

    merge_links=True: one message for the whole line.
    merge_links=False: the outer template is sent once per link, and each copy
    still carries every link of the line.
    """
    responses = [render_link(message_format, r, nick) for r in results if r.title]
    if not responses:
        return []

    message = fill_template(base_format, {
        "message": LINK_SEPARATOR.join(responses),
        "nick": nick,
    })
    if merge_links:
        return [message]
    return [message for _ in responses]
