#!/usr/bin/env python3
"""
Utility: show what the bot would answer for a line of chat text.

Usage:
  python scripts/scan_text.py "look at https://example.com and www.python.org" --schemeless

Fetches titles for real (no Slack connection needed). Rejected candidates are
listed with their reason when --verbose is given.
"""
from __future__ import annotations
import argparse
import os
import sys

# Add project src to path if not already available
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from link_announcer.config import get_settings
from link_announcer.pipeline.run import LinkPipeline
from link_announcer.rendering.chat_format import render_messages


def main():
    p = argparse.ArgumentParser(description="Run the link pipeline on a line of text")
    p.add_argument("text", help="Chat line to scan")
    p.add_argument("--channel", default="#local", help="Channel name used for the repeat cache")
    p.add_argument("--nick", default="tester", help="Value for %%nick%%")
    p.add_argument("--schemeless", action="store_true", help="Also detect bare domains")
    p.add_argument("--verbose", action="store_true", help="Print every candidate and its outcome")
    args = p.parse_args()

    settings = get_settings()
    if args.schemeless:
        settings = settings.model_copy(update={"URL_DETECT_SCHEMELESS": True})
    pipeline = LinkPipeline(settings)

    results = pipeline.scan(args.text, args.channel)
    if args.verbose:
        for r in results:
            outcome = r.rejected_reason.value if r.rejected_reason else (f"handled by {r.handled_by}" if r.handled_by else "ok")
            print(f"- {r.url}: {outcome}")
        print()

    messages = render_messages(
        [r for r in results if r.accepted],
        nick=args.nick,
        message_format=settings.URL_MESSAGE_FORMAT,
        base_format=settings.URL_BASE_FORMAT,
        merge_links=settings.URL_MERGE_LINKS,
    )
    if not messages:
        print("(nothing to say)")
    for m in messages:
        print(m)


if __name__ == '__main__':
    main()
