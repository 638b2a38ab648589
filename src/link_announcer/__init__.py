"""Link Announcer - a Slack bot that announces titles for links posted in chat.

Every message is scanned for URLs; each one is normalized, validated, checked
against a per-channel repeat cache, optionally shortened, and answered with
the page title.

Components:
- main_socket: Socket Mode event listener
- pipeline: per-message link processing
- retrieval: extraction, normalization, validation, fetching and titles
- store: per-channel repeat-link cache
- shorten: URL shortener registry
- renderers: hooks that take over specific links
- rendering: outgoing message templates
- slack: Slack API integration
"""
