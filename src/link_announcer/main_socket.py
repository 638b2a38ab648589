"""
Socket Mode event listener for Link Announcer.
Connects to Slack via WebSocket - no public URL needed.
"""
import logging
import sys
from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler
from .config import get_settings
from .errors import ShortenerConfigError
from .log import setup_logging
from .pipeline.run import LinkPipeline
from .retrieval.url import extract_urls
from .slack.client import slack_client
from .slack.parse import parse_event

setup_logging()
logger = logging.getLogger("socket_listener")

def build_app(pipeline: LinkPipeline) -> App:
    settings = pipeline.settings
    app = App(token=settings.SLACK_BOT_TOKEN)

    @app.event("message")
    def handle_message_events(event, logger):
        """
        Handle incoming message events from Slack via Socket Mode.
        Announces titles for any links in the message.
        """
        parsed = parse_event(event)
        if not parsed:
            logger.debug(f"Ignoring event {event.get('ts')} (subtype={event.get('subtype')})")
            return

        # process_message would return [] anyway; checking here skips the users_info lookup
        if not extract_urls(parsed["text"], settings.URL_DETECT_SCHEMELESS):
            return

        nick = slack_client.get_user_name(parsed["user"]) if parsed["user"] else "someone"
        pipeline.handle_message(
            parsed["text"],
            parsed["channel"],
            nick,
            send=lambda channel, text: slack_client.post_message(channel, text, thread_ts=parsed["thread_ts"]),
        )

    return app

def main():
    """Start the Socket Mode handler."""
    settings = get_settings()
    logger.info("Starting Socket Mode listener...")
    if settings.channel_ids:
        logger.info(f"Monitoring channels: {', '.join(settings.channel_ids)}")
    else:
        logger.info("Monitoring every channel the bot is a member of")

    try:
        pipeline = LinkPipeline(settings)
    except ShortenerConfigError as e:
        logger.error(f"Refusing to start: {e}")
        sys.exit(1)

    app = build_app(pipeline)

    # Start Socket Mode handler (blocks)
    handler = SocketModeHandler(app, settings.SLACK_APP_TOKEN)
    handler.start()

if __name__ == "__main__":
    main()
