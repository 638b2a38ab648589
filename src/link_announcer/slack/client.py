from typing import Optional
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception
from ..config import get_settings
from ..log import get_logger
from .post_blocks import build_post_payload

logger = get_logger("slack_client")

def _is_rate_limited(exc: BaseException) -> bool:
    return isinstance(exc, SlackApiError) and exc.response.get("error") == "ratelimited"

class SlackClientWrapper:
    def __init__(self, token: Optional[str] = None):
        self.client = WebClient(token=token or get_settings().SLACK_BOT_TOKEN)

    @retry(
        retry=retry_if_exception(_is_rate_limited),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True
    )
    def post_message(self, channel_id: str, text: str, thread_ts: Optional[str] = None):
        """
        Posts a plain-text message to a channel (or thread, if thread_ts is given).
        Rate limits are retried; other API errors are logged and re-raised.
        """
        payload = build_post_payload(channel=channel_id, text=text, thread_ts=thread_ts)
        try:
            self.client.chat_postMessage(**payload)
        except SlackApiError as e:
            if e.response["error"] == "ratelimited":
                logger.warning("Slack rate limited, retrying...")
                raise e
            logger.error(f"Slack API error: {e.response['error']}")
            raise

    def get_user_name(self, user_id: str) -> str:
        """
        Display name for %nick%; falls back to the raw user ID.
        Requires 'users:read' scope.
        """
        try:
            response = self.client.users_info(user=user_id)
        except SlackApiError as e:
            logger.debug(f"Error fetching user {user_id}: {e.response['error']}")
            return user_id
        user = response.get("user") or {}
        profile = user.get("profile") or {}
        return profile.get("display_name") or user.get("real_name") or user.get("name") or user_id

slack_client = SlackClientWrapper()
