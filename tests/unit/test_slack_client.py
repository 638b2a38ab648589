import pytest
from unittest.mock import patch
from slack_sdk.errors import SlackApiError

# slack_client is instantiated at module level, so we patch methods on its WebClient

def test_post_message_success():
    """
    WHY: Verify that our wrapper correctly calls the official Slack SDK with the right parameters.
    HOW: Mock the underlying `chat_postMessage` method. Call `post_message` with sample data.
    EXPECTED: `chat_postMessage` is called once, as plain text with unfurling disabled.
    """
    from link_announcer.slack.client import slack_client

    with patch.object(slack_client.client, 'chat_postMessage') as mock_post:
        mock_post.return_value = {"ok": True}

        slack_client.post_message("C1", "[ http://example.com/ ] Example")

        mock_post.assert_called_once_with(
            channel="C1",
            text="[ http://example.com/ ] Example",
            mrkdwn=False,
            unfurl_links=False,
            unfurl_media=False
        )

def test_post_message_in_thread():
    from link_announcer.slack.client import slack_client

    with patch.object(slack_client.client, 'chat_postMessage') as mock_post:
        slack_client.post_message("C1", "hi", thread_ts="123.456")
        assert mock_post.call_args.kwargs["thread_ts"] == "123.456"

def test_post_message_rate_limit_retry():
    """
    WHY: Slack APIs often rate limit bots. We need to ensure we retry automatically.
    HOW: Mock `chat_postMessage` to fail once with 'ratelimited' and then succeed.
    EXPECTED: `chat_postMessage` is called twice.
    """
    from link_announcer.slack.client import slack_client

    # We need to mock the wait to make it fast
    with patch("time.sleep", return_value=None):
        with patch.object(slack_client.client, 'chat_postMessage') as mock_post:
            err = SlackApiError("ratelimited", {"ok": False, "error": "ratelimited"})
            mock_post.side_effect = [err, {"ok": True}]

            slack_client.post_message("C1", "Retry Me")

            assert mock_post.call_count == 2

def test_post_message_other_errors_not_retried():
    from link_announcer.slack.client import slack_client

    with patch.object(slack_client.client, 'chat_postMessage') as mock_post:
        mock_post.side_effect = SlackApiError("not_in_channel", {"ok": False, "error": "not_in_channel"})
        with pytest.raises(SlackApiError):
            slack_client.post_message("C1", "nope")
        assert mock_post.call_count == 1

def test_get_user_name():
    from link_announcer.slack.client import slack_client

    with patch.object(slack_client.client, 'users_info') as mock_info:
        mock_info.return_value = {"user": {"name": "alice", "profile": {"display_name": "Alice"}}}
        assert slack_client.get_user_name("U1") == "Alice"

        mock_info.return_value = {"user": {"name": "bob", "profile": {"display_name": ""}}}
        assert slack_client.get_user_name("U2") == "bob"

        mock_info.side_effect = SlackApiError("user_not_found", {"ok": False, "error": "user_not_found"})
        assert slack_client.get_user_name("U3") == "U3"
