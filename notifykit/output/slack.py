"""
Slack output: send via incoming webhook or the chat.postMessage Web API.

- webhook URL configured → webhook mode (wins even if a token is also set)
- else bot token configured → Web API mode, returns channel/ts/permalink
- else → failed result without any network call
"""

import enum
from typing import Any, Mapping

import structlog
from pydantic import BaseModel

from notifykit.core.template import Template, render_any
from notifykit.output.base import (
    MessageLocation,
    SendResult,
    SlackOptions,
    fail_result,
    merge_config,
    ok_result,
)
from notifykit.slack.client import SLACK_BASE, SlackClient

logger = structlog.get_logger()

NOT_CONFIGURED_ERROR = "Slack is not configured: set a bot token or webhook URL"
TOKEN_REQUIRED_ERROR = "Slack bot token is required to reply to a message"
API_FALLBACK_ERROR = "Unknown Slack API error"


class SlackConfig(BaseModel):
    token: str = ""
    webhook_url: str = ""
    default_channel: str = "#general"
    username: str = "Notifier"
    icon_emoji: str = ":bell:"
    debug: bool = False

    @property
    def is_configured(self) -> bool:
        return bool(self.token or self.webhook_url)


class Delivery(enum.Enum):
    WEBHOOK = "webhook"
    TOKEN = "token"
    UNCONFIGURED = "unconfigured"


def select_delivery(config: SlackConfig) -> Delivery:
    if config.webhook_url:
        return Delivery.WEBHOOK
    if config.token:
        return Delivery.TOKEN
    return Delivery.UNCONFIGURED


def normalize_target(target: str) -> str:
    """"@user" stays a direct message; anything else is a channel and gets a "#"."""
    if not target or target.startswith(("@", "#")):
        return target
    return f"#{target}"


def build_permalink(channel: str, ts: str) -> str:
    return f"{SLACK_BASE}/archives/{channel}/p{ts.replace('.', '')}"


def build_payload(channel: str, text: str, config: SlackConfig, options: SlackOptions) -> dict:
    payload: dict[str, Any] = {
        "channel": channel,
        "text": text,
        "username": options.username or config.username,
        "icon_emoji": options.icon_emoji or config.icon_emoji,
    }
    if options.unfurl_links is not None:
        payload["unfurl_links"] = options.unfurl_links
    if options.attachments:
        payload["attachments"] = options.attachments
    if options.blocks:
        payload["blocks"] = options.blocks
    if options.thread_ts:
        payload["thread_ts"] = options.thread_ts
    return payload


def parse_api_response(data: dict, target: str) -> SendResult:
    """Turn a chat.postMessage response body into a SendResult."""
    if not data.get("ok"):
        return fail_result("slack", target, data.get("error") or API_FALLBACK_ERROR)

    channel = str(data.get("channel", ""))
    ts = str(data.get("ts", ""))
    location = MessageLocation(
        channel=channel,
        ts=ts,
        thread_ts=str(data["thread_ts"]) if data.get("thread_ts") else None,
        permalink=build_permalink(channel, ts),
    )
    return ok_result("slack", target, location)


class SlackDispatcher:
    def __init__(self, config: SlackConfig | None = None, client: SlackClient | None = None):
        self._config = config or SlackConfig()
        self.client = client or SlackClient()

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    def update_config(self, **fields: Any) -> SlackConfig:
        self._config = merge_config(self._config, fields)
        if not self._config.is_configured:
            logger.warning("output.slack.not_configured")
        return self.get_config()

    def get_config(self) -> SlackConfig:
        return self._config.model_copy()

    def is_configured(self) -> bool:
        return self._config.is_configured

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send(self, target: str, message: str, options: SlackOptions | None = None) -> SendResult:
        """Send a message to a channel ("general", "#general") or user ("@alice").

        Never raises; failures come back as a failed SendResult.

        Args:
            target: Channel or user; empty falls back to the default channel.
            message: Message text.
            options: Per-call overrides.
        """
        config = self._config
        options = options or SlackOptions()
        delivery = select_delivery(config)
        channel = target or config.default_channel

        try:
            channel = normalize_target(channel)
            if delivery is Delivery.UNCONFIGURED:
                result = fail_result("slack", channel, NOT_CONFIGURED_ERROR)
            else:
                payload = build_payload(channel, message, config, options)
                if delivery is Delivery.WEBHOOK:
                    # Webhooks return no message identifiers
                    self.client.post_webhook(config.webhook_url, payload)
                    result = ok_result("slack", channel)
                else:
                    data = self.client.post_message(config.token, payload)
                    result = parse_api_response(data, channel)
        except Exception as e:
            result = fail_result("slack", str(channel), str(e))

        self._log_result(result, delivery)
        return result

    def send_direct_message(
        self, user_id: str, message: str, options: SlackOptions | None = None
    ) -> SendResult:
        user_id = str(user_id)
        target = user_id if user_id.startswith("@") else f"@{user_id}"
        return self.send(target, message, options)

    def reply_to_message(
        self,
        channel_id: str,
        ts: str,
        message: str,
        options: SlackOptions | None = None,
    ) -> SendResult:
        """Post ``message`` into the thread anchored at ``ts``. Web API only."""
        config = self._config
        options = options or SlackOptions()

        if not config.token:
            logger.warning("output.slack.failed", target=channel_id, error=TOKEN_REQUIRED_ERROR)
            return fail_result("slack", channel_id, TOKEN_REQUIRED_ERROR)

        payload = build_payload(channel_id, message, config, options)
        payload["thread_ts"] = ts
        try:
            data = self.client.post_message(config.token, payload)
            result = parse_api_response(data, channel_id)
        except Exception as e:
            result = fail_result("slack", channel_id, str(e))

        self._log_result(result, Delivery.TOKEN)
        return result

    def send_templated_message(
        self,
        target: str,
        template: str | Template,
        data: Mapping[str, Any] | None = None,
        options: SlackOptions | None = None,
    ) -> SendResult:
        try:
            message = render_any(template, data)
        except Exception as e:
            logger.warning("output.slack.render_failed", error=str(e))
            return fail_result("slack", target, str(e))
        return self.send(target, message, options)

    def _log_result(self, result: SendResult, delivery: Delivery) -> None:
        if not result.success:
            logger.warning(
                "output.slack.failed",
                target=result.target[:60],
                delivery=delivery.value,
                error=result.error,
            )
        elif self._config.debug:
            logger.info(
                "output.slack.sent",
                target=result.target[:60],
                delivery=delivery.value,
                permalink=result.location.permalink if result.location else None,
            )
