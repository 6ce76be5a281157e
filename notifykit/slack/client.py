"""
Slack HTTP client — thin synchronous transport, no retries.

Handles:
- Incoming webhook: POST JSON to a pre-authorized URL (no auth, no ids returned)
- Web API: chat.postMessage with bearer token, JSON response returned as-is
"""

import httpx
import structlog

logger = structlog.get_logger()

SLACK_BASE = "https://slack.com"
POST_MESSAGE_URL = f"{SLACK_BASE}/api/chat.postMessage"


class SlackClient:
    def __init__(self, http: httpx.Client | None = None, timeout: float = 30):
        self._http = http or httpx.Client(timeout=timeout)

    def close(self):
        self._http.close()

    # ------------------------------------------------------------------
    # Webhook
    # ------------------------------------------------------------------

    def post_webhook(self, webhook_url: str, payload: dict) -> httpx.Response:
        """Send a payload to an incoming webhook. The response body is not inspected."""
        resp = self._http.post(webhook_url, json=payload)
        logger.debug("slack.webhook.posted", status=resp.status_code)
        return resp

    # ------------------------------------------------------------------
    # Web API
    # ------------------------------------------------------------------

    def post_message(self, token: str, payload: dict) -> dict:
        """Call chat.postMessage and return the decoded JSON body.

        Raises whatever httpx raises on network failure and ValueError on a
        non-JSON body; callers turn both into failed results.
        """
        resp = self._http.post(
            POST_MESSAGE_URL,
            json=payload,
            headers={"Authorization": f"Bearer {token}"},
        )
        data = resp.json()
        if not data.get("ok"):
            logger.debug("slack.post_message.rejected", error=data.get("error"))
        return data
