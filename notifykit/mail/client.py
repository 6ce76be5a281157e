"""
Hosted mail API client.

Posts one JSON message per call with bearer auth. HTTP error statuses are
raised so the dispatcher reports them as failed sends.
"""

from typing import Any, Protocol

import httpx
import structlog

logger = structlog.get_logger()


class MailTransport(Protocol):
    def send(
        self,
        recipient: str | list[str],
        subject: str,
        body: str,
        *,
        sender: str = "",
        html: bool = False,
        attachments: list[Any] | None = None,
    ) -> Any: ...


class MailApiClient:
    def __init__(self, api_url: str, api_key: str, http: httpx.Client | None = None, timeout: float = 30):
        self.api_url = api_url
        self.api_key = api_key
        self._http = http or httpx.Client(timeout=timeout)

    def close(self):
        self._http.close()

    def send(
        self,
        recipient: str | list[str],
        subject: str,
        body: str,
        *,
        sender: str = "",
        html: bool = False,
        attachments: list[Any] | None = None,
    ) -> httpx.Response:
        """Send one message.

        Args:
            recipient: Address or list of addresses.
            subject: Final subject line (prefix already applied).
            body: Message body, sent as "html" or "text" depending on ``html``.
            sender: From address/name.
            attachments: Passed through to the API unchanged.
        """
        to = recipient if isinstance(recipient, list) else [recipient]
        message: dict[str, Any] = {
            "from": sender,
            "to": to,
            "subject": subject,
            "html" if html else "text": body,
        }
        if attachments:
            message["attachments"] = attachments

        resp = self._http.post(
            self.api_url,
            json=message,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        resp.raise_for_status()
        logger.debug("mail.api.accepted", status=resp.status_code, recipients=len(to))
        return resp
