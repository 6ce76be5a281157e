import json

import httpx
import pytest

from notifykit.output.email import MailConfig, MailDispatcher
from notifykit.output.slack import SlackConfig, SlackDispatcher
from notifykit.slack.client import SlackClient


class HttpRecorder:
    """MockTransport handler that records requests and replies with a canned response."""

    def __init__(self, json_body: dict | None = None, text: str | None = None, status: int = 200):
        self.requests: list[httpx.Request] = []
        self.json_body = json_body
        self.text = text
        self.status = status
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.json_body is not None:
            return httpx.Response(self.status, json=self.json_body)
        return httpx.Response(self.status, text=self.text or "ok")

    @property
    def calls(self) -> int:
        return len(self.requests)

    def payload(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


class FakeMailTransport:
    def __init__(self, error: Exception | None = None):
        self.calls: list[dict] = []
        self.error = error

    def send(self, recipient, subject, body, *, sender="", html=False, attachments=None):
        self.calls.append(
            {
                "recipient": recipient,
                "subject": subject,
                "body": body,
                "sender": sender,
                "html": html,
                "attachments": attachments,
            }
        )
        if self.error is not None:
            raise self.error


@pytest.fixture
def recorder() -> HttpRecorder:
    return HttpRecorder(json_body={"ok": True, "channel": "C123", "ts": "1610000000.000100"})


@pytest.fixture
def slack_client(recorder) -> SlackClient:
    return SlackClient(http=httpx.Client(transport=httpx.MockTransport(recorder)))


@pytest.fixture
def make_slack(slack_client):
    def _make(**fields) -> SlackDispatcher:
        return SlackDispatcher(SlackConfig(**fields), slack_client)

    return _make


@pytest.fixture
def mail_transport() -> FakeMailTransport:
    return FakeMailTransport()


@pytest.fixture
def mail(mail_transport) -> MailDispatcher:
    return MailDispatcher(
        mail_transport,
        MailConfig(sender="alerts@example.com", subject_prefix="[ops] "),
    )
