from typing import Any

from pydantic import BaseModel

from notifykit.output.base import MailOptions, SlackOptions


class SlackOptionsIn(BaseModel):
    username: str | None = None
    icon_emoji: str | None = None
    attachments: list[dict] | None = None
    blocks: list[dict] | None = None
    unfurl_links: bool | None = None
    thread_ts: str | None = None

    def to_options(self) -> SlackOptions:
        return SlackOptions(**self.model_dump())


class SlackSendRequest(SlackOptionsIn):
    target: str = ""
    message: str
    data: dict[str, Any] | None = None  # if set, message is rendered as a template


class SlackDirectMessageRequest(SlackOptionsIn):
    user_id: str
    message: str


class SlackReplyRequest(SlackOptionsIn):
    channel_id: str
    ts: str
    message: str


class EmailSendRequest(BaseModel):
    recipient: str | list[str]
    subject: str
    body: str
    data: dict[str, Any] | None = None
    sender: str | None = None
    is_html: bool | None = None
    attachments: list[Any] | None = None
    no_prefix: bool = False

    def to_options(self) -> MailOptions:
        return MailOptions(
            sender=self.sender,
            is_html=self.is_html,
            attachments=self.attachments,
            no_prefix=self.no_prefix,
        )


class OutputTarget(BaseModel):
    type: str
    target: str | list[str] = ""


class DispatchRequest(BaseModel):
    outputs: OutputTarget | list[OutputTarget]
    content: str
    subject: str = ""


class MessageLocationOut(BaseModel):
    channel: str
    ts: str
    permalink: str
    thread_ts: str | None = None


class SendResultOut(BaseModel):
    channel: str
    success: bool
    target: str
    error: str | None = None
    location: MessageLocationOut | None = None


class SlackConfigUpdate(BaseModel):
    token: str | None = None
    webhook_url: str | None = None
    default_channel: str | None = None
    username: str | None = None
    icon_emoji: str | None = None
    debug: bool | None = None


class SlackConfigOut(BaseModel):
    """Secrets are reported as set/unset only."""

    configured: bool
    delivery: str
    has_token: bool
    has_webhook: bool
    default_channel: str
    username: str
    icon_emoji: str
    debug: bool


class EmailConfigUpdate(BaseModel):
    sender: str | None = None
    subject_prefix: str | None = None
    html: bool | None = None
    debug: bool | None = None


class EmailConfigOut(BaseModel):
    sender: str
    subject_prefix: str
    html: bool
    debug: bool
