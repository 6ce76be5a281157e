from dataclasses import asdict, dataclass
from typing import Any, TypeVar

from pydantic import BaseModel

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class UnknownConfigFieldError(ValueError):
    pass


def merge_config(config: ConfigT, fields: dict[str, Any]) -> ConfigT:
    """Return a copy of ``config`` with the non-None ``fields`` applied (last write wins).

    Values are not validated, but names are: a key that is not a field of the
    config model raises UnknownConfigFieldError instead of being silently
    merged, so a typo such as ``webhook=`` cannot leave a dispatcher unconfigured.
    """
    unknown = set(fields) - set(type(config).model_fields)
    if unknown:
        raise UnknownConfigFieldError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
    return config.model_copy(update={k: v for k, v in fields.items() if v is not None})


@dataclass(frozen=True)
class MessageLocation:
    channel: str  # channel id returned by the API, e.g. "C123"
    ts: str
    permalink: str
    thread_ts: str | None = None


@dataclass(frozen=True)
class SendResult:
    channel: str  # "email" or "slack"
    success: bool
    target: str  # recipient, channel or webhook
    error: str | None = None
    location: MessageLocation | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def ok_result(channel: str, target: str, location: MessageLocation | None = None) -> SendResult:
    return SendResult(channel=channel, success=True, target=target, location=location)


def fail_result(channel: str, target: str, error: str | None) -> SendResult:
    return SendResult(channel=channel, success=False, target=target, error=error or "Unknown error")


@dataclass
class MailOptions:
    """Per-call overrides for an email send. None means "use the configured default"."""

    sender: str | None = None
    is_html: bool | None = None
    attachments: list[Any] | None = None
    no_prefix: bool = False


@dataclass
class SlackOptions:
    """Per-call overrides for a Slack send. None fields are left out of the payload."""

    username: str | None = None
    icon_emoji: str | None = None
    attachments: list[dict] | None = None
    blocks: list[dict] | None = None
    unfurl_links: bool | None = None  # False suppresses link previews
    thread_ts: str | None = None
