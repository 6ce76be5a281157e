"""
Output router — send one piece of content to several targets.

Accepts a single output_config dict or a list of them.
Format: {"type": "slack", "target": "#alerts"} or {"type": "email", "target": "ops@example.com"}
"""

import structlog

from notifykit.output.base import SendResult, fail_result
from notifykit.output.email import MailDispatcher
from notifykit.output.slack import SlackDispatcher

logger = structlog.get_logger()


def dispatch(
    output_config: dict | list[dict],
    content: str,
    *,
    subject: str = "",
    mail: MailDispatcher | None = None,
    slack: SlackDispatcher | None = None,
) -> list[SendResult]:
    """Route content to one or more output channels.

    Args:
        output_config: Single config or list of configs.
            Each must have "type" and "target".
        content: Text content to dispatch.
        subject: Email subject, ignored for Slack.
        mail: Dispatcher used for "email" outputs.
        slack: Dispatcher used for "slack" outputs.

    Returns:
        List of SendResult for each target, in input order.
    """
    if isinstance(output_config, dict):
        output_config = [output_config]

    results = []
    for cfg in output_config:
        channel_type = cfg.get("type")
        target = cfg.get("target", "")
        label = _target_label(target)

        try:
            if channel_type == "slack" and slack is not None:
                result = slack.send(target, content)
            elif channel_type == "email" and mail is not None:
                result = mail.send(target, subject, content)
            elif channel_type in ("slack", "email"):
                logger.warning("output.no_dispatcher", type=channel_type)
                result = fail_result(
                    channel_type, label, f"No dispatcher for output type: {channel_type}"
                )
            else:
                logger.warning("output.unknown_type", type=channel_type)
                result = fail_result(
                    str(channel_type or "unknown"), label, f"Unknown output type: {channel_type}"
                )
        except Exception as e:
            # A malformed entry fails on its own; the rest are still sent
            logger.warning("output.dispatch_failed", type=channel_type, error=str(e))
            result = fail_result(str(channel_type or "unknown"), label, str(e))
        results.append(result)

    return results


def _target_label(target) -> str:
    if isinstance(target, list):
        return ", ".join(str(t) for t in target)
    return str(target)
