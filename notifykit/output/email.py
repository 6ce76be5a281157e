"""
Email output: resolve sender/subject/html from config + per-call options and
hand the message to the mail transport.
"""

from typing import Any, Mapping

import structlog
from pydantic import BaseModel

from notifykit.core.template import Template, render_any
from notifykit.mail.client import MailTransport
from notifykit.output.base import MailOptions, SendResult, fail_result, merge_config, ok_result

logger = structlog.get_logger()


class MailConfig(BaseModel):
    sender: str = ""
    subject_prefix: str = ""
    html: bool = False
    debug: bool = False


def _target_str(recipient: str | list[str]) -> str:
    if isinstance(recipient, list):
        return ", ".join(str(r) for r in recipient)
    return str(recipient)


class MailDispatcher:
    def __init__(self, transport: MailTransport, config: MailConfig | None = None):
        self.transport = transport
        self._config = config or MailConfig()

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    def update_config(self, **fields: Any) -> MailConfig:
        self._config = merge_config(self._config, fields)
        return self.get_config()

    def get_config(self) -> MailConfig:
        return self._config.model_copy()

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send(
        self,
        recipient: str | list[str],
        subject: str,
        body: str,
        options: MailOptions | None = None,
    ) -> SendResult:
        """Send an email. Never raises; failures come back as a failed SendResult.

        Args:
            recipient: Address or list of addresses.
            subject: Subject line; the configured prefix is prepended unless
                ``options.no_prefix`` is set.
            body: Plain text or HTML body.
            options: Per-call overrides.
        """
        options = options or MailOptions()
        config = self._config
        target = _target_str(recipient)

        sender = options.sender or config.sender
        html = options.is_html if options.is_html is not None else config.html
        full_subject = subject if options.no_prefix else f"{config.subject_prefix}{subject}"

        try:
            self.transport.send(
                recipient,
                full_subject,
                body,
                sender=sender,
                html=html,
                attachments=options.attachments,
            )
        except Exception as e:
            logger.warning("output.email.failed", target=target[:60], error=str(e))
            return fail_result("email", target, str(e))

        if config.debug:
            logger.info("output.email.sent", target=target[:60], html=html)
        return ok_result("email", target)

    def send_templated(
        self,
        recipient: str | list[str],
        subject: str,
        template: str | Template,
        data: Mapping[str, Any] | None = None,
        options: MailOptions | None = None,
    ) -> SendResult:
        """Render ``template`` against ``data`` and send it as the body."""
        try:
            body = render_any(template, data)
        except Exception as e:
            logger.warning("output.email.render_failed", error=str(e))
            return fail_result("email", _target_str(recipient), str(e))
        return self.send(recipient, subject, body, options)
