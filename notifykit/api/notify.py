import structlog
from fastapi import APIRouter, Depends

from notifykit.api.deps import get_mail_dispatcher, get_slack_dispatcher
from notifykit.output.base import SendResult
from notifykit.output.email import MailDispatcher
from notifykit.output.router import dispatch
from notifykit.output.slack import SlackDispatcher, select_delivery
from notifykit.schemas.notify import (
    DispatchRequest,
    EmailConfigOut,
    EmailConfigUpdate,
    EmailSendRequest,
    SendResultOut,
    SlackConfigOut,
    SlackConfigUpdate,
    SlackDirectMessageRequest,
    SlackReplyRequest,
    SlackSendRequest,
)

router = APIRouter(prefix="/api")
logger = structlog.get_logger()


def _out(result: SendResult) -> SendResultOut:
    return SendResultOut(**result.to_dict())


# ----------------------------------------------------------------------
# Sending — failures are returned as data with status 200
# ----------------------------------------------------------------------


@router.post("/notify/slack", response_model=SendResultOut, tags=["notify"])
def send_slack(req: SlackSendRequest, slack: SlackDispatcher = Depends(get_slack_dispatcher)):
    options = req.to_options()
    if req.data is not None:
        result = slack.send_templated_message(req.target, req.message, req.data, options)
    else:
        result = slack.send(req.target, req.message, options)
    return _out(result)


@router.post("/notify/slack/dm", response_model=SendResultOut, tags=["notify"])
def send_slack_dm(
    req: SlackDirectMessageRequest, slack: SlackDispatcher = Depends(get_slack_dispatcher)
):
    return _out(slack.send_direct_message(req.user_id, req.message, req.to_options()))


@router.post("/notify/slack/reply", response_model=SendResultOut, tags=["notify"])
def reply_slack(req: SlackReplyRequest, slack: SlackDispatcher = Depends(get_slack_dispatcher)):
    return _out(slack.reply_to_message(req.channel_id, req.ts, req.message, req.to_options()))


@router.post("/notify/email", response_model=SendResultOut, tags=["notify"])
def send_email(req: EmailSendRequest, mail: MailDispatcher = Depends(get_mail_dispatcher)):
    options = req.to_options()
    if req.data is not None:
        result = mail.send_templated(req.recipient, req.subject, req.body, req.data, options)
    else:
        result = mail.send(req.recipient, req.subject, req.body, options)
    return _out(result)


@router.post("/notify", response_model=list[SendResultOut], tags=["notify"])
def send_many(
    req: DispatchRequest,
    slack: SlackDispatcher = Depends(get_slack_dispatcher),
    mail: MailDispatcher = Depends(get_mail_dispatcher),
):
    outputs = req.outputs if isinstance(req.outputs, list) else [req.outputs]
    results = dispatch(
        [o.model_dump() for o in outputs], req.content, subject=req.subject, mail=mail, slack=slack
    )
    return [_out(r) for r in results]


# ----------------------------------------------------------------------
# Config
# ----------------------------------------------------------------------


def _slack_config_out(slack: SlackDispatcher) -> SlackConfigOut:
    config = slack.get_config()
    return SlackConfigOut(
        configured=config.is_configured,
        delivery=select_delivery(config).value,
        has_token=bool(config.token),
        has_webhook=bool(config.webhook_url),
        default_channel=config.default_channel,
        username=config.username,
        icon_emoji=config.icon_emoji,
        debug=config.debug,
    )


@router.get("/config/slack", response_model=SlackConfigOut, tags=["config"])
def get_slack_config(slack: SlackDispatcher = Depends(get_slack_dispatcher)):
    return _slack_config_out(slack)


@router.patch("/config/slack", response_model=SlackConfigOut, tags=["config"])
def update_slack_config(
    req: SlackConfigUpdate, slack: SlackDispatcher = Depends(get_slack_dispatcher)
):
    slack.update_config(**req.model_dump(exclude_none=True))
    logger.info("config.slack.updated", fields=sorted(req.model_fields_set))
    return _slack_config_out(slack)


@router.get("/config/email", response_model=EmailConfigOut, tags=["config"])
def get_email_config(mail: MailDispatcher = Depends(get_mail_dispatcher)):
    return EmailConfigOut(**mail.get_config().model_dump())


@router.patch("/config/email", response_model=EmailConfigOut, tags=["config"])
def update_email_config(
    req: EmailConfigUpdate, mail: MailDispatcher = Depends(get_mail_dispatcher)
):
    config = mail.update_config(**req.model_dump(exclude_none=True))
    logger.info("config.email.updated", fields=sorted(req.model_fields_set))
    return EmailConfigOut(**config.model_dump())
