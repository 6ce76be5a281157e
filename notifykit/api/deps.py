from notifykit.config import settings
from notifykit.mail.client import MailApiClient
from notifykit.output.email import MailConfig, MailDispatcher
from notifykit.output.slack import SlackConfig, SlackDispatcher
from notifykit.slack.client import SlackClient

# Process-wide dispatchers seeded from Settings. Config updates are not
# locked; concurrent writers race.
slack_dispatcher = SlackDispatcher(
    SlackConfig(
        token=settings.SLACK_BOT_TOKEN,
        webhook_url=settings.SLACK_WEBHOOK_URL,
        default_channel=settings.SLACK_DEFAULT_CHANNEL,
        username=settings.SLACK_USERNAME,
        icon_emoji=settings.SLACK_ICON_EMOJI,
        debug=settings.SLACK_DEBUG,
    ),
    SlackClient(timeout=settings.HTTP_TIMEOUT),
)

mail_dispatcher = MailDispatcher(
    MailApiClient(settings.MAIL_API_URL, settings.MAIL_API_KEY, timeout=settings.HTTP_TIMEOUT),
    MailConfig(
        sender=settings.MAIL_SENDER,
        subject_prefix=settings.MAIL_SUBJECT_PREFIX,
        html=settings.MAIL_HTML,
        debug=settings.MAIL_DEBUG,
    ),
)


def get_slack_dispatcher() -> SlackDispatcher:
    return slack_dispatcher


def get_mail_dispatcher() -> MailDispatcher:
    return mail_dispatcher
