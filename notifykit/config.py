from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    HTTP_TIMEOUT: float = 30

    # Slack: webhook wins over the bot token when both are set
    SLACK_BOT_TOKEN: str = ""
    SLACK_WEBHOOK_URL: str = ""
    SLACK_DEFAULT_CHANNEL: str = "#general"
    SLACK_USERNAME: str = "Notifier"
    SLACK_ICON_EMOJI: str = ":bell:"
    SLACK_DEBUG: bool = False

    # Hosted mail API
    MAIL_API_URL: str = "https://api.resend.com/emails"
    MAIL_API_KEY: str = ""
    MAIL_SENDER: str = ""
    MAIL_SUBJECT_PREFIX: str = ""
    MAIL_HTML: bool = False
    MAIL_DEBUG: bool = False


settings = Settings()
