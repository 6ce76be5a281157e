import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from notifykit.api.deps import mail_dispatcher, slack_dispatcher
from notifykit.api.notify import router as notify_router
from notifykit.config import settings
from notifykit.middleware.error_handler import config_field_error_handler, global_exception_handler
from notifykit.middleware.logging import LoggingMiddleware
from notifykit.output.base import UnknownConfigFieldError


logger = structlog.get_logger()


def configure_logging():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.dev.ConsoleRenderer()
                if settings.APP_ENV == "development"
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(
        "app.startup",
        env=settings.APP_ENV,
        slack_configured=slack_dispatcher.is_configured(),
    )

    yield

    # Shutdown
    slack_dispatcher.client.close()
    mail_dispatcher.transport.close()
    logger.info("app.shutdown")


app = FastAPI(title="notifykit", lifespan=lifespan)

# Middleware
app.add_middleware(LoggingMiddleware)

# Exception handlers
app.add_exception_handler(UnknownConfigFieldError, config_field_error_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Routes
app.include_router(notify_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
