import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from notifykit.output.base import UnknownConfigFieldError

logger = structlog.get_logger()


async def config_field_error_handler(request: Request, exc: UnknownConfigFieldError) -> JSONResponse:
    logger.warning("config.unknown_field", path=request.url.path, detail=str(exc))
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid config update", "detail": str(exc)},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)},
    )
