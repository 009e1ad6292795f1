"""
Error boundary: every error that escapes a page controller is rendered as an
HTML error page. Known HTTP errors show their status and message; anything
else shows a generic apology and is reported.
"""
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from giftcard_web.config.sentry import capture_exception, add_breadcrumb
from giftcard_web.logging.utils import get_app_logger
from giftcard_web.middlewares.request_context import request_context
from giftcard_web.utils.templating import templates

logger = get_app_logger(__name__)

GENERIC_HTTP_MESSAGE = "Something went wrong. Please try again."
GENERIC_FAILURE_MESSAGE = "An unexpected error occurred. Please try again later."


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def render_error_page(request: Request, status_code: int, message: str | None = None, known: bool = True):
    if known:
        context = {
            "heading": f"{status_code} - {_status_phrase(status_code)}",
            "message": message or GENERIC_HTTP_MESSAGE,
            "not_found": status_code == status.HTTP_404_NOT_FOUND,
        }
    else:
        context = {"heading": "An error occurred", "message": GENERIC_FAILURE_MESSAGE, "not_found": False}
    return templates.TemplateResponse(request, "error.html", context, status_code=status_code)


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed requests that never reached a controller"""
    request_context.module_name = 'middleware_handlers'
    logger.warning(f"validation_error | method={request.method} url={str(request.url)} errors={exc.errors()}")
    return render_error_page(request, status.HTTP_400_BAD_REQUEST, "Invalid request")


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Known HTTP-style errors keep their status and message"""
    request_context.module_name = 'middleware_handlers'
    status_code = exc.status_code
    detail = exc.detail if isinstance(exc.detail, str) else None
    if status_code >= 500:
        logger.error(f"http_exception | method={request.method} url={str(request.url)} status_code={status_code} detail={detail}")
        add_breadcrumb(
            message=f"HTTP {status_code} error on {request.method} {request.url}",
            category="http",
            level="error",
            data={"status_code": status_code, "detail": detail}
        )
    else:
        logger.warning(f"http_exception | method={request.method} url={str(request.url)} status_code={status_code} detail={detail}")

    response = render_error_page(request, status_code, detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _general_exception_handler(request: Request, exc: Exception):
    """Unknown failures: generic apology, details only in logs and Sentry"""
    request_context.module_name = 'middleware_handlers'
    logger.error(
        f"unhandled_exception | method={request.method} url={str(request.url)} exception_type={type(exc).__name__} exception_message={str(exc)}",
        exc_info=exc,
    )
    add_breadcrumb(
        message=f"Unhandled exception on {request.method} {request.url}",
        category="exception",
        level="error",
        data={"exception_type": type(exc).__name__}
    )
    capture_exception(exc)
    return render_error_page(request, status.HTTP_500_INTERNAL_SERVER_ERROR, known=False)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the given FastAPI instance."""
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _general_exception_handler)
