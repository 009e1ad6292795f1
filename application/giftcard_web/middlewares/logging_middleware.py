"""
Request and audit logging middleware.
Opens a fresh request context per request and, when AUDIT_LOGGING_ENABLED is
set, writes one audit record per request with duration and status.
"""
import socket
import time
from datetime import datetime
from urllib.parse import parse_qsl

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from giftcard_web.logging.utils import get_app_logger, init_audit_logger
from giftcard_web.logging.config import LoggingConfig
from giftcard_web.middlewares.request_context import (
    RequestContext,
    clear_request_context,
    create_request_id,
    request_context,
    set_request_context,
)

# settings
from giftcard_web.config.settings import GiftCardWebConfigs
configs = GiftCardWebConfigs()

MASKED_FORM_FIELDS = ('phone', 'recipientphone')
MAX_LOGGED_BODY = 1000


class AuditMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.logger = get_app_logger('giftcard_web.requests')
        self.exclude_audit_paths = exclude_paths or ['/health', '/static', '/docs', '/redoc']
        self.hostname = socket.gethostname()
        self.app_name = configs.APP_NAME
        self.version = configs.APP_VERSION

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        set_request_context(RequestContext())
        request_id = create_request_id()
        request_context.request_method = request.method
        request_context.request_path = request.url.path
        start_time = time.time()
        timestamp = datetime.now().isoformat()

        should_audit = LoggingConfig.AUDIT_LOGGING_ENABLED and not any(
            request.url.path.startswith(p) for p in self.exclude_audit_paths
        )
        body_bytes = await request.body() if should_audit else b''

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = (time.time() - start_time) * 1000
            # The traceback is logged once, by the error boundary
            self.logger.error(f"request_exception | method={request.method} path={request.url.path} exception_type={exc.__class__.__name__} duration_ms={duration:.0f}")
            if should_audit:
                audit_data = self._build_audit_data(request, 500, body_bytes, duration, request_id, timestamp)
                audit_data['exception'] = exc.__class__.__name__
                init_audit_logger().info("Audit log (exception)", extra=audit_data)
            clear_request_context()
            raise

        duration = (time.time() - start_time) * 1000
        response.headers['X-Request-ID'] = request_id
        self.logger.info(f"request_completed | method={request.method} path={request.url.path} status={response.status_code} duration_ms={duration:.0f}")
        if should_audit:
            audit_data = self._build_audit_data(request, response.status_code, body_bytes, duration, request_id, timestamp)
            init_audit_logger().info("Audit log", extra=audit_data)
        clear_request_context()
        return response

    def _mask_form(self, body_bytes: bytes, content_type: str):
        """Form bodies are logged with phone numbers masked"""
        if not body_bytes:
            return {}
        text = body_bytes.decode('utf-8', errors='replace')
        if 'application/x-www-form-urlencoded' not in content_type:
            return text[:MAX_LOGGED_BODY]
        return {
            key: ('****' if key.lower() in MASKED_FORM_FIELDS else value)
            for key, value in parse_qsl(text, keep_blank_values=True)
        }

    def _build_audit_data(self, request: Request, status_code: int, body_bytes: bytes, duration: float, request_id: str, timestamp: str) -> dict:
        request_json = {
            "GET": dict(request.query_params),
            "BODY": self._mask_form(body_bytes, request.headers.get('content-type', '')),
        }
        return {
            'duration': round(duration, 2),
            'header_referer': request.headers.get('referer', ''),
            'hostname': self.hostname,
            'app_name': self.app_name,
            'module_name': request_context.module_name,
            'request': request_json,
            'request_id': request_id,
            'request_method': request.method,
            'request_path': request.url.path,
            'status_code': status_code,
            'timestamp': timestamp,
            'version': self.version,
        }
