import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

import logging

# Logger
from giftcard_web.logging.utils import get_app_logger
logger = get_app_logger("sentry")

# Settings
from giftcard_web.config.settings import GiftCardWebConfigs
configs = GiftCardWebConfigs()


def init_sentry():
    """Initialize Sentry SDK when SENTRY_ENABLED is set and a DSN is configured"""

    if not configs.SENTRY_ENABLED:
        logger.info("Sentry monitoring is disabled")
        return

    if not configs.SENTRY_DSN:
        logger.warning("SENTRY_ENABLED is true but SENTRY_DSN is not configured")
        return

    sentry_sdk.init(
        dsn=configs.SENTRY_DSN,
        environment=configs.ENVIRONMENT,
        release=configs.SENTRY_RELEASE,
        traces_sample_rate=float(configs.SENTRY_TRACES_SAMPLE_RATE),
        profiles_sample_rate=float(configs.SENTRY_PROFILES_SAMPLE_RATE),
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,        # Capture info and above as breadcrumbs
                event_level=logging.ERROR  # Send errors as events
            ),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        sample_rate=1.0,
        max_breadcrumbs=50,
        before_send=before_send_filter,
    )

    logger.info(f"Sentry initialized successfully for environment: {configs.ENVIRONMENT}")


def before_send_filter(event, hint):
    """Scrub headers and submitted form fields that carry personal data"""

    if 'request' in event and 'headers' in event['request']:
        sensitive_headers = ['authorization', 'cookie', 'x-api-key']
        headers = event['request']['headers']
        for header in sensitive_headers:
            if header in headers:
                headers[header] = '[Filtered]'

    # Recipient phone numbers are the only credential the accept flow has
    if 'request' in event and 'data' in event['request']:
        sensitive_fields = ['phone', 'token', 'secret', 'key']
        data = event['request']['data']
        if isinstance(data, dict):
            for field in sensitive_fields:
                for key in list(data.keys()):
                    if field.lower() in key.lower():
                        data[key] = '[Filtered]'

    return event


def capture_exception(exception, **kwargs):
    """Capture an exception in Sentry when enabled; callers log the traceback themselves"""
    if configs.SENTRY_ENABLED:
        sentry_sdk.capture_exception(exception, **kwargs)


def add_breadcrumb(message, category="custom", level="info", data=None):
    """Wrapper to add breadcrumbs only if Sentry is enabled"""
    if configs.SENTRY_ENABLED:
        sentry_sdk.add_breadcrumb(
            message=message,
            category=category,
            level=level,
            data=data or {}
        )
