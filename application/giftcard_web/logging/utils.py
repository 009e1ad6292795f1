"""
Logging utilities for the gift card web layer
"""
import logging

from giftcard_web.logging.config import LoggingConfig
from giftcard_web.logging.handlers import get_app_handler, get_audit_handler
from giftcard_web.logging.filters import RequestContextFilter, BusinessContextFilter


AUDIT_LOGGER_NAME = 'giftcard_web.audit'


def get_app_logger(name: str = 'giftcard_web'):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = get_app_handler(name.replace('.', '_'))
        if not handler.filters:
            handler.addFilter(RequestContextFilter())
            handler.addFilter(BusinessContextFilter())
        logger.addHandler(handler)
        logger.setLevel(LoggingConfig.level())
        logger.propagate = False
    return logger


def init_audit_logger():
    logger = logging.getLogger(AUDIT_LOGGER_NAME)
    if not logger.handlers:
        handler = get_audit_handler()
        if not handler.filters:
            handler.addFilter(RequestContextFilter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def initialize_logging():
    is_valid, message = LoggingConfig.is_valid_config()
    logger = get_app_logger('giftcard_web')
    if not is_valid:
        logger.warning(message)
    logger.info(f"Logging system initialized | to_file={LoggingConfig.LOG_TO_FILE} audit={LoggingConfig.AUDIT_LOGGING_ENABLED}")
