"""
Logging handlers: stderr stream by default, local JSON files when LOG_TO_FILE is set.
"""
import logging
import os

from giftcard_web.logging.config import LoggingConfig
from giftcard_web.logging.formatters import AppLogsJSONFormatter, AuditLogsJSONFormatter


_handlers = {}


def get_local_file_handler(name: str = 'app'):
    os.makedirs(LoggingConfig.LOG_DIR, exist_ok=True)
    handler = logging.FileHandler(os.path.join(LoggingConfig.LOG_DIR, f'{name}.log'))
    formatter = AuditLogsJSONFormatter() if name.startswith('audit') else AppLogsJSONFormatter()
    handler.setFormatter(formatter)
    return handler


def get_stream_handler(audit: bool = False):
    key = 'audit_stream' if audit else 'app_stream'
    if key not in _handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(AuditLogsJSONFormatter() if audit else AppLogsJSONFormatter())
        _handlers[key] = handler
    return _handlers[key]


def get_app_handler(name: str = 'app'):
    if LoggingConfig.LOG_TO_FILE:
        return get_local_file_handler(name)
    return get_stream_handler()


def get_audit_handler():
    if LoggingConfig.LOG_TO_FILE:
        if 'audit_file' not in _handlers:
            _handlers['audit_file'] = get_local_file_handler('audit_logs')
        return _handlers['audit_file']
    return get_stream_handler(audit=True)
