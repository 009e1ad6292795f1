"""
Logging filters that copy the request context onto log records
"""
import logging
from giftcard_web.middlewares.request_context import request_context


class RequestContextFilter(logging.Filter):
    def filter(self, record):
        record.request_id = getattr(request_context, 'request_id', None) or ''
        record.request_method = getattr(request_context, 'request_method', None) or ''
        record.request_path = getattr(request_context, 'request_path', None) or ''
        return True


class BusinessContextFilter(logging.Filter):
    def filter(self, record):
        record.gift_card_id = getattr(request_context, 'gift_card_id', None) or ''
        return True
