"""
Logging filters that stamp request and order context onto records.
"""
import logging
import uuid
from app.middlewares.request_context import request_context


class RequestContextFilter(logging.Filter):
    def filter(self, record):
        record.request_id = getattr(request_context, 'request_id', None) or str(uuid.uuid4())
        return True


class OrderContextFilter(logging.Filter):
    def filter(self, record):
        record.order_id = getattr(request_context, 'order_id', None) or ''
        record.order_detail_id = getattr(request_context, 'order_detail_id', None) or ''
        record.product_id = getattr(request_context, 'product_id', None) or ''
        return True
