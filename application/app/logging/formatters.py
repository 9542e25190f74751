"""
JSON formatters for order view service logging.
"""
import json
import logging
from datetime import datetime

# Settings
from app.config.settings import OrderViewConfigs
configs = OrderViewConfigs()

APPLICATION_ENVIRONMENT = configs.APPLICATION_ENVIRONMENT
SERVICE_NAME = configs.APP_NAME
SERVICE_VERSION = configs.APP_VERSION


class BaseJSONFormatter(logging.Formatter):
    """Basic JSON formatter"""

    def __init__(self):
        super().__init__()
        self.application_environment = APPLICATION_ENVIRONMENT

    def _base_entry(self, record):
        return {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line_number': record.lineno,
            'environment': self.application_environment,
            'service': SERVICE_NAME,
            'version': SERVICE_VERSION,
        }

    def format(self, record):
        log_entry = self._base_entry(record)
        log_entry['message'] = record.getMessage()

        if record.exc_info:
            log_entry['exception'] = str(record.exc_info[1])

        self.add_extra_fields(log_entry, record)
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def add_extra_fields(self, log_entry, record):
        pass


class AppLogsJSONFormatter(BaseJSONFormatter):
    def add_extra_fields(self, log_entry, record):
        log_entry['request_id'] = getattr(record, 'request_id', '')
        log_entry['order_id'] = getattr(record, 'order_id', '')
        log_entry['order_detail_id'] = getattr(record, 'order_detail_id', '')
        log_entry['product_id'] = getattr(record, 'product_id', '')


class AuditLogsJSONFormatter(BaseJSONFormatter):
    def format(self, record):
        """Audit entries carry structured extras only, never the raw message."""
        log_entry = self._base_entry(record)

        if record.exc_info:
            log_entry['exception'] = str(record.exc_info[1])

        self.add_extra_fields(log_entry, record)
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def add_extra_fields(self, log_entry, record):
        log_entry['request_id'] = getattr(record, 'request_id', '')
        log_entry['order_id'] = getattr(record, 'order_id', '')
        log_entry['event'] = getattr(record, 'event', '')

        payload = getattr(record, 'payload', None)
        log_entry['payload'] = json.dumps(payload, ensure_ascii=False, default=str) if payload else ''
