"""
Logging handlers for the order view service.
Firehose-backed buffered handlers with local-file fallback.
"""
import logging
import os
import time
from logging.handlers import MemoryHandler

import boto3
from botocore.config import Config

from app.logging.config import LoggingConfig
from app.logging.filters import OrderContextFilter, RequestContextFilter
from app.logging.formatters import AppLogsJSONFormatter, AuditLogsJSONFormatter

# Settings
from app.config.settings import OrderViewConfigs
configs = OrderViewConfigs()

LOG_DEBUG_PRINTS = configs.LOG_DEBUG_PRINTS

def dbg(msg: str) -> None:
    """Lightweight debug print; enabled when LOG_DEBUG_PRINTS=true"""
    if LOG_DEBUG_PRINTS:
        print(msg)

class FireHoseHandler(logging.Handler):
    """Kinesis Firehose handler with simple retries"""

    def __init__(self, stream_name: str):
        super().__init__()
        self.stream_name = stream_name
        self.client = self._create_client()
        self.retry_count = LoggingConfig.FIREHOSE_RETRY_COUNT
        self.retry_delay = LoggingConfig.FIREHOSE_RETRY_DELAY

    def _create_client(self):
        return boto3.client(
            "firehose",
            region_name=LoggingConfig.FIREHOSE_REGION_NAME,
            aws_access_key_id=LoggingConfig.FIREHOSE_ACCESS_KEY_ID,
            aws_secret_access_key=LoggingConfig.FIREHOSE_SECRET_ACCESS_KEY,
            config=Config(connect_timeout=10, read_timeout=30, retries={"max_attempts": 2}),
        )

    def emit(self, record):
        self.bulk_insert([{"Data": self.format(record)}])

    def bulk_insert(self, actions):
        if not actions:
            return True

        for attempt in range(self.retry_count):
            will_retry = attempt < self.retry_count - 1
            try:
                response = self.client.put_record_batch(
                    DeliveryStreamName=self.stream_name,
                    Records=actions,
                )
            except Exception as e:
                dbg(f"[Firehose:{self.stream_name}] exception on attempt={attempt+1} error={e} will_retry={will_retry}")
                if not will_retry:
                    return False
                time.sleep(self.retry_delay * (2 ** attempt))
                continue

            failed = response.get("FailedPutCount", 0)
            dbg(f"[Firehose:{self.stream_name}] put_record_batch attempt={attempt+1} total={len(actions)} failed={failed}")
            if failed == 0:
                return True
            if will_retry:
                time.sleep(self.retry_delay * (2 ** attempt))
        return False


class BufferedFirehoseHandler(MemoryHandler):
    """Buffers formatted records and ships them in batches on capacity or timeout."""

    def __init__(self, capacity, target_handler, stream_name):
        super().__init__(capacity=capacity, target=target_handler)
        self.stream_name = stream_name
        self.buffer_timeout = LoggingConfig.LOG_BUFFER_TIMEOUT
        self.last_flush = time.time()

    def emit(self, record):
        super().emit(record)
        now = time.time()
        if now - self.last_flush >= self.buffer_timeout or len(self.buffer) >= self.capacity:
            dbg(f"[Buffer:{self.stream_name}] triggering flush size={len(self.buffer)}")
            self.flush()

    def shouldFlush(self, record):
        # emit() owns the flush decision
        return False

    def flush(self):
        self.acquire()
        try:
            if self.target and self.buffer:
                actions = [{"Data": self.format(record)} for record in self.buffer]
                ok = self.target.bulk_insert(actions)
                dbg(f"[Buffer:{self.stream_name}] flushed count={len(actions)} ok={ok}")
                self.buffer.clear()
                self.last_flush = time.time()
        finally:
            self.release()


class AppLogsMemoryHandler(BufferedFirehoseHandler):
    def __init__(self, stream_name: str):
        target = FireHoseHandler(stream_name)
        super().__init__(capacity=LoggingConfig.APP_LOGS_CAPACITY, target_handler=target, stream_name=stream_name)
        fmt = AppLogsJSONFormatter()
        self.setFormatter(fmt)
        target.setFormatter(fmt)


class AuditLogsMemoryHandler(BufferedFirehoseHandler):
    def __init__(self, stream_name: str):
        target = FireHoseHandler(stream_name)
        super().__init__(capacity=LoggingConfig.AUDIT_LOGS_CAPACITY, target_handler=target, stream_name=stream_name)
        fmt = AuditLogsJSONFormatter()
        self.setFormatter(fmt)
        target.setFormatter(fmt)


_handlers = {}

def add_context_filters(handler: logging.Handler, audit: bool = False) -> logging.Handler:
    handler.addFilter(RequestContextFilter())
    if not audit:
        handler.addFilter(OrderContextFilter())
    return handler


def get_local_file_handler(name: str = 'app', audit: bool = False):
    os.makedirs(LoggingConfig.LOG_DIR, exist_ok=True)
    handler = logging.FileHandler(os.path.join(LoggingConfig.LOG_DIR, f'{name}.log'))
    handler.setFormatter(AuditLogsJSONFormatter() if audit else AppLogsJSONFormatter())
    return add_context_filters(handler, audit)


def get_app_handler():
    if LoggingConfig.FIREHOSE_ENABLED:
        # shared across loggers; filters are attached once, here
        if 'app' not in _handlers:
            stream = LoggingConfig.APP_LOGS_STREAM_NAME or 'order-view-app-logs'
            _handlers['app'] = add_context_filters(AppLogsMemoryHandler(stream))
        return _handlers['app']
    return get_local_file_handler('app')


def get_audit_handler():
    if not LoggingConfig.AUDIT_LOGGING_ENABLED:
        return logging.NullHandler()
    if LoggingConfig.FIREHOSE_ENABLED:
        if 'audit' not in _handlers:
            stream = LoggingConfig.AUDIT_LOGS_STREAM_NAME or 'order-view-audit-logs'
            _handlers['audit'] = add_context_filters(AuditLogsMemoryHandler(stream), audit=True)
        return _handlers['audit']
    return get_local_file_handler('audit_logs_backup', audit=True)


def flush_handlers():
    for handler in _handlers.values():
        handler.flush()
