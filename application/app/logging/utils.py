"""
Logging utilities for the order view service.
"""
import logging
import atexit

from app.logging.config import LoggingConfig
from app.logging.handlers import get_app_handler, get_audit_handler, get_local_file_handler, flush_handlers
from app.logging.slack_handler import slack_handler

ROOT_LOGGER_NAME = 'order_view'


def setup_app_logging(logger_name: str):
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.addHandler(get_app_handler())
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def setup_audit_logging(logger_name: str):
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.addHandler(get_audit_handler())
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def get_logger(log_type: str = 'app', logger_name: str = ROOT_LOGGER_NAME):
    full_name = f"{logger_name}.{log_type}" if log_type != 'app' else logger_name
    logger = logging.getLogger(full_name)
    if logger.handlers:
        return logger
    if log_type == 'audit':
        return setup_audit_logging(full_name)
    return setup_app_logging(full_name)


essential_app_logger = None

def get_app_logger(name: str | None = None):
    global essential_app_logger
    if name:
        logger = logging.getLogger(name)
        if not logger.handlers:
            # central handler or local file handler per module
            handler = get_app_handler() if LoggingConfig.FIREHOSE_ENABLED else get_local_file_handler(name.replace('.', '_'))
            logger.addHandler(handler)
            logger.addHandler(slack_handler)
            logger.setLevel(logging.INFO)
            logger.propagate = False
        return logger
    if essential_app_logger is None:
        essential_app_logger = get_logger('app')
    return essential_app_logger


def init_audit_logger():
    return get_logger('audit')


def initialize_logging():
    is_valid, message = LoggingConfig.is_valid_config()
    logger = get_app_logger()
    if not is_valid:
        logger.warning(f"logging_config_invalid | message={message}")
    atexit.register(flush_handlers)
    logger.info(f"logging_initialized | firehose={LoggingConfig.FIREHOSE_ENABLED}")
