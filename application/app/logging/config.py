"""
Logging configuration for the order view service.
Firehose-first with local JSON file fallback.
"""

# Settings
from app.config.settings import OrderViewConfigs
configs = OrderViewConfigs()

class LoggingConfig:
    """Logging configuration resolved from environment settings"""

    # Core settings
    FIREHOSE_ENABLED = configs.FIREHOSE_ENABLED
    AUDIT_LOGGING_ENABLED = configs.AUDIT_LOGGING_ENABLED
    LOG_DIR = configs.LOG_DIR

    # Stream Names
    APP_LOGS_STREAM_NAME = configs.APP_LOGS_STREAM_NAME
    AUDIT_LOGS_STREAM_NAME = configs.AUDIT_LOGS_STREAM_NAME
    LOG_BUFFER_TIMEOUT = configs.LOG_BUFFER_TIMEOUT

    # Buffer sizes
    APP_LOGS_CAPACITY = configs.APP_LOGS_CAPACITY
    AUDIT_LOGS_CAPACITY = configs.AUDIT_LOGS_CAPACITY

    # Firehose settings
    FIREHOSE_REGION_NAME = configs.FIREHOSE_REGION_NAME
    FIREHOSE_ACCESS_KEY_ID = configs.FIREHOSE_ACCESS_KEY_ID
    FIREHOSE_SECRET_ACCESS_KEY = configs.FIREHOSE_SECRET_ACCESS_KEY
    FIREHOSE_RETRY_COUNT = configs.FIREHOSE_RETRY_COUNT
    FIREHOSE_RETRY_DELAY = configs.FIREHOSE_RETRY_DELAY

    @classmethod
    def is_valid_config(cls):
        """Validate configuration - Firehose credentials are only needed when enabled"""
        if cls.FIREHOSE_ENABLED:
            if not cls.FIREHOSE_ACCESS_KEY_ID or not cls.FIREHOSE_SECRET_ACCESS_KEY:
                return False, "Firehose credentials not configured"
        return True, "Configuration is valid"
