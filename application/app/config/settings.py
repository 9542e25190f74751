import os
from dotenv import load_dotenv
load_dotenv()

class OrderViewConfigs:
    def __init__(self):

        # Environment settings
        self.APPLICATION_ENVIRONMENT = os.getenv("APPLICATION_ENVIRONMENT", "UAT")
        self.APP_NAME = os.getenv('APP_NAME', 'order-view')
        self.APP_VERSION = os.getenv('APP_VERSION', '1.0.0')

        # Price display settings
        self.PRICE_DISPLAY_PRECISION = int(os.getenv("PRICE_DISPLAY_PRECISION", "2"))
        self.PRICE_ROUNDING_MODE = os.getenv("PRICE_ROUNDING_MODE", "ROUND_HALF_UP").upper()
        self.CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "$")

        # Logging Core settings
        self.FIREHOSE_ENABLED = os.getenv("FIREHOSE_ENABLED", "false").lower() == "true"
        self.AUDIT_LOGGING_ENABLED = os.getenv("AUDIT_LOGGING_ENABLED", "false").lower() == "true"
        self.LOG_DEBUG_PRINTS = os.getenv("LOG_DEBUG_PRINTS", "false").lower() == "true"
        self.LOG_DIR = os.getenv("LOG_DIR", "logs")

        # Logging Stream Names
        self.APP_LOGS_STREAM_NAME = os.getenv("APP_LOGS_STREAM_NAME", "")
        self.AUDIT_LOGS_STREAM_NAME = os.getenv("AUDIT_LOGS_STREAM_NAME", "")
        self.LOG_BUFFER_TIMEOUT = int(os.getenv("LOG_BUFFER_TIMEOUT", "600"))

        # Logging Buffer Sizes
        self.APP_LOGS_CAPACITY = int(os.getenv("APP_LOGS_CAPACITY", "50"))
        self.AUDIT_LOGS_CAPACITY = int(os.getenv("AUDIT_LOGS_CAPACITY", "50"))

        # Firehose settings
        self.FIREHOSE_REGION_NAME = os.getenv("FIREHOSE_REGION_NAME", "eu-west-1")
        self.FIREHOSE_ACCESS_KEY_ID = os.getenv("FIREHOSE_ACCESS_KEY_ID", "")
        self.FIREHOSE_SECRET_ACCESS_KEY = os.getenv("FIREHOSE_SECRET_ACCESS_KEY", "")
        self.FIREHOSE_RETRY_COUNT = int(os.getenv("FIREHOSE_RETRY_COUNT", "3"))
        self.FIREHOSE_RETRY_DELAY = int(os.getenv("FIREHOSE_RETRY_DELAY", "1"))

        # Slack alerting
        self.SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL", "")
