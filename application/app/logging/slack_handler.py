import logging
from datetime import datetime, timezone

import requests

# Settings
from app.config.settings import OrderViewConfigs
configs = OrderViewConfigs()


class SlackErrorHandler(logging.Handler):
    """Sends ERROR and CRITICAL logs to Slack"""
    def __init__(self, webhook: str | None = None, environment: str | None = None):
        super().__init__(level=logging.ERROR)
        self.webhook = webhook if webhook is not None else configs.SLACK_WEBHOOK_URL
        self.environment = (environment or configs.APPLICATION_ENVIRONMENT).upper()
        self.enabled = bool(self.webhook) and self.environment == 'LOCAL'

    def build_message(self, record) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        lines = [
            f":mag: {self.environment} {configs.APP_NAME} alert",
            "",
            f"- :clock1: Timestamp: {ts}",
            f"- :triangular_flag_on_post: Level: **{record.levelname}**",
            f"- :warning: Logger: {record.name}",
            f"- :file_folder: Module: {record.module}",
            f"- :pushpin: Function: {record.funcName}",
            f"- :straight_ruler: Line Number: {record.lineno}",
            f"- :package: Order: {getattr(record, 'order_id', '') or '-'}",
            "",
            "```" + str(record.getMessage()) + "```",
        ]
        return "\n".join(lines)

    def emit(self, record):
        if not self.enabled:
            return
        try:
            requests.post(self.webhook, json={"text": self.build_message(record)}, timeout=2)
        except requests.RequestException:
            self.handleError(record)


# Export a singleton handler instance for reuse
slack_handler = SlackErrorHandler()
