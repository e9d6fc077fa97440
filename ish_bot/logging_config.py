"""
Centralized logging configuration for the relay API and the chat client
"""
import logging
import sys
from datetime import datetime, timezone
import json

from ish_bot.config import Config


class StructuredLogger:
    """JSON structured logger keyed by event name"""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = logging.getLogger(service_name)
        self.logger.setLevel(Config.LOG_LEVEL)
        self.logger.propagate = False

        # Replace handlers so repeated get_logger calls do not duplicate output
        self.logger.handlers = []

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(self.JsonFormatter(service_name))
        self.logger.addHandler(handler)

    class JsonFormatter(logging.Formatter):
        def __init__(self, service_name):
            self.service_name = service_name
            super().__init__()

        def format(self, record):
            """Render the record as one JSON line, merging extra_data fields"""
            log_data = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "service": self.service_name,
                "level": record.levelname,
                "message": record.getMessage(),
                "logger": record.name,
            }

            if hasattr(record, 'extra_data'):
                log_data.update(record.extra_data)

            if record.exc_info:
                log_data["exception"] = self.formatException(record.exc_info)

            return json.dumps(log_data, ensure_ascii=False, default=str)

    def info(self, event: str, **kwargs):
        """Log an event with structured fields"""
        self.logger.info(event, extra={'extra_data': kwargs})

    def warning(self, event: str, **kwargs):
        """Log a degraded but handled condition"""
        self.logger.warning(event, extra={'extra_data': kwargs})

    def error(self, event: str, **kwargs):
        """Log a failure that was absorbed or turned into an error response"""
        self.logger.error(event, extra={'extra_data': kwargs})

    def exception(self, event: str, **kwargs):
        """Log an error together with the active traceback"""
        self.logger.exception(event, extra={'extra_data': kwargs})


def get_logger(service_name: str) -> StructuredLogger:
    """Get structured logger for a component"""
    return StructuredLogger(service_name)
