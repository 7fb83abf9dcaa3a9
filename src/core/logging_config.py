import logging
import sys
from typing import IO, Optional

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "assessment-engine"
LOG_FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'


class AssessmentJsonFormatter(JsonFormatter):
    """One JSON object per record, tagged with the emitting service and source line."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = record.created
        log_record['level'] = (log_record.get('level') or record.levelname).upper()
        log_record['service'] = SERVICE_NAME
        log_record['module'] = record.module
        log_record['lineno'] = record.lineno


def _json_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if isinstance(h.formatter, AssessmentJsonFormatter)]


def setup_logging(log_level_str: str = "INFO", stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Configures structured JSON logging on the root logger (stdout unless
    ``stream`` is given). Calling it again only adjusts the level.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if _json_handlers(root_logger):
        root_logger.debug(f"JSON logging already configured; level set to {logging.getLevelName(log_level)}")
        return root_logger

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(AssessmentJsonFormatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.info(f"Structured JSON logging configured with level: {logging.getLevelName(log_level)}")
    return root_logger
