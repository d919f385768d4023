"""Structured logging setup.

Call :func:`setup_logging` once at process start. Records are rendered as
single-line JSON on stdout (or plain text when ``LOG_JSON=false``), which
keeps raw model output searchable when a completion fails to parse.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter


class CoachJsonFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = record.created
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure the root logger with a single stdout handler."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(
            CoachJsonFormatter("%(timestamp)s %(level)s %(logger)s %(message)s")
        )
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
    logging.basicConfig(level=log_level, handlers=[handler], force=True)
    logging.getLogger(__name__).info(
        "Logging configured", extra={"log_level": logging.getLevelName(log_level)}
    )
