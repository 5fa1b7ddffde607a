"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "sales-gateway"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_store_loaded(source: str, record_count: int, duration_ms: float) -> None:
    """Log a completed record store load"""
    logging.info(
        "Sales records loaded",
        extra={
            "step": "store_loaded",
            "source": source,
            "record_count": record_count,
            "duration_ms": duration_ms,
        },
    )


def log_query(
    request_id: str,
    sort_by: str,
    page: int,
    total_items: int,
    duration_ms: float,
) -> None:
    """Log structured query outcome for analysis"""
    logging.info(
        "Sales query completed",
        extra={
            "request_id": request_id,
            "step": "query_complete",
            "sort_by": sort_by,
            "page": page,
            "total_items": total_items,
            "duration_ms": duration_ms,
        },
    )
