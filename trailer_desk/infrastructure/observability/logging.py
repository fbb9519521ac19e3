"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "trailer-desk", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "trailer-desk") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_apr_solve(request_id: str, status: str, iterations: int, apr: float) -> None:
    """Unconverged solves are logged at warning so they can be reviewed"""
    level = logging.INFO if status == "converged" else logging.WARNING
    logging.log(
        level,
        "APR solve finished",
        extra={
            "request_id": request_id,
            "step": "apr_solve",
            "solve_status": status,
            "iterations": iterations,
            "apr": apr,
        },
    )


def log_recalculation(
    request_id: str,
    total: int,
    updated: int,
    errors: int,
    duration_seconds: float,
) -> None:
    """Log lead recalculation outcome for analysis"""
    logging.info(
        "Lead score recalculation completed",
        extra={
            "request_id": request_id,
            "step": "lead_recalculation_complete",
            "total_customers": total,
            "updated": updated,
            "errors": errors,
            "duration_seconds": duration_seconds,
        },
    )
