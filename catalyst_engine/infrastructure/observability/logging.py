"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

# Keys that must never reach a log line
REDACTED_KEYS = (
    "balance",
    "amount",
    "income",
    "salary",
    "debt",
    "apr",
    "snapshot",
    "payload",
    "portfolio",
    "savings",
    "checking",
)

REDACTED = "[redacted]"


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in REDACTED_KEYS)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp, service metadata and financial redaction"""

    def __init__(self, *args, service_name: str = "catalyst-engine", **kwargs):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        for key in list(log_record):
            if _is_sensitive(key):
                log_record[key] = REDACTED
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "catalyst-engine") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_strategy_plan(
    request_id: str,
    method: Optional[str],
    is_negative_cash_flow: bool,
    time_critical_count: int,
    duration_ms: float,
) -> None:
    """Log the shape of a cycle plan; amounts stay out of the log"""
    logging.info(
        "Strategy plan completed",
        extra={
            "request_id": request_id,
            "step": "strategy_complete",
            "method": method or "none",
            "negative_cash_flow": is_negative_cash_flow,
            "time_critical_count": time_critical_count,
            "duration_ms": duration_ms,
        },
    )


def log_fire_projection(
    request_id: str,
    status: str,
    reason: Optional[str],
    duration_ms: float,
) -> None:
    """Log FIRE projection outcome and unreachable reason code"""
    logging.info(
        "FIRE projection completed",
        extra={
            "request_id": request_id,
            "step": "fire_complete",
            "status": status,
            "reason": reason,
            "duration_ms": duration_ms,
        },
    )


def log_simulation(
    request_id: str,
    strategy: str,
    months: int,
    capped: bool,
    duration_ms: float,
) -> None:
    """Log payoff simulation length and whether the month cap was hit"""
    logging.info(
        "Payoff simulation completed",
        extra={
            "request_id": request_id,
            "step": "simulation_complete",
            "strategy": strategy,
            "months": months,
            "capped": capped,
            "duration_ms": duration_ms,
        },
    )
