"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from barefoot_budget.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


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


def log_payoff_plan(
    request_id: str,
    user_id: str,
    debt_count: int,
    fortnights: int,
    converged: bool,
    total_interest_cents: int,
    duration_ms: float,
) -> None:
    """Log structured snowball plan outcome; non-converging plans are warnings"""
    logging.log(
        logging.INFO if converged else logging.WARNING,
        "Payoff plan computed" if converged else "Payoff plan did not converge",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "payoff_plan_complete",
            "debt_count": debt_count,
            "fortnights": fortnights,
            "converged": converged,
            "total_interest_cents": total_interest_cents,
            "duration_ms": duration_ms,
        },
    )


def log_mortgage_plan(
    request_id: str,
    user_id: str,
    baseline_outcome: Optional[str],
    with_extra_outcome: Optional[str],
    time_saved_fortnights: int,
    interest_saved_cents: int,
    duration_ms: float,
) -> None:
    """Log structured mortgage overpayment outcome"""
    logging.info(
        "Mortgage overpayment plan computed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "mortgage_plan_complete",
            "baseline_outcome": baseline_outcome,
            "with_extra_outcome": with_extra_outcome,
            "time_saved_fortnights": time_saved_fortnights,
            "interest_saved_cents": interest_saved_cents,
            "duration_ms": duration_ms,
        },
    )
