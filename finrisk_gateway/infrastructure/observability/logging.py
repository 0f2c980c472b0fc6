"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from finrisk_gateway.domain.models import RiskReport, Verdict


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "finrisk-gateway"


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


def log_evaluation(
    request_id: str,
    tax_id: Optional[str],
    report: RiskReport,
    duration_ms: float,
) -> None:
    """Log structured risk screen outcome for analysis"""
    counts = report.verdict_counts
    logging.info(
        "Risk screen completed",
        extra={
            "request_id": request_id,
            "tax_id": tax_id,
            "step": "risk_screen_complete",
            "evaluation_year": report.evaluation_year,
            "compared_year": report.compared_year,
            "evaluated": report.evaluated,
            "risk_count": counts[Verdict.RISK],
            "warning_count": counts[Verdict.WARNING],
            "safe_count": counts[Verdict.SAFE],
            "unknown_count": counts[Verdict.UNKNOWN],
            "integrity_warnings": len(report.integrity_warnings),
            "duration_ms": duration_ms,
        },
    )
