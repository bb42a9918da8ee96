"""Audit trail functionality for csrtool.

This module provides structured audit logging for key and CSR generation.
"""

import time
import uuid
from typing import Any, Dict

from .logger import get_logger

logger = get_logger(__name__)


def log_audit_event(event_type: str, details: Dict[str, Any]) -> None:
    """Log an audit trail event.

    Creates a structured audit log entry. Audit events are logged at INFO
    level for successful operations and ERROR level for failures.

    Args:
        event_type: Type of operation (e.g., "CSR_GENERATED", "CSR_FAILED",
                   "KEY_GENERATED")
        details: Dictionary with event details. Common fields include:
                - status: "success" or "failure"
                - subject: Subject DN of the request
                - key_type: Key family or generated key type
                - output_file: Path to the written file (if applicable)
                - duration: Operation duration in seconds
                - error_message: Error details (if status is failure)
                - correlation_id: Optional correlation ID for tracking related events

    Example:
        >>> log_audit_event("CSR_GENERATED", {
        ...     "status": "success",
        ...     "subject": "CN=example.com",
        ...     "key_type": "ec256",
        ...     "duration": 0.02
        ... })
    """
    if "timestamp" not in details:
        details["timestamp"] = time.time()

    if "correlation_id" not in details:
        details["correlation_id"] = str(uuid.uuid4())

    message_parts = [f"AUDIT [{event_type}]"]

    field_order = [
        "status",
        "subject",
        "key_type",
        "output_file",
        "duration",
        "error_message",
        "correlation_id",
    ]

    for field in field_order:
        if field in details:
            value = details[field]
            if field == "duration" and isinstance(value, (int, float)):
                message_parts.append(f"{field}={value:.2f}s")
            else:
                message_parts.append(f"{field}={value}")

    for key, value in details.items():
        if key not in field_order and key != "timestamp":
            message_parts.append(f"{key}={value}")

    audit_message = " | ".join(message_parts)

    status = details.get("status", "unknown")
    if status == "failure":
        logger.error(audit_message)
    else:
        logger.info(audit_message)
