"""
Structured request logging.
Each record is a single JSON object written as one log line.
"""

import json
import logging
import re
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Request

logger = logging.getLogger(__name__)

JST = timezone(timedelta(hours=9))
MASKED_OCTET = ".xxx"
LAST_OCTET_PATTERN = re.compile(r"\.\d+$")

REQUEST = "request"
SUCCESS = "success"
VALIDATION_ERROR = "validation_error"
ERROR = "error"


def jst_timestamp() -> str:
    """ISO-8601 timestamp with millisecond precision at a fixed +09:00 offset."""
    return datetime.now(JST).isoformat(timespec="milliseconds")


def new_request_id() -> str:
    return f"req_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def client_ip(request: Request) -> str:
    """
    Resolve the client address.

    Uses the first X-Forwarded-For entry when present, else the transport peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def mask_ip(ip: str) -> str:
    """Replace the last dotted segment, e.g. 203.0.113.42 -> 203.0.113.xxx"""
    return LAST_OCTET_PATTERN.sub(MASKED_OCTET, ip)


def elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def log_event(record_type: str, request_id: str, ip: str, **payload: Any) -> dict[str, Any]:
    """
    Write one structured log record.

    Args:
        record_type: One of request, success, validation_error, error
        request_id: Per-request identifier
        ip: Masked client address
        **payload: Type-specific fields

    Returns:
        The record that was written
    """
    record = {
        "timestamp": jst_timestamp(),
        "request_id": request_id,
        "type": record_type,
        "ip": ip,
        **payload,
    }
    line = json.dumps(record, ensure_ascii=False, default=str)
    if record_type == ERROR:
        logger.error(line)
    else:
        logger.info(line)
    return record
