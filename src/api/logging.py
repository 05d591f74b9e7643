"""Request logging for the API."""

import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger("api.requests")


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    file_size_bytes: int | None = None
    file_name: str | None = None
    employee_name: str | None = None
    policy: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    rows_evaluated: int | None = None
    rows_with_errors: int | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)


def log_request(log: RequestLog) -> None:
    """Write a request summary line (and its details) to the request logger."""
    level = logging.INFO if log.status_code < 400 else logging.WARNING
    logger.log(
        level,
        "%s %s -> %d in %dms (request_id=%s, file=%s, employee=%s, policy=%s, rows=%s, errors=%s)",
        log.method,
        log.endpoint,
        log.status_code,
        log.processing_time_ms,
        log.request_id,
        log.file_name,
        log.employee_name,
        log.policy,
        log.rows_evaluated,
        log.rows_with_errors,
    )
    if log.error_code:
        logger.log(level, "request_id=%s error %s: %s", log.request_id, log.error_code, log.error_message)
    for detail_type, message in log.details:
        logger.debug("request_id=%s %s: %s", log.request_id, detail_type, message)
    logger.debug("request_log=%s", asdict(log))
