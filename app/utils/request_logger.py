"""
Structured request logging: path, method, client_ip, user_id, thread_id, status_code, latency_ms.
"""
import json
import logging
import time
from pathlib import Path

import config


def _log_path() -> Path:
    p = Path(config.LOG_FILE)
    if not p.is_absolute():
        p = config.BASE_DIR / p
    return p


def setup_request_logger() -> logging.Logger:
    """Configure and return a logger for request logs."""
    logger = logging.getLogger("chatapp.requests")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    if not logger.handlers:
        if config.LOG_FILE.strip():
            log_path = _log_path()
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
        else:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger


REQUEST_LOGGER = setup_request_logger()


def build_payload(request, status_code: int, latency_ms: float) -> dict:
    """One log record: request basics plus request_id, user_id and thread_id when set on request.state."""
    state = getattr(request, "state", None)
    client_ip = request.client.host if request.client else ""
    payload = {
        "path": request.url.path,
        "method": request.method,
        "client_ip": client_ip,
        "status_code": status_code,
        "latency_ms": round(latency_ms, 2),
        "timestamp": time.time(),
    }
    for key in ("request_id", "user_id", "thread_id"):
        value = getattr(state, key, None) if state else None
        if value is not None:
            payload[key] = value
    return payload


def log_request(request, status_code: int, latency_ms: float) -> None:
    """Emit one structured JSON log line. Never lets logging break the response."""
    try:
        REQUEST_LOGGER.info(json.dumps(build_payload(request, status_code, latency_ms)))
    except (TypeError, ValueError, OSError):
        logging.getLogger(__name__).debug("Request log write failed", exc_info=True)
