"""
gitgate logging utilities.

Provides configurable logging for authorization decisions and for the HTTP
requests made by the REST resource lookup. API tokens and credentials are
never logged.
"""

import logging
import re
from typing import Any

# Create package loggers
_gate_logger = logging.getLogger("gitgate")
_http_logger = logging.getLogger("gitgate.http")
_decision_logger = logging.getLogger("gitgate.decision")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"(Bearer|Basic|token)\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE), r"\1 [REDACTED]"),
    # Credentials embedded in URLs
    (re.compile(r"(https?://)[^/\s:@]+:[^/\s@]+@"), r"\1[REDACTED]@"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = frozenset(
    {"authorization", "cookie", "secret", "token", "password", "api_key"}
)


def configure_logging(
    level: int = logging.INFO,
    decision_level: int | None = None,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure gitgate logging.

    Args:
        level: Default log level for all gitgate loggers (default: INFO)
        decision_level: Log level for authorization decisions (default: same as level)
        http_level: Log level for lookup HTTP traffic (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from gitgate.logging import configure_logging

        # Trace every decision, keep HTTP traffic quiet
        configure_logging(level=logging.INFO, decision_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _gate_logger.setLevel(level)
    _gate_logger.addHandler(handler)

    _decision_logger.setLevel(decision_level if decision_level is not None else level)
    _http_logger.setLevel(http_level if http_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a gitgate logger.

    Args:
        name: Logger name suffix (e.g., "http", "decision"). If None, returns the main logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _gate_logger
    return logging.getLogger(f"gitgate.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Args:
        text: Text that may contain tokens or credentials

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Keys to mask (default: authorization, cookie, secret, token, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    keys = _DEFAULT_SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """
    Log a lookup HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method
        url: Request URL
        headers: Request headers (optional)
        params: Query parameters (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {mask_sensitive_data(url)}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if params:
        log_parts.append(f"params={safe_log_dict(params)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log a lookup HTTP response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {mask_sensitive_data(url)}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _http_logger.debug(" | ".join(log_parts))


def log_decision(
    policy: str,
    user_name: str | None,
    path: str,
    outcome: str,
    rule: str | None = None,
) -> None:
    """
    Log an authorization decision at DEBUG level.

    Args:
        policy: Policy name (e.g., "owner", "referrers")
        user_name: Actor's user name, or None for guests
        path: Request path
        outcome: Decision outcome ("allow", "unauthorized", "not_found")
        rule: Name of the rule that allowed the request (optional)
    """
    if not _decision_logger.isEnabledFor(logging.DEBUG):
        return

    actor = user_name if user_name is not None else "<guest>"
    log_parts = [f"{policy}: {outcome}", f"actor={actor}", f"path={path}"]

    if rule:
        log_parts.append(f"rule={rule}")

    _decision_logger.debug(" | ".join(log_parts))


# Export public API
__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_decision",
]
