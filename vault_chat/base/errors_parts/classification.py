"""
Error classification helpers mapping exceptions and responses to ErrorCode.

Implements HTTP status extraction, status-to-code mapping, httpx transport
exception mapping and a message-based heuristic fallback. Also hosts the
error envelope reader shared by every HTTP adapter.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError


def _extract_status(exc: Any) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception-like object.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def code_for_status(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode`.

    Unlisted 5xx statuses map to ``SERVER_ERROR``; everything else unlisted
    maps to ``UNKNOWN``.
    """
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    return ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without a status."""
    pattern_groups = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
        (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused")),
        (ErrorCode.VALIDATION, ("invalid", "malformed")),
    )
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (builtin and ``httpx``).
        3. Other ``httpx`` transport failures (unreachable host, reset).
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.UNAVAILABLE
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def _read_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (ValueError, httpx.ResponseNotRead):
        return None


def extract_error_message(response: httpx.Response) -> str:
    """Return the human-readable message carried by an error response.

    Lookup order: ``error.message``, ``error`` when it is a string,
    ``message``, the raw body text, and finally ``HTTP <status>``. The response
    body must already be read (call ``response.read()`` on streamed
    responses first).
    """
    data = _read_json(response)
    if isinstance(data, list) and data and isinstance(data[0], dict):
        # Gemini occasionally wraps the envelope in a single-element list.
        data = data[0]
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
        if data.get("message"):
            return str(data["message"])
    try:
        text = response.text.strip()
    except httpx.ResponseNotRead:
        text = ""
    return text[:500] or f"HTTP {response.status_code}"


def error_from_response(
    response: httpx.Response,
    *,
    provider: str,
    model: Optional[str] = None,
    prefix: str = "",
) -> ProviderError:
    """Build a :class:`ProviderError` from a non-success HTTP response.

    ``prefix`` may reference ``{status}``; it is prepended to the envelope
    message (e.g. ``"Google AI: "``).
    """
    code = code_for_status(response.status_code)
    if prefix:
        prefix = prefix.format(status=response.status_code)
    return ProviderError(
        code=code,
        message=f"{prefix}{extract_error_message(response)}",
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        status=response.status_code,
    )


def error_from_exception(exc: Exception, *, provider: str, model: Optional[str] = None) -> ProviderError:
    """Wrap a transport exception into a :class:`ProviderError`."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "code_for_status",
    "extract_error_message",
    "error_from_response",
    "error_from_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
