"""HTTP 402 response extraction (internal).

Locates the payment config inside a response-like value: a JSON body with
x402 fields first, then the PAYMENT-REQUIRED header (base64-encoded JSON,
or raw JSON from servers that skip the encoding).
"""

import base64
import binascii
import json
from typing import Any, Mapping, Optional

from x402lint.contracts import ExtractionResult

PAYMENT_REQUIRED_HEADER = "payment-required"
X402_BODY_KEYS = ("accepts", "payTo", "x402Version")


def _get(response: Any, name: str) -> Any:
    """Attribute or key access, so both dicts and response objects work."""
    if isinstance(response, Mapping):
        return response.get(name)
    return getattr(response, name, None)


def get_header(headers: Any, name: str) -> Optional[str]:
    """Case-insensitive header lookup over a mapping or a headers object."""
    if headers is None:
        return None
    if not isinstance(headers, Mapping):
        # Header objects with get() are case-insensitive; pair lists and the like are ignored
        if callable(getattr(headers, "get", None)):
            return headers.get(name)
        return None
    lower = name.lower()
    for key, value in headers.items():
        if isinstance(key, str) and key.lower() == lower:
            return value
    return None


def _has_x402_fields(value: Any) -> bool:
    return isinstance(value, Mapping) and any(value.get(k) for k in X402_BODY_KEYS)


def _loads_object(text: str) -> Optional[dict]:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _from_header(headers: Any) -> Optional[dict]:
    value = get_header(headers, PAYMENT_REQUIRED_HEADER)
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        decoded = base64.b64decode(value.strip(), validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        decoded = None
    if decoded is not None:
        config = _loads_object(decoded)
        if config is not None:
            return config

    return _loads_object(value)


def extract_config(response: Any) -> ExtractionResult:
    """Extract an x402 config from a response-like value; never raises.

    Args:
        response: mapping or object with optional ``body`` and ``headers``

    Returns:
        ExtractionResult with config and source, or an error message.
    """
    body = _get(response, "body")

    if isinstance(body, Mapping) and _has_x402_fields(body):
        return ExtractionResult(config=dict(body), source="body")

    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str) and body.strip():
        parsed = _loads_object(body)
        if parsed is not None and _has_x402_fields(parsed):
            return ExtractionResult(config=parsed, source="body")

    config = _from_header(_get(response, "headers"))
    if config is not None:
        return ExtractionResult(config=config, source="header")

    return ExtractionResult(
        error="No x402 config found in response body or PAYMENT-REQUIRED header",
    )
