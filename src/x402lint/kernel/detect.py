"""Input parsing and shape-based format detection.

Detection is resolved exactly once, at this boundary, into a DetectedInput
record. Downstream stages consume the ConfigFormat tag and never re-infer
the shape of the parsed value.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue

logger = logging.getLogger(__name__)

# Top-level keys that mark a flat (pre-accepts) payment config
ADDRESS_KEYS: Tuple[str, ...] = ("payTo", "pay_to", "address", "recipient")
AMOUNT_KEYS: Tuple[str, ...] = ("amount", "maxAmountRequired", "price")


class ConfigFormat(str, Enum):
    """Closed set of document shapes, most specific first."""
    MANIFEST = "manifest"
    V2 = "v2"
    V1 = "v1"
    FLAT_LEGACY = "flat-legacy"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedInput:
    """A raw input after JSON parsing (parsed is None when parsing failed)."""
    parsed: Any
    error: Optional[ValidationIssue] = None


@dataclass(frozen=True)
class DetectedInput:
    """Tagged result of the detection boundary."""
    format: ConfigFormat
    parsed: Optional[Mapping[str, Any]]
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def is_record(value: Any) -> bool:
    """True for a JSON object (a mapping, never a list or scalar)."""
    return isinstance(value, Mapping)


def version_of(value: Mapping[str, Any]) -> Any:
    """The x402Version value, with booleans rejected (True == 1 in Python)."""
    version = value.get("x402Version")
    if isinstance(version, bool):
        return None
    return version


def has_accepts_array(value: Mapping[str, Any]) -> bool:
    return isinstance(value.get("accepts"), list)


def is_manifest(value: Mapping[str, Any]) -> bool:
    return isinstance(value.get("endpoints"), (Mapping, list))


def is_v2_config(value: Mapping[str, Any]) -> bool:
    return has_accepts_array(value) and version_of(value) == 2


def is_v1_config(value: Mapping[str, Any]) -> bool:
    return has_accepts_array(value) and version_of(value) == 1


def is_flat_legacy_config(value: Mapping[str, Any]) -> bool:
    if "accepts" in value:
        return False
    has_address = any(value.get(k) is not None for k in ADDRESS_KEYS)
    has_amount = any(value.get(k) is not None for k in AMOUNT_KEYS)
    return has_address and has_amount


def parse_input(raw: Any) -> ParsedInput:
    """Parse a JSON string/bytes; already-parsed values pass through."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return ParsedInput(parsed=None, error=_invalid_json())
    if isinstance(raw, str):
        try:
            return ParsedInput(parsed=json.loads(raw, parse_constant=_reject_constant))
        except (ValueError, RecursionError):
            return ParsedInput(parsed=None, error=_invalid_json())
    return ParsedInput(parsed=raw)


def classify(value: Mapping[str, Any]) -> ConfigFormat:
    """Ordered shape predicates; first match wins."""
    # Manifests may carry x402Version: 2 themselves, so this precedes v2
    if is_manifest(value):
        return ConfigFormat.MANIFEST
    if is_v2_config(value):
        return ConfigFormat.V2
    if is_v1_config(value):
        return ConfigFormat.V1
    if is_flat_legacy_config(value):
        return ConfigFormat.FLAT_LEGACY
    return ConfigFormat.UNKNOWN


def detect_input(raw: Any) -> DetectedInput:
    """Parse, check object shape and classify; never raises."""
    parsed_input = parse_input(raw)
    if parsed_input.error is not None:
        return DetectedInput(ConfigFormat.UNKNOWN, None, [parsed_input.error])

    parsed = parsed_input.parsed
    if not is_record(parsed):
        return DetectedInput(
            ConfigFormat.UNKNOWN,
            None,
            [ValidationIssue.of(IssueCode.NOT_OBJECT, "$", "error")],
        )

    fmt = classify(parsed)
    logger.debug("Detected config format %s", fmt.value)
    if fmt is ConfigFormat.UNKNOWN:
        return DetectedInput(fmt, parsed, [_diagnose_unknown(parsed)])
    return DetectedInput(fmt, parsed)


def detect(raw: Any) -> ConfigFormat:
    """Format tag for any raw input ('unknown' for unparseable input)."""
    return detect_input(raw).format


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


def _invalid_json() -> ValidationIssue:
    return ValidationIssue.of(
        IssueCode.INVALID_JSON,
        "$",
        "error",
        fix="Check for trailing commas, unquoted keys or truncated input",
    )


def _diagnose_unknown(parsed: Mapping[str, Any]) -> ValidationIssue:
    """Pick the most useful terminal issue for an unrecognised object."""
    version = version_of(parsed)
    if has_accepts_array(parsed):
        return ValidationIssue.of(
            IssueCode.INVALID_VERSION,
            "x402Version",
            "error",
            message=f"x402Version must be 1 or 2, got {version!r}",
            fix="Set x402Version to 2",
        )
    if version in (1, 2):
        if "accepts" in parsed:
            return ValidationIssue.of(
                IssueCode.INVALID_ACCEPTS,
                "accepts",
                "error",
                fix="Make accepts an array of payment options",
            )
        return ValidationIssue.of(
            IssueCode.MISSING_ACCEPTS,
            "accepts",
            "error",
            fix="Add an accepts array with at least one payment option",
        )
    return ValidationIssue.of(
        IssueCode.UNKNOWN_FORMAT,
        "$",
        "error",
        fix="Expected an object with x402Version and an accepts array",
    )
