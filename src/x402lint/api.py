"""Public API for the x402lint package.

High-level functions that return complete, structured results.
None of the validation entry points raise: every failure, from malformed
JSON to a bad checksum, is reported as a ValidationIssue.
"""

import logging
from typing import Any, Dict, Optional, Union

from x402lint._internal.extract import extract_config
from x402lint.contracts import (
    AcceptSummary,
    CheckResult,
    ExtractionResult,
    ManifestValidationResult,
    ValidationOptions,
    ValidationResult,
)
from x402lint.kernel.config import NormalizedConfig
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.detect import detect as _detect
from x402lint.kernel.manifest import run_manifest_pipeline, unexpected_manifest_failure_result
from x402lint.kernel.normalize import normalize_config
from x402lint.kernel.pipeline import run_guarded
from x402lint.kernel.registry import Registry

logger = logging.getLogger(__name__)

OptionsLike = Union[ValidationOptions, Dict[str, Any], None]


def validate(
    config: Any,
    options: OptionsLike = None,
    *,
    registry: Optional[Registry] = None,
) -> ValidationResult:
    """
    Validate a single x402 payment config.

    Args:
        config: JSON text (str/bytes) or an already-parsed value
        options: ValidationOptions or a mapping such as {"strict": True}
        registry: network/asset registry (defaults to the bundled one)

    Returns:
        ValidationResult with errors, warnings and the normalized config.

    This is READ-ONLY and never raises.
    """
    return run_guarded(
        config,
        ValidationOptions.coerce(options),
        registry or Registry.default(),
    )


def validate_manifest(
    manifest: Any,
    options: OptionsLike = None,
    *,
    registry: Optional[Registry] = None,
) -> ManifestValidationResult:
    """
    Validate a multi-endpoint manifest: each endpoint's config, then the
    endpoints as a set (duplicate routes/URLs, mixed mainnet/testnet).

    Never raises.
    """
    try:
        return run_manifest_pipeline(
            manifest,
            ValidationOptions.coerce(options),
            registry or Registry.default(),
        )
    except Exception:
        logger.exception("Unexpected failure while validating manifest")
        return unexpected_manifest_failure_result()


def detect(config: Any) -> ConfigFormat:
    """Detect the format of a config ('unknown' when it cannot be parsed)."""
    return _detect(config)


def normalize(config: Any) -> Optional[NormalizedConfig]:
    """Normalize any recognised single-config shape to canonical v2, or None."""
    return normalize_config(config).config


def check(
    response: Any,
    options: OptionsLike = None,
    *,
    registry: Optional[Registry] = None,
) -> CheckResult:
    """
    Check an HTTP 402 response: extract the config, validate it, and
    summarize each payment option with registry data.

    Never raises.
    """
    registry = registry or Registry.default()
    extraction: ExtractionResult = extract_config(response)

    if extraction.config is None:
        return CheckResult(
            extracted=False,
            extraction_error=extraction.error,
            valid=False,
            version=ConfigFormat.UNKNOWN.value,
        )

    validation = validate(extraction.config, options, registry=registry)

    summary = []
    accepts = validation.normalized.accepts if validation.normalized is not None else []
    for i, entry in enumerate(accepts):
        network_info = registry.get_network_info(entry.network)
        asset_info = registry.get_asset_info(entry.network, entry.asset)
        summary.append(AcceptSummary(
            index=i,
            network=entry.network,
            network_name=network_info.name if network_info else (
                entry.network if isinstance(entry.network, str) else None
            ),
            network_type=network_info.type if network_info else None,
            pay_to=entry.pay_to,
            amount=entry.amount,
            asset=entry.asset,
            asset_symbol=asset_info.symbol if asset_info else None,
            asset_decimals=asset_info.decimals if asset_info else None,
            scheme=entry.scheme,
        ))

    return CheckResult(
        extracted=True,
        source=extraction.source,
        valid=validation.valid,
        version=validation.version,
        errors=validation.errors,
        warnings=validation.warnings,
        normalized=validation.normalized,
        summary=summary,
        raw=extraction.config,
    )


__all__ = [
    "validate",
    "validate_manifest",
    "detect",
    "normalize",
    "check",
    "extract_config",
]
