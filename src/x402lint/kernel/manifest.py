"""Manifest aggregation: per-endpoint validation plus cross-endpoint rules."""

import logging
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from x402lint.codes import IssueCode
from x402lint.contracts import ManifestValidationResult, ValidationIssue, ValidationOptions, ValidationResult
from x402lint.kernel.config import ManifestEndpoint, NormalizedManifest
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.normalize import normalize_manifest
from x402lint.kernel.pipeline import bucket, promote_warnings, run_guarded, terminal_result
from x402lint.kernel.registry import Registry
from x402lint.kernel.rules import validate_structure

logger = logging.getLogger(__name__)


def run_manifest_pipeline(raw: Any, options: ValidationOptions, registry: Registry) -> ManifestValidationResult:
    """Validate every endpoint of a manifest, then the endpoints as a set."""
    detected = validate_structure(raw, allow_manifest=True)
    if detected.issues:
        return _failed(detected.issues)

    if detected.format is not ConfigFormat.MANIFEST:
        return _failed([ValidationIssue.of(
            IssueCode.NOT_A_MANIFEST,
            "endpoints",
            "error",
            message=f"Input is a single {detected.format.value} config, not a manifest",
            fix="Validate single configs with validate(), or wrap them in an endpoints array",
        )])

    outcome = normalize_manifest(detected.parsed)
    if not outcome.ok:
        return _failed([ValidationIssue.of(
            IssueCode.NOT_A_MANIFEST,
            "endpoints",
            "error",
            message=f"Manifest endpoints could not be read: {outcome.reason}",
        )])

    manifest = outcome.manifest
    if not manifest.endpoints:
        return _failed(
            [ValidationIssue.of(
                IssueCode.EMPTY_MANIFEST,
                "endpoints",
                "error",
                fix="Add at least one endpoint with its payment config",
            )],
            manifest,
        )

    endpoint_results = {
        endpoint_id: _validate_endpoint(endpoint, options, registry)
        for endpoint_id, endpoint in manifest.endpoints.items()
    }

    errors, warnings = bucket(cross_endpoint_issues(manifest, registry))
    if options.strict:
        errors, warnings = promote_warnings(errors, warnings)

    valid = all(r.valid for r in endpoint_results.values()) and not errors
    return ManifestValidationResult(
        valid=valid,
        endpoint_results=endpoint_results,
        manifest_issues=errors + warnings,
        normalized_manifest=manifest,
    )


def _validate_endpoint(endpoint: ManifestEndpoint, options: ValidationOptions, registry: Registry) -> ValidationResult:
    """Validate one embedded document; anything but an object is NOT_OBJECT."""
    if not isinstance(endpoint.document, Mapping):
        return terminal_result(ConfigFormat.UNKNOWN, [ValidationIssue.of(
            IssueCode.NOT_OBJECT,
            "$",
            "error",
            message="Endpoint config must be a JSON object",
        )])
    return run_guarded(endpoint.document, options, registry)


def cross_endpoint_issues(manifest: NormalizedManifest, registry: Registry) -> List[ValidationIssue]:
    """Consistency checks across endpoints. All are warnings.

    A payTo address shared by several endpoints is expected (one merchant)
    and is not reported.
    """
    endpoints = list(manifest.endpoints.values())
    issues = []
    issues.extend(_duplicate_routes(endpoints))
    issues.extend(_duplicate_urls(endpoints))
    issues.extend(_mixed_networks(endpoints, registry))
    return issues


def _route_key(endpoint: ManifestEndpoint) -> Optional[Tuple[str, str]]:
    if not endpoint.url:
        return None
    try:
        path = urlsplit(endpoint.url).path
    except ValueError:
        return None
    return endpoint.method, "/" + path.strip("/")


def _duplicate_routes(endpoints: List[ManifestEndpoint]) -> List[ValidationIssue]:
    first_by_route: Dict[Tuple[str, str], str] = {}
    issues = []
    for endpoint in endpoints:
        key = _route_key(endpoint)
        if key is None:
            continue
        if key not in first_by_route:
            first_by_route[key] = endpoint.id
            continue
        method, path = key
        issues.append(ValidationIssue.of(
            IssueCode.DUPLICATE_ENDPOINT_ROUTE,
            f"endpoints.{endpoint.id}",
            "warning",
            message=f"{method} {path} is declared by both '{first_by_route[key]}' and '{endpoint.id}'",
            fix="Give each endpoint a distinct method and path, or merge their payment options",
        ))
    return issues


def _duplicate_urls(endpoints: List[ManifestEndpoint]) -> List[ValidationIssue]:
    first_by_url: Dict[str, str] = {}
    issues = []
    for endpoint in endpoints:
        if not endpoint.url:
            continue
        if endpoint.url not in first_by_url:
            first_by_url[endpoint.url] = endpoint.id
            continue
        issues.append(ValidationIssue.of(
            IssueCode.DUPLICATE_ENDPOINT_URL,
            f"endpoints.{endpoint.id}",
            "warning",
            message=f"URL {endpoint.url} is declared by both '{first_by_url[endpoint.url]}' and '{endpoint.id}'",
        ))
    return issues


def _mixed_networks(endpoints: List[ManifestEndpoint], registry: Registry) -> List[ValidationIssue]:
    by_type: Dict[str, List[str]] = defaultdict(list)
    for endpoint in endpoints:
        if endpoint.config is None:
            continue
        for entry in endpoint.config.accepts:
            info = registry.get_network_info(entry.network)
            if info is not None and entry.network not in by_type[info.type]:
                by_type[info.type].append(entry.network)

    if not (by_type.get("mainnet") and by_type.get("testnet")):
        return []
    logger.debug("Manifest mixes networks: %s", dict(by_type))
    return [ValidationIssue.of(
        IssueCode.MIXED_NETWORKS,
        "endpoints",
        "warning",
        message=(
            "Manifest mixes mainnet networks ({}) with testnet networks ({})".format(
                ", ".join(by_type["mainnet"]), ", ".join(by_type["testnet"])
            )
        ),
        fix="Publish testnet endpoints in a separate manifest from production endpoints",
    )]


def _failed(issues: List[ValidationIssue], manifest: Optional[NormalizedManifest] = None) -> ManifestValidationResult:
    return ManifestValidationResult(
        valid=False,
        endpoint_results={},
        manifest_issues=list(issues),
        normalized_manifest=manifest,
    )


def unexpected_manifest_failure_result() -> ManifestValidationResult:
    return _failed([ValidationIssue.of(
        IssueCode.UNKNOWN_FORMAT,
        "$",
        "error",
        message="Unexpected validation error",
    )])
