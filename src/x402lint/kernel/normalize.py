"""Normalization of every recognised shape onto the canonical v2 config.

Normalization only relocates fields. Financial values (amount, asset,
network, payTo) are copied exactly as found; reporting problems with them is
the job of the rule modules.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Set, Tuple
from urllib.parse import urlsplit

from x402lint.kernel.config import (
    AcceptsEntry,
    ManifestEndpoint,
    NormalizedConfig,
    NormalizedManifest,
    Resource,
)
from x402lint.kernel.detect import ADDRESS_KEYS, AMOUNT_KEYS, ConfigFormat, DetectedInput, detect_input

logger = logging.getLogger(__name__)

NETWORK_KEYS: Tuple[str, ...] = ("network", "chain")
ASSET_KEYS: Tuple[str, ...] = ("asset", "token", "currency")
EMBEDDED_DOCUMENT_KEYS: Tuple[str, ...] = ("config", "payment", "paymentRequirements")
ENDPOINT_URL_KEYS: Tuple[str, ...] = ("url", "path", "route")
SERVICE_CHILD_KEYS: Tuple[str, ...] = ("endpoints", "routes")


@dataclass(frozen=True)
class NormalizeOutcome:
    """Either a normalized config or the reason no mapping exists."""
    config: Optional[NormalizedConfig] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.config is not None


@dataclass(frozen=True)
class ManifestOutcome:
    """Either a normalized manifest or the reason no endpoint list exists."""
    manifest: Optional[NormalizedManifest] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.manifest is not None


def normalize_detected(detected: DetectedInput) -> NormalizeOutcome:
    """Map an already-classified single config onto the canonical shape."""
    parsed = detected.parsed
    if parsed is None or not detected.ok:
        return NormalizeOutcome(reason="input did not pass structure checks")

    fmt = detected.format
    if fmt is ConfigFormat.V2:
        return NormalizeOutcome(config=_from_v2(parsed))
    if fmt is ConfigFormat.V1:
        return NormalizeOutcome(config=_from_v1(parsed))
    if fmt is ConfigFormat.FLAT_LEGACY:
        return NormalizeOutcome(config=_from_flat_legacy(parsed))
    if fmt is ConfigFormat.MANIFEST:
        return NormalizeOutcome(reason="manifests normalize to an endpoint list, not a single config")
    return NormalizeOutcome(reason=f"no normalization exists for format '{fmt.value}'")


def normalize_config(raw: Any) -> NormalizeOutcome:
    """Detect and normalize in one step."""
    return normalize_detected(detect_input(raw))


def _from_v2(parsed: Mapping[str, Any]) -> NormalizedConfig:
    return NormalizedConfig(
        accepts=[_entry(e) for e in parsed["accepts"]],
        resource=_resource(parsed.get("resource")),
        extensions=parsed.get("extensions"),
    )


def _from_v1(parsed: Mapping[str, Any]) -> NormalizedConfig:
    raw_entries = parsed["accepts"]
    resource = _resource(parsed.get("resource"))
    if resource is None:
        # v1 carried the resource URL on each payment option
        for raw_entry in raw_entries:
            if isinstance(raw_entry, Mapping) and isinstance(raw_entry.get("resource"), str):
                resource = Resource(
                    url=raw_entry["resource"],
                    description=raw_entry.get("description"),
                    mime_type=raw_entry.get("mimeType"),
                )
                break
    return NormalizedConfig(
        accepts=[_entry(e, amount_keys=("amount", "maxAmountRequired")) for e in raw_entries],
        resource=resource,
        extensions=parsed.get("extensions"),
    )


def _from_flat_legacy(parsed: Mapping[str, Any]) -> NormalizedConfig:
    entry = AcceptsEntry(
        scheme=parsed.get("scheme"),
        network=_first(parsed, NETWORK_KEYS),
        amount=_first(parsed, AMOUNT_KEYS),
        asset=_first(parsed, ASSET_KEYS),
        pay_to=_first(parsed, ADDRESS_KEYS),
        max_timeout_seconds=parsed.get("maxTimeoutSeconds"),
        extra=parsed.get("extra"),
    )
    return NormalizedConfig(
        accepts=[entry],
        resource=_resource(parsed.get("resource")),
        extensions=parsed.get("extensions"),
    )


def _entry(raw: Any, amount_keys: Tuple[str, ...] = ("amount",)) -> AcceptsEntry:
    if not isinstance(raw, Mapping):
        # Reported entry-by-entry as missing fields
        return AcceptsEntry()
    return AcceptsEntry(
        scheme=raw.get("scheme"),
        network=raw.get("network"),
        amount=_first(raw, amount_keys),
        asset=raw.get("asset"),
        pay_to=raw.get("payTo"),
        max_timeout_seconds=raw.get("maxTimeoutSeconds"),
        extra=raw.get("extra"),
    )


def _resource(value: Any) -> Optional[Resource]:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return Resource(
            url=value.get("url"),
            description=value.get("description"),
            mime_type=value.get("mimeType"),
        )
    return Resource(url=value)


def _first(raw: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


# ── Manifests ───────────────────────────────────────────────────────────


@dataclass
class _Candidate:
    descriptor: Any
    key_hint: Optional[str] = None
    base_url: Optional[str] = None


@dataclass
class _IdAllocator:
    """Hands out unique endpoint ids, suffixing -2, -3, ... on collision."""
    seen: Set[str] = field(default_factory=set)

    def allocate(self, base: str) -> str:
        candidate = base
        n = 2
        while candidate in self.seen:
            candidate = f"{base}-{n}"
            n += 1
        self.seen.add(candidate)
        return candidate


def normalize_manifest(parsed: Mapping[str, Any]) -> ManifestOutcome:
    """Synthesize an endpoint list from a (possibly wild) manifest.

    Patterns, tried in order:
    1. array-of-endpoints: ``endpoints`` is a list of endpoint descriptors.
    2. nested-service-object: ``endpoints`` maps names to descriptors; a value
       holding its own ``endpoints``/``routes`` list is a service whose
       children are flattened in order.
    """
    endpoints_value = parsed.get("endpoints")
    if isinstance(endpoints_value, list):
        pattern = "array-of-endpoints"
        candidates = list(_from_endpoint_array(endpoints_value))
    elif isinstance(endpoints_value, Mapping):
        pattern = "nested-service-object"
        candidates = list(_from_service_object(endpoints_value))
    else:
        return ManifestOutcome(reason="endpoints must be an object or an array")

    logger.debug("Manifest pattern %s yielded %d endpoint(s)", pattern, len(candidates))

    allocator = _IdAllocator()
    endpoints = {}
    for index, candidate in enumerate(candidates):
        endpoint = _endpoint(candidate, index, allocator)
        endpoints[endpoint.id] = endpoint

    service = parsed.get("service")
    return ManifestOutcome(
        manifest=NormalizedManifest(
            service=dict(service) if isinstance(service, Mapping) else None,
            endpoints=endpoints,
        )
    )


def _from_endpoint_array(items: List[Any], base_url: Optional[str] = None,
                         key_prefix: Optional[str] = None) -> Iterator[_Candidate]:
    for i, item in enumerate(items):
        key_hint = f"{key_prefix}-{i}" if key_prefix else None
        yield _Candidate(item, key_hint=key_hint, base_url=base_url)


def _from_service_object(mapping: Mapping[str, Any]) -> Iterator[_Candidate]:
    for key, value in mapping.items():
        children = _service_children(value)
        if children is None:
            yield _Candidate(value, key_hint=str(key))
            continue
        base_url = value.get("url") or value.get("baseUrl")
        yield from _from_endpoint_array(
            children,
            base_url=base_url if isinstance(base_url, str) else None,
            key_prefix=str(key),
        )


def _service_children(value: Any) -> Optional[List[Any]]:
    if not isinstance(value, Mapping):
        return None
    for key in SERVICE_CHILD_KEYS:
        if isinstance(value.get(key), list):
            return value[key]
    return None


def _endpoint(candidate: _Candidate, index: int, allocator: _IdAllocator) -> ManifestEndpoint:
    descriptor = candidate.descriptor
    document = _embedded_document(descriptor)
    url = _endpoint_url(descriptor, document, candidate.base_url)

    base_id = _path_id(url) or candidate.key_hint or f"endpoint-{index}"
    method = descriptor.get("method") if isinstance(descriptor, Mapping) else None

    return ManifestEndpoint(
        id=allocator.allocate(base_id),
        url=url,
        method=method.upper() if isinstance(method, str) and method.strip() else "GET",
        document=document,
        # Only embedded objects are configs; strings are never re-parsed as JSON
        config=normalize_config(document).config if isinstance(document, Mapping) else None,
    )


def _embedded_document(descriptor: Any) -> Any:
    if isinstance(descriptor, Mapping):
        for key in EMBEDDED_DOCUMENT_KEYS:
            if isinstance(descriptor.get(key), Mapping):
                return descriptor[key]
    return descriptor


def _endpoint_url(descriptor: Any, document: Any, base_url: Optional[str]) -> Optional[str]:
    url = None
    for source in (descriptor, document):
        if not isinstance(source, Mapping):
            continue
        for key in ENDPOINT_URL_KEYS:
            if isinstance(source.get(key), str) and source[key].strip():
                url = source[key].strip()
                break
        if url is None:
            resource = source.get("resource")
            if isinstance(resource, Mapping) and isinstance(resource.get("url"), str):
                url = resource["url"]
            elif isinstance(resource, str):
                url = resource
        if url is not None:
            break

    if url is not None and base_url and url.startswith("/"):
        url = base_url.rstrip("/") + url
    return url


def _path_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        path = urlsplit(url).path
    except ValueError:
        return None
    path = path.strip("/")
    return path or None
