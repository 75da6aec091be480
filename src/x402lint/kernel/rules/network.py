"""Level 4: network and asset validation against the registry."""

from typing import List

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.config import AcceptsEntry
from x402lint.kernel.rules.base import RuleContext, is_blank


def validate_network(entry: AcceptsEntry, field_path: str, ctx: RuleContext) -> List[ValidationIssue]:
    """CAIP-2 format check, with a canonical-id fix for known shorthand names."""
    network = entry.network
    # Missing field already caught by validate_fields
    if is_blank(network):
        return []

    registry = ctx.registry
    field = f"{field_path}.network"
    if not registry.is_valid_caip2(network):
        canonical = registry.canonical_network(network)
        fix = (
            f"Use '{canonical}' instead of '{network}'"
            if canonical
            else "Use a CAIP-2 identifier such as 'eip155:8453' (Base)"
        )
        return [ValidationIssue.of(IssueCode.INVALID_NETWORK_FORMAT, field, "error", fix=fix)]

    if not registry.is_known_network(network):
        return [ValidationIssue.of(
            IssueCode.UNKNOWN_NETWORK,
            field,
            "warning",
            message=f"Network '{network}' is a valid CAIP-2 identifier but is not a known x402 network",
        )]
    return []


def validate_asset(entry: AcceptsEntry, field_path: str, ctx: RuleContext) -> List[ValidationIssue]:
    """Warn when the asset is not registered for the entry's network.

    Only checked when the network itself is valid CAIP-2; otherwise the
    network issue already explains the problem.
    """
    if is_blank(entry.asset):
        return []
    registry = ctx.registry
    if not registry.is_valid_caip2(entry.network):
        return []
    if registry.is_known_asset(entry.network, entry.asset):
        return []

    info = registry.get_network_info(entry.network)
    known = registry.assets.get(entry.network, ())
    fix = None
    if info is not None and known:
        listed = ", ".join(f"{a.symbol} {a.address}" for a in known)
        fix = f"Known assets on {info.name}: {listed}"
    return [ValidationIssue.of(IssueCode.UNKNOWN_ASSET, f"{field_path}.asset", "warning", fix=fix)]
