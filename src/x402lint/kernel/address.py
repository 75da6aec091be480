"""Chain-aware payment address validation.

Dispatches on the CAIP-2 namespace of the entry's network. A recognised
shorthand network name (e.g. "base") is resolved to its canonical id first
so its address still gets checked.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.checksum import Base58Error, decode_base58, is_valid_checksum, to_checksum_address
from x402lint.kernel.registry import Registry

EVM_ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")
SOLANA_PUBKEY_BYTES = 32


def validate_evm_address(address: Any, field: str) -> List[ValidationIssue]:
    """Format check, then EIP-55 checksum check.

    Returns:
        errors for a malformed address, warnings for checksum problems.
        Every checksum warning carries the correctly checksummed address.
    """
    if not isinstance(address, str) or not EVM_ADDRESS_PATTERN.fullmatch(address):
        return [ValidationIssue.of(
            IssueCode.INVALID_EVM_ADDRESS,
            field,
            "error",
            fix="Format: 0x followed by 40 hex digits (0-9, a-f, A-F)",
        )]

    hex_part = address[2:]
    has_letter = any(c.isalpha() for c in hex_part)

    if hex_part == hex_part.lower() and has_letter:
        return [ValidationIssue.of(
            IssueCode.NO_EVM_CHECKSUM,
            field,
            "warning",
            fix=f"Use checksummed address to detect typos: {to_checksum_address(address)}",
        )]

    # All-uppercase or all-digit: a checksum carries no information
    if hex_part == hex_part.upper() or not has_letter:
        return []

    if not is_valid_checksum(address):
        return [ValidationIssue.of(
            IssueCode.BAD_EVM_CHECKSUM,
            field,
            "warning",
            fix=f"Expected: {to_checksum_address(address)}",
        )]
    return []


def validate_solana_address(address: Any, field: str) -> List[ValidationIssue]:
    """Base58 alphabet and 32-byte public key length."""
    problem: Optional[str] = None
    if not isinstance(address, str):
        problem = "address must be a string"
    else:
        try:
            decoded = decode_base58(address)
        except Base58Error as e:
            problem = str(e)
        else:
            if len(decoded) != SOLANA_PUBKEY_BYTES:
                problem = f"decodes to {len(decoded)} bytes, expected {SOLANA_PUBKEY_BYTES}"

    if problem is None:
        return []
    return [ValidationIssue.of(
        IssueCode.INVALID_SOLANA_ADDRESS,
        field,
        "error",
        message=f"Solana address is invalid: {problem}",
        fix="Use the base58 public key of the receiving wallet (32-44 characters)",
    )]


VALIDATORS: Dict[str, Callable[[Any, str], List[ValidationIssue]]] = {
    "eip155": validate_evm_address,
    "solana": validate_solana_address,
}


def network_namespace(network: Any, registry: Registry) -> Optional[str]:
    """CAIP-2 namespace of network, resolving shorthand names through the registry."""
    if registry.is_valid_caip2(network):
        return network.split(":", 1)[0]
    canonical = registry.canonical_network(network)
    if canonical is not None:
        return canonical.split(":", 1)[0]
    return None


def validate_address(address: Any, network: Any, field: str, registry: Registry) -> List[ValidationIssue]:
    """Validate address against the chain its network belongs to.

    Namespaces without a validator are accepted unchecked.
    """
    namespace = network_namespace(network, registry)
    validator = VALIDATORS.get(namespace) if namespace else None
    if validator is None:
        return []
    return validator(address, field)
