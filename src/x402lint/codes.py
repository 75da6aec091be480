"""Issue code constants for x402lint.api.validate().

These constants prevent stringly-typed issue codes and ensure
client code compares against the codes the validator actually emits.
"""

from enum import Enum
from typing import Dict


class IssueCode(str, Enum):
    """Validation error and warning codes."""

    # Structure (terminal)
    INVALID_JSON = "INVALID_JSON"
    NOT_OBJECT = "NOT_OBJECT"
    UNKNOWN_FORMAT = "UNKNOWN_FORMAT"
    MISSING_ACCEPTS = "MISSING_ACCEPTS"
    UNEXPECTED_MANIFEST = "UNEXPECTED_MANIFEST"

    # Errors (blocking)
    INVALID_VERSION = "INVALID_VERSION"
    INVALID_ACCEPTS = "INVALID_ACCEPTS"
    EMPTY_ACCEPTS = "EMPTY_ACCEPTS"
    MISSING_SCHEME = "MISSING_SCHEME"
    MISSING_NETWORK = "MISSING_NETWORK"
    MISSING_AMOUNT = "MISSING_AMOUNT"
    MISSING_ASSET = "MISSING_ASSET"
    MISSING_PAY_TO = "MISSING_PAY_TO"
    INVALID_NETWORK_FORMAT = "INVALID_NETWORK_FORMAT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    ZERO_AMOUNT = "ZERO_AMOUNT"
    INVALID_TIMEOUT = "INVALID_TIMEOUT"
    INVALID_EVM_ADDRESS = "INVALID_EVM_ADDRESS"
    INVALID_SOLANA_ADDRESS = "INVALID_SOLANA_ADDRESS"

    # Warnings (non-blocking)
    MISSING_RESOURCE = "MISSING_RESOURCE"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_NETWORK = "UNKNOWN_NETWORK"
    UNKNOWN_ASSET = "UNKNOWN_ASSET"
    MISSING_MAX_TIMEOUT = "MISSING_MAX_TIMEOUT"
    NO_EVM_CHECKSUM = "NO_EVM_CHECKSUM"
    BAD_EVM_CHECKSUM = "BAD_EVM_CHECKSUM"
    LEGACY_FORMAT = "LEGACY_FORMAT"
    INVALID_EXTENSIONS = "INVALID_EXTENSIONS"
    INVALID_BAZAAR_INFO = "INVALID_BAZAAR_INFO"
    INVALID_BAZAAR_INFO_INPUT = "INVALID_BAZAAR_INFO_INPUT"
    INVALID_BAZAAR_SCHEMA = "INVALID_BAZAAR_SCHEMA"
    INVALID_OUTPUT_SCHEMA = "INVALID_OUTPUT_SCHEMA"
    INVALID_OUTPUT_SCHEMA_INPUT = "INVALID_OUTPUT_SCHEMA_INPUT"
    MISSING_INPUT_SCHEMA = "MISSING_INPUT_SCHEMA"

    # Manifest
    NOT_A_MANIFEST = "NOT_A_MANIFEST"
    EMPTY_MANIFEST = "EMPTY_MANIFEST"
    DUPLICATE_ENDPOINT_ROUTE = "DUPLICATE_ENDPOINT_ROUTE"
    DUPLICATE_ENDPOINT_URL = "DUPLICATE_ENDPOINT_URL"
    MIXED_NETWORKS = "MIXED_NETWORKS"


MESSAGES: Dict[IssueCode, str] = {
    IssueCode.INVALID_JSON: "Input is not valid JSON",
    IssueCode.NOT_OBJECT: "Input must be a JSON object",
    IssueCode.UNKNOWN_FORMAT: "Unrecognized x402 config format",
    IssueCode.MISSING_ACCEPTS: "Config is missing the accepts array",
    IssueCode.UNEXPECTED_MANIFEST: "Input is a multi-endpoint manifest, not a single config",
    IssueCode.INVALID_VERSION: "x402Version must be 1 or 2",
    IssueCode.INVALID_ACCEPTS: "accepts must be an array",
    IssueCode.EMPTY_ACCEPTS: "accepts array must contain at least one payment option",
    IssueCode.MISSING_SCHEME: "Payment option is missing scheme",
    IssueCode.MISSING_NETWORK: "Payment option is missing network",
    IssueCode.MISSING_AMOUNT: "Payment option is missing amount",
    IssueCode.MISSING_ASSET: "Payment option is missing asset",
    IssueCode.MISSING_PAY_TO: "Payment option is missing payTo address",
    IssueCode.INVALID_NETWORK_FORMAT: "network must be a CAIP-2 identifier (namespace:reference)",
    IssueCode.INVALID_AMOUNT: "amount must be a string of digits in atomic units",
    IssueCode.ZERO_AMOUNT: "amount must be greater than zero",
    IssueCode.INVALID_TIMEOUT: "maxTimeoutSeconds must be a positive integer",
    IssueCode.INVALID_EVM_ADDRESS: "EVM address must be 42 hex characters with 0x prefix",
    IssueCode.INVALID_SOLANA_ADDRESS: "Solana address must be a base58-encoded 32-byte public key",
    IssueCode.MISSING_RESOURCE: "resource.url is missing",
    IssueCode.INVALID_URL: "resource.url is not a valid URL",
    IssueCode.UNKNOWN_NETWORK: "Network is a valid CAIP-2 identifier but is not a known x402 network",
    IssueCode.UNKNOWN_ASSET: "Asset is not a known asset for this network",
    IssueCode.MISSING_MAX_TIMEOUT: "maxTimeoutSeconds is missing",
    IssueCode.NO_EVM_CHECKSUM: "EVM address is all-lowercase with no checksum protection",
    IssueCode.BAD_EVM_CHECKSUM: "EVM address has invalid checksum (EIP-55)",
    IssueCode.LEGACY_FORMAT: "Config uses a legacy x402 format",
    IssueCode.INVALID_EXTENSIONS: "extensions must be an object",
    IssueCode.INVALID_BAZAAR_INFO: "extensions.bazaar.info must be an object with input and output",
    IssueCode.INVALID_BAZAAR_INFO_INPUT: "extensions.bazaar.info.input must declare type and method",
    IssueCode.INVALID_BAZAAR_SCHEMA: "extensions.bazaar.schema must be a JSON Schema object",
    IssueCode.INVALID_OUTPUT_SCHEMA: "outputSchema must be an object with input and output",
    IssueCode.INVALID_OUTPUT_SCHEMA_INPUT: "outputSchema.input must declare type and method",
    IssueCode.MISSING_INPUT_SCHEMA: "No input schema found; agents cannot discover how to call this API",
    IssueCode.NOT_A_MANIFEST: "Input is not a multi-endpoint manifest",
    IssueCode.EMPTY_MANIFEST: "Manifest does not declare any endpoints",
    IssueCode.DUPLICATE_ENDPOINT_ROUTE: "Multiple endpoints share the same HTTP method and path",
    IssueCode.DUPLICATE_ENDPOINT_URL: "Multiple endpoints share the same URL",
    IssueCode.MIXED_NETWORKS: "Manifest mixes mainnet and testnet networks",
}
