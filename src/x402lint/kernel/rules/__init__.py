"""Rule modules, in the order the pipeline runs them.

Each rule is independent: it sees the normalized config and the RuleContext,
never another rule's output.
"""

from typing import Tuple

from x402lint.kernel.rules.amount import validate_amount, validate_timeout
from x402lint.kernel.rules.base import EntryRule, GlobalRule, RuleContext
from x402lint.kernel.rules.extensions import validate_bazaar, validate_missing_schema, validate_output_schema
from x402lint.kernel.rules.fields import validate_accepts, validate_fields, validate_resource
from x402lint.kernel.rules.legacy import validate_legacy
from x402lint.kernel.rules.network import validate_asset, validate_network
from x402lint.kernel.rules.pay_to import validate_pay_to
from x402lint.kernel.rules.structure import validate_structure
from x402lint.kernel.rules.version import validate_version

# Run once per config, before the per-entry rules
PRE_ENTRY_RULES: Tuple[GlobalRule, ...] = (
    validate_version,
    validate_accepts,
    validate_resource,
)

# Run once per accepts element
ENTRY_RULES: Tuple[EntryRule, ...] = (
    validate_fields,
    validate_network,
    validate_asset,
    validate_amount,
    validate_timeout,
    validate_pay_to,
)

# Run once per config, after the per-entry rules
POST_ENTRY_RULES: Tuple[GlobalRule, ...] = (
    validate_legacy,
    validate_bazaar,
    validate_output_schema,
    validate_missing_schema,
)

__all__ = [
    "RuleContext",
    "PRE_ENTRY_RULES",
    "ENTRY_RULES",
    "POST_ENTRY_RULES",
    "validate_structure",
    "validate_version",
    "validate_accepts",
    "validate_fields",
    "validate_resource",
    "validate_network",
    "validate_asset",
    "validate_amount",
    "validate_timeout",
    "validate_pay_to",
    "validate_legacy",
    "validate_bazaar",
    "validate_output_schema",
    "validate_missing_schema",
]
