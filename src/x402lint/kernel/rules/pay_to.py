"""Level 4: payTo address validation."""

from typing import List

from x402lint.contracts import ValidationIssue
from x402lint.kernel.address import validate_address
from x402lint.kernel.config import AcceptsEntry
from x402lint.kernel.rules.base import RuleContext, is_blank


def validate_pay_to(entry: AcceptsEntry, field_path: str, ctx: RuleContext) -> List[ValidationIssue]:
    """Chain-specific address check; needs both payTo and network."""
    if is_blank(entry.pay_to) or is_blank(entry.network):
        return []
    return validate_address(entry.pay_to, entry.network, f"{field_path}.payTo", ctx.registry)
