"""Level 4: amount and timeout validation."""

import re
from typing import List

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.config import AcceptsEntry
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.rules.base import RuleContext, is_blank

# ASCII digits only; \d would also accept other Unicode digits
ATOMIC_AMOUNT = re.compile(r"[0-9]+")


def validate_amount(entry: AcceptsEntry, field_path: str, ctx: RuleContext) -> List[ValidationIssue]:
    """amount must be a digits-only string in atomic units, greater than zero.

    Decimal points, signs and exponents are rejected on purpose: x402
    amounts are integers in the asset's smallest unit.
    """
    amount = entry.amount
    # Missing field already caught by validate_fields
    if is_blank(amount):
        return []

    field = f"{field_path}.amount"
    if not isinstance(amount, str):
        return [ValidationIssue.of(
            IssueCode.INVALID_AMOUNT,
            field,
            "error",
            message=f"amount must be a string of digits, got {type(amount).__name__}",
            fix=f'Encode the amount as a string, e.g. "{amount}"' if isinstance(amount, int) else None,
        )]

    if not ATOMIC_AMOUNT.fullmatch(amount):
        return [ValidationIssue.of(
            IssueCode.INVALID_AMOUNT,
            field,
            "error",
            fix='Use atomic units with no decimal point, e.g. "10000" for 0.01 USDC (6 decimals)',
        )]

    if not amount.strip("0"):
        return [ValidationIssue.of(IssueCode.ZERO_AMOUNT, field, "error")]
    return []


def validate_timeout(entry: AcceptsEntry, field_path: str, ctx: RuleContext) -> List[ValidationIssue]:
    """maxTimeoutSeconds must be a positive integer; absence on v2 warns."""
    timeout = entry.max_timeout_seconds
    field = f"{field_path}.maxTimeoutSeconds"

    if timeout is None:
        if ctx.format is ConfigFormat.V2:
            return [ValidationIssue.of(
                IssueCode.MISSING_MAX_TIMEOUT,
                field,
                "warning",
                fix="Add maxTimeoutSeconds, e.g. 60",
            )]
        return []

    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        return [ValidationIssue.of(IssueCode.INVALID_TIMEOUT, field, "error")]
    if isinstance(timeout, float) and not timeout.is_integer():
        return [ValidationIssue.of(IssueCode.INVALID_TIMEOUT, field, "error")]
    if timeout <= 0:
        return [ValidationIssue.of(IssueCode.INVALID_TIMEOUT, field, "error")]
    return []
