"""Level 5: legacy format warnings with upgrade suggestions."""

from typing import List, Mapping

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.config import NormalizedConfig
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.rules.base import RuleContext


def validate_legacy(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """Warn on v1 and flat-legacy input, naming the concrete edits to upgrade.

    Reads the parsed input because normalization already renamed
    maxAmountRequired away.
    """
    if ctx.format is ConfigFormat.V1:
        steps = ["set x402Version to 2"]
        renamed = [
            f"accepts[{i}]"
            for i, entry in enumerate(ctx.parsed.get("accepts") or [])
            if isinstance(entry, Mapping) and "maxAmountRequired" in entry
        ]
        if renamed:
            steps.append(f"rename maxAmountRequired to amount in {', '.join(renamed)}")
        if "resource" not in ctx.parsed:
            steps.append('add a top-level resource object ({"url": ...})')
        return [ValidationIssue.of(
            IssueCode.LEGACY_FORMAT,
            "$",
            "warning",
            message="Config uses the x402 v1 format",
            fix="Upgrade to x402 v2: " + "; ".join(steps),
        )]

    if ctx.format is ConfigFormat.FLAT_LEGACY:
        return [ValidationIssue.of(
            IssueCode.LEGACY_FORMAT,
            "$",
            "warning",
            message="Config uses flat payment fields without an accepts array",
            fix="Upgrade to x402 v2: set x402Version to 2 and move the payment fields into accepts[0]",
        )]
    return []
