"""Level 2: version validation."""

from typing import List

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.config import NormalizedConfig
from x402lint.kernel.rules.base import RuleContext


def validate_version(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """x402Version of the normalized config must be 1 or 2.

    Normalization pins the version to 2, so this only fires if a config was
    constructed by hand with some other value.
    """
    version = config.x402_version
    if isinstance(version, bool) or version not in (1, 2):
        return [ValidationIssue.of(
            IssueCode.INVALID_VERSION,
            "x402Version",
            "error",
            fix="Set x402Version to 2",
        )]
    return []
