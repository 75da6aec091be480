"""Shared context and helpers for rule modules."""

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping

from x402lint.contracts import ValidationIssue
from x402lint.kernel.config import AcceptsEntry, NormalizedConfig
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.registry import Registry


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at besides the normalized config.

    parsed is the pre-normalization document; only rules that need data the
    canonical shape drops (e.g. per-entry outputSchema) should read it.
    """
    format: ConfigFormat
    parsed: Mapping[str, Any]
    registry: Registry


GlobalRule = Callable[[NormalizedConfig, RuleContext], List[ValidationIssue]]
EntryRule = Callable[[AcceptsEntry, str, RuleContext], List[ValidationIssue]]


def is_blank(value: Any) -> bool:
    """Missing for the purposes of required-field checks."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)
