"""Validation orchestrator.

Pipeline: structure -> normalize -> rules -> strict mode.

The first two stages return result values and stop the pipeline on failure;
the rule stage always runs every applicable rule so the caller gets the
complete list of problems in one pass.
"""

import logging
from typing import Any, List, Tuple

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue, ValidationOptions, ValidationResult
from x402lint.kernel.config import NormalizedConfig
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.normalize import normalize_detected
from x402lint.kernel.registry import Registry
from x402lint.kernel.rules import (
    ENTRY_RULES,
    POST_ENTRY_RULES,
    PRE_ENTRY_RULES,
    RuleContext,
    validate_structure,
)

logger = logging.getLogger(__name__)


def run_pipeline(raw: Any, options: ValidationOptions, registry: Registry) -> ValidationResult:
    """Validate one config document.

    Rule modules are total over a NormalizedConfig, so this function does not
    raise for any input; api.validate still guards it.
    """
    # Level 1: structure (terminal)
    detected = validate_structure(raw)
    if detected.issues:
        return terminal_result(detected.format, detected.issues)

    # Normalize (terminal on failure)
    outcome = normalize_detected(detected)
    if not outcome.ok:
        logger.debug("Normalization failed: %s", outcome.reason)
        return terminal_result(detected.format, [ValidationIssue.of(
            IssueCode.UNKNOWN_FORMAT,
            "$",
            "error",
        )])

    ctx = RuleContext(format=detected.format, parsed=detected.parsed, registry=registry)
    errors, warnings = bucket(collect_issues(outcome.config, ctx))

    if options.strict:
        errors, warnings = promote_warnings(errors, warnings)

    return ValidationResult(
        valid=not errors,
        version=detected.format.value,
        errors=errors,
        warnings=warnings,
        normalized=outcome.config,
    )


def run_guarded(raw: Any, options: ValidationOptions, registry: Registry) -> ValidationResult:
    """run_pipeline with a last-resort guard; never raises."""
    try:
        return run_pipeline(raw, options, registry)
    except Exception:
        logger.exception("Unexpected failure while validating config")
        return unexpected_failure_result()


def collect_issues(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """Run every rule module; no early return."""
    issues: List[ValidationIssue] = []
    for rule in PRE_ENTRY_RULES:
        issues.extend(rule(config, ctx))
    for i, entry in enumerate(config.accepts):
        field_path = f"accepts[{i}]"
        for entry_rule in ENTRY_RULES:
            issues.extend(entry_rule(entry, field_path, ctx))
    for rule in POST_ENTRY_RULES:
        issues.extend(rule(config, ctx))
    return issues


def bucket(issues: List[ValidationIssue]) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
    """Split issues into (errors, warnings) by declared severity, keeping order."""
    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]
    return errors, warnings


def promote_warnings(
    errors: List[ValidationIssue], warnings: List[ValidationIssue]
) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
    """Strict mode: every warning is appended to errors as an error."""
    return errors + [w.as_error() for w in warnings], []


def terminal_result(fmt: ConfigFormat, issues: List[ValidationIssue]) -> ValidationResult:
    return ValidationResult(
        valid=False,
        version=fmt.value,
        errors=list(issues),
        warnings=[],
        normalized=None,
    )


def unexpected_failure_result() -> ValidationResult:
    """Generic terminal result used when a latent defect raises."""
    return terminal_result(ConfigFormat.UNKNOWN, [ValidationIssue.of(
        IssueCode.UNKNOWN_FORMAT,
        "$",
        "error",
        message="Unexpected validation error",
    )])
