"""Level 1: structure validation (parse, object check, format detection).

Any issue produced here is terminal for the pipeline.
"""

from typing import Any

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.detect import ConfigFormat, DetectedInput, detect_input


def validate_structure(raw: Any, allow_manifest: bool = False) -> DetectedInput:
    """Parse and classify raw input.

    Args:
        raw: JSON text or an already-parsed value
        allow_manifest: when False a manifest is reported as UNEXPECTED_MANIFEST

    Returns:
        DetectedInput; its issues list is non-empty exactly when the
        pipeline must stop.
    """
    detected = detect_input(raw)
    if detected.issues:
        return detected

    if detected.format is ConfigFormat.MANIFEST and not allow_manifest:
        return DetectedInput(
            detected.format,
            detected.parsed,
            [ValidationIssue.of(
                IssueCode.UNEXPECTED_MANIFEST,
                "endpoints",
                "error",
                fix="Validate multi-endpoint documents with validate_manifest() (CLI: --manifest)",
            )],
        )
    return detected
