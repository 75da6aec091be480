"""Level 6: discoverability extensions.

Validates extensions.bazaar (v2) and the deprecated per-entry
accepts[].outputSchema (v1). All issues are warnings: schemas help agents
discover an API but are not needed for the payment flow.
"""

from typing import Any, List, Mapping

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.config import NormalizedConfig
from x402lint.kernel.rules.base import RuleContext, is_object

INPUT_FIX = 'Add input.type (e.g. "http") and input.method (e.g. "POST")'
OUTPUT_FIX = "Add an output object describing the API response format"


def _has_typed_input(value: Any) -> bool:
    return is_object(value) and bool(value.get("type")) and bool(value.get("method"))


def validate_bazaar(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """Shape of extensions.bazaar: info.input (type + method), info.output, schema."""
    extensions = config.extensions
    if extensions is None:
        return []
    if not is_object(extensions):
        return [ValidationIssue.of(
            IssueCode.INVALID_EXTENSIONS,
            "extensions",
            "warning",
            fix="Set extensions to an object keyed by extension name",
        )]

    bazaar = extensions.get("bazaar")
    if bazaar is None:
        return []
    if not is_object(bazaar):
        return [ValidationIssue.of(
            IssueCode.INVALID_BAZAAR_INFO,
            "extensions.bazaar",
            "warning",
            message="extensions.bazaar must be an object",
            fix="Set extensions.bazaar to an object with info and schema properties",
        )]

    issues = []
    info = bazaar.get("info")
    if not is_object(info):
        issues.append(ValidationIssue.of(
            IssueCode.INVALID_BAZAAR_INFO,
            "extensions.bazaar.info",
            "warning",
            fix="Add an info object with input and output properties describing your API",
        ))
    else:
        if not _has_typed_input(info.get("input")):
            issues.append(ValidationIssue.of(
                IssueCode.INVALID_BAZAAR_INFO_INPUT,
                "extensions.bazaar.info.input",
                "warning",
                fix=INPUT_FIX,
            ))
        if not is_object(info.get("output")):
            issues.append(ValidationIssue.of(
                IssueCode.INVALID_BAZAAR_INFO,
                "extensions.bazaar.info.output",
                "warning",
                message="extensions.bazaar.info.output must be an object",
                fix=OUTPUT_FIX,
            ))

    schema = bazaar.get("schema")
    if not is_object(schema) or not any(schema.get(k) for k in ("type", "$schema", "properties")):
        issues.append(ValidationIssue.of(
            IssueCode.INVALID_BAZAAR_SCHEMA,
            "extensions.bazaar.schema",
            "warning",
            fix="Add a JSON Schema object with type, $schema, or properties",
        ))
    return issues


def validate_output_schema(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """Shape of each accepts[i].outputSchema in the parsed input.

    Uses the parsed document because AcceptsEntry drops outputSchema.
    """
    accepts = ctx.parsed.get("accepts")
    if not isinstance(accepts, list):
        return []

    issues = []
    for i, entry in enumerate(accepts):
        if not isinstance(entry, Mapping) or entry.get("outputSchema") is None:
            continue
        output_schema = entry["outputSchema"]
        field_path = f"accepts[{i}].outputSchema"

        if not is_object(output_schema):
            issues.append(ValidationIssue.of(
                IssueCode.INVALID_OUTPUT_SCHEMA,
                field_path,
                "warning",
                fix="Set outputSchema to an object with input and output properties",
            ))
            continue

        if not _has_typed_input(output_schema.get("input")):
            issues.append(ValidationIssue.of(
                IssueCode.INVALID_OUTPUT_SCHEMA_INPUT,
                f"{field_path}.input",
                "warning",
                fix=INPUT_FIX,
            ))
        if not is_object(output_schema.get("output")):
            issues.append(ValidationIssue.of(
                IssueCode.INVALID_OUTPUT_SCHEMA,
                f"{field_path}.output",
                "warning",
                message=f"{field_path}.output must be an object",
                fix=OUTPUT_FIX,
            ))
    return issues


def validate_missing_schema(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """One warning when neither extensions.bazaar nor any outputSchema exists."""
    if is_object(config.extensions) and config.extensions.get("bazaar") is not None:
        return []

    accepts = ctx.parsed.get("accepts")
    if isinstance(accepts, list):
        for entry in accepts:
            if isinstance(entry, Mapping) and entry.get("outputSchema") is not None:
                return []

    return [ValidationIssue.of(
        IssueCode.MISSING_INPUT_SCHEMA,
        "extensions",
        "warning",
        fix="Add extensions.bazaar with info and schema to help agents discover your API",
    )]
