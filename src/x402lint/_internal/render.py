"""Text and JSON rendering of results for the CLI (internal)."""

import json
from typing import List

from pydantic import BaseModel

from x402lint.contracts import CheckResult, ManifestValidationResult, ValidationIssue, ValidationResult


def dumps_result(result: BaseModel) -> str:
    """Stable JSON for piping: camelCase keys, 2-space indent, UTF-8 kept."""
    return json.dumps(
        result.model_dump(mode="json", by_alias=True),
        indent=2,
        ensure_ascii=False,
    )


def format_issue(issue: ValidationIssue, indent: str = "  ") -> str:
    marker = "x" if issue.severity == "error" else "!"
    line = f"{indent}{marker} {issue.code} [{issue.field}]: {issue.message}"
    if issue.fix:
        line += f"\n{indent}    fix: {issue.fix}"
    return line


def _issue_block(title: str, issues: List[ValidationIssue], indent: str = "  ") -> List[str]:
    if not issues:
        return []
    lines = [f"{indent}{title} ({len(issues)}):"]
    lines.extend(format_issue(issue, indent + "  ") for issue in issues)
    return lines


def format_validation_result(result: ValidationResult, indent: str = "") -> str:
    status = "OK" if result.valid else "FAILED"
    adjective = "Valid" if result.valid else "Invalid"
    lines = [f"{indent}[{status}] {adjective} x402 config ({result.version})"]
    lines.append(f"{indent}  Errors: {len(result.errors)}")
    lines.append(f"{indent}  Warnings: {len(result.warnings)}")
    lines.extend(_issue_block("Errors", result.errors, indent + "  "))
    lines.extend(_issue_block("Warnings", result.warnings, indent + "  "))
    return "\n".join(lines)


def format_manifest_result(result: ManifestValidationResult) -> str:
    status = "OK" if result.valid else "FAILED"
    lines = [f"[{status}] Manifest with {len(result.endpoint_results)} endpoint(s)"]
    lines.append(f"  Manifest errors: {len(result.manifest_errors)}")
    lines.append(f"  Manifest warnings: {len(result.manifest_warnings)}")
    lines.extend(_issue_block("Manifest issues", result.manifest_issues))
    for endpoint_id, endpoint_result in result.endpoint_results.items():
        lines.append("")
        lines.append(f"  Endpoint {endpoint_id}:")
        lines.append(format_validation_result(endpoint_result, indent="    "))
    return "\n".join(lines)


def format_check_result(result: CheckResult) -> str:
    if not result.extracted:
        lines = ["[FAILED] No x402 config found"]
        if result.extraction_error:
            lines.append(f"  {result.extraction_error}")
        return "\n".join(lines)

    status = "OK" if result.valid else "FAILED"
    adjective = "Valid" if result.valid else "Invalid"
    lines = [
        f"Extracted from: {result.source}",
        f"[{status}] {adjective} x402 config ({result.version})",
        f"  Errors: {len(result.errors)}",
        f"  Warnings: {len(result.warnings)}",
    ]
    if result.summary:
        lines.append("  Payment options:")
        for s in result.summary:
            symbol = s.asset_symbol or s.asset
            pay_to = str(s.pay_to)
            lines.append(f"    [{s.index}] {s.amount} {symbol} on {s.network_name or s.network} -> {pay_to[:10]}...")
    lines.extend(_issue_block("Errors", result.errors))
    lines.extend(_issue_block("Warnings", result.warnings))
    return "\n".join(lines)
