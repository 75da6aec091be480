"""Level 2-3: accepts array, required entry fields, and resource."""

from typing import List

from pydantic import AnyUrl, TypeAdapter, ValidationError

from x402lint.codes import IssueCode
from x402lint.contracts import ValidationIssue
from x402lint.kernel.config import AcceptsEntry, NormalizedConfig
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.rules.base import RuleContext, is_blank

_URL_ADAPTER = TypeAdapter(AnyUrl)

# (attribute, wire name, code)
REQUIRED_FIELDS = (
    ("scheme", "scheme", IssueCode.MISSING_SCHEME),
    ("network", "network", IssueCode.MISSING_NETWORK),
    ("amount", "amount", IssueCode.MISSING_AMOUNT),
    ("asset", "asset", IssueCode.MISSING_ASSET),
    ("pay_to", "payTo", IssueCode.MISSING_PAY_TO),
)


def validate_accepts(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """accepts must be a non-empty array."""
    if not isinstance(config.accepts, list):
        return [ValidationIssue.of(IssueCode.INVALID_ACCEPTS, "accepts", "error")]
    if not config.accepts:
        return [ValidationIssue.of(
            IssueCode.EMPTY_ACCEPTS,
            "accepts",
            "error",
            fix="Add at least one payment option to accepts",
        )]
    return []


def validate_fields(entry: AcceptsEntry, field_path: str, ctx: RuleContext) -> List[ValidationIssue]:
    """Every accepts entry needs scheme, network, amount, asset and payTo."""
    issues = []
    for attr, wire_name, code in REQUIRED_FIELDS:
        if is_blank(getattr(entry, attr)):
            issues.append(ValidationIssue.of(code, f"{field_path}.{wire_name}", "error"))
    return issues


def validate_resource(config: NormalizedConfig, ctx: RuleContext) -> List[ValidationIssue]:
    """resource.url should be present (v2) and must parse as an absolute URL.

    Absence is a warning, not an error; some v2 servers work without it.
    """
    resource = config.resource
    if resource is None:
        if ctx.format is ConfigFormat.V2:
            return [ValidationIssue.of(
                IssueCode.MISSING_RESOURCE,
                "resource",
                "warning",
                fix='Add resource: {"url": "https://api.example.com/endpoint"}',
            )]
        return []

    if is_blank(resource.url):
        return [ValidationIssue.of(IssueCode.MISSING_RESOURCE, "resource.url", "warning")]

    if not isinstance(resource.url, str) or not _is_url(resource.url):
        return [ValidationIssue.of(
            IssueCode.INVALID_URL,
            "resource.url",
            "warning",
            fix="Use an absolute URL including the scheme, e.g. https://api.example.com/endpoint",
        )]
    return []


def _is_url(value: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True
