"""Public result models for x402lint package."""

import logging
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from x402lint.codes import MESSAGES, IssueCode
from x402lint.kernel.config import NormalizedConfig, NormalizedManifest, WireModel

logger = logging.getLogger(__name__)

Severity = Literal["error", "warning"]


class ValidationIssue(WireModel):
    """A single validation issue (error or warning)."""
    code: str  # an IssueCode value
    field: str  # dot/bracket path, "$" for the document root
    message: str
    severity: Severity
    fix: Optional[str] = None

    @classmethod
    def of(
        cls,
        code: IssueCode,
        field: str,
        severity: Severity,
        message: Optional[str] = None,
        fix: Optional[str] = None,
    ) -> "ValidationIssue":
        """Build an issue, defaulting the message from the code table."""
        return cls(
            code=code.value,
            field=field,
            message=message or MESSAGES[code],
            severity=severity,
            fix=fix,
        )

    def as_error(self) -> "ValidationIssue":
        return self.model_copy(update={"severity": "error"})


class ValidationResult(WireModel):
    """Result of validating one config document."""
    valid: bool  # True if no errors (warnings don't block)
    version: str  # detected ConfigFormat value
    errors: List[ValidationIssue]  # Blocking issues
    warnings: List[ValidationIssue]  # Non-blocking issues
    normalized: Optional[NormalizedConfig] = None

    @model_validator(mode="after")
    def _valid_matches_errors(self) -> "ValidationResult":
        if self.valid != (len(self.errors) == 0):
            raise ValueError("valid must be True exactly when there are no errors")
        return self


class ManifestValidationResult(WireModel):
    """Result of validating a multi-endpoint manifest."""
    valid: bool
    endpoint_results: Dict[str, ValidationResult] = Field(default_factory=dict)
    manifest_issues: List[ValidationIssue] = Field(default_factory=list)
    normalized_manifest: Optional[NormalizedManifest] = None

    @property
    def manifest_errors(self) -> List[ValidationIssue]:
        return [i for i in self.manifest_issues if i.severity == "error"]

    @property
    def manifest_warnings(self) -> List[ValidationIssue]:
        return [i for i in self.manifest_issues if i.severity == "warning"]


class ValidationOptions(BaseModel):
    """Options accepted by validate() and validate_manifest()."""
    strict: bool = False  # promote every warning to an error

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def coerce(cls, options: Union["ValidationOptions", Dict[str, Any], None]) -> "ValidationOptions":
        """Accept a model, a plain mapping or None; invalid values fall back to defaults."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            logger.warning("Ignoring invalid validation options: %s", e)
            return cls()


class ExtractionResult(WireModel):
    """Config located inside an HTTP 402 response."""
    config: Optional[Dict[str, Any]] = None
    source: Optional[Literal["body", "header"]] = None
    error: Optional[str] = None


class AcceptSummary(WireModel):
    """Display-ready summary of one accepts entry, enriched from the registry."""
    index: int
    network: Any = None
    network_name: Optional[str] = None
    network_type: Optional[Literal["mainnet", "testnet"]] = None
    pay_to: Any = None
    amount: Any = None
    asset: Any = None
    asset_symbol: Optional[str] = None
    asset_decimals: Optional[int] = None
    scheme: Any = None


class CheckResult(WireModel):
    """Extraction, validation and registry lookups for one HTTP response."""
    extracted: bool
    source: Optional[Literal["body", "header"]] = None
    extraction_error: Optional[str] = None
    valid: bool
    version: str
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
    normalized: Optional[NormalizedConfig] = None
    summary: List[AcceptSummary] = Field(default_factory=list)
    raw: Optional[Dict[str, Any]] = None
