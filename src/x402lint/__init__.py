"""x402lint: validation and linting for x402 payment configurations."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("x402lint")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from x402lint.api import check, detect, normalize, validate, validate_manifest
from x402lint.codes import IssueCode
from x402lint.contracts import (
    CheckResult,
    ManifestValidationResult,
    ValidationIssue,
    ValidationOptions,
    ValidationResult,
)
from x402lint.kernel.detect import ConfigFormat
from x402lint.kernel.registry import Registry

__all__ = [
    "__version__",
    "validate",
    "validate_manifest",
    "detect",
    "normalize",
    "check",
    "IssueCode",
    "ConfigFormat",
    "Registry",
    "CheckResult",
    "ManifestValidationResult",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationResult",
]
