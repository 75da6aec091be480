"""Test public API surface - ensure imports work and exports stay stable."""

import types

import pytest


def test_api_exports_core_functions():
    """x402lint.api is the programmatic entrypoint."""
    from x402lint.api import check, detect, normalize, validate, validate_manifest

    for func in (check, detect, normalize, validate, validate_manifest):
        assert isinstance(func, types.FunctionType)


def test_package_reexports_api():
    import x402lint
    from x402lint import api

    assert x402lint.validate is api.validate
    assert x402lint.validate_manifest is api.validate_manifest
    assert x402lint.check is api.check


@pytest.mark.parametrize("name", [
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
])
def test_all_names_resolve(name):
    import x402lint

    assert name in x402lint.__all__
    assert getattr(x402lint, name) is not None


def test_config_format_values():
    from x402lint import ConfigFormat

    assert [f.value for f in ConfigFormat] == ["manifest", "v2", "v1", "flat-legacy", "unknown"]


def test_every_issue_code_has_a_message():
    from x402lint.codes import MESSAGES, IssueCode

    assert set(MESSAGES) == set(IssueCode)
    for code in IssueCode:
        assert code.value == code.name


def test_issue_codes_compare_as_strings():
    from x402lint import IssueCode

    assert IssueCode.INVALID_JSON == "INVALID_JSON"


def test_import_has_no_logging_side_effects():
    """The library never installs handlers on the root logger."""
    import logging

    before = list(logging.getLogger().handlers)
    import x402lint  # noqa: F401
    import x402lint.cli  # noqa: F401

    assert logging.getLogger().handlers == before


def test_version_string():
    import x402lint

    assert x402lint.__version__ in ("1.0.0", "dev")
