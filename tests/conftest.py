"""Pytest configuration and shared document factories.

No sys.path hacks - tests import from the installed x402lint package.
"""

import copy

import pytest

BASE = "eip155:8453"
BASE_SEPOLIA = "eip155:84532"
BASE_USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
BASE_SEPOLIA_USDC = "0x036CbD53842c5426634e7929541eC2318f3dCF7e"
PAY_TO = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

BAZAAR = {
    "bazaar": {
        "info": {
            "input": {"type": "http", "method": "GET"},
            "output": {"type": "json"},
        },
        "schema": {"type": "object", "properties": {"city": {"type": "string"}}},
    }
}


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


def _entry(drop=(), **overrides):
    entry = {
        "scheme": "exact",
        "network": BASE,
        "amount": "10000",
        "asset": BASE_USDC,
        "payTo": PAY_TO,
        "maxTimeoutSeconds": 60,
    }
    entry.update(overrides)
    for key in drop:
        entry.pop(key, None)
    return entry


def _v2(entries=None, drop=(), **overrides):
    doc = {
        "x402Version": 2,
        "accepts": entries if entries is not None else [_entry()],
        "resource": {"url": "https://api.example.com/weather"},
        "extensions": copy.deepcopy(BAZAAR),
    }
    doc.update(overrides)
    for key in drop:
        doc.pop(key, None)
    return doc


@pytest.fixture
def make_entry():
    """Factory for one accepts entry; keyword overrides, drop=(keys...) removes."""
    return _entry


@pytest.fixture
def make_v2():
    """Factory for a v2 document that validates with no errors and no warnings."""
    return _v2


@pytest.fixture
def v1_doc():
    return {
        "x402Version": 1,
        "accepts": [
            {
                "scheme": "exact",
                "network": BASE,
                "maxAmountRequired": "10000",
                "asset": BASE_USDC,
                "payTo": PAY_TO,
                "maxTimeoutSeconds": 60,
                "resource": "https://api.example.com/weather",
                "description": "Weather data",
                "mimeType": "application/json",
            }
        ],
    }


@pytest.fixture
def flat_doc():
    return {
        "payTo": PAY_TO,
        "amount": "10000",
        "network": BASE,
        "currency": BASE_USDC,
        "scheme": "exact",
    }


@pytest.fixture
def manifest_doc():
    """Array-of-endpoints manifest with two clean endpoints on Base."""
    return {
        "x402Version": 2,
        "service": {"name": "Weather API"},
        "endpoints": [
            {
                "method": "GET",
                "config": _v2(resource={"url": "https://api.example.com/weather"}),
            },
            {
                "method": "POST",
                "config": _v2(resource={"url": "https://api.example.com/forecast"}),
            },
        ],
    }
