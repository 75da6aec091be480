"""Tests for input parsing and format detection."""

import json

import pytest

from x402lint.codes import IssueCode
from x402lint.kernel.detect import ConfigFormat, detect, detect_input, parse_input


class TestParseInput:
    def test_string_is_parsed(self):
        assert parse_input('{"a": 1}').parsed == {"a": 1}

    def test_bytes_are_decoded(self):
        assert parse_input(b'{"a": 1}').parsed == {"a": 1}

    def test_parsed_value_passes_through(self):
        value = {"a": 1}
        assert parse_input(value).parsed is value

    @pytest.mark.parametrize("raw", ["{", "", "{'a': 1}", '{"a": 1,}', '{"a": NaN}', b"\xff\xfe"])
    def test_invalid_json_reports_one_issue(self, raw):
        result = parse_input(raw)
        assert result.parsed is None
        assert result.error.code == IssueCode.INVALID_JSON
        assert result.error.field == "$"

    def test_deep_nesting_does_not_raise(self):
        result = parse_input("[" * 100000 + "]" * 100000)
        # Either parsed or reported; never an exception
        assert result.parsed is not None or result.error is not None


def test_detect_v2(make_v2):
    assert detect(make_v2()) is ConfigFormat.V2


def test_detect_v1(v1_doc):
    assert detect(v1_doc) is ConfigFormat.V1


def test_detect_flat_legacy(flat_doc):
    assert detect(flat_doc) is ConfigFormat.FLAT_LEGACY


def test_detect_manifest_precedes_v2(manifest_doc):
    """A manifest that also carries x402Version 2 is still a manifest."""
    assert detect(manifest_doc) is ConfigFormat.MANIFEST


def test_detect_accepts_json_text(make_v2):
    assert detect(json.dumps(make_v2())) is ConfigFormat.V2


def test_detect_unparseable_is_unknown():
    assert detect("not json") is ConfigFormat.UNKNOWN


def test_detect_boolean_version_is_not_v1():
    """True == 1 in Python but is not a valid x402Version."""
    assert detect({"x402Version": True, "accepts": []}) is ConfigFormat.UNKNOWN


def test_flat_with_accepts_key_is_not_flat():
    doc = {"payTo": "0xabc", "amount": "1", "accepts": "nope"}
    assert detect(doc) is ConfigFormat.UNKNOWN


def test_non_object_is_terminal():
    detected = detect_input("[1, 2, 3]")
    assert detected.format is ConfigFormat.UNKNOWN
    assert [i.code for i in detected.issues] == [IssueCode.NOT_OBJECT]


class TestDiagnoseUnknown:
    """Unrecognised objects get the most specific terminal issue."""

    def test_missing_accepts_is_tagged_accepts(self):
        detected = detect_input({"x402Version": 2, "resource": {"url": "https://x"}})
        assert len(detected.issues) == 1
        assert detected.issues[0].code == IssueCode.MISSING_ACCEPTS
        assert detected.issues[0].field == "accepts"

    def test_accepts_not_a_list(self):
        detected = detect_input({"x402Version": 2, "accepts": {"scheme": "exact"}})
        assert detected.issues[0].code == IssueCode.INVALID_ACCEPTS

    def test_bad_version_with_accepts(self):
        detected = detect_input({"x402Version": 3, "accepts": []})
        issue = detected.issues[0]
        assert issue.code == IssueCode.INVALID_VERSION
        assert issue.field == "x402Version"
        assert "3" in issue.message

    def test_anything_else_is_unknown_format(self):
        detected = detect_input({"hello": "world"})
        assert detected.issues[0].code == IssueCode.UNKNOWN_FORMAT
        assert detected.issues[0].field == "$"
