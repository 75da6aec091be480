"""CLI tests for the x402lint command."""

import base64
import io
import json
from pathlib import Path
import sys

import httpx
import pytest

from x402lint import cli


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["x402lint"] + args)
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    return excinfo.value.code


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def test_valid_file(make_v2, tmp_path, monkeypatch, capsys):
    config_path = tmp_path / "x402.json"
    _write_json(config_path, make_v2())
    assert _run_cli([str(config_path)], monkeypatch) == 0
    out = capsys.readouterr().out
    assert "[OK] Valid x402 config (v2)" in out
    assert "Errors: 0" in out
    assert "Warnings: 0" in out


def test_invalid_inline_json(make_v2, make_entry, monkeypatch, capsys):
    doc = make_v2(entries=[make_entry(amount="1.5")])
    assert _run_cli([json.dumps(doc)], monkeypatch) == 1
    out = capsys.readouterr().out
    assert "[FAILED]" in out
    assert "INVALID_AMOUNT [accepts[0].amount]" in out
    assert "fix:" in out


def test_stdin(make_v2, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps(make_v2())))
    assert _run_cli(["-"], monkeypatch) == 0
    assert "[OK]" in capsys.readouterr().out


def test_stdin_is_default(make_v2, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps(make_v2())))
    assert _run_cli([], monkeypatch) == 0


def test_warnings_only_pass_unless_strict(make_v2, monkeypatch, capsys):
    doc = json.dumps(make_v2(drop=("resource",)))
    assert _run_cli([doc], monkeypatch) == 0
    assert "MISSING_RESOURCE" in capsys.readouterr().out
    assert _run_cli([doc, "--strict"], monkeypatch) == 1


def test_json_output(make_v2, monkeypatch, capsys):
    assert _run_cli([json.dumps(make_v2()), "--json"], monkeypatch) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["valid"] is True
    assert payload["version"] == "v2"
    assert payload["normalized"]["accepts"][0]["payTo"] == make_v2()["accepts"][0]["payTo"]


def test_quiet_prints_nothing(make_v2, make_entry, monkeypatch, capsys):
    doc = make_v2(entries=[make_entry(amount="0")])
    assert _run_cli([json.dumps(doc), "--quiet"], monkeypatch) == 1
    assert capsys.readouterr().out == ""


def test_missing_file(tmp_path, monkeypatch, capsys):
    assert _run_cli([str(tmp_path / "nope.json")], monkeypatch) == 2
    assert "Error: file not found" in capsys.readouterr().err


def test_unparseable_input(monkeypatch, capsys):
    assert _run_cli(["{not json"], monkeypatch) == 1
    assert "INVALID_JSON" in capsys.readouterr().out


def test_manifest_is_auto_detected(manifest_doc, tmp_path, monkeypatch, capsys):
    manifest_path = tmp_path / "manifest.json"
    _write_json(manifest_path, manifest_doc)
    assert _run_cli([str(manifest_path)], monkeypatch) == 0
    out = capsys.readouterr().out
    assert "Manifest with 2 endpoint(s)" in out
    assert "Endpoint weather:" in out


def test_manifest_flag_on_single_config(make_v2, monkeypatch, capsys):
    assert _run_cli([json.dumps(make_v2()), "--manifest"], monkeypatch) == 1
    assert "NOT_A_MANIFEST" in capsys.readouterr().out


def test_manifest_json_output(manifest_doc, monkeypatch, capsys):
    assert _run_cli([json.dumps(manifest_doc), "--json"], monkeypatch) == 0
    payload = json.loads(capsys.readouterr().out)
    assert set(payload["endpointResults"]) == {"weather", "forecast"}


def test_version(monkeypatch, capsys):
    assert _run_cli(["--version"], monkeypatch) == 0
    assert capsys.readouterr().out.startswith("x402lint ")


class TestUrlInput:
    def _mock_fetch(self, monkeypatch, handler):
        real_fetch = cli.fetch_response
        transport = httpx.MockTransport(handler)
        monkeypatch.setattr(
            cli,
            "fetch_response",
            lambda url: real_fetch(url, client=httpx.Client(transport=transport)),
        )

    def test_402_header_is_checked(self, make_v2, monkeypatch, capsys):
        encoded = base64.b64encode(json.dumps(make_v2()).encode("utf-8")).decode("ascii")

        def handler(request):
            assert request.url.path == "/weather"
            return httpx.Response(402, headers={"PAYMENT-REQUIRED": encoded})

        self._mock_fetch(monkeypatch, handler)
        assert _run_cli(["https://api.example.com/weather"], monkeypatch) == 0
        out = capsys.readouterr().out
        assert "Extracted from: header" in out
        assert "10000 USDC on Base" in out

    def test_402_body_json(self, make_v2, monkeypatch, capsys):
        def handler(request):
            return httpx.Response(402, json=make_v2())

        self._mock_fetch(monkeypatch, handler)
        assert _run_cli(["https://api.example.com/weather", "--json"], monkeypatch) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["source"] == "body"
        assert payload["summary"][0]["assetSymbol"] == "USDC"

    def test_no_config_in_response(self, monkeypatch, capsys):
        self._mock_fetch(monkeypatch, lambda request: httpx.Response(200, text="hello"))
        assert _run_cli(["https://api.example.com/"], monkeypatch) == 1
        assert "No x402 config found" in capsys.readouterr().out

    def test_transport_error(self, monkeypatch, capsys):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        self._mock_fetch(monkeypatch, handler)
        assert _run_cli(["https://api.example.com/"], monkeypatch) == 2
        assert "Error: could not fetch" in capsys.readouterr().err


def test_fetch_response_shape(monkeypatch):
    transport = httpx.MockTransport(lambda request: httpx.Response(402, text="{}", headers={"X-A": "1"}))
    response = cli.fetch_response("https://api.example.com/", client=httpx.Client(transport=transport))
    assert response["status"] == 402
    assert response["body"] == "{}"
    assert response["headers"]["x-a"] == "1"
