# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from curly.cli.main import build_parser, main
from curly.http.adapters import StubTransport, build_raw_response

URL = "https://api.example.com/todos/1"


@pytest.fixture
def stub(monkeypatch):
    transport = StubTransport()
    monkeypatch.setattr("curly.request.create_default_transport", lambda settings=None: transport)
    return transport


def test_build_parser_normalizes_method():
    args = build_parser().parse_args(["post", URL, "-d", "a=1", "--json-body", "--log"])
    assert args.method == "POST"
    assert args.data == ["a=1"]
    assert args.json_body is True
    assert args.log == ""


def test_main_get_prints_decoded_json(stub, capsys):
    stub.add(URL, build_raw_response(200, '{"id":1,"title":"x"}'))
    assert main(["GET", URL, "--object"]) == 0
    assert json.loads(capsys.readouterr().out) == {"id": 1, "title": "x"}


def test_main_post_sends_fields_and_credentials(stub, capsys):
    stub.add_echo(URL, status_code=201)
    assert main(["POST", URL, "-d", "title=foo", "-d", "userId=1", "--json-body", "--user", "ann:pw"]) == 0
    assert json.loads(capsys.readouterr().out) == {"title": "foo", "userId": "1"}
    assert stub.requests[0].credentials == ("ann", "pw")
    assert stub.requests[0].method == "POST"


def test_main_bearer_and_log(stub, tmp_path, capsys):
    stub.add(URL, build_raw_response(200, "[]"))
    assert main(["GET", URL, "--bearer", "tok", "--log", str(tmp_path)]) == 0
    assert stub.requests[0].headers == ["Authorization: Bearer tok"]
    assert len(list(tmp_path.iterdir())) == 1
    capsys.readouterr()


def test_main_reports_errors(stub, capsys):
    stub.add(URL, build_raw_response(404, "missing"))
    assert main(["GET", URL]) == 1
    assert "error: cURLy - HTTP Error - Code: 404" in capsys.readouterr().err


def test_main_requires_fields_for_body_verbs(stub):
    with pytest.raises(SystemExit) as excinfo:
        main(["PUT", URL])
    assert excinfo.value.code == 2


def test_main_rejects_malformed_fields(stub):
    with pytest.raises(SystemExit):
        main(["POST", URL, "-d", "novalue"])


def test_bare_log_flag_uses_configured_log_directory(stub, tmp_path, monkeypatch, capsys):
    log_dir = tmp_path / "from-env"
    monkeypatch.setenv("CURLY_LOG_DIR", str(log_dir))
    stub.add(URL, build_raw_response(200, "{}"))
    assert main(["GET", URL, "--log"]) == 0
    assert len(list(log_dir.iterdir())) == 1
    capsys.readouterr()
