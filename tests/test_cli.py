import json

import pytest
import typer
from typer.testing import CliRunner

from jira_client.cli import _build_client, app, parse_fields

runner = CliRunner()

HOST = "https://jira.example.com"
BASE_URL = f"{HOST}:8080/rest/api/2"
CONNECTION = ["--host", HOST, "--port", "8080", "--username", "admin", "--password", "secret"]


def test_search_cli_renders_issue_table(requests_mock):
    matcher = requests_mock.get(
        f"{BASE_URL}/search",
        json={
            "issues": [
                {
                    "id": "1",
                    "key": "PROJ-1",
                    "fields": {
                        "summary": "Disk full",
                        "status": {"name": "Open"},
                        "assignee": {"displayName": "Sam"},
                    },
                }
            ]
        },
    )

    result = runner.invoke(app, ["search", "--jql", "project = PROJ", *CONNECTION])

    assert result.exit_code == 0
    assert "PROJ-1" in result.stdout
    assert "Disk full" in result.stdout
    assert "Open" in result.stdout
    assert matcher.last_request.json() == {"jql": "project = PROJ"}


def test_search_cli_json_output(requests_mock):
    requests_mock.get(f"{BASE_URL}/search", json={"total": 0, "issues": []})

    result = runner.invoke(app, ["search", *CONNECTION, "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"total": 0, "issues": []}


def test_create_cli_builds_nested_fields(requests_mock):
    matcher = requests_mock.post(f"{BASE_URL}/issue", json={"id": "10001", "key": "PROJ-9"})

    result = runner.invoke(
        app,
        [
            "create",
            "--field",
            "project.key=PROJ",
            "--field",
            "summary=Disk full",
            "--field",
            "issuetype.name=Bug",
            *CONNECTION,
        ],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["key"] == "PROJ-9"
    assert matcher.last_request.json() == {
        "fields": {
            "project": {"key": "PROJ"},
            "summary": "Disk full",
            "issuetype": {"name": "Bug"},
        }
    }


def test_create_cli_reads_payload_file(requests_mock, tmp_path):
    payload = tmp_path / "fields.json"
    payload.write_text(json.dumps({"summary": "from file", "labels": ["ops"]}), encoding="utf-8")
    matcher = requests_mock.post(f"{BASE_URL}/issue", json={"id": "1", "key": "PROJ-1"})

    result = runner.invoke(
        app,
        ["create", "--payload", str(payload), "--field", "summary=override", *CONNECTION],
    )

    assert result.exit_code == 0
    assert matcher.last_request.json() == {"fields": {"summary": "override", "labels": ["ops"]}}


def test_update_cli_reports_empty_success(requests_mock):
    matcher = requests_mock.put(f"{BASE_URL}/issue/PROJ-1", status_code=204, text="")

    result = runner.invoke(app, ["update", "PROJ-1", "--field", "summary=New", *CONNECTION])

    assert result.exit_code == 0
    assert "Updated PROJ-1." in result.stdout
    assert matcher.last_request.method == "PUT"


def test_cli_prints_error_collection_and_exits(requests_mock):
    requests_mock.post(
        f"{BASE_URL}/issue",
        json={"errorMessages": [], "errors": {"summary": "You must specify a summary."}},
    )

    result = runner.invoke(app, ["create", "--field", "priority.name=High", *CONNECTION])

    assert result.exit_code == 1
    assert "You must specify a summary." in result.output


def test_cli_exits_when_issue_payload_carries_errors(requests_mock):
    requests_mock.post(
        f"{BASE_URL}/issue",
        json={"id": "1", "key": "PROJ-1", "errors": {"labels": "Label was dropped."}},
    )

    result = runner.invoke(app, ["create", "--field", "summary=x", *CONNECTION])

    assert result.exit_code == 1
    assert "Label was dropped." in result.output


def test_cli_reports_classified_status(requests_mock):
    requests_mock.put(f"{BASE_URL}/issue/NOPE-1", status_code=404)

    result = runner.invoke(app, ["update", "NOPE-1", "--field", "summary=x", *CONNECTION])

    assert result.exit_code == 1
    assert "That action does not exist on Jira." in result.output


def test_create_cli_requires_fields():
    result = runner.invoke(app, ["create", *CONNECTION])

    assert result.exit_code != 0


def test_parse_fields_coerces_simple_values():
    fields = parse_fields(["count=3", "ratio=0.5", "flag=yes", "gone=null", "name=text"])

    assert fields == {"count": 3, "ratio": 0.5, "flag": True, "gone": None, "name": "text"}


def test_parse_fields_rejects_pairs_without_equals():
    with pytest.raises(typer.BadParameter):
        parse_fields(["summary"])


def test_build_client_requires_credentials():
    with pytest.raises(typer.BadParameter):
        _build_client(HOST, 8080, None, None, True, None, 30.0)


def test_build_client_rejects_invalid_port():
    with pytest.raises(typer.BadParameter):
        _build_client(HOST, 0, "admin", "secret", True, None, 30.0)


def test_build_client_rejects_missing_cert(tmp_path):
    with pytest.raises(typer.BadParameter):
        _build_client(HOST, 8080, "admin", "secret", True, tmp_path / "missing.pem", 30.0)


def test_build_client_uses_cert_path(tmp_path):
    cert = tmp_path / "ca.pem"
    cert.write_text("dummy", encoding="utf-8")

    client = _build_client(HOST, 8080, "admin", "secret", True, cert, 12.0)

    assert client.config.verify_ssl == str(cert)
    assert client.config.timeout == 12.0
