"""Command-line interface for searching, creating and updating Jira issues."""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import os
import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install jira-basic-client[cli]' to enable this command."
    ) from exc

from . import JiraClient
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .exceptions import ConfigurationError
from .outcomes import is_success

app = typer.Typer(help="Minimal Jira issue CLI.", no_args_is_help=True)


def _build_client(
    host: str,
    port: int,
    username: str | None,
    password: str | None,
    verify_ssl: bool,
    cert_path: Path | None,
    timeout: float,
) -> JiraClient:
    if not username or not password:
        raise typer.BadParameter("--username and --password are required for basic auth.")

    verify_target: bool | str
    if cert_path:
        expanded_cert = cert_path.expanduser()
        if not expanded_cert.exists():
            raise typer.BadParameter("Certificate file not found for --cert option.")
        if not verify_ssl:
            raise typer.BadParameter("Cannot combine --cert with --no-verify.")
        verify_target = str(expanded_cert)
    else:
        verify_target = verify_ssl

    try:
        return JiraClient.configured(
            username,
            password,
            host,
            port,
            timeout=timeout,
            verify_ssl=verify_target,
        )
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    for row in rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(payload: Any, *, view_id: str) -> None:
    view = CLI_TABLE_VIEWS[view_id]
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        _echo_json(payload)
        return
    rows: list[Mapping[str, Any]] = [item for item in payload if isinstance(item, Mapping)]
    if not rows:
        _echo_json(payload)
        return
    _render_rich_table(view, rows)


def _exit_on_error(client: JiraClient) -> None:
    outcome = client.last_outcome
    if outcome is not None and is_success(outcome) and not client.has_error_messages():
        return
    messages = client.get_error_collection() or ["Request failed without error details."]
    for message in messages:
        typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _env_verify_default() -> bool:
    # Accept common truthy/falsey representations (1/0, true/false, yes/no).
    env_verify = os.getenv("JIRA_VERIFY_SSL")
    if env_verify is None:
        return True
    return env_verify.strip().lower() not in {"0", "false", "no", "off"}


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    return {
        "host": typer.Option(
            ...,
            "--host",
            envvar="JIRA_HOST",
            help="Jira base host including scheme, e.g. https://jira.example.com.",
        ),
        "port": typer.Option(80, "--port", envvar="JIRA_PORT", help="Jira port.", show_default=True),
        "username": typer.Option(
            None,
            "--username",
            "-u",
            envvar="JIRA_USERNAME",
            help="Jira username for basic auth.",
        ),
        "password": typer.Option(
            None,
            "--password",
            "-p",
            envvar="JIRA_PASSWORD",
            help="Jira password or API token for basic auth.",
            hide_input=True,
        ),
        "verify_ssl": typer.Option(
            _env_verify_default(),
            "--verify/--no-verify",
            envvar="JIRA_VERIFY_SSL",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "cert_path": typer.Option(
            None,
            "--cert",
            envvar="JIRA_CA_CERT",
            help="Path to a custom CA bundle for TLS verification.",
        ),
        "timeout": typer.Option(
            30.0, "--timeout", envvar="JIRA_TIMEOUT", help="Request timeout (seconds).", show_default=True
        ),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
        "field": typer.Option(
            [],
            "--field",
            "-f",
            help="Issue field in key=value form; dotted keys nest (status.name=Done).",
            show_default=False,
        ),
        "payload_file": typer.Option(
            None,
            "--payload",
            help="Path to a JSON object of fields; --field values are applied on top.",
        ),
    }


_SHARED_OPTIONS = _shared_options()


def _coerce_simple(value: str) -> Any:
    v = value.strip()
    if not v:
        return ""
    low = v.lower()
    if low in {"true", "yes", "on"}:
        return True
    if low in {"false", "no", "off"}:
        return False
    if low in {"null", "none"}:
        return None
    try:
        if "." in v:
            return float(v)
        return int(v)
    except ValueError:
        return v


def parse_fields(pairs: Sequence[str], payload_file: Path | None = None) -> dict[str, Any]:
    """Merge a JSON payload file and key=value pairs into an issue fields mapping."""

    fields: dict[str, Any] = {}
    if payload_file:
        try:
            loaded = json.loads(payload_file.expanduser().read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise typer.BadParameter(f"Unable to read --payload file: {exc}") from exc
        if not isinstance(loaded, dict):
            raise typer.BadParameter("--payload file must contain a JSON object of fields.")
        fields.update(loaded)

    for pair in pairs:
        if "=" not in pair:
            raise typer.BadParameter(f"--field expects key=value, got {pair!r}.")
        raw_key, raw_value = pair.split("=", 1)
        keys = [part.strip() for part in raw_key.split(".") if part.strip()]
        if not keys:
            raise typer.BadParameter(f"--field is missing a key in {pair!r}.")
        target = fields
        for key in keys[:-1]:
            nested = target.get(key)
            if not isinstance(nested, dict):
                nested = {}
                target[key] = nested
            target = nested
        target[keys[-1]] = _coerce_simple(raw_value)

    if not fields:
        raise typer.BadParameter("Provide at least one --field or a --payload file.")
    return fields


@app.command("search")
def search(
    jql: str | None = typer.Option(None, "--jql", "-q", help="JQL query string."),
    host: str = _SHARED_OPTIONS["host"],
    port: int = _SHARED_OPTIONS["port"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """Search issues with a JQL query."""

    with _build_client(host, port, username, password, verify_ssl, cert_path, timeout) as client:
        result = client.search(jql)
        _exit_on_error(client)

    if output_json:
        _echo_json(result)
        return
    issues = result.get("issues") if isinstance(result, Mapping) else None
    _present_output(issues if issues is not None else result, view_id="issues")


@app.command("create")
def create(
    field: list[str] = _SHARED_OPTIONS["field"],
    payload_file: Path | None = _SHARED_OPTIONS["payload_file"],
    host: str = _SHARED_OPTIONS["host"],
    port: int = _SHARED_OPTIONS["port"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Create an issue from the given fields."""

    fields = parse_fields(field, payload_file)
    with _build_client(host, port, username, password, verify_ssl, cert_path, timeout) as client:
        result = client.create(fields)
        _exit_on_error(client)

    _echo_json(result)


@app.command("update")
def update(
    issue_key: str = typer.Argument(..., help="Issue key, e.g. PROJ-1."),
    field: list[str] = _SHARED_OPTIONS["field"],
    payload_file: Path | None = _SHARED_OPTIONS["payload_file"],
    host: str = _SHARED_OPTIONS["host"],
    port: int = _SHARED_OPTIONS["port"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Update fields on an existing issue."""

    fields = parse_fields(field, payload_file)
    with _build_client(host, port, username, password, verify_ssl, cert_path, timeout) as client:
        result = client.update(issue_key, fields)
        _exit_on_error(client)

    if result is None:
        typer.echo(f"Updated {issue_key}.")
        return
    _echo_json(result)


def main() -> None:  # pragma: no cover - console script entrypoint
    app()
