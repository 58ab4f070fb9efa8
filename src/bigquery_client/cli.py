"""CLI entry point for bigquery-client."""

import json
import logging
from pathlib import Path

import click
import yaml

from bigquery_client.client import Bigquery
from bigquery_client.config import load_options_file
from bigquery_client.errors import BigqueryError
from bigquery_client.request.base import MethodSpec
from bigquery_client.request.table import iter_method_specs, parse_method_name


def _parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``-p key=value`` options."""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="-p/--param")
        params[key.strip()] = value
    return params


def _resolve(name: str) -> MethodSpec:
    try:
        return parse_method_name(name)
    except BigqueryError as e:
        raise click.ClickException(str(e))


def _dump(data, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def _build_params(param: tuple[str, ...], body: Path | None, media: Path | None) -> dict:
    params: dict = _parse_params(param)
    if body is not None:
        try:
            params["resource"] = json.loads(body.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{body}: invalid JSON body: {e}")
    if media is not None:
        params["media"] = media.read_bytes()
    return params


def _make_client(options_file: Path | None = None) -> Bigquery:
    """Build a client, reporting bad options as a CLI error."""
    try:
        options = load_options_file(options_file) if options_file else {}
        return Bigquery(options)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid client options: {e}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """BigQuery v2 client — inspect and call API methods."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--resource", "resource_name", default=None, help="Only list methods of this resource.")
def methods(resource_name: str | None):
    """List every available method."""
    for spec in iter_method_specs():
        if resource_name and spec.resource != resource_name:
            continue
        upload = " (media upload)" if spec.supports_media_upload else ""
        click.echo(f"{spec.resource}.{spec.action:<16} {spec.http_method:<6} {spec.relative_path}{upload}")


@main.command()
@click.argument("method_name")
@click.option("-p", "--param", multiple=True, help="Request parameter as key=value (repeatable).")
@click.option("--body", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="JSON file sent as the request body.")
@click.option("--format", "fmt", default="yaml", type=click.Choice(["yaml", "json"]), help="Output format.")
def describe(method_name: str, param: tuple[str, ...], body: Path | None, fmt: str):
    """Show the request METHOD_NAME would send, without sending it."""
    spec = _resolve(method_name)
    params = _build_params(param, body, None)
    with _make_client() as client:
        try:
            prepared = client.resource(spec.resource)[spec.action].prepare(params)
        except BigqueryError as e:
            raise click.ClickException(str(e))
    click.echo(_dump({
        "method": prepared.descriptor.method,
        "url": prepared.descriptor.url,
        "is_media": prepared.is_media,
        "params": prepared.params,
    }, fmt))


@main.command()
@click.argument("method_name")
@click.option("-p", "--param", multiple=True, help="Request parameter as key=value (repeatable).")
@click.option("--body", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="JSON file sent as the request body.")
@click.option("--media", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="File uploaded as media (jobs.insert).")
@click.option("--options", "options_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file with client options.")
@click.option("--format", "fmt", default="json", type=click.Choice(["yaml", "json"]), help="Output format.")
def call(method_name: str, param: tuple[str, ...], body: Path | None, media: Path | None, options_file: Path | None, fmt: str):
    """Call METHOD_NAME and print the response body."""
    spec = _resolve(method_name)
    params = _build_params(param, body, media)

    with _make_client(options_file) as client:
        try:
            future = client.resource(spec.resource)[spec.action](params)
            result = future.result()
        except BigqueryError as e:
            raise click.ClickException(str(e))

    if result is not None:
        click.echo(_dump(result, fmt))
