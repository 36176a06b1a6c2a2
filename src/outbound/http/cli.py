"""
Outbound HTTP CLI commands.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
from dataclasses import replace

import click
import httpx
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from outbound.config import ClientConfig
from outbound.http.client import Client
from outbound.http.models import Method, Request
from outbound.logging_config import configure_logging


def parse_headers(header_strings: list[str]) -> dict[str, str]:
    """Parse header strings in 'Name: Value' format."""
    headers = {}
    for h in header_strings:
        if ":" in h:
            name, value = h.split(":", 1)
            headers[name.strip()] = value.strip()
    return headers


def parse_params(param_strings: list[str]) -> dict[str, str]:
    """Parse query params in 'name=value' format."""
    params = {}
    for p in param_strings:
        if "=" in p:
            name, value = p.split("=", 1)
            params[name] = value
    return params


def format_json(data, indent: int = 2) -> str:
    """Format JSON data for display."""
    return json.dumps(data, indent=indent, default=str)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None,
              help="Also write logs to this file (rotated at 10MB)")
def cli(debug: bool, log_file: str | None):
    """Outbound HTTP client."""
    configure_logging(debug=debug, log_file=log_file)


@cli.command("request")
@click.argument("url")
@click.option("-X", "--method", default="GET",
              type=click.Choice([m.value for m in Method], case_sensitive=False),
              help="HTTP method")
@click.option("-H", "--header", multiple=True, help="Headers in 'Name: Value' format")
@click.option("-q", "--query", multiple=True, help="Query params in 'name=value' format")
@click.option("-d", "--data", default="", help="Request body")
@click.option("--content-type", default="", help="Override the default content type")
@click.option("--base-url", default=None, help="Prefix for relative URLs")
@click.option("-t", "--timeout", type=float, default=None, help="Timeout in seconds")
@click.option("--attempts", type=int, default=None, help="Transport retry count")
@click.option("-v", "--verbose", is_flag=True, help="Show request and response headers")
@click.option("--raw", is_flag=True, help="Show raw body without formatting")
def request_cmd(url: str, method: str, header: tuple, query: tuple, data: str,
                content_type: str, base_url: str | None, timeout: float | None,
                attempts: int | None, verbose: bool, raw: bool):
    """Send a request and print the response.

    Defaults come from OUTBOUND_* environment variables or a .env file.

    Examples:
        outbound request https://api.example.com/users -q id=42
        outbound request /users --base-url https://api.example.com -X POST -d '{}'
        outbound request https://api.example.com/data -H "X-API-Key: abc123" -v
    """
    console = Console()

    config = ClientConfig.from_env()
    overrides = {}
    if base_url is not None:
        overrides["base_url"] = base_url
    if timeout is not None:
        overrides["timeout"] = timeout
    if attempts is not None:
        overrides["attempts"] = attempts
    config = replace(config, **overrides)

    req = Request(
        url=url,
        method=Method(method.upper()),
        content_type=content_type,
        headers=parse_headers(list(header)),
        query=parse_params(list(query)),
        body=data,
    )

    if verbose:
        console.print(f"\n[cyan]Request:[/cyan]")
        console.print(f"  {req.method.value} {url}")
        for h_name, h_value in req.headers.items():
            console.print(f"  [dim]{h_name}:[/dim] {h_value}")
        if req.query:
            console.print(f"  [dim]Query:[/dim] {req.query}")
        console.print()

    with Client(config) as client:
        try:
            resp = client.do(req)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise SystemExit(1)

    if resp.is_success:
        status_color = "green"
    elif resp.is_redirect:
        status_color = "yellow"
    else:
        status_color = "red"

    console.print(f"[{status_color}]{resp.status_code}[/{status_color}] ({resp.time}ms)")

    if verbose:
        console.print("\n[cyan]Response Headers:[/cyan]")
        for h_name, h_value in resp.headers.items():
            console.print(f"  [dim]{h_name}:[/dim] {h_value}")

    if resp.body:
        console.print()
        if raw or not resp.is_json:
            console.print(resp.body, markup=False)
        else:
            try:
                formatted = format_json(resp.json())
            except json.JSONDecodeError:
                console.print(resp.body, markup=False)
            else:
                console.print(Syntax(formatted, "json", theme="monokai", line_numbers=False))


def main():
    cli()


if __name__ == "__main__":
    main()
