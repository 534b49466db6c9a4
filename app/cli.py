# app/cli.py
from __future__ import annotations

import os
from typing import Optional

import typer

from app.client.normalizer import ResultState
from app.client.registry import RegistryClient
from app.client.config import load_client_settings
from app.core.logging import setup_logging
from app.web.presentation import card_details, resolve_status_theme

cli = typer.Typer(help="Query the certificate registry from the terminal.", no_args_is_help=True)


def _client(api_url: Optional[str]) -> RegistryClient:
    settings = load_client_settings()
    return RegistryClient(api_url or settings.REGISTRY_API_URL, timeout=settings.ASSET_TIMEOUT_SECONDS)


def _render(state: ResultState) -> None:
    typer.echo(f"{state.count_label} - {state.subtitle}")
    for certificate in state.certificates:
        theme = resolve_status_theme(certificate.get("status"))
        typer.echo("")
        typer.secho(
            f"{certificate.get('certificateNumber') or 'Unavailable'}  [Status: {theme.label}]",
            bold=True,
        )
        for item in card_details(certificate):
            typer.echo(f"  {item['label']:<16} {item['value']}")


ApiUrl = typer.Option(None, "--api-url", help="Registry base URL (default: REGISTRY_API_URL)")


@cli.command()
def search(term: str = typer.Argument(..., help="Holder, certificate number, country, address..."),
           api_url: Optional[str] = ApiUrl):
    """Loose, case-insensitive search across the registry."""
    with _client(api_url) as client:
        state = client.search(term)
    _render(state)
    if not state.has_searched:
        raise typer.Exit(code=2)


@cli.command(name="all")
def fetch_all(api_url: Optional[str] = ApiUrl):
    """List every certificate."""
    with _client(api_url) as client:
        _render(client.fetch_all())


@cli.command()
def show(ident: str = typer.Argument(..., help="Certificate number or internal id"),
         api_url: Optional[str] = ApiUrl):
    """Exact identifier lookup."""
    with _client(api_url) as client:
        state = client.lookup(id=ident)
    _render(state)
    if not state.certificates:
        raise typer.Exit(code=1)


@cli.command()
def download(certificate_number: str = typer.Argument(...),
             output: str = typer.Option(".", "--output", "-o", help="Directory to write into"),
             open_link: bool = typer.Option(False, "--open", help="Open the original design when the download fails"),
             api_url: Optional[str] = ApiUrl):
    """Download the certificate design; prints the original link when that is not possible."""
    with _client(api_url) as client:
        state = client.lookup(certificate_number=certificate_number)
        if not state.certificates:
            typer.echo(state.subtitle, err=True)
            raise typer.Exit(code=1)
        result = client.download(state.certificates[0])

    if result.ok:
        path = os.path.join(output, result.asset.filename)
        with open(path, "wb") as f:
            f.write(result.asset.content)
        typer.echo(f"Saved {path}")
        return

    typer.echo(result.error, err=True)
    if result.fallback_url:
        typer.echo(result.fallback_url)
        if open_link:
            typer.launch(result.fallback_url)
    raise typer.Exit(code=1)


def main() -> None:
    setup_logging(load_client_settings().LOG_LEVEL)
    cli()


if __name__ == "__main__":
    main()
