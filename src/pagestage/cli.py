"""CLI interface for Pagestage.

Command-line tool for serving a static site.
"""

import logging
from pathlib import Path

import click

from pagestage.config import Config
from pagestage.errors import ConfigError


@click.group()
def cli() -> None:
    """Pagestage - a small static page server."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover pagestage.toml)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config and PORT)",
)
@click.option(
    "--document-root",
    "-d",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Directory with html pages, index.html and 404.html (overrides config)",
)
@click.option(
    "--asset-root",
    "-a",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Directory with non-html static files (overrides config)",
)
@click.option(
    "--log-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for request and error logs (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug output",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    document_root: Path | None,
    asset_root: Path | None,
    log_dir: Path | None,
    verbose: bool,
) -> None:
    """Start the page server."""
    from pagestage.server import run_server

    try:
        config = Config.load(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    config = config.with_overrides(
        host=host,
        port=port,
        document_root=document_root,
        asset_root=asset_root,
        log_dir=log_dir,
    )

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Document root: {config.site.document_root}")
    click.echo(f"Asset root: {config.site.asset_root}")
    click.echo(f"Logs: {config.logs.log_dir}")

    run_server(config)


if __name__ == "__main__":
    cli()
