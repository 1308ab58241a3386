"""CLI interface for letsbuild.

Command-line tool for building and previewing the blog.
"""

import logging
import sys
from pathlib import Path

import click

from letsbuild.config import Config
from letsbuild.core.cache import FileCache
from letsbuild.core.generator import SiteGenerator
from letsbuild.core.permalink import map_file_path_to_url
from letsbuild.core.renderer import PostRenderer

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover letsbuild.toml)",
)

verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)


@click.group()
def cli() -> None:
    """letsbuild - static blog builder with Jekyll compatible permalinks."""


@cli.command()
@config_option
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Content directory with markdown posts (overrides config)",
)
@click.option(
    "--build-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory (overrides config)",
)
@click.option(
    "--template",
    "-t",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="HTML page template (overrides config)",
)
@verbose_option
def build(
    config_path: Path | None,
    source_dir: Path | None,
    build_dir: Path | None,
    template: Path | None,
    verbose: bool,
) -> None:
    """Build the static site."""
    _configure_logging(verbose)

    try:
        config = Config.load(config_path).with_overrides(
            source_dir=source_dir,
            build_dir=build_dir,
            template=template,
        )
        renderer = PostRenderer(FileCache(config.content.cache_dir))
        generator = SiteGenerator(
            config.content.source_dir,
            config.content.build_dir,
            config.content.template,
            renderer,
            site_title=config.site.title,
            intro=config.site.intro,
        )
        result = generator.generate()
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    for path in result.written:
        click.echo(f"Generated: {path}")
    if result.index_path is not None:
        click.echo(f"Generated index: {result.index_path}")
    for path in result.failed:
        click.echo(click.style(f"Failed: {path}", fg="yellow"), err=True)

    click.echo(click.style("Site generation complete!", fg="green", bold=True))


@cli.command()
@config_option
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content directory with markdown posts (overrides config)",
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
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
@verbose_option
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
    verbose: bool,
) -> None:
    """Start the preview server."""
    from letsbuild.server import run_server

    _configure_logging(verbose)

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            source_dir=source_dir,
            live_reload_enabled=live_reload,
        )
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Content directory: {config.content.source_dir}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    try:
        run_server(config)
    except FileNotFoundError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@click.argument("files", nargs=-1, required=True)
def permalink(files: tuple[str, ...]) -> None:
    """Print the URL path each post FILE is published at."""
    for file in files:
        click.echo(f"{file} -> {map_file_path_to_url(file)}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
