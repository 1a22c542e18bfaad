"""apphome CLI — prepare application homes and build synthetic versions."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from apphome import __version__
from apphome.logging_setup import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs")
def main(verbose: bool):
    """apphome — versioned asset provisioning for application homes.

    Extracts an application's assets into a per-version directory of its
    home, keeps the home consistent when several versions run side by side,
    and reclaims old asset versions.
    """
    setup_logging(verbose=verbose)


# ── Init ─────────────────────────────────────────────────────────────


@main.command()
@click.option("--name", "-n", required=True, help="Application name")
@click.option("--version", "app_version", required=True, help="Running application version")
@click.option(
    "--assets",
    "-a",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory holding the assets to provision",
)
@click.option("--home", default=None, help="Home directory (default: ~/.config/NAME)")
@click.option("--threshold", default=3, show_default=True, help="Asset versions to keep")
def init(name: str, app_version: str, assets: str, home: str | None, threshold: int):
    """Prepare the home directory of NAME for the running version."""
    from apphome.errors import AppHomeError
    from apphome.home.app import App
    from apphome.home.sources import DirectoryAssetSource

    try:
        app = App(
            name=name,
            version=app_version,
            assets=DirectoryAssetSource(assets),
            home=home,
            retention=threshold,
        )
        assets_path = app.prepare_home()
    except AppHomeError as e:
        console.print(f"[red]Failed to prepare home:[/] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)

    console.print(f"[green]Assets ready:[/] {escape(str(assets_path))}", soft_wrap=True)


# ── Versions ─────────────────────────────────────────────────────────


@main.command("generate-version")
@click.option("--major", "-m", required=True, type=int, help="Major version number")
@click.option("--repo", "-r", default=".", help="Path inside the Git repository")
def generate_version(major: int, repo: str):
    """Print a synthetic version for the HEAD commit of a Git repository."""
    from apphome.errors import VersionGenerationError
    from apphome.versioning.generate import generate_from_commit

    try:
        version = generate_from_commit(major, repo)
    except VersionGenerationError as e:
        console.print(f"[red]{escape(str(e))}[/]", soft_wrap=True)
        sys.exit(1)

    click.echo(version)


@main.command("version-date")
@click.argument("version")
@click.option("--short", is_flag=True, help="Minor component is YYMMDD instead of YYYYMMDD")
def version_date(version: str, short: bool):
    """Print the YYYY-MM-DD date packed in the minor component of VERSION."""
    from apphome.versioning.generate import DateLayout, extract_calendar_date

    layout = DateLayout.SHORT if short else DateLayout.LONG
    try:
        date = extract_calendar_date(version, layout=layout)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/]", soft_wrap=True)
        sys.exit(1)

    click.echo(date)


# ── Assets ───────────────────────────────────────────────────────────


@main.command("list-assets")
@click.option("--name", "-n", required=True, help="Application name")
@click.option("--home", default=None, help="Home directory (default: ~/.config/NAME)")
def list_assets(name: str, home: str | None):
    """List installed asset versions, newest first."""
    from pathlib import Path

    from apphome.errors import CleanupError
    from apphome.home.app import default_home_folder
    from apphome.home.retention import installed_versions
    from apphome.home.stamp import read_stamp
    from apphome.versioning.semver import sort_versions

    home_path = Path(home) if home else default_home_folder(name)
    try:
        versions = installed_versions(home_path)
    except CleanupError:
        versions = []

    if not versions:
        console.print("[yellow]No assets installed.[/]")
        return

    stamped = read_stamp(home_path)

    table = Table(title=f"Installed assets ({len(versions)})")
    table.add_column("Version", style="cyan")
    table.add_column("Stamped", justify="center")

    for version in sort_versions(versions, reverse=True):
        table.add_row(version, "[green]*[/]" if version == stamped else "")

    console.print(table)


if __name__ == "__main__":
    main()
