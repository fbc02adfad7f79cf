"""site-skinner: apply the current project's site skin to a previous release."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

import typer

from site_skinner.cli.commands import skin
from site_skinner.cli.helpers import console

try:
    __version__ = version("site-skinner")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

app = typer.Typer(
    name="site-skinner",
    help="Re-skin the generated site of a previously released Maven project",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"site-skinner {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version_flag: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Re-skin the generated site of a previously released Maven project."""


app.command()(skin)


def main():
    app()


if __name__ == "__main__":
    main()
