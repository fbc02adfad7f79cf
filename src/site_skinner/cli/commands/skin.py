"""``site-skinner skin``: apply the current skin to the previous release's site."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.live import Live

from site_skinner.cli.helpers import console, setup_logging
from site_skinner.cli.ui import StepTracker
from site_skinner.core.config import load_skin_config, resolve_options
from site_skinner.errors import SkinnerError
from site_skinner.maven.invoker import MavenInvoker
from site_skinner.maven.pom import PomProjectModelProvider
from site_skinner.maven.repository import MavenRepository
from site_skinner.scm.manager import DefaultScmManager
from site_skinner.site.codec import XmlDescriptorCodec
from site_skinner.workflow.context import WorkflowContext
from site_skinner.workflow.skin import run_skin_workflow

__all__ = ["skin", "parse_defines", "parse_profiles"]


def parse_defines(values: list[str] | None) -> dict[str, str]:
    """``key=value`` pairs; a bare ``key`` means ``key=true`` like ``mvn -D``."""
    properties: dict[str, str] = {}
    for raw in values or []:
        key, separator, value = raw.partition("=")
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Expected key=value, got '{raw}'", param_hint="--define")
        properties[key] = value if separator else "true"
    return properties


def parse_profiles(value: str | None) -> list[str]:
    if not value:
        return []
    return [profile.strip() for profile in value.split(",") if profile.strip()]


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def skin(
    project: Path = typer.Option(Path("pom.xml"), "--project", "-f", help="pom.xml of the current project"),
    force_checkout: Optional[bool] = typer.Option(
        None,
        "--force-checkout/--no-force-checkout",
        help="Delete the working directory and check the released sources out again",
    ),
    merge_body: Optional[bool] = typer.Option(
        None,
        "--merge-body/--no-merge-body",
        help="Also copy breadcrumbs, footer, head and links (menus are never copied)",
    ),
    site_deploy: Optional[bool] = typer.Option(
        None, "--site-deploy/--no-site-deploy", help="Run 'site-deploy' instead of 'site'"
    ),
    released_version: Optional[str] = typer.Option(
        None, "--released-version", help="Version range of the release to re-skin (default: (,<current version>))"
    ),
    working_directory: Optional[Path] = typer.Option(
        None, "--working-directory", help="Checkout directory (default: <basedir>/target/siteskinner)"
    ),
    input_encoding: Optional[str] = typer.Option(None, "--input-encoding", help="Encoding of site.xml files read"),
    output_encoding: Optional[str] = typer.Option(None, "--output-encoding", help="Encoding of site.xml files written"),
    define: Optional[List[str]] = typer.Option(
        None, "--define", "-D", help="Property passed to the site build (key=value, repeatable)"
    ),
    activate_profiles: Optional[str] = typer.Option(
        None, "--activate-profiles", "-P", help="Comma separated profiles activated in the site build"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging; also runs the site build with -X"),
) -> None:
    """Re-skin the site of the previous release with the current skin."""
    setup_logging(verbose)
    properties = parse_defines(define)

    pom_file = project.resolve()
    if not pom_file.is_file():
        _fail(f"No project descriptor found at {pom_file}")

    try:
        config = load_skin_config(pom_file.parent)
    except SkinnerError as exc:
        _fail(str(exc))

    options = resolve_options(
        config,
        force_checkout=force_checkout,
        merge_body=merge_body,
        site_deploy=site_deploy,
        released_version=released_version,
        working_directory=working_directory,
        input_encoding=input_encoding,
        output_encoding=output_encoding,
    )

    with MavenRepository(
        local_repository=Path(config.local_repository).expanduser() if config.local_repository else None,
        remote_repositories=config.remote_repositories or None,
    ) as repository:
        project_builder = PomProjectModelProvider(repository)
        try:
            current = project_builder.build(pom_file)
        except SkinnerError as exc:
            _fail(str(exc))

        context = WorkflowContext(
            project_builder=project_builder,
            repository=repository,
            scm_manager=DefaultScmManager(),
            codec=XmlDescriptorCodec(),
            invoker=MavenInvoker(
                executable=config.maven_executable or "mvn",
                properties=properties,
                profiles=parse_profiles(activate_profiles),
                debug=verbose,
            ),
        )
        tracker = StepTracker(f"Re-skin {current.group_id}:{current.artifact_id}")
        with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
            tracker.attach_refresh(lambda: live.update(tracker.render()))
            result = run_skin_workflow(context, current, options, tracker=tracker)

    console.print(tracker.render())
    if not result.success:
        _fail(f"{result.failed_stage}: {result.error}")

    console.print(f"\n[bold green]Re-skinned site of version {result.released_version}[/bold green]")
    for path in result.written_descriptors:
        console.print(f"  [cyan]{path}[/cyan]")
