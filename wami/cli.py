"""CLI interface for wami.

Read-only: prints what was detected and the shell string a command
would run, but never runs anything itself.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog

from wami import __version__
from wami.config import get_settings
from wami.detector import DetectorRegistry
from wami.logging import configure_structlog
from wami.types import DetectionResult

log = structlog.get_logger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="wami")
@click.argument(
    "path",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
)
@click.option("--all", "scan_all", is_flag=True, help="List every project around PATH (monorepo switching).")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of text.")
@click.option("--command", "-c", "command_name", default=None, help="Print the full shell string for one command.")
@click.option("--debug", is_flag=True, help="Verbose logging on stderr (also WAMI_DEBUG=1).")
def main(path: str, scan_all: bool, as_json: bool, command_name: Optional[str], debug: bool) -> None:
    """Detect the project at PATH and list the commands it defines."""
    settings = get_settings()
    configure_structlog(debug=debug or settings.debug)
    registry = DetectorRegistry.from_settings(settings)

    if scan_all:
        _print_all(registry.detect_all(Path(path)), as_json)
        return

    result = registry.detect(Path(path))
    if not result.found:
        log.info("detection_miss", path=path, supported=result.supported)
        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            click.echo(f"{result.error}.", err=True)
            click.echo(f"Supported ecosystems: {', '.join(result.supported)}", err=True)
        sys.exit(1)

    if command_name is not None:
        _print_command(result, command_name)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_project(result)


def _print_command(result: DetectionResult, command_name: str) -> None:
    project = result.project
    if project.get_command(command_name) is None:
        click.echo(f"Unknown command: {command_name}", err=True)
        click.echo(f"Available: {', '.join(c.name for c in project.commands)}", err=True)
        sys.exit(1)
    click.echo(result.detector.build_command(project, command_name))


def _print_project(result: DetectionResult) -> None:
    project = result.project
    click.echo(f"{project.name} ({result.detector.name}, {project.package_manager})")
    click.echo(f"  {project.path}")

    workspace = project.workspace
    if workspace is not None and workspace.is_workspace:
        click.echo(f"  workspace: {workspace.workspace_name} ({workspace.relative_path})")
    if project.venv_path is not None:
        click.echo(f"  venv: {project.venv_path}")
    if project.config_error:
        click.echo(f"  warning: {project.config_error}", err=True)

    click.echo("")
    width = max((len(c.name) for c in project.commands), default=0)
    for command in project.commands:
        line = f"  {command.name.ljust(width)}  {command.command}"
        if command.description:
            line += f"  # {command.description}"
        click.echo(line)


def _print_all(results: list[DetectionResult], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return
    if not results:
        click.echo("No projects found.", err=True)
        sys.exit(1)
    for result in results:
        project = result.project
        click.echo(f"{project.name}\t{result.detector.name}\t{project.root}")


if __name__ == "__main__":
    main()
