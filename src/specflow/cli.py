"""CLI interface for SpecFlow."""

import sys
import time
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console

from .export import export_filename, export_spec
from .formatting import format_spec_detail, format_spec_list
from .models import (
    ExportFormat,
    GenerationRequest,
    GroupBy,
    Spec,
    SpecflowConfig,
    Template,
)
from .service import SpecService
from .workspace import SpecflowWorkspace

console = Console()

TEMPLATE_CHOICES = [t.value for t in Template]
GROUP_CHOICES = [g.value for g in GroupBy]
FORMAT_CHOICES = [f.value for f in ExportFormat]
PRIORITY_CHOICES = ["high", "medium", "low"]
COMPONENT_CHOICES = ["frontend", "backend", "design", "testing", "devops"]
PHASE_CHOICES = ["planning", "development", "testing", "deployment"]

project_path_option = click.option(
    '--project-path', '-p', type=click.Path(file_okay=False), default='.',
    help='Project directory holding .specflow/ (default: current directory)'
)


def _load(project_path: str) -> tuple[SpecService, SpecflowConfig]:
    """Build the service and config for a project directory."""
    config = SpecflowWorkspace(project_path).load_config()
    return SpecService.for_project(project_path, config=config), config


def _resolve_spec(service: SpecService, spec_id: str) -> Spec:
    """Find a spec by ID or unique prefix; exit with an error if missing."""
    spec = service.resolve(spec_id)
    if spec is None:
        console.print(f"[red]Error:[/red] No spec matches '{spec_id}'")
        sys.exit(1)
    return spec


def _resolve_item_id(spec: Spec, item_id: str) -> str:
    """Expand a unique item ID prefix; exit with an error if missing."""
    matches = [i.id for i in spec.items() if i.id.startswith(item_id)]
    if item_id in matches:
        return item_id
    if len(matches) == 1:
        return matches[0]
    console.print(f"[red]Error:[/red] No single item matches '{item_id}'")
    sys.exit(1)


def _resolve_risk_id(spec: Spec, risk_id: str) -> str:
    """Expand a unique risk ID prefix; exit with an error if missing."""
    matches = [r.id for r in spec.risks if r.id.startswith(risk_id)]
    if risk_id in matches:
        return risk_id
    if len(matches) == 1:
        return matches[0]
    console.print(f"[red]Error:[/red] No single risk matches '{risk_id}'")
    sys.exit(1)


@click.group()
@click.version_option(package_name="specflow")
def main():
    """SpecFlow - Turn a feature description into stories, tasks and risks."""
    pass


@main.command()
@project_path_option
@click.option('--goal', '-g', prompt='Feature goal', help='What the feature should achieve')
@click.option('--users', '-u', 'target_users', prompt='Target users', help='Who the feature is for')
@click.option('--constraints', '-c', default='', help='Constraints (performance, security, ...)')
@click.option('--template', '-t', type=click.Choice(TEMPLATE_CHOICES),
              help='Project template (default: from config, usually web)')
@click.option('--group-by', type=click.Choice(GROUP_CHOICES), help='Grouping for the result view')
@click.option('--dry-run', is_flag=True, help='Preview without saving')
@click.option('--no-delay', is_flag=True, help='Skip the generation pause')
def generate(
    project_path: str,
    goal: str,
    target_users: str,
    constraints: str,
    template: Optional[str],
    group_by: Optional[str],
    dry_run: bool,
    no_delay: bool,
):
    """Generate user stories, tasks and risks for a feature.

    \b
    Examples:
        specflow generate -g "Add saved searches" -u "power users"
        specflow generate -g "Offline sync" -u "mobile users" -t mobile
        specflow generate -g "Audit trail" -u "admins" -c "GDPR compliant" --dry-run
    """
    service, config = _load(project_path)

    try:
        request = GenerationRequest(
            goal=goal,
            target_users=target_users,
            constraints=constraints,
            template=template or config.default_template,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        console.print(f"[red]Validation error:[/red] required field is empty ({fields})")
        sys.exit(1)

    with console.status("[bold blue]Generating spec..."):
        if not no_delay and config.generation_delay_seconds > 0:
            time.sleep(config.generation_delay_seconds)
        spec = service.preview(request) if dry_run else service.generate(request)

    console.print(f"[green]OK[/green] {spec.summary()}")
    console.print("")
    for renderable in format_spec_detail(spec, group_by or config.default_group_by):
        console.print(renderable)

    if dry_run:
        console.print("\n[yellow]Dry run complete - spec not saved[/yellow]")
        return

    console.print(f"\n[green]OK[/green] Saved spec {spec.id}")
    console.print("\nNext steps:")
    console.print(f"  1. Export: specflow export {spec.id[:8]}")
    console.print("  2. Recent specs: specflow list")


@main.command('list')
@project_path_option
def list_specs(project_path: str):
    """List recent specs (most recent first)."""
    service, config = _load(project_path)
    specs = service.list_specs()

    if not specs:
        console.print("[yellow]No specs yet. Run 'specflow generate' to create one.[/yellow]")
        return

    console.print(format_spec_list(specs))
    console.print(f"\n[dim]{len(specs)}/{config.max_saved_specs} specs saved[/dim]")


@main.command()
@project_path_option
@click.argument('spec_id')
@click.option('--group-by', type=click.Choice(GROUP_CHOICES), help='Grouping dimension')
def show(project_path: str, spec_id: str, group_by: Optional[str]):
    """Show a spec grouped by type, priority, component or phase."""
    service, config = _load(project_path)
    spec = _resolve_spec(service, spec_id)

    for renderable in format_spec_detail(spec, group_by or config.default_group_by):
        console.print(renderable)


@main.command()
@project_path_option
@click.argument('spec_id')
@click.option('--format', '-f', 'fmt', type=click.Choice(FORMAT_CHOICES), help='Export format')
@click.option('--group-by', type=click.Choice(GROUP_CHOICES), help='Grouping dimension')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write to a file (use "auto" for a name derived from the feature)')
def export(
    project_path: str,
    spec_id: str,
    fmt: Optional[str],
    group_by: Optional[str],
    output: Optional[str],
):
    """Export a spec as markdown or plain text.

    Prints to stdout unless --output is given.
    """
    service, config = _load(project_path)
    spec = _resolve_spec(service, spec_id)

    fmt = fmt or config.default_export_format
    content = export_spec(spec, fmt, group_by or config.default_group_by)

    if not output:
        click.echo(content)
        return

    output_path = Path(project_path) / export_filename(spec, fmt) if output == "auto" else Path(output)
    output_path.write_text(content, encoding="utf-8")
    console.print(f"[green]OK[/green] Wrote {output_path}")


@main.command()
@project_path_option
@click.argument('spec_id')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
def delete(project_path: str, spec_id: str, yes: bool):
    """Delete a saved spec."""
    service, _ = _load(project_path)
    spec = _resolve_spec(service, spec_id)

    if not yes and not click.confirm(f"Delete '{spec.feature_name}'?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    service.delete_spec(spec.id)
    console.print(f"[green]OK[/green] Deleted spec {spec.id}")


@main.command('edit-item')
@project_path_option
@click.argument('spec_id')
@click.argument('item_id')
@click.option('--title', help='New title')
@click.option('--description', help='New description')
@click.option('--priority', type=click.Choice(PRIORITY_CHOICES), help='New priority')
@click.option('--component', type=click.Choice(COMPONENT_CHOICES), help='New component')
@click.option('--phase', type=click.Choice(PHASE_CHOICES), help='New phase')
def edit_item(
    project_path: str,
    spec_id: str,
    item_id: str,
    title: Optional[str],
    description: Optional[str],
    priority: Optional[str],
    component: Optional[str],
    phase: Optional[str],
):
    """Edit a story or task in a saved spec."""
    service, _ = _load(project_path)
    spec = _resolve_spec(service, spec_id)
    full_item_id = _resolve_item_id(spec, item_id)

    updated = service.update_item(
        spec.id,
        full_item_id,
        title=title,
        description=description,
        priority=priority,
        component=component,
        phase=phase,
    )
    if updated is None or updated == spec:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    item = updated.find_item(full_item_id)
    console.print(f"[green]OK[/green] Updated {item.type.value}: {item.title}")


@main.command('remove-item')
@project_path_option
@click.argument('spec_id')
@click.argument('item_id')
def remove_item(project_path: str, spec_id: str, item_id: str):
    """Remove a story or task from a saved spec."""
    service, _ = _load(project_path)
    spec = _resolve_spec(service, spec_id)
    full_item_id = _resolve_item_id(spec, item_id)

    item = spec.find_item(full_item_id)
    service.delete_item(spec.id, full_item_id)
    console.print(f"[green]OK[/green] Removed {item.type.value}: {item.title}")


@main.command('move-item')
@project_path_option
@click.argument('spec_id')
@click.argument('source_id')
@click.argument('target_id')
def move_item(project_path: str, spec_id: str, source_id: str, target_id: str):
    """Move an item to the position of another item.

    Stories always stay ahead of tasks; moving reorders items within
    their own group.
    """
    service, _ = _load(project_path)
    spec = _resolve_spec(service, spec_id)
    source = _resolve_item_id(spec, source_id)
    target = _resolve_item_id(spec, target_id)

    updated = service.move_item(spec.id, source, target)
    if updated == spec:
        console.print("[yellow]Nothing to move[/yellow]")
        return
    console.print(f"[green]OK[/green] Moved item {source[:8]}")


@main.command('edit-risk')
@project_path_option
@click.argument('spec_id')
@click.argument('risk_id')
@click.argument('text')
def edit_risk(project_path: str, spec_id: str, risk_id: str, text: str):
    """Replace the text of a risk."""
    service, _ = _load(project_path)
    spec = _resolve_spec(service, spec_id)
    full_risk_id = _resolve_risk_id(spec, risk_id)

    updated = service.update_risk(spec.id, full_risk_id, text)
    if updated == spec:
        console.print("[yellow]Nothing to change[/yellow]")
        return
    console.print(f"[green]OK[/green] Updated risk {full_risk_id[:8]}")


@main.command()
@project_path_option
@click.option('--max-specs', type=int, help='Number of recent specs to keep')
@click.option('--delay', type=float, help='Generation pause in seconds')
@click.option('--template', type=click.Choice(TEMPLATE_CHOICES), help='Default template')
@click.option('--format', 'fmt', type=click.Choice(FORMAT_CHOICES), help='Default export format')
@click.option('--group-by', type=click.Choice(GROUP_CHOICES), help='Default grouping')
def config(
    project_path: str,
    max_specs: Optional[int],
    delay: Optional[float],
    template: Optional[str],
    fmt: Optional[str],
    group_by: Optional[str],
):
    """Show or change workspace configuration."""
    workspace = SpecflowWorkspace(project_path)
    current = workspace.load_config()

    updates = {
        "max_saved_specs": max_specs,
        "generation_delay_seconds": delay,
        "default_template": template,
        "default_export_format": fmt,
        "default_group_by": group_by,
    }
    updates = {k: v for k, v in updates.items() if v is not None}

    if updates:
        try:
            current = SpecflowConfig.model_validate({**current.model_dump(), **updates})
        except ValidationError as e:
            console.print(f"[red]Validation error:[/red] {e.errors()[0]['msg']}")
            sys.exit(1)
        workspace.save_config(current)
        console.print(f"[green]OK[/green] Saved {workspace.config_file}")

    for key, value in current.model_dump(mode="json").items():
        console.print(f"[bold]{key}:[/bold] {value}")


@main.command()
@project_path_option
@click.option('--host', default='127.0.0.1', help='Host to bind to')
@click.option('--port', default=8000, help='Port to listen on')
@click.option('--reload', is_flag=True, help='Enable auto-reload for development')
def serve(project_path: str, host: str, port: int, reload: bool):
    """Start the HTTP API for generating and editing specs.

    \b
    - REST API at http://host:port/api/
    - API docs at http://host:port/docs

    Example:
        specflow serve -p ./my-project --port 8000
    """
    from .api import run_server

    path = Path(project_path)
    console.print("[bold]Starting SpecFlow API[/bold]")
    console.print(f"Project: {path}")
    console.print(f"API: http://{host}:{port}/api/")
    console.print(f"Docs: http://{host}:{port}/docs")
    console.print("\nPress Ctrl+C to stop\n")

    try:
        run_server(path, host=host, port=port, reload=reload)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped[/yellow]")


if __name__ == '__main__':
    main()
