"""Rich formatting of specs for CLI display.

Provides:
- Recent spec list table
- Single spec detail view, grouped by one dimension
"""

from datetime import datetime
from typing import Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .export import group_items, group_label
from .models import GroupBy, RiskType, Spec


PRIORITY_COLORS = {
    "high": "red",
    "medium": "yellow",
    "low": "green",
}

COMPONENT_COLORS = {
    "frontend": "blue",
    "backend": "magenta",
    "design": "bright_magenta",
    "testing": "green",
    "devops": "yellow",
}

RISK_COLORS = {
    RiskType.BLOCKER: "red",
    RiskType.UNKNOWN: "yellow",
    RiskType.ASSUMPTION: "cyan",
}


def _colored(value: str, colors: dict[str, str]) -> str:
    color = colors.get(value, "white")
    return f"[{color}]{value}[/{color}]"


def format_timestamp(value: Optional[datetime]) -> str:
    """Format a creation timestamp for tables."""
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")


def format_spec_list(specs: list[Spec]) -> Table:
    """Format recent specs as a Rich table.

    Args:
        specs: Specs, most recent first

    Returns:
        Rich Table
    """
    table = Table(title="Recent Specs", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Feature", style="white")
    table.add_column("Template")
    table.add_column("Stories", justify="right")
    table.add_column("Tasks", justify="right")
    table.add_column("Risks", justify="right")
    table.add_column("Created", justify="right")

    for spec in specs:
        # Short ID; the CLI accepts unique prefixes
        table.add_row(
            spec.id[:8],
            escape(spec.feature_name),
            spec.template.value,
            str(len(spec.stories)),
            str(len(spec.tasks)),
            str(len(spec.risks)),
            format_timestamp(spec.created_at),
        )

    return table


def format_spec_detail(spec: Spec, group_by: GroupBy | str = GroupBy.TYPE) -> list:
    """Format detailed view of a single spec.

    Args:
        spec: Spec to display
        group_by: Grouping dimension for stories and tasks

    Returns:
        List of Rich renderables
    """
    header = (
        f"[bold]Goal:[/bold] {escape(spec.goal)}\n"
        f"[bold]Target users:[/bold] {escape(spec.target_users)}\n"
        f"[bold]Constraints:[/bold] {escape(spec.constraints) or '-'}\n"
        f"[bold]Template:[/bold] {spec.template.value}  "
        f"[bold]Created:[/bold] {format_timestamp(spec.created_at)}"
    )
    renderables: list = [
        Panel(header, title=f"[bold]{escape(spec.feature_name)}[/bold]", subtitle=spec.id, border_style="cyan")
    ]

    for key, items in group_items(spec.items(), group_by).items():
        table = Table(title=f"{group_label(key)} ({len(items)})", title_justify="left")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Title")
        table.add_column("Priority")
        table.add_column("Component")
        table.add_column("Phase")

        for item in items:
            title = escape(item.title)
            if item.description:
                title += f"\n[dim]{escape(item.description)}[/dim]"
            table.add_row(
                item.id[:8],
                title,
                _colored(item.priority.value, PRIORITY_COLORS),
                _colored(item.component.value, COMPONENT_COLORS),
                item.phase.value,
            )
        renderables.append(table)

    if spec.risks:
        table = Table(title="Risks & Unknowns", title_justify="left")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Type", no_wrap=True)
        table.add_column("Text")
        for risk in spec.risks:
            color = RISK_COLORS.get(risk.type, "white")
            table.add_row(risk.id[:8], f"[{color}]{risk.type.value}[/{color}]", escape(risk.text))
        renderables.append(table)
    else:
        renderables.append(Text("No risks recorded", style="yellow"))

    return renderables
