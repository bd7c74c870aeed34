"""Plain-text and markdown export of a Spec.

Stories and tasks are grouped by one dimension (type, priority, component
or phase); groups appear in the order their first item appears in the
combined sequence. Risks are appended verbatim.
"""

import re
from typing import Optional

from .models import BacklogItem, ExportFormat, GroupBy, Spec


OTHER_GROUP = "other"

FILE_EXTENSIONS: dict[ExportFormat, str] = {
    ExportFormat.MARKDOWN: "md",
    ExportFormat.TEXT: "txt",
}


def _value(item: BacklogItem, group_by: GroupBy | str) -> str:
    field = group_by.value if isinstance(group_by, GroupBy) else group_by
    raw = getattr(item, field, None)
    if raw is None:
        return OTHER_GROUP
    value = raw.value if hasattr(raw, "value") else str(raw)
    return value or OTHER_GROUP


def group_items(items: list[BacklogItem], group_by: GroupBy | str) -> dict[str, list[BacklogItem]]:
    """Group items by the value of one field.

    Args:
        items: Items in display order
        group_by: Field to group on; items without a value go to "other"

    Returns:
        Ordered mapping of group key to items
    """
    groups: dict[str, list[BacklogItem]] = {}
    for item in items:
        groups.setdefault(_value(item, group_by), []).append(item)
    return groups


def group_label(key: str) -> str:
    """Heading for a group key ("high" -> "High")."""
    return key[:1].upper() + key[1:]


def _created(spec: Spec) -> Optional[str]:
    if spec.created_at is None:
        return None
    return spec.created_at.strftime("%Y-%m-%d %H:%M")


def export_as_markdown(spec: Spec, group_by: GroupBy | str = GroupBy.TYPE) -> str:
    """Render a Spec as a markdown document.

    Args:
        spec: Spec to render
        group_by: Grouping dimension for stories and tasks

    Returns:
        Markdown text
    """
    lines = [f"# {spec.feature_name or spec.goal}", ""]

    meta = f"**Template:** {spec.template.value}"
    created = _created(spec)
    if created:
        meta += f" | **Created:** {created}"
    lines.append(meta)
    lines.append("")
    lines.append(f"**Goal:** {spec.goal}")
    lines.append("")
    lines.append(f"**Target Users:** {spec.target_users}")
    if spec.constraints:
        lines.append("")
        lines.append(f"**Constraints:** {spec.constraints}")
    lines.append("")

    for key, items in group_items(spec.items(), group_by).items():
        lines.append(f"## {group_label(key)} ({len(items)})")
        lines.append("")
        for item in items:
            lines.append(
                f"- [ ] {item.title} "
                f"`{item.priority.value}` `{item.component.value}` `{item.phase.value}`"
            )
            if item.description:
                lines.append(f"  {item.description}")
        lines.append("")

    if spec.risks:
        lines.append("## Risks & Unknowns")
        lines.append("")
        for risk in spec.risks:
            lines.append(f"- **{risk.type.value}:** {risk.text}")
        lines.append("")

    return "\n".join(lines)


def export_as_text(spec: Spec, group_by: GroupBy | str = GroupBy.TYPE) -> str:
    """Render a Spec as plain text.

    Args:
        spec: Spec to render
        group_by: Grouping dimension for stories and tasks

    Returns:
        Plain text
    """
    title = spec.feature_name or spec.goal
    lines = [title, "=" * len(title)]

    lines.append(f"Template: {spec.template.value}")
    created = _created(spec)
    if created:
        lines.append(f"Created: {created}")
    lines.append(f"Goal: {spec.goal}")
    lines.append(f"Target users: {spec.target_users}")
    if spec.constraints:
        lines.append(f"Constraints: {spec.constraints}")
    lines.append("")

    for key, items in group_items(spec.items(), group_by).items():
        heading = f"{group_label(key).upper()} ({len(items)})"
        lines.append(heading)
        lines.append("-" * len(heading))
        for n, item in enumerate(items, start=1):
            lines.append(
                f"{n}. [{item.priority.value}] {item.title} "
                f"({item.component.value} / {item.phase.value})"
            )
            if item.description:
                lines.append(f"   {item.description}")
        lines.append("")

    if spec.risks:
        heading = "RISKS & UNKNOWNS"
        lines.append(heading)
        lines.append("-" * len(heading))
        for risk in spec.risks:
            lines.append(f"[{risk.type.value}] {risk.text}")
        lines.append("")

    return "\n".join(lines)


def export_spec(
    spec: Spec,
    fmt: ExportFormat | str = ExportFormat.MARKDOWN,
    group_by: GroupBy | str = GroupBy.TYPE,
) -> str:
    """Render a Spec in the requested format."""
    if ExportFormat(fmt) == ExportFormat.TEXT:
        return export_as_text(spec, group_by)
    return export_as_markdown(spec, group_by)


def export_filename(spec: Spec, fmt: ExportFormat | str = ExportFormat.MARKDOWN) -> str:
    """Download filename for an export, e.g. ``build_a_dashboard_spec.md``."""
    stem = re.sub(r"[^a-zA-Z0-9]", "_", spec.feature_name or spec.goal).lower()
    return f"{stem}_spec.{FILE_EXTENSIONS[ExportFormat(fmt)]}"
