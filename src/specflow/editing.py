"""Editing operations on an existing Spec.

Every operation is read-modify-replace: the input Spec is never mutated,
a new Spec is returned. Operations that reference an unknown item or risk
return the Spec unchanged.
"""

from .models import BacklogItem, ItemType, Spec


# Fields a user may change on a story or task
EDITABLE_ITEM_FIELDS = frozenset({"title", "description", "priority", "phase", "component"})


def _split(items: list[BacklogItem]) -> dict:
    """Re-split a combined item sequence into type-pure partitions."""
    return {
        "stories": [i for i in items if i.type == ItemType.STORY],
        "tasks": [i for i in items if i.type == ItemType.TASK],
    }


def update_item(spec: Spec, item_id: str, **changes) -> Spec:
    """Apply field changes to one story or task.

    A blank title is ignored; descriptions are trimmed.

    Args:
        spec: Spec containing the item
        item_id: ID of the story or task
        **changes: New values for title, description, priority, phase or component

    Returns:
        Updated Spec (the same Spec if the item is unknown)

    Raises:
        ValueError: If a field is not editable
        pydantic.ValidationError: If a value is invalid (e.g. unknown priority)
    """
    invalid = set(changes) - EDITABLE_ITEM_FIELDS
    if invalid:
        raise ValueError(f"Fields not editable: {', '.join(sorted(invalid))}")

    target = spec.find_item(item_id)
    if target is None:
        return spec

    changes = {k: v for k, v in changes.items() if v is not None}
    if "title" in changes:
        title = str(changes["title"]).strip()
        if title:
            changes["title"] = title
        else:
            del changes["title"]
    if "description" in changes:
        changes["description"] = str(changes["description"]).strip()

    if not changes:
        return spec

    updated = BacklogItem.model_validate({**target.model_dump(), **changes})
    items = [updated if i.id == item_id else i for i in spec.items()]
    return spec.model_copy(update=_split(items))


def delete_item(spec: Spec, item_id: str) -> Spec:
    """Remove a story or task.

    Args:
        spec: Spec containing the item
        item_id: ID of the story or task

    Returns:
        Spec without the item
    """
    if spec.find_item(item_id) is None:
        return spec
    items = [i for i in spec.items() if i.id != item_id]
    return spec.model_copy(update=_split(items))


def reorder_items(spec: Spec, source_id: str, target_id: str) -> Spec:
    """Move an item to another item's position in the combined order.

    The combined sequence (stories then tasks) is reordered and then
    re-split by type, so each partition keeps its relative order.

    Args:
        spec: Spec to reorder
        source_id: ID of the item being moved
        target_id: ID of the item whose position it takes

    Returns:
        Reordered Spec (unchanged if either ID is unknown or they are equal)
    """
    if source_id == target_id:
        return spec

    combined = spec.items()
    ids = [i.id for i in combined]
    if source_id not in ids or target_id not in ids:
        return spec

    source_idx = ids.index(source_id)
    target_idx = ids.index(target_id)
    moved = combined.pop(source_idx)
    combined.insert(target_idx, moved)
    return spec.model_copy(update=_split(combined))


def update_risk(spec: Spec, risk_id: str, text: str) -> Spec:
    """Replace the text of a risk.

    Args:
        spec: Spec containing the risk
        risk_id: ID of the risk
        text: New text; blank or unchanged text is ignored

    Returns:
        Updated Spec
    """
    text = text.strip()
    risk = spec.find_risk(risk_id)
    if risk is None or not text or text == risk.text:
        return spec

    risks = [
        r.model_copy(update={"text": text}) if r.id == risk_id else r
        for r in spec.risks
    ]
    return spec.model_copy(update={"risks": risks})
