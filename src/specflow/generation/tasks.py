"""Engineering task generation.

Tasks come from two independent streams, concatenated in this order:
goal-derived tasks (fixed baseline plus keyword-gated pairs) and
template tasks.
"""

from ..models import Component, ItemType, Phase, Template
from .analyzer import mentions_any, normalize
from .drafts import ItemDraft
from .taxonomy import (
    BASELINE_TASKS,
    COMPONENT_PHASES,
    CONDITIONAL_TASKS,
    TEMPLATE_TASKS,
    resolve_template,
)


def _task(title: str, component: Component) -> ItemDraft:
    return ItemDraft(title=title, type=ItemType.TASK, component=component)


def generate_base_tasks(goal: str) -> list[ItemDraft]:
    """Generate the goal-derived tasks.

    Args:
        goal: Feature goal.

    Returns:
        The 16 baseline tasks followed by any gated frontend/backend pairs.
    """
    keywords = normalize(goal)
    goal_lower = goal.lower()

    tasks = [
        _task(title.format(goal=goal_lower), component)
        for title, component in BASELINE_TASKS
    ]

    for gate, pair in CONDITIONAL_TASKS:
        if mentions_any(keywords, gate):
            tasks.extend(_task(title, component) for title, component in pair)

    return tasks


def get_template_tasks(template: Template | str | None) -> list[ItemDraft]:
    """Get the fixed task set for a project template.

    Args:
        template: Template value; unknown values yield no tasks.

    Returns:
        Template task drafts.
    """
    entries = TEMPLATE_TASKS.get(resolve_template(template), ())
    return [_task(title, component) for title, component in entries]


def generate_tasks(goal: str, template: Template | str | None) -> list[ItemDraft]:
    """Goal-derived tasks followed by template tasks."""
    return [*generate_base_tasks(goal), *get_template_tasks(template)]


def assign_phase(component: Component) -> Phase:
    """Schedule a task into a delivery phase based on its component."""
    return COMPONENT_PHASES.get(component, Phase.DEVELOPMENT)
