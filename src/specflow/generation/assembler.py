"""Spec assembly: runs the generators and assigns derived fields.

The assembler is a pure function of its input plus the injected
identity source. It never touches storage.
"""

from typing import Optional

from ..identity import UuidIdentitySource
from ..models import (
    BacklogItem,
    Component,
    ItemType,
    Phase,
    Priority,
    Risk,
    Spec,
    Template,
)
from ..protocols import IdentitySource
from .drafts import ItemDraft, RiskDraft
from .risks import generate_risks
from .stories import generate_stories
from .tasks import assign_phase, generate_tasks
from .taxonomy import resolve_template


FEATURE_NAME_LIMIT = 60

# Position thresholds as a fraction of the collection size
HIGH_PRIORITY_CUTOFF = 0.3
MEDIUM_PRIORITY_CUTOFF = 0.7


def assign_priority(index: int, total: int) -> Priority:
    """Priority of the item at ``index`` in a collection of ``total`` items."""
    if index < total * HIGH_PRIORITY_CUTOFF:
        return Priority.HIGH
    if index < total * MEDIUM_PRIORITY_CUTOFF:
        return Priority.MEDIUM
    return Priority.LOW


def feature_name(goal: str) -> str:
    """Display label for a goal, truncated to 60 characters plus an ellipsis."""
    if len(goal) > FEATURE_NAME_LIMIT:
        return goal[:FEATURE_NAME_LIMIT] + "..."
    return goal


class SpecAssembler:
    """Builds a complete Spec from one set of form inputs."""

    def __init__(self, identity: Optional[IdentitySource] = None):
        """Initialize the assembler.

        Args:
            identity: Source of ids and timestamps (default: UUID4 + clock).
        """
        self.identity = identity or UuidIdentitySource()

    def assemble(
        self,
        goal: str,
        target_users: str,
        constraints: str = "",
        template: Template | str | None = Template.WEB,
    ) -> Spec:
        """Generate stories, tasks and risks and assemble them into a Spec.

        Args:
            goal: Feature goal (non-empty; validated by the caller).
            target_users: Who the feature is for (non-empty).
            constraints: Optional constraints text.
            template: Project template; unknown values behave as custom.

        Returns:
            A freshly allocated Spec.
        """
        constraints = constraints or ""
        story_drafts = generate_stories(goal, target_users, constraints)
        task_drafts = generate_tasks(goal, template)
        risk_drafts = generate_risks(goal, constraints, template)

        stories = [
            self._story(draft, assign_priority(i, len(story_drafts)))
            for i, draft in enumerate(story_drafts)
        ]
        tasks = [
            self._task(draft, assign_priority(i, len(task_drafts)))
            for i, draft in enumerate(task_drafts)
        ]
        risks = [self._risk(draft) for draft in risk_drafts]

        return Spec(
            id=self.identity.new_id(),
            created_at=self.identity.now(),
            template=resolve_template(template),
            goal=goal,
            target_users=target_users,
            constraints=constraints,
            feature_name=feature_name(goal),
            stories=stories,
            tasks=tasks,
            risks=risks,
        )

    def _story(self, draft: ItemDraft, priority: Priority) -> BacklogItem:
        # Stories are pinned to design/planning regardless of subject matter
        return BacklogItem(
            id=self.identity.new_id(),
            type=ItemType.STORY,
            title=draft.title,
            description="",
            priority=priority,
            component=Component.DESIGN,
            phase=Phase.PLANNING,
        )

    def _task(self, draft: ItemDraft, priority: Priority) -> BacklogItem:
        component = draft.component or Component.FRONTEND
        return BacklogItem(
            id=self.identity.new_id(),
            type=ItemType.TASK,
            title=draft.title,
            description="",
            priority=priority,
            component=component,
            phase=assign_phase(component),
        )

    def _risk(self, draft: RiskDraft) -> Risk:
        return Risk(id=self.identity.new_id(), type=draft.type, text=draft.text)


def generate_spec(
    goal: str,
    target_users: str,
    constraints: str = "",
    template: Template | str | None = Template.WEB,
    identity: Optional[IdentitySource] = None,
) -> Spec:
    """Generate a Spec from raw form input.

    Convenience wrapper around ``SpecAssembler(identity).assemble(...)``.
    """
    return SpecAssembler(identity).assemble(goal, target_users, constraints, template)
