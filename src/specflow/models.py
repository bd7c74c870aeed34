"""Data models for SpecFlow.

Uses Pydantic for validation. Specs are stored as JSON, so every model
round-trips through ``model_dump_json`` / ``model_validate_json``.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ItemType(str, Enum):
    """Kind of backlog item."""
    STORY = "story"
    TASK = "task"


class Priority(str, Enum):
    """Priority bucket assigned from generation order."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Component(str, Enum):
    """Functional area a backlog item belongs to.

    Declaration order matters: component detection is tie-broken by it.
    """
    FRONTEND = "frontend"
    BACKEND = "backend"
    DESIGN = "design"
    TESTING = "testing"
    DEVOPS = "devops"


class Phase(str, Enum):
    """Delivery stage an item is scheduled into."""
    PLANNING = "planning"
    DEVELOPMENT = "development"
    TESTING = "testing"
    DEPLOYMENT = "deployment"


class RiskType(str, Enum):
    """Kind of risk callout."""
    ASSUMPTION = "Assumption"
    UNKNOWN = "Unknown"
    BLOCKER = "Blocker"


class Template(str, Enum):
    """Project archetype that injects a fixed task/risk set."""
    WEB = "web"
    MOBILE = "mobile"
    INTERNAL = "internal"
    CUSTOM = "custom"


class GroupBy(str, Enum):
    """Dimension used to group items for display and export."""
    TYPE = "type"
    PRIORITY = "priority"
    COMPONENT = "component"
    PHASE = "phase"


class ExportFormat(str, Enum):
    """Rendering used by the exporter."""
    MARKDOWN = "markdown"
    TEXT = "text"


class EventType(str, Enum):
    """Types of entries written to the event log."""
    SPEC_GENERATED = "spec_generated"
    SPEC_UPDATED = "spec_updated"
    SPEC_DELETED = "spec_deleted"


class BacklogItem(BaseModel):
    """A single user story or engineering task."""
    id: str = Field(..., description="Unique identifier, assigned once at creation")
    type: ItemType
    title: str
    description: str = Field(default="")
    priority: Priority = Field(default=Priority.MEDIUM)
    component: Component = Field(default=Component.FRONTEND)
    phase: Phase = Field(default=Phase.DEVELOPMENT)


class Risk(BaseModel):
    """A risk, assumption or blocker note. Not schedulable."""
    id: str
    type: RiskType
    text: str


class Spec(BaseModel):
    """The complete generation result for one input submission."""
    id: str = Field(default="", description="Assigned on generation or on save")
    created_at: Optional[datetime] = None
    template: Template = Field(default=Template.WEB)

    # Raw input echoes
    goal: str
    target_users: str
    constraints: str = ""

    feature_name: str = Field(default="", description="Display label derived from the goal")

    stories: list[BacklogItem] = Field(default_factory=list)
    tasks: list[BacklogItem] = Field(default_factory=list)
    risks: list[Risk] = Field(default_factory=list)

    def items(self) -> list[BacklogItem]:
        """Combined item sequence: stories followed by tasks."""
        return [*self.stories, *self.tasks]

    def find_item(self, item_id: str) -> Optional[BacklogItem]:
        """Get a story or task by ID."""
        for item in self.items():
            if item.id == item_id:
                return item
        return None

    def find_risk(self, risk_id: str) -> Optional[Risk]:
        """Get a risk by ID."""
        for risk in self.risks:
            if risk.id == risk_id:
                return risk
        return None

    def summary(self) -> str:
        """Short confirmation message shown after generation."""
        return f"Generated {len(self.stories)} stories and {len(self.tasks)} tasks"


class GenerationRequest(BaseModel):
    """Form input accepted by the service, CLI and API.

    Required fields must be non-blank; the generation engine itself never
    validates its input.
    """
    goal: str
    target_users: str
    constraints: str = ""
    template: Template = Field(default=Template.WEB)

    @field_validator("goal", "target_users")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class SpecflowConfig(BaseModel):
    """Workspace configuration, read from .specflow/config.json."""
    max_saved_specs: int = Field(
        default=5,
        ge=1,
        description="Number of recent specs kept in the store"
    )
    generation_delay_seconds: float = Field(
        default=0.8,
        ge=0.0,
        description="Pause shown by the CLI before generating"
    )
    default_template: Template = Field(default=Template.WEB)
    default_export_format: ExportFormat = Field(default=ExportFormat.MARKDOWN)
    default_group_by: GroupBy = Field(default=GroupBy.TYPE)
    event_log_enabled: bool = Field(
        default=True,
        description="Append store mutations to .specflow/logs/events.jsonl"
    )
