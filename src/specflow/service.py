"""Orchestration of generation, storage and editing.

The service is the only place where the generation engine meets the
spec repository. Edits are applied as whole-spec replacement: load,
transform with ``editing``, write back the changed partitions.
"""

from pathlib import Path
from typing import Optional

from . import editing
from .event_log import EventLogger
from .export import export_spec
from .generation import SpecAssembler
from .identity import UuidIdentitySource
from .models import (
    ExportFormat,
    GenerationRequest,
    GroupBy,
    Spec,
    SpecflowConfig,
)
from .protocols import IdentitySource, SpecRepository
from .storage import JsonSpecStore
from .workspace import SpecflowWorkspace


class SpecService:
    """Generates specs and applies user edits to stored specs."""

    def __init__(
        self,
        repository: SpecRepository,
        identity: Optional[IdentitySource] = None,
        event_logger: Optional[EventLogger] = None,
    ):
        """Initialize the service.

        Args:
            repository: Store for recent specs
            identity: Source of ids and timestamps for new specs
            event_logger: Optional event log for store mutations
        """
        self.repository = repository
        self.identity = identity or UuidIdentitySource()
        self.event_logger = event_logger
        self.assembler = SpecAssembler(self.identity)

    @classmethod
    def for_project(
        cls,
        project_path: Path | str,
        config: Optional[SpecflowConfig] = None,
        identity: Optional[IdentitySource] = None,
    ) -> "SpecService":
        """Build a service backed by a project's .specflow/ workspace.

        Args:
            project_path: Project directory
            config: Configuration (default: loaded from the workspace)
            identity: Source of ids and timestamps

        Returns:
            Configured SpecService
        """
        workspace = SpecflowWorkspace(project_path)
        config = config or workspace.load_config()
        identity = identity or UuidIdentitySource()
        repository = JsonSpecStore(
            workspace.specs_file,
            max_specs=config.max_saved_specs,
            identity=identity,
        )
        event_logger = EventLogger(workspace) if config.event_log_enabled else None
        return cls(repository, identity=identity, event_logger=event_logger)

    # =========================================================================
    # Generation and lookup
    # =========================================================================

    def preview(self, request: GenerationRequest) -> Spec:
        """Generate a spec without storing it."""
        return self.assembler.assemble(
            request.goal,
            request.target_users,
            request.constraints,
            request.template,
        )

    def generate(self, request: GenerationRequest) -> Spec:
        """Generate a spec and store it as the most recent one.

        Args:
            request: Validated form input

        Returns:
            The generated Spec
        """
        spec = self.preview(request)
        self.repository.save(spec)
        if self.event_logger:
            self.event_logger.log_generated(spec)
        return spec

    def list_specs(self) -> list[Spec]:
        """Get stored specs, most recent first."""
        return self.repository.list_specs()

    def get_spec(self, spec_id: str) -> Optional[Spec]:
        """Get a stored spec by exact ID."""
        return self.repository.get(spec_id)

    def resolve(self, spec_id: str) -> Optional[Spec]:
        """Get a stored spec by ID or unique ID prefix.

        Args:
            spec_id: Full ID or a prefix matching exactly one spec

        Returns:
            Spec if found and unambiguous, None otherwise
        """
        if not spec_id:
            return None
        exact = self.repository.get(spec_id)
        if exact:
            return exact
        matches = [s for s in self.repository.list_specs() if s.id.startswith(spec_id)]
        return matches[0] if len(matches) == 1 else None

    def delete_spec(self, spec_id: str) -> bool:
        """Delete a stored spec.

        Returns:
            True if a spec was removed
        """
        if self.repository.get(spec_id) is None:
            return False
        self.repository.delete(spec_id)
        if self.event_logger:
            self.event_logger.log_deleted(spec_id)
        return True

    # =========================================================================
    # Edits
    # =========================================================================

    def _replace(self, original: Spec, updated: Spec, action: str, target_id: str) -> Spec:
        """Write back an edited spec if anything changed."""
        if updated is original:
            return original
        self.repository.update(
            original.id,
            stories=updated.stories,
            tasks=updated.tasks,
            risks=updated.risks,
        )
        if self.event_logger:
            self.event_logger.log_updated(original.id, action, target_id)
        return updated

    def update_item(self, spec_id: str, item_id: str, **changes) -> Optional[Spec]:
        """Edit a story or task in a stored spec.

        Returns:
            The updated Spec, or None if the spec is unknown
        """
        spec = self.repository.get(spec_id)
        if spec is None:
            return None
        updated = editing.update_item(spec, item_id, **changes)
        return self._replace(spec, updated, "update_item", item_id)

    def delete_item(self, spec_id: str, item_id: str) -> Optional[Spec]:
        """Remove a story or task from a stored spec."""
        spec = self.repository.get(spec_id)
        if spec is None:
            return None
        updated = editing.delete_item(spec, item_id)
        return self._replace(spec, updated, "delete_item", item_id)

    def move_item(self, spec_id: str, source_id: str, target_id: str) -> Optional[Spec]:
        """Move a story or task to another item's position."""
        spec = self.repository.get(spec_id)
        if spec is None:
            return None
        updated = editing.reorder_items(spec, source_id, target_id)
        return self._replace(spec, updated, "reorder", source_id)

    def update_risk(self, spec_id: str, risk_id: str, text: str) -> Optional[Spec]:
        """Replace the text of a risk in a stored spec."""
        spec = self.repository.get(spec_id)
        if spec is None:
            return None
        updated = editing.update_risk(spec, risk_id, text)
        return self._replace(spec, updated, "update_risk", risk_id)

    # =========================================================================
    # Export
    # =========================================================================

    def export(
        self,
        spec_id: str,
        fmt: ExportFormat | str = ExportFormat.MARKDOWN,
        group_by: GroupBy | str = GroupBy.TYPE,
    ) -> Optional[str]:
        """Render a stored spec as markdown or plain text."""
        spec = self.repository.get(spec_id)
        if spec is None:
            return None
        return export_spec(spec, fmt, group_by)
