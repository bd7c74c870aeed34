"""JSONL event log for spec store mutations.

Each line is a complete JSON object with a timestamp and a type:
    {"type": "spec_generated", "timestamp": "...", "spec_id": "...", ...}
    {"type": "spec_updated", "timestamp": "...", "spec_id": "...", "action": "reorder"}
    {"type": "spec_deleted", "timestamp": "...", "spec_id": "..."}

Entries are flushed immediately so the log can be tailed.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .models import EventType, Spec
from .workspace import SpecflowWorkspace


class EventLogger:
    """Appends store events to .specflow/logs/events.jsonl."""

    def __init__(self, workspace: SpecflowWorkspace):
        """Initialize the event logger.

        Args:
            workspace: Workspace whose logs directory receives the events
        """
        self.workspace = workspace
        self.log_file = workspace.events_file

    def _write_entry(self, entry: dict) -> None:
        """Append one entry with immediate flush.

        Args:
            entry: Dict to write as JSON line
        """
        if "timestamp" not in entry:
            entry["timestamp"] = datetime.now().isoformat()

        self.workspace.ensure_structure()
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError:
                pass  # Some filesystems don't support fsync

    def log_generated(self, spec: Spec) -> None:
        """Log creation of a new spec."""
        self._write_entry({
            "type": EventType.SPEC_GENERATED.value,
            "spec_id": spec.id,
            "feature_name": spec.feature_name,
            "template": spec.template.value,
            "stories": len(spec.stories),
            "tasks": len(spec.tasks),
            "risks": len(spec.risks),
        })

    def log_updated(self, spec_id: str, action: str, target_id: Optional[str] = None) -> None:
        """Log an edit applied to a stored spec.

        Args:
            spec_id: Spec that changed
            action: Kind of edit (update_item, delete_item, reorder, update_risk)
            target_id: Item or risk the edit applied to
        """
        entry: dict[str, Any] = {
            "type": EventType.SPEC_UPDATED.value,
            "spec_id": spec_id,
            "action": action,
        }
        if target_id:
            entry["target_id"] = target_id
        self._write_entry(entry)

    def log_deleted(self, spec_id: str) -> None:
        """Log removal of a spec."""
        self._write_entry({
            "type": EventType.SPEC_DELETED.value,
            "spec_id": spec_id,
        })


def read_event_log(log_path: Path) -> list[dict]:
    """Read all entries from an event log file.

    Args:
        log_path: Path to the JSONL log file

    Returns:
        List of log entry dicts (malformed lines are skipped)
    """
    entries = []
    if not log_path.exists():
        return entries

    with open(log_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    continue

    return entries
