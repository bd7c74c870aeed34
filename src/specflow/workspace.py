"""Workspace management for the .specflow/ directory structure.

Handles creation of the workspace and loading of its configuration.
"""

import json
from pathlib import Path

from .models import SpecflowConfig


class SpecflowWorkspace:
    """Manages the .specflow/ workspace directory.

    Directory structure:
        .specflow/
        ├── specs.json          # Recent specs, most recent first
        ├── config.json         # Optional configuration overrides
        └── logs/
            └── events.jsonl    # Store mutation events
    """

    DIRNAME = ".specflow"

    def __init__(self, project_path: Path | str):
        """Initialize workspace manager.

        Args:
            project_path: Path to the project directory
        """
        self.project_path = Path(project_path).resolve()
        self.root_dir = self.project_path / self.DIRNAME
        self.logs_dir = self.root_dir / "logs"

        # File paths
        self.specs_file = self.root_dir / "specs.json"
        self.config_file = self.root_dir / "config.json"
        self.events_file = self.logs_dir / "events.jsonl"

    def ensure_structure(self) -> None:
        """Create the .specflow/ directory structure if it doesn't exist."""
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)

    # =========================================================================
    # Configuration
    # =========================================================================

    def load_config(self) -> SpecflowConfig:
        """Load configuration from config.json.

        Returns:
            SpecflowConfig (defaults if the file is missing or unreadable)
        """
        if not self.config_file.exists():
            return SpecflowConfig()

        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
            return SpecflowConfig.model_validate(data)
        except (json.JSONDecodeError, Exception) as e:
            print(f"[SpecflowWorkspace] Warning: Could not load config.json: {e}")
            return SpecflowConfig()

    def save_config(self, config: SpecflowConfig) -> None:
        """Save configuration to config.json.

        Args:
            config: Configuration to save
        """
        self.ensure_structure()
        self.config_file.write_text(
            config.model_dump_json(indent=2),
            encoding="utf-8"
        )
