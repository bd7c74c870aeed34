"""Bounded JSON store for recently generated specs.

Keeps at most ``max_specs`` specs in a single JSON file, most recent
first. Unreadable data is treated as an empty store.
"""

import json
from pathlib import Path
from typing import Optional

from .identity import UuidIdentitySource
from .models import Spec
from .protocols import IdentitySource


DEFAULT_MAX_SPECS = 5


class JsonSpecStore:
    """Stores specs in one JSON file (.specflow/specs.json by default).

    Every operation re-reads the file, so two store instances over the
    same path always agree.
    """

    def __init__(
        self,
        specs_file: Path | str,
        max_specs: int = DEFAULT_MAX_SPECS,
        identity: Optional[IdentitySource] = None,
    ):
        """Initialize the store.

        Args:
            specs_file: Path of the JSON file holding the specs
            max_specs: Maximum number of specs retained
            identity: Used to fill in a missing id or created_at on save
        """
        self.specs_file = Path(specs_file)
        self.max_specs = max_specs
        self.identity = identity or UuidIdentitySource()

    def _load(self) -> list[Spec]:
        """Load specs from disk."""
        if not self.specs_file.exists():
            return []

        try:
            data = json.loads(self.specs_file.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                return []
            return [Spec.model_validate(s) for s in data]
        except (json.JSONDecodeError, Exception) as e:
            print(f"[JsonSpecStore] Warning: Could not load specs: {e}")
            return []

    def _save(self, specs: list[Spec]) -> None:
        """Save specs to disk."""
        self.specs_file.parent.mkdir(parents=True, exist_ok=True)
        data = [s.model_dump(mode="json") for s in specs]
        self.specs_file.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def list_specs(self) -> list[Spec]:
        """Get all stored specs, most recent first."""
        return self._load()

    def get(self, spec_id: str) -> Optional[Spec]:
        """Get a spec by ID.

        Args:
            spec_id: Spec ID to find

        Returns:
            Spec if found, None otherwise
        """
        for spec in self._load():
            if spec.id == spec_id:
                return spec
        return None

    def save(self, spec: Spec) -> list[Spec]:
        """Prepend a spec and drop the oldest beyond the bound.

        Args:
            spec: Spec to store; a missing id or created_at is filled in

        Returns:
            The stored specs after the save
        """
        updates = {}
        if not spec.id:
            updates["id"] = self.identity.new_id()
        if spec.created_at is None:
            updates["created_at"] = self.identity.now()
        if updates:
            spec = spec.model_copy(update=updates)

        specs = [spec, *self._load()][:self.max_specs]
        self._save(specs)
        return specs

    def update(self, spec_id: str, **fields) -> list[Spec]:
        """Shallow-merge fields into an existing spec.

        Args:
            spec_id: Spec ID to update
            **fields: Top-level fields to replace

        Returns:
            The stored specs; unchanged if the ID is unknown
        """
        specs = self._load()
        for i, spec in enumerate(specs):
            if spec.id == spec_id:
                spec_dict = spec.model_dump()
                spec_dict.update(fields)
                specs[i] = Spec.model_validate(spec_dict)
                self._save(specs)
                break
        return specs

    def delete(self, spec_id: str) -> list[Spec]:
        """Remove a spec.

        Args:
            spec_id: Spec ID to remove

        Returns:
            The remaining specs
        """
        specs = [s for s in self._load() if s.id != spec_id]
        self._save(specs)
        return specs
