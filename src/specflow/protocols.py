"""Protocol definitions for dependency injection.

These protocols define the interfaces the generation engine and its
collaborators depend on, enabling:
- Deterministic tests via fake identity sources
- Alternative storage backends for specs
- A generation engine with no knowledge of persistence
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import Spec


@runtime_checkable
class IdentitySource(Protocol):
    """Protocol for identifier and timestamp generation.

    The assembler reads all ids and the creation time through this
    interface instead of ambient global state.
    """

    def new_id(self) -> str:
        """Return a fresh unique identifier."""
        ...

    def now(self) -> datetime:
        """Return the current timestamp."""
        ...


@runtime_checkable
class SpecRepository(Protocol):
    """Protocol for the bounded store of recent specs.

    Used by whatever orchestrates engine calls; the engine never sees it.
    """

    def list_specs(self) -> list[Spec]:
        """Return stored specs, most recent first."""
        ...

    def get(self, spec_id: str) -> Optional[Spec]:
        """Return the spec with the given ID, or None."""
        ...

    def save(self, spec: Spec) -> list[Spec]:
        """Prepend a spec, evicting the oldest beyond the bound."""
        ...

    def update(self, spec_id: str, **fields) -> list[Spec]:
        """Shallow-merge fields into the matching spec. No-op if absent."""
        ...

    def delete(self, spec_id: str) -> list[Spec]:
        """Remove the matching spec."""
        ...
