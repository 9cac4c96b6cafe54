"""Declared-state types for RepoFlow workspaces."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class WorkspaceDesired:
    """Caller-declared workspace."""

    name: str


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class WorkspaceState:
    """Tracked workspace; ``id`` is assigned by RepoFlow."""

    id: str
    name: str

    @property
    def desired(self) -> WorkspaceDesired:
        """Return the declared record matching this state."""
        return WorkspaceDesired(name=self.name)
