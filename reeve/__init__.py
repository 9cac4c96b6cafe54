"""Declarative lifecycle management for RepoFlow workspaces and repositories."""

from __future__ import annotations

__version__ = "0.1.0"
