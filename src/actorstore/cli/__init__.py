"""
CLI interface module for actorstore.

Provides Typer-based command-line interface for browsing and registering
actor identities.
"""

from __future__ import annotations

__all__: list[str] = []
