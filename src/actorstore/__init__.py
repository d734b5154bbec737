"""
actorstore - Actor identity storage and lookup.

A library and CLI for storing actor records (registered users and anonymous,
IP-addressed editors) and resolving them through a fluent query builder.
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "actorstore"
__email__ = "noreply@actorstore.dev"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
