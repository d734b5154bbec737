"""Utility modules for actorstore."""

from actorstore.utils.user_names import is_ip_address, normalize_user_name, sanitize_ip

__all__ = ["is_ip_address", "normalize_user_name", "sanitize_ip"]
