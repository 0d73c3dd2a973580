from __future__ import annotations

"""Subpackage aggregating the ``/users/me`` route modules."""

__all__ = ["profile", "password", "phone", "disable"]
