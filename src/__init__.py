# src/__init__.py — v1
"""First Contact tiered AI-response router."""

from firstcontact.version import __version__

__all__ = ["__version__"]
