"""Core utilities."""

from cubespace.core.event import Event

__all__ = ["Event"]
