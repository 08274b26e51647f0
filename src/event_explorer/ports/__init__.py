"""Ports - interfaces/protocols for external dependencies."""

from .event_backend import EventBackend

__all__ = [
    "EventBackend",
]
