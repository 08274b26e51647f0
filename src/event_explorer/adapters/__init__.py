"""Adapters - I/O implementations of ports."""

from .http_backend import HttpEventBackend

__all__ = [
    "HttpEventBackend",
]
