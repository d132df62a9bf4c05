"""Utility functions and helpers."""

from .logging import setup_observability

__all__ = ["setup_observability"]
