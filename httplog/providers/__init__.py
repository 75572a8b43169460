"""Standalone computation helpers that sit outside the HTTP pipeline."""

from httplog.providers.summation import compute

__all__ = ["compute"]
