"""Shared helpers."""

from setsugar.utils.location import Location

__all__ = ["Location"]
