"""Utility functions for async tar streaming."""

from .inspect import describe_header

__all__ = ["describe_header"]
