"""Bounded-membership groups kept consistent with MongoDB transactions."""

__version__ = "1.0.0"
