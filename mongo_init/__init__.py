"""Initialization hook that grants administrative roles to the MongoDB root user."""

__version__ = "0.1.0"
