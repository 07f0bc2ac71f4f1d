"""Elbert: in-memory fuzzy search over launcher applications and plugin commands."""

__version__ = "0.1.0"
