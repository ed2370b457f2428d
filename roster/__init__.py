"""Roster: character domain model, specification queries, and repositories."""

__version__ = "1.0.0"
