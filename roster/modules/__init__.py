"""Feature modules for Roster: shared building blocks and the character module."""
