"""
Domain layer for Roster.

Rich domain models (``roster.domain.models``) and the presentation registry for
domain exceptions (``roster.domain.exceptions``).
"""
