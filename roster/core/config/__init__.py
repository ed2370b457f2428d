"""
Roster configuration.

Exports the static, environment-driven configuration class.
"""

from roster.core.config.config import Config, Environment

__all__ = ["Config", "Environment"]
