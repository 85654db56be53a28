"""
Configuration management for PrintWatch.

Loads and validates settings from environment variables and an optional .env
file. Settings is the single source of truth for service configuration.
"""

from backend_printwatch.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
