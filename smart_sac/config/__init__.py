"""
Configuration package for the Smart SAC backend.

Environment settings live in `smart_sac.config.settings`; logging is
configured from `smart_sac.core.logging`.
"""

from smart_sac.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
