"""
Configuration Package
Provides centralized configuration for all services.
"""

from .settings import Settings, settings
from .sources_config import SourcesConfig

__all__ = [
    'Settings',
    'settings',
    'SourcesConfig',
]
