"""Configuration package.

Single source of truth: ``WorkerSettings`` via ``get_settings()``.
"""

from .runtime import WorkerSettings, get_settings, load_settings

__all__ = [
    "WorkerSettings",
    "get_settings",
    "load_settings",
]
