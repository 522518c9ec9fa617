"""
Config Package - Constants and configuration of the corpus compiler

Contains:
- paths: Application directories and environment variables
- settings: Typed CompilerSettings and the JSON loader
"""

from corpus_config.settings import (
    CompilerSettings,
    DEFAULT_PRUNE_THRESHOLD,
    DEFAULT_PROGRESS_INTERVAL,
    load_settings,
)

__all__ = [
    "CompilerSettings",
    "DEFAULT_PRUNE_THRESHOLD",
    "DEFAULT_PROGRESS_INTERVAL",
    "load_settings",
]
