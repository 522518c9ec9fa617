"""
Application Paths - Centralized path definitions for tweet-corpus

All paths used by the compiler live here so nothing is hardcoded elsewhere.

App data is stored under: ~/.tweet-corpus/
- logs/      : Log files
"""

import os
from pathlib import Path


# =============================================================================
# Application name - single source of truth for naming
# =============================================================================
APP_NAME = "tweet-corpus"

# =============================================================================
# Application root directory
# =============================================================================
APP_DIR = Path.home() / f".{APP_NAME}"

# =============================================================================
# Sub directories
# =============================================================================
LOG_DIR = APP_DIR / "logs"

# Output directory for the per-language word lists (relative to cwd)
DEFAULT_OUTPUT_DIR = Path("output")

# =============================================================================
# Environment Variables
# =============================================================================
DEBUG_ENV_VAR = "TWEET_CORPUS_DEBUG"

DEBUG_MODE = os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes")

