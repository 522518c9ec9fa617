"""
CompilerSettings - Typed settings dataclass for the corpus compiler.

Replaces loose Dict[str, Any] options with a dataclass carrying type hints,
validation and default values.

Modules:
- CompilerSettings: Dataclass holding every tunable of a compile run
- from_dict(): Build CompilerSettings from a dict (e.g. a JSON config file)
- to_dict(): Convert CompilerSettings back to a dict
- load_settings(): Read a JSON config file, falling back to defaults

Usage:
    settings = load_settings(Path("corpus.json"))
    compiler = CorpusCompiler.from_directory(root, settings)
"""

import json
import os
import typing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from corpus_config.paths import DEFAULT_OUTPUT_DIR

# === Defaults ===
DEFAULT_PRUNE_THRESHOLD = 100
DEFAULT_PROGRESS_INTERVAL = 100
DEFAULT_INPUT_EXTENSION = ".bz2"
DEFAULT_OUTPUT_PREFIX = "twitter_corpus_"


@dataclass
class CompilerSettings:
    """
    Typed settings for one compile run.

    Every field maps to a key of the JSON config file.
    Defaults are used when the config file does not set a key.
    """

    # --- Aggregation ---
    # Words with a global count strictly below this are pruned
    prune_threshold: int = DEFAULT_PRUNE_THRESHOLD
    # Worker pool size, None = host concurrency
    max_workers: Optional[int] = None
    # Log a progress line every N completed files
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    # --- Discovery ---
    # Recognized compressed-input extension
    input_extension: str = DEFAULT_INPUT_EXTENSION
    # Gitignore-style patterns excluded from discovery
    excluded_patterns: List[str] = field(default_factory=list)

    # --- Output ---
    output_dir: str = str(DEFAULT_OUTPUT_DIR)
    output_prefix: str = DEFAULT_OUTPUT_PREFIX

    def __post_init__(self) -> None:
        if self.prune_threshold < 0:
            self.prune_threshold = DEFAULT_PRUNE_THRESHOLD
        if self.progress_interval <= 0:
            self.progress_interval = DEFAULT_PROGRESS_INTERVAL
        if self.max_workers is not None and self.max_workers < 1:
            self.max_workers = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompilerSettings":
        """
        Build CompilerSettings from a dict, keeping only known field names.

        Values whose type does not match the field declaration are dropped
        and the default is used instead.

        Args:
            data: Settings dict (usually parsed from a JSON file)

        Returns:
            CompilerSettings with values from the dict, defaults elsewhere
        """
        field_types = typing.get_type_hints(cls)

        filtered: dict[str, Any] = {}
        for key, value in data.items():
            if key not in field_types:
                continue

            expected_type = field_types[key]

            # Optional[int] -> accept None or int
            args = typing.get_args(expected_type)
            if type(None) in args:
                if value is None:
                    filtered[key] = value
                    continue
                expected_type = next(a for a in args if a is not type(None))

            # Strict check: bool is an int subclass but not a valid int setting
            if expected_type is int and isinstance(value, bool):
                continue

            origin = typing.get_origin(expected_type)
            check_type = origin if origin is not None else expected_type

            if not isinstance(value, check_type):
                continue

            if check_type is list and not all(isinstance(v, str) for v in value):
                continue

            filtered[key] = value

        return cls(**filtered)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert CompilerSettings to a dict.

        Returns:
            Dict with every setting
        """
        return {
            "prune_threshold": self.prune_threshold,
            "max_workers": self.max_workers,
            "progress_interval": self.progress_interval,
            "input_extension": self.input_extension,
            "excluded_patterns": list(self.excluded_patterns),
            "output_dir": self.output_dir,
            "output_prefix": self.output_prefix,
        }

    def resolve_workers(self) -> int:
        """Worker pool size: the configured value or the host CPU count."""
        if self.max_workers is not None:
            return max(1, self.max_workers)
        return os.cpu_count() or 4


def load_settings(path: Optional[Path] = None) -> CompilerSettings:
    """
    Load settings from a JSON file.

    A missing file, unreadable file or invalid JSON yields the defaults.

    Args:
        path: JSON config file, or None for defaults

    Returns:
        CompilerSettings
    """
    if path is None or not path.exists():
        return CompilerSettings()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        from corpus.logging_config import log_warning

        log_warning(f"[Settings] Could not read {path}: {e}, using defaults")
        return CompilerSettings()

    if not isinstance(data, dict):
        return CompilerSettings()

    return CompilerSettings.from_dict(data)
