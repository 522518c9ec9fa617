"""
File Scanner - recursive discovery of compressed input files

Walks the input root with os.scandir and keeps every regular file whose
suffix is the recognized input extension.

Features:
- Gitignore-style exclusion patterns (pathspec), matched relative to root
- Unreadable directories and broken entries are skipped, never fatal
- Directory symlinks are not followed
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence

import pathspec

from corpus.errors import InputRootError
from corpus.logging_config import log_debug


def _build_spec(excluded_patterns: Optional[Sequence[str]]) -> Optional[pathspec.PathSpec]:
    patterns = [p.strip() for p in excluded_patterns or () if p.strip()]
    patterns = [p for p in patterns if not p.startswith("#")]
    if not patterns:
        return None
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def discover(
    root: Path,
    extension: str = ".bz2",
    excluded_patterns: Optional[Sequence[str]] = None,
) -> List[Path]:
    """
    Find every input file under root.

    Args:
        root: Directory to walk
        extension: Recognized suffix, including the dot (e.g. ".bz2")
        excluded_patterns: Gitignore-style patterns to leave out

    Returns:
        Sorted list of matching file paths

    Raises:
        InputRootError: root does not exist or is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise InputRootError(f"Input root is not a directory: {root}")

    spec = _build_spec(excluded_patterns)
    found: List[Path] = []
    pending: List[Path] = [root]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries_iter:
                entries = list(entries_iter)
        except OSError as e:
            log_debug(f"[FileScanner] Skipping {current}: {e}")
            continue

        for entry in entries:
            entry_path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                # Follows symlinks so broken links are dropped here
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                log_debug(f"[FileScanner] Skipping {entry_path}: {e}")
                continue

            rel_path = entry_path.relative_to(root).as_posix()

            if is_dir:
                if spec is not None and spec.match_file(rel_path + "/"):
                    continue
                pending.append(entry_path)
            elif is_file and entry_path.suffix == extension:
                if spec is not None and spec.match_file(rel_path):
                    continue
                found.append(entry_path)

    found.sort()
    return found
