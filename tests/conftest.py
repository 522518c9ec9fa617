"""
Shared fixtures: helpers writing bz2-compressed JSON-lines dump files.
"""

import bz2
import json
from pathlib import Path

import pytest


def write_dump(path: Path, posts, extra_lines=()) -> Path:
    """Write posts (dicts) as a bz2 JSON-lines file, plus raw extra lines."""
    lines = [json.dumps(p, ensure_ascii=False) for p in posts]
    lines.extend(extra_lines)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(bz2.compress("\n".join(lines).encode("utf-8")))
    return path


@pytest.fixture
def make_dump(tmp_path):
    """Factory: make_dump("a/b.bz2", [{"lang": "en", "text": "..."}])."""

    def _make(relative: str, posts, extra_lines=()):
        return write_dump(tmp_path / relative, posts, extra_lines)

    return _make
