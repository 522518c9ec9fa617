"""
Corpus Writer - serialize the finished table, one file per language.

Each file holds `word count` lines sorted by descending count; ties are
ordered by word so repeated runs write identical files.
"""

from pathlib import Path
from typing import List, Tuple

from corpus.logging_config import log_info
from corpus.record import LanguageMap, WordMap
from corpus_config.settings import DEFAULT_OUTPUT_PREFIX


def sorted_entries(word_map: WordMap) -> List[Tuple[str, int]]:
    """Words of one language, most frequent first."""
    return sorted(word_map.items(), key=lambda item: (-item[1], item[0]))


def output_path(output_dir: Path, language: str, prefix: str = DEFAULT_OUTPUT_PREFIX) -> Path:
    return Path(output_dir) / f"{prefix}{language}.txt"


def write_language_map(
    table: LanguageMap,
    output_dir: Path,
    prefix: str = DEFAULT_OUTPUT_PREFIX,
) -> List[Path]:
    """
    Write every language of the table to its own file.

    Existing files are truncated. The output directory is created if needed.

    Args:
        table: Finished LanguageMap
        output_dir: Destination directory
        prefix: File name prefix, the language tag and ".txt" follow

    Returns:
        Paths written, in language order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for language in sorted(table):
        path = output_path(output_dir, language, prefix)
        with open(path, "w", encoding="utf-8", newline="\n") as fout:
            for word, count in sorted_entries(table[language]):
                fout.write(f"{word} {count}\n")
        written.append(path)

    log_info(f"[CorpusWriter] Wrote {len(written)} language files to {output_dir}")
    return written
