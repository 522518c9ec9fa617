"""
File Processor - decode one compressed dump file and count its words.

Functions:
- read_file(): Decompress a whole file and decode its records
- decode_records(): Turn decompressed text into Records, skipping bad lines
- aggregate_file(): Build the per-file (local) LanguageMap
- process_file(): read_file() + aggregate_file()

The whole decompressed file is buffered before parsing. Malformed lines are
skipped; only file-level failures raise DecodeError.
"""

import bz2
from collections import Counter, defaultdict
from pathlib import Path
from typing import Iterable, List

from corpus.classifier import clean, qualifies, tokenize
from corpus.errors import DecodeError
from corpus.logging_config import log_debug
from corpus.record import LanguageMap, Record


def decode_records(content: str) -> List[Record]:
    """
    Decode newline-delimited JSON into Records.

    Lines are split on "\\n" only; a trailing "\\r" is dropped. Lines that
    do not decode into a Record are skipped.

    Args:
        content: Decompressed file content

    Returns:
        Records in file order
    """
    records: List[Record] = []
    skipped = 0

    for line in content.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            continue

        record = Record.from_line(line)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        log_debug(f"[FileProcessor] Skipped {skipped} malformed lines")

    return records


def read_file(path: Path) -> List[Record]:
    """
    Decompress a bz2 file into memory and decode its records.

    Args:
        path: Compressed input file

    Returns:
        Decoded records

    Raises:
        DecodeError: open, decompression or UTF-8 decoding failed
    """
    try:
        with bz2.open(path, "rb") as f:
            raw = f.read()
    except (OSError, EOFError, ValueError) as e:
        raise DecodeError(path, f"cannot decompress: {e}") from e

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(path, f"invalid UTF-8: {e}") from e

    return decode_records(content)


def aggregate_file(records: Iterable[Record]) -> LanguageMap:
    """
    Count qualifying words per language for one file.

    Each token is cleaned first, then qualified; the cleaned form is what
    gets counted. The result is local to the file and is merged into the
    global table once, by the caller.

    Args:
        records: Records of one file

    Returns:
        Local LanguageMap (language -> word -> count)
    """
    local_map: defaultdict = defaultdict(Counter)

    for record in records:
        language_entry = local_map[record.language]
        for token in tokenize(record.text):
            word = clean(token)
            if qualifies(word):
                language_entry[word] += 1

    return dict(local_map)


def process_file(path: Path) -> LanguageMap:
    """Decode one file and return its local LanguageMap. Raises DecodeError."""
    return aggregate_file(read_file(path))
