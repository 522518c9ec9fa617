"""
Error types raised by the corpus pipeline.

Only two failures ever reach a caller:
- DecodeError: one input file could not be opened, decompressed or decoded.
  The compiler catches it and skips the file.
- InputRootError: the input root cannot be enumerated at all.
"""


class CorpusError(Exception):
    """Base class for every error raised by the corpus package."""


class DecodeError(CorpusError):
    """An input file failed at the file level (I/O, decompression, UTF-8)."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class InputRootError(CorpusError):
    """The input root does not exist or is not a directory."""
