"""
Corpus Compiler - orchestrates a whole compile run.

Pipeline:
    discover -> (thread pool) process_file -> Aggregator.merge
             -> [all workers joined] -> Aggregator.prune -> LanguageMap

Each file is handled start to finish by one worker. A file that fails to
decode is logged and skipped; the run always produces a table from the
files that succeeded.

Thread safety:
- Global table: Aggregator (reader/writer lock), touched once per file
- Progress counter: ProgressTracker (its own Lock), never nested with the above
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from corpus.aggregator import Aggregator
from corpus.errors import DecodeError
from corpus.file_processor import process_file
from corpus.logging_config import log_info, log_warning
from corpus.record import LanguageMap
from corpus.utils.file_scanner import discover
from corpus_config.settings import CompilerSettings

# Type alias for the progress sink
ProgressCallback = Callable[[str], None]

# Worker threads show up under this name in the file log
WORKER_THREAD_PREFIX = "corpus-worker"


@dataclass
class CompileStats:
    """
    Summary of one compile run.

    Attributes:
        files_total: Files handed to the run
        files_processed: Files decoded and merged
        files_failed: Files skipped after a file-level error
        languages: Languages in the final table
        words_before_prune: Distinct (language, word) entries before pruning
        words_pruned: Entries removed by pruning
    """

    files_total: int = 0
    files_processed: int = 0
    files_failed: int = 0
    languages: int = 0
    words_before_prune: int = 0
    words_pruned: int = 0


class ProgressTracker:
    """
    Thread-safe completed-files counter.

    The critical section is one increment and read; reporting happens
    outside the lock.
    """

    def __init__(
        self,
        total: int,
        interval: int = 100,
        callback: Optional[ProgressCallback] = None,
    ):
        self._total = total
        self._interval = max(1, interval)
        self._callback = callback or log_info
        self._completed = 0
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def advance(self) -> int:
        """Record one finished file and report if it is due. Returns the new count."""
        with self._lock:
            self._completed += 1
            completed = self._completed

        if completed % self._interval == 0 or completed == self._total:
            self._callback(self.format(completed, self._total))
        return completed

    @staticmethod
    def format(completed: int, total: int) -> str:
        percentage = (completed / total) * 100 if total else 100.0
        return f"{completed}/{total} ({percentage:.2f}%)"


class CorpusCompiler:
    """
    Builds the per-language word-frequency table from a set of dump files.

    Usage:
        compiler = CorpusCompiler.from_directory(Path("dumps"))
        table = compiler.compile()
    """

    def __init__(
        self,
        files: Sequence[Path],
        settings: Optional[CompilerSettings] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.files: List[Path] = [Path(f) for f in files]
        self.settings = settings or CompilerSettings()
        self.stats = CompileStats(files_total=len(self.files))
        self._aggregator = Aggregator()
        self._progress_callback = progress_callback
        self._stats_lock = threading.Lock()
        self._compiled = False

    @classmethod
    def from_directory(
        cls,
        root: Path,
        settings: Optional[CompilerSettings] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> "CorpusCompiler":
        """
        Create a compiler for every input file under root.

        Raises:
            InputRootError: root cannot be enumerated
        """
        settings = settings or CompilerSettings()
        files = discover(
            Path(root),
            extension=settings.input_extension,
            excluded_patterns=settings.excluded_patterns,
        )
        log_info(f"[Compiler] Discovered {len(files)} input files under {root}")
        return cls(files, settings, progress_callback)

    def compile(self) -> LanguageMap:
        """
        Process every file, merge, then prune.

        Can only run once per instance; the returned table is owned by
        the caller.

        Returns:
            Pruned LanguageMap
        """
        if self._compiled:
            raise RuntimeError("CorpusCompiler.compile() can only run once")
        self._compiled = True

        tracker = ProgressTracker(
            len(self.files),
            interval=self.settings.progress_interval,
            callback=self._progress_callback,
        )

        if self.files:
            num_workers = min(self.settings.resolve_workers(), len(self.files))
            with ThreadPoolExecutor(
                max_workers=num_workers, thread_name_prefix=WORKER_THREAD_PREFIX
            ) as executor:
                futures = {
                    executor.submit(self._process_one, path, tracker): path
                    for path in self.files
                }
                # Barrier: every worker finished and merged before pruning
                for future in as_completed(futures):
                    future.result()

        self.stats.words_before_prune = self._aggregator.word_count()
        self.stats.words_pruned = self._aggregator.prune(self.settings.prune_threshold)

        table = self._aggregator.into_table()
        self.stats.languages = len(table)
        self._log_summary()
        return table

    def _process_one(self, path: Path, tracker: ProgressTracker) -> None:
        """Worker: decode one file and merge its local table."""
        try:
            local_map = process_file(path)
        except (DecodeError, OSError) as e:
            log_warning(f"[Compiler] Skipping {path}: {e}")
            with self._stats_lock:
                self.stats.files_failed += 1
        else:
            self._aggregator.merge(local_map)
            with self._stats_lock:
                self.stats.files_processed += 1
        finally:
            tracker.advance()

    def _log_summary(self) -> None:
        s = self.stats
        log_info(
            f"[Compiler] Done: {s.files_processed}/{s.files_total} files "
            f"({s.files_failed} skipped), {s.languages} languages, "
            f"{s.words_before_prune - s.words_pruned} words kept, "
            f"{s.words_pruned} pruned"
        )


def compile_directory(
    root: Path, settings: Optional[CompilerSettings] = None
) -> LanguageMap:
    """Discover, compile and return the pruned table for root."""
    return CorpusCompiler.from_directory(root, settings).compile()
