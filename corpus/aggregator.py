"""
Aggregator - owner of the global frequency table.

Workers hand over one local table per file. merge() folds it into the
global table under the write lock; prune() removes rare words once every
merge has landed. A pruned table accepts no further merges.

Thread-safe: every mutation happens under the ReadWriteLock, every merge
is atomic with respect to the others.
"""

from collections import Counter
from typing import Dict, Optional

from corpus.logging_config import log_debug
from corpus.record import LanguageMap
from corpus.utils.rwlock import ReadWriteLock


class Aggregator:
    """
    Global LanguageMap behind a reader/writer lock.

    Merging is a pure additive fold, so the final counts do not depend on
    the order in which workers finish.
    """

    def __init__(self, table: Optional[LanguageMap] = None):
        self._table: Dict[str, Counter] = {}
        self._lock = ReadWriteLock()
        self._pruned = False
        if table:
            self.merge(table)

    def merge(self, local: LanguageMap) -> None:
        """
        Add every (language, word, count) of a local table to the global table.

        Args:
            local: Per-file LanguageMap, not used by the caller afterwards

        Raises:
            RuntimeError: If the table was already pruned
        """
        with self._lock.write_locked():
            if self._pruned:
                raise RuntimeError("Cannot merge into a pruned table")
            for language, word_map in local.items():
                language_entry = self._table.get(language)
                if language_entry is None:
                    language_entry = self._table[language] = Counter()
                language_entry.update(word_map)

    def prune(self, threshold: int) -> int:
        """
        Remove every word whose global count is below threshold.

        Runs once, after all merges. Languages left without words are kept
        as empty maps.

        Args:
            threshold: Minimum count a word needs to survive

        Returns:
            Number of (language, word) entries removed
        """
        removed = 0
        with self._lock.write_locked():
            for language, word_map in self._table.items():
                infrequent = [word for word, count in word_map.items() if count < threshold]
                for word in infrequent:
                    del word_map[word]
                removed += len(infrequent)
                log_debug(
                    f"[Aggregator] {language}: pruned {len(infrequent)}, kept {len(word_map)}"
                )
            self._pruned = True
        return removed

    def word_count(self) -> int:
        """Total number of distinct (language, word) entries."""
        with self._lock.read_locked():
            return sum(len(word_map) for word_map in self._table.values())

    def into_table(self) -> LanguageMap:
        """
        Hand the global table over to the caller.

        The aggregator is empty afterwards; the returned maps are not copied.
        """
        with self._lock.write_locked():
            table, self._table = self._table, {}
        return table
