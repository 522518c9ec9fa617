"""
Unit tests for corpus/aggregator.py.

Coverage:
- merge(): additive fold, commutativity over random merge orders
- prune(): threshold semantics, per language, no merge afterwards
- Thread safety: concurrent merges from a ThreadPoolExecutor
"""

import itertools
import random
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed

import pytest

from corpus.aggregator import Aggregator


def random_table(rng: random.Random):
    languages = ["en", "es", "ja", "und"]
    words = [f"w{i}" for i in range(30)]
    table = {}
    for language in rng.sample(languages, rng.randint(1, len(languages))):
        table[language] = {w: rng.randint(1, 50) for w in rng.sample(words, rng.randint(0, 15))}
    return table


def expected_sum(tables):
    totals = {}
    for table in tables:
        for language, word_map in table.items():
            totals.setdefault(language, Counter()).update(word_map)
    return {language: dict(words) for language, words in totals.items()}


class TestMerge:
    """Test accumulation into the global table."""

    def test_merge_into_empty(self):
        aggregator = Aggregator()
        aggregator.merge({"en": {"hello": 2, "world": 1}})
        assert aggregator.into_table() == {"en": {"hello": 2, "world": 1}}

    def test_merge_is_additive(self):
        """Merging the same table twice doubles every count."""
        local = {"en": {"hello": 2, "world": 1}, "fr": {"bonjour": 5}}
        aggregator = Aggregator()
        aggregator.merge(local)
        aggregator.merge(local)
        assert aggregator.into_table() == {
            "en": {"hello": 4, "world": 2},
            "fr": {"bonjour": 10},
        }

    def test_merge_does_not_alias_local(self):
        local = {"en": {"a1": 1}}
        aggregator = Aggregator()
        aggregator.merge(local)
        local["en"]["a1"] = 100
        assert aggregator.into_table() == {"en": {"a1": 1}}

    def test_new_language_and_word(self):
        aggregator = Aggregator({"en": {"hello": 1}})
        aggregator.merge({"en": {"new": 1}, "de": {"hallo": 3}})
        assert aggregator.into_table() == {"en": {"hello": 1, "new": 1}, "de": {"hallo": 3}}

    @pytest.mark.parametrize("seed", range(5))
    def test_order_independent(self, seed):
        """Every merge order gives the same totals."""
        rng = random.Random(seed)
        tables = [random_table(rng) for _ in range(4)]
        expected = expected_sum(tables)

        for order in itertools.permutations(tables):
            aggregator = Aggregator()
            for table in order:
                aggregator.merge(table)
            assert aggregator.into_table() == expected

    def test_concurrent_merges(self):
        """Concurrent merges lose no update."""
        rng = random.Random(42)
        tables = [random_table(rng) for _ in range(200)]
        aggregator = Aggregator()

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(aggregator.merge, t) for t in tables]
            for future in as_completed(futures):
                future.result()

        assert aggregator.into_table() == expected_sum(tables)


class TestPrune:
    """Test removal of rare words."""

    def test_prune_threshold(self):
        aggregator = Aggregator({"en": {"hello": 3, "world": 1, "edge": 2}})
        removed = aggregator.prune(2)
        assert removed == 1
        assert aggregator.into_table() == {"en": {"hello": 3, "edge": 2}}

    def test_prune_per_language(self):
        aggregator = Aggregator({"en": {"x1": 5}, "fr": {"x1": 1}})
        aggregator.prune(2)
        assert aggregator.into_table() == {"en": {"x1": 5}, "fr": {}}

    def test_threshold_one_keeps_everything(self):
        table = {"en": {"a1": 1, "b1": 7}}
        aggregator = Aggregator(table)
        assert aggregator.prune(1) == 0
        assert aggregator.into_table() == table

    def test_merge_after_prune_rejected(self):
        """A pruned table rejects late merges and keeps its contents."""
        aggregator = Aggregator({"en": {"hello": 3}})
        aggregator.prune(2)
        with pytest.raises(RuntimeError, match="pruned"):
            aggregator.merge({"en": {"late": 1}})
        assert aggregator.into_table() == {"en": {"hello": 3}}

    @pytest.mark.parametrize("seed", range(3))
    def test_monotonic(self, seed):
        """Survivors are >= k, every removed word was < k."""
        rng = random.Random(seed)
        before = expected_sum([random_table(rng) for _ in range(6)])
        k = rng.randint(2, 60)

        aggregator = Aggregator(before)
        aggregator.prune(k)
        after = aggregator.into_table()

        for language, word_map in before.items():
            for word, count in word_map.items():
                if word in after[language]:
                    assert after[language][word] == count >= k
                else:
                    assert count < k


class TestHandoff:
    """Test into_table()."""

    def test_into_table_empties_aggregator(self):
        aggregator = Aggregator({"en": {"hello": 1}})
        table = aggregator.into_table()
        assert table == {"en": {"hello": 1}}
        assert aggregator.into_table() == {}
        assert aggregator.word_count() == 0
