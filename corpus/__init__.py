"""
Package corpus - Per-language word-frequency corpus from post dumps.

Modules:
- record: Record model, WordMap / LanguageMap aliases
- classifier: Token cleanup and noise rules
- file_processor: Decode one file, build its local table
- aggregator: Global table, merge and prune
- compiler: Parallel orchestration
"""
