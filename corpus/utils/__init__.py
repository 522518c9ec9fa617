"""
Package corpus.utils - Helpers shared by the pipeline.

Modules:
- rwlock: Reader/writer lock guarding the global table
- file_scanner: Recursive discovery of compressed input files
"""
