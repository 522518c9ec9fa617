"""
Services Package - I/O around the core pipeline

Contains:
- corpus_writer: Per-language output files
"""
