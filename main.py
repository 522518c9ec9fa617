"""
tweet-corpus - Command line entry point

Compiles a per-language word-frequency corpus from a directory of
bz2-compressed JSON-lines post dumps and writes one word list per language.

Usage:
    python main.py dumps/ --threshold 100 --workers 8 --output-dir output
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from corpus.compiler import CorpusCompiler
from corpus.errors import InputRootError
from corpus.logging_config import configure_logging, flush_logs, log_error, log_info
from corpus_config import paths
from corpus_config.settings import CompilerSettings, load_settings
from corpus_services.corpus_writer import write_language_map


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tweet-corpus",
        description="Build per-language word frequency lists from compressed post dumps.",
    )
    parser.add_argument(
        "input_root",
        type=Path,
        help="Directory searched recursively for input files.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON settings file. Command line flags override its values.",
    )
    parser.add_argument(
        "-t", "--threshold",
        type=int,
        default=None,
        help="Minimum count a word needs to be kept. Default 100.",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Number of worker threads. Default = number of CPUs.",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=None,
        help="Directory for the per-language word lists. Default ./output.",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="Output file name prefix. Default twitter_corpus_.",
    )
    parser.add_argument(
        "--extension",
        default=None,
        help="Recognized input file extension. Default .bz2.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Gitignore-style pattern excluded from discovery (repeatable).",
    )
    parser.add_argument(
        "--progress-interval",
        type=int,
        default=None,
        help="Log progress every N completed files. Default 100.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable DEBUG logging.",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> CompilerSettings:
    """Config file values, overridden by the flags given on the command line."""
    data = load_settings(args.config).to_dict()

    overrides = {
        "prune_threshold": args.threshold,
        "max_workers": args.workers,
        "output_dir": str(args.output_dir) if args.output_dir is not None else None,
        "output_prefix": args.prefix,
        "input_extension": args.extension,
        "excluded_patterns": args.exclude,
        "progress_interval": args.progress_interval,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})
    return CompilerSettings.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug or paths.DEBUG_MODE)

    settings = settings_from_args(args)

    try:
        compiler = CorpusCompiler.from_directory(args.input_root, settings)
    except InputRootError as e:
        log_error("[Main] Cannot read input", e)
        flush_logs()
        return 1

    table = compiler.compile()
    written = write_language_map(table, Path(settings.output_dir), settings.output_prefix)
    log_info(f"[Main] {len(written)} word lists in {settings.output_dir}")
    flush_logs()
    return 0


if __name__ == "__main__":
    sys.exit(main())
