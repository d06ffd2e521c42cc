"""Main CLI entry point for the reuters-corpus command-line tool.

Provides commands to dump the corpus as JSON / JSON Lines and to print read
statistics for a corpus directory.
"""

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from reuters_corpus import __version__
from reuters_corpus.api.adapters import filter_documents, write_json, write_jsonl
from reuters_corpus.corpus.reader import CorpusReader
from reuters_corpus.document.model import DocumentSplit
from reuters_corpus.shared.config import ReaderConfig
from reuters_corpus.shared.errors import CorpusError


def load_config(args: argparse.Namespace) -> ReaderConfig:
    """Build the reader configuration from a config file and CLI overrides."""
    config = ReaderConfig()
    if getattr(args, "config", None) is not None:
        config = ReaderConfig.from_json(args.config.read_text(encoding="utf-8"))

    overrides: Dict[str, Any] = {"corpus__directory": str(args.directory)}
    if getattr(args, "on_error", None):
        overrides["corpus__on_segment_error"] = args.on_error
    if getattr(args, "chunk_size", None):
        overrides["streaming__chunk_size"] = args.chunk_size
    if getattr(args, "encoding", None):
        overrides["streaming__encoding"] = args.encoding
    return config.override(**overrides)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="reuters-corpus",
        description="Stream the Reuters-21578 corpus as structured documents"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "directory",
        type=Path,
        help="Directory holding reut2-000.sgm .. reut2-021.sgm"
    )
    common.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    common.add_argument(
        "--on-error",
        choices=["raise", "skip"],
        help="What to do with an unreadable segment (default: raise)"
    )
    common.add_argument(
        "--chunk-size",
        type=int,
        help="Bytes read per chunk"
    )
    common.add_argument(
        "--encoding",
        help="Segment file encoding (default: utf-8)"
    )

    # Dump command
    dump_parser = subparsers.add_parser(
        "dump", parents=[common], help="Write documents as JSON Lines or JSON"
    )
    dump_parser.add_argument(
        "--format", "-f",
        choices=["jsonl", "json"],
        default="jsonl",
        help="Output format (default: jsonl)"
    )
    dump_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    dump_parser.add_argument(
        "--limit", "-n",
        type=int,
        help="Stop after this many documents"
    )
    dump_parser.add_argument(
        "--split",
        choices=[split.value for split in DocumentSplit],
        help="Only documents of this split"
    )
    dump_parser.add_argument(
        "--valid-only",
        action="store_true",
        help="Drop documents without a usable identifier"
    )

    # Stats command
    stats_parser = subparsers.add_parser(
        "stats", parents=[common], help="Read the whole corpus and print statistics"
    )
    stats_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _write_documents(args: argparse.Namespace, reader: CorpusReader, output: TextIO) -> int:
    split = DocumentSplit(args.split) if args.split else None
    documents = filter_documents(
        reader.read(), split=split, limit=args.limit, valid_only=args.valid_only
    )
    if args.format == "json":
        return write_json(documents, output)
    return write_jsonl(documents, output)


def cmd_dump(args: argparse.Namespace) -> int:
    """Handle dump command."""
    reader = CorpusReader(load_config(args))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with args.output.open("w", encoding="utf-8") as output:
            count = _write_documents(args, reader, output)
        print(f"Wrote {count} documents to {args.output}", file=sys.stderr)
    else:
        count = _write_documents(args, reader, sys.stdout)

    return 1 if reader.statistics.has_errors else 0


def format_statistics(summary: Dict[str, Any], format_type: str) -> str:
    """Format a statistics summary for output."""
    if format_type == "json":
        return json.dumps(summary, indent=2)

    lines: List[str] = [
        f"Segments read:       {summary['segments_read']}",
        f"Segments failed:     {summary['segments_failed']}",
        f"Fragments extracted: {summary['fragments_extracted']}",
        f"Documents built:     {summary['documents_built']}",
        f"Invalid documents:   {summary['invalid_documents']}",
        f"Bytes read:          {summary['bytes_read']}",
        f"Dropped characters:  {summary['dropped_characters']}",
        f"Time:                {summary['processing_time_ms']:.1f}ms",
        "-" * 40,
    ]
    for split, count in sorted(summary["splits"].items()):
        lines.append(f"{split:<8} {count}")
    for diagnostic in summary["diagnostics"]:
        lines.append(f"{diagnostic['severity']}: {diagnostic['message']}")
    return "\n".join(lines)


def cmd_stats(args: argparse.Namespace) -> int:
    """Handle stats command."""
    reader = CorpusReader(load_config(args))
    splits: Counter = Counter()
    dated = 0
    for document in reader.read():
        splits[document.split.value if document.split else "UNSET"] += 1
        if document.date is not None:
            dated += 1

    summary = reader.statistics.to_dict()
    summary["splits"] = dict(splits)
    summary["dated_documents"] = dated
    print(format_statistics(summary, args.format))
    return 1 if reader.statistics.has_errors else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        if args.command == "dump":
            return cmd_dump(args)
        if args.command == "stats":
            return cmd_stats(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except CorpusError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Invalid configuration file: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
