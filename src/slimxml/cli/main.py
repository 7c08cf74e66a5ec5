"""Main CLI entry point for the ``slimxml`` command-line tool.

``slimxml parse`` loads each file, parses it and prints the tree, a JSON
report or a one-line-per-file summary. ``slimxml validate`` only reports
whether each file parses.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from slimxml import __version__
from slimxml.api.parser import SlimXMLParser
from slimxml.api.result import ParseResult
from slimxml.shared.config import ConfigValidationError, ParserConfig
from slimxml.shared.logging import configure_logging
from slimxml.tree.render import format_tree

XML_SUFFIXES = {".xml", ".xhtml", ".svg"}
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def load_config(args: argparse.Namespace) -> ParserConfig:
    """Build the parser configuration from ``--config`` and limit flags."""
    config = ParserConfig()
    if getattr(args, "config", None):
        config = ParserConfig.from_json(args.config.read_text())
    overrides: Dict[str, Any] = {}
    if getattr(args, "legacy", False):
        # Only the limits change; the rest of a --config file is kept
        legacy = ParserConfig.legacy().tokenizer
        overrides["tokenizer__max_tag_length"] = legacy.max_tag_length
        overrides["tokenizer__min_text_length"] = legacy.min_text_length
    if getattr(args, "max_tag_length", None) is not None:
        overrides["tokenizer__max_tag_length"] = args.max_tag_length
    if getattr(args, "min_text_length", None) is not None:
        overrides["tokenizer__min_text_length"] = args.min_text_length
    return config.override(**overrides) if overrides else config


def find_xml_files(path: Path, recursive: bool = False) -> Iterator[Path]:
    """Yield ``path`` itself, or the XML files inside a directory."""
    if path.is_dir():
        pattern = "**/*" if recursive else "*"
        for candidate in sorted(path.glob(pattern)):
            if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                yield candidate
    else:
        # Missing files are passed through so the parser reports them
        yield path


def collect_results(
    parser: SlimXMLParser, paths: List[Path], recursive: bool = False
) -> List[ParseResult]:
    results = []
    for path in paths:
        for file_path in find_xml_files(path, recursive):
            results.append(parser.parse_file(file_path))
    return results


def format_results(results: List[ParseResult], format_type: str) -> str:
    """Format parse results for output."""
    if format_type == "json":
        try:
            return json.dumps([result.to_dict() for result in results], indent=2)
        except RecursionError as e:
            # json nests one call per element level
            raise ValueError(
                "Document is nested too deeply for JSON output; use --format tree or text"
            ) from e

    if format_type == "tree":
        blocks = []
        for result in results:
            if result.success:
                blocks.append(f"{result.source}: ok\n{format_tree(result.raise_for_error())}")
            else:
                blocks.append(f"{result.source}: error: {result.message}")
        return "\n\n".join(blocks)

    if not results:
        return "No files to process."
    successful = sum(1 for result in results if result.success)
    lines = [f"Processed {len(results)} files, {successful} successful", "-" * 60]
    for result in results:
        if result.success:
            lines.append(
                f"OK    {result.source}  elements={result.element_count} "
                f"time={result.processing_time_ms:.1f}ms"
            )
        else:
            lines.append(f"FAIL  {result.source}  {result.error_kind}: {result.message}")
    return "\n".join(lines)


def _exit_code(results: List[ParseResult]) -> int:
    if not results:
        return EXIT_FAILURE
    return EXIT_OK if all(result.success for result in results) else EXIT_FAILURE


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    parser = SlimXMLParser(load_config(args))
    results = collect_results(parser, args.paths, args.recursive)
    output = format_results(results, args.format)

    if args.output:
        args.output.write_text(output + "\n")
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return _exit_code(results)


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    parser = SlimXMLParser(load_config(args))
    results = collect_results(parser, args.paths, args.recursive)

    if args.format == "json":
        print(json.dumps([result.summary() for result in results], indent=2))
    else:
        for result in results:
            status = "valid" if result.success else f"invalid: {result.message}"
            print(f"{result.source}: {status}")
        valid_count = sum(1 for result in results if result.success)
        print(f"{valid_count}/{len(results)} valid")
    return _exit_code(results)


def _add_common_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "paths", nargs="+", type=Path, help="Markup files or directories"
    )
    subparser.add_argument(
        "--recursive", "-r", action="store_true", help="Recursively process directories"
    )
    subparser.add_argument(
        "--config", "-c", type=Path, help="JSON configuration file (ParserConfig.to_json format)"
    )
    subparser.add_argument(
        "--legacy",
        action="store_true",
        help="Use the legacy loader limits (255-character tags, 2-character text)",
    )
    subparser.add_argument(
        "--max-tag-length", type=int, help="Maximum characters between '<' and '>'"
    )
    subparser.add_argument(
        "--min-text-length", type=int, help="Drop trimmed text fragments shorter than this"
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="slimxml",
        description="Parse XML-like markup into an element tree",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress log output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse files and print the result")
    _add_common_arguments(parse_parser)
    parse_parser.add_argument(
        "--format", "-f",
        choices=["tree", "json", "text"],
        default="tree",
        help="Output format (default: tree)",
    )
    parse_parser.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")

    validate_parser = subparsers.add_parser("validate", help="Check that files parse")
    _add_common_arguments(validate_parser)
    validate_parser.add_argument(
        "--format", "-f", choices=["text", "json"], default="text", help="Output format"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("CRITICAL")
    else:
        configure_logging("ERROR")

    try:
        if args.command == "parse":
            return cmd_parse(args)
        return cmd_validate(args)
    except (ConfigValidationError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
