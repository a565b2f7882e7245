#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for chat2md.

Converts saved HTML fragments (one conversation turn, a message body, or
any other subtree already cut out of a page) to Markdown.

Examples
--------
Convert a fragment saved from a ChatGPT page::

    $ chat2md answer.html --profile chatgpt

Read from stdin and write to a file::

    $ cat turn.html | chat2md - --profile claude --out conversation.md

Join several fragments into one document with a title::

    $ chat2md q1.html a1.html --title "Design review" -o review.md

Each input becomes one section; sections are separated by a horizontal rule.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from chat2md.api import html_to_markdown
from chat2md.config import load_config_with_priority, profile_from_config
from chat2md.constants import DEFAULT_HTML_PARSER
from chat2md.exceptions import (
    Chat2MdError,
    FileAccessError,
    FileError,
    InputFileNotFoundError,
    ValidationError,
)
from chat2md.logging_utils import configure_logging
from chat2md.profiles import BUILTIN_PROFILES, SiteProfile
from chat2md.transcript import join_sections

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``chat2md`` command."""
    parser = argparse.ArgumentParser(
        prog="chat2md",
        description="Convert HTML conversation fragments to Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="*", help="Input HTML file(s) (use '-' for stdin; default: stdin)")
    parser.add_argument("--out", "-o", help="Output file path (default: print to stdout)")
    parser.add_argument(
        "--profile",
        choices=sorted(BUILTIN_PROFILES),
        help="Site profile controlling chrome removal and site-specific rules (default: generic)",
    )
    parser.add_argument("--title", help="Document title, emitted as a level-1 heading before the first section")
    parser.add_argument(
        "--citation-filter",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Drop '+N more' citation stub links (default: as set by the profile)",
    )
    parser.add_argument(
        "--parser",
        dest="html_parser",
        help=f"BeautifulSoup tree builder to use (default: {DEFAULT_HTML_PARSER})",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file (TOML, YAML or JSON). If not specified, searches for "
        ".chat2md.toml/.yaml/.json or a [tool.chat2md] table from the current directory upwards, "
        "then in the home directory.",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Disable loading of configuration files",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Write log messages to this file as well")
    parser.add_argument("--trace", action="store_true", help="Enable trace mode with timestamps and logger names")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> None:
    # --trace takes highest precedence, then --log-level, then --verbose, then config
    if parsed_args.trace:
        log_level: int | str = logging.DEBUG
    elif parsed_args.log_level:
        log_level = parsed_args.log_level
    elif parsed_args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = config.get("log_level", "WARNING")

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def resolve_profile(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> SiteProfile:
    """Combine configuration and command-line flags into one site profile."""
    merged = dict(config)
    if parsed_args.profile:
        merged["profile"] = parsed_args.profile
    if parsed_args.citation_filter is not None:
        merged["filter_citation_links"] = parsed_args.citation_filter
    return profile_from_config(merged)


def read_input(source: str) -> str:
    """Read one HTML input; ``-`` reads stdin.

    Raises
    ------
    InputFileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read or decoded as UTF-8

    """
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        raise InputFileNotFoundError(source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(source, f"Cannot read {source}: {e}", original_error=e) from e


def write_output(markdown: str, out: Optional[str]) -> None:
    """Write the result to ``out``, or to stdout when no path is given."""
    if not out:
        sys.stdout.write(markdown + "\n")
        return
    try:
        Path(out).write_text(markdown + "\n", encoding="utf-8")
    except OSError as e:
        raise FileAccessError(out, f"Cannot write {out}: {e}", original_error=e) from e
    logger.info("Wrote %s", out)


def convert_inputs(
    sources: list[str],
    profile: SiteProfile,
    title: Optional[str] = None,
    parser: str = DEFAULT_HTML_PARSER,
) -> str:
    """Convert every input to Markdown and join them into one document."""
    sections: list[str] = []
    if title and title.strip():
        sections.append(f"# {title.strip()}")

    for source in sources:
        markdown = html_to_markdown(read_input(source), profile=profile, parser=parser)
        if not markdown:
            logger.warning("No content converted from %s", "stdin" if source == "-" else source)
            continue
        sections.append(markdown)

    return join_sections(sections)


def main(args: list[str] | None = None) -> int:
    """Execute the ``chat2md`` command."""
    parsed_args = create_parser().parse_args(args)

    # logging is not configured yet, so setup errors go straight to stderr
    try:
        config = {} if parsed_args.no_config else load_config_with_priority(parsed_args.config)
        _setup_logging_level(parsed_args, config)
    except Chat2MdError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    try:
        profile = resolve_profile(parsed_args, config)
        html_parser = parsed_args.html_parser or config.get("parser") or DEFAULT_HTML_PARSER
        sources = parsed_args.input or ["-"]
        markdown = convert_inputs(sources, profile, title=parsed_args.title, parser=html_parser)
        write_output(markdown, parsed_args.out)
    except Chat2MdError as e:
        logger.error(e.message)
        return get_exit_code_for_exception(e)

    logger.info("Converted %d input(s) with profile '%s' (%d KB)", len(sources), profile.name, len(markdown) // 1024)
    return EXIT_SUCCESS


__all__ = ["create_parser", "main"]
