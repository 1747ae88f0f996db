#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/cli.py
"""Command-line interface for srclight.

Highlight a source file (or standard input) and print an HTML fragment,
a standalone HTML page or a DocBook listing.

Examples
--------
    $ srclight app.py --linenums --highlight "1,4-6"
    $ srclight app.rb -l ruby --style monokai --standalone -o app.html
    $ cat snippet.js | srclight - -l javascript --highlighter highlight.js

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from srclight import __version__
from srclight.api import convert_blocks, render_standalone
from srclight.blocks import SourceBlock
from srclight.constants import (
    ATTR_HIGHLIGHTER_CSS,
    ATTR_HIGHLIGHTER_LINENUMS_MODE,
    ATTR_HIGHLIGHTER_STYLE,
    ATTR_LINKCSS,
    ATTR_SOURCE_HIGHLIGHTER,
    ATTR_STYLESDIR,
    BACKENDS,
    BLOCK_ATTR_HIGHLIGHT,
    BLOCK_ATTR_LINE_COMMENT,
    BLOCK_ATTR_START,
    BLOCK_OPTION_LINENUMS,
    BLOCK_OPTION_NOWRAP,
    CSS_MODES,
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    LINENUMS_MODES,
    SafeMode,
)
from srclight.exceptions import DependencyError, OutputWriteError, RenderingError, ValidationError
from srclight.highlighters import highlighter_registry
from srclight.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (OutputWriteError, OSError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def _parse_attribute(value: str) -> tuple[str, Optional[str]]:
    """Parse ``NAME=VALUE``, ``NAME`` (set, empty) or ``NAME!`` (unset)."""
    if "=" in value:
        name, _, attr_value = value.partition("=")
        name = name.strip()
        if not name:
            raise argparse.ArgumentTypeError(f"Invalid attribute: {value!r}")
        return name, attr_value
    name = value.strip()
    if name.endswith("!"):
        return name[:-1], None
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid attribute: {value!r}")
    return name, ""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="srclight",
        description="Highlight source code with callouts, line numbers and line emphasis.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Source file to highlight ('-' reads standard input)")
    parser.add_argument("-o", "--out", help="Write output to this file instead of standard output")
    parser.add_argument("-l", "--language", help="Language of the source (defaults to the file extension)")

    highlighting = parser.add_argument_group("highlighting")
    highlighting.add_argument(
        "--highlighter",
        default="pygments",
        help="Highlighter name; 'none' disables highlighting (default: pygments)",
    )
    highlighting.add_argument("--style", help="Highlighter style name")
    highlighting.add_argument("--css", choices=CSS_MODES, help="How token styles are emitted (default: class)")
    highlighting.add_argument("--linenums", action="store_true", help="Show line numbers")
    highlighting.add_argument(
        "--linenums-mode", choices=LINENUMS_MODES, help="Line number layout (default: table)"
    )
    highlighting.add_argument("--start", type=int, help="Displayed number of the first line")
    highlighting.add_argument("--highlight", help="Lines to emphasize, e.g. '1,4-6' or '1;4..;!7'")
    highlighting.add_argument("--line-comment", help="Line comment prefix accepted before callout marks")
    highlighting.add_argument("--nowrap", action="store_true", help="Disable line wrapping in the container")
    highlighting.add_argument("--no-callouts", action="store_true", help="Do not convert callout marks")
    highlighting.add_argument(
        "--list-highlighters", action="store_true", help="List registered highlighters and exit"
    )

    document = parser.add_argument_group("document")
    document.add_argument(
        "-a",
        "--attribute",
        action="append",
        default=[],
        type=_parse_attribute,
        metavar="NAME[=VALUE]",
        help="Document attribute, as if declared by the document (subject to --safe-mode); NAME! unsets it",
    )
    document.add_argument(
        "--safe-mode",
        choices=[mode.name.lower() for mode in SafeMode],
        default="safe",
        help="Security level; at 'server' and above documents cannot choose a highlighter (default: safe)",
    )
    document.add_argument("--backend", choices=BACKENDS, default="html5", help="Output backend (default: html5)")
    document.add_argument("--standalone", action="store_true", help="Emit a complete HTML page")
    document.add_argument("--title", default="", help="Title of the standalone page and the listing")
    document.add_argument("--linkcss", action="store_true", help="Link the stylesheet instead of embedding it")
    document.add_argument(
        "--stylesheet-dir",
        help="Write linked stylesheets to this directory (default: next to --out)",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _build_block(parsed_args: argparse.Namespace, text: str) -> SourceBlock:
    language = parsed_args.language
    if not language and parsed_args.input != "-":
        language = Path(parsed_args.input).suffix.lstrip(".") or None

    block_attributes: dict[str, Optional[str]] = {}
    if parsed_args.start is not None:
        block_attributes[BLOCK_ATTR_START] = str(parsed_args.start)
    if parsed_args.highlight:
        block_attributes[BLOCK_ATTR_HIGHLIGHT] = parsed_args.highlight
    if parsed_args.line_comment is not None:
        block_attributes[BLOCK_ATTR_LINE_COMMENT] = parsed_args.line_comment

    options = []
    if parsed_args.linenums:
        options.append(BLOCK_OPTION_LINENUMS)
    if parsed_args.nowrap:
        options.append(BLOCK_OPTION_NOWRAP)

    return SourceBlock.from_text(
        text,
        language,
        attributes=block_attributes,
        options=options,
        callouts=not parsed_args.no_callouts,
        title=parsed_args.title or None,
    )


def _trusted_attributes(parsed_args: argparse.Namespace) -> dict[str, Optional[str]]:
    trusted: dict[str, Optional[str]] = {}
    name = parsed_args.highlighter
    if name and name.lower() != "none":
        trusted[ATTR_SOURCE_HIGHLIGHTER] = name
        if parsed_args.style:
            trusted[ATTR_HIGHLIGHTER_STYLE.format(name=name)] = parsed_args.style
        if parsed_args.css:
            trusted[ATTR_HIGHLIGHTER_CSS.format(name=name)] = parsed_args.css
        if parsed_args.linenums_mode:
            trusted[ATTR_HIGHLIGHTER_LINENUMS_MODE.format(name=name)] = parsed_args.linenums_mode
    if parsed_args.linkcss:
        trusted[ATTR_LINKCSS] = ""
        if parsed_args.stylesheet_dir and not parsed_args.out:
            trusted[ATTR_STYLESDIR] = parsed_args.stylesheet_dir
    return trusted


def _write_output(content: str, out: Optional[str]) -> None:
    if not out:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    try:
        Path(out).write_text(content if content.endswith("\n") else f"{content}\n", encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(out, original_error=e) from e
    logger.info(f"Wrote {out}")


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    if parsed_args.list_highlighters:
        for name in highlighter_registry.list_highlighters():
            descriptor = highlighter_registry.get_descriptor(name)
            kind = "highlighting" if descriptor.supports_highlighting else "pass-through"
            aliases = f" (aliases: {', '.join(descriptor.aliases)})" if descriptor.aliases else ""
            print(f"{name}: {kind}{aliases}")
        return EXIT_SUCCESS

    try:
        text = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        block = _build_block(parsed_args, text)
        result = convert_blocks(
            [block],
            attributes=dict(parsed_args.attribute),
            trusted_attributes=_trusted_attributes(parsed_args),
            safe_mode=SafeMode[parsed_args.safe_mode.upper()],
            backend=parsed_args.backend,
            listing=bool(parsed_args.title),
        )

        if parsed_args.standalone and parsed_args.backend == "html5":
            output = render_standalone(result, title=parsed_args.title)
        else:
            output = result.body

        _write_output(output, parsed_args.out)

        if parsed_args.linkcss and (parsed_args.out or parsed_args.stylesheet_dir):
            to_dir = parsed_args.stylesheet_dir or str(Path(parsed_args.out).parent)
            result.write_stylesheets(to_dir)
    except Exception as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS
