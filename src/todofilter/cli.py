#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface: the pandoc filter process.

Pandoc runs a JSON filter as ``<filter> FORMAT``, writes the document to its
stdin and reads the result from its stdout::

    $ pandoc --filter todofilter -o manual.html manual.md

The filter can also be run by hand on a JSON dump::

    $ pandoc -t json manual.md | todofilter latex | pandoc -f json -o manual.tex
    $ todofilter html --input manual.json --output manual.todo.json

Environment Variable Support
----------------------------
``TODOFILTER_CONFIG`` names a config file (see :mod:`todofilter.config`).
``TODOFILTER_LOG_LEVEL`` sets the default for ``--log-level``.

"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from todofilter import __version__
from todofilter.ast.serialization import ast_to_json, json_to_ast
from todofilter.config import load_options
from todofilter.exceptions import ParsingError, RenderingError, TodoFilterError, ValidationError
from todofilter.formats import select_format
from todofilter.logging_utils import configure_logging
from todofilter.transforms.todo import apply_todo_filter

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

LOG_LEVEL_ENV_VAR = "TODOFILTER_LOG_LEVEL"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the filter command."""
    parser = argparse.ArgumentParser(
        prog="todofilter",
        description="Pandoc JSON filter that highlights TODO annotations for the target output format.",
    )
    parser.add_argument(
        "format",
        help="Target output format as passed by pandoc (html, latex and beamer get dedicated rendering)",
    )
    parser.add_argument("--input", "-i", help="Read pandoc JSON from this file instead of stdin")
    parser.add_argument("--output", "-o", help="Write pandoc JSON to this file instead of stdout")
    parser.add_argument("--config", help="Configuration file (.toml, .yaml, .yml, .json or pyproject.toml)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level for messages on stderr (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


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
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def read_input(input_path: Optional[str]) -> bytes | str:
    """Read the pandoc JSON payload from a file or stdin."""
    if input_path:
        return Path(input_path).read_bytes()
    stream = getattr(sys.stdin, "buffer", None)
    return stream.read() if stream is not None else sys.stdin.read()


def write_output(payload: str, output_path: Optional[str]) -> None:
    """Write the pandoc JSON payload to a file or stdout.

    Raises
    ------
    RenderingError
        If the destination cannot be written

    """
    try:
        if output_path:
            Path(output_path).write_text(payload, encoding="utf-8")
            return
        stream = getattr(sys.stdout, "buffer", None)
        if stream is not None:
            stream.write(payload.encode("utf-8"))
            stream.flush()
        else:
            sys.stdout.write(payload)
            sys.stdout.flush()
    except OSError as e:
        raise RenderingError(f"Cannot write output to {output_path or 'stdout'}: {e}", original_error=e) from e


def run_filter(
    format_name: str,
    input_path: Optional[str] = None,
    output_path: Optional[str] = None,
    config_path: Optional[str] = None,
    use_config: bool = True,
) -> None:
    """Read a document, apply the TODO filter and write the result.

    Raises
    ------
    TodoFilterError
        On config, decode, transform or output failures
    OSError
        If the input file cannot be read

    """
    options = load_options(config_path, discover=use_config)
    target = select_format(format_name)
    logger.debug("Target format %r resolved to %s", format_name, target.kind.name)

    document = json_to_ast(read_input(input_path))
    result = apply_todo_filter(document, target, options)
    write_output(ast_to_json(result), output_path)


def main(args: list[str] | None = None) -> int:
    """Execute the filter command."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        run_filter(
            parsed_args.format,
            input_path=parsed_args.input,
            output_path=parsed_args.output,
            config_path=parsed_args.config,
            use_config=not parsed_args.no_config,
        )
    except (TodoFilterError, OSError) as e:
        logger.error("%s", e)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
