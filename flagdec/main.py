#!/usr/bin/env python3
"""flagdec/main.py — CLI entry-point.

Usage examples
--------------
    # Decode one value against every known domain
    flagdec 0x00a1c002

    # Only connection and stream connector flags, two values
    flagdec conn sc 0x300 0x80000000

    # Read values from stdin, one per line
    grep 'flags=' trace.log | cut -d= -f2 | flagdec txn -

    # List the domain keywords / show one domain's table
    flagdec --list-domains
    flagdec --describe strm

Exit codes
----------
    0   Success, including end of input on stdin.
    1   Usage error or unparsable value.
    2   Unexpected internal failure.

Options must come before the first keyword or value.  Anything after that
is taken literally, so ``flagdec -0x10`` decodes ``0xfffffff0``.
"""

from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from flagdec import __version__
from flagdec.domains import REGISTRY
from flagdec.errors import FlagdecError, UnparsableValueError, UsageError
from flagdec.registry import DomainRegistry
from flagdec.report import ReportPrinter, describe_domain, list_domains
from flagdec.selector import Selection, resolve_selection
from flagdec.source import open_source

_log = logging.getLogger("flagdec")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_USAGE: int = 1
EXIT_INTERNAL: int = 2

_HANDLER_NAME = "flagdec-cli"


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int, stream: Optional[TextIO] = None) -> None:
    """Set up the ``flagdec`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    stream:
        Where log records go.  ``None`` → ``sys.stderr``.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("flagdec")
    root.setLevel(level)
    stream = stream if stream is not None else sys.stderr
    # main() may run several times in one process (tests)
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME and isinstance(handler, logging.StreamHandler):
            handler.setStream(stream)
            return
    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)


def usage_line(registry: DomainRegistry = REGISTRY, prog: str = "flagdec") -> str:
    return f"Usage: {prog} [{'|'.join(registry.keywords())}]* {{ [+-][0x]value* | - }}"


def _split_argv(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Separate leading options from keyword/value tokens.

    A token is an option only if it starts with ``-`` followed by
    something other than a digit (``-v``, ``--describe``).  ``-``, ``-5``
    and ``-0x10`` end the options.  An explicit ``--`` is dropped.
    """
    options: List[str] = []
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg == "--":
            index += 1
            break
        if len(arg) < 2 or arg[0] != "-" or arg[1].isdigit():
            break
        options.append(arg)
        # options taking a value
        if arg in ("-d", "--describe") and index + 1 < len(argv):
            options.append(argv[index + 1])
            index += 1
        index += 1
    return options, list(argv[index:])


def _build_parser(registry: DomainRegistry = REGISTRY) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flagdec",
        description=(
            "Decode captured 32-bit flag words into symbolic names.  "
            "Leading tokens naming a domain restrict the output to those "
            "domains; the rest are values, or a single '-' to read values "
            "from stdin."
        ),
        epilog=(
            f"domains: {', '.join(registry.keywords())}.  "
            "Values are decimal, 0x-prefixed hex or 0-prefixed octal, "
            "optionally signed."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-l", "--list-domains",
        action="store_true",
        help="List domain keywords and exit.",
    )
    group.add_argument(
        "-d", "--describe",
        metavar="KEYWORD",
        default=None,
        help="Print the bit table of one domain and exit.",
    )
    parser.add_argument(
        "tokens",
        nargs="*",
        metavar="TOKEN",
        help="Domain keywords, then values or '-'.",
    )
    return parser


# ===========================================================================
# Commands
# ===========================================================================

def run(
    tokens: Sequence[str],
    stdin: TextIO,
    stdout: TextIO,
    registry: DomainRegistry = REGISTRY,
) -> int:
    """Decode every value named by *tokens* and print the report.

    Raises
    ------
    UsageError
        No value argument, or a misplaced ``-``.
    UnparsableValueError
        A value does not parse; values before it have already been printed.
    """
    selection, rest = resolve_selection(tokens, registry)
    source = open_source(rest, stdin)
    printer = ReportPrinter(stdout, selection)

    for value in source:
        printer.print_value(value, header=source.multi)

    _log.info("decoded %d value(s) against %d domain(s)", printer.count, len(selection))
    return EXIT_OK


def cmd_list(stdout: TextIO, registry: DomainRegistry = REGISTRY) -> int:
    for line in list_domains(registry.list_domains()):
        stdout.write(line + "\n")
    return EXIT_OK


def cmd_describe(keyword: str, stdout: TextIO, registry: DomainRegistry = REGISTRY) -> int:
    (domain,) = Selection.strict([keyword], registry).domains
    for line in describe_domain(domain):
        stdout.write(line + "\n")
    return EXIT_OK


# ===========================================================================
# Main entry point
# ===========================================================================

def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Run the flagdec CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.
    stdin, stdout, stderr:
        Streams to use instead of the process ones.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    if argv is None:
        argv = sys.argv[1:]
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    if isinstance(stdin, io.TextIOWrapper):
        # pasted lines may carry bytes that are not valid text; they end
        # the token instead of aborting the run
        stdin.reconfigure(errors="surrogateescape")

    options, tokens = _split_argv(argv)
    parser = _build_parser()
    args = parser.parse_args(options + ["--"] + tokens)

    _configure_logging(args.verbose, stderr)

    try:
        if args.list_domains:
            return cmd_list(stdout)
        if args.describe is not None:
            return cmd_describe(args.describe, stdout)
        return run(args.tokens, stdin, stdout)
    except (UnparsableValueError, UsageError) as exc:
        stdout.flush()
        stderr.write(exc.format() + "\n")
        stderr.write(usage_line() + "\n")
        return EXIT_USAGE
    except FlagdecError as exc:
        stderr.write(exc.format() + "\n")
        return EXIT_USAGE
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130  # Standard UNIX convention for SIGINT
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INTERNAL


# ---------------------------------------------------------------------------
# Module execution support
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
