"""Command-line entry point for rp."""

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import _UNSET, apply_config_to_args, generate_config, load_config
from .errors import RpError
from .fmt import Logger, make_console
from .processor import Processor
from .resolve import check_exclusive, resolve
from .size import size_or_default
from .text import escape_pattern


def build_parser():
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rp",
        usage="%(prog)s [options] -p PATTERN -r REPLACEMENT [files ...]",
        description="A multiline regex find/replace utility.",
        epilog="With no files, reads standard input and writes standard output.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Print the version and exit.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        default=[],
        help="Files to process. Standard input is used when none are given.",
    )
    parser.add_argument(
        "-i",
        "--inplace",
        action="store_true",
        default=_UNSET,
        help="Write to file instead of stdout.",
    )
    parser.add_argument(
        "-p",
        "--pattern",
        default=None,
        help="The regex pattern to match.",
    )
    parser.add_argument(
        "-P",
        "--pattern-file",
        metavar="FILE",
        default=None,
        help="The file to read the regex pattern from. Conflicts with --pattern.",
    )
    parser.add_argument(
        "-r",
        "--replacement",
        default=None,
        help="The replacement text to write. Supports groups (${1}, ${named_group}, etc.)",
    )
    parser.add_argument(
        "-R",
        "--replacement-file",
        metavar="FILE",
        default=None,
        help="The file to read the replacement text from. Conflicts with --replacement.",
    )
    parser.add_argument(
        "-e",
        "--escape-pattern",
        action="store_true",
        help="Print the pattern with regex characters escaped, then exit.",
    )
    parser.add_argument(
        "-s",
        "--stream",
        action="store_true",
        default=_UNSET,
        help="Process standard input in windows of --pump-limit bytes instead of "
        "reading it whole. Matches that cross a window boundary are not replaced.",
    )
    parser.add_argument(
        "-l",
        "--pump-limit",
        metavar="SIZE",
        default=_UNSET,
        help="Window size for --stream, e.g. 4096, 64KiB, 1MiB (default: 1MiB).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_UNSET,
        help="Print verbose output to stderr.",
    )

    color_group = parser.add_mutually_exclusive_group()
    color_group.add_argument(
        "--color",
        action="store_true",
        default=_UNSET,
        help="Force ANSI color even when stderr is not a TTY.",
    )
    color_group.add_argument(
        "--no-color",
        action="store_true",
        default=_UNSET,
        help="Disable ANSI color even when stderr is a TTY.",
    )

    parser.add_argument(
        "--no-config",
        action="store_true",
        help="Ignore ~/.config/rp/config.toml and ./rp.toml.",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print a commented config template and exit.",
    )

    return parser


# Options whose value is always the next token, even if it starts with "-"
_VALUE_OPTIONS = {
    "-p": "--pattern",
    "--pattern": "--pattern",
    "-P": "--pattern-file",
    "--pattern-file": "--pattern-file",
    "-r": "--replacement",
    "--replacement": "--replacement",
    "-R": "--replacement-file",
    "--replacement-file": "--replacement-file",
    "-l": "--pump-limit",
    "--pump-limit": "--pump-limit",
}


def join_option_values(argv: list[str]) -> list[str]:
    """Rewrite ``-p VALUE`` as ``--pattern=VALUE`` for every value option.

    argparse refuses a separate value that looks like an option, and regex
    patterns such as ``-\\d`` or replacements such as ``->`` often do.
    Tokens after ``--`` are left alone.
    """
    out = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            out.append(token)
            out.extend(tokens)
            break
        long_name = _VALUE_OPTIONS.get(token)
        if long_name is None:
            out.append(token)
            continue
        value = next(tokens, None)
        if value is None:
            # let argparse report the missing value
            out.append(token)
            break
        out.append(f"{long_name}={value}")
    return out


def main(argv=None):
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(join_option_values(argv))

    if args.version:
        print(__version__)
        sys.exit(0)

    if args.print_config:
        print(generate_config(project=True), end="")
        sys.exit(0)

    # Results are written as UTF-8 whatever the locale, like in-place edits
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", newline="")

    logger = Logger(
        make_console(color=args.color is True, no_color=args.no_color is True)
    )

    try:
        code = _run_main(args, logger)
    except RpError as e:
        logger.error(e.message)
        sys.exit(1)
    sys.exit(code)


def _run_main(args, logger) -> int:
    config = {} if args.no_config else load_config(Path.cwd(), logger)
    apply_config_to_args(args, config)
    logger.console = make_console(color=args.color, no_color=args.no_color)
    logger.verbose = args.verbose

    check_exclusive(args.pattern, args.pattern_file, "--pattern", "--pattern-file")
    pattern = resolve("pattern", args.pattern, args.pattern_file)
    if args.escape_pattern:
        sys.stdout.write(escape_pattern(pattern))
        return 0

    check_exclusive(
        args.replacement, args.replacement_file, "--replacement", "--replacement-file"
    )
    replacement = resolve("replacement", args.replacement, args.replacement_file)
    pump_limit = size_or_default(str(args.pump_limit), logger)

    processor = Processor(
        pattern,
        replacement,
        logger,
        inplace=args.inplace,
        stream=args.stream,
        pump_limit=pump_limit,
    )
    return processor.run(args.files)
