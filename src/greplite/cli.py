#!/usr/bin/env python3
import logging
import os
import sys

from greplite.config import parse_args
from greplite.errors import ConfigError, HelpRequested
from greplite.session import EXIT_FAILURE, EXIT_MATCHED, SearchSession

# ------------------------------------------------------------
# greplite: a small grep.
#
# What it does:
#   greplite [OPTION]... PATTERN [FILE]...
#   prints every line of every FILE (or stdin) that contains PATTERN.
#
# Matching:
#   default           plain substring search
#   -r                PATTERN is a Python regular expression
#   -i                ignore case (works for both)
#
# Output:
#   -n                "12: the line"
#   -c                matched text wrapped in ANSI bold yellow
#   several files     "path: 12: the line"
#
# Directories:
#   -R                walk them, never following symbolic links
#   without -R        reported as an error, other files still searched
#
# Exit code:
#   0 if at least one line matched, 1 if none,
#   2 for a bad pattern, bad flags, or when no file could be read.
#
# Logging:
#   GREPLITE_LOG_LEVEL=DEBUG prints what the engine is doing on stderr.
# ------------------------------------------------------------

HELP = """\
greplite - a simplified version of the `grep` command

Usage:
  greplite [OPTION]... PATTERN [FILE]...

Search for PATTERN in each FILE or standard input.
With no FILE, or when FILE is -, read standard input.

Options:
  -i, --ignore-case       Perform case-insensitive matching
  -n, --line-numbers      Show line numbers with output lines
  -r, --use-regex         Treat PATTERN as a regular expression
  -R, --recursive         Search recursively in directories
  -c, --color             Highlight matching text in output
  -h, --help              Display this help and exit

Examples:
  greplite -i "rust" poem.txt            # case-insensitive search for 'rust'
  greplite -n "error" app.log            # show line numbers
  greplite -r "R\\w+" poem.txt            # words starting with 'R'
  greplite -R -n "TODO" src/             # every file under src/
"""

LOG_LEVEL_ENV = "GREPLITE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging():
    """
    Send greplite's log records to stderr.

    stdout carries matches only, so logs never end up in a pipe. The level is
    read from GREPLITE_LOG_LEVEL (an unknown name falls back to WARNING).
    """
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    root = logging.getLogger("greplite")
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.handlers.clear()
    root.addHandler(handler)
    root.propagate = False


def _emit(s):
    """Write one line to stdout with a trailing newline. No buffering surprises."""
    os.write(1, (s + "\n").encode("utf-8"))


def _silence_stdout():
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, 1)
    os.close(devnull)


def _warn(s):
    sys.stderr.write(f"greplite: {s}\n")
    sys.stderr.flush()


def report(outcome):
    """
    Print the after-run summary on stderr.

    Errors are held back until every source is done so they never land in the
    middle of the match output.
    """
    if outcome.fatal is not None:
        sys.stderr.write(f"{outcome.fatal}\n")
        if outcome.fatal.reason:
            _warn(outcome.fatal.reason)
        return
    for err in outcome.errors:
        _warn(str(err))
    if len(outcome.errors) > 1:
        _warn(f"{len(outcome.errors)} sources could not be searched")
    if outcome.interrupted:
        _warn("interrupted")


def main(argv=None):
    """
    Entry point. Returns the exit code instead of calling sys.exit so it can
    be driven from tests.

    Usage examples:
      echo "apple pie" | greplite apple
      greplite -n -i "cat" file1.txt file2.txt
      greplite -R -r ".+berry" dir/
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = parse_args(argv)
    except HelpRequested:
        sys.stdout.write(HELP)
        sys.stdout.flush()
        return EXIT_MATCHED
    except ConfigError as e:
        sys.stderr.write(f"{e}\n")
        sys.stderr.write("Try 'greplite --help' for more information.\n")
        return EXIT_FAILURE

    configure_logging()
    session = SearchSession(config, emit=_emit)
    try:
        outcome = session.run()
    except BrokenPipeError:
        # Reader went away (`greplite x big.txt | head -1`). Point stdout at
        # devnull so the interpreter's final flush does not fail again.
        _silence_stdout()
        return EXIT_FAILURE
    report(outcome)
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
