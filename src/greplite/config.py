"""
SearchConfig and the command-line parser that builds it.

Flags can appear anywhere on the line:
  -i, --ignore-case    case-insensitive matching
  -n, --line-numbers   prefix each line with its number
  -r, --use-regex      PATTERN is a regular expression
  -R, --recursive      walk directories
  -c, --color          highlight the matched text
  -h, --help           print help and stop
  --                   everything after this is PATTERN / FILE
The first non-flag word is PATTERN, the rest are files. "-" means stdin.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from greplite.errors import ConfigError, HelpRequested


@dataclass(frozen=True)
class SearchConfig:
    pattern: str
    case_insensitive: bool = False
    use_regex: bool = False
    show_line_numbers: bool = False
    highlight: bool = False
    recursive: bool = False
    targets: Tuple[Optional[str], ...] = ()


FLAGS = {
    "-i": "case_insensitive",
    "--ignore-case": "case_insensitive",
    "-n": "show_line_numbers",
    "--line-numbers": "show_line_numbers",
    "-r": "use_regex",
    "--use-regex": "use_regex",
    "-R": "recursive",
    "--recursive": "recursive",
    "-c": "highlight",
    "--color": "highlight",
}

HELP_FLAGS = {"-h", "--help"}


def parse_args(args):
    """
    Build a SearchConfig from argv (without the program name).

    Raises HelpRequested for -h/--help, ConfigError for an unknown flag or a
    missing PATTERN.
    """
    if any(a in HELP_FLAGS for a in args):
        raise HelpRequested()

    options = {}
    pattern = None
    targets = []
    only_positional = False

    for a in args:
        if not only_positional and a == "--":
            only_positional = True
            continue
        if not only_positional and a in FLAGS:
            options[FLAGS[a]] = True
            continue
        if not only_positional and a.startswith("-") and a != "-":
            raise ConfigError(f"Error: Invalid flag '{a}'.")

        if pattern is None:
            pattern = a
        else:
            targets.append(None if a == "-" else a)

    if pattern is None:
        raise ConfigError(
            "Error: Not enough arguments provided. A query and file paths are required."
        )

    return SearchConfig(pattern=pattern, targets=tuple(targets), **options)
