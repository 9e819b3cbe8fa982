"""
Turn the user's targets into the list of things to search.

enumerate_sources() is a generator. It yields, in order:
  Source      -> something the scanner should open and read
  SourceError -> a target that will not be searched (a directory without -R,
                 or a directory that could not be listed during the walk)

Errors are yielded, not raised, so one bad target never stops the rest.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Optional

from greplite.errors import SourceError, SourceErrorKind

logger = logging.getLogger(__name__)

STDIN_LABEL = "(standard input)"


@dataclass(frozen=True)
class Source:
    """One readable input. path=None means standard input."""

    path: Optional[str]

    @property
    def is_stdin(self):
        return self.path is None

    @property
    def label(self):
        return STDIN_LABEL if self.path is None else self.path


STDIN = Source(None)


def _is_regular_file(path):
    """True only for real files. Symlinks, fifos, sockets -> False."""
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError:
        return False


def walk_directory(base_dir):
    """
    Depth-first walk of base_dir yielding a Source per regular file.

    Symbolic links are never followed: os.walk(followlinks=False) keeps it out
    of linked directories, and the lstat check drops links that show up in the
    file list. A directory that cannot be listed is reported as an UNREADABLE
    SourceError and the walk carries on with its siblings.

    Names are sorted at every level so the order only depends on what is on
    disk.
    """
    failed = []

    def on_error(exc):
        label = exc.filename or base_dir
        logger.debug("cannot list %s: %s", label, exc)
        failed.append(SourceError.from_os_error(SourceErrorKind.UNREADABLE, label, exc))

    for root, dirs, files in os.walk(base_dir, onerror=on_error, followlinks=False):
        # os.walk reports listing errors through on_error before it moves on;
        # flush them here so they come out near the subtree they belong to.
        while failed:
            yield failed.pop(0)
        dirs.sort()
        for name in sorted(files):
            full = os.path.join(root, name)
            if _is_regular_file(full):
                yield Source(full)
            else:
                logger.debug("skipping non-regular entry %s", full)
    while failed:
        yield failed.pop(0)


def enumerate_sources(targets, recursive=False):
    """
    Yield Source / SourceError items for each target, in target order.

    No targets -> one standard-input source.
    None target -> standard input too (the CLI maps "-" to None).
    Regular file -> yielded as is, -R or not.
    Directory -> walked when recursive, otherwise an IS_A_DIRECTORY error.
    Anything else (missing, special file) -> yielded, and the scanner reports
    why it could not be read.
    """
    if not targets:
        yield STDIN
        return

    for target in targets:
        if target is None:
            yield STDIN
        elif os.path.isdir(target):
            if recursive:
                logger.debug("walking %s", target)
                yield from walk_directory(target)
            else:
                yield SourceError(
                    SourceErrorKind.IS_A_DIRECTORY,
                    target,
                    "Is a directory (use -R to search it recursively)",
                )
        else:
            yield Source(target)
