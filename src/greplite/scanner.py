"""
Read one source line by line and yield a MatchRecord per matching line.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Tuple

from greplite.errors import SourceError, SourceErrorKind

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


@dataclass(frozen=True)
class MatchRecord:
    source_label: str
    line_number: int
    line_text: str
    spans: Tuple[Tuple[int, int], ...] = ()


def _strip_terminator(raw):
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def _scan_stream(stream, label, pattern, highlight, should_stop=None):
    """
    Core loop shared by files and stdin.

    Lines are read as bytes and decoded one at a time, so a bad byte only
    takes out its own line: everything before it has already been yielded,
    nothing from it or after it is.
    """
    line_number = 0
    while True:
        if should_stop is not None and should_stop():
            logger.debug("stopped early in %s after line %d", label, line_number)
            return
        try:
            raw = stream.readline()
        except OSError as e:
            raise SourceError.from_os_error(SourceErrorKind.READ_FAILED, label, e) from e
        if not raw:
            return
        line_number += 1
        try:
            line = _strip_terminator(raw).decode(ENCODING)
        except UnicodeDecodeError as e:
            raise SourceError(
                SourceErrorKind.DECODE_FAILED,
                label,
                f"line {line_number} is not valid {ENCODING} ({e.reason})",
            ) from e

        if highlight:
            spans = pattern.find_all(line)
            if spans:
                yield MatchRecord(label, line_number, line, tuple(spans))
        elif pattern.is_match(line):
            yield MatchRecord(label, line_number, line)


def scan(source, pattern, highlight=False, stream=None, should_stop=None):
    """
    Yield MatchRecords for `source`.

    stream -> binary stream used for standard input; defaults to
              sys.stdin.buffer. It is read but never closed here.
    should_stop -> optional callable checked before every line is read; once
              it returns True the generator ends quietly.

    Files are opened inside a `with` so the handle goes away however the
    generator ends: exhausted, closed early, or unwound by an exception.

    Raises SourceError (READ_FAILED / DECODE_FAILED) and stops; records that
    were already yielded stay valid.
    """
    logger.debug("scanning %s", source.label)
    if source.is_stdin:
        if stream is None:
            stream = sys.stdin.buffer
        yield from _scan_stream(stream, source.label, pattern, highlight, should_stop)
        return

    try:
        f = open(source.path, "rb")
    except OSError as e:
        raise SourceError.from_os_error(SourceErrorKind.READ_FAILED, source.label, e) from e
    with f:
        yield from _scan_stream(f, source.label, pattern, highlight, should_stop)
