"""
SearchSession: one run of greplite from pattern to outcome.

  IDLE -> COMPILING -> ENUMERATING -> SCANNING (per source) -> FINALIZED

A bad pattern jumps straight to FINALIZED. A source that cannot be read is
written down in the outcome and skipped; nothing short of a bad pattern or an
interrupt stops the run early.
"""

import logging
import os
from contextlib import closing
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from greplite.errors import PatternError, SourceError
from greplite.formatter import format_record
from greplite.matcher import compile_pattern
from greplite.scanner import scan
from greplite.sources import enumerate_sources

logger = logging.getLogger(__name__)

EXIT_MATCHED = 0
EXIT_NOMATCH = 1
EXIT_FAILURE = 2


class SessionState(Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    ENUMERATING = "enumerating"
    SCANNING = "scanning"
    FINALIZED = "finalized"


@dataclass
class SessionOutcome:
    total_matches: int = 0
    sources_scanned: int = 0
    errors: List[SourceError] = field(default_factory=list)
    fatal: Optional[PatternError] = None
    interrupted: bool = False

    @property
    def exit_code(self):
        """
        0 -> at least one line matched
        1 -> clean run, nothing matched
        2 -> bad pattern, interrupted run, or every source failed
        """
        if self.fatal is not None or self.interrupted:
            return EXIT_FAILURE
        if self.total_matches:
            return EXIT_MATCHED
        if self.errors and not self.sources_scanned:
            return EXIT_FAILURE
        return EXIT_NOMATCH


def wants_labels(config):
    """Prefix lines with their source when more than one source is possible."""
    # Decided from the targets before the walk starts, so a -R directory holding
    # a single file is still labelled.
    if len(config.targets) > 1:
        return True
    if config.recursive and config.targets and config.targets[0] is not None:
        return os.path.isdir(config.targets[0])
    return False


class SearchSession:
    """
    Drives one search.

    emit  -> called with each formatted line, in output order
    stdin -> binary stream used for standard-input sources
             (None -> sys.stdin.buffer, resolved by the scanner)
    """

    def __init__(self, config, emit, stdin=None):
        self.config = config
        self.emit = emit
        self.stdin = stdin
        self.state = SessionState.IDLE
        self.outcome = SessionOutcome()
        self._cancelled = False

    def cancel(self):
        """Ask the run to stop before the next line is read."""
        self._cancelled = True

    def run(self):
        if self.state is not SessionState.IDLE:
            raise RuntimeError(f"session already {self.state.value}")

        self.state = SessionState.COMPILING
        try:
            pattern = compile_pattern(
                self.config.pattern,
                case_insensitive=self.config.case_insensitive,
                use_regex=self.config.use_regex,
            )
        except PatternError as e:
            logger.debug("pattern rejected: %s", e.reason)
            self.outcome.fatal = e
            return self._finalize()

        self.state = SessionState.ENUMERATING
        show_label = wants_labels(self.config)
        try:
            for item in enumerate_sources(self.config.targets, self.config.recursive):
                if self._cancelled:
                    self.outcome.interrupted = True
                    break
                if isinstance(item, SourceError):
                    self._record_error(item)
                    continue
                self.state = SessionState.SCANNING
                self._scan_one(item, pattern, show_label)
                if self.outcome.interrupted:
                    break
                self.state = SessionState.ENUMERATING
        except KeyboardInterrupt:
            logger.debug("interrupted")
            self.outcome.interrupted = True
        return self._finalize()

    def _scan_one(self, source, pattern, show_label):
        cfg = self.config
        try:
            records = scan(
                source,
                pattern,
                cfg.highlight,
                stream=self.stdin,
                should_stop=self._should_stop,
            )
            with closing(records):
                for record in records:
                    self.emit(
                        format_record(
                            record,
                            show_line_numbers=cfg.show_line_numbers,
                            highlight=cfg.highlight,
                            show_label=show_label,
                        )
                    )
                    self.outcome.total_matches += 1
                    if self._cancelled:
                        self.outcome.interrupted = True
                        return
        except SourceError as e:
            self._record_error(e)
            return
        if self._cancelled:
            # The scanner stopped between lines; the source was not read to the end.
            self.outcome.interrupted = True
            return
        self.outcome.sources_scanned += 1

    def _should_stop(self):
        return self._cancelled

    def _record_error(self, error):
        logger.debug("source error (%s): %s", error.kind.name, error)
        self.outcome.errors.append(error)

    def _finalize(self):
        self.state = SessionState.FINALIZED
        o = self.outcome
        logger.debug(
            "finished: %d match(es), %d source(s), %d error(s)%s",
            o.total_matches,
            o.sources_scanned,
            len(o.errors),
            " [interrupted]" if o.interrupted else "",
        )
        return o
