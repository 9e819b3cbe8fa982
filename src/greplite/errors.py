"""
Error types for greplite.

Three families:
  PatternError -> the pattern itself is broken; nothing gets scanned.
  SourceError  -> one input could not be read; it is recorded and skipped.
  ConfigError  -> the command line was wrong; raised by the argument parser.
"""

from enum import Enum


class GrepliteError(Exception):
    """Base class for everything greplite raises on purpose."""


class PatternError(GrepliteError):
    def __init__(self, pattern, reason=""):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Error: Invalid regular expression: '{pattern}'")


class SourceErrorKind(Enum):
    IS_A_DIRECTORY = "is a directory"
    UNREADABLE = "unreadable"
    READ_FAILED = "read failed"
    DECODE_FAILED = "decode failed"


class SourceError(GrepliteError):
    """
    A single source could not be searched.

    label  -> how the source is shown to the user (path or "(standard input)")
    reason -> short human text, usually the OS error message
    """

    def __init__(self, kind, label, reason=""):
        self.kind = kind
        self.label = label
        self.reason = reason or kind.value
        super().__init__(f"{label}: {self.reason}")

    @classmethod
    def from_os_error(cls, kind, label, exc):
        return cls(kind, label, exc.strerror or str(exc))


class ConfigError(GrepliteError):
    pass


class HelpRequested(ConfigError):
    def __init__(self):
        super().__init__("Help requested.")
