from greplite.config import SearchConfig, parse_args
from greplite.errors import (
    ConfigError,
    GrepliteError,
    HelpRequested,
    PatternError,
    SourceError,
    SourceErrorKind,
)
from greplite.formatter import format_record
from greplite.matcher import LiteralPattern, RegexPattern, compile_pattern
from greplite.scanner import MatchRecord, scan
from greplite.session import SearchSession, SessionOutcome, SessionState
from greplite.sources import STDIN, Source, enumerate_sources

__version__ = "0.1.0"
