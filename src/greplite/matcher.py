"""
Pattern compilation and span finding.

compile_pattern() turns the user's pattern into one of two objects:
  LiteralPattern -> plain substring search, optionally case-folded
  RegexPattern   -> a compiled `re` pattern, optionally re.IGNORECASE

Both answer the same two questions, so callers never branch on the mode:
  find_all(line) -> [(start, end), ...]  non-overlapping, left to right
  is_match(line) -> bool

Offsets are codepoint indexes into the decoded line.
"""

import logging
import re

from greplite.errors import PatternError

logger = logging.getLogger(__name__)


def _fold_with_map(text):
    """
    Case-fold text and remember where each folded char came from.

    casefold() can grow a string ("ß" -> "ss"), so a flat slice of the folded
    text does not line up with the original. index_map[k] is the index in
    `text` of the char that produced folded[k].
    """
    parts = []
    index_map = []
    for i, ch in enumerate(text):
        folded = ch.casefold()
        parts.append(folded)
        index_map.extend([i] * len(folded))
    return "".join(parts), index_map


class LiteralPattern:
    def __init__(self, pattern, case_insensitive=False):
        self.pattern = pattern
        self.case_insensitive = case_insensitive
        self._needle = pattern.casefold() if case_insensitive else pattern

    def is_match(self, line):
        if self.case_insensitive:
            line = line.casefold()
        return self._needle in line

    def find_all(self, line):
        if not self._needle:
            return [(0, 0)]
        if not self.case_insensitive:
            return list(self._scan(line))

        folded, index_map = _fold_with_map(line)
        spans = []
        last_end = 0
        for start, end in self._scan(folded):
            o_start = index_map[start]
            # end-1 is the last folded char inside the match; its source char
            # is fully covered by the highlight.
            o_end = index_map[end - 1] + 1
            if o_start < last_end:
                # Both matches landed inside one expanded char ("ß" -> "ss").
                continue
            spans.append((o_start, o_end))
            last_end = o_end
        return spans

    def _scan(self, haystack):
        step = len(self._needle)
        i = haystack.find(self._needle)
        while i != -1:
            yield i, i + step
            i = haystack.find(self._needle, i + step)

    def __repr__(self):
        return f"LiteralPattern({self.pattern!r}, case_insensitive={self.case_insensitive})"


class RegexPattern:
    def __init__(self, regex):
        self.regex = regex

    @property
    def pattern(self):
        return self.regex.pattern

    def is_match(self, line):
        return self.regex.search(line) is not None

    def find_all(self, line):
        if not self.regex.pattern:
            return [(0, 0)]
        return [m.span() for m in self.regex.finditer(line)]

    def __repr__(self):
        return f"RegexPattern({self.regex.pattern!r}, flags={self.regex.flags})"


def compile_pattern(pattern, case_insensitive=False, use_regex=False):
    """
    Build the matcher for one search session.

    A bad regex raises PatternError right here, before any file is touched.
    """
    if not use_regex:
        compiled = LiteralPattern(pattern, case_insensitive)
    else:
        flags = re.IGNORECASE if case_insensitive else 0
        try:
            compiled = RegexPattern(re.compile(pattern, flags))
        except re.error as e:
            raise PatternError(pattern, str(e)) from e
    logger.debug("compiled %r", compiled)
    return compiled
