from __future__ import annotations

from greplite.formatter import HIGHLIGHT_END, HIGHLIGHT_START, apply_highlight, format_record, highlight_spans
from greplite.scanner import MatchRecord

H, E = HIGHLIGHT_START, HIGHLIGHT_END


def test_plain_format_returns_line_unchanged() -> None:
    rec = MatchRecord("poem.txt", 3, "Are you nobody, too?", ((8, 14),))
    assert format_record(rec) == "Are you nobody, too?"
    assert format_record(rec, show_line_numbers=False, highlight=False) == rec.line_text


def test_line_number_prefix() -> None:
    rec = MatchRecord("poem.txt", 12, "hello")
    assert format_record(rec, show_line_numbers=True) == "12: hello"


def test_label_goes_before_line_number() -> None:
    rec = MatchRecord("poem.txt", 12, "hello")
    assert format_record(rec, show_line_numbers=True, show_label=True) == "poem.txt: 12: hello"
    assert format_record(rec, show_label=True) == "poem.txt: hello"


def test_apply_highlight() -> None:
    assert apply_highlight("Rust is powerful") == "\x1b[1;33mRust is powerful\x1b[0m"


def test_highlight_wraps_each_span() -> None:
    line = "Rust is powerful, and Rocks are heavy."
    rec = MatchRecord("-", 1, line, ((0, 4), (22, 27)))
    assert format_record(rec, highlight=True) == (
        f"{H}Rust{E} is powerful, and {H}Rocks{E} are heavy."
    )


def test_highlight_only_touches_the_matched_occurrence() -> None:
    # Same text elsewhere in the line stays unmarked.
    assert highlight_spans("ab ab", [(3, 5)]) == f"ab {H}ab{E}"


def test_highlight_adjacent_spans() -> None:
    assert highlight_spans("aaaa", [(0, 2), (2, 4)]) == f"{H}aa{E}{H}aa{E}"


def test_highlight_skips_zero_width_spans() -> None:
    assert highlight_spans("abc", [(0, 0)]) == "abc"


def test_highlight_multibyte_text_stays_intact() -> None:
    line = "日本語のテキスト"
    out = highlight_spans(line, [(1, 3)])
    assert out == f"日{H}本語{E}のテキスト"


def test_highlight_with_number_and_label() -> None:
    rec = MatchRecord("a.txt", 2, "rust", ((0, 4),))
    assert format_record(rec, show_line_numbers=True, highlight=True, show_label=True) == (
        f"a.txt: 2: {H}rust{E}"
    )
