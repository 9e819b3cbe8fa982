"""
Render MatchRecords as output lines.

  [label: ][line_number: ]text-with-markers
"""

HIGHLIGHT_START = "\x1b[1;33m"
HIGHLIGHT_END = "\x1b[0m"


def apply_highlight(text):
    return f"{HIGHLIGHT_START}{text}{HIGHLIGHT_END}"


def highlight_spans(line, spans):
    """
    Wrap every span of `line` in the highlight markers.

    Works right to left, so inserting markers at the back never shifts the
    offsets of spans further forward. Zero-width spans (empty pattern, regexes
    like `x*`) get nothing: there is no text to color.
    """
    out = line
    for start, end in sorted(spans, reverse=True):
        if start == end:
            continue
        out = out[:start] + apply_highlight(out[start:end]) + out[end:]
    return out


def format_record(record, show_line_numbers=False, highlight=False, show_label=False):
    text = record.line_text
    if highlight and record.spans:
        text = highlight_spans(text, record.spans)
    if show_line_numbers:
        text = f"{record.line_number}: {text}"
    if show_label:
        text = f"{record.source_label}: {text}"
    return text
