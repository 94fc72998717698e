"""
timedtext.py — Parse YouTube's timed-text caption markup.

A caption track's baseUrl returns an XML-ish document such as:

    <?xml version="1.0" encoding="utf-8" ?><transcript>
    <text start="1.5" dur="2.0">Hello</text>
    <text start="3.5" dur="1.0">World</text>
    </transcript>

This is deliberately NOT parsed with an XML parser.  The document isn't
guaranteed to be well-formed, so a regex picks out each <text> element and
ignores everything else.  The scan is lossy on purpose:

    - Character entities are kept literally ("&amp;" is not turned into "&").
    - A <text> element whose body contains a nested tag is skipped.
    - An unparsable start/dur value becomes 0.0 instead of failing the parse.
"""

from __future__ import annotations

import re

from yt_transcript_scraper.models import TranscriptEntry

_TEXT_ELEMENT = re.compile(r'<text start="([^"]*)" dur="([^"]*)">([^<]*)</text>')

# Plain decimal or exponent notation only.  float() alone would also accept
# padding whitespace, digit underscores, non-ASCII digits, "inf" and "nan".
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _seconds(raw: str) -> float:
    if not _DECIMAL.fullmatch(raw):
        return 0.0
    return float(raw)


def parse_transcript(markup: str, language_code: str) -> list[TranscriptEntry]:
    """
    Scan timed-text markup into TranscriptEntry objects.

    Args:
        markup:        The track body, decoded to text.
        language_code: Attached verbatim to every entry.

    Returns:
        One entry per <text> element, in document order.  An empty list when
        there are none (that's a valid, if empty, transcript).
    """
    return [
        TranscriptEntry(
            text=text,
            duration=_seconds(dur),
            offset=_seconds(start),
            language_code=language_code,
        )
        for start, dur, text in _TEXT_ELEMENT.findall(markup)
    ]
