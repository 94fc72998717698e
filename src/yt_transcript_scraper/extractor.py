"""
extractor.py — The transcript extraction pipeline.

This is the heart of yt-transcript-scraper.  YouTube offers no stable
transcript API, so we scrape it:

    1. Parsing YouTube URLs / IDs  → resolve_video_id()
    2. Fetching watch page + track → fetch_transcript()
    3. Formatting output            → format_text(), format_json()
    4. One-call convenience         → extract()

The scraping and parsing steps themselves live in watch_page.py, tracks.py
and timedtext.py; this module only wires them together in order.  Every
failure surfaces as a TranscriptError, nothing is retried.
"""

from __future__ import annotations

import logging
import re

from yt_transcript_scraper.errors import ErrorKind, TranscriptError
from yt_transcript_scraper.fetcher import HttpPageFetcher, PageFetcher
from yt_transcript_scraper.models import TranscriptEntry, TranscriptRequest
from yt_transcript_scraper.timedtext import parse_transcript
from yt_transcript_scraper.tracks import select_track
from yt_transcript_scraper.watch_page import extract_caption_catalog, extract_title

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# A video ID is always exactly this many characters.
VIDEO_ID_LENGTH = 11

# One pattern covering the common YouTube URL shapes:
#   - https://www.youtube.com/watch?v=VIDEO_ID  (v= anywhere in the query)
#   - https://www.youtube.com/embed/VIDEO_ID, /e/, /v/, /shorts/, /live/
#   - https://www.youtube.com/user/NAME/.../VIDEO_ID  (old channel-style paths)
#   - https://youtu.be/VIDEO_ID
# The ID has to be followed by a query/path/fragment separator, a quote,
# whitespace, or the end of the string, so a longer token isn't truncated.
_URL_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?|shorts|live)/|.*[?&]v=)|youtu\.be/)"
    r"([^\"&?/\s]{11})"
    r"(?=[?&/#\"\s]|$)"
)

_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

_FORMATS = ("text", "json")


# ---------------------------------------------------------------------------
# URL / ID parsing
# ---------------------------------------------------------------------------

def resolve_video_id(url_or_id: str) -> str:
    """
    Extract a YouTube video ID from a URL, or accept a raw 11-char ID.

    Any input that is exactly 11 characters long is returned unchanged,
    whatever it contains.  Anything else must be a URL in one of the shapes
    listed on _URL_PATTERN.

    Args:
        url_or_id: A YouTube URL or a raw video ID.

    Returns:
        The 11-character video ID.

    Raises:
        TranscriptError: INVALID_IDENTIFIER if no ID can be found.
    """
    if len(url_or_id) == VIDEO_ID_LENGTH:
        return url_or_id

    match = _URL_PATTERN.search(url_or_id)
    if match:
        return match.group(1)

    raise TranscriptError.invalid_identifier(url_or_id)


# ---------------------------------------------------------------------------
# Transcript fetching
# ---------------------------------------------------------------------------

def fetch_transcript(
    url_or_id: str,
    request: TranscriptRequest | None = None,
    *,
    fetcher: PageFetcher | None = None,
) -> tuple[list[TranscriptEntry], str]:
    """
    Run the full scrape for one video.

    Steps, strictly one after another: resolve the ID, GET the watch page,
    pull the title and caption catalog out of it, pick a track, GET the
    track, and parse its markup.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        request:   Optional language preference.  Without one, YouTube's
                   default (first listed) track is used.
        fetcher:   HTTP collaborator.  Defaults to a fresh HttpPageFetcher,
                   closed again before returning.

    Returns:
        (entries, video_title).  Every entry is tagged with the requested
        language code verbatim, or "" when no language was requested.

    Raises:
        TranscriptError: With kind INVALID_IDENTIFIER, RATE_LIMITED,
            VIDEO_UNAVAILABLE, TRANSCRIPTS_DISABLED, TRANSCRIPTS_NOT_AVAILABLE,
            LANGUAGE_NOT_AVAILABLE, or NETWORK_ERROR (watch page only; a
            failed track download is reported as TRANSCRIPTS_NOT_AVAILABLE).
    """
    if fetcher is None:
        with HttpPageFetcher() as owned:
            return fetch_transcript(url_or_id, request, fetcher=owned)

    request = request or TranscriptRequest()
    language_code = request.preferred_language or ""

    video_id = resolve_video_id(url_or_id)

    # The status code is ignored on purpose: YouTube's error pages are still
    # HTML, and classify_missing_catalog() reads them to say what went wrong.
    html = fetcher.fetch(_WATCH_URL.format(video_id=video_id)).text

    title = extract_title(html)
    tracks = extract_caption_catalog(html, video_id)
    track = select_track(tracks, request.preferred_language, video_id)
    _logger.debug(
        "Video %s (%r): %d caption track(s), using %r",
        video_id, title, len(tracks), track.language_code,
    )

    try:
        page = fetcher.fetch(track.base_url)
    except TranscriptError as exc:
        if exc.kind is not ErrorKind.NETWORK_ERROR:
            raise
        raise TranscriptError.transcripts_not_available(video_id) from exc

    if page.status >= 400:
        _logger.debug("Caption track for %s returned HTTP %d", video_id, page.status)
        raise TranscriptError.transcripts_not_available(video_id)

    entries = parse_transcript(page.text, language_code)
    _logger.debug("Parsed %d transcript entries for %s", len(entries), video_id)
    return entries, title


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_text(entries: list[TranscriptEntry]) -> str:
    """
    Convert transcript entries into plain text, one line per entry.

    Args:
        entries: Entries from fetch_transcript().

    Returns:
        A single string with one caption per line (no trailing newline).
    """
    return "\n".join(entry.text for entry in entries)


def format_json(entries: list[TranscriptEntry], video_id: str, title: str) -> dict:
    """
    Build a JSON-serialisable dict from transcript entries.

    Returns:
        A dict with keys: video_id, title, segment_count, segments.
        Each segment has: text, start, duration, lang.
    """
    segments = [entry.to_dict() for entry in entries]
    return {
        "video_id": video_id,
        "title": title,
        "segment_count": len(segments),
        "segments": segments,
    }


# ---------------------------------------------------------------------------
# High-level convenience function (main public API)
# ---------------------------------------------------------------------------

def extract(
    url_or_id: str,
    language: str | None = None,
    fmt: str = "text",
    *,
    fetcher: PageFetcher | None = None,
) -> str | dict:
    """
    One-call interface: parse URL → scrape transcript → format output.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        language:  Optional exact language code (e.g. "fr").
        fmt:       "text" for plain text, "json" for a dict with timestamps.
        fetcher:   HTTP collaborator, see fetch_transcript().

    Returns:
        A plain-text string (fmt="text") or a dict (fmt="json").

    Raises:
        ValueError:      If fmt is not "text" or "json".
        TranscriptError: On any extraction failure.
    """
    if fmt not in _FORMATS:
        raise ValueError(f"Unknown format {fmt!r}; expected 'text' or 'json'")

    video_id = resolve_video_id(url_or_id)
    entries, title = fetch_transcript(
        video_id, TranscriptRequest(preferred_language=language), fetcher=fetcher,
    )

    if fmt == "json":
        return format_json(entries, video_id, title)

    return format_text(entries)
