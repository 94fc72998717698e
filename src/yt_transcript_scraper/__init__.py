"""
yt_transcript_scraper — Scrape YouTube video transcripts from the watch page.

Public API:
    extract()            High-level one-call interface (URL → formatted output).
    fetch_transcript()   Scrape (entries, title) for a video URL or ID.
    resolve_video_id()   Parse a YouTube URL or accept a bare 11-char video ID.
    TranscriptRequest    Caller options (preferred language).
    CaptionTrack         One caption language listed on the watch page.
    TranscriptEntry      One timed caption segment.
    HttpPageFetcher      Default requests-based HTTP collaborator.

Errors:
    TranscriptError      The single exception type; switch on its `.kind`.
    ErrorKind            INVALID_IDENTIFIER, RATE_LIMITED, VIDEO_UNAVAILABLE,
                         TRANSCRIPTS_DISABLED, TRANSCRIPTS_NOT_AVAILABLE,
                         LANGUAGE_NOT_AVAILABLE, NETWORK_ERROR.

Usage:
    from yt_transcript_scraper import fetch_transcript, TranscriptRequest
    entries, title = fetch_transcript(
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        TranscriptRequest(preferred_language="en"),
    )
"""

from yt_transcript_scraper.errors import ErrorKind, TranscriptError
from yt_transcript_scraper.extractor import (
    extract,
    fetch_transcript,
    resolve_video_id,
)
from yt_transcript_scraper.fetcher import HttpPageFetcher
from yt_transcript_scraper.models import (
    CaptionTrack,
    TranscriptEntry,
    TranscriptRequest,
)

__all__ = [
    "extract",
    "fetch_transcript",
    "resolve_video_id",
    "TranscriptRequest",
    "CaptionTrack",
    "TranscriptEntry",
    "HttpPageFetcher",
    "TranscriptError",
    "ErrorKind",
]
