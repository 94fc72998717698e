"""
tracks.py — Choose which caption track to download.
"""

from __future__ import annotations

from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.models import CaptionTrack


def select_track(
    tracks: list[CaptionTrack],
    preferred_language: str | None,
    video_id: str,
) -> CaptionTrack:
    """
    Pick one track from the caption catalog.

    With no preference, the first track wins: YouTube lists the video's
    default caption language first.  With a preference, the language code
    must match exactly.  "en" does not match "en-US", and there is no
    fallback to a related dialect.

    Args:
        tracks:             Non-empty list from extract_caption_catalog().
        preferred_language: Language code to look for, or None / "" for any.
        video_id:           The video ID (used in the error payload).

    Raises:
        TranscriptError: LANGUAGE_NOT_AVAILABLE when no track matches.  The
            error lists every available code in catalog order.
    """
    if not preferred_language:
        return tracks[0]

    for track in tracks:
        if track.language_code == preferred_language:
            return track

    raise TranscriptError.language_not_available(
        video_id,
        preferred_language,
        [track.language_code for track in tracks],
    )
