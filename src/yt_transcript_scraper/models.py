"""
models.py — Plain data carriers shared by the pipeline stages.

All of these are frozen dataclasses: they are created fresh for each
transcript request, handed from one stage to the next, and never mutated
or persisted afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Request configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranscriptRequest:
    """
    Caller-supplied options for a single transcript request.

    Attributes:
        preferred_language: Exact language code of the track to use
                            (e.g. "fr").  None or "" means "take the first
                            track YouTube lists", which is the video's default.
    """
    preferred_language: str | None = None


# ---------------------------------------------------------------------------
# Caption catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CaptionTrack:
    """
    One language variant of a video's captions, as listed on the watch page.

    Attributes:
        base_url:      URL of the timed-text resource for this track.
        language_code: The track's language code (e.g. "en", "pt-BR").
    """
    base_url: str
    language_code: str


# ---------------------------------------------------------------------------
# Transcript output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranscriptEntry:
    """
    A single timed caption segment.

    Attributes:
        text:          Caption text, exactly as it appears in the markup
                       (character entities are NOT decoded).
        duration:      How long the caption is shown, in seconds.
        offset:        When the caption starts, in seconds from video start.
        language_code: The language code the caller asked for.
    """
    text: str
    duration: float
    offset: float
    language_code: str

    def to_dict(self) -> dict:
        """JSON-serialisable form used by the json output format."""
        return {
            "text": self.text,
            "start": self.offset,
            "duration": self.duration,
            "lang": self.language_code,
        }
