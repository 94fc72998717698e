"""
watch_page.py — Scrape the caption catalog out of a YouTube watch page.

YouTube has no public transcript API, but the watch page embeds the player
configuration as JSON inside a <script> tag.  The part we need looks like:

    ..."captions":{"playerCaptionsTracklistRenderer":{"captionTracks":[
        {"baseUrl":"https://www.youtube.com/api/timedtext?...","languageCode":"en",...},
        ...
    ]}},"videoDetails":{...

Rather than parsing the whole (huge, frequently changing) player response, we
slice out the text between the `"captions":` key and the `,"videoDetails`
key that follows it, and only JSON-decode that slice.

When the `"captions":` key is missing entirely, classify_missing_catalog()
looks at what else is on the page to decide why.
"""

from __future__ import annotations

import json
import re

from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.models import CaptionTrack

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# The key that introduces the caption catalog, and the sibling key right after it.
CAPTIONS_MARKER = '"captions":'
VIDEO_DETAILS_MARKER = ',"videoDetails'

# Present on the captcha interstitial YouTube shows to rate-limited IPs.
CAPTCHA_MARKER = 'class="g-recaptcha"'

# Present on every page for a video that exists, playable or not.
PLAYABILITY_MARKER = '"playabilityStatus":'

_TITLE_PATTERN = re.compile(r"<title>(.+?) - YouTube</title>")

UNTITLED_VIDEO = "Untitled Video"


class MarkerNotFoundError(LookupError):
    """Raised by locate_fragment() when one of its delimiting markers is absent."""

    def __init__(self, marker: str) -> None:
        super().__init__(f"Marker not found: {marker!r}")
        self.marker = marker


# ---------------------------------------------------------------------------
# Small scraping primitives
# ---------------------------------------------------------------------------

def extract_title(html: str) -> str:
    """
    Return the video title from the page's <title> tag.

    The tag reads "<title>VIDEO TITLE - YouTube</title>"; only the part before
    the " - YouTube" suffix is returned.  Falls back to "Untitled Video" when
    the tag is missing, this is never an error.
    """
    match = _TITLE_PATTERN.search(html)
    if match:
        return match.group(1)
    return UNTITLED_VIDEO


def locate_fragment(text: str, start_marker: str, end_marker: str) -> str:
    """
    Return the text between the first `start_marker` and the next `end_marker`.

    Neither marker is included in the result.

    Raises:
        MarkerNotFoundError: If `start_marker` doesn't occur in `text`, or
            `end_marker` doesn't occur anywhere after it.
    """
    start = text.find(start_marker)
    if start == -1:
        raise MarkerNotFoundError(start_marker)
    start += len(start_marker)

    end = text.find(end_marker, start)
    if end == -1:
        raise MarkerNotFoundError(end_marker)

    return text[start:end]


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

def classify_missing_catalog(html: str, video_id: str) -> TranscriptError:
    """
    Decide why a watch page has no caption catalog.

    Checks run in order and the first match wins.  The captcha check has to
    come first: the captcha interstitial lacks every other marker too, so
    it would otherwise be misreported as a missing video.

    Returns the error rather than raising it, so the caller decides where
    the traceback starts.
    """
    if CAPTCHA_MARKER in html:
        return TranscriptError.rate_limited()
    if PLAYABILITY_MARKER not in html:
        return TranscriptError.video_unavailable(video_id)
    return TranscriptError.transcripts_disabled(video_id)


# ---------------------------------------------------------------------------
# Catalog extraction
# ---------------------------------------------------------------------------

def _parse_catalog(fragment: str) -> list[CaptionTrack]:
    """
    JSON-decode the captions fragment into CaptionTrack objects.

    Missing keys are treated as "no tracks" and missing track fields as empty
    strings.  Values of the wrong type raise ValueError (json.JSONDecodeError
    is a ValueError subclass too), because they mean the slice isn't the
    structure we think it is.
    """
    catalog = json.loads(fragment)
    if catalog is None:
        return []
    if not isinstance(catalog, dict):
        raise ValueError("caption catalog is not an object")

    renderer = catalog.get("playerCaptionsTracklistRenderer")
    if renderer is None:
        return []
    if not isinstance(renderer, dict):
        raise ValueError("playerCaptionsTracklistRenderer is not an object")

    raw_tracks = renderer.get("captionTracks")
    if raw_tracks is None:
        return []
    if not isinstance(raw_tracks, list):
        raise ValueError("captionTracks is not a list")

    tracks: list[CaptionTrack] = []
    for raw in raw_tracks:
        if not isinstance(raw, dict):
            raise ValueError("caption track is not an object")
        base_url = raw.get("baseUrl")
        language_code = raw.get("languageCode")
        base_url = "" if base_url is None else base_url
        language_code = "" if language_code is None else language_code
        if not isinstance(base_url, str) or not isinstance(language_code, str):
            raise ValueError("caption track fields must be strings")
        tracks.append(CaptionTrack(base_url=base_url, language_code=language_code))
    return tracks


def extract_caption_catalog(html: str, video_id: str) -> list[CaptionTrack]:
    """
    Pull the list of caption tracks out of a watch page.

    Args:
        html:     The decoded watch-page body.
        video_id: The 11-character video ID (used in error payloads).

    Returns:
        A non-empty list of CaptionTrack, in the order YouTube lists them.

    Raises:
        TranscriptError: RATE_LIMITED / VIDEO_UNAVAILABLE / TRANSCRIPTS_DISABLED
            when the catalog key is missing (see classify_missing_catalog),
            TRANSCRIPTS_DISABLED when the catalog can't be decoded, and
            TRANSCRIPTS_NOT_AVAILABLE when it decodes to zero tracks.
    """
    try:
        fragment = locate_fragment(html, CAPTIONS_MARKER, VIDEO_DETAILS_MARKER)
    except MarkerNotFoundError as exc:
        if exc.marker == CAPTIONS_MARKER:
            raise classify_missing_catalog(html, video_id) from None
        # The catalog started but we can't tell where it ends.
        raise TranscriptError.transcripts_disabled(video_id) from exc

    try:
        tracks = _parse_catalog(fragment)
    except ValueError as exc:
        raise TranscriptError.transcripts_disabled(video_id) from exc

    if not tracks:
        raise TranscriptError.transcripts_not_available(video_id)

    return tracks
