"""
errors.py — Error taxonomy for yt-transcript-scraper.

Every way a scrape can fail is reported as a single exception type,
TranscriptError, tagged with an ErrorKind.  Callers switch on `exc.kind`
instead of catching a family of subclasses.  Each error also carries an
`http_status` so the FastAPI error handler can translate it directly into
the right HTTP response code.

Kinds (HTTP status in brackets):
    INVALID_IDENTIFIER        [400]  Input isn't a recognisable video reference.
    RATE_LIMITED              [429]  YouTube answered with a captcha wall.
    VIDEO_UNAVAILABLE         [404]  Video removed, private, or never existed.
    TRANSCRIPTS_DISABLED      [404]  Video is playable but captions are off.
    TRANSCRIPTS_NOT_AVAILABLE [404]  Caption catalog empty, or track fetch failed.
    LANGUAGE_NOT_AVAILABLE    [400]  No track in the requested language.
    NETWORK_ERROR             [502]  Transport failure fetching the watch page.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Tag identifying which failure a TranscriptError describes."""

    INVALID_IDENTIFIER = "invalid_identifier"
    RATE_LIMITED = "rate_limited"
    VIDEO_UNAVAILABLE = "video_unavailable"
    TRANSCRIPTS_DISABLED = "transcripts_disabled"
    TRANSCRIPTS_NOT_AVAILABLE = "transcripts_not_available"
    LANGUAGE_NOT_AVAILABLE = "language_not_available"
    NETWORK_ERROR = "network_error"


# Suggested HTTP status per kind, used by the API layer.
_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.VIDEO_UNAVAILABLE: 404,
    ErrorKind.TRANSCRIPTS_DISABLED: 404,
    ErrorKind.TRANSCRIPTS_NOT_AVAILABLE: 404,
    ErrorKind.LANGUAGE_NOT_AVAILABLE: 400,
    ErrorKind.NETWORK_ERROR: 502,
}


class TranscriptError(Exception):
    """
    The single exception raised by every stage of the extraction pipeline.

    Build instances through the named constructors below rather than calling
    the class directly; each constructor fills in only the payload fields that
    belong to its kind and leaves the rest as None.

    Attributes:
        kind:                Which failure this is (an ErrorKind).
        message:             Human-readable description of what went wrong.
        http_status:         Suggested HTTP status code for the API layer.
        video_id:            The video identifier, for kinds that have one.
        requested_language:  The language code asked for (LANGUAGE_NOT_AVAILABLE).
        available_languages: Language codes the video offers, in catalog order
                             (LANGUAGE_NOT_AVAILABLE).
        cause:               The underlying transport exception (NETWORK_ERROR).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        video_id: str | None = None,
        requested_language: str | None = None,
        available_languages: tuple[str, ...] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.http_status = _HTTP_STATUS[kind]
        self.video_id = video_id
        self.requested_language = requested_language
        self.available_languages = available_languages
        self.cause = cause

    def __repr__(self) -> str:
        return f"TranscriptError(kind={self.kind.name}, message={self.message!r})"

    # -----------------------------------------------------------------------
    # Named constructors, one per kind
    # -----------------------------------------------------------------------

    @classmethod
    def invalid_identifier(cls, raw: str) -> TranscriptError:
        return cls(
            ErrorKind.INVALID_IDENTIFIER,
            f"Impossible to retrieve YouTube video ID from: {raw!r}",
        )

    @classmethod
    def rate_limited(cls) -> TranscriptError:
        return cls(
            ErrorKind.RATE_LIMITED,
            "YouTube is receiving too many requests from this IP and now "
            "requires solving a captcha to continue",
        )

    @classmethod
    def video_unavailable(cls, video_id: str) -> TranscriptError:
        return cls(
            ErrorKind.VIDEO_UNAVAILABLE,
            f"The video is no longer available ({video_id})",
            video_id=video_id,
        )

    @classmethod
    def transcripts_disabled(cls, video_id: str) -> TranscriptError:
        return cls(
            ErrorKind.TRANSCRIPTS_DISABLED,
            f"Transcript is disabled on this video ({video_id})",
            video_id=video_id,
        )

    @classmethod
    def transcripts_not_available(cls, video_id: str) -> TranscriptError:
        return cls(
            ErrorKind.TRANSCRIPTS_NOT_AVAILABLE,
            f"No transcripts are available for this video ({video_id})",
            video_id=video_id,
        )

    @classmethod
    def language_not_available(
        cls,
        video_id: str,
        requested: str,
        available: list[str] | tuple[str, ...],
    ) -> TranscriptError:
        """
        The video has caption tracks, but none matches `requested` exactly.

        `available` lists every track's language code in catalog order, so
        the caller can tell the user what to ask for instead.
        """
        available = tuple(available)
        return cls(
            ErrorKind.LANGUAGE_NOT_AVAILABLE,
            f"No transcripts are available in {requested} for this video "
            f"({video_id}). Available languages: {', '.join(available)}",
            video_id=video_id,
            requested_language=requested,
            available_languages=available,
        )

    @classmethod
    def network_error(cls, url: str, cause: BaseException) -> TranscriptError:
        """Transport failure (DNS, connection reset, timeout...) fetching `url`."""
        return cls(
            ErrorKind.NETWORK_ERROR,
            f"Request to {url} failed: {cause}",
            cause=cause,
        )
