"""
fetcher.py — Blocking HTTP GET used to download the watch page and the
caption track.

YouTube serves a stripped-down page (often without the caption catalog) to
clients that don't look like a browser, so every request carries a desktop
Chrome User-Agent.

The pipeline only depends on the PageFetcher protocol; HttpPageFetcher is
the requests-based implementation used by default.  Tests substitute a fake
that returns canned pages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import requests

from yt_transcript_scraper.errors import TranscriptError

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36"
)

_DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept-Language": "en-US,en",
}

# Seconds to wait for a response before giving up.
DEFAULT_TIMEOUT = 30.0


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FetchedPage:
    """
    A fully-read HTTP response.

    Attributes:
        url:    The URL that was requested.
        status: HTTP status code.
        body:   Raw response body.
    """
    url: str
    status: int
    body: bytes

    @property
    def text(self) -> str:
        # Invalid bytes are replaced rather than raising, the scrapers only
        # look for ASCII markers anyway.
        return self.body.decode("utf-8", errors="replace")


class PageFetcher(Protocol):
    """Anything that can GET a URL and hand back a FetchedPage."""

    def fetch(self, url: str) -> FetchedPage:
        """
        Raises:
            TranscriptError: kind NETWORK_ERROR on any transport failure.
        """
        ...


# ---------------------------------------------------------------------------
# requests-based implementation
# ---------------------------------------------------------------------------

class HttpPageFetcher:
    """
    PageFetcher backed by a requests.Session.

    A session passed in stays the caller's to close; one created here is
    closed by close() or on leaving a with-block.
    """

    def __init__(
        self,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    def __enter__(self) -> HttpPageFetcher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def fetch(self, url: str) -> FetchedPage:
        _logger.debug("GET %s", url)
        try:
            # The body is read completely inside the with-block so the
            # connection goes back to the pool before the caller continues.
            with self._session.get(
                url, headers=_DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                page = FetchedPage(
                    url=url,
                    status=response.status_code,
                    body=response.content,
                )
        except requests.RequestException as exc:
            raise TranscriptError.network_error(url, exc) from exc

        _logger.debug("GET %s -> %d (%d bytes)", url, page.status, len(page.body))
        return page
