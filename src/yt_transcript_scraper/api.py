"""
api.py — FastAPI REST API for yt-transcript-scraper.

Endpoints:
    GET /transcript/{video_id}  — Scrape a transcript (text or JSON).
    GET /health                 — Simple health-check for load balancers / monitoring.

Run with:
    uvicorn yt_transcript_scraper.api:app

The global exception handler catches any TranscriptError and converts it to
the appropriate HTTP response using the status code stored on the exception.
"""

from __future__ import annotations

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.extractor import extract

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="YouTube Transcript Scraper API",
    description="Scrape YouTube video transcripts as plain text or structured JSON.",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Global error handler
# ---------------------------------------------------------------------------

@app.exception_handler(TranscriptError)
async def transcript_error_handler(request: Request, exc: TranscriptError) -> JSONResponse:
    """
    Translate any TranscriptError into an HTTP error response.

    The http_status on the exception drives the response code; the kind is
    echoed back so clients can switch on it without parsing the message.
    """
    content: dict = {"error": exc.message, "kind": exc.kind.value}
    if exc.available_languages is not None:
        content["available_languages"] = list(exc.available_languages)
    return JSONResponse(status_code=exc.http_status, content=content)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

# response_model=None is required because we return different Response subclasses
# (PlainTextResponse or JSONResponse) depending on the format param.
@app.get("/transcript/{video_id}", response_model=None)
def get_transcript(
    video_id: str,
    format: str = Query(
        default="text",
        description="Output format: 'text' for plain transcript, 'json' for structured data with timestamps.",
        pattern="^(text|json)$",
    ),
    lang: str = Query(
        default="",
        description="Exact language code of the caption track (e.g. 'fr'). Empty uses the video's default track.",
    ),
) -> PlainTextResponse | JSONResponse:
    """
    Scrape the transcript for a single YouTube video.

    **video_id** is the 11-character YouTube video identifier
    (e.g. `dQw4w9WgXcQ`).

    Declared as a plain `def` so FastAPI runs the blocking scrape in its
    threadpool instead of on the event loop.
    """
    # extract() may raise TranscriptError, the global handler turns it into
    # the right HTTP error response.
    result = extract(video_id, language=lang or None, fmt=format)

    if isinstance(result, dict):
        return JSONResponse(content=result)
    return PlainTextResponse(content=result)


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """
    Minimal health-check endpoint.

    Returns HTTP 200 with {"status": "ok"}.
    """
    return {"status": "ok"}
