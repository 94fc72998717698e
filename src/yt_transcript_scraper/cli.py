"""
cli.py — Command-line interface for yt-transcript-scraper.

Provides the `yt-transcript` command group (registered as a console script
in pyproject.toml):

    get       Scrape a transcript from YouTube and write it to a file.

Usage examples:
    yt-transcript get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    yt-transcript get dQw4w9WgXcQ --lang fr --show-offset -o rick.txt
    yt-transcript get dQw4w9WgXcQ --format json --stdout
"""

from __future__ import annotations

import json
import logging
import re
import sys

import click

from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.extractor import fetch_transcript, format_json, resolve_video_id
from yt_transcript_scraper.fetcher import DEFAULT_TIMEOUT, HttpPageFetcher
from yt_transcript_scraper.models import TranscriptEntry, TranscriptRequest


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Characters replaced with an underscore when a video title becomes a filename.
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|? *]')

_MAX_FILENAME_LENGTH = 200


# ---------------------------------------------------------------------------
# Helper functions — filename sanitization and output layout
# ---------------------------------------------------------------------------

def _sanitize_filename(name: str) -> str:
    """
    Turn a video title into something safe to use as a filename.

    Replaces < > : " / \\ | ? * and spaces with underscores, strips leading
    and trailing spaces and dots, and caps the result at 200 characters.

    Args:
        name: The raw title (e.g. "My Video: Part 1/2").

    Returns:
        The sanitized name (e.g. "My_Video__Part_1_2").
    """
    sanitized = _UNSAFE_FILENAME_CHARS.sub("_", name)
    sanitized = sanitized.strip(" .")
    return sanitized[:_MAX_FILENAME_LENGTH]


def format_lines(
    entries: list[TranscriptEntry],
    *,
    show_text: bool = True,
    show_duration: bool = False,
    show_offset: bool = False,
    show_lang: bool = False,
    text_prefix: bool = False,
) -> str:
    """
    Render entries in the field-per-line text layout.

    Each entry is written as the selected fields followed by a blank line:

        Text: Hello          (just "Hello", with no newline, without text_prefix)
        Duration: 2.00
        Offset: 1.50
        Language: en
    """
    parts: list[str] = []
    for entry in entries:
        if show_text:
            if text_prefix:
                parts.append(f"Text: {entry.text}\n")
            else:
                parts.append(entry.text)
        if show_duration:
            parts.append(f"Duration: {entry.duration:.2f}\n")
        if show_offset:
            parts.append(f"Offset: {entry.offset:.2f}\n")
        if show_lang:
            parts.append(f"Language: {entry.language_code}\n")
        parts.append("\n")
    return "".join(parts)


# ---------------------------------------------------------------------------
# CLI group — the top-level `yt-transcript` command
# ---------------------------------------------------------------------------

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log each request and parsing step to stderr.")
def main(verbose: bool) -> None:
    """
    YouTube Transcript Scraper — fetch video transcripts without an API key.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# Subcommand: get — scrape a transcript from YouTube
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--lang", "-l",
    default=None,
    help="Exact language code of the caption track (e.g. 'fr'). Defaults to the video's default track.",
)
@click.option(
    "--format", "-f",
    "fmt",                           # avoid shadowing the builtin "format"
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: field-per-line text, or JSON with timestamps.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path.  Defaults to the sanitized video title.",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print to stdout instead of writing a file.")
@click.option("--show-text/--hide-text", default=True, show_default=True, help="Include caption text.")
@click.option("--show-duration", is_flag=True, help="Include each caption's duration.")
@click.option("--show-offset", is_flag=True, help="Include each caption's start offset.")
@click.option("--show-lang", is_flag=True, help="Include each caption's language code.")
@click.option("--disable-all", is_flag=True, help="Turn off every field (text included).")
@click.option(
    "--text-prefix/--no-text-prefix",
    default=False,
    show_default=True,
    help="Prefix caption text with 'Text: ' and end it with a newline.",
)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for each HTTP response.",
)
def get(
    video: str,
    lang: str | None,
    fmt: str,
    output: str | None,
    to_stdout: bool,
    show_text: bool,
    show_duration: bool,
    show_offset: bool,
    show_lang: bool,
    disable_all: bool,
    text_prefix: bool,
    timeout: float,
) -> None:
    """
    Scrape a YouTube video transcript.

    VIDEO can be a full YouTube URL or an 11-character video ID.
    """
    try:
        with HttpPageFetcher(timeout=timeout) as fetcher:
            entries, title = fetch_transcript(
                video,
                TranscriptRequest(preferred_language=lang),
                fetcher=fetcher,
            )
    except TranscriptError as exc:
        # The message already says what went wrong, no traceback needed.
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    if fmt == "json":
        result = format_json(entries, resolve_video_id(video), title)
        text = json.dumps(result, indent=2, ensure_ascii=False) + "\n"
        extension = ".json"
    else:
        if disable_all:
            show_text = show_duration = show_offset = show_lang = False
        text = format_lines(
            entries,
            show_text=show_text,
            show_duration=show_duration,
            show_offset=show_offset,
            show_lang=show_lang,
            text_prefix=text_prefix,
        )
        extension = ".txt"

    if to_stdout:
        click.echo(text, nl=False)
        return

    if output is None:
        # An all-punctuation title can sanitize down to nothing.
        stem = _sanitize_filename(title) or resolve_video_id(video)
        output = stem + extension

    try:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        click.echo(f"Error: cannot write {output}: {exc.strerror or exc}", err=True)
        sys.exit(1)
    click.echo(f"Transcript saved to {output}", err=True)
