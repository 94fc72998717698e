"""
test_cli.py — Tests for the command-line interface.

Covers:
    - _sanitize_filename() with various unsafe characters
    - format_lines() field selection and prefixes
    - The `get` subcommand: file output, --stdout, JSON, errors, options
"""

from __future__ import annotations

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from yt_transcript_scraper.cli import _sanitize_filename, format_lines, main
from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.models import TranscriptEntry, TranscriptRequest


_ENTRIES = [
    TranscriptEntry(text="Hello", duration=2.0, offset=1.5, language_code="en"),
    TranscriptEntry(text="World", duration=1.0, offset=3.5, language_code="en"),
]

_TITLE = "Never Gonna Give You Up"


# ---------------------------------------------------------------------------
# _sanitize_filename — filesystem-safe name generation
# ---------------------------------------------------------------------------

class TestSanitizeFilename:
    """Tests for the _sanitize_filename() helper that cleans unsafe characters."""

    def test_replaces_spaces(self) -> None:
        assert _sanitize_filename("Never Gonna Give You Up") == "Never_Gonna_Give_You_Up"

    def test_replaces_colons_and_slashes(self) -> None:
        assert _sanitize_filename("Part 1: AC/DC") == "Part_1__AC_DC"

    def test_multiple_unsafe_chars(self) -> None:
        assert _sanitize_filename('A<B>C:D"E/F\\G|H?I*J') == "A_B_C_D_E_F_G_H_I_J"

    def test_strips_leading_trailing_dots(self) -> None:
        assert _sanitize_filename("..hidden..") == "hidden"

    def test_truncates_to_200_characters(self) -> None:
        assert len(_sanitize_filename("a" * 500)) == 200

    def test_safe_string_unchanged(self) -> None:
        assert _sanitize_filename("Normal-Title_2") == "Normal-Title_2"

    def test_empty_string(self) -> None:
        assert _sanitize_filename("") == ""


# ---------------------------------------------------------------------------
# format_lines — field-per-line layout
# ---------------------------------------------------------------------------

class TestFormatLines:
    """Tests for the text layout written by `get`."""

    def test_default_is_text_then_blank_line(self) -> None:
        assert format_lines(_ENTRIES) == "Hello\nWorld\n"

    def test_text_prefix(self) -> None:
        assert format_lines(_ENTRIES, text_prefix=True) == "Text: Hello\n\nText: World\n\n"

    def test_all_fields(self) -> None:
        result = format_lines(
            _ENTRIES[:1],
            show_duration=True,
            show_offset=True,
            show_lang=True,
            text_prefix=True,
        )
        assert result == "Text: Hello\nDuration: 2.00\nOffset: 1.50\nLanguage: en\n\n"

    def test_no_fields(self) -> None:
        """With every field off, each entry is just a blank line."""
        assert format_lines(_ENTRIES, show_text=False) == "\n\n"

    def test_empty_transcript(self) -> None:
        assert format_lines([]) == ""


# ---------------------------------------------------------------------------
# CLI `get` subcommand
# ---------------------------------------------------------------------------

class TestGet:
    """Tests for `yt-transcript get` with fetch_transcript mocked out."""

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_writes_file_named_after_title(self, mock_fetch: MagicMock, tmp_path) -> None:
        mock_fetch.return_value = (_ENTRIES, _TITLE)

        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["get", "dQw4w9WgXcQ"])

            assert result.exit_code == 0
            assert os.path.exists("Never_Gonna_Give_You_Up.txt")
            with open("Never_Gonna_Give_You_Up.txt", encoding="utf-8") as fh:
                assert fh.read() == "Hello\nWorld\n"

        assert "Transcript saved to Never_Gonna_Give_You_Up.txt" in result.output

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_explicit_output_path(self, mock_fetch: MagicMock, tmp_path) -> None:
        mock_fetch.return_value = (_ENTRIES, _TITLE)
        out = tmp_path / "rick.txt"

        result = CliRunner().invoke(main, ["get", "dQw4w9WgXcQ", "-o", str(out), "--show-offset"])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "HelloOffset: 1.50\n\nWorldOffset: 3.50\n\n"

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_stdout(self, mock_fetch: MagicMock) -> None:
        mock_fetch.return_value = (_ENTRIES, _TITLE)

        result = CliRunner().invoke(main, ["get", "dQw4w9WgXcQ", "--stdout", "--text-prefix"])

        assert result.exit_code == 0
        assert result.output == "Text: Hello\n\nText: World\n\n"

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_disable_all(self, mock_fetch: MagicMock) -> None:
        mock_fetch.return_value = (_ENTRIES, _TITLE)

        result = CliRunner().invoke(
            main, ["get", "dQw4w9WgXcQ", "--stdout", "--show-lang", "--disable-all"],
        )

        assert result.exit_code == 0
        assert result.output == "\n\n"

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_json_format(self, mock_fetch: MagicMock) -> None:
        mock_fetch.return_value = (_ENTRIES, _TITLE)

        result = CliRunner().invoke(
            main, ["get", "https://youtu.be/dQw4w9WgXcQ", "--format", "json", "--stdout"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["video_id"] == "dQw4w9WgXcQ"
        assert data["title"] == _TITLE
        assert data["segment_count"] == 2

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_passes_language_and_timeout(self, mock_fetch: MagicMock) -> None:
        mock_fetch.return_value = (_ENTRIES, _TITLE)

        result = CliRunner().invoke(
            main, ["get", "dQw4w9WgXcQ", "--lang", "fr", "--timeout", "5", "--stdout"],
        )

        assert result.exit_code == 0
        args, kwargs = mock_fetch.call_args
        assert args == ("dQw4w9WgXcQ", TranscriptRequest(preferred_language="fr"))
        assert kwargs["fetcher"]._timeout == 5.0

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_no_language_means_default_track(self, mock_fetch: MagicMock) -> None:
        mock_fetch.return_value = (_ENTRIES, _TITLE)

        CliRunner().invoke(main, ["get", "dQw4w9WgXcQ", "--stdout"])

        args, _ = mock_fetch.call_args
        assert args[1] == TranscriptRequest(preferred_language=None)

    @pytest.mark.parametrize(
        "error",
        [
            TranscriptError.rate_limited(),
            TranscriptError.transcripts_disabled("dQw4w9WgXcQ"),
            TranscriptError.language_not_available("dQw4w9WgXcQ", "de", ["en"]),
        ],
    )
    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_error_exits_with_status_1(self, mock_fetch: MagicMock, error: TranscriptError) -> None:
        mock_fetch.side_effect = error

        result = CliRunner().invoke(main, ["get", "dQw4w9WgXcQ"])

        assert result.exit_code == 1
        assert f"Error: {error.message}" in result.output

    def test_invalid_identifier(self) -> None:
        """A bad identifier fails before any network access."""
        result = CliRunner().invoke(main, ["get", "not-a-video-id"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_unwritable_output_path(self, mock_fetch: MagicMock, tmp_path) -> None:
        """A missing output directory is reported, not raised."""
        mock_fetch.return_value = (_ENTRIES, _TITLE)
        out = tmp_path / "no" / "such" / "dir.txt"

        result = CliRunner().invoke(main, ["get", "dQw4w9WgXcQ", "-o", str(out)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert f"Error: cannot write {out}" in result.output
        assert "Transcript saved" not in result.output

    @patch("yt_transcript_scraper.cli.fetch_transcript")
    def test_verbose_flag(self, mock_fetch: MagicMock) -> None:
        mock_fetch.return_value = ([], _TITLE)

        with patch("yt_transcript_scraper.cli.logging.basicConfig") as mock_basic:
            result = CliRunner().invoke(main, ["--verbose", "get", "dQw4w9WgXcQ", "--stdout"])

        assert result.exit_code == 0
        mock_basic.assert_called_once()
