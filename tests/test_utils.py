"""Tests for tubescribe.utils module."""

from __future__ import annotations

import pytest

from tubescribe.utils import is_valid_url, sanitize_filename


class TestSanitizeFilename:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("My Video Title.mp3", "My_Video_Title.mp3"),
            ("Video/Title:With?Special*Chars", "Video_Title_With_Special_Chars"),
            ("Another\\\\Video|Title<>", "Another__Video_Title__"),
            ("NoSpecialCharsHere", "NoSpecialCharsHere"),
            ("", ""),
            ("   leading and trailing spaces   ", "___leading_and_trailing_spaces___"),
            ('quote"d', "quote_d"),
        ],
    )
    def test_sanitize(self, raw: str, expected: str) -> None:
        assert sanitize_filename(raw) == expected

    def test_keeps_ids_intact(self) -> None:
        assert sanitize_filename("dQw4w9WgXcQ.wav") == "dQw4w9WgXcQ.wav"


class TestIsValidUrl:
    def test_valid_youtube_url(self) -> None:
        assert is_valid_url("https://www.youtube.com/watch?v=X")

    def test_missing_scheme(self) -> None:
        assert not is_valid_url("www.youtube.com/watch?v=X")

    def test_plain_text(self) -> None:
        assert not is_valid_url("not a url")

    def test_empty(self) -> None:
        assert not is_valid_url("")
