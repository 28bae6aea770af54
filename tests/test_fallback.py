"""Tests for the plain-text fallback."""

from unittest.mock import patch

from html_to_md.fallback import extract_text, strip_tags


class TestExtractText:
    def test_drops_markup(self):
        assert extract_text("<p>Hello <b>world</b></p>") == "Hello world"

    def test_decodes_entities(self):
        assert extract_text("<p>a &amp; b</p>") == "a & b"

    def test_skips_script_and_style(self):
        html = "<style>p{}</style><p>x</p><script>var y;</script>"
        assert extract_text(html) == "x"

    def test_returns_string_for_garbage(self):
        assert isinstance(extract_text("<<<<>>>"), str)

    def test_unfinished_tag_at_end_is_dropped(self):
        assert extract_text('<p>Hi <a href="x') == "Hi "

    def test_lone_angle_bracket_in_text_is_kept(self):
        assert extract_text("<p>a < b</p>") == "a < b"

    def test_tokenizer_failure_strips_tags(self):
        with patch("html_to_md.fallback._TextCollector.feed", side_effect=RuntimeError("boom")):
            assert extract_text("<p>Hello <b>world</b></p>") == "Hello world"


class TestStripTags:
    def test_removes_tags(self):
        assert strip_tags("<a href='x'>link</a> text") == "link text"

    def test_unclosed_tag_kept(self):
        assert strip_tags("a < b") == "a < b"
