"""Unit tests for discovering and parsing source documents."""

from datetime import datetime

import pytest
from phonetic_search.loader import discover_documents, matches, parse_document


HTML_PAGE = """<html>
<head>
  <title> Fast Fourier Transform </title>
  <meta name="keywords" content="signal, spectrum">
  <meta name="date" content="2021-03-05">
</head>
<body><p>The <b>FFT</b> computes a discrete transform.</p></body>
</html>"""


class TestMatches:
    """Test cases for glob matching."""

    @pytest.mark.parametrize("path, expected", [
        ("index.html", True),
        ("docs/a/page.html", True),
        ("notes.htm", True),
        ("image.png", False),
        ("docs/readme.md", False),
    ])
    def test_default_patterns(self, path, expected):
        assert matches(path, ["**/*.htm", "**/*.html"]) is expected

    def test_directory_pattern(self):
        assert matches("blog/post.md", ["blog/*.md"])
        assert not matches("docs/post.md", ["blog/*.md"])


class TestParseDocument:
    """Test cases for parsing file contents."""

    def test_html(self):
        document = parse_document("fft.html", HTML_PAGE)

        assert document.path == "fft.html"
        assert document.title == "Fast Fourier Transform"
        assert document.metadata["keywords"] == "signal, spectrum"
        assert document.date == datetime(2021, 3, 5)
        assert document.metadata["contents"] == HTML_PAGE

    def test_html_without_metadata(self):
        document = parse_document("bare.html", "<p>hello</p>")

        assert document.title is None
        assert document.date is None
        assert "keywords" not in document.metadata

    def test_unparseable_date_kept(self):
        document = parse_document("a.html", '<meta name="date" content="spring 2020">')
        assert document.date == "spring 2020"

    def test_markdown(self):
        document = parse_document("notes.md", "intro\n# Slow Cooking\n\nBraise [it](x.md).")

        assert document.title == "Slow Cooking"
        assert document.metadata["contents"].startswith("intro")

    def test_other_files(self):
        document = parse_document("notes.txt", "plain text")
        assert document.metadata == {"contents": "plain text"}


class TestDiscoverDocuments:
    """Test cases for walking a source directory."""

    @pytest.fixture
    def site(self, tmp_path):
        """A small site on disk."""
        (tmp_path / "docs").mkdir()
        (tmp_path / "index.html").write_text(HTML_PAGE, encoding="utf-8")
        (tmp_path / "docs" / "cooking.html").write_text(
            "<title>Slow Cooking</title>", encoding="utf-8"
        )
        (tmp_path / "docs" / "notes.md").write_text("# Notes", encoding="utf-8")
        (tmp_path / "logo.png").write_bytes(b"\x89PNG")
        return tmp_path

    def test_default_match(self, site):
        documents = discover_documents(site)

        assert [document.path for document in documents] == ["docs/cooking.html", "index.html"]
        assert documents[0].title == "Slow Cooking"

    def test_custom_match(self, site):
        documents = discover_documents(site, ["**/*.md"])
        assert [document.path for document in documents] == ["docs/notes.md"]

    def test_unreadable_file_skipped(self, site):
        (site / "broken.html").write_bytes(b"<title>\xff\xfe</title>")

        documents = discover_documents(site)
        assert "broken.html" not in [document.path for document in documents]
        assert len(documents) == 2
