"""Integration tests for building an index artifact from files."""

import argparse
import json

import pytest
from phonetic_search.build import build_site_index, main, output_path, parse_field
from phonetic_search.config import Settings
from phonetic_search.core.engine import search_artifact


@pytest.fixture
def site(tmp_path):
    """A small site on disk."""
    (tmp_path / "docs").mkdir()
    (tmp_path / "index.html").write_text(
        "<title>Home</title><meta name='date' content='2020-05-01'><p>Welcome</p>",
        encoding="utf-8",
    )
    (tmp_path / "docs" / "fft.html").write_text(
        "<title>Fast Fourier Transform</title><p>Spectral <b>analysis</b> of signals</p>",
        encoding="utf-8",
    )
    (tmp_path / "docs" / "notes.md").write_text("# Slow Cooking\nBraise it.", encoding="utf-8")
    return tmp_path


class TestBuildSiteIndex:
    """Test cases for build_site_index."""

    def test_writes_artifact(self, site):
        settings = Settings(source_dir=str(site), index_path=None)
        index = build_site_index(settings)

        path = site / "index.json"
        assert path.exists()
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data == index.to_dict()
        assert data["entries"] == [
            {"title": "Fast Fourier Transform", "url": "/docs/fft"},
            {"title": "Home", "url": "", "date": "May 2020"},
        ]

    def test_contents_are_searchable(self, site):
        index = build_site_index(Settings(source_dir=str(site), index_path=None), write=False)

        results = search_artifact("spectrel analysys", index.to_dict())
        assert [result["url"] for result in results] == ["/docs/fft"]

    def test_markdown_fields(self, site):
        settings = Settings(
            source_dir=str(site),
            match=["**/*.md"],
            index_fields={"title": True, "contents": "markdown"},
            url_prefix="/site/",
        )
        index = build_site_index(settings, write=False)

        assert [entry.url for entry in index.entries] == ["/site/docs/notes.md"]
        assert search_artifact("braize", index.to_dict())[0]["title"] == "Slow Cooking"

    def test_missing_source_dir(self):
        with pytest.raises(ValueError):
            build_site_index(Settings(source_dir=None), write=False)

    def test_output_path(self, tmp_path):
        assert output_path(Settings(source_dir=str(tmp_path), index_path=None)) == tmp_path / "index.json"
        assert output_path(Settings(index_path=str(tmp_path / "x.json"))) == tmp_path / "x.json"


class TestCommandLine:
    """Test cases for the build command."""

    def test_parse_field(self):
        assert parse_field("contents=html") == {"contents": "html"}
        assert parse_field("title=True") == {"title": True}
        assert parse_field("keywords=false") == {"keywords": False}

    def test_parse_field_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_field("contents")

    def test_main(self, site, tmp_path):
        output = tmp_path / "out" / "search.json"
        code = main([
            "--source", str(site),
            "--output", str(output),
            "--field", "title=true",
            "--field", "contents=html",
            "--workers", "2",
        ])

        assert code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["entries"]) == 2
        assert "frr" in data["index"]
