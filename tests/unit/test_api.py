"""Unit tests for the file-level API."""

from pathlib import Path

import pytest

from mailmarker import MarkerOptions
from mailmarker.api import (
    MarkupResult,
    collect_input_files,
    is_directory_destination,
    mark_up_file,
    mark_up_files,
    read_source,
    resolve_destination,
    write_output,
)
from mailmarker.exceptions import FileAccessError, MalformedMarkupError, OutputWriteError, ValidationError
from mailmarker.exceptions import FileNotFoundError as MarkerFileNotFoundError

ROW = "<row><column>A</column></row>"
ROW_HTML = '<table class="row"><tbody><tr><td class="column">A</td></tr></tbody></table>'


@pytest.mark.unit
class TestDestinations:
    """Test destination resolution."""

    def test_trailing_slash_is_a_directory(self):
        assert is_directory_destination("dist/")
        assert not is_directory_destination("dist/out.html")

    def test_existing_directory(self, tmp_path):
        assert is_directory_destination(tmp_path)

    def test_file_destination(self, tmp_path):
        assert resolve_destination("src/a.html", tmp_path / "out.html") == tmp_path / "out.html"

    def test_directory_keeps_file_name(self, tmp_path):
        assert resolve_destination("src/deep/a.html", tmp_path) == tmp_path / "a.html"

    def test_directory_mirrors_base_dir(self, tmp_path):
        source = tmp_path / "src" / "emails" / "a.html"
        destination = resolve_destination(source, f"{tmp_path / 'dist'}/", base_dir=tmp_path / "src")
        assert destination == tmp_path / "dist" / "emails" / "a.html"

    def test_source_outside_base_dir(self, tmp_path):
        destination = resolve_destination(tmp_path / "other" / "a.html", f"{tmp_path}/dist/", base_dir=tmp_path / "src")
        assert destination == tmp_path / "dist" / "a.html"


@pytest.mark.unit
class TestInputFiles:
    """Test input collection, reading and writing."""

    def test_collect_files_and_directories(self, write_html, tmp_path):
        single = write_html("single.html", ROW)
        write_html("site/b.html", ROW)
        write_html("site/a.htm", ROW)
        write_html("site/notes.txt", "x")
        write_html("site/sub/c.html", ROW)

        collected = collect_input_files([single, tmp_path / "site"])

        assert collected == [
            (single, None),
            (tmp_path / "site" / "a.htm", tmp_path / "site"),
            (tmp_path / "site" / "b.html", tmp_path / "site"),
        ]

    def test_collect_recursive(self, write_html, tmp_path):
        write_html("site/a.html", ROW)
        write_html("site/sub/c.HTML", ROW)
        files = [path for path, _ in collect_input_files([tmp_path / "site"], recursive=True)]
        assert files == [tmp_path / "site" / "a.html", tmp_path / "site" / "sub" / "c.HTML"]

    def test_collect_missing(self, tmp_path):
        with pytest.raises(MarkerFileNotFoundError):
            collect_input_files([tmp_path / "missing.html"])

    def test_read_source_missing(self, tmp_path):
        with pytest.raises(MarkerFileNotFoundError) as exc_info:
            read_source(tmp_path / "missing.html")
        assert exc_info.value.file_path == str(tmp_path / "missing.html")

    def test_read_source_undecodable(self, tmp_path):
        path = tmp_path / "latin.html"
        path.write_bytes(b"<p>\xff\xfe</p>")
        with pytest.raises(FileAccessError) as exc_info:
            read_source(path)
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)

    def test_write_output_creates_parents(self, tmp_path):
        written = write_output(tmp_path / "a" / "b" / "out.html", "<p>x</p>")
        assert written.read_text(encoding="utf-8") == "<p>x</p>"

    def test_write_output_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        with pytest.raises(OutputWriteError):
            write_output(blocker / "out.html", "<p>x</p>")


@pytest.mark.unit
class TestMarkUpFile:
    """Test single file expansion."""

    def test_returns_html_without_destination(self, write_html):
        assert mark_up_file(write_html("a.html", ROW)) == ROW_HTML

    def test_writes_destination(self, write_html, tmp_path):
        source = write_html("a.html", ROW)
        mark_up_file(source, f"{tmp_path / 'dist'}/")
        assert (tmp_path / "dist" / "a.html").read_text(encoding="utf-8") == ROW_HTML

    def test_uses_options(self, write_html):
        source = write_html("a.html", "<row><column>caf\u00e9</column></row>")
        assert "caf&eacute;" in mark_up_file(source, options=MarkerOptions(formatter="html"))

    def test_errors_propagate(self, write_html):
        with pytest.raises(MalformedMarkupError):
            mark_up_file(write_html("bad.html", "<row>"))


@pytest.mark.unit
class TestMarkUpFiles:
    """Test batch processing with per-document isolation."""

    def test_failure_does_not_abort_batch(self, write_html, tmp_path):
        good = write_html("in/good.html", ROW)
        bad = write_html("in/bad.html", "<row><column>x</row>")
        later = write_html("in/later.html", ROW)
        dist = tmp_path / "dist"

        results = mark_up_files([good, bad, later], f"{dist}/")

        assert [r.success for r in results] == [True, False, True]
        assert isinstance(results[1].error, MalformedMarkupError)
        assert results[1].destination is None
        assert not (dist / "bad.html").exists()
        assert (dist / "good.html").read_text(encoding="utf-8") == ROW_HTML
        assert (dist / "later.html").read_text(encoding="utf-8") == ROW_HTML

    def test_progress_events(self, write_html, tmp_path):
        good = write_html("good.html", ROW)
        bad = write_html("bad.html", "<row>")
        events = []

        mark_up_files([good, bad], f"{tmp_path / 'dist'}/", progress_callback=events.append)

        assert [e.event_type for e in events] == ["started", "item_done", "error", "finished"]
        assert events[1].message == f"File {good} has been done"
        assert events[2].metadata["error_type"] == "MalformedMarkupError"
        assert events[3].message == "1 of 2 file(s) done"

    def test_mirrors_collected_structure(self, write_html, tmp_path):
        write_html("site/a.html", ROW)
        write_html("site/nested/b.html", ROW)
        items = collect_input_files([tmp_path / "site"], recursive=True)

        results = mark_up_files(items, f"{tmp_path / 'out'}/")

        assert all(r.success for r in results)
        assert (tmp_path / "out" / "nested" / "b.html").is_file()
        assert (tmp_path / "out" / "a.html").is_file()

    def test_single_file_destination(self, write_html, tmp_path):
        results = mark_up_files([write_html("a.html", ROW)], tmp_path / "renamed.html")
        assert results[0].destination == tmp_path / "renamed.html"

    def test_several_inputs_need_directory(self, write_html, tmp_path):
        sources = [write_html("a.html", ROW), write_html("b.html", ROW)]
        with pytest.raises(ValidationError):
            mark_up_files(sources, tmp_path / "out.html")

    def test_missing_template_fails_every_document(self, write_html, tmp_path):
        options = MarkerOptions(components=("row", "hero"))
        results = mark_up_files([write_html("a.html", ROW)], f"{tmp_path / 'dist'}/", options)
        assert not results[0].success
        assert not (tmp_path / "dist" / "a.html").exists()


@pytest.mark.unit
def test_markup_result_success():
    assert MarkupResult(Path("a.html")).success
    assert not MarkupResult(Path("a.html"), error=ValidationError("x")).success
