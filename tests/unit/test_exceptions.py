"""Unit tests for the exception hierarchy and progress events."""

import logging

import pytest

from mailmarker.exceptions import (
    FileAccessError,
    FileError,
    FileNotFoundError,
    MalformedMarkupError,
    MarkerError,
    MissingTemplateError,
    OutputWriteError,
    ParsingError,
    ProcessingLimitExceededError,
    ValidationError,
)
from mailmarker.progress import ProgressEvent, emit_progress


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test exception types and their attributes."""

    @pytest.mark.parametrize(
        "error,parents",
        [
            (MissingTemplateError("hero"), (ValidationError, MarkerError)),
            (MalformedMarkupError("bad"), (ParsingError, MarkerError)),
            (ProcessingLimitExceededError(8, 8), (MarkerError,)),
            (FileNotFoundError("a.html"), (FileError, MarkerError)),
            (FileAccessError("a.html"), (FileError, MarkerError)),
            (OutputWriteError("a.html"), (FileError, MarkerError)),
        ],
    )
    def test_parents(self, error, parents):
        for parent in parents:
            assert isinstance(error, parent)

    def test_original_error_is_kept(self):
        cause = OSError("denied")
        error = FileAccessError("a.html", original_error=cause)
        assert error.original_error is cause
        assert error.file_path == "a.html"
        assert error.message == "Cannot access file: a.html"

    def test_missing_template_message(self):
        error = MissingTemplateError("hero")
        assert str(error) == "No template registered for component 'hero'"
        assert error.parameter_name == "templates"
        assert error.parameter_value == "hero"

    def test_malformed_markup_position(self):
        error = MalformedMarkupError("Unterminated <row> tag", tag_name="row", line=3, column=4)
        assert str(error) == "Unterminated <row> tag (line 3, column 4)"
        assert error.parsing_stage == "markup"

    def test_malformed_markup_without_position(self):
        assert str(MalformedMarkupError("Markup could not be parsed")) == "Markup could not be parsed"

    def test_processing_limit_message(self):
        error = ProcessingLimitExceededError(12, 12, tag_name="hero")
        assert "exceeded 12 iterations" in str(error)
        assert "'<hero>'" in str(error)
        assert (error.iterations, error.limit, error.tag_name) == (12, 12, "hero")

    def test_not_a_builtin_file_not_found(self):
        assert not isinstance(FileNotFoundError("a.html"), OSError)


@pytest.mark.unit
class TestEmitProgress:
    """Test progress callback dispatch."""

    def test_callback_receives_event(self):
        events = []
        event = ProgressEvent("started", "Processing 2 file(s)", total=2)
        emit_progress(events.append, event)
        assert events == [event]

    def test_no_callback(self):
        emit_progress(None, ProgressEvent("finished", "done"))

    def test_failing_callback_is_logged(self, caplog):
        def broken(event):
            raise RuntimeError("display gone")

        with caplog.at_level(logging.WARNING, logger="mailmarker"):
            emit_progress(broken, ProgressEvent("item_done", "File a.html has been done", current=1, total=1))
        assert "display gone" in caplog.text

    def test_repr(self):
        assert repr(ProgressEvent("item_done", "x", current=1, total=3)) == "ProgressEvent('item_done', 'x', 1/3)"
