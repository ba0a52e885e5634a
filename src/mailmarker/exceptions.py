#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mailmarker library.

This module defines specialized exception classes for the error conditions
that can occur while expanding custom markup into email-safe HTML. Every
error is raised for the single document being processed; batch helpers catch
them per document so one failure never aborts the rest of a batch.

Exception Hierarchy
-------------------
- MarkerError (base exception)

  - ValidationError (option/configuration validation)
    - MissingTemplateError (component without a registered template)

  - ParsingError (input markup parsing failures)
    - MalformedMarkupError (unterminated or mismatched custom tags)

  - ProcessingLimitExceededError (non-terminating expansion)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, decoding)
    - OutputWriteError (destination write failures)

"""

from typing import Any


class MarkerError(Exception):
    """Base exception class for all mailmarker-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MarkerError):
    """Exception raised for invalid options or configuration values.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class MissingTemplateError(ValidationError):
    """Exception raised when a component tag has no registered template.

    Parameters
    ----------
    tag_name : str
        The component tag that lacks a template
    message : str, optional
        Custom error message. If not provided, uses default message

    Attributes
    ----------
    tag_name : str
        The component tag that lacks a template

    """

    def __init__(self, tag_name: str, message: str | None = None):
        """Initialize the missing template error."""
        if message is None:
            message = f"No template registered for component '{tag_name}'"
        super().__init__(message, parameter_name="templates", parameter_value=tag_name)
        self.tag_name = tag_name


class ParsingError(MarkerError):
    """Exception raised when the input markup cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class MalformedMarkupError(ParsingError):
    """Exception raised when a custom tag is unterminated or mismatched.

    Parameters
    ----------
    message : str
        Description of what is malformed
    tag_name : str, optional
        The custom tag at fault
    line : int, optional
        1-based source line of the offending tag
    column : int, optional
        0-based source column of the offending tag
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        tag_name: str | None = None,
        line: int | None = None,
        column: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the malformed markup error."""
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message, parsing_stage="markup", original_error=original_error)
        self.tag_name = tag_name
        self.line = line
        self.column = column


class ProcessingLimitExceededError(MarkerError):
    """Exception raised when tag expansion does not terminate.

    This usually means a template re-introduces a component tag, so every
    expansion creates new work for the traversal loop.

    Parameters
    ----------
    iterations : int
        Number of expansions performed before giving up
    limit : int
        The iteration ceiling that was exceeded
    tag_name : str, optional
        The component tag that was about to be expanded

    """

    def __init__(self, iterations: int, limit: int, tag_name: str | None = None):
        """Initialize the processing limit error."""
        message = f"Tag expansion exceeded {limit} iterations"
        if tag_name:
            message += f" while expanding '<{tag_name}>'; does a template re-introduce a component tag?"
        super().__init__(message)
        self.iterations = iterations
        self.limit = limit
        self.tag_name = tag_name


class FileError(MarkerError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an input file cannot be read or decoded."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class OutputWriteError(FileError):
    """Exception raised when writing a destination file fails."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)
