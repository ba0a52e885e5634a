"""mailmarker - Expand custom layout tags into email-safe, table-based HTML.

Email clients render little more than tables, inline styles and, for desktop
Outlook, Word's HTML engine. mailmarker lets templates be written with a
small vocabulary of layout tags (``<row>``, ``<column>``, ``<container>``,
``<button>``, ``<ul>``/``<ol>``/``<li>``) and expands them into nested
tables, bulletproof VML buttons and MSO conditional comments.

Key Features
------------
- Template-driven expansion for any configured component tag
- First/last and ``col-sm-N``/``col-lg-N`` classes for grid columns
- Table-based lists with numeric, text or image bullets
- Responsive tables rewritten into MSO tables and stacked ``<div>`` blocks
- Batch processing of files and directory trees with per-file isolation

Examples
--------
Expand a string:

    >>> from mailmarker import mark_up
    >>> html = mark_up('<container><row><column>Hello</column></row></container>')

Use custom options and reuse the engine:

    >>> from mailmarker import Marker, MarkerOptions
    >>> marker = Marker(MarkerOptions(columns=16))
    >>> html = marker.mark_up('<row><column large="8">Wide</column></row>')

Process files:

    >>> from mailmarker import mark_up_files
    >>> results = mark_up_files(["welcome.html", "receipt.html"], "dist/")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from mailmarker.api import MarkupResult, mark_up_file, mark_up_files
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
from mailmarker.marker import Marker, mark_up
from mailmarker.options import MarkerOptions
from mailmarker.progress import ProgressCallback, ProgressEvent

__version__ = "1.0.0"

__all__ = [
    "FileAccessError",
    "FileError",
    "FileNotFoundError",
    "MalformedMarkupError",
    "Marker",
    "MarkerError",
    "MarkerOptions",
    "MarkupResult",
    "MissingTemplateError",
    "OutputWriteError",
    "ParsingError",
    "ProcessingLimitExceededError",
    "ProgressCallback",
    "ProgressEvent",
    "ValidationError",
    "__version__",
    "mark_up",
    "mark_up_file",
    "mark_up_files",
]
