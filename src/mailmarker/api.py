#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/api.py
"""File-level API for expanding email templates.

The expansion engine itself is a pure function of markup and options. This
module adds the file handling around it: collecting input files, resolving
destinations (a single file or a directory), reading, writing and running a
batch where each document succeeds or fails on its own.

Examples
--------
Expand one file:

    >>> from mailmarker.api import mark_up_file
    >>> html = mark_up_file("templates/welcome.html", "dist/welcome.html")

Expand a batch into a directory:

    >>> from mailmarker.api import mark_up_files
    >>> results = mark_up_files(["a.html", "b.html"], "dist/")
    >>> failed = [r for r in results if not r.success]

"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from mailmarker.constants import HTML_EXTENSIONS
from mailmarker.exceptions import FileAccessError, FileNotFoundError, MarkerError, OutputWriteError, ValidationError
from mailmarker.marker import Marker
from mailmarker.options.marker import MarkerOptions
from mailmarker.progress import ProgressCallback, ProgressEvent, emit_progress

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class MarkupResult:
    """Outcome of expanding one file in a batch.

    Parameters
    ----------
    source : Path
        Input file
    destination : Path or None
        Output file, or None when the output was not written
    error : MarkerError or None
        The failure, when the document could not be expanded or written

    """

    source: Path
    destination: Optional[Path] = None
    error: Optional[MarkerError] = None

    @property
    def success(self) -> bool:
        """Whether the file was expanded and written."""
        return self.error is None


def normalize_path(path: PathLike) -> str:
    """Return a path with forward slashes on Windows, unchanged elsewhere."""
    text = str(path)
    if sys.platform == "win32":
        return text.replace("\\", "/")
    return text


def is_directory_destination(destination: PathLike) -> bool:
    """Check whether a destination names a directory rather than a file.

    A destination ending in a path separator, or an existing directory, is a
    directory target.
    """
    text = str(destination)
    return text.endswith(("/", "\\")) or Path(text).is_dir()


def resolve_destination(source: PathLike, destination: PathLike, base_dir: Optional[PathLike] = None) -> Path:
    """Work out where the output for ``source`` should be written.

    Parameters
    ----------
    source : str or Path
        Input file
    destination : str or Path
        File path, or directory (see :func:`is_directory_destination`)
    base_dir : str or Path, optional
        Directory the source was collected from. Its relative structure is
        mirrored under a directory destination; without it only the file
        name is kept.

    Returns
    -------
    Path
        The output file path

    """
    if not is_directory_destination(destination):
        return Path(normalize_path(destination))

    source_path = Path(normalize_path(source))
    relative = Path(source_path.name)
    if base_dir is not None:
        try:
            relative = source_path.resolve().relative_to(Path(base_dir).resolve())
        except ValueError:
            logger.debug(f"{source_path} is outside {base_dir}; keeping only its name")
    return Path(normalize_path(destination)) / relative


def collect_input_files(inputs: Iterable[PathLike], recursive: bool = False) -> list[tuple[Path, Optional[Path]]]:
    """Expand input paths into HTML files.

    Parameters
    ----------
    inputs : Iterable[str or Path]
        Files and directories
    recursive : bool, default False
        Descend into subdirectories of directory inputs

    Returns
    -------
    list[tuple[Path, Path or None]]
        ``(file, base_dir)`` pairs; ``base_dir`` is the directory input a
        file was found in, or None for files given directly

    Raises
    ------
    FileNotFoundError
        If an input path does not exist

    """
    collected: list[tuple[Path, Optional[Path]]] = []
    for item in inputs:
        path = Path(normalize_path(item))
        if path.is_dir():
            pattern = "**/*" if recursive else "*"
            files = sorted(p for p in path.glob(pattern) if p.is_file() and p.suffix.lower() in HTML_EXTENSIONS)
            collected.extend((file, path) for file in files)
        elif path.is_file():
            collected.append((path, None))
        else:
            raise FileNotFoundError(str(item))
    return collected


def read_source(source: PathLike) -> str:
    """Read an input file as UTF-8 text.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read or decoded

    """
    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(str(path))
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(path), original_error=e) from e


def write_output(destination: PathLike, content: str) -> Path:
    """Write output markup, creating parent directories as needed.

    Raises
    ------
    OutputWriteError
        If the file cannot be written

    """
    path = Path(destination)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(path), original_error=e) from e
    return path


def mark_up_file(
    source: PathLike,
    destination: Optional[PathLike] = None,
    options: Optional[MarkerOptions] = None,
    *,
    marker: Optional[Marker] = None,
) -> str:
    """Expand one file and optionally write the result.

    Parameters
    ----------
    source : str or Path
        Input HTML file
    destination : str or Path, optional
        Output file or directory; nothing is written when omitted
    options : MarkerOptions, optional
        Engine configuration, ignored when ``marker`` is given
    marker : Marker, optional
        Engine instance to reuse across files

    Returns
    -------
    str
        The expanded HTML

    """
    engine = marker or Marker(options)
    html = engine.mark_up(read_source(source))
    if destination is not None:
        written = write_output(resolve_destination(source, destination), html)
        logger.info(f"Successfully wrote {normalize_path(written)}")
    return html


def mark_up_files(
    sources: Iterable[Union[PathLike, tuple[PathLike, Optional[PathLike]]]],
    destination: PathLike,
    options: Optional[MarkerOptions] = None,
    *,
    progress_callback: Optional[ProgressCallback] = None,
) -> list[MarkupResult]:
    """Expand a batch of files, isolating failures per document.

    A document that fails produces no output file; the error is recorded in
    its result and the batch moves on to the next document.

    Parameters
    ----------
    sources : Iterable
        Input files, or ``(file, base_dir)`` pairs as returned by
        :func:`collect_input_files`
    destination : str or Path
        Output directory, or a single output file for a one-file batch
    options : MarkerOptions, optional
        Engine configuration shared by every document
    progress_callback : ProgressCallback, optional
        Receives started / item_done / error / finished events

    Returns
    -------
    list[MarkupResult]
        One result per input, in input order

    Raises
    ------
    ValidationError
        If several inputs are given with a file destination

    """
    pairs = [item if isinstance(item, tuple) else (item, None) for item in sources]
    if len(pairs) > 1 and not is_directory_destination(destination):
        raise ValidationError(
            f"Several inputs need a directory destination, got file {destination}",
            parameter_name="destination",
            parameter_value=str(destination),
        )

    marker = Marker(options)
    total = len(pairs)
    results: list[MarkupResult] = []

    emit_progress(progress_callback, ProgressEvent("started", f"Processing {total} file(s)", total=total))

    for index, (source, base_dir) in enumerate(pairs, start=1):
        source_path = Path(source)
        result = MarkupResult(source=source_path)
        try:
            html = marker.mark_up(read_source(source_path))
            result.destination = write_output(resolve_destination(source_path, destination, base_dir), html)
        except MarkerError as e:
            result.error = e
            logger.error(f"{normalize_path(source_path)}: {e.message}")
            emit_progress(
                progress_callback,
                ProgressEvent(
                    "error",
                    f"File {normalize_path(source_path)} failed",
                    current=index,
                    total=total,
                    metadata={"source": str(source_path), "error": e.message, "error_type": type(e).__name__},
                ),
            )
        else:
            logger.info(f"File {normalize_path(source_path)} has been done")
            emit_progress(
                progress_callback,
                ProgressEvent(
                    "item_done",
                    f"File {normalize_path(source_path)} has been done",
                    current=index,
                    total=total,
                    metadata={"source": str(source_path), "destination": str(result.destination)},
                ),
            )
        results.append(result)

    succeeded = sum(1 for r in results if r.success)
    emit_progress(
        progress_callback,
        ProgressEvent("finished", f"{succeeded} of {total} file(s) done", current=total, total=total),
    )
    return results
