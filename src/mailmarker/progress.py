#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/progress.py
"""Progress callback system for batch processing.

Batch helpers report per-file progress through a callback so that embedders
(and the CLI) can update a display without the core doing any output.

Examples
--------
    >>> from mailmarker.api import mark_up_files
    >>> from mailmarker.progress import ProgressEvent
    >>>
    >>> def on_progress(event: ProgressEvent):
    ...     print(f"{event.event_type}: {event.message} ({event.current}/{event.total})")
    >>>
    >>> results = mark_up_files(["a.html", "b.html"], "dist/", progress_callback=on_progress)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional

logger = logging.getLogger(__name__)

EventType = Literal["started", "item_done", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted while processing a batch of documents.

    Parameters
    ----------
    event_type : EventType
        - "started": the batch has begun; ``total`` holds the file count
        - "item_done": one file was expanded and written
        - "error": one file failed; ``metadata["error"]`` holds the message
        - "finished": the batch is complete
    message : str
        Human-readable description of the event
    current : int, default 0
        Number of files handled so far
    total : int, default 0
        Number of files in the batch
    metadata : dict, default empty
        Event-specific details such as ``source`` and ``destination``

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        """Return a compact representation of the event."""
        return f"ProgressEvent({self.event_type!r}, {self.message!r}, {self.current}/{self.total})"


ProgressCallback = Callable[[ProgressEvent], None]


def emit_progress(callback: Optional[ProgressCallback], event: ProgressEvent) -> None:
    """Send an event to a callback, logging instead of raising on callback failures.

    A broken display must not abort a batch, so exceptions raised by the
    callback are logged and otherwise ignored.
    """
    if callback is None:
        return
    try:
        callback(event)
    except Exception as e:
        logger.warning(f"Progress callback failed for {event.event_type} event: {e}")
