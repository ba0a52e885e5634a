#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the mailmarker engine."""

from mailmarker.options.base import CloneFrozenMixin
from mailmarker.options.marker import MarkerOptions

__all__ = ["CloneFrozenMixin", "MarkerOptions"]
