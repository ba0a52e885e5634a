#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/transforms/registry.py
"""Dispatch from component tag names to their transformers.

The set of transformers is closed: rows, columns, containers, buttons and
the three list tags each have a dedicated class. Any other configured
component is expanded through its template by ``TemplateExpander``.
"""

from __future__ import annotations

import logging

from mailmarker.constants import (
    TAG_BUTTON,
    TAG_COLUMN,
    TAG_CONTAINER,
    TAG_LIST_ITEM,
    TAG_ORDERED_LIST,
    TAG_ROW,
    TAG_UNORDERED_LIST,
)
from mailmarker.exceptions import MissingTemplateError
from mailmarker.options.marker import MarkerOptions
from mailmarker.transforms.base import ContainerTransformer, RowTransformer, TagTransformer, TemplateExpander
from mailmarker.transforms.buttons import ButtonTransformer
from mailmarker.transforms.columns import ColumnTransformer
from mailmarker.transforms.lists import ListTransformer
from mailmarker.transforms.responsive import ResponsiveMarker

logger = logging.getLogger(__name__)

TRANSFORMER_CLASSES: dict[str, type[TagTransformer]] = {
    TAG_ROW: RowTransformer,
    TAG_COLUMN: ColumnTransformer,
    TAG_CONTAINER: ContainerTransformer,
    TAG_BUTTON: ButtonTransformer,
    TAG_UNORDERED_LIST: ListTransformer,
    TAG_ORDERED_LIST: ListTransformer,
    TAG_LIST_ITEM: ListTransformer,
}


class TransformerRegistry:
    """Map each configured component to the transformer that expands it.

    Parameters
    ----------
    options : MarkerOptions
        Engine configuration; its ``components`` decide which tags get a
        transformer

    Examples
    --------
    >>> registry = TransformerRegistry(MarkerOptions())
    >>> type(registry.get("column")).__name__
    'ColumnTransformer'

    """

    def __init__(self, options: MarkerOptions):
        """Build one transformer per component."""
        self.options = options
        self.responsive = ResponsiveMarker()
        self._transformers: dict[str, TagTransformer] = {}
        for name in options.components:
            transformer_class = TRANSFORMER_CLASSES.get(name, TemplateExpander)
            self._transformers[name] = transformer_class(options, self.responsive)
            logger.debug(f"Registered {transformer_class.__name__} for <{name}>")

    def get(self, tag_name: str) -> TagTransformer:
        """Return the transformer for a component tag.

        Raises
        ------
        KeyError
            If the tag is not a configured component

        """
        if tag_name not in self._transformers:
            raise KeyError(f"'{tag_name}' is not a configured component")
        return self._transformers[tag_name]

    def validate(self) -> None:
        """Check that every component that needs a template has one.

        Raises
        ------
        MissingTemplateError
            For the first component without a template

        """
        for name, transformer in self._transformers.items():
            if transformer.requires_template and name not in self.options.templates:
                raise MissingTemplateError(name)

    def __contains__(self, tag_name: str) -> bool:
        return tag_name in self._transformers
