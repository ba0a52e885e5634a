#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Column expansion with position and grid classes."""

from __future__ import annotations

import logging

from bs4.element import Tag

from mailmarker.constants import CLASS_COLUMN, CLASS_FIRST, CLASS_LAST, CLASS_ROW, GRID_CLASS_PREFIXES, TAG_COLUMN
from mailmarker.transforms.base import TemplateExpander
from mailmarker.utils.html_utils import (
    add_class,
    element_siblings,
    find_ancestor_with_class,
    get_attributes,
    has_class,
)

logger = logging.getLogger(__name__)


def is_column(element: Tag) -> bool:
    """Check whether an element is a column, expanded or not."""
    return element.name == TAG_COLUMN or has_class(element, CLASS_COLUMN)


class ColumnTransformer(TemplateExpander):
    """Expand ``<column>`` into a table cell.

    Columns in a row with more than one column get ``first``/``last``
    classes, and ``small``/``large`` attributes become ``col-sm-N`` and
    ``col-lg-N`` classes. The classes are added to the element before the
    template copies its attributes.
    """

    def expand(self, element: Tag) -> str:
        """Return the cell markup for a column."""
        add_class(element, CLASS_COLUMN)
        self._add_position_classes(element)
        self._add_grid_classes(element)
        return super().expand(element)

    def _add_position_classes(self, element: Tag) -> None:
        if find_ancestor_with_class(element, [CLASS_ROW]) is None:
            return

        siblings = element_siblings(element)
        position = next(i for i, sibling in enumerate(siblings) if sibling is element)
        columns_before = [s for s in siblings[:position] if is_column(s)]
        columns_after = [s for s in siblings[position + 1 :] if is_column(s)]

        # a lone column is neither first nor last
        if not columns_before and not columns_after:
            return
        if not columns_before:
            add_class(element, CLASS_FIRST)
        if not columns_after:
            add_class(element, CLASS_LAST)

    def _add_grid_classes(self, element: Tag) -> None:
        attributes = get_attributes(element)
        for attr, prefix in GRID_CLASS_PREFIXES.items():
            value = attributes.get(attr)
            if value is None:
                continue
            value = value.strip()
            if value.isdigit() and int(value) > self.options.columns:
                logger.warning(
                    "Column %s=%s exceeds the %d column grid; passing it through", attr, value, self.options.columns
                )
            add_class(element, f"col-{prefix}-{value}")
