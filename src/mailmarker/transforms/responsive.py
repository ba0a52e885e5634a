#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Responsive subtree classification.

Responsiveness is declared once, with a ``responsive`` attribute on the
outermost row or container. The marker turns that attribute into classes and
leaves a ``responsive`` class on every row and column expanded inside it, so
later stages can find the whole subtree with class selectors alone.
"""

from __future__ import annotations

import logging

from bs4.element import Tag

from mailmarker.constants import (
    ATTR_RESPONSIVE,
    CLASS_RESPONSIVE,
    CLASS_RESPONSIVE_TABLE,
    TAG_COLUMN,
    TAG_CONTAINER,
    TAG_ROW,
)
from mailmarker.utils.html_utils import add_class, find_ancestor_with_class

logger = logging.getLogger(__name__)

RESPONSIVE_ROOT_TAGS = frozenset({TAG_ROW, TAG_CONTAINER})
RESPONSIVE_MEMBER_TAGS = frozenset({TAG_ROW, TAG_COLUMN})


class ResponsiveMarker:
    """Classify elements that belong to a responsive subtree."""

    def classify(self, element: Tag) -> bool:
        """Add responsive classes to an element when it belongs to a responsive subtree.

        Parameters
        ----------
        element : Tag
            Custom tag about to be expanded

        Returns
        -------
        bool
            True if the element was classified as responsive

        """
        inside_responsive = find_ancestor_with_class(element, [CLASS_RESPONSIVE_TABLE]) is not None

        if element.name in RESPONSIVE_MEMBER_TAGS and inside_responsive:
            add_class(element, CLASS_RESPONSIVE)
            return True

        if element.name in RESPONSIVE_ROOT_TAGS and element.has_attr(ATTR_RESPONSIVE) and not inside_responsive:
            add_class(element, CLASS_RESPONSIVE, CLASS_RESPONSIVE_TABLE)
            logger.debug("Marked <%s> as a responsive table", element.name)
            return True

        return False
