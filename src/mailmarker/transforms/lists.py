#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/transforms/lists.py
"""Table-based list expansion.

Lists become tables and list items become two-cell rows: a bullet cell and
a content cell. Unlike template expansion, list tags copy every attribute
onto their replacement. Items rely on this, since they read ``bullet`` and
``bullet-alt`` back from the already expanded list table.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import Tag

from mailmarker.constants import (
    ATTR_BULLET,
    ATTR_BULLET_ALT,
    BULLET_IMAGE_SUFFIXES,
    CLASS_LIST_BULLET,
    CLASS_LIST_CONTENT,
    CLASS_LIST_ITEM,
    CLASS_ORDERED_LIST,
    CLASS_UNORDERED_LIST,
    DEFAULT_BULLET,
    DEFAULT_BULLET_ALT,
    TAG_LIST_ITEM,
    TAG_ORDERED_LIST,
    TAG_UNORDERED_LIST,
)
from mailmarker.transforms.base import TagTransformer
from mailmarker.utils.html_utils import (
    add_class,
    copy_attributes,
    element_siblings,
    find_ancestor_with_class,
    get_attributes,
)

logger = logging.getLogger(__name__)

LIST_CLASSES = {
    TAG_UNORDERED_LIST: CLASS_UNORDERED_LIST,
    TAG_ORDERED_LIST: CLASS_ORDERED_LIST,
}

# First class of each list shell, used to find an item's list
_ORDERED_MARKER = CLASS_ORDERED_LIST.split()[0]
_UNORDERED_MARKER = CLASS_UNORDERED_LIST.split()[0]


class ListTransformer(TagTransformer):
    """Expand ``<ul>``, ``<ol>`` and ``<li>`` into table markup."""

    def expand(self, element: Tag) -> str:
        """Return the table markup for a list or list item."""
        shell, root = self.instantiate(self.template_for(element.name))

        if root is not None:
            if self.options.copy_list_attributes:
                copy_attributes(element, root)

            if element.name in LIST_CLASSES:
                add_class(root, LIST_CLASSES[element.name])
            elif element.name == TAG_LIST_ITEM:
                self._build_item(shell, element, root)

        return self.render(shell, self.inner_html(element))

    def _build_item(self, shell: BeautifulSoup, element: Tag, row: Tag) -> None:
        add_class(row, CLASS_LIST_ITEM)

        cells = row.find_all("td", recursive=False)
        if not cells:
            logger.warning("List item template has no cells; bullet skipped")
            return

        bullet_cell, content_cell = cells[0], cells[-1]
        add_class(bullet_cell, CLASS_LIST_BULLET)
        add_class(content_cell, CLASS_LIST_CONTENT)
        if bullet_cell is content_cell:
            return

        if find_ancestor_with_class(element, [_ORDERED_MARKER]) is not None:
            bullet_cell.string = f"{self.item_number(element)}."
            return

        list_table = find_ancestor_with_class(element, [_UNORDERED_MARKER])
        attributes = get_attributes(list_table) if list_table is not None else {}
        bullet = attributes.get(ATTR_BULLET, DEFAULT_BULLET)
        if bullet.endswith(BULLET_IMAGE_SUFFIXES):
            bullet_cell.clear()
            bullet_cell.append(
                shell.new_tag("img", attrs={"src": bullet, "alt": attributes.get(ATTR_BULLET_ALT, DEFAULT_BULLET_ALT)})
            )
        else:
            bullet_cell.string = bullet

    @staticmethod
    def item_number(element: Tag) -> int:
        """Return the 1-based position of an item among its element siblings.

        Every element sibling counts, whatever its tag, so items that were
        already expanded into rows keep their place in the numbering.
        """
        siblings = element_siblings(element)
        return next(i for i, sibling in enumerate(siblings, start=1) if sibling is element)
