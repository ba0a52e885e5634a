#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/conditional_comments.py
"""MSO conditional comment injection for responsive tables.

A responsive table has to stay a real table in Outlook's Word renderer and
become stacked ``<div>`` blocks everywhere else. The injector rewrites the
table, its rows and its cells into paired conditional comments:

- the table becomes ``<div>`` for non-MSO clients wrapping an MSO-only
  ``<table><tbody>`` opening and closing pair,
- each row keeps only MSO-only ``<tr>`` comments,
- each cell becomes an MSO-only ``<td>`` pair around a non-MSO ``<div>``.

Each level is rewritten on its own: the element's content is taken out, the
now empty tag pair is serialized and turned into comments, and the original
content nodes are put back untouched. Tables nested inside a cell are moved,
never re-serialized, so their markup comes out byte-identical.

"""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Sequence

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, PageElement, Tag

from mailmarker.constants import (
    CLASS_MSO,
    CLASS_RESPONSIVE_TABLE,
    DEFAULT_OUTPUT_FORMATTER,
    MSO_ONLY_TEMPLATE,
    NOT_MSO_CLOSE,
    NOT_MSO_OPEN,
)
from mailmarker.utils.html_utils import add_class, get_attributes, has_class, is_conditional_comment

logger = logging.getLogger(__name__)

RESPONSIVE_TABLE_SELECTOR = f"table.{CLASS_RESPONSIVE_TABLE}:not(.{CLASS_MSO})"


def _mso_only(markup: str) -> Comment:
    return Comment(MSO_ONLY_TEMPLATE.format(markup=markup))


def find_injection_targets(soup: BeautifulSoup) -> list[Tag]:
    """Return responsive tables that have not been rewritten yet, in document order.

    Tables already carrying the ``mso`` class are skipped: wrapping them a
    second time would nest comments inside comments.
    """
    return soup.select(RESPONSIVE_TABLE_SELECTOR)


class ConditionalCommentInjector:
    """Rewrite responsive tables into paired MSO / non-MSO markup.

    Parameters
    ----------
    soup : BeautifulSoup
        Document owning the tables, used to create new elements
    formatter : str, default "minimal"
        BeautifulSoup formatter used to serialize tag pairs

    """

    def __init__(self, soup: BeautifulSoup, formatter: str = DEFAULT_OUTPUT_FORMATTER):
        """Initialize the injector for one document."""
        self.soup = soup
        self.formatter = formatter

    def inject(self, table: Tag) -> str:
        """Rewrite one responsive table in place.

        The engine only passes tables returned by :func:`find_injection_targets`,
        which already excludes ``mso`` tables. A table handed in directly that
        carries ``mso`` is returned serialized and left unchanged.

        Parameters
        ----------
        table : Tag
            A ``table.responsive-table`` element not yet classified ``mso``

        Returns
        -------
        str
            Serialized markup of the rewritten table

        """
        if has_class(table, CLASS_MSO):
            logger.debug("Table already carries conditional comments; skipping")
            return table.decode(formatter=self.formatter)

        add_class(table, CLASS_MSO)
        body = table.find("tbody", recursive=False)
        rows = (body if body is not None else table).find_all("tr", recursive=False)

        for row in rows:
            for cell in row.find_all("td", recursive=False):
                self._wrap_cell(cell)
        for row in rows:
            self._wrap_row(row)
        nodes = self._wrap_table(table, body)

        logger.debug("Injected conditional comments into a table with %d row(s)", len(rows))
        return "".join(self._serialize(node) for node in nodes)

    def _tag_pair(self, tag: Tag, inner: Optional[Tag] = None) -> tuple[str, str]:
        """Serialize the opening and closing markup of a tag without its content.

        With ``inner`` the pair covers both tags, e.g. ``<table><tbody>`` and
        ``</tbody></table>``.
        """
        token = f"mailmarker-{uuid.uuid4().hex}"
        shell = self.soup.new_tag(tag.name, attrs=get_attributes(tag))
        holder = shell
        if inner is not None:
            holder = self.soup.new_tag(inner.name, attrs=get_attributes(inner))
            shell.append(holder)
        holder.append(NavigableString(token))

        opening, closing = shell.decode(formatter=self.formatter).split(token, 1)
        return opening, closing

    def _wrap_cell(self, cell: Tag) -> None:
        opening, closing = self._tag_pair(cell)
        content = self._take_contents(cell)

        block = self.soup.new_tag("div", attrs=get_attributes(cell))
        block.append(Comment(NOT_MSO_CLOSE))
        block.extend(content)
        block.append(Comment(NOT_MSO_OPEN))

        cell.replace_with(
            _mso_only(opening),
            Comment(NOT_MSO_OPEN),
            block,
            Comment(NOT_MSO_CLOSE),
            _mso_only(closing),
        )

    def _wrap_row(self, row: Tag) -> None:
        opening, closing = self._tag_pair(row)
        content = self._take_contents(row)
        row.replace_with(_mso_only(opening), *content, _mso_only(closing))

    def _wrap_table(self, table: Tag, body: Optional[Tag]) -> list[PageElement]:
        opening, closing = self._tag_pair(table, inner=body)
        content = self._take_contents(body if body is not None else table)

        block = self.soup.new_tag("div", attrs=get_attributes(table))
        block.append(Comment(NOT_MSO_CLOSE))
        block.append(_mso_only(opening))
        block.extend(content)
        block.append(_mso_only(closing))
        block.append(Comment(NOT_MSO_OPEN))
        self._strip_gaps(block)

        nodes: list[PageElement] = [Comment(NOT_MSO_OPEN), block, Comment(NOT_MSO_CLOSE)]
        table.replace_with(*nodes)
        return nodes

    @staticmethod
    def _take_contents(tag: Tag) -> list[PageElement]:
        return [node.extract() for node in list(tag.contents)]

    @staticmethod
    def _strip_gaps(block: Tag) -> None:
        """Drop whitespace text sitting between two adjacent conditional comments.

        Such text would end up between ``<tr>`` and ``<td>`` in MSO, where it
        becomes a stray text node.
        """
        children: Sequence[PageElement] = list(block.children)
        run: list[NavigableString] = []
        previous: Optional[PageElement] = None
        for node in children:
            if type(node) is NavigableString and not node.strip():
                run.append(node)
                continue
            if run and is_conditional_comment(previous) and is_conditional_comment(node):
                for text in run:
                    text.extract()
            run = []
            previous = node

    def _serialize(self, node: PageElement) -> str:
        if isinstance(node, Tag):
            return node.decode(formatter=self.formatter)
        return node.output_ready(formatter=self.formatter)
