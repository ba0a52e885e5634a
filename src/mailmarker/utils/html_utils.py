#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/utils/html_utils.py
"""HTML helpers shared by the tag transformers.

This module wraps the handful of BeautifulSoup operations the engine relies
on: parsing documents and fragments, reading and editing attribute maps,
class lists, and rendering attributes as raw text for markup that only lives
inside conditional comments.
"""

from __future__ import annotations

import logging
import uuid
from html import escape as _html_escape
from html.parser import HTMLParser
from typing import Iterable

from bs4 import BeautifulSoup
from bs4.element import Comment, PageElement, Tag
from bs4.exceptions import ParserRejectedMarkup

from mailmarker.constants import CONDITIONAL_COMMENT_PREFIX, CONDITIONAL_COMMENT_SUFFIX, HTML_PARSER
from mailmarker.exceptions import MalformedMarkupError

logger = logging.getLogger(__name__)


def parse_document(html: str) -> BeautifulSoup:
    """Parse markup into a mutable document tree.

    Parameters
    ----------
    html : str
        Markup to parse

    Returns
    -------
    BeautifulSoup
        The parsed document

    Raises
    ------
    MalformedMarkupError
        If the parser rejects the markup

    """
    try:
        return BeautifulSoup(html, HTML_PARSER)
    except ParserRejectedMarkup as e:
        raise MalformedMarkupError(f"Markup could not be parsed: {e}", original_error=e) from e


def parse_fragment(markup: str) -> list[PageElement]:
    """Parse a markup fragment and return its top-level nodes, detached."""
    fragment = parse_document(markup)
    return [node.extract() for node in list(fragment.contents)]


# Stand-in for "&" while markup lives in a parsed tree. html.parser decodes
# character references and the formatters re-encode them their own way, so
# hiding the ampersand keeps ``&nbsp;`` and friends exactly as written.
AMPERSAND_TOKEN = f"mailmarker-amp-{uuid.uuid4().hex}-"


def protect_references(html: str) -> str:
    """Hide every ``&`` of the markup behind :data:`AMPERSAND_TOKEN`."""
    return html.replace("&", AMPERSAND_TOKEN)


def restore_references(html: str) -> str:
    """Undo :func:`protect_references` on serialized markup."""
    return html.replace(AMPERSAND_TOKEN, "&")


def get_classes(tag: Tag) -> list[str]:
    """Return the class list of a tag, whatever form the attribute is stored in."""
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [cls for item in value for cls in str(item).split()]


def has_class(tag: Tag, class_name: str) -> bool:
    """Check whether a tag carries a class."""
    return class_name in get_classes(tag)


def add_class(tag: Tag, *class_names: str) -> None:
    """Append classes to a tag, skipping those it already has.

    Each argument may hold several space separated classes, so
    ``add_class(tag, "ul list")`` adds two classes.
    """
    classes = get_classes(tag)
    for name in class_names:
        for cls in name.split():
            if cls not in classes:
                classes.append(cls)
    if classes:
        tag["class"] = classes


def get_attributes(tag: Tag) -> dict[str, str]:
    """Return a copy of a tag's attribute map with multi-valued attributes joined.

    Parameters
    ----------
    tag : Tag
        Element to read

    Returns
    -------
    dict[str, str]
        Attribute name to string value

    """
    attributes: dict[str, str] = {}
    for key, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            attributes[key] = " ".join(str(v) for v in value)
        else:
            attributes[key] = "" if value is None else str(value)
    return attributes


def copy_attributes(
    source: Tag,
    target: Tag,
    *,
    exclude: Iterable[str] = (),
    only: Iterable[str] | None = None,
) -> None:
    """Copy attributes from one tag to another under a filtering policy.

    ``class`` is merged onto the target's existing classes; every other
    attribute overwrites the target's value.

    Parameters
    ----------
    source : Tag
        Element the attributes are read from
    target : Tag
        Element the attributes are written to
    exclude : Iterable[str], optional
        Block-list of attribute names to skip
    only : Iterable[str], optional
        Allow-list; when given, attributes outside it are skipped

    """
    blocked = set(exclude)
    allowed = set(only) if only is not None else None
    for key, value in get_attributes(source).items():
        if key in blocked or (allowed is not None and key not in allowed):
            continue
        if key == "class":
            add_class(target, value)
        else:
            target[key] = value


def attrs_as_text(attributes: dict[str, str]) -> str:
    """Render an attribute map as ``key="value"`` pairs separated by spaces."""
    return " ".join(f'{key}="{_html_escape(value, quote=True)}"' for key, value in attributes.items())


def find_ancestor_with_class(tag: Tag, class_names: Iterable[str]) -> Tag | None:
    """Return the nearest ancestor carrying any of the given classes."""
    wanted = set(class_names)
    for parent in tag.parents:
        if isinstance(parent, Tag) and wanted.intersection(get_classes(parent)):
            return parent
    return None


def element_siblings(tag: Tag) -> list[Tag]:
    """Return every element child of the tag's parent, the tag included."""
    if tag.parent is None:
        return [tag]
    return [child for child in tag.parent.children if isinstance(child, Tag)]


def is_conditional_comment(node: PageElement | None) -> bool:
    """Check whether a node is one half of an MSO conditional comment."""
    if not isinstance(node, Comment):
        return False
    text = str(node)
    return text.startswith(CONDITIONAL_COMMENT_PREFIX) or text.rstrip().endswith(CONDITIONAL_COMMENT_SUFFIX)


class _ComponentBalanceChecker(HTMLParser):
    """Track open component tags and report the first structural fault."""

    def __init__(self, components: Iterable[str]):
        super().__init__(convert_charrefs=True)
        self.components = frozenset(components)
        self.stack: list[tuple[str, int, int]] = []

    def handle_starttag(self, tag: str, attrs: list) -> None:
        if tag in self.components:
            line, column = self.getpos()
            self.stack.append((tag, line, column))

    def handle_startendtag(self, tag: str, attrs: list) -> None:
        # <column/> opens and closes in one go
        return None

    def handle_endtag(self, tag: str) -> None:
        if tag not in self.components:
            return
        line, column = self.getpos()
        if not self.stack:
            raise MalformedMarkupError(f"Unexpected closing tag </{tag}>", tag_name=tag, line=line, column=column)
        open_tag, open_line, open_column = self.stack[-1]
        if open_tag != tag:
            raise MalformedMarkupError(
                f"Closing tag </{tag}> does not match open <{open_tag}>",
                tag_name=open_tag,
                line=open_line,
                column=open_column,
            )
        self.stack.pop()


def check_balanced_components(html: str, components: Iterable[str]) -> None:
    """Verify that every component tag in the markup is properly closed.

    The document parser silently closes unterminated tags at the end of the
    input, which would move trailing content into the wrong component. This
    check runs first so such documents fail instead.

    Parameters
    ----------
    html : str
        Source markup
    components : Iterable[str]
        Lower-case component tag names

    Raises
    ------
    MalformedMarkupError
        If a component tag is unterminated, mismatched or closed twice

    """
    checker = _ComponentBalanceChecker(components)
    checker.feed(html)
    checker.close()
    if checker.stack:
        tag, line, column = checker.stack[-1]
        raise MalformedMarkupError(f"Unterminated <{tag}> tag", tag_name=tag, line=line, column=column)
    logger.debug("Component tags are balanced")


__all__ = [
    "add_class",
    "attrs_as_text",
    "check_balanced_components",
    "copy_attributes",
    "element_siblings",
    "find_ancestor_with_class",
    "get_attributes",
    "get_classes",
    "has_class",
    "is_conditional_comment",
    "parse_document",
    "parse_fragment",
    "protect_references",
    "restore_references",
]
