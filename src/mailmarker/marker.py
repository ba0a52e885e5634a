#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/marker.py
"""Expansion engine turning custom markup into email-safe HTML.

The engine parses the document once, then repeatedly finds the first custom
tag in document order and swaps it for the markup its transformer produces.
Every replacement changes ancestors, siblings and classes that later
transforms read (first/last columns, list numbering, responsive subtrees),
so the document is re-queried after each single replacement instead of
being processed in one bulk pass. When no custom tag is left, responsive
tables are rewritten with MSO conditional comments.

Examples
--------
One-off conversion:

    >>> from mailmarker import Marker
    >>> Marker().mark_up('<row><column>Hi</column></row>')
    '<table class="row"><tbody><tr><td class="column">Hi</td></tr></tbody></table>'

"""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup

from mailmarker.conditional_comments import ConditionalCommentInjector, find_injection_targets
from mailmarker.exceptions import ProcessingLimitExceededError
from mailmarker.options.marker import MarkerOptions
from mailmarker.transforms.registry import TransformerRegistry
from mailmarker.utils.html_utils import (
    check_balanced_components,
    parse_document,
    parse_fragment,
    protect_references,
    restore_references,
)

logger = logging.getLogger(__name__)


class Marker:
    """Expand custom layout tags into table-based HTML.

    A ``Marker`` holds no per-document state, so one instance can process
    any number of documents, and separate instances can run in parallel.

    Parameters
    ----------
    options : MarkerOptions, optional
        Engine configuration; defaults to ``MarkerOptions()``

    """

    def __init__(self, options: Optional[MarkerOptions] = None):
        """Initialize the engine and its transformers."""
        self.options = options or MarkerOptions()
        self.registry = TransformerRegistry(self.options)

    def mark_up(self, html: str) -> str:
        """Expand every custom tag in a document and return the resulting HTML.

        Parameters
        ----------
        html : str
            Source markup mixing standard HTML and component tags

        Returns
        -------
        str
            Table-based HTML with conditional comments for responsive tables

        Raises
        ------
        MissingTemplateError
            If a component that needs a template has none
        MalformedMarkupError
            If a component tag is unterminated or mismatched
        ProcessingLimitExceededError
            If expansion does not terminate within the iteration ceiling

        """
        self.registry.validate()
        check_balanced_components(html, self.options.components)

        soup = parse_document(protect_references(html))
        expanded = self.expand_components(soup)
        injected = self.inject_conditional_comments(soup)
        logger.debug(f"Expanded {expanded} custom tag(s), rewrote {injected} responsive table(s)")

        return restore_references(soup.decode(formatter=self.options.formatter))

    def expand_components(self, soup: BeautifulSoup) -> int:
        """Replace custom tags one at a time until none remain.

        Parameters
        ----------
        soup : BeautifulSoup
            Document to mutate in place

        Returns
        -------
        int
            Number of replacements performed

        Raises
        ------
        ProcessingLimitExceededError
            If the number of replacements exceeds the iteration ceiling

        """
        components = list(self.options.components)
        if not components:
            return 0

        initial_count = len(soup.find_all(components))
        limit = max(1, initial_count) * self.options.max_iterations_factor

        iterations = 0
        while True:
            element = soup.find(components)
            if element is None:
                break
            if iterations >= limit:
                raise ProcessingLimitExceededError(iterations, limit, tag_name=element.name)

            markup = self.registry.get(element.name).expand(element)
            nodes = parse_fragment(markup)
            if nodes:
                element.replace_with(*nodes)
            else:
                element.decompose()
            iterations += 1

        return iterations

    def inject_conditional_comments(self, soup: BeautifulSoup) -> int:
        """Rewrite every responsive table into MSO / non-MSO markup.

        Targets are looked up again after each rewrite, since rewriting a
        table moves the tables nested in its cells.

        Returns
        -------
        int
            Number of tables rewritten

        """
        injector = ConditionalCommentInjector(soup, formatter=self.options.formatter)
        count = 0
        while True:
            targets = find_injection_targets(soup)
            if not targets:
                break
            injector.inject(targets[0])
            count += 1
        return count


def mark_up(html: str, options: Optional[MarkerOptions] = None) -> str:
    """Expand custom tags in ``html`` with a one-off :class:`Marker`.

    Parameters
    ----------
    html : str
        Source markup
    options : MarkerOptions, optional
        Engine configuration

    Returns
    -------
    str
        Table-based HTML

    """
    return Marker(options).mark_up(html)
