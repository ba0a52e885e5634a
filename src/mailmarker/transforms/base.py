#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/transforms/base.py
"""Base classes for tag transformers.

Every custom tag is expanded by one ``TagTransformer``. A transformer reads
the live element (its attributes, classes, ancestors and siblings), returns
the replacement markup as a string, and never keeps a reference to the
element afterwards: the traversal loop swaps the element out of the document
as soon as ``expand`` returns.

``TemplateExpander`` is the template-driven transformer used for rows,
columns, containers and any other configured component that has a template.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from mailmarker.constants import CLASS_CONTAINER, CLASS_ROW, CONTENT_PLACEHOLDER
from mailmarker.exceptions import MissingTemplateError
from mailmarker.utils.html_utils import add_class, copy_attributes, parse_document, protect_references

if TYPE_CHECKING:
    from mailmarker.options.marker import MarkerOptions
    from mailmarker.transforms.responsive import ResponsiveMarker

logger = logging.getLogger(__name__)


class TagTransformer(ABC):
    """Abstract base class for custom tag transformers.

    Parameters
    ----------
    options : MarkerOptions
        Engine configuration
    responsive : ResponsiveMarker
        Shared responsive classifier

    Attributes
    ----------
    requires_template : bool
        Whether the transformer needs a template registered for its tag

    """

    requires_template: bool = True

    def __init__(self, options: MarkerOptions, responsive: ResponsiveMarker):
        """Initialize the transformer with options and the responsive classifier."""
        self.options = options
        self.responsive = responsive

    @abstractmethod
    def expand(self, element: Tag) -> str:
        """Return the replacement markup for a custom tag.

        Parameters
        ----------
        element : Tag
            The custom tag, still attached to the document

        Returns
        -------
        str
            Markup that replaces the element. Nested custom tags inside it
            are left for later iterations of the traversal loop.

        """

    def inner_html(self, element: Tag) -> str:
        """Serialize the current inner content of an element."""
        return element.decode_contents(formatter=self.options.formatter)

    def template_for(self, tag_name: str) -> str:
        """Look up the template registered for a tag.

        Raises
        ------
        MissingTemplateError
            If no template is registered for the tag

        """
        template = self.options.templates.get(tag_name)
        if template is None:
            raise MissingTemplateError(tag_name)
        return template

    def instantiate(self, template: str) -> tuple[BeautifulSoup, Optional[Tag]]:
        """Parse a template into a detached fragment and return it with its root element."""
        shell = parse_document(protect_references(template))
        root = next((node for node in shell.contents if isinstance(node, Tag)), None)
        return shell, root

    def render(self, shell: BeautifulSoup, content: str) -> str:
        """Serialize a template fragment, substituting the placeholder once.

        The placeholder text node is swapped for a random token before
        serialization so that attribute values or content which happen to
        contain the placeholder text are never substituted.
        """
        token = f"mailmarker-{uuid.uuid4().hex}"
        for node in shell.find_all(string=lambda text: CONTENT_PLACEHOLDER in text):
            node.replace_with(NavigableString(str(node).replace(CONTENT_PLACEHOLDER, token, 1)))
            break
        else:
            token = CONTENT_PLACEHOLDER

        return shell.decode(formatter=self.options.formatter).replace(token, content, 1)


class TemplateExpander(TagTransformer):
    """Expand a custom tag through its registered template.

    The element is classified by the responsive marker first, so classes it
    gains are copied along with every other attribute except the layout
    hints in ``MarkerOptions.ignored_attributes``. The element's current inner
    markup is substituted into the template's placeholder.

    Attributes
    ----------
    css_class : str or None
        Class added to the element before its attributes are copied

    """

    css_class: Optional[str] = None

    def expand(self, element: Tag) -> str:
        """Return the template markup for ``element``."""
        template = self.template_for(element.name)

        if self.css_class:
            add_class(element, self.css_class)
        self.responsive.classify(element)

        shell, root = self.instantiate(template)
        if root is not None:
            copy_attributes(element, root, exclude=self.options.ignored_attributes)

        logger.debug("Expanding <%s> through its template", element.name)
        return self.render(shell, self.inner_html(element))


class RowTransformer(TemplateExpander):
    """Expand ``<row>`` into its table template."""

    css_class = CLASS_ROW


class ContainerTransformer(TemplateExpander):
    """Expand ``<container>`` into its table template."""

    css_class = CLASS_CONTAINER
