#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Bulletproof button expansion.

A button renders twice: a VML rounded rectangle inside MSO-only conditional
comments for desktop Outlook, and a plain anchor for every other client.
Both share the same inner content and carry only allow-listed attributes.
"""

from __future__ import annotations

from bs4.element import Tag

from mailmarker.constants import CLASS_BUTTON, MSO_ONLY_TEMPLATE, VML_NAMESPACES
from mailmarker.transforms.base import TagTransformer
from mailmarker.utils.html_utils import add_class, attrs_as_text, get_attributes


def _mso_only(markup: str) -> str:
    return "<!--" + MSO_ONLY_TEMPLATE.format(markup=markup) + "-->"


class ButtonTransformer(TagTransformer):
    """Expand ``<button>`` into VML and anchor markup."""

    requires_template = False

    def expand(self, element: Tag) -> str:
        """Return the dual MSO/anchor markup for a button."""
        add_class(element, CLASS_BUTTON)

        allowed = self.options.allowed_button_attributes
        attributes = {key: value for key, value in get_attributes(element).items() if key in allowed}
        attr_text = attrs_as_text(attributes)
        attr_suffix = f" {attr_text}" if attr_text else ""

        return (
            _mso_only(f"<v:roundrect {VML_NAMESPACES}{attr_suffix}><w:anchorlock/><center>")
            + f"<a{attr_suffix}>{self.inner_html(element)}</a>"
            + _mso_only("</center></v:roundrect>")
        )
