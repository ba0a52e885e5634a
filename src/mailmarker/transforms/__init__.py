#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom tag transformers.

Each component tag is expanded by one transformer from this package:

- ``RowTransformer`` / ``ContainerTransformer`` / ``TemplateExpander``: template based
- ``ColumnTransformer``: template based, with position and grid classes
- ``ListTransformer``: table-based ``ul``/``ol``/``li``
- ``ButtonTransformer``: VML + anchor buttons

``TransformerRegistry`` maps tag names to transformer instances.
"""

from mailmarker.transforms.base import ContainerTransformer, RowTransformer, TagTransformer, TemplateExpander
from mailmarker.transforms.buttons import ButtonTransformer
from mailmarker.transforms.columns import ColumnTransformer
from mailmarker.transforms.lists import ListTransformer
from mailmarker.transforms.registry import TRANSFORMER_CLASSES, TransformerRegistry
from mailmarker.transforms.responsive import ResponsiveMarker

__all__ = [
    "ButtonTransformer",
    "ColumnTransformer",
    "ContainerTransformer",
    "ListTransformer",
    "ResponsiveMarker",
    "RowTransformer",
    "TRANSFORMER_CLASSES",
    "TagTransformer",
    "TemplateExpander",
    "TransformerRegistry",
]
