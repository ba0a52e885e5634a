#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mailmarker.

This module centralizes the tag names, templates, attribute policies and
conditional-comment fragments used across the expansion engine.

Constants are organized by category:
1. Type Definitions
2. Components and Templates
3. Attribute Policies
4. Lists and Buttons
5. Conditional Comments
6. Processing Limits and CLI
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputFormatter = Literal["minimal", "html", "html5"]

# =============================================================================
# Components and Templates
# =============================================================================

CONTENT_PLACEHOLDER = "%content%"

TAG_ROW = "row"
TAG_COLUMN = "column"
TAG_CONTAINER = "container"
TAG_BUTTON = "button"
TAG_UNORDERED_LIST = "ul"
TAG_ORDERED_LIST = "ol"
TAG_LIST_ITEM = "li"

DEFAULT_COMPONENTS: tuple[str, ...] = (
    TAG_ROW,
    TAG_COLUMN,
    TAG_CONTAINER,
    TAG_BUTTON,
    TAG_UNORDERED_LIST,
    TAG_ORDERED_LIST,
    TAG_LIST_ITEM,
)

DEFAULT_TEMPLATES: dict[str, str] = {
    TAG_ROW: "<table><tbody><tr>%content%</tr></tbody></table>",
    TAG_COLUMN: "<td>%content%</td>",
    TAG_CONTAINER: "<table><tbody><tr><td>%content%</td></tr></tbody></table>",
    TAG_UNORDERED_LIST: "<table><tbody>%content%</tbody></table>",
    TAG_ORDERED_LIST: "<table><tbody>%content%</tbody></table>",
    TAG_LIST_ITEM: "<tr><td></td><td>%content%</td></tr>",
}


DEFAULT_COLUMNS = 12

# Parser used for documents and fragments. Tree-repairing parsers move custom
# tags out of <table> content, so only html.parser is supported.
HTML_PARSER = "html.parser"
DEFAULT_OUTPUT_FORMATTER: OutputFormatter = "minimal"

# =============================================================================
# Attribute Policies
# =============================================================================

ATTR_RESPONSIVE = "responsive"
ATTR_SMALL = "small"
ATTR_LARGE = "large"
ATTR_BULLET = "bullet"
ATTR_BULLET_ALT = "bullet-alt"

# Layout hints consumed by the engine, never copied to output elements
DEFAULT_IGNORED_ATTRIBUTES: tuple[str, ...] = (
    ATTR_RESPONSIVE,
    ATTR_SMALL,
    ATTR_LARGE,
    ATTR_BULLET,
    ATTR_BULLET_ALT,
)

DEFAULT_ALLOWED_BUTTON_ATTRIBUTES: tuple[str, ...] = ("id", "class", "style", "href")

GRID_CLASS_PREFIXES: dict[str, str] = {
    ATTR_SMALL: "sm",
    ATTR_LARGE: "lg",
}

CLASS_ROW = "row"
CLASS_COLUMN = "column"
CLASS_CONTAINER = "container"
CLASS_FIRST = "first"
CLASS_LAST = "last"
CLASS_RESPONSIVE = "responsive"
CLASS_RESPONSIVE_TABLE = "responsive-table"
CLASS_MSO = "mso"

# =============================================================================
# Lists and Buttons
# =============================================================================

CLASS_BUTTON = "btn"
CLASS_UNORDERED_LIST = "ul list"
CLASS_ORDERED_LIST = "ol list"
CLASS_LIST_ITEM = "li-item"
CLASS_LIST_BULLET = "li li-bullet"
CLASS_LIST_CONTENT = "li li-content"

DEFAULT_BULLET = "•"
DEFAULT_BULLET_ALT = " "
BULLET_IMAGE_SUFFIXES: tuple[str, ...] = (".png", ".gif", ".jpg", ".jpeg")

VML_NAMESPACES = (
    'xmlns:v="urn:schemas-microsoft-com:vml" '
    'xmlns:w="urn:schemas-microsoft-com:office:word"'
)

# =============================================================================
# Conditional Comments
# =============================================================================

# Comment bodies (text between "<!--" and "-->")
MSO_ONLY_TEMPLATE = "[if mso]>{markup}<![endif]"
NOT_MSO_OPEN = "[if !mso]><!--"
NOT_MSO_CLOSE = " <![endif]"
CONDITIONAL_COMMENT_PREFIX = "[if"
CONDITIONAL_COMMENT_SUFFIX = "<![endif]"

# =============================================================================
# Processing Limits and CLI
# =============================================================================

DEFAULT_MAX_ITERATIONS_FACTOR = 4

HTML_EXTENSIONS: tuple[str, ...] = (".html", ".htm")

CONFIG_FILENAMES: tuple[str, ...] = (
    ".mailmarker.toml",
    ".mailmarker.yaml",
    ".mailmarker.yml",
    ".mailmarker.json",
)
PYPROJECT_SECTION = "mailmarker"

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
