#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for tag expansion.

This module defines the immutable options object consumed by the expansion
engine. It is supplied once per run and shared by every document.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from mailmarker.constants import (
    CONTENT_PLACEHOLDER,
    DEFAULT_ALLOWED_BUTTON_ATTRIBUTES,
    DEFAULT_COLUMNS,
    DEFAULT_COMPONENTS,
    DEFAULT_IGNORED_ATTRIBUTES,
    DEFAULT_MAX_ITERATIONS_FACTOR,
    DEFAULT_OUTPUT_FORMATTER,
    DEFAULT_TEMPLATES,
    OutputFormatter,
)
from mailmarker.exceptions import ValidationError
from mailmarker.options.base import CloneFrozenMixin

_FORMATTERS = ("minimal", "html", "html5")


@dataclass(frozen=True)
class MarkerOptions(CloneFrozenMixin):
    """Configuration options for expanding custom markup.

    Parameters
    ----------
    components : tuple[str, ...]
        Tag names eligible for expansion. Matching is case-insensitive.
    templates : Mapping[str, str]
        Template skeleton per tag name; each must contain exactly one
        ``%content%`` placeholder.
    columns : int, default 12
        Grid width. Numeric ``small``/``large`` values above it are logged
        but still passed through.
    ignored_attributes : tuple[str, ...]
        Block-list applied when template-based tags copy their attributes.
    allowed_button_attributes : tuple[str, ...]
        Allow-list applied to buttons; every other attribute is dropped.
    copy_list_attributes : bool, default True
        Copy every attribute of list tags onto their replacement. Items read
        ``bullet``/``bullet-alt`` back from the expanded list table, so
        disabling this also disables custom bullets.
    max_iterations_factor : int, default 4
        Iteration ceiling of the traversal loop, as a multiple of the number
        of custom tags found in the input.
    formatter : {"minimal", "html", "html5"}, default "minimal"
        BeautifulSoup output formatter used for every serialization.

    Examples
    --------
    >>> options = MarkerOptions(columns=16)
    >>> options.create_updated(formatter="html").formatter
    'html'

    """

    components: tuple[str, ...] = field(
        default=DEFAULT_COMPONENTS,
        metadata={"help": "Custom tag names to expand"},
    )
    templates: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_TEMPLATES),
        metadata={"help": "Template per tag name, each containing one %content% placeholder"},
    )
    columns: int = field(
        default=DEFAULT_COLUMNS,
        metadata={"help": "Grid width used for column size classes"},
    )
    ignored_attributes: tuple[str, ...] = field(
        default=DEFAULT_IGNORED_ATTRIBUTES,
        metadata={"help": "Attributes never copied onto template-based replacements"},
    )
    allowed_button_attributes: tuple[str, ...] = field(
        default=DEFAULT_ALLOWED_BUTTON_ATTRIBUTES,
        metadata={"help": "Attributes kept on buttons (all others are dropped)"},
    )
    copy_list_attributes: bool = field(
        default=True,
        metadata={"help": "Copy every attribute of ul/ol/li onto their replacement"},
    )
    max_iterations_factor: int = field(
        default=DEFAULT_MAX_ITERATIONS_FACTOR,
        metadata={"help": "Iteration ceiling as a multiple of the initial custom tag count"},
    )
    formatter: OutputFormatter = field(
        default=DEFAULT_OUTPUT_FORMATTER,
        metadata={"help": "BeautifulSoup output formatter (minimal, html, html5)"},
    )

    def __post_init__(self) -> None:
        """Normalize collections and validate values.

        Raises
        ------
        ValidationError
            If a value is outside its valid range or a template does not
            contain exactly one placeholder.

        """
        object.__setattr__(self, "components", tuple(name.lower() for name in self.components))
        object.__setattr__(self, "templates", {name.lower(): tpl for name, tpl in self.templates.items()})
        object.__setattr__(self, "ignored_attributes", tuple(self.ignored_attributes))
        object.__setattr__(self, "allowed_button_attributes", tuple(self.allowed_button_attributes))

        if not isinstance(self.columns, int) or self.columns <= 0:
            raise ValidationError(
                f"columns must be a positive integer, got {self.columns!r}",
                parameter_name="columns",
                parameter_value=self.columns,
            )
        if not isinstance(self.max_iterations_factor, int) or self.max_iterations_factor <= 0:
            raise ValidationError(
                f"max_iterations_factor must be a positive integer, got {self.max_iterations_factor!r}",
                parameter_name="max_iterations_factor",
                parameter_value=self.max_iterations_factor,
            )
        if self.formatter not in _FORMATTERS:
            raise ValidationError(
                f"formatter must be one of {', '.join(_FORMATTERS)}, got {self.formatter!r}",
                parameter_name="formatter",
                parameter_value=self.formatter,
            )

        for name, template in self.templates.items():
            if not isinstance(template, str):
                raise ValidationError(
                    f"Template for '{name}' must be a string, got {type(template).__name__}",
                    parameter_name="templates",
                    parameter_value=name,
                )
            count = template.count(CONTENT_PLACEHOLDER)
            if count != 1:
                raise ValidationError(
                    f"Template for '{name}' must contain exactly one {CONTENT_PLACEHOLDER} placeholder, found {count}",
                    parameter_name="templates",
                    parameter_value=name,
                )

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> MarkerOptions:
        """Build options from a loaded configuration mapping.

        Templates are merged over the defaults one tag at a time, so a config
        can override a single template without repeating the others. List
        values are accepted for tuple fields.

        Parameters
        ----------
        config : Mapping[str, Any]
            Mapping as loaded from a TOML, YAML or JSON config file

        Returns
        -------
        MarkerOptions
            The resulting options

        Raises
        ------
        ValidationError
            If the mapping has unknown keys or values of the wrong shape

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=config[unknown[0]],
            )

        kwargs: dict[str, Any] = dict(config)
        if "templates" in kwargs:
            templates = kwargs["templates"]
            if not isinstance(templates, Mapping):
                raise ValidationError(
                    "templates must be a mapping of tag name to template string",
                    parameter_name="templates",
                    parameter_value=templates,
                )
            kwargs["templates"] = {**DEFAULT_TEMPLATES, **templates}

        for name in ("components", "ignored_attributes", "allowed_button_attributes"):
            if name in kwargs:
                value = kwargs[name]
                if isinstance(value, str) or not isinstance(value, (list, tuple)):
                    raise ValidationError(
                        f"{name} must be a list of names, got {type(value).__name__}",
                        parameter_name=name,
                        parameter_value=value,
                    )
                kwargs[name] = tuple(value)

        return cls(**kwargs)
