"""UI color schema and color references.

Every themeable element is declared once in ``UI_COLOR_SCHEMA``. To add an
element:
1. Add a ``_ui_color(...)`` row below with its default reference.
2. It is resolved, loaded, saved and exposed as an attribute of
   ``UIColors`` automatically.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from themeramp.errors import ErrorCode, SchemaViolationError
from themeramp.themes.color import Hsla, hsla

_SCALE_TOKEN_RE = re.compile(
    r"^(?P<scale>[a-z][a-z0-9_-]*)\.(?:(?P<alpha>alpha)\.)?(?P<index>\d{1,3})$"
)


@dataclass(frozen=True, slots=True)
class ScaleRef:
    """A step of a named ramp set; light/dark is picked by the theme."""

    scale: str
    index: int
    transparent: bool = False

    def to_token(self) -> str:
        if self.transparent:
            return f"{self.scale}.alpha.{self.index}"
        return f"{self.scale}.{self.index}"

    @classmethod
    def from_token(cls, text: str) -> ScaleRef:
        match = _SCALE_TOKEN_RE.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid ramp reference {text!r}; expected 'scale.index' or 'scale.alpha.index'")
        return cls(
            scale=match.group("scale"),
            index=int(match.group("index")),
            transparent=match.group("alpha") is not None,
        )


@dataclass(frozen=True, slots=True)
class StaticColor:
    """A literal color that ignores ramps and appearance."""

    color: Hsla


ColorReference = Union[ScaleRef, StaticColor]


@dataclass(frozen=True, slots=True)
class UIColorSpec:
    """One themeable UI element and its default color."""

    id: str
    name: str
    default: ColorReference
    description: str


def _ui_color(identifier: str, default: ColorReference, description: str) -> UIColorSpec:
    name = " ".join(part.capitalize() for part in identifier.split("-"))
    return UIColorSpec(id=identifier, name=name, default=default, description=description)


def _solid(scale: str, index: int) -> ScaleRef:
    return ScaleRef(scale, index)


def _alpha(scale: str, index: int) -> ScaleRef:
    return ScaleRef(scale, index, transparent=True)


UI_COLOR_SCHEMA: tuple[UIColorSpec, ...] = (
    # Surfaces
    _ui_color("app-background", _solid("gray", 0), "Background of the application window."),
    _ui_color("subtle-background", _solid("gray", 1), "Secondary surfaces such as sidebars and striped rows."),
    _ui_color("element-background", _solid("gray", 2), "Background of interactive elements in their normal state."),
    _ui_color("element-hover-background", _solid("gray", 3), "Background of interactive elements while hovered."),
    _ui_color("element-active-background", _solid("gray", 5), "Background of interactive elements while pressed."),
    _ui_color(
        "filled-element-background",
        _solid("gray", 4),
        "Used for the background of filled elements, like buttons and checkboxes.",
    ),
    _ui_color("filled-element-hover-background", _solid("gray", 6), "Background of filled elements while hovered."),
    _ui_color("ghost-element-hover-background", _alpha("gray", 3), "Hover background of borderless elements."),
    _ui_color("selected-element-background", _alpha("blue", 4), "Background of selected rows and items."),
    # Borders
    _ui_color("border-subtle", _solid("gray", 4), "Separators and borders of non-interactive surfaces."),
    _ui_color("border", _solid("gray", 5), "Borders of interactive elements."),
    _ui_color("border-strong", _solid("gray", 7), "Borders of hovered or emphasized elements."),
    _ui_color("focus-ring", _solid("blue", 7), "Outline drawn around the focused element."),
    # Text and icons
    _ui_color("text", _solid("gray", 11), "Primary text."),
    _ui_color("text-muted", _solid("gray", 10), "Secondary text such as captions and labels."),
    _ui_color("text-placeholder", _solid("gray", 8), "Placeholder text in empty inputs."),
    _ui_color("text-disabled", _solid("gray", 7), "Text of disabled elements."),
    _ui_color("text-accent", _solid("blue", 10), "Links and accented text."),
    _ui_color("icon", _solid("gray", 10), "Icons drawn next to primary text."),
    _ui_color("icon-muted", _solid("gray", 8), "Icons of secondary or inactive controls."),
    # Accent
    _ui_color("accent-background", _solid("blue", 8), "Background of primary actions."),
    _ui_color("accent-hover-background", _solid("blue", 9), "Background of primary actions while hovered."),
    _ui_color("on-accent-text", StaticColor(hsla(0.0, 0.0, 1.0, 1.0)), "Text drawn on top of accent backgrounds."),
    # Status
    _ui_color("success", _solid("green", 8), "Success indicators."),
    _ui_color("success-background", _alpha("green", 2), "Background of success messages."),
    _ui_color("warning", _solid("yellow", 8), "Warning indicators."),
    _ui_color("warning-background", _alpha("yellow", 2), "Background of warning messages."),
    _ui_color("error", _solid("red", 8), "Error indicators and destructive actions."),
    _ui_color("error-background", _alpha("red", 2), "Background of error messages."),
    _ui_color("info", _solid("blue", 8), "Informational indicators."),
    # Chrome
    _ui_color("scrollbar-thumb", _alpha("gray", 5), "Scrollbar handle."),
    _ui_color("shadow", _alpha("gray", 4), "Drop shadows of popovers and dialogs."),
    _ui_color(
        "brand-mark",
        StaticColor(hsla(0.6, 0.8, 0.5, 1.0)),
        "Product logo; stays the same in every theme.",
    ),
)

SCHEMA_INDEX: dict[str, UIColorSpec] = {spec.id: spec for spec in UI_COLOR_SCHEMA}
SCHEMA_IDS: tuple[str, ...] = tuple(SCHEMA_INDEX)

if len(SCHEMA_INDEX) != len(UI_COLOR_SCHEMA):
    raise RuntimeError("Duplicate UI color identifier in UI_COLOR_SCHEMA")


def attribute_name(identifier: str) -> str:
    return identifier.replace("-", "_")


ATTRIBUTE_INDEX: dict[str, str] = {attribute_name(spec.id): spec.id for spec in UI_COLOR_SCHEMA}


def get_spec(identifier: str) -> UIColorSpec:
    """Return the schema entry for ``identifier``."""
    try:
        return SCHEMA_INDEX[identifier]
    except KeyError:
        raise SchemaViolationError(
            ErrorCode.UNKNOWN_UI_COLOR,
            f"Unknown UI color {identifier!r}",
            identifier=identifier,
        ) from None


def describe_reference(reference: ColorReference) -> str:
    if isinstance(reference, ScaleRef):
        return reference.to_token()
    if isinstance(reference, StaticColor):
        return "hsla({:.3f}, {:.3f}, {:.3f}, {:.3f})".format(*reference.color.to_tuple())
    raise TypeError(f"Unsupported color reference: {reference!r}")
