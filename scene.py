"""Scene model: parsed Excalidraw elements, camera directives and derived geometry.

Elements arrive as loosely-typed JSON objects. ``Element`` keeps the original
mapping intact (every unknown key is forwarded to Excalidraw untouched) and
exposes the handful of fields the pipeline actually reads.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from errors import InputError


class ElementKind(str, Enum):
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    DIAMOND = "diamond"
    ARROW = "arrow"
    LINE = "line"
    TEXT = "text"
    FREEDRAW = "freedraw"
    IMAGE = "image"
    FRAME = "frame"
    CAMERA_UPDATE = "cameraUpdate"
    VIEWPORT_UPDATE = "viewportUpdate"


DIRECTIVE_KINDS = frozenset({ElementKind.CAMERA_UPDATE, ElementKind.VIEWPORT_UPDATE})
DRAWABLE_KINDS = frozenset(ElementKind) - DIRECTIVE_KINDS


def as_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None if it is missing or not finite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _passthrough_number(value: Any) -> float:
    # Camera geometry is trusted as given; anything non-numeric becomes NaN.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return math.nan
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


@dataclass
class Element:
    """One drawable or directive entry of a scene."""

    type: str
    data: dict[str, Any]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Element":
        return cls(type=str(data.get("type", "")), data=data)

    @property
    def kind(self) -> ElementKind | None:
        try:
            return ElementKind(self.type)
        except ValueError:
            return None

    @property
    def is_directive(self) -> bool:
        return self.kind in DIRECTIVE_KINDS

    @property
    def id(self) -> str | None:
        value = self.data.get("id")
        return None if value is None else str(value)

    @property
    def x(self) -> float | None:
        return as_number(self.data.get("x"))

    @property
    def y(self) -> float | None:
        return as_number(self.data.get("y"))

    @property
    def points(self) -> list[tuple[float | None, float | None]]:
        raw = self.data.get("points")
        if not isinstance(raw, list):
            return []
        points = []
        for point in raw:
            if isinstance(point, (list, tuple)) and len(point) >= 2:
                points.append((as_number(point[0]), as_number(point[1])))
        return points

    @property
    def label(self) -> dict[str, Any] | None:
        label = self.data.get("label")
        return label if isinstance(label, dict) else None

    def to_dict(self) -> dict[str, Any]:
        return dict(self.data)


@dataclass(frozen=True)
class CameraDirective:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_element(cls, element: Element) -> "CameraDirective":
        data = element.data
        return cls(
            x=_passthrough_number(data.get("x")),
            y=_passthrough_number(data.get("y")),
            width=_passthrough_number(data.get("width")),
            height=_passthrough_number(data.get("height")),
        )


@dataclass(frozen=True)
class Bounds:
    min_x: float = 0.0
    min_y: float = 0.0


@dataclass(frozen=True)
class ViewportWindow:
    x: float
    y: float
    width: float
    height: float

    def view_box(self) -> str:
        return f"{_fmt(self.x)} {_fmt(self.y)} {_fmt(self.width)} {_fmt(self.height)}"


@dataclass
class Scene:
    """Elements in z-order (first = back) plus the resolved camera."""

    draw_elements: list[Element] = field(default_factory=list)
    camera: CameraDirective | None = None


def _fmt(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


def parse_elements(elements_json: str) -> list[Element]:
    """Parse an elements JSON string into ``Element`` objects, preserving order."""
    try:
        parsed = json.loads(elements_json)
    except (TypeError, ValueError) as exc:
        raise InputError(f"Invalid JSON in elements: {exc}") from exc
    if not isinstance(parsed, list):
        raise InputError("elements must be a JSON array.")

    elements = []
    for index, item in enumerate(parsed):
        if not isinstance(item, dict):
            raise InputError(f"element at index {index} is not a JSON object.")
        elements.append(Element.from_dict(item))
    return elements
