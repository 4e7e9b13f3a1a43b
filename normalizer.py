"""Default styling applied to draw elements before they reach Excalidraw."""
from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import config as cfg
from scene import Element

LABEL_DEFAULTS = {"textAlign": "center", "verticalAlign": "middle"}

# Expands element skeletons into full Excalidraw elements (label text included).
Expander = Callable[[list[dict[str, Any]]], Awaitable[list[dict[str, Any]]]]


def apply_label_defaults(elements: Sequence[Element]) -> list[dict[str, Any]]:
    result = []
    for element in elements:
        data = element.to_dict()
        label = element.label
        if label is not None:
            data["label"] = {**LABEL_DEFAULTS, **label}
        result.append(data)
    return result


def force_font(
    primitives: Sequence[dict[str, Any]],
    font_family: int = cfg.FORCED_FONT_FAMILY,
) -> list[dict[str, Any]]:
    return [
        {**primitive, "fontFamily": font_family} if primitive.get("type") == "text" else primitive
        for primitive in primitives
    ]


async def normalize_scene(elements: Sequence[Element], expand: Expander) -> list[dict[str, Any]]:
    """Label defaults, then expansion, then the forced font.

    The font has to be forced after expansion: bound label text elements only
    exist once Excalidraw has expanded their containers.
    """
    skeletons = apply_label_defaults(elements)
    expanded = await expand(skeletons)
    return force_font(expanded)
