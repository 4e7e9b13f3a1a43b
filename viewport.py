"""Scene bounds and camera-to-viewport mapping.

Excalidraw's ``exportToSvg`` places the scene so that its top-left content
corner sits at ``(EXPORT_PADDING, EXPORT_PADDING)`` in SVG user space. A camera
given in scene coordinates is therefore shifted by the negative scene minimum
plus that padding to become the SVG ``viewBox``.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

import config as cfg
from errors import InputError
from scene import Bounds, CameraDirective, Element, Scene, ViewportWindow


def partition_scene(elements: Sequence[Element]) -> Scene:
    """Split elements into drawables and the last camera directive."""
    scene = Scene()
    for element in elements:
        if element.is_directive:
            scene.camera = CameraDirective.from_element(element)
        else:
            scene.draw_elements.append(element)

    if not scene.draw_elements:
        raise InputError("No drawable elements provided")
    return scene


def compute_bounds(elements: Iterable[Element]) -> Bounds:
    min_x: float | None = None
    min_y: float | None = None

    def _lower(current: float | None, value: float | None) -> float | None:
        if value is None:
            return current
        return value if current is None else min(current, value)

    for element in elements:
        x, y = element.x, element.y
        min_x = _lower(min_x, x)
        min_y = _lower(min_y, y)
        for dx, dy in element.points:
            if x is not None and dx is not None:
                min_x = _lower(min_x, x + dx)
            if y is not None and dy is not None:
                min_y = _lower(min_y, y + dy)

    return Bounds(
        min_x=min_x if min_x is not None else 0.0,
        min_y=min_y if min_y is not None else 0.0,
    )


def map_viewport(
    camera: CameraDirective,
    bounds: Bounds,
    padding: float = cfg.EXPORT_PADDING,
) -> ViewportWindow:
    return ViewportWindow(
        x=camera.x - bounds.min_x + padding,
        y=camera.y - bounds.min_y + padding,
        width=camera.width,
        height=camera.height,
    )


def resolve_viewport(scene: Scene) -> ViewportWindow | None:
    """Return the output window for the scene, or None to keep the native frame."""
    if scene.camera is None:
        return None
    return map_viewport(scene.camera, compute_bounds(scene.draw_elements))


def _intrinsic(value: object, fallback: int) -> float:
    # Mirrors parseInt() on the exported width/height attributes.
    if value is None:
        return fallback
    text = str(value).strip()
    digits = ""
    for char in text.lstrip("+"):
        if char.isdigit():
            digits += char
        else:
            break
    if not digits or int(digits) <= 0:
        return fallback
    return int(digits)


def output_size(
    viewport: ViewportWindow | None,
    scale: float,
    intrinsic_width: object = None,
    intrinsic_height: object = None,
) -> tuple[float, float]:
    """Return the output pixel size for the rendered root element.

    With a viewport the camera size is multiplied by ``scale``; without one the
    exported SVG keeps its own size, falling back to the configured default.
    """
    if viewport is not None:
        return viewport.width * scale, viewport.height * scale
    return (
        _intrinsic(intrinsic_width, cfg.FALLBACK_WIDTH),
        _intrinsic(intrinsic_height, cfg.FALLBACK_HEIGHT),
    )
