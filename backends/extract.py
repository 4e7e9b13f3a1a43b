"""Pull the rendered ``<svg>`` out of the page as PNG pixels or SVG markup.

Both paths expect the output width/height to be applied to the element already.
"""
from __future__ import annotations

import config as cfg
from errors import RenderTimeoutError
from surface import RenderSurface

ROOT_SELECTOR = "#canvas > svg"


async def extract_png(surface: RenderSurface, timeout: float = cfg.RENDER_VISIBLE_TIMEOUT) -> bytes:
    element = surface.locate(ROOT_SELECTOR)
    try:
        await element.wait_visible(timeout)
    except TimeoutError as exc:
        raise RenderTimeoutError(f"Rendered diagram did not become visible within {timeout:g}s") from exc
    return await element.screenshot()


async def extract_svg(surface: RenderSurface) -> str:
    # Serialisation does not depend on paint, so no visibility wait.
    return await surface.locate(ROOT_SELECTOR).outer_markup()
