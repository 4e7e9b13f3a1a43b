"""Render Excalidraw element JSON to PNG or SVG in a shared headless page.

``render_to_png`` / ``render_to_svg`` raise ``RenderError`` subclasses;
``render_excalidraw`` is the boundary used by the tools and never raises.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import config as cfg
from backends.base import RenderedArtifact, RenderResult
from backends.extract import extract_png, extract_svg
from backends.output import resolve_destination, write_artifact
from errors import InputError, RenderError, exception_hint
from normalizer import normalize_scene
from scene import parse_elements
from session import RenderSessionManager
from viewport import output_size, partition_scene, resolve_viewport

logger = logging.getLogger(__name__)

OutputFormat = Literal["png", "svg"]

EXPAND_SCRIPT = "skeletons => window.expandElements(skeletons)"
RENDER_SCRIPT = "async opts => await window.renderScene(opts)"
APPLY_SIZE_SCRIPT = "size => window.applySize(size)"

# ── Singleton render session ─────────────────────────────────────────────────

# One render at a time: every call drives the same page through sessions.lock().
sessions = RenderSessionManager()


# ── Pipeline ──────────────────────────────────────────────────────────────────

async def render_artifact(
    elements_json: str,
    fmt: OutputFormat = "png",
    scale: float = cfg.DEFAULT_SCALE,
) -> RenderedArtifact:
    if fmt not in ("png", "svg"):
        raise InputError(f"Unsupported output format: {fmt!r}")
    if scale <= 0:
        raise InputError("scale must be > 0")

    # Input problems surface before the browser is touched.
    scene = partition_scene(parse_elements(elements_json))
    viewport = resolve_viewport(scene)

    async with sessions.lock():
        surface = await sessions.acquire()

        async def expand(skeletons):
            return await surface.run_script(EXPAND_SCRIPT, skeletons)

        primitives = await normalize_scene(scene.draw_elements, expand)
        intrinsic = await surface.run_script(
            RENDER_SCRIPT,
            {"elements": primitives, "viewBox": viewport.view_box() if viewport else None},
        ) or {}
        width, height = output_size(
            viewport,
            scale,
            intrinsic.get("width"),
            intrinsic.get("height"),
        )
        await surface.run_script(APPLY_SIZE_SCRIPT, {"width": width, "height": height})

        if fmt == "png":
            content: bytes | str = await extract_png(surface)
        else:
            content = await extract_svg(surface)

    logger.debug("Rendered %d element(s) to %s at %gx%g", len(scene.draw_elements), fmt, width, height)
    return RenderedArtifact(format=fmt, content=content, width=width, height=height)


async def render_to_png(
    elements_json: str,
    output_path: str | None = None,
    scale: float = cfg.DEFAULT_SCALE,
) -> str:
    """Render to a PNG file and return its absolute path."""
    artifact = await render_artifact(elements_json, "png", scale)
    return str(write_artifact(resolve_destination(output_path, "png"), artifact.content))


async def render_to_svg(elements_json: str, output_path: str | None = None) -> str:
    """Render to an SVG file and return its absolute path."""
    artifact = await render_artifact(elements_json, "svg", 1)
    return str(write_artifact(resolve_destination(output_path, "svg"), artifact.content))


async def shutdown() -> None:
    """Release the headless browser once any in-flight render has finished."""
    async with sessions.lock():
        await sessions.shutdown()


# ── Tool boundary ─────────────────────────────────────────────────────────────

async def render_excalidraw(
    elements_json: str,
    output_path: str | None = None,
    fmt: OutputFormat = "png",
    scale: float | None = None,
) -> RenderResult:
    if fmt == "svg":
        scale = 1
    elif scale is None:
        scale = cfg.DEFAULT_SCALE

    try:
        artifact = await render_artifact(elements_json, fmt, scale)
        destination = write_artifact(resolve_destination(output_path, fmt), artifact.content)
    except RenderError as exc:
        logger.warning("Excalidraw render failed: %s", exc)
        return RenderResult(
            success=False,
            format=fmt,
            error=str(exc),
        )
    except OSError as exc:
        return RenderResult(
            success=False,
            format=fmt,
            error=f"failed to write output file: {exc}",
        )
    except Exception as exc:
        logger.exception("Unexpected error while rendering Excalidraw diagram")
        return RenderResult(
            success=False,
            format=fmt,
            error=exception_hint(exc),
        )

    return RenderResult(
        success=True,
        format=fmt,
        width=artifact.width,
        height=artifact.height,
        output_path=Path(destination),
    )
