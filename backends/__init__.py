from backends.base import RenderedArtifact, RenderResult
from backends.excalidraw import render_excalidraw, render_to_png, render_to_svg, shutdown

__all__ = [
    "RenderedArtifact",
    "RenderResult",
    "render_excalidraw",
    "render_to_png",
    "render_to_svg",
    "shutdown",
]
