"""Lifecycle of the single headless page that renders Excalidraw scenes.

The page is expensive to bring up (browser launch, module import from the CDN,
font loading), so one is kept alive for the whole process and handed out by
``RenderSessionManager.acquire``. A page that no longer answers a trivial
script is closed and replaced within the same call.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

import config as cfg
from errors import InitializationError, exception_hint
from surface import PlaywrightSurface, RenderSurface

logger = logging.getLogger(__name__)

# Runs once per page. Leaves three entry points on ``window``:
#   expandElements(skeletons)  -> full Excalidraw elements, ids preserved
#   renderScene({elements, viewBox}) -> exported <svg> placed in #canvas
#   applySize({width, height}) -> fixes the output size of that <svg>
BROWSER_INIT_SCRIPT = """
(async () => {
  document.body.innerHTML = '<div id="canvas" style="display:inline-block"></div>';
  document.body.style.margin = "0";
  document.body.style.padding = "0";
  document.body.style.background = "white";

  const { convertToExcalidrawElements, exportToSvg } = await import("%MODULE_URL%");

  // Virgil is loaded by Excalidraw itself and inlined by exportToSvg.
  await new Promise(function (r) { setTimeout(r, %FONT_SETTLE_MS%); });

  window.expandElements = function (skeletons) {
    return convertToExcalidrawElements(skeletons, { regenerateIds: false });
  };

  window.renderScene = async function (opts) {
    const svg = await exportToSvg({
      elements: opts.elements,
      appState: { viewBackgroundColor: "#ffffff", exportBackground: true },
      files: null,
      exportPadding: %EXPORT_PADDING%,
      skipInliningFonts: false,
    });
    if (opts.viewBox) {
      svg.setAttribute("viewBox", opts.viewBox);
    }
    const canvas = document.getElementById("canvas");
    canvas.innerHTML = "";
    canvas.appendChild(svg);
    return { width: svg.getAttribute("width"), height: svg.getAttribute("height") };
  };

  window.applySize = function (size) {
    const svg = document.querySelector("#canvas > svg");
    svg.setAttribute("width", String(size.width));
    svg.setAttribute("height", String(size.height));
    svg.style.width = size.width + "px";
    svg.style.height = size.height + "px";
    return true;
  };

  window.__RENDER_READY__ = true;
})()
"""

PROBE_SCRIPT = "() => true"
READY_SCRIPT = "() => globalThis.__RENDER_READY__ === true"


def build_init_script(
    module_url: str = cfg.EXCALIDRAW_MODULE_URL,
    font_settle_ms: int = cfg.FONT_SETTLE_MS,
    export_padding: float = cfg.EXPORT_PADDING,
) -> str:
    return (
        BROWSER_INIT_SCRIPT.replace("%MODULE_URL%", module_url)
        .replace("%FONT_SETTLE_MS%", str(int(font_settle_ms)))
        .replace("%EXPORT_PADDING%", str(export_padding))
    )


class SessionState(str, Enum):
    ABSENT = "absent"
    LIVE = "live"
    DEGRADED = "degraded"


class RenderSessionManager:
    """Sole owner of the render surface.

    Callers get the surface from ``acquire`` for the duration of one render and
    must not keep it across calls.
    """

    def __init__(
        self,
        surface_factory: Callable[[], RenderSurface] = PlaywrightSurface,
        *,
        host_url: str = cfg.EXCALIDRAW_HOST_URL,
        init_script: str | None = None,
        init_timeout: float = cfg.RENDER_INIT_TIMEOUT,
    ) -> None:
        self._surface_factory = surface_factory
        self._host_url = host_url
        self._init_script = init_script if init_script is not None else build_init_script()
        self._init_timeout = init_timeout
        self._surface: RenderSurface | None = None
        self._state = SessionState.ABSENT
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    def lock(self) -> asyncio.Lock:
        """Lock that callers hold while driving the surface.

        A lock is bound to the event loop that first waits on it, so a new one
        is made whenever the running loop changes.
        """
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def acquire(self) -> RenderSurface:
        """Return a live surface, creating or replacing it as needed."""
        if self._surface is not None:
            try:
                await self._surface.run_script(PROBE_SCRIPT)
                return self._surface
            except Exception as exc:
                logger.warning("Render session failed liveness probe (%s); recreating", exception_hint(exc))
                self._state = SessionState.DEGRADED
                await self._discard()
        return await self._create()

    async def shutdown(self) -> None:
        if self._surface is None:
            return
        logger.info("Shutting down render session")
        await self._discard()

    async def _create(self) -> RenderSurface:
        logger.info("Starting render session at %s", self._host_url)
        surface = self._surface_factory()
        try:
            await surface.launch()
            await surface.navigate(self._host_url, self._init_timeout)
            await surface.run_script(self._init_script)
            ready = await surface.run_script(READY_SCRIPT)
        except Exception as exc:
            await _close_quietly(surface)
            raise InitializationError(
                f"Excalidraw initialization failed in headless browser: {exception_hint(exc)}"
            ) from exc

        if ready is not True:
            await _close_quietly(surface)
            raise InitializationError("Excalidraw initialization failed in headless browser")

        self._surface = surface
        self._state = SessionState.LIVE
        return surface

    async def _discard(self) -> None:
        surface = self._surface
        self._surface = None
        self._state = SessionState.ABSENT
        if surface is not None:
            await _close_quietly(surface)


async def _close_quietly(surface: RenderSurface) -> None:
    try:
        await surface.close()
    except Exception as exc:
        logger.debug("Ignoring error while closing render surface: %s", exception_hint(exc))
