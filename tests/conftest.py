import asyncio
import struct

import pytest

from backends import excalidraw
from backends.excalidraw import APPLY_SIZE_SCRIPT, EXPAND_SCRIPT, RENDER_SCRIPT
from session import PROBE_SCRIPT, READY_SCRIPT, RenderSessionManager


def png_size(blob: bytes) -> tuple[int, int]:
    # PNG IHDR width/height are big-endian u32 at fixed offsets.
    if len(blob) < 24 or blob[:8] != b"\x89PNG\r\n\x1a\n":
        raise AssertionError("not a PNG payload")
    return int.from_bytes(blob[16:20], "big"), int.from_bytes(blob[20:24], "big")


def _fake_png(width: float, height: float) -> bytes:
    ihdr = struct.pack(">II", int(width), int(height)) + b"\x08\x06\x00\x00\x00"
    return b"\x89PNG\r\n\x1a\n" + struct.pack(">I", 13) + b"IHDR" + ihdr + b"\x00\x00\x00\x00"


class FakeElement:
    def __init__(self, surface: "FakeSurface", selector: str) -> None:
        self.surface = surface
        self.selector = selector

    async def wait_visible(self, timeout: float) -> None:
        self.surface.waited_for = timeout
        if self.surface.never_visible:
            raise TimeoutError(f"Timeout {timeout * 1000:g}ms exceeded.")

    async def screenshot(self) -> bytes:
        return _fake_png(*self.surface.size)

    async def outer_markup(self) -> str:
        width, height = self.surface.size
        view_box = self.surface.rendered.get("viewBox") or f"0 0 {self.surface.intrinsic[0]} {self.surface.intrinsic[1]}"
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{view_box}" '
            f'width="{width:g}" height="{height:g}" style="width: {width:g}px; height: {height:g}px;">'
            "<g/></svg>"
        )


class FakeSurface:
    """In-memory stand-in for the Playwright page."""

    def __init__(
        self,
        *,
        ready: bool = True,
        intrinsic=("240", "130"),
        fail_launch: bool = False,
        delay: float = 0,
    ) -> None:
        self.ready = ready
        self.intrinsic = intrinsic
        self.fail_launch = fail_launch
        self.delay = delay
        self.fail_close = False
        self.never_visible = False
        self.dead = False
        self.closed = False
        self.url = None
        self.scripts: list[str] = []
        self.expanded: list[dict] = []
        self.rendered: dict = {}
        self.size = (0, 0)
        self.waited_for = None

    async def launch(self) -> None:
        if self.fail_launch:
            raise RuntimeError("Executable doesn't exist at /ms-playwright/chromium")

    async def navigate(self, url: str, timeout: float) -> None:
        self.url = url

    async def run_script(self, script, arg=None):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.dead or self.closed:
            raise RuntimeError("Target page, context or browser has been closed")
        self.scripts.append(script)
        if script == PROBE_SCRIPT:
            return True
        if script == READY_SCRIPT:
            return self.ready
        if script == EXPAND_SCRIPT:
            self.expanded = _expand(arg)
            return self.expanded
        if script == RENDER_SCRIPT:
            self.rendered = arg
            return {"width": self.intrinsic[0], "height": self.intrinsic[1]}
        if script == APPLY_SIZE_SCRIPT:
            self.size = (arg["width"], arg["height"])
            return True
        return None

    def locate(self, selector: str) -> FakeElement:
        return FakeElement(self, selector)

    async def close(self) -> None:
        self.closed = True
        if self.fail_close:
            raise RuntimeError("browser already gone")


def _expand(skeletons):
    # Mimics convertToExcalidrawElements: labels become bound text elements.
    result = []
    for skeleton in skeletons:
        element = {key: value for key, value in skeleton.items() if key != "label"}
        result.append(element)
        label = skeleton.get("label")
        if label:
            result.append(
                {
                    "type": "text",
                    "id": f"{skeleton.get('id')}-label",
                    "containerId": skeleton.get("id"),
                    "text": label.get("text", ""),
                    "textAlign": label.get("textAlign"),
                    "verticalAlign": label.get("verticalAlign"),
                    "fontFamily": 5,
                }
            )
    return result


class SurfaceFactory:
    def __init__(self, **options) -> None:
        self.options = options
        self.created: list[FakeSurface] = []

    def __call__(self) -> FakeSurface:
        surface = FakeSurface(**self.options)
        self.created.append(surface)
        return surface

    @property
    def last(self) -> FakeSurface:
        return self.created[-1]


@pytest.fixture
def surfaces(monkeypatch):
    """Swap the process-wide render session for one backed by fake surfaces."""
    factory = SurfaceFactory()
    manager = RenderSessionManager(factory, host_url="https://esm.test", init_script="/* init */")
    monkeypatch.setattr(excalidraw, "sessions", manager)
    return factory
