"""Headless Chromium page driven through the Playwright async API."""
from __future__ import annotations

import logging
from typing import Any, Protocol

from playwright.async_api import Browser, Locator, Page, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

import config as cfg

logger = logging.getLogger(__name__)


class SurfaceElement(Protocol):
    async def wait_visible(self, timeout: float) -> None: ...

    async def screenshot(self) -> bytes: ...

    async def outer_markup(self) -> str: ...


class RenderSurface(Protocol):
    async def launch(self) -> None: ...

    async def navigate(self, url: str, timeout: float) -> None: ...

    async def run_script(self, script: str, arg: Any = None) -> Any: ...

    def locate(self, selector: str) -> SurfaceElement: ...

    async def close(self) -> None: ...


class PlaywrightElement:
    def __init__(self, locator: Locator) -> None:
        self._locator = locator

    async def wait_visible(self, timeout: float) -> None:
        try:
            await self._locator.wait_for(state="visible", timeout=timeout * 1000)
        except PlaywrightTimeoutError as exc:
            raise TimeoutError(str(exc)) from exc

    async def screenshot(self) -> bytes:
        return await self._locator.screenshot(type="png")

    async def outer_markup(self) -> str:
        return await self._locator.evaluate("el => new XMLSerializer().serializeToString(el)")


class PlaywrightSurface:
    """One browser with one page; owned exclusively by the session manager."""

    def __init__(self, headless: bool = cfg.RENDER_HEADLESS) -> None:
        self.headless = headless
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("render surface has not been launched")
        return self._page

    async def launch(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless)
        self._page = await self._browser.new_page()
        logger.debug("Launched Chromium (headless=%s)", self.headless)

    async def navigate(self, url: str, timeout: float) -> None:
        await self.page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)

    async def run_script(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    def locate(self, selector: str) -> PlaywrightElement:
        return PlaywrightElement(self.page.locator(selector))

    async def close(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._page = None
        self._browser = None
        self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()
