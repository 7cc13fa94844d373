"""Browser rendering tier using Playwright.

A single Chromium session is launched lazily on the first render and shared
by every later render; each render gets its own page, closed afterwards.
The session stays open until ``shutdown()`` is awaited.

Usage:
    async with BrowserRenderer() as renderer:
        result = await renderer.render("https://example.com")

Note: when no local Chrome is found, Playwright's bundled Chromium is used
(installed on demand with ``playwright install chromium``).
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from adaptive_scraper.core.config import Settings, settings
from adaptive_scraper.services.scraper.base import RenderResult
from adaptive_scraper.services.scraper.exceptions import RenderError

if TYPE_CHECKING:
    from playwright.async_api import Browser, Playwright

logger = logging.getLogger(__name__)

# Sandboxing is disabled so the browser starts inside containers and CI hosts
LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)


def candidate_browser_paths(platform: str | None = None) -> list[str]:
    """Return well-known Chrome install locations for ``platform``."""
    platform = platform or sys.platform
    if platform == "win32":
        local_app_data = os.environ.get("LOCALAPPDATA", "")
        paths = [
            r"C:\Program Files\Google\Chrome\Application\chrome.exe",
            r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
        ]
        if local_app_data:
            paths.append(
                os.path.join(local_app_data, "Google", "Chrome", "Application", "chrome.exe")
            )
        return paths
    if platform == "darwin":
        return [
            "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
            "/Applications/Chromium.app/Contents/MacOS/Chromium",
        ]
    return [
        "/usr/bin/google-chrome",
        "/usr/bin/google-chrome-stable",
        "/usr/bin/chromium",
        "/usr/bin/chromium-browser",
    ]


class BrowserLocator:
    """Resolve the browser executable once and cache the answer.

    Order: configured path, local Chrome installs, Playwright's bundled
    Chromium (provisioned on demand when ``browser_auto_install`` is set).
    """

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or settings
        self._executable_path: str | None = None

    @property
    def executable_path(self) -> str | None:
        """The cached resolution result, if any."""
        return self._executable_path

    async def resolve(self, playwright: Playwright) -> str:
        """Return a usable browser executable path.

        Raises:
            RenderError: If no browser can be found or provisioned.
        """
        if self._executable_path:
            return self._executable_path

        configured = self.config.browser_executable_path
        if configured:
            if not os.path.exists(configured):
                raise RenderError(f"Configured browser not found at {configured}")
            self._executable_path = configured
            return configured

        for path in candidate_browser_paths():
            if os.path.exists(path):
                logger.debug("Using local browser at %s", path)
                self._executable_path = path
                return path

        bundled = playwright.chromium.executable_path
        if not os.path.exists(bundled):
            if not self.config.browser_auto_install:
                raise RenderError(
                    "No local Chrome found and bundled Chromium is not installed. "
                    "Run: playwright install chromium"
                )
            await self._install_bundled_browser()
            if not os.path.exists(bundled):
                raise RenderError(f"Bundled Chromium missing after install: {bundled}")

        logger.debug("Using bundled Chromium at %s", bundled)
        self._executable_path = bundled
        return bundled

    async def _install_bundled_browser(self) -> None:
        """Download Playwright's Chromium build."""
        logger.info("No browser found, installing bundled Chromium")
        process = await asyncio.create_subprocess_exec(
            sys.executable,
            "-m",
            "playwright",
            "install",
            "chromium",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate()
        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()[-500:]
            raise RenderError(f"Failed to install bundled Chromium: {detail}")


class BrowserRenderer:
    """Render pages with a shared, lazily launched Chromium session.

    Attributes:
        config: Service settings (timeouts, user agent, viewport, headless)
        locator: Resolves the browser binary
    """

    def __init__(
        self,
        config: Settings | None = None,
        locator: BrowserLocator | None = None,
    ) -> None:
        self.config = config or settings
        self.locator = locator or BrowserLocator(self.config)
        self._browser: Browser | None = None
        self._playwright: Playwright | None = None
        self._launch_lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        """Whether a browser session is currently open."""
        return self._browser is not None

    async def _ensure_browser(self) -> Browser:
        """Launch the shared browser on first use.

        Returns:
            The shared Playwright Browser instance.

        Raises:
            RenderError: If the browser fails to launch.
        """
        if self._browser is not None:
            return self._browser

        async with self._launch_lock:
            # Another render may have launched it while we waited
            if self._browser is not None:
                return self._browser
            try:
                # Import here to avoid loading Playwright until needed
                from playwright.async_api import async_playwright

                self._playwright = await async_playwright().start()
                executable_path = await self.locator.resolve(self._playwright)
                self._browser = await self._playwright.chromium.launch(
                    executable_path=executable_path,
                    headless=self.config.browser_headless,
                    args=list(LAUNCH_ARGS),
                )
                logger.info(
                    "Browser session started (executable=%s, headless=%s)",
                    executable_path,
                    self.config.browser_headless,
                )
            except Exception as e:
                await self._stop_playwright()
                if isinstance(e, RenderError):
                    raise
                logger.error("Failed to launch browser: %s", e)
                raise RenderError(f"Failed to launch browser: {e}") from e

        return self._browser

    async def render(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
        wait_selector: str | None = None,
        screenshot: bool = False,
    ) -> RenderResult:
        """Render ``url`` and return the final markup.

        Navigation waits for DOM readiness only. Afterwards the page either
        waits for ``wait_selector`` or sleeps for the settle delay so async
        hydration can finish.

        Args:
            url: Address (or data: URI) to render
            headers: Extra HTTP headers for the page
            timeout_ms: Navigation timeout (default: ``render_timeout_ms``)
            wait_selector: CSS selector to wait for before reading markup
            screenshot: Save a PNG of the rendered page

        Returns:
            RenderResult with the rendered HTML

        Raises:
            RenderError: If the session cannot start or navigation/wait fails
        """
        timeout_ms = timeout_ms if timeout_ms is not None else self.config.render_timeout_ms
        browser = await self._ensure_browser()
        page = None

        try:
            page = await browser.new_page(
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
                user_agent=self.config.render_user_agent,
            )
            if headers:
                await page.set_extra_http_headers(headers)

            logger.debug("Rendering %s (timeout=%dms)", url, timeout_ms)
            response = await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
            if response is not None and response.status >= 400:
                logger.warning("Rendered %s returned HTTP %d", url, response.status)

            if wait_selector:
                logger.debug("Waiting for selector %r on %s", wait_selector, url)
                await page.wait_for_selector(
                    wait_selector,
                    timeout=self.config.wait_selector_timeout_ms,
                )
            else:
                await asyncio.sleep(self.config.render_settle_delay_ms / 1000)

            html = await page.content()

            screenshot_path = None
            if screenshot:
                path = Path(self.config.screenshot_dir) / f"screenshot-{int(time.time() * 1000)}.png"
                await page.screenshot(path=str(path), full_page=True)
                screenshot_path = str(path)

            logger.debug("Rendered %d chars from %s", len(html), url)
            return RenderResult(html=html, screenshot_path=screenshot_path)

        except Exception as e:
            logger.warning("Browser render failed for %s: %s", url, e)
            raise RenderError(f"Browser render failed for {url}: {e}") from e

        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.warning("Error closing page for %s: %s", url, e)

    async def shutdown(self) -> None:
        """Close the browser session and stop Playwright.

        Must be awaited by the owning process before exit. Safe to call
        multiple times; a later render starts a fresh session.
        """
        if self._browser:
            try:
                await self._browser.close()
                logger.info("Browser session closed")
            except Exception as e:
                logger.warning("Error closing browser: %s", e)
            self._browser = None

        await self._stop_playwright()

    async def _stop_playwright(self) -> None:
        if self._playwright:
            try:
                await self._playwright.stop()
                logger.debug("Playwright stopped")
            except Exception as e:
                logger.warning("Error stopping Playwright: %s", e)
            self._playwright = None

    async def __aenter__(self) -> BrowserRenderer:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - ensures the session is released."""
        await self.shutdown()
