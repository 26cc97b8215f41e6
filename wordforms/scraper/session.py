"""Page session: a single headless Chromium page driven through Playwright.

This is the only module that talks to the browser.  The batch orchestrator
opens one session per run with :func:`open_session` and hands it to the
crawlers, which only use :meth:`PageSession.navigate` and
:meth:`PageSession.evaluate`.
"""

from __future__ import annotations

import json
import random
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable

from playwright.async_api import (
    Browser,
    BrowserContext,
    CDPSession,
    Page,
    Playwright,
    Route,
    async_playwright,
)

from wordforms.config import settings

BLOCKED_RESOURCE_TYPES = frozenset({"stylesheet", "font", "image"})

# Chromium desktop user agents (must match the engine driving the page);
# one is picked at random per session.
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36 Edg/131.0.0.0",
]

_LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
]


def random_user_agent() -> str:
    """Return a random desktop browser user agent string."""
    return random.choice(USER_AGENTS)


@dataclass
class NavigationResult:
    """Where a navigation ended up and which URLs redirected on the way."""

    final_url: str
    redirect_chain: list[str] = field(default_factory=list)


async def _route_by_resource_type(route: Route) -> None:
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class PageSession:
    """One browser page for the lifetime of a batch."""

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
    ) -> None:
        self._playwright = playwright
        self._browser = browser
        self._context = context
        self._page = page
        self._cdp: CDPSession | None = None
        self._intercepting = False
        self._closed = False

    @classmethod
    async def launch(cls, headless: bool = True, user_agent: str | None = None) -> PageSession:
        """Start Playwright, launch Chromium and open a single page.

        *user_agent*, when given, is the identity of the browser context from
        the start, so ``navigator.userAgent`` and request headers agree.
        Anything already started is torn down again if a later step fails.
        """
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(headless=headless, args=_LAUNCH_ARGS)
            try:
                context = await browser.new_context(
                    ignore_https_errors=True,
                    user_agent=user_agent,
                )
                page = await context.new_page()
            except Exception:
                await browser.close()
                raise
        except Exception:
            await playwright.stop()
            raise
        return cls(playwright, browser, context, page)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_default_navigation_timeout(self, seconds: float) -> None:
        self._page.set_default_navigation_timeout(seconds * 1000)

    async def set_request_interception(self, enabled: bool) -> None:
        """Abort stylesheet, font and image requests while *enabled*."""
        if enabled and not self._intercepting:
            await self._page.route("**/*", _route_by_resource_type)
        elif not enabled and self._intercepting:
            await self._page.unroute("**/*", _route_by_resource_type)
        self._intercepting = enabled

    async def set_client_identity(self, user_agent: str) -> None:
        """Override the browser's user agent for this page.

        Goes through the DevTools protocol so the override covers
        ``navigator.userAgent`` as well as the ``User-Agent`` header.  Must be
        called before the first navigation to take effect on it.
        """
        if self._cdp is None:
            self._cdp = await self._context.new_cdp_session(self._page)
        await self._cdp.send("Network.setUserAgentOverride", {"userAgent": user_agent})

    # ------------------------------------------------------------------
    # Navigation & extraction
    # ------------------------------------------------------------------
    async def navigate(self, url: str) -> NavigationResult:
        """Load *url* and report the final URL plus the redirect chain.

        Raises:
            playwright.async_api.Error: On network errors.
            playwright.async_api.TimeoutError: If the navigation timeout expires.
        """
        response = await self._page.goto(url)
        chain: list[str] = []
        if response is not None:
            previous = response.request.redirected_from
            while previous is not None:
                chain.append(previous.url)
                previous = previous.redirected_from
            chain.reverse()
        return NavigationResult(final_url=self._page.url, redirect_chain=chain)

    async def evaluate(
        self,
        fn: Callable[[str, Any], Any],
        seed: Any,
    ) -> Any:
        """Apply the extractor *fn* to the rendered page content.

        *seed* and the return value are passed through JSON so only plain data
        crosses between the caller and the extractor.
        """
        html = await self._page.content()
        result = fn(html, json.loads(json.dumps(seed)))
        return json.loads(json.dumps(result))

    async def close(self) -> None:
        """Close the page and the browser.  Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        # Every step runs even if an earlier one fails; the first error is re-raised.
        errors: list[Exception] = []
        for step in (
            self._page.close,
            self._context.close,
            self._browser.close,
            self._playwright.stop,
        ):
            try:
                await step()
            except Exception as exc:
                errors.append(exc)
        if errors:
            raise errors[0]


@asynccontextmanager
async def open_session(
    headless: bool | None = None,
    user_agent: str | None = None,
) -> AsyncIterator[PageSession]:
    """Open a :class:`PageSession` that is closed on every exit path."""
    if headless is None:
        headless = settings.browser_headless
    session = await PageSession.launch(headless=headless, user_agent=user_agent)
    try:
        yield session
    finally:
        await session.close()
