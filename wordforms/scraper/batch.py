"""Batch orchestrator.

``scrap`` is the public entry point.  It opens one page session for the
whole batch and processes requests strictly one after another; a failure
while handling one request becomes a negative result for that request and
never stops the batch.
"""

from __future__ import annotations

import asyncio
from typing import AsyncContextManager, Callable, Iterable

from wordforms.scraper.crawler import CRAWLERS
from wordforms.scraper.models import (
    INVALID_PAGE_TYPE,
    PageType,
    ScrapConfig,
    ScrapRequest,
    ScrapResult,
    ScrapResultNegative,
)
from wordforms.scraper.session import PageSession, open_session, random_user_agent

SessionFactory = Callable[[], AsyncContextManager[PageSession]]


def fault_to_negative(request: ScrapRequest, exc: BaseException) -> ScrapResultNegative:
    """Convert an exception raised while handling *request* into a result."""
    reason = str(exc) or type(exc).__name__
    return ScrapResultNegative(request.word, request.page_type, reason)


async def scrap_one(
    session: PageSession,
    request: ScrapRequest,
    config: ScrapConfig,
) -> ScrapResult:
    """Produce the result for a single request.  Never raises ``Exception``."""
    crawler = CRAWLERS.get(request.page_type) if isinstance(request.page_type, PageType) else None
    if crawler is None:
        return ScrapResultNegative(request.word, request.page_type, INVALID_PAGE_TYPE)

    try:
        return await crawler(request.word, session, config.process_redirections)
    except Exception as exc:
        print(f"[BATCH] ✗ Failed {request.word!r} ({request.page_type.value}): {exc}")
        return fault_to_negative(request, exc)


async def _configure(session: PageSession, config: ScrapConfig) -> None:
    session.set_default_navigation_timeout(config.navigation_timeout)
    await session.set_request_interception(True)
    # The identity must be in place before the first navigation, otherwise
    # the site tends to answer with its anti-bot interstitial.
    await session.set_client_identity(random_user_agent())


async def scrap(
    requests: Iterable[ScrapRequest],
    config: ScrapConfig | None = None,
    session_factory: SessionFactory = open_session,
) -> list[ScrapResult]:
    """Scrape every request in order and return one result per request.

    *requests* is consumed lazily and only once, so it may be a generator.

    Args:
        requests: The requests to process.
        config: Batch options; ``ScrapConfig()`` defaults when ``None``.
        session_factory: Zero-argument callable returning an async context
            manager that yields a :class:`PageSession`.

    Returns:
        The results, in request order.

    Raises:
        Any exception raised while opening or configuring the page session.
        Failures during individual requests are returned as
        :class:`ScrapResultNegative` instead.
    """
    if config is None:
        config = ScrapConfig()

    results: list[ScrapResult] = []
    async with session_factory() as session:
        await _configure(session, config)

        for request in requests:
            result = await scrap_one(session, request, config)
            results.append(result)
            if config.inter_request_delay > 0:
                await asyncio.sleep(config.inter_request_delay)

    print(f"[BATCH] Done: {len(results)} result(s).")
    return results


def scrap_sync(
    requests: Iterable[ScrapRequest],
    config: ScrapConfig | None = None,
    session_factory: SessionFactory = open_session,
) -> list[ScrapResult]:
    """Blocking wrapper around :func:`scrap` for synchronous callers."""
    return asyncio.run(scrap(requests, config, session_factory))
