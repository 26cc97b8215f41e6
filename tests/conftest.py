"""Shared fixtures: canned Collins pages and an in-memory page session.

``FakeSession`` mimics :class:`wordforms.scraper.session.PageSession` without
a browser.  Each URL maps either to a :class:`FakePage` or to an exception
that ``navigate`` raises.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from wordforms.scraper.session import NavigationResult


# ---------------------------------------------------------------------------
# Canned pages
# ---------------------------------------------------------------------------

RUN_DICTIONARY_HTML = """\
<html><body>
<div class="dictentry">
  <span class="inflected_forms">
    <span class="type-gram">plural</span>
    <span class="type-gram">, 3rd person singular present tense</span>
    <span class="orth"> runs</span>
    <span class="type-gram">, present participle</span>
    <span class="orth"> running</span>
    <span class="type-gram">, past tense</span>
    <span class="orth"> ran</span>
    <span class="type-gram">, past participle</span>
    <span class="orth"> run</span>
  </span>
</div>
</body></html>
"""

RUN_CONJUGATION_HTML = """\
<html><body>
<div class="vC">
  <div class="type">
Past Participle run</div>
  <div class="type">
Present Participle running</div>
</div>
<div class="short_verb_table">
  <div class="conjugation">
    <span class="h3_version">Present</span>
    <span class="infl">I run</span>
    <span class="infl">he/she/it runs</span>
  </div>
  <div class="conjugation">
    <span class="h3_version">Past</span>
    <span class="infl"><span class="pronoun">I</span> ran</span>
  </div>
</div>
</body></html>
"""

NO_ENTRY_HTML = "<html><body><h1>Sorry, no results</h1></body></html>"

CHALLENGE_HTML = """\
<html><body>
<div id="challenge-running">Checking if the site connection is secure</div>
</body></html>
"""


# ---------------------------------------------------------------------------
# Fake session
# ---------------------------------------------------------------------------

@dataclass
class FakePage:
    html: str
    final_url: str | None = None
    redirect_chain: list[str] = field(default_factory=list)


class FakeSession:
    def __init__(self, pages: dict[str, FakePage | Exception] | None = None) -> None:
        self.pages = pages or {}
        self.visited: list[str] = []
        self.evaluated: list[Callable[..., Any]] = []
        self.navigation_timeout: float | None = None
        self.intercepting = False
        self.user_agent: str | None = None
        self.close_count = 0
        self._current: FakePage | None = None

    def set_default_navigation_timeout(self, seconds: float) -> None:
        self.navigation_timeout = seconds

    async def set_request_interception(self, enabled: bool) -> None:
        self.intercepting = enabled

    async def set_client_identity(self, user_agent: str) -> None:
        self.user_agent = user_agent

    async def navigate(self, url: str) -> NavigationResult:
        self.visited.append(url)
        page = self.pages.get(url, FakePage(NO_ENTRY_HTML))
        if isinstance(page, Exception):
            raise page
        self._current = page
        return NavigationResult(
            final_url=page.final_url or url,
            redirect_chain=list(page.redirect_chain),
        )

    async def evaluate(self, fn: Callable[[str, Any], Any], seed: Any) -> Any:
        assert self._current is not None, "evaluate() called before navigate()"
        self.evaluated.append(fn)
        return fn(self._current.html, seed)

    async def close(self) -> None:
        self.close_count += 1


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def session_factory(fake_session: FakeSession):
    """A ``scrap`` session factory that always yields ``fake_session``."""

    @asynccontextmanager
    async def _factory():
        try:
            yield fake_session
        finally:
            await fake_session.close()

    return _factory
