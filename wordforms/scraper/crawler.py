"""Page crawlers: one per page type.

A crawler navigates the session to the word's page, decides what to do
about redirects, runs the matching extractor and classifies the outcome
into a result variant.
"""

from __future__ import annotations

import re
from typing import Any, Awaitable, Callable
from urllib.parse import quote, unquote

from wordforms.config import settings
from wordforms.scraper.extractor import extract_conjugation_forms, extract_dictionary_forms
from wordforms.scraper.models import (
    REDIRECTED_DISALLOWED,
    PageType,
    ScrapResult,
    ScrapResultNegative,
    ScrapResultPositive,
    ScrapResultPositiveRedirected,
    WordForms,
)
from wordforms.scraper.session import PageSession

Crawler = Callable[[str, PageSession, bool], Awaitable[ScrapResult]]


def dictionary_url(word: str) -> str:
    return f"{settings.domain}/dictionary/english/{quote(word.lower(), safe='')}"


def conjugation_url(word: str) -> str:
    return f"{settings.domain}/conjugation/english/{quote(word, safe='')}"


def word_from_url(url: str) -> str:
    """Return the trailing path/query segment after the last ``/`` or ``=``."""
    return unquote(re.split(r"[/=]", url)[-1])


async def _crawl_page(
    word: str,
    session: PageSession,
    process_redirections: bool,
    page_type: PageType,
    url: str,
    extractor: Callable[[str, Any], Any],
) -> ScrapResult:
    tag = f"[{page_type.name}]"
    print(f"{tag} Going to {page_type.value} page for word {word!r} …")
    nav = await session.navigate(url)
    print(f"{tag} {nav.final_url!r} finished loading")

    redirected = bool(nav.redirect_chain)
    if redirected:
        print(f"{tag} Redirected through: {', '.join(nav.redirect_chain)}")
        if not process_redirections:
            print(f"{tag} Redirections are set to not be processed; skipping.")
            return ScrapResultNegative(word, page_type, REDIRECTED_DISALLOWED)

    print(f"{tag} Extracting word forms for {word!r} …")
    outcome = await session.evaluate(extractor, WordForms.empty_seed())

    if "success" not in outcome:
        return ScrapResultNegative(word, page_type, outcome["failure"])

    word_forms = WordForms.from_dict(outcome["success"])
    if redirected:
        return ScrapResultPositiveRedirected(
            word, page_type, word_forms, word_from_url(nav.final_url)
        )
    return ScrapResultPositive(word, page_type, word_forms)


async def crawl_dictionary_page(
    word: str,
    session: PageSession,
    process_redirections: bool = True,
) -> ScrapResult:
    """Scrape the dictionary entry page for *word* (looked up in lowercase)."""
    return await _crawl_page(
        word,
        session,
        process_redirections,
        PageType.DICTIONARY,
        dictionary_url(word),
        extract_dictionary_forms,
    )


async def crawl_conjugation_page(
    word: str,
    session: PageSession,
    process_redirections: bool = True,
) -> ScrapResult:
    """Scrape the conjugation page for *word* (case preserved).

    Non-existent words are redirected to the spellcheck page, which the
    extractor then reports as having no entry.
    """
    return await _crawl_page(
        word,
        session,
        process_redirections,
        PageType.CONJUGATION,
        conjugation_url(word),
        extract_conjugation_forms,
    )


CRAWLERS: dict[PageType, Crawler] = {
    PageType.DICTIONARY: crawl_dictionary_page,
    PageType.CONJUGATION: crawl_conjugation_page,
}
