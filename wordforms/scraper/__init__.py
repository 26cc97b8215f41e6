"""Scraper package — Collins word-forms crawling & extraction."""

from wordforms.scraper.batch import scrap, scrap_one, scrap_sync
from wordforms.scraper.models import (
    PageType,
    ScrapConfig,
    ScrapRequest,
    ScrapResult,
    ScrapResultNegative,
    ScrapResultPositive,
    ScrapResultPositiveRedirected,
    WordForms,
    result_to_dict,
)

__all__ = [
    "scrap",
    "scrap_one",
    "scrap_sync",
    "PageType",
    "ScrapConfig",
    "ScrapRequest",
    "ScrapResult",
    "ScrapResultNegative",
    "ScrapResultPositive",
    "ScrapResultPositiveRedirected",
    "WordForms",
    "result_to_dict",
]
