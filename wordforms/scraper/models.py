"""Data models for the scraper pipeline.

Results are a tagged union of three frozen dataclasses.  They carry data
only; callers branch on ``result.kind`` (or ``isinstance``) rather than on
methods of the result objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

from wordforms.config import settings

# ---------------------------------------------------------------------------
# Failure reasons
# ---------------------------------------------------------------------------
NO_ENTRY = "No entry exists for the given word"
BLOCKED = "Access to the page was blocked"
REDIRECTED_DISALLOWED = "Redirected while having redirections set to not be processed"
INVALID_PAGE_TYPE = "The page type for the request is not a valid value"


class PageType(str, Enum):
    """Which page (and therefore which crawler/extractor pair) to use."""

    DICTIONARY = "dictionary"
    CONJUGATION = "conjugation"


# Python attribute name -> serialized key, in slot order.
_SLOT_KEYS = {
    "plural": "plural",
    "comparative": "comparative",
    "superlative": "superlative",
    "third_person_singular_present_tense": "thirdPersonSingularPresentTense",
    "present_participle": "presentParticiple",
    "past_tense": "pastTense",
    "past_participle": "pastParticiple",
}


@dataclass
class WordForms:
    """Inflected spellings of a word, one list per grammatical category."""

    plural: list[str] = field(default_factory=list)
    comparative: list[str] = field(default_factory=list)
    superlative: list[str] = field(default_factory=list)
    third_person_singular_present_tense: list[str] = field(default_factory=list)
    present_participle: list[str] = field(default_factory=list)
    past_tense: list[str] = field(default_factory=list)
    past_participle: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        """Serialise to the camelCase shape used by extractors and output files."""
        return {key: list(getattr(self, attr)) for attr, key in _SLOT_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WordForms:
        return cls(**{attr: list(data.get(key) or []) for attr, key in _SLOT_KEYS.items()})

    @staticmethod
    def empty_seed() -> dict[str, list[str]]:
        """A fresh, JSON-serialisable seed with every slot empty."""
        return {key: [] for key in _SLOT_KEYS.values()}


@dataclass(frozen=True)
class ScrapRequest:
    word: str
    page_type: PageType


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScrapResultNegative:
    """The lookup failed; ``reason`` is a short human-readable diagnostic."""

    word: str
    page_type: PageType
    reason: str
    kind: Literal["negative"] = "negative"


@dataclass(frozen=True)
class ScrapResultPositive:
    word: str
    page_type: PageType
    word_forms: WordForms
    kind: Literal["positive"] = "positive"


@dataclass(frozen=True)
class ScrapResultPositiveRedirected:
    """Extraction succeeded after the site redirected to ``redirected_word``."""

    word: str
    page_type: PageType
    word_forms: WordForms
    redirected_word: str
    kind: Literal["positive_redirected"] = "positive_redirected"


ScrapResult = Union[ScrapResultNegative, ScrapResultPositive, ScrapResultPositiveRedirected]


def _page_type_value(page_type: Any) -> Any:
    return page_type.value if isinstance(page_type, PageType) else page_type


def result_to_dict(result: ScrapResult) -> dict[str, Any]:
    """Serialise *result* structurally for persistence (e.g. ``json.dumps``)."""
    data: dict[str, Any] = {
        "kind": result.kind,
        "word": result.word,
        "pageType": _page_type_value(result.page_type),
    }
    if isinstance(result, ScrapResultNegative):
        data["reason"] = result.reason
        return data

    data["wordForms"] = result.word_forms.to_dict()
    if isinstance(result, ScrapResultPositiveRedirected):
        data["redirectedWord"] = result.redirected_word
    return data


# ---------------------------------------------------------------------------
# Batch configuration
# ---------------------------------------------------------------------------

@dataclass
class ScrapConfig:
    """Options recognised by :func:`wordforms.scraper.batch.scrap`.

    Durations are in seconds.
    """

    process_redirections: bool = True
    navigation_timeout: float = 60.0
    inter_request_delay: float = 0.0

    @classmethod
    def from_settings(cls) -> ScrapConfig:
        """Build a config from the environment-driven settings singleton."""
        return cls(
            process_redirections=settings.process_redirections,
            navigation_timeout=settings.navigation_timeout,
            inter_request_delay=settings.inter_request_delay,
        )
