"""Content extraction: turns rendered Collins page HTML into word forms.

Both extractors are pure functions of ``(html, word_forms)`` where
``word_forms`` is an empty seed dict (see :meth:`WordForms.empty_seed`).
They return plain data, either ``{"success": word_forms}`` or
``{"failure": reason}``, so they can be handed to
:meth:`PageSession.evaluate` without sharing any state with the caller.
"""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag

from wordforms.scraper.models import BLOCKED, NO_ENTRY

_CHALLENGE_SELECTOR = "#challenge-running"
_CHALLENGE_TEXT = "Checking if the site connection is secure"

# Grammar label text -> word forms key
_FORM_KEYS = {
    "plural": "plural",
    "comparative": "comparative",
    "superlative": "superlative",
    "3rd person singular present tense": "thirdPersonSingularPresentTense",
    "present participle": "presentParticiple",
    "past tense": "pastTense",
    "past participle": "pastParticiple",
}

_PAST_PARTICIPLE_LABEL = "Past Participle"
_PRESENT_PARTICIPLE_LABEL = "Present Participle"
_THIRD_PERSON_PREFIX = "he/she/it "
_ALTERNATIVE_SEPARATOR = " or "


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _strip_separator(text: str) -> str:
    """Drop exactly one leading separator; ``", "`` wins over a single space."""
    if text.startswith(", "):
        return text[2:]
    if text.startswith(" "):
        return text[1:]
    return text


def parse_form_key(text: str) -> str | None:
    """Map a grammar label to its word forms key, or ``None`` if unrecognised."""
    return _FORM_KEYS.get(_strip_separator(text))


def parse_form_value(text: str) -> str:
    return _strip_separator(text)


def _is_blocked(soup: BeautifulSoup) -> bool:
    """Return ``True`` if the page is the anti-bot interstitial."""
    challenge = soup.select_one(_CHALLENGE_SELECTOR)
    return challenge is not None and challenge.get_text().strip() == _CHALLENGE_TEXT


def _has_class(element: Tag, name: str) -> bool:
    return name in (element.get("class") or [])


def _split_alternatives(text: str, label: str) -> list[str] | None:
    """Split the text following *label* on ``" or "``.

    Returns ``None`` when *text* does not start with *label* (leading
    whitespace aside), and ``[]`` when nothing follows the label.
    """
    text = text.lstrip()
    if not text.startswith(label):
        return None
    remainder = text[len(label):].strip()
    if not remainder:
        return []
    return [alt.strip() for alt in remainder.split(_ALTERNATIVE_SEPARATOR)]


def _node_text(node: Any) -> str:
    if isinstance(node, NavigableString):
        return str(node)
    return node.get_text()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_dictionary_forms(html: str, word_forms: dict[str, list[str]]) -> dict[str, Any]:
    """Extract word forms from a dictionary entry page.

    Walks the children of the entry's inflected forms region in document
    order.  Grammar labels (``type-gram``) accumulate as pending keys until
    the next spelling (``orth``), whose text is appended to every pending
    slot.  A label that is never followed by a spelling is dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    region = soup.select_one(".dictentry .inflected_forms")
    if region is None:
        if _is_blocked(soup):
            return {"failure": BLOCKED}
        return {"failure": NO_ENTRY}

    pending: list[str] = []
    for child in region.find_all(recursive=False):
        if _has_class(child, "type-gram"):
            key = parse_form_key(child.get_text())
            if key:
                pending.append(key)
        elif _has_class(child, "orth"):
            # Emptiness is judged on the raw text, so a bare ", " still yields "".
            text = child.get_text()
            if text:
                value = parse_form_value(text)
                for key in pending:
                    word_forms[key].append(value)
            pending = []

    return {"success": word_forms}


def extract_conjugation_forms(html: str, word_forms: dict[str, list[str]]) -> dict[str, Any]:
    """Extract verb forms from a conjugation page.

    Participles come from the ``.vC .type`` header lines; the third person
    singular and the past tense come from the "Present" and "Past" tables of
    the short verb table.
    """
    soup = BeautifulSoup(html, "html.parser")
    if _is_blocked(soup):
        return {"failure": BLOCKED}

    types = soup.select(".vC .type")
    if not types:
        return {"failure": NO_ENTRY}

    for elem in types:
        text = elem.get_text()
        past = _split_alternatives(text, _PAST_PARTICIPLE_LABEL)
        if past is not None:
            word_forms["pastParticiple"] = past
            continue
        present = _split_alternatives(text, _PRESENT_PARTICIPLE_LABEL)
        if present is not None:
            word_forms["presentParticiple"] = present

    conjugations = soup.select(".short_verb_table .conjugation")
    if not conjugations:
        return {"failure": NO_ENTRY}

    for elem in conjugations:
        heading = elem.select_one(".h3_version")
        title = heading.get_text().strip() if heading is not None else None
        if title == "Present":
            for infl in elem.select(".infl"):
                text = infl.get_text()
                if text.startswith(_THIRD_PERSON_PREFIX):
                    word_forms["thirdPersonSingularPresentTense"] = [
                        text[len(_THIRD_PERSON_PREFIX):].strip()
                    ]
        elif title == "Past":
            infl = elem.select_one(".infl")
            # The first child node is the pronoun, the second the verb form.
            if infl is not None and len(infl.contents) > 1:
                word_forms["pastTense"] = [_node_text(infl.contents[1]).strip()]

    return {"success": word_forms}
