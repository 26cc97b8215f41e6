"""Word-forms CLI — entry-point for batch scraping.

Usage:
    python cli/main.py --help

Commands:
    scrape    → scrape every word of a comma-separated word list
    lookup    → scrape a single word and print the forms found
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from wordforms.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Iterator, Optional

import typer

from wordforms.scraper import (
    PageType,
    ScrapConfig,
    ScrapRequest,
    ScrapResult,
    ScrapResultNegative,
    ScrapResultPositiveRedirected,
    result_to_dict,
    scrap_sync,
)

app = typer.Typer(
    name="wordforms",
    help="Scrape inflected word forms from the Collins dictionary.",
    no_args_is_help=True,
)

_PAGE_TYPE_CHOICES = {
    "dictionary": [PageType.DICTIONARY],
    "conjugation": [PageType.CONJUGATION],
    "both": [PageType.DICTIONARY, PageType.CONJUGATION],
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_words(text: str) -> list[str]:
    """Split a comma (or newline) separated word list, dropping blanks."""
    words = []
    for line in text.splitlines():
        for word in line.split(","):
            word = word.strip()
            if word:
                words.append(word)
    return words


def build_requests(words: list[str], page_types: list[PageType]) -> Iterator[ScrapRequest]:
    """Yield one request per word and page type, word by word."""
    for word in words:
        for page_type in page_types:
            yield ScrapRequest(word, page_type)


def _resolve_page_types(page_type: str) -> list[PageType]:
    try:
        return _PAGE_TYPE_CHOICES[page_type.lower()]
    except KeyError:
        raise typer.BadParameter(
            f"Unknown page type {page_type!r}. Use: dictionary | conjugation | both"
        )


def _build_config(
    no_redirects: bool,
    timeout: Optional[float],
    delay: Optional[float],
) -> ScrapConfig:
    config = ScrapConfig.from_settings()
    if no_redirects:
        config.process_redirections = False
    if timeout is not None:
        config.navigation_timeout = timeout
    if delay is not None:
        config.inter_request_delay = delay
    return config


def _summarise(result: ScrapResult) -> str:
    label = f"{result.word!r} [{result.page_type.value}]"
    if isinstance(result, ScrapResultNegative):
        return f"  ✗ {label}  {result.reason}"
    if isinstance(result, ScrapResultPositiveRedirected):
        return f"  ✓ {label}  → {result.redirected_word!r}"
    return f"  ✓ {label}"


def _run(requests: Iterator[ScrapRequest], config: ScrapConfig) -> list[ScrapResult]:
    try:
        return scrap_sync(requests, config)
    except Exception as exc:
        typer.echo(f"❌ Could not start the browser session: {exc}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("scrape")
def scrape(
    words_file: Path = typer.Option(..., "--words-file", help="Comma-separated word list."),
    output: Path = typer.Option(Path("output.json"), help="Where to write the JSON results."),
    page_type: str = typer.Option("both", help="Page type: dictionary | conjugation | both."),
    no_redirects: bool = typer.Option(False, "--no-redirects", help="Treat redirects as failures."),
    timeout: Optional[float] = typer.Option(None, help="Navigation timeout in seconds."),
    delay: Optional[float] = typer.Option(None, help="Pause between requests in seconds."),
) -> None:
    """Scrape the word forms of every word in WORDS_FILE."""
    page_types = _resolve_page_types(page_type)
    if not words_file.exists():
        typer.echo(f"❌ Word list not found: {words_file}", err=True)
        raise typer.Exit(code=1)

    words = parse_words(words_file.read_text(encoding="utf-8"))
    typer.echo(f"[scrape] {len(words)} word(s), page type {page_type!r} …")

    config = _build_config(no_redirects, timeout, delay)
    results = _run(build_requests(words, page_types), config)

    for result in results:
        typer.echo(_summarise(result))
    payload = json.dumps([result_to_dict(r) for r in results], indent=2, ensure_ascii=False)
    output.write_text(payload, encoding="utf-8")
    typer.echo(f"[scrape] Wrote {len(results)} result(s) to {output}")


@app.command("lookup")
def lookup(
    word: str = typer.Argument(..., help="Word to look up."),
    page_type: str = typer.Option("both", help="Page type: dictionary | conjugation | both."),
    no_redirects: bool = typer.Option(False, "--no-redirects", help="Treat redirects as failures."),
) -> None:
    """Scrape a single word and print the forms found."""
    page_types = _resolve_page_types(page_type)
    config = _build_config(no_redirects, None, None)
    results = _run(build_requests([word], page_types), config)

    for result in results:
        typer.echo(_summarise(result))
        if isinstance(result, ScrapResultNegative):
            continue
        for key, forms in result.word_forms.to_dict().items():
            if forms:
                typer.echo(f"      {key}: {', '.join(forms)}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
