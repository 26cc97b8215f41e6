"""Tests for the word-forms CLI.

``scrap_sync`` is patched in every command test, so no browser is started.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cli.main import app, build_requests, parse_words
from wordforms.scraper.models import (
    PageType,
    ScrapConfig,
    ScrapRequest,
    ScrapResultNegative,
    ScrapResultPositive,
    ScrapResultPositiveRedirected,
    WordForms,
)

runner = CliRunner()


def _fake_scrap(requests, config=None):
    """Consume the requests like ``scrap`` does and answer deterministically."""
    results = []
    for req in requests:
        if req.word == "xqzzy":
            results.append(ScrapResultNegative(req.word, req.page_type, "No entry exists for the given word"))
        elif req.word == "color":
            results.append(ScrapResultPositiveRedirected(req.word, req.page_type, WordForms(), "colour"))
        else:
            results.append(ScrapResultPositive(req.word, req.page_type, WordForms(plural=["runs"])))
    return results


@pytest.fixture()
def words_file(tmp_path: Path) -> Path:
    path = tmp_path / "words.txt"
    path.write_text("run, xqzzy,,color\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_parse_words_splits_commas_and_lines() -> None:
    assert parse_words("run, go,,\nswim ,\n\n") == ["run", "go", "swim"]


def test_build_requests_dictionary_then_conjugation() -> None:
    requests = list(build_requests(["run", "go"], [PageType.DICTIONARY, PageType.CONJUGATION]))
    assert requests == [
        ScrapRequest("run", PageType.DICTIONARY),
        ScrapRequest("run", PageType.CONJUGATION),
        ScrapRequest("go", PageType.DICTIONARY),
        ScrapRequest("go", PageType.CONJUGATION),
    ]


# ---------------------------------------------------------------------------
# scrape
# ---------------------------------------------------------------------------

def test_scrape_writes_json(words_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "output.json"
    with patch("cli.main.scrap_sync", side_effect=_fake_scrap):
        result = runner.invoke(app, ["scrape", "--words-file", str(words_file), "--output", str(output)])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [(d["word"], d["pageType"]) for d in data] == [
        ("run", "dictionary"),
        ("run", "conjugation"),
        ("xqzzy", "dictionary"),
        ("xqzzy", "conjugation"),
        ("color", "dictionary"),
        ("color", "conjugation"),
    ]
    assert data[0]["wordForms"]["plural"] == ["runs"]
    assert data[2]["reason"] == "No entry exists for the given word"
    assert data[4]["redirectedWord"] == "colour"
    assert "Wrote 6 result(s)" in result.stdout


def test_scrape_single_page_type_and_options(words_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "out.json"
    with patch("cli.main.scrap_sync", side_effect=_fake_scrap) as mock_scrap:
        result = runner.invoke(
            app,
            [
                "scrape", "--words-file", str(words_file), "--output", str(output),
                "--page-type", "conjugation", "--no-redirects", "--timeout", "90", "--delay", "1.5",
            ],
        )

    assert result.exit_code == 0, result.output
    config: ScrapConfig = mock_scrap.call_args.args[1]
    assert config.process_redirections is False
    assert config.navigation_timeout == 90.0
    assert config.inter_request_delay == 1.5
    data = json.loads(output.read_text(encoding="utf-8"))
    assert {d["pageType"] for d in data} == {"conjugation"}


def test_scrape_missing_words_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["scrape", "--words-file", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1


def test_scrape_unknown_page_type(words_file: Path) -> None:
    result = runner.invoke(app, ["scrape", "--words-file", str(words_file), "--page-type", "thesaurus"])
    assert result.exit_code != 0


def test_scrape_session_failure_exits_1(words_file: Path, tmp_path: Path) -> None:
    with patch("cli.main.scrap_sync", side_effect=RuntimeError("Executable doesn't exist")):
        result = runner.invoke(
            app, ["scrape", "--words-file", str(words_file), "--output", str(tmp_path / "o.json")]
        )

    assert result.exit_code == 1
    assert not (tmp_path / "o.json").exists()


# ---------------------------------------------------------------------------
# lookup
# ---------------------------------------------------------------------------

def test_lookup_prints_forms() -> None:
    with patch("cli.main.scrap_sync", side_effect=_fake_scrap):
        result = runner.invoke(app, ["lookup", "run", "--page-type", "dictionary"])

    assert result.exit_code == 0, result.output
    assert "'run' [dictionary]" in result.stdout
    assert "plural: runs" in result.stdout


def test_lookup_negative_prints_reason() -> None:
    with patch("cli.main.scrap_sync", side_effect=_fake_scrap):
        result = runner.invoke(app, ["lookup", "xqzzy"])

    assert result.exit_code == 0
    assert result.stdout.count("No entry exists for the given word") == 2
