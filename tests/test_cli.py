"""Tests for the command-line interface."""

from __future__ import annotations

import io

import pytest

from landing_seo.cli import _build_parser, main, run
from tests.helpers.mock_llm import (
    make_mock_caller,
    search_terms_message,
    tool_call_message,
)
from tests.helpers.terms import KEYWORDS


def _args(*argv: str):
    return _build_parser().parse_args(list(argv))


class TestParser:

    def test_defaults(self) -> None:
        args = _args()
        assert args.theme is None
        assert args.timeout == 120.0
        assert args.strategy == "refine"
        assert not args.verbose

    def test_rejects_unknown_strategy(self) -> None:
        with pytest.raises(SystemExit):
            _args("--strategy", "magic")


class TestRun:

    def test_full_pipeline(self, good_terms: list[str], capsys: pytest.CaptureFixture) -> None:
        caller, model, _ = make_mock_caller(
            tool_call_message("submit_keywords", {"keywords": KEYWORDS}),
            search_terms_message(good_terms),
        )
        code = run(_args("--theme", "Romance Audiobooks"), caller=caller)
        out = capsys.readouterr().out

        assert code == 0
        assert model.call_count == 2
        assert "   9. romance audiobooks" in out
        assert f"   1. {good_terms[0]}" in out
        assert "Total: 9 keywords" in out
        assert "Total: 15 search terms" in out

    def test_theme_read_from_stdin(self, good_terms: list[str]) -> None:
        caller, model, _ = make_mock_caller(
            tool_call_message("submit_keywords", {"keywords": KEYWORDS}),
            search_terms_message(good_terms),
        )
        code = run(_args(), caller=caller, stdin=io.StringIO("thriller audiobooks\n"))
        assert code == 0
        assert 'about "thriller audiobooks"' in model.calls[0][1].content

    def test_missing_theme(self, capsys: pytest.CaptureFixture) -> None:
        caller, model, _ = make_mock_caller()
        code = run(_args(), caller=caller, stdin=io.StringIO("\n"))
        assert code == 2
        assert model.call_count == 0
        assert "no theme" in capsys.readouterr().err

    def test_missing_api_key(self, capsys: pytest.CaptureFixture) -> None:
        code = run(_args("--theme", "romance"), environ={})
        assert code == 2
        assert "OPENROUTER_API_KEY" in capsys.readouterr().err

    def test_fatal_error_exit_code(self, capsys: pytest.CaptureFixture) -> None:
        caller, _, _ = make_mock_caller(RuntimeError("provider down"))
        code = run(_args("--theme", "romance"), caller=caller)
        assert code == 1
        assert "Error generating keywords" in capsys.readouterr().err

    def test_search_term_failure_exit_code(self, good_terms: list[str]) -> None:
        caller, _, _ = make_mock_caller(
            tool_call_message("submit_keywords", {"keywords": KEYWORDS}),
            search_terms_message(good_terms[:12]),
        )
        assert run(_args("--theme", "romance"), caller=caller) == 1


class TestMain:

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("landing-seo ")

    def test_missing_key_exits_2(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        with pytest.raises(SystemExit) as exc_info:
            main(["--theme", "romance"])
        assert exc_info.value.code == 2
