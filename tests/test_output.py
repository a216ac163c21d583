"""Tests for the stderr output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode never hides the sign-in instructions
- Verbose mode debug output
- Global instance management
"""

from __future__ import annotations

import pytest

from azcred import output as output_module
from azcred.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)

URI = "https://microsoft.com/devicelogin"
CODE = "GQ7XNPLKF"


class TestColorDetection:
    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_enabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


@pytest.mark.parametrize("no_color", [True, False])
class TestDeviceInstructions:
    def test_written_to_stderr(
        self, no_color: bool, capsys: pytest.CaptureFixture[str]
    ) -> None:
        OutputManager(no_color=no_color).device_instructions(URI, CODE)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert URI in captured.err
        assert CODE in captured.err
        assert "Waiting for authentication..." in captured.err

    def test_quiet_still_shows_instructions(
        self, no_color: bool, capsys: pytest.CaptureFixture[str]
    ) -> None:
        OutputManager(no_color=no_color, quiet=True).device_instructions(URI, CODE)

        err = capsys.readouterr().err
        assert URI in err
        assert CODE in err
        assert "Waiting" not in err

    def test_markup_in_values_is_literal(
        self, no_color: bool, capsys: pytest.CaptureFixture[str]
    ) -> None:
        OutputManager(no_color=no_color).device_instructions(URI, "[bold]AB[/bold]")

        assert "[bold]AB[/bold]" in capsys.readouterr().err


class TestMessages:
    def test_success_suppressed_when_quiet(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(no_color=True, quiet=True).success("done")
        assert capsys.readouterr().err == ""

    def test_debug_only_when_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(no_color=True).debug("hidden")
        OutputManager(no_color=True, verbose=True).debug("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "[debug] shown" in err


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        reset_output()
        first = get_output()
        assert get_output() is first

    def test_set_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = OutputManager(no_color=True, quiet=True)
        set_output(manager)
        assert get_output() is manager

        output_module.info("quiet info")
        assert capsys.readouterr().err == ""
