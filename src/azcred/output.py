"""User-facing output with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions: azcred never writes
to stdout, which belongs to the host application's data.  Everything the
user needs to see while authenticating -- the verification URI, the user
code, progress and success lines -- goes to **stderr**.

* **Colour control** -- respects ``NO_COLOR`` and ``TERM=dumb``; when
  colour is disabled output is plain ``print`` so it survives log capture.
* **Quiet mode** -- suppresses progress chatter but never the sign-in
  instructions, without which the flow cannot complete.

The module exposes two layers:

1. :class:`OutputManager` -- holds the Rich console and quiet/verbose flags.
   Host applications install a configured one via :func:`set_output`.
2. Module-level convenience functions (:func:`info`, :func:`success`,
   :func:`debug`, :func:`device_instructions`) that delegate to the global
   instance, created lazily with defaults.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

_RULE_WIDTH = 70


class OutputManager:
    """Central manager for azcred's diagnostic output on stderr.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational and success messages.
        verbose: Enable debug-level messages.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            highlight=False,
        )

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    def info(self, message: str) -> None:
        """Print an informational message. Suppressed in quiet mode."""
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(escape(message))

    def success(self, message: str) -> None:
        """Print a green success message. Suppressed in quiet mode."""
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[green]{escape(message)}[/green]")

    def debug(self, message: str) -> None:
        """Print a debug message. Only shown in verbose mode."""
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]")

    def device_instructions(self, verification_uri: str, user_code: str) -> None:
        """Print the device sign-in banner.  Never suppressed, not even when quiet.

        Args:
            verification_uri: Page the user must open.
            user_code: Code the user must enter on that page.
        """
        rule = "=" * _RULE_WIDTH
        if self._no_color:
            lines = [
                "",
                rule,
                "  Azure Authentication Required",
                rule,
                "",
                f"  Please visit:    {verification_uri}",
                "",
                f"  And enter code:  {user_code}",
                "",
                rule,
                "",
            ]
            print("\n".join(lines), file=sys.stderr, flush=True)
        else:
            self._stderr.print()
            self._stderr.print(rule, style="dim")
            self._stderr.print("  [bold]Azure Authentication Required[/bold]")
            self._stderr.print(rule, style="dim")
            self._stderr.print()
            self._stderr.print(
                f"  Please visit:    [cyan]{escape(verification_uri)}[/cyan]",
                soft_wrap=True,
            )
            self._stderr.print()
            self._stderr.print(f"  And enter code:  [bold yellow]{escape(user_code)}[/bold yellow]")
            self._stderr.print()
            self._stderr.print(rule, style="dim")
            self._stderr.print()
        self.info("Waiting for authentication...")


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If no instance has been installed via :func:`set_output`, a default
    one is created lazily.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def info(message: str) -> None:
    """Print info message to stderr via the global OutputManager."""
    get_output().info(message)


def success(message: str) -> None:
    """Print success message to stderr via the global OutputManager."""
    get_output().success(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)


def device_instructions(verification_uri: str, user_code: str) -> None:
    """Print the device sign-in banner to stderr via the global OutputManager."""
    get_output().device_instructions(verification_uri, user_code)
