"""
SweetCLI terminal output helpers.

ColoredLogger bundles the standardized line formats used by subcommands:

- print_heading_line / print_sub_heading_line   "=== title" / "--- title"
- print_success_line / print_error_line          with ✅ / ❌ markers
- print_info_line / print_warning_line / print_detail_line / print_update_line
- print_list_item / print_divider
- print_spinner (call repeatedly to animate, reset=True to clear) and spinner()
  (rich status context manager)
- print_progress_bar (redrawn in place) and progress() (rich Progress with the
  usual spinner/bar columns)
- print_timeout_message: countdown gate that returns False only when the cancel key
  is entered in time

Indentation is expressed in levels of four spaces. Styles can be overridden via a
__styles__ mapping in __main__ (same convention as fault rendering).
"""
import math
import select
import sys
from collections import defaultdict

from rich.console import Console
from rich.control import Control
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.text import Text

from .utils import *

_SPINNER = "⠏⠇⠧⠦⠴⠼⠸⠹⠙⠋"


def _styles():
    return defaultdict(str, {
        "heading": "bold green",
        "sub-heading": "cyan",
        "success": "green",
        "error": "red",
        "info": "dim",
        "warning": "yellow",
        "detail": "dim",
        "update": "blue",
        "divider": "dim",
        "spinner": "cyan",
        "bar-complete": "green",
        "bar-back": "grey23",
        "countdown": "yellow",
    } | getattr(__import__("__main__"), "__styles__", {}))


class ColoredLogger:
    """
    Standardized colored output on a rich console.

    The console defaults to stdout; subcommands bind the context's console.
    """

    def __init__(self, console=Unset):
        self._console = Console() if console is Unset else console
        self._spin = 0

    @property
    def console(self):
        return self._console

    def print(self, message="", indent=0, style="", *, end="\n"):
        self._console.print(
            Text.assemble(" " * (indent * 4), message if isinstance(message, Text) else Text(str(message), style)),
            end=end, highlight=False, soft_wrap=True
        )

    def println(self, message="", indent=0, style=""):
        self.print(message, indent, style)

    def print_heading_line(self, message):
        self.println("=== " + message, 0, _styles()["heading"])

    def print_sub_heading_line(self, message):
        self.println("--- " + message, 0, _styles()["sub-heading"])

    def print_success_line(self, message, indent=1, emoji="✅"):
        self.println((emoji + "  " if emoji else "") + message, indent, _styles()["success"])

    def print_error_line(self, message, indent=1, emoji="❌"):
        self.println((emoji + "  " if emoji else "") + message, indent, _styles()["error"])

    def print_info_line(self, message, indent=1, style=Unset, emoji="❕"):
        self.println((emoji + "  " if emoji else "") + message, indent, coalesce(style, _styles()["info"]))

    def print_warning_line(self, message, indent=1):
        self.println(message, indent, _styles()["warning"])

    def print_detail_line(self, message, indent=1):
        self.println(message, indent, _styles()["detail"])

    def print_update_line(self, message, indent=1):
        self.println("🔄  " + message, indent, _styles()["update"])

    def print_list_item(self, message, indent=1, style=Unset, char="·"):
        self.println(" " * max(indent * 4 - 2, 0) + (char or "·") + " " + message, 0,
                     coalesce(style, _styles()["detail"]))

    def print_divider(self, pad=False, char="-"):
        if pad:
            self.println()
        self.println((char or "-") * 24, 0, _styles()["divider"])
        if pad:
            self.println()

    def print_spinner(self, reset=False, label="", indent=1):
        """
        Draw the next spinner frame in place; reset=True clears the line.

        Call it repeatedly from a loop to animate.
        """
        self._console.control(Control.move_to_column(0))
        if reset:
            self._spin = 0
            self._console.print(" " * (len(label) + indent * 4 + 2), end="")
            self._console.control(Control.move_to_column(0))
            return

        frame = _SPINNER[self._spin % len(_SPINNER)]
        self._spin += 1
        self.print(Text.assemble((frame, _styles()["spinner"]), " ", label, " "), indent, end="")

    def spinner(self, label, /):
        """Context manager showing an animated spinner while the block runs."""
        return self._console.status(label, spinner="dots")

    def print_progress_bar(self, current, total, label="", suffix="", width=30, indent=1):
        """
        Redraw a progress bar in place; a newline is emitted once current reaches total.
        """
        if total <= 0:
            raise ValueError("print_progress_bar() 'total' must be positive")
        ratio = min(max(current / total, 0), 1)
        filled = round(ratio * width)

        styles = _styles()
        self._console.control(Control.move_to_column(0))
        self.print(Text.assemble(
            label + " " if label else "",
            ("━" * filled, styles["bar-complete"]),
            ("━" * (width - filled), styles["bar-back"]),
            f" {ratio:>4.0%}",
            " " + suffix if suffix else "",
        ), indent, end="\n" if current >= total else "")

    def progress(self, *, transient=False):
        """A rich Progress bound to this console (use as a context manager)."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self._console,
            transient=transient,
        )

    def print_timeout_message(self, message, steps=1, seconds=3, cancel_key="c", *, stream=Unset):
        """
        Count down from `seconds` in `steps`-second ticks and wait for the cancel key.

        Returns
        - False when a line matching cancel_key (case-insensitive) is entered in time.
        - True otherwise: on timeout, on any other input, on end of input, or when
          standard input cannot be waited on (no tty, closed stream).
        """
        stream = coalesce(stream, sys.stdin)
        steps = max(steps, 0.01)
        styles = _styles()

        remaining = seconds
        while remaining > 0:
            self._console.control(Control.move_to_column(0))
            self.print(Text.assemble(
                message + " ",
                (f"Continuing in {math.ceil(remaining)}s, enter {cancel_key!r} to cancel… ", styles["countdown"]),
            ), 0, end="")

            try:
                readable, _, _ = select.select([stream], [], [], min(steps, remaining))
                line = stream.readline() if readable else Unset
            except (OSError, ValueError, TypeError):
                self.println()
                return True

            if line is not Unset:
                self.println()
                return line.strip().lower() != str(cancel_key).lower() if line else True

            remaining -= min(steps, remaining)

        self.println()
        return True


__all__ = (
    "ColoredLogger",
)
