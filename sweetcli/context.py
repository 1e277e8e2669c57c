"""
SweetCLI process context.

One Context is built per run and handed to the dispatcher and to every subcommand.
It carries the verbosity level (set once from the global -v flags), the optional
configuration store, the rich consoles used for output and the application titles.

Verbosity sink
- log(level, message) prints only when the current level is at least `level`.
  Lines are prefixed with "-v:", "-vv:", … and continuation lines are aligned
  under the first one.
- disable_verbosity()/enable_verbosity() suspend and restore the level, e.g. around
  output that must stay clean.
"""
import textwrap

from rich.console import Console
from rich.text import Text

from .utils import *


class Context(metaclass=IntrospectableType):
    __introspectable__ = ("title", "short_title", "verbosity", "config")

    def __init__(self, title="", short_title=Unset, *, config=None, stdout=Unset, stderr=Unset):
        if not isinstance(title, str):
            raise TypeError("context 'title' must be a string")
        self._title = title
        self._short_title = coalesce(short_title, title)
        self._config = config
        self._verbosity = 0
        self._suspended = 0
        self.stdout = coalesce(stdout, Console())
        self.stderr = coalesce(stderr, Console(stderr=True))

    @property
    def verbosity(self):
        return self._verbosity

    @verbosity.setter
    def verbosity(self, level):
        if isinstance(level, bool) or not isinstance(level, int):
            level = 0
        self._verbosity = self._suspended = abs(level)

    @property
    def config(self):
        return self._config

    @config.setter
    def config(self, config):
        self._config = config

    def disable_verbosity(self):
        self._verbosity = 0

    def enable_verbosity(self):
        self._verbosity = self._suspended

    def log(self, level, message, /, *, width=Unset, prefix=True):
        """
        Print a verbose message when the verbosity level is at least `level`.

        - width: wrap the message at this many columns (continuation lines aligned).
        - prefix: print the "-v…:" marker, or blanks of the same width when False.
        """
        if self._verbosity < level:
            return False

        marker = "-" + "v" * level + ":"
        gap = " " * (self._verbosity + 3 - len(marker))
        indent = " " * (len(marker) + len(gap))

        lines = str(message).split("\n")
        if width is not Unset:
            lines = [wrapped for line in lines for wrapped in
                     (textwrap.wrap(line, max(width - len(indent), 1)) or [""])]

        head = (marker if prefix else " " * len(marker)) + gap
        self.stdout.print(
            Text(head + ("\n" + indent).join(lines), style="dim"),
            highlight=False, soft_wrap=True
        )
        return True


__all__ = (
    "Context",
)
