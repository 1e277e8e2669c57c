"""
SweetCLI aliases: shortcuts to external programs.

- AliasTable: alias → target mapping. A target is a literal command line
  ("/usr/local/bin/composer --no-ansi") or the alias itself, meaning "look it up on PATH".
- AliasExecutor: the process boundary. Runs the resolved target plus the forwarded
  arguments with subprocess.run, inheriting the terminal, and returns the exit status.
  Arguments are forwarded verbatim and never parsed.
"""
import os
import shlex
import shutil
import subprocess

from .faults import *
from .utils import *


class AliasTable(metaclass=IntrospectableType):
    __introspectable__ = ("aliases",)

    def __init__(self, aliases=Unset, /):
        self._aliases = {}
        for alias, target in dict(coalesce(aliases, {})).items():
            self.add(alias, target)

    def add(self, alias, target=None, /):
        """Add or override an alias; target None maps the alias to itself on PATH."""
        if not isinstance(alias, str) or not alias.strip() or alias != alias.strip():
            raise ValueError(f"invalid alias name {alias!r}")
        if target is not None and (not isinstance(target, str) or not target.strip()):
            raise ValueError(f"invalid target for alias {alias!r}")
        self._aliases[alias] = alias if target is None else target
        return self

    def resolve(self, alias, /):
        return self._aliases.get(alias)

    def __contains__(self, alias, /):
        return alias in self._aliases

    def __len__(self):
        return len(self._aliases)

    def __iter__(self):
        return iter(self._aliases)

    def items(self):
        return self._aliases.items()


class AliasExecutor:
    """
    Runs alias targets as child processes.

    - cwd: working directory of the child (the application directory when known).
    - runner: callable with the subprocess.run signature, replaceable in tests.
    """

    def __init__(self, cwd=None, runner=subprocess.run):
        self.cwd = cwd
        self.runner = runner

    def command_line(self, target, arguments=(), /):
        """Argument vector for target plus arguments; the program is resolved on PATH."""
        try:
            program, *options = shlex.split(target)
        except ValueError as exception:
            raise AliasError(f"cannot read alias target {target!r}: {exception}", target=target) from None

        if os.sep not in program and (os.altsep is None or os.altsep not in program):
            resolved = shutil.which(program)
            if resolved is None:
                raise AliasError(
                    f"command {program!r} was not found on PATH",
                    target=target, hint="install it or register the alias with a full path"
                )
            program = resolved

        return [program, *options, *arguments]

    def execute(self, target, arguments=(), /):
        """Run target with arguments and return its exit status."""
        argv = self.command_line(target, arguments)
        try:
            return self.runner(argv, cwd=self.cwd, check=False).returncode
        except OSError as exception:
            raise AliasError(f"cannot start {argv[0]!r}: {exception.strerror or exception}",
                             target=target) from exception


__all__ = (
    "AliasTable",
    "AliasExecutor",
)
