"""
SweetCLI faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing errors.
  Codes are grouped by domain (declaration, parsing, registry, execution,
  configuration) so logs and searches stay predictable.
- CommandException: base type that carries a message plus options (title, code,
  hint, command, and any payload such as option/value/allowed) and knows how to
  render itself through rich.
- report(): central entry point that prints any fault to the error console.
- getdoc(): longer text for a code, taken from a __docs__ mapping in __main__.

Stage attribution
- Parse errors are raised without a stage. The dispatcher attaches the
  subcommand name with copy.replace(fault, command=name), so the rendered
  message reads "pizza: invalid value for option --type ...".

UX goals
- Short titles, one-sentence bodies, a single clear hint.
- Colors come from a __styles__ mapping in __main__ when the host defines one.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text
from rich.traceback import Traceback

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the framework (stable identifiers).

    grouping (by high-level domain)
    - declaration (211xx)
      • MALFORMED_DECLARATION, CONFLICTING_MODIFIERS, DUPLICATED_NAME, INVALID_DECLARATION
    - parsing (221xx)
      • UNKNOWN_OPTION, UNEXPECTED_VALUE, VALUE_REQUIRED, MISSING_REQUIRED_OPTION,
        INVALID_TYPE, INVALID_CHOICE
    - registry (231xx)
      • DUPLICATED_COMMAND, UNKNOWN_COMMAND
    - execution (241xx)
      • CONFLICTING_OPTIONS, DELEGATED_ERROR, ALIAS_FAILURE
    - configuration (251xx)
      • CONFIG_FAILURE

    normalize() lets the host remap codes to its own labels while the numeric
    identity stays stable.
    """
    # --- declaration errors (211xx) ---
    MALFORMED_DECLARATION   = 21101
    CONFLICTING_MODIFIERS   = 21102
    DUPLICATED_NAME         = 21103
    INVALID_DECLARATION     = 21104

    # --- parsing errors (221xx) ---
    UNKNOWN_OPTION          = 22101
    UNEXPECTED_VALUE        = 22102
    VALUE_REQUIRED          = 22103
    MISSING_REQUIRED_OPTION = 22104
    INVALID_TYPE            = 22105
    INVALID_CHOICE          = 22106

    # --- registry errors (231xx) ---
    DUPLICATED_COMMAND      = 23101
    UNKNOWN_COMMAND         = 23102

    # --- execution errors (241xx) ---
    CONFLICTING_OPTIONS     = 24101
    DELEGATED_ERROR         = 24102
    ALIAS_FAILURE           = 24103

    # --- configuration errors (251xx) ---
    CONFIG_FAILURE          = 25101

    def normalize(self):
        """Label printed in fault headers: __codes__[self] from __main__, else the number."""
        labels = getattr(__import__("__main__"), "__codes__", {})
        return str(labels.get(self, self.value))


class CommandException(Exception):
    """
    Base class of every user-facing error raised by the framework.

    Options (all optional, stored read-only in self.options)
    - title: short headline (e.g., "invalid choice").
    - code: FaultCode used in the rendered header.
    - hint: one actionable sentence shown after the message.
    - command: name of the subcommand the fault is attributed to.
    - traceback: render the attached exception's traceback (handler failures).
    - fancy: render inside a rich Panel instead of plain lines.
    - any payload (option, value, allowed, token, ...) for programmatic access.
    """

    # Defaults used when a fault is raised without explicit options.
    __title__ = "error"
    __code__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def code(self):
        return self.options.get("code", type(self).__code__)

    @property
    def hint(self):
        return self.options.get("hint")

    @property
    def command(self):
        return self.options.get("command")

    def __str__(self):
        message = self.message or ""
        if self.command:
            return "%s: %s" % (self.command, message)
        return message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "command-name": "bold #FF6B6B",  # stage prefix
            "error-message": "#FF8A8A",  # soft red message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
            "trace-label": "#6B6F7A",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(
            getattr(main, "__prog__", self.options.get("prog") or os.path.basename(sys.argv[0]) or "cli"),
            styles["prog-name"]
        )

        header = Text.assemble("[ ", prog)
        if self.code:
            header.append(" · ").append(text(self.code.normalize(), styles["code"]))
        header.append(" | ").append(text(self.title.title(), styles["error-title"])).append(" ]")

        message = Text()
        if self.command:
            message.append(text(self.command, styles["command-name"])).append(": ")
        message.append(text(self.message, styles["error-message"]))

        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styles["hint-arrow"]), text(self.hint, styles["hint"])))

        exception = self.options.get("exception")
        if self.options.get("traceback") and isinstance(exception, BaseException):
            renders.append(text("Stacktrace:", styles["trace-label"]))
            renders.append(Traceback.from_exception(type(exception), exception, exception.__traceback__))

        if self.options.get("fancy"):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        replaced.__traceback__ = self.__traceback__
        return replaced


class SchemaError(CommandException, ValueError):
    __title__ = "malformed option declaration"
    __code__ = FaultCode.MALFORMED_DECLARATION


class ParseError(CommandException):
    """Base of every parse-time fault; never reaches a subcommand handler."""
    __title__ = "invalid arguments"


class UnknownOptionError(ParseError):
    __title__ = "unknown option"
    __code__ = FaultCode.UNKNOWN_OPTION


class UnexpectedValueError(ParseError):
    __title__ = "flag cannot take a value"
    __code__ = FaultCode.UNEXPECTED_VALUE


class RequireValueError(ParseError):
    __title__ = "missing value"
    __code__ = FaultCode.VALUE_REQUIRED


class OptionTypeError(ParseError, TypeError):
    __title__ = "invalid type"
    __code__ = FaultCode.INVALID_TYPE


class ValidationError(ParseError, ValueError):
    __title__ = "invalid choice"
    __code__ = FaultCode.INVALID_CHOICE


class DuplicateCommandError(CommandException, ValueError):
    __title__ = "duplicated command"
    __code__ = FaultCode.DUPLICATED_COMMAND


class UnknownCommandError(CommandException, LookupError):
    __title__ = "unknown command"
    __code__ = FaultCode.UNKNOWN_COMMAND


class ConflictError(CommandException):
    __title__ = "conflicting options"
    __code__ = FaultCode.CONFLICTING_OPTIONS


class DelegatedCommandError(CommandException):
    __title__ = "command failed"
    __code__ = FaultCode.DELEGATED_ERROR


class AliasError(CommandException):
    __title__ = "alias failed"
    __code__ = FaultCode.ALIAS_FAILURE


class ConfigError(CommandException):
    __title__ = "configuration error"
    __code__ = FaultCode.CONFIG_FAILURE


def report(fault, /, *, console=console, **options):
    """
    print a fault to the given console (stderr by default).

    contract
    - fault must render through __rich__ and support __replace__ (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options) first, which is
      how callers attach context such as command=... or fancy=True.
    """
    if not hasattr(fault, "__rich__") or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("report() argument must have __rich__ and __replace__ methods")
    console.print(copy.replace(fault, **options) if options else fault)


def getdoc(code, /):
    """Text registered for `code` in a __docs__ mapping of __main__, or None."""
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        docs = getattr(__import__("__main__"), "__docs__", {})
        return docs[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "SchemaError",
    "ParseError",
    "UnknownOptionError",
    "UnexpectedValueError",
    "RequireValueError",
    "OptionTypeError",
    "ValidationError",
    "DuplicateCommandError",
    "UnknownCommandError",
    "ConflictError",
    "DelegatedCommandError",
    "AliasError",
    "ConfigError",
    "FaultCode",
    "report",
    "getdoc",
)
