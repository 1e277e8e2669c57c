"""
SweetCLI application: two-phase routing and the single execution driver.

Invocation shapes
    <binary> [global flags] <subcommand> [subcommand flags] [positional args]
    <binary> <alias> [args...]
    <binary> help

Routing (route(argv) → Outcome, no side effects besides verbosity logging)
1. Global phase: the parser reads -v/--verbose and -h/--help up to the first positional.
   A parse fault here fails without a command prefix. The verbosity level is set.
2. Each remaining token is either a registered subcommand (its schema is installed and
   the rest of the vector is parsed against it; faults get the command name prefix),
   or a top-level positional. When the first top-level positional is a known alias,
   the remaining tokens are captured verbatim and the alias wins over everything else.
3. Full help when no subcommand was parsed, when the first positional is "help", or
   when the global help flag is set.
4. Subcommand help when its help flag is set, or when it disallows empty options and
   none was supplied.
5. Otherwise run, with arguments = top-level positionals + subcommand positionals.

Execution (execute(outcome) → exit status)
- help pages → 0; aliases → the child's status (1 when it cannot start);
  faults → rendered on stderr, 1.
- handlers: before_run() then run() → 0. ConflictError is reported without a trace;
  any other exception is reported with the command prefix and a rich traceback → 1.

run(argv) wraps setup(), route() and execute(), then flushes the config store; a
failed flush is reported as a ConfigError and turns the status into 1.
main(argv) exits the process with run()'s status.
"""
import copy
import json
import os.path
import sys
from enum import Enum

from .aliases import AliasExecutor, AliasTable
from .commands import Subcommand
from .config import Config
from .context import Context
from .faults import *
from .parser import OptionParser
from .printer import OptionPrinter
from .registry import Registry
from .schema import SchemaSet
from .utils import *


class Action(Enum):
    RUN = "run"
    HELP = "help"
    COMMAND_HELP = "command-help"
    ALIAS = "alias"
    FAIL = "fail"


class Outcome(metaclass=IntrospectableType):
    """
    Result of routing one argument vector.

    - action: what execute() should do.
    - command: the SubcommandDescriptor involved (RUN, COMMAND_HELP, subcommand FAIL).
    - options: resolved option values (RUN).
    - arguments: positional arguments (RUN) or forwarded tokens (ALIAS).
    - alias: the alias name (ALIAS).
    - fault: the CommandException to report (FAIL).
    """

    __introspectable__ = ("action", "command", "options", "arguments", "alias", "fault")

    def __init__(self, action, /, *, command=None, options=Unset, arguments=(), alias=None, fault=None):
        if not isinstance(action, Action):
            raise TypeError("outcome 'action' must be an action")
        self._action = action
        self._command = command
        self._options = dict(coalesce(options, {}))
        self._arguments = tuple(arguments)
        self._alias = alias
        self._fault = fault


GLOBAL_SPECS = {
    "v|verbose": {
        "desc": "Verbose Mode · supply multiple times to increase verbosity level (i.e. -vv)",
        "incremental": True,
    },
    "h|help": "Print Help Page",
}


class Application:
    """
    A command-line application made of subcommands and aliases.

    Subclass it and override setup() to register subcommands, or register them on
    an instance directly:

        app = Application("Pizza Shop", "pizza-shop")
        app.add_subcommand(PizzaSubcommand)
        app.add_alias("oven", "/usr/local/bin/oven")
        app.main()

    Parameters
    - title: long title shown on help pages.
    - short_title: prefix of subcommand help pages (defaults to title).
    - config_path: JSON/YAML file backing the configuration store, saved at the end of run().
    - app_path: path of the running script; aliases run from its directory.
    - context: an existing Context to share (its titles and consoles are kept).
    """

    def __init__(self, title, short_title=None, config_path=None, *, app_path=None, context=None):
        if not isinstance(title, str):
            raise TypeError("application 'title' must be a string")

        if context is None:
            context = Context(title, Unset if short_title is None else short_title)
        elif not isinstance(context, Context):
            raise TypeError("application 'context' must be a context")
        if config_path is not None:
            context.config = Config.load(config_path)

        self.context = context
        self.registry = Registry()
        self.aliases = AliasTable()
        self.schema = SchemaSet.from_mapping(GLOBAL_SPECS)
        self.printer = OptionPrinter()
        self.executor = AliasExecutor(os.path.dirname(os.path.abspath(app_path)) if app_path else None)
        self._prepared = False

    def setup(self):
        """Hook for subclasses: register subcommands and aliases here."""

    def add_subcommand(self, handler, /):
        if not isinstance(handler, type) or not issubclass(handler, Subcommand):
            raise TypeError(f"{handler!r} does not extend {Subcommand.__qualname__}")
        self.registry.register(handler.describe())
        return self

    def add_alias(self, alias, path=None, /):
        """Add or override an alias; path None runs the alias itself from PATH."""
        self.aliases.add(alias, path)
        return self

    def route(self, argv, /):
        parser = OptionParser(self.schema)
        try:
            result = parser.start(argv)
        except ParseError as fault:
            return Outcome(Action.FAIL, fault=fault)

        self.context.verbosity = result.get("verbose", 0)

        arguments = []
        command = parsed = None
        while not parser.is_end():
            token = parser.current

            if not arguments and command is None and not parser.terminated and token in self.aliases:
                parser.advance()
                forwarded = parser.remaining()
                self.context.log(1, f"Using alias: {token} → {self.aliases.resolve(token)}")
                return Outcome(Action.ALIAS, alias=token, arguments=forwarded)

            if command is None and not parser.terminated and token in self.registry:
                parser.advance()
                command = self.registry.require(token)
                parser.set_specs(command.schema)
                try:
                    parsed = parser.continue_parse(required=False)
                except ParseError as fault:
                    return Outcome(Action.FAIL, command=command, fault=copy.replace(fault, command=token))
                continue

            arguments.append(parser.advance())

        if parsed is not None:
            arguments.extend(parsed.positionals)

        if command is None or (arguments and arguments[0] == "help") or result.get("help"):
            return Outcome(Action.HELP, arguments=arguments)

        if parsed.get("help") or (not command.allows_empty_options and not parsed.supplied):
            return Outcome(Action.COMMAND_HELP, command=command)

        try:
            parser.check_required(parsed)
        except ParseError as fault:
            return Outcome(Action.FAIL, command=command, fault=copy.replace(fault, command=command.name))

        handler = command.handler
        self.context.log(1, f"Class: {handler.__module__}.{handler.__qualname__}")
        if values := parsed.values:
            self.context.log(2, "Options:")
            self.context.log(2, json.dumps(values, indent=4, default=str), prefix=False)
        if arguments:
            self.context.log(2, "Arguments:")
            self.context.log(2, json.dumps(arguments, indent=4, default=str), prefix=False)

        return Outcome(Action.RUN, command=command, options=parsed.values, arguments=arguments)

    def execute(self, outcome, /):
        stdout, stderr = self.context.stdout, self.context.stderr

        match outcome.action:
            case Action.HELP:
                stdout.print(self.printer.render_application(
                    self.context.title, self.registry.list(), self.schema, dict(self.aliases.items())
                ), highlight=False)
                return 0

            case Action.COMMAND_HELP:
                stdout.print(self.printer.render_command(
                    outcome.command, self.context.title, self.context.short_title
                ), highlight=False)
                return 0

            case Action.ALIAS:
                try:
                    return self.executor.execute(self.aliases.resolve(outcome.alias), outcome.arguments)
                except AliasError as fault:
                    report(fault, console=stderr)
                    return 1

            case Action.FAIL:
                report(outcome.fault, console=stderr)
                return 1

        name = outcome.command.name
        try:
            handler = outcome.command.handler(self.context, outcome.options, outcome.arguments)
            handler.before_run()
            handler.run()
        except ConflictError as fault:
            report(fault, console=stderr, command=name)
            return 1
        except CommandException as fault:
            report(fault, console=stderr, command=name, exception=fault, traceback=True)
            return 1
        except Exception as exception:
            report(DelegatedCommandError(
                f"{type(exception).__name__}: {exception}" if str(exception) else type(exception).__name__,
                command=name, exception=exception, traceback=True
            ), console=stderr)
            return 1
        return 0

    def run(self, argv=None, /):
        if argv is None:
            argv = sys.argv[1:]
        if not self._prepared:
            self.setup()
            self._prepared = True

        status = self.execute(self.route(argv))
        if (config := self.context.config) is not None:
            try:
                config.save()
            except ConfigError as fault:
                report(fault, console=self.context.stderr)
                return 1
        return status

    def main(self, argv=None, /):
        sys.exit(self.run(argv))


__all__ = (
    "Action",
    "Outcome",
    "Application",
    "GLOBAL_SPECS",
)
