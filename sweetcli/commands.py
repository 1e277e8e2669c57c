"""
SweetCLI subcommand interface.

A subcommand is a class: static metadata describes it, an instance runs it.

    class PizzaSubcommand(Subcommand):
        command = "pizza"
        description = "Make a pizza"
        specs = {
            "a|add:+": {"desc": "Add some topping"},
            "t|type": {"desc": "Type of the pizza", "default": "italian",
                       "validValues": ["italian", "american"]},
            "n|number:": {"desc": "How many pizzas?", "type": "Number", "default": 1},
        }

        def run(self):
            self.print_heading_line("Your pizza has:")
            ...

Static metadata
- command: name used on the command line (required for concrete subclasses).
- description: one-line help text; an empty description hides the subcommand from help.
- specs: ordered {name_string: metadata} mapping (see schema.SchemaSet.from_mapping).
- allows_empty_options: when False, running without any option shows the subcommand help.

Lifecycle (driven by the application)
- the handler is instantiated with the context, the resolved options and the arguments;
- before_run() checks has_conflicting_options() and raises ConflictError;
- run() does the work. Exceptions propagate to the application driver.

Output helpers are inherited from ColoredLogger and bound to the context console.
"""
import abc
from collections.abc import Mapping
from types import MappingProxyType

from .console import ColoredLogger
from .context import Context
from .faults import *
from .parser import ParseResult
from .registry import SubcommandDescriptor
from .schema import SchemaSet
from .utils import *


class SubcommandType(abc.ABCMeta):
    """
    Metaclass validating subcommand metadata at class creation.

    - command must be a string (or left Unset on abstract bases).
    - description must be a string, specs a mapping, allows_empty_options a bool.
    - the schema is built lazily per class by get_schema() and cached.
    """

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(cls, name, bases, namespace, **options)

        if not isinstance(self.command, str | Unset):
            raise TypeError(f"{name}.command must be a string")
        if not isinstance(self.description, str):
            raise TypeError(f"{name}.description must be a string")
        if not isinstance(self.specs, Mapping):
            raise TypeError(f"{name}.specs must be a mapping")
        if not isinstance(self.allows_empty_options, bool):
            raise TypeError(f"{name}.allows_empty_options must be a boolean")

        self.__schema__ = Unset
        return self


class Subcommand(ColoredLogger, metaclass=SubcommandType):
    """Base class of every subcommand handler."""

    command = Unset
    description = ""
    specs = {}
    allows_empty_options = True

    def __init__(self, context, options=Unset, arguments=()):
        if not isinstance(context, Context):
            raise TypeError(f"{type(self).__name__}() first argument must be a context")
        super().__init__(context.stdout)

        if isinstance(options, ParseResult):
            options = options.values
        self._context = context
        self._options = dict(coalesce(options, {}))
        self._arguments = tuple(arguments)

    @classmethod
    def get_schema(cls):
        """The SchemaSet built from `specs` (implicit help flag included)."""
        if cls.__schema__ is Unset:
            cls.__schema__ = SchemaSet.from_mapping(cls.specs)
        return cls.__schema__

    @classmethod
    def describe(cls):
        """The registry descriptor of this handler class."""
        if cls.command is Unset:
            raise TypeError(f"{cls.__name__} does not declare a command name")
        return SubcommandDescriptor.from_handler(cls)

    @property
    def options(self):
        return MappingProxyType(self._options)

    @property
    def arguments(self):
        return self._arguments

    @property
    def context(self):
        return self._context

    @property
    def config(self):
        return self._context.config

    def has_conflicting_options(self):
        """Override to report option combinations that cannot run together."""
        return False

    def before_run(self):
        if self.has_conflicting_options():
            raise ConflictError("Conflicting options.", command=type(self).command)

    @abc.abstractmethod
    def run(self):
        raise NotImplementedError

    def has_options(self):
        return len(self._options) > 0

    def has_option(self, id, /):
        return id in self._options

    def get_option(self, id, default=None, /):
        """Value of option `id`; switches read as True when given."""
        return self._options.get(id, default)

    def set_option(self, id, value, /):
        self._options[id] = value
        return self

    def require_option(self, id, message, /):
        if not self.has_option(id):
            raise RequireValueError(message, option=id, command=type(self).command)

    @staticmethod
    def has_duplicate_boolean(value, values, /):
        # e.g. more than one of several mutually exclusive switches set
        return sum(1 for item in values if item == value) > 1

    def log(self, level, message, /):
        return self._context.log(level, message)


__all__ = (
    "Subcommand",
)

del SubcommandType
