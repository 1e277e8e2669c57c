"""
SweetCLI subcommand registry.

- SubcommandDescriptor: immutable record built once from a handler class
  (name, description, schema, handler, hidden, allows_empty_options).
- Registry: name → descriptor mapping with unique keys.

Hidden subcommands (empty description) are left out of help listings but remain
dispatchable by their exact name.
"""
import re

from .faults import *
from .schema import *
from .utils import *

_NAME = re.compile(r"[^\W_][\w:.-]*")


class SubcommandDescriptor(metaclass=IntrospectableType):
    """Static metadata of a registered subcommand."""

    __introspectable__ = (
        "name",
        "description",
        "schema",
        "handler",
        "hidden",
        "allows_empty_options",
    )
    __displayable__ = ("name", "description", "hidden", "allows_empty_options")

    def __init__(self, name, /, description="", schema=Unset, handler=None, *, allows_empty_options=True):
        if not isinstance(name, str):
            raise TypeError("subcommand-descriptor 'name' must be a string")
        if not _NAME.fullmatch(name):
            raise ValueError(f"invalid subcommand name {name!r}")
        if not isinstance(description, str):
            raise TypeError("subcommand-descriptor 'description' must be a string")
        if not isinstance(schema := coalesce(schema, SchemaSet()), SchemaSet):
            raise TypeError("subcommand-descriptor 'schema' must be a schema-set")

        self._name = name
        self._description = description.strip()
        self._schema = schema
        self._handler = handler
        self._hidden = not self._description
        self._allows_empty_options = bool(allows_empty_options)

    @classmethod
    def from_handler(cls, handler, /):
        """Read the static metadata of a Subcommand subclass."""
        return cls(
            handler.command,
            handler.description or "",
            handler.get_schema(),
            handler,
            allows_empty_options=handler.allows_empty_options,
        )

    def __eq__(self, other):
        if not isinstance(other, SubcommandDescriptor):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash((self._name, self._handler))


class Registry(metaclass=IntrospectableType):
    """
    Mapping of subcommand names to descriptors.

    Operations
    - register(descriptor): add; equal re-registration is a no-op, a different
      descriptor under a taken name raises DuplicateCommandError.
    - lookup(name) → descriptor | None; require(name) raises UnknownCommandError.
    - list() sorted by name; visible() without hidden ones; names().
    """

    __introspectable__ = ("descriptors",)

    def __init__(self, descriptors=(), /):
        self._descriptors = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor, /):
        if not isinstance(descriptor, SubcommandDescriptor):
            raise TypeError("register() argument must be a subcommand-descriptor")
        if (existing := self._descriptors.get(descriptor.name)) is not None:
            if existing == descriptor:
                return existing
            raise DuplicateCommandError(
                f"subcommand {descriptor.name!r} is already registered",
                command=descriptor.name, hint="pick a different command name"
            )
        self._descriptors[descriptor.name] = descriptor
        return descriptor

    def lookup(self, name, /):
        return self._descriptors.get(name)

    def require(self, name, /):
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownCommandError(
                f"unknown subcommand {name!r}", hint="use --help to list the available subcommands"
            ) from None

    def list(self):
        return [self._descriptors[name] for name in sorted(self._descriptors)]

    def visible(self):
        return [descriptor for descriptor in self.list() if not descriptor.hidden]

    def names(self):
        return sorted(self._descriptors)

    def __contains__(self, name, /):
        return name in self._descriptors

    def __len__(self):
        return len(self._descriptors)

    def __iter__(self):
        return iter(self.list())


__all__ = (
    "SubcommandDescriptor",
    "Registry",
)
