r"""
SweetCLI option schema: declarative descriptions of flags.

Overview
- ValueType
  • Enum of value kinds: STRING, NUMBER, BOOLEAN.
  • Lenient constructor: ValueType("Number"), ValueType("bool"), ValueType(int) all resolve.

- parse_name(text)
  • Parse a compact declaration such as "n|number:" into (short, long, required, multi, optional).

- OptionSpec
  • One flag: names, modifiers, incremental counting, type, default, allowed values,
    description and visibility. Validated on construction; read-only afterwards.

- SchemaSet
  • Ordered collection of OptionSpec with unique ids and names, plus the implicit
    help flag. Built directly or from a declaration mapping (SchemaSet.from_mapping).

Name-string grammar
- Names: "n" (short only), "name" (long only), "n|name" (both, any order).
- Suffix modifiers, composable in any order:
    ":"  → required (value must be present, either supplied or defaulted)
    "+"  → multi-value (the flag may repeat; values accumulate in order)
    "?"  → explicitly optional value ("--name" alone is accepted)
- Examples
    "t|type"     → --type/-t, boolean unless a default/valid set is given
    "n|number:"  → --number/-n, required value
    "a|add:+"    → --add/-a, required, repeatable

Validation highlights
- Short names are exactly one alphanumeric character.
- Long names match r"[A-Za-z0-9][A-Za-z0-9_-]*".
- Boolean flags cannot carry valid values nor value modifiers.
- Incremental flags cannot carry a default, valid values or modifiers.
- A default must belong to the valid values when both are declared.

Quick example:
    >>> schema = SchemaSet.from_mapping({
    ...     "n|number:": {"desc": "How many pizzas?", "type": "Number", "default": 1},
    ...     "t|type": {"default": "italian", "validValues": ["italian", "american"]},
    ... })
    >>> schema["number"].type
    <ValueType.NUMBER: 'Number'>
"""
import re
from collections.abc import Iterable, Mapping
from enum import Enum

from rich.text import Text

from .faults import *
from .utils import *


class ValueType(Enum):
    """
    Kind of value carried by an option.

    Accepted spellings (case-insensitive): "String"/"str", "Number"/"int"/"float",
    "Boolean"/"bool"; Python types str, int, float and bool resolve as well.
    """
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, type):
            return {bool: cls.BOOLEAN, int: cls.NUMBER, float: cls.NUMBER, str: cls.STRING}.get(value)
        if isinstance(value, str):
            return {
                "string": cls.STRING,
                "str": cls.STRING,
                "number": cls.NUMBER,
                "int": cls.NUMBER,
                "integer": cls.NUMBER,
                "float": cls.NUMBER,
                "boolean": cls.BOOLEAN,
                "bool": cls.BOOLEAN,
            }.get(value.strip().lower())
        return None


_SHORT = re.compile(r"[A-Za-z0-9]")
_LONG = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")
_MODIFIERS = ":+?"


def parse_name(text, /):
    """
    Parse a compact option declaration into its structural parts.

    Returns
    - tuple (short, long, required, multi, optional) where short/long are None when absent.

    Raises
    - TypeError when text is not a string.
    - SchemaError when a modifier repeats, when "?" and ":" are combined, when more
      than two names are given, or when no usable short or long name results.
    """
    if not isinstance(text, str):
        raise TypeError("parse_name() argument must be a string")

    name = text.strip()
    modifiers = ""
    while name and name[-1] in _MODIFIERS:
        if name[-1] in modifiers:
            raise SchemaError(f"modifier {name[-1]!r} is repeated in {text!r}",
                              code=FaultCode.CONFLICTING_MODIFIERS, declaration=text)
        modifiers += name[-1]
        name = name[:-1]

    if "?" in modifiers and ":" in modifiers:
        raise SchemaError(f"an option cannot be both required and optional ({text!r})",
                          code=FaultCode.CONFLICTING_MODIFIERS, declaration=text,
                          hint="drop either ':' or '?'")

    names = name.split("|")
    if len(names) > 2:
        raise SchemaError(f"too many names in {text!r}, expected at most a short and a long name",
                          declaration=text)

    short = long = None
    for part in filter(None, map(str.strip, names)):
        if len(part) == 1:
            if short is not None:
                raise SchemaError(f"two short names in {text!r}", code=FaultCode.DUPLICATED_NAME, declaration=text)
            short = part
        else:
            if long is not None:
                raise SchemaError(f"two long names in {text!r}", code=FaultCode.DUPLICATED_NAME, declaration=text)
            long = part

    if short is None and long is None:
        raise SchemaError(f"no usable name in {text!r}", declaration=text,
                          hint="declare a short name, a long name, or both (e.g. 'n|name')")

    return short, long, ":" in modifiers, "+" in modifiers, "?" in modifiers


class OptionSpec(metaclass=IntrospectableType):
    """
    Declarative description of one flag.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    - id: identity key (long name when present, else short name).
    - flags: ("-s", "--long") forms actually declared.
    - label: help label such as "-n, --number".
    - takes_value: whether the flag consumes a value token.
    - has_default: whether a default was declared.
    """

    __introspectable__ = (
        "short",
        "long",
        "required",
        "multi",
        "optional",
        "incremental",
        "type",
        "default",
        "valid",
        "descr",
        "hidden",
    )
    __displayable__ = ("short", "long", "required", "multi", "optional", "incremental", "type", "default", "valid")

    def __init__(
            self,
            short=None,
            long=None,
            /,
            *,
            required=False,
            multi=False,
            optional=False,
            incremental=False,
            type=Unset,
            default=Unset,
            valid=(),
            descr=None,
            hidden=False
    ):
        """
        Construct and validate an option spec.

        Parameters
        - short: None | str, one alphanumeric character.
        - long: None | str, matching r"[A-Za-z0-9][A-Za-z0-9_-]*".
        - required/multi/optional: the ":"/"+"/"?" modifiers.
        - incremental: count occurrences instead of reading a value.
        - type: Unset | ValueType | spelling accepted by ValueType. Inferred when Unset.
        - default: Unset (no default) or any value; lists for multi flags.
        - valid: iterable of allowed values (empty means unrestricted).
        - descr: None | str | Text, help description.
        - hidden: suppress from help output.

        Raises
        - TypeError on wrongly typed metadata.
        - SchemaError on any structural inconsistency.
        """
        if short is None and long is None:
            raise SchemaError("an option needs a short or a long name")
        if short is not None:
            if not isinstance(short, str):
                raise TypeError("option-spec 'short' must be a string")
            if not _SHORT.fullmatch(short):
                raise SchemaError(f"invalid short name {short!r}, expected a single letter or digit",
                                  code=FaultCode.INVALID_DECLARATION)
        if long is not None:
            if not isinstance(long, str):
                raise TypeError("option-spec 'long' must be a string")
            if not _LONG.fullmatch(long):
                raise SchemaError(f"invalid long name {long!r}", code=FaultCode.INVALID_DECLARATION,
                                  hint="long names use letters, digits, '-' and '_'")

        label = "--" + long if long else "-" + short

        if required and optional:
            raise SchemaError(f"option {label} cannot be both required and optional",
                              code=FaultCode.CONFLICTING_MODIFIERS)

        if not isinstance(valid, Iterable) or isinstance(valid, str):
            raise TypeError("option-spec 'valid' must be an iterable of values")
        sanitized = []
        for value in valid:
            if value in sanitized:
                raise SchemaError(f"option {label} lists {value!r} twice in its valid values",
                                  code=FaultCode.INVALID_DECLARATION)
            sanitized.append(value)
        valid = tuple(sanitized)

        if not isinstance(descr, str | Text | None):
            raise TypeError("option-spec 'descr' must be a string")
        if isinstance(descr, str):
            descr = descr.strip() or None

        if incremental:
            if default is not Unset or valid or required or multi or optional:
                raise SchemaError(f"incremental option {label} cannot declare a default, valid values or modifiers",
                                  code=FaultCode.INVALID_DECLARATION)
            if type is not Unset and ValueType(type) is not ValueType.NUMBER:
                raise SchemaError(f"incremental option {label} counts occurrences and must be a number",
                                  code=FaultCode.INVALID_DECLARATION)
            type = ValueType.NUMBER
        elif type is Unset:
            type = _infer(required, multi, optional, default, valid)
        else:
            try:
                type = ValueType(type)
            except ValueError:
                raise SchemaError(f"unknown type {type!r} for option {label}",
                                  code=FaultCode.INVALID_DECLARATION,
                                  hint="use 'String', 'Number' or 'Boolean'") from None

        if type is ValueType.BOOLEAN:
            if valid:
                raise SchemaError(f"boolean option {label} cannot declare valid values",
                                  code=FaultCode.INVALID_DECLARATION)
            if required or multi or optional:
                raise SchemaError(f"boolean option {label} takes no value and cannot use ':', '+' or '?'",
                                  code=FaultCode.CONFLICTING_MODIFIERS)

        if multi and default is not Unset:
            default = list(default) if isinstance(default, list | tuple) else [default]

        if valid and default is not Unset:
            for value in default if multi else (default,):
                if value not in valid:
                    raise SchemaError(
                        f"default {value!r} of option {label} is not one of [{", ".join(map(str, valid))}]",
                        code=FaultCode.INVALID_DECLARATION
                    )

        self._short = short
        self._long = long
        self._required = bool(required)
        self._multi = bool(multi)
        self._optional = bool(optional)
        self._incremental = bool(incremental)
        self._type = type
        self._default = default
        self._valid = valid
        self._descr = descr
        self._hidden = bool(hidden)

    @classmethod
    def from_name(cls, text, /, **metadata):
        """
        Build a spec from a compact declaration ("n|number:") and keyword metadata.
        """
        short, long, required, multi, optional = parse_name(text)
        return cls(short, long, required=required, multi=multi, optional=optional, **metadata)

    @property
    def id(self):
        return self._long or self._short

    @property
    def flags(self):
        return tuple(flag for flag in (
            "-" + self._short if self._short else None,
            "--" + self._long if self._long else None,
        ) if flag)

    @property
    def label(self):
        return ", ".join(self.flags)

    @property
    def takes_value(self):
        return self._type is not ValueType.BOOLEAN and not self._incremental

    @property
    def has_default(self):
        return self._default is not Unset

    def __eq__(self, other):
        if not isinstance(other, OptionSpec):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash((self._short, self._long, self._type))


def _infer(required, multi, optional, default, valid):
    # No modifier, no default and no valid values: a plain switch.
    if not (required or multi or optional) and default is Unset and not valid:
        return ValueType.BOOLEAN
    sample = default[0] if isinstance(default, list | tuple) and default else default
    if isinstance(sample, int | float) and not isinstance(sample, bool):
        return ValueType.NUMBER
    return ValueType.STRING


class SchemaSet(metaclass=IntrospectableType):
    """
    Ordered collection of OptionSpec objects.

    - Ids, short names and long names are unique (collisions raise SchemaError).
    - An implicit boolean "help" flag is appended unless the caller declares its own
      "help" or passes help=False: -h/--help, or only --help when -h is already taken.
    - Lookup by id (schema["number"]), by short name (by_short) and by long name (by_long).
    """

    __introspectable__ = ("specs",)

    def __init__(self, specs=(), /, *, help=True):
        self._specs = []
        self._ids = {}
        self._shorts = {}
        self._longs = {}

        for spec in specs:
            self._append(spec)

        if help and "help" not in self._ids and "help" not in self._longs:
            self._append(OptionSpec(
                None if "h" in self._shorts else "h",
                "help",
                descr="Print Help Page",
            ))

    def _append(self, spec):
        if not isinstance(spec, OptionSpec):
            raise TypeError("schema-set entries must be option-specs")
        if spec.id in self._ids:
            raise SchemaError(f"option {spec.id!r} is declared twice", code=FaultCode.DUPLICATED_NAME)
        if spec.short is not None and spec.short in self._shorts:
            raise SchemaError(f"short name -{spec.short} is used by {self._shorts[spec.short].label} already",
                              code=FaultCode.DUPLICATED_NAME)
        if spec.long is not None and spec.long in self._longs:
            raise SchemaError(f"long name --{spec.long} is used by {self._longs[spec.long].label} already",
                              code=FaultCode.DUPLICATED_NAME)

        self._specs.append(spec)
        self._ids[spec.id] = spec
        if spec.short is not None:
            self._shorts[spec.short] = spec
        if spec.long is not None:
            self._longs[spec.long] = spec

    @classmethod
    def from_mapping(cls, declarations, /, **options):
        """
        Build a schema from an ordered {name_string: metadata} mapping.

        Metadata may be None, a description string, or a mapping using these keys:
        "desc"/"descr", "default", "type", "validValues"/"valid", "incremental", "hidden".
        Unknown keys raise SchemaError so typos do not silently change behavior.
        """
        if not isinstance(declarations, Mapping):
            raise TypeError("from_mapping() argument must be a mapping")

        specs = []
        for text, metadata in declarations.items():
            if metadata is None:
                metadata = {}
            elif isinstance(metadata, str | Text):
                metadata = {"desc": metadata}
            elif not isinstance(metadata, Mapping):
                raise TypeError(f"metadata of option {text!r} must be a mapping")

            if unknown := set(metadata) - {"desc", "descr", "default", "type", "validValues", "valid",
                                           "incremental", "hidden"}:
                raise SchemaError(f"unknown metadata {", ".join(map(repr, sorted(unknown)))} for option {text!r}",
                                  code=FaultCode.INVALID_DECLARATION, declaration=text)

            default = metadata.get("default")
            specs.append(OptionSpec.from_name(
                text,
                incremental=bool(metadata.get("incremental", False)),
                type=metadata.get("type", Unset),
                default=Unset if default is None else default,
                valid=metadata.get("validValues", metadata.get("valid")) or (),
                descr=metadata.get("desc", metadata.get("descr")),
                hidden=bool(metadata.get("hidden", False)),
            ))

        return cls(specs, **options)

    @property
    def ids(self):
        return tuple(self._ids)

    def by_short(self, name, /):
        return self._shorts.get(name)

    def by_long(self, name, /):
        return self._longs.get(name)

    def visible(self):
        """Specs shown in help: not hidden and not the help flag itself."""
        return tuple(spec for spec in self._specs if not spec.hidden and spec.id != "help")

    def __getitem__(self, id, /):
        return self._ids[id]

    def __contains__(self, id, /):
        return id in self._ids

    def __iter__(self):
        return iter(self._specs)

    def __len__(self):
        return len(self._specs)

    def __eq__(self, other):
        if not isinstance(other, SchemaSet):
            return NotImplemented
        return self._specs == other._specs

    def __hash__(self):
        return hash(tuple(self._specs))


__all__ = (
    "ValueType",
    "OptionSpec",
    "SchemaSet",
    "parse_name",
)
