r"""
SweetCLI option parser: a resumable, mode-switching tokenizer.

Scope
- Turns an argument vector into a ParseResult against a SchemaSet.
- Supports the two-phase flow used by the dispatcher: parse global options up to the
  first positional (start), inspect the cursor (current/advance/is_end), swap the
  active schema (set_specs) and resume (continue_parse) until the end.

States
    ReadingToken → {MatchedLongFlag, MatchedShortFlag, MatchedShortCluster, Positional}
                 → ValueExpected? → Consumed
    End once every token is consumed.

Tokenization rules
- "--name value" ≡ "--name=value"; "-n value" ≡ "-n=value" ≡ "-nvalue" for value-taking flags.
- The next token is consumed as a value unless it is flag-shaped ("-x…"/"--x…", or a
  declared short name such as "-1"). "-" and negative numbers are values.
- Short flags cluster ("-vv" ≡ "-v -v", "-vh") when every character is a switch.
- "--" ends option parsing; every later token is positional.
- Unknown flag-shaped tokens fail with UnknownOptionError.
- Boolean flags take no value: "--flag=value" fails with UnexpectedValueError.
- Multi flags append, other flags keep the last value, incremental flags count.
- Number values are decimal literals (int when integral, float otherwise).
- Valid values are checked after coercion.
- Defaults fill every flag not supplied at the end of a phase; multi flags default to
  an empty list. Required flags without value nor default fail with RequireValueError.

Quick example:
    >>> schema = SchemaSet.from_mapping({"n|count:": {"type": "Number", "default": 1}})
    >>> result = parse(["--count", "5", "extra"], schema)
    >>> result["count"], result.positionals
    (5, ('extra',))
"""
import re

from .faults import *
from .schema import *
from .utils import *

_DECIMAL = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")
_INTEGRAL = re.compile(r"[-+]?\d+")


class ParseResult(metaclass=IntrospectableType):
    """
    Outcome of one parse phase.

    - values: {id: value} for every flag supplied or defaulted.
    - positionals: tokens that were not consumed as flags or flag values, in order.
    - supplied: ids actually given on the command line, in first-encounter order.

    Supports result[id], id in result and result.get(id, default).
    """

    __introspectable__ = ("values", "positionals", "supplied")

    def __init__(self, values=Unset, positionals=(), supplied=()):
        self._values = dict(coalesce(values, {}))
        self._positionals = tuple(positionals)
        self._supplied = tuple(supplied)

    def get(self, id, default=None, /):
        return self._values.get(id, default)

    def __getitem__(self, id, /):
        return self._values[id]

    def __contains__(self, id, /):
        return id in self._values

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return (self._values, self._positionals, self._supplied) == \
            (other._values, other._positionals, other._supplied)

    __hash__ = None


class _Phase:
    # Mutable accumulator for a single parse phase.
    __slots__ = ("values", "positionals", "supplied")

    def __init__(self):
        self.values = {}
        self.positionals = []
        self.supplied = []

    def mark(self, spec):
        if spec.id not in self.supplied:
            self.supplied.append(spec.id)


class OptionParser:
    """
    Resumable option parser.

    The parser owns a token vector and a cursor. start()/parse() load a new vector;
    continue_parse() resumes from the cursor with whatever schema set_specs() installed.
    """

    def __init__(self, schema=Unset, /):
        self._schema = Unset
        self._tokens = ()
        self._cursor = 0
        self._terminated = False
        self.set_specs(coalesce(schema, SchemaSet()))

    @property
    def schema(self):
        return self._schema

    @property
    def current(self):
        """The token under the cursor, None at the end."""
        if self._cursor < len(self._tokens):
            return self._tokens[self._cursor]
        return None

    @property
    def position(self):
        """1-based position of the cursor in the vector."""
        return self._cursor + 1

    @property
    def terminated(self):
        """True once "--" was consumed: every later token is positional."""
        return self._terminated

    def is_end(self):
        return self._cursor >= len(self._tokens)

    def advance(self):
        """Consume and return the token under the cursor."""
        if self.is_end():
            raise IndexError("advance() called at the end of the argument vector")
        token = self._tokens[self._cursor]
        self._cursor += 1
        return token

    def remaining(self):
        """Consume and return every token left, verbatim."""
        tokens = list(self._tokens[self._cursor:])
        self._cursor = len(self._tokens)
        return tokens

    def set_specs(self, schema, /):
        """Swap the active schema without moving the cursor."""
        if not isinstance(schema, SchemaSet):
            raise TypeError("set_specs() argument must be a schema-set")
        self._schema = schema

    def _load(self, argv):
        tokens = tuple(argv)
        for index, token in enumerate(tokens, 1):
            if not isinstance(token, str):
                raise TypeError(f"{ordinal(index)} argument must be a string, not {type(token).__name__}")
        self._tokens = tokens
        self._cursor = 0
        self._terminated = False

    def start(self, argv, /):
        """
        Load argv and parse leading options, pausing at the first positional token.

        This is the global phase: the positional under the cursor is left for the caller
        to inspect (a subcommand name, an alias, or a plain argument).
        """
        self._load(argv)
        return self._run(pause=True)

    def parse(self, argv, /):
        """Load argv and parse all of it in one go."""
        self._load(argv)
        return self._run(pause=False)

    def continue_parse(self, *, required=True):
        """
        Resume from the cursor and parse to the end with the active schema.

        required=False leaves the required-option check to a later check_required()
        call, so a caller can first decide whether to show help instead.
        """
        return self._run(pause=False, required=required)

    def check_required(self, result, /):
        """Raise RequireValueError for the first required option of the active schema missing from result."""
        for spec in self._schema:
            if spec.required and not spec.has_default and spec.id not in result.supplied:
                raise RequireValueError(
                    f"option {spec.label} is required",
                    title="missing required option", code=FaultCode.MISSING_REQUIRED_OPTION, option=spec.id,
                    hint=f"pass {spec.flags[-1]} VALUE"
                )
        return result

    def _run(self, pause, required=True):
        phase = _Phase()

        while not self.is_end():
            token = self.current
            if self._terminated:
                if pause:
                    break
                phase.positionals.append(self.advance())
            elif token == "--":
                self.advance()
                self._terminated = True
            elif self._flagged(token):
                self._flag(phase)
            elif pause:
                break
            else:
                phase.positionals.append(self.advance())

        self._complete(phase)
        result = ParseResult(phase.values, phase.positionals, phase.supplied)
        # A help request is answered even when required options are missing.
        if required and "help" not in result.supplied:
            self.check_required(result)
        return result

    def _flagged(self, token):
        if len(token) < 2 or token[0] != "-":
            return False
        if token[1] == "-":
            return len(token) > 2
        return token[1].isalpha() or self._schema.by_short(token[1]) is not None

    def _flag(self, phase):
        position = self.position
        token = self.advance()

        if token.startswith("--"):
            name, separator, value = token[2:].partition("=")
            if (spec := self._schema.by_long(name)) is None:
                raise UnknownOptionError(
                    f"unknown option --{name} ({ordinal(position)} argument)",
                    option="--" + name, token=token, position=position,
                    hint="use --help to list the available options"
                )
            return self._feed(phase, spec, "--" + name, value if separator else Unset)

        body = token[1:]
        if (spec := self._schema.by_short(body[0])) is None:
            raise UnknownOptionError(
                f"unknown option -{body[0]} ({ordinal(position)} argument)",
                option="-" + body[0], token=token, position=position,
                hint="use --help to list the available options"
            )

        rest = body[1:]
        if not rest:
            return self._feed(phase, spec, "-" + body[0], Unset)
        if rest.startswith("="):
            return self._feed(phase, spec, "-" + body[0], rest[1:])
        if spec.takes_value:
            return self._feed(phase, spec, "-" + body[0], rest)

        # Cluster of switches: every character must be a boolean or incremental flag.
        cluster = [spec]
        for character in rest:
            member = self._schema.by_short(character)
            if member is None or member.takes_value:
                raise UnknownOptionError(
                    f"invalid option cluster {token} ({ordinal(position)} argument)",
                    option="-" + character, token=token, position=position,
                    hint="only switches can be grouped, pass value-taking options separately"
                )
            cluster.append(member)
        for member in cluster:
            self._feed(phase, member, "-" + member.short, Unset)

    def _feed(self, phase, spec, flag, value):
        if not spec.takes_value:
            if value is not Unset:
                raise UnexpectedValueError(
                    f"option {flag} does not take a value (got {value!r})",
                    option=spec.id, value=value
                )
            if spec.incremental:
                phase.values[spec.id] = phase.values.get(spec.id, 0) + 1
            else:
                phase.values[spec.id] = True
            return phase.mark(spec)

        if value is Unset:
            if not self.is_end() and not self._flagged(self.current) and self.current != "--":
                value = self.advance()
            elif spec.optional:
                phase.values[spec.id] = _default(spec)
                return phase.mark(spec)
            else:
                raise RequireValueError(
                    f"option {flag} requires a value",
                    option=spec.id, hint=f"pass it as {flag} VALUE or {flag}=VALUE"
                )

        converted = self._convert(spec, flag, value)
        if spec.multi:
            # Supplied values replace the declared default.
            if spec.id not in phase.supplied:
                phase.values[spec.id] = []
            phase.values[spec.id].append(converted)
        else:
            phase.values[spec.id] = converted
        phase.mark(spec)

    @staticmethod
    def _convert(spec, flag, value):
        if spec.type is ValueType.NUMBER:
            if _INTEGRAL.fullmatch(value):
                converted = int(value)
            elif _DECIMAL.fullmatch(value):
                converted = float(value)
            else:
                raise OptionTypeError(
                    f"invalid number {value!r} for option {flag}",
                    option=spec.id, value=value, hint="expected a decimal number such as 5 or 2.5"
                )
        else:
            converted = value

        if spec.valid and converted not in spec.valid:
            allowed = f"[{", ".join(map(str, spec.valid))}]"
            raise ValidationError(
                f"invalid value {value!r} for option {flag}, allowed values: {allowed}",
                option=spec.id, value=converted, allowed=spec.valid,
                hint=f"choose one of {allowed}"
            )
        return converted

    def _complete(self, phase):
        for spec in self._schema:
            if spec.id in phase.values:
                continue
            if spec.has_default:
                phase.values[spec.id] = _default(spec)
            elif spec.multi:
                phase.values[spec.id] = []


def _default(spec):
    if spec.multi:
        return list(spec.default) if spec.has_default else []
    return spec.default if spec.has_default else None


def parse(argv, schema, /):
    """One-shot parse of argv against schema; see OptionParser for the rules."""
    return OptionParser(schema).parse(argv)


__all__ = (
    "ParseResult",
    "OptionParser",
    "parse",
)
