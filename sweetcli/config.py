"""
SweetCLI configuration store.

A small dotted-key store backed by a JSON (".json") or YAML (".yml"/".yaml") file.

- Config.load(path): read the file; a missing, empty or malformed file loads as an
  empty store. Unknown extensions raise ConfigError right away.
- get("some.key", default), set("some.key", value), unset("some.key") → bool.
- save(): write the values back (JSON via json, YAML via yaml.safe_dump).
- Used as a context manager, the store saves on exit. The dispatcher flushes the
  application store once, at the end of the run.
"""
import json
import os

import yaml

from .faults import *
from .utils import *

_FORMATS = {
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
}


class Config(metaclass=IntrospectableType):
    """Dotted-key store flushed to a JSON or YAML file."""

    __introspectable__ = ("path", "format", "values")
    __displayable__ = ("path", "format")

    def __init__(self, path, /, format=Unset, values=Unset):
        if not isinstance(path, str | os.PathLike):
            raise TypeError("config 'path' must be a path")
        path = os.fspath(path)

        if format is Unset:
            format = _FORMATS.get(os.path.splitext(path)[1].lower(), Unset)
        if format not in ("json", "yaml"):
            raise ConfigError(
                f"unknown configuration format for {path!r}",
                path=path, hint="use a .json, .yml or .yaml file"
            )

        self._path = path
        self._format = format
        self._values = dict(coalesce(values, {}))

    @classmethod
    def load(cls, path, /, format=Unset):
        self = cls(path, format)
        try:
            with open(self._path, encoding="utf-8") as stream:
                contents = stream.read()
        except (OSError, UnicodeDecodeError):
            # Missing, unreadable and non-UTF-8 files load as an empty store.
            return self

        try:
            if self._format == "json":
                values = json.loads(contents) if contents.strip() else {}
            else:
                values = yaml.safe_load(contents)
        except (ValueError, yaml.YAMLError):
            values = {}

        if isinstance(values, dict):
            self._values = values
        return self

    def get(self, key, default=None, /):
        node = self._values
        for part in _split(key):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key, value, /):
        *parents, last = _split(key)
        node = self._values
        for depth, part in enumerate(parents, 1):
            node = node.setdefault(part, {})
            if not isinstance(node, dict):
                raise ConfigError(
                    f"item at key {".".join(parents[:depth])!r} is neither a mapping nor unset",
                    key=key
                )
        node[last] = value
        return self

    def unset(self, key, /):
        *parents, last = _split(key)
        node = self._values
        for part in parents:
            if not isinstance(node := node.get(part), dict):
                return False
        return node.pop(last, Unset) is not Unset

    def save(self):
        """Write the values back; serialization and I/O failures raise ConfigError."""
        try:
            if self._format == "json":
                contents = json.dumps(self._values, indent=4)
            else:
                contents = yaml.safe_dump(self._values, default_flow_style=False, sort_keys=False)
        except (TypeError, ValueError, yaml.YAMLError) as exception:
            raise ConfigError(
                f"cannot serialize configuration for {self._path!r}: {exception}",
                path=self._path, hint="store only strings, numbers, booleans, lists and mappings"
            ) from exception

        try:
            if directory := os.path.dirname(self._path):
                os.makedirs(directory, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as stream:
                stream.write(contents)
        except OSError as exception:
            raise ConfigError(
                f"cannot save configuration to {self._path!r}: {exception.strerror or exception}",
                path=self._path
            ) from exception

    def __contains__(self, key):
        return self.get(key, Unset) is not Unset

    def __enter__(self):
        return self

    def __exit__(self, *unused):
        self.save()


def _split(key):
    if not isinstance(key, str):
        raise TypeError("configuration keys must be strings")
    parts = key.split(".")
    if not all(parts):
        raise ValueError(f"invalid configuration key {key!r}")
    return parts


__all__ = (
    "Config",
)
