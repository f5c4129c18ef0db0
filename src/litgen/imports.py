"""
``litgen.imports``: Naming types in generated code
==================================================

Types that are not builtins have to be imported by the generated module. Every
module gets a short alias the first time it is seen and types are referred to
through that alias (``p0.Point``).
"""
from __future__ import annotations

import types
from typing import Any, Final, Iterator

from . import utils
from .types import (
    Array,
    Bool,
    Bytes,
    Enum,
    Float,
    Int,
    Interface,
    Mapping,
    Named,
    Pointer,
    Record,
    Sequence,
    Str,
    Tuple,
    TypeDesc,
    Unsupported,
)

__all__ = ("ALIAS_PREFIX", "ImportRegistry", "TypeNamer", "walk_dependencies")

#: Prefix of the aliases given to imported modules.
ALIAS_PREFIX: Final = "p"


class ImportRegistry:
    """Assign aliases to module paths.

    Aliases are allocated in the order in which the paths are first seen and
    never change afterwards:

      >>> registry = ImportRegistry()
      >>> registry.resolve("collections.abc")
      'p0'
      >>> registry.resolve("")
      ''
      >>> registry.resolve("decimal")
      'p1'
      >>> registry.resolve("collections.abc")
      'p0'
      >>> list(registry.items())
      [('collections.abc', 'p0'), ('decimal', 'p1')]

    Args:
      local: The name of the module we are generating. Types defined in that
        module do not need to be imported.
    """

    local: str
    # dicts are iterated in insertion order; that's the order in which the
    # imports are written out.
    _aliases: dict[str, str]

    def __init__(self, local: str = "") -> None:
        self.local = local
        self._aliases = {}

    def resolve(self, path: str) -> str:
        if path == "" or path == self.local:
            return ""
        alias = self._aliases.get(path)
        if alias is None:
            alias = self._aliases[path] = f"{ALIAS_PREFIX}{len(self._aliases)}"
        return alias

    def items(self) -> Iterator[tuple[str, str]]:
        yield from self._aliases.items()

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, path: object) -> bool:
        return path in self._aliases


class TypeNamer:
    "Get the text of the annotation for a type"

    registry: ImportRegistry

    def __init__(self, registry: ImportRegistry) -> None:
        self.registry = registry

    def qualify(self, v: Any) -> str:
        module, name = utils.get_import_path(v)
        alias = self.registry.resolve(module)
        if alias:
            return f"{alias}.{name}"
        return name

    def name(self, desc: TypeDesc) -> str:
        match desc:
            case Bool():
                return "bool"
            case Int():
                return "int"
            case Float():
                return "float"
            case Str():
                return "str"
            case Bytes():
                return "bytes"
            case Pointer(elem):
                return f"{self.name(elem)} | None"
            case Array(_, 0):
                return "tuple[()]"
            case Array(elem, None):
                return f"tuple[{self.name(elem)}, ...]"
            case Array(elem, length):
                return f"tuple[{', '.join([self.name(elem)] * length)}]"
            case Tuple(elems):
                return f"tuple[{', '.join(self.name(e) for e in elems)}]"
            case Sequence(elem, container):
                return f"{container.__name__}[{self.name(elem)}]"
            case Mapping(key, value):
                return f"dict[{self.name(key)}, {self.name(value)}]"
            case Record(cls) | Enum(cls):
                return self.qualify(cls)
            case Unsupported(cls):
                # Values of these types are written out with `str`.
                try:
                    return self.qualify(cls)
                except ValueError:
                    return "object"
            case Named(alias):
                return self.qualify(alias)
            case Interface(None, ()):
                return "object"
            case Interface(None, members):
                return " | ".join(self.name(member) for member in members)
            case Interface(types.NoneType):
                return "None"
            case Interface(cls):
                return self.qualify(cls)
        raise TypeError(f"Not a type descriptor: {desc!r}")


def walk_dependencies(registry: ImportRegistry, desc: TypeDesc) -> None:
    """Register all the modules needed to write out values of type *desc*.

    This only covers what can be known statically: values in dynamically typed
    slots can bring in more imports when they are rendered.
    """
    # Recursive types (e.g.: a linked list) refer back to records we've
    # already seen.
    seen = set[TypeDesc]()

    def walk(desc: TypeDesc) -> None:
        match desc:
            case Pointer(elem) | Array(elem) | Sequence(elem):
                walk(elem)
            case Mapping(key, value):
                walk(key)
                walk(value)
            case Record():
                if desc in seen:
                    return
                seen.add(desc)
                registry.resolve(desc.module)
                for field in desc.fields:
                    walk(field.type)
            case Enum():
                registry.resolve(desc.module)
            case Named():
                registry.resolve(desc.module)
                walk(desc.underlying)
            case Tuple(elems):
                for elem in elems:
                    walk(elem)
            case Interface(members=members):
                for member in members:
                    walk(member)

    walk(desc)
