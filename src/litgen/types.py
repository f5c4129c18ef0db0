"""
``litgen.types``: Type descriptors
==================================

Python values carry their type at runtime but the *declared* type of a slot
(the annotation of a dataclass field, the element type of a ``list[...]``)
is only available through type hints. :func:`describe` turns those hints into a
small closed set of descriptors that the rest of ``litgen`` dispatches on:

  >>> describe(list[int])
  Sequence(elem=Int(bits=None, signed=True), container=<class 'list'>)
  >>> describe(int | None)
  Pointer(elem=Int(bits=None, signed=True))

Hints that are not recognised are treated as dynamically typed
(:class:`Interface`) and classes that have no literal form are described as
:class:`Unsupported`.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import enum
import functools
import inspect
import types
import typing
from typing import Any, Final

__all__ = (
    "TypeDesc",
    "Bool",
    "Int",
    "Float",
    "Str",
    "Bytes",
    "Pointer",
    "Array",
    "Tuple",
    "Sequence",
    "Mapping",
    "Record",
    "Enum",
    "Interface",
    "Named",
    "Unsupported",
    "Field",
    "ANY",
    "NONE",
    "describe",
    "describe_value",
    "fields",
)


def _module_of(obj: Any) -> str:
    module: str = getattr(obj, "__module__", "builtins")
    return "" if module == "builtins" else module


class TypeDesc:
    """Base class of the type descriptors.

    Descriptors are immutable and compare by value.
    """

    __slots__ = ()

    @property
    def module(self) -> str:
        "The module this type is defined in (empty for builtins)"
        return ""


# Primitives


@dataclasses.dataclass(frozen=True, slots=True)
class Bool(TypeDesc):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class Int(TypeDesc):
    """An integer.

    Python's :class:`int` has no width; *bits* and *signed* can be used (via
    ``Annotated[int, Int(bits=8, signed=False)]``) to constrain the range of
    values that can be rendered.
    """

    bits: int | None = None
    signed: bool = True

    def bounds(self) -> tuple[int | None, int | None]:
        """
        >>> Int(bits=8, signed=False).bounds()
        (0, 255)
        >>> Int(bits=8).bounds()
        (-128, 127)
        >>> Int(signed=False).bounds()
        (0, None)
        """
        if self.bits is None:
            return (None if self.signed else 0), None
        if self.signed:
            return -(2 ** (self.bits - 1)), 2 ** (self.bits - 1) - 1
        return 0, 2**self.bits - 1


@dataclasses.dataclass(frozen=True, slots=True)
class Float(TypeDesc):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class Str(TypeDesc):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class Bytes(TypeDesc):
    pass


# Containers


@dataclasses.dataclass(frozen=True, slots=True)
class Pointer(TypeDesc):
    """An optional reference to a value of type *elem* (``T | None``)."""

    elem: TypeDesc


@dataclasses.dataclass(frozen=True, slots=True)
class Array(TypeDesc):
    """A tuple. *length* is ``None`` for ``tuple[T, ...]``."""

    elem: TypeDesc
    length: int | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class Tuple(TypeDesc):
    """A tuple whose positions have different types (``tuple[int, str]``)."""

    elems: tuple[TypeDesc, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class Sequence(TypeDesc):
    """A variable length collection: a list, a set or a frozenset."""

    elem: TypeDesc
    container: type = list


@dataclasses.dataclass(frozen=True, slots=True)
class Mapping(TypeDesc):
    key: TypeDesc
    value: TypeDesc


# Named types


@dataclasses.dataclass(frozen=True, slots=True)
class Record(TypeDesc):
    """A dataclass, a :class:`typing.NamedTuple` or a :class:`typing.TypedDict`.

    Records are rebuilt by calling their class with one keyword argument per
    field.
    """

    cls: type

    @property
    def module(self) -> str:
        return _module_of(self.cls)

    @property
    def fields(self) -> tuple[Field, ...]:
        return fields(self.cls)

    @property
    def is_typeddict(self) -> bool:
        return typing.is_typeddict(self.cls)


@dataclasses.dataclass(frozen=True, slots=True)
class Enum(TypeDesc):
    cls: type[enum.Enum]

    @property
    def module(self) -> str:
        return _module_of(self.cls)


@dataclasses.dataclass(frozen=True, slots=True)
class Interface(TypeDesc):
    """A dynamically typed slot.

    The value is rendered according to its own runtime type. *cls* is set for
    abstract classes and protocols; *members* for unions.
    """

    cls: type | None = None
    members: tuple[TypeDesc, ...] = ()

    @property
    def module(self) -> str:
        return "" if self.cls is None else _module_of(self.cls)


@dataclasses.dataclass(frozen=True, slots=True)
class Named(TypeDesc):
    """A :class:`typing.NewType`: a distinct name for another type."""

    alias: Any

    @property
    def module(self) -> str:
        return _module_of(self.alias)

    @property
    def underlying(self) -> TypeDesc:
        return describe(self.alias.__supertype__)


@dataclasses.dataclass(frozen=True, slots=True)
class Unsupported(TypeDesc):
    """A class ``litgen`` does not know how to build a literal for."""

    cls: type

    @property
    def module(self) -> str:
        return _module_of(self.cls)


ANY: Final = Interface()
NONE: Final = Interface(types.NoneType)


@dataclasses.dataclass(frozen=True, slots=True)
class Field:
    name: str
    type: TypeDesc
    # Following python's conventions names starting with an underscore are
    # private.
    visible: bool = True


def _is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _is_record(cls: type) -> bool:
    return (
        dataclasses.is_dataclass(cls)
        or _is_namedtuple(cls)
        or typing.is_typeddict(cls)
    )


@functools.lru_cache()
def fields(cls: type) -> tuple[Field, ...]:
    """The fields that have to be passed to *cls* to rebuild a record.

    Fields are listed in declaration order. Dataclass fields declared with
    ``init=False`` are not part of the record.
    """
    if not _is_record(cls):
        raise TypeError(f"{cls.__qualname__!r} is not a record type")
    hints = typing.get_type_hints(cls, include_extras=True)
    names: list[str]
    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls) if f.init]
    elif _is_namedtuple(cls):
        names = list(cls._fields)  # type: ignore[attr-defined]
    else:
        names = list(hints)
    return tuple(
        Field(
            name=name,
            type=describe(hints.get(name, Any)),
            visible=not name.startswith("_"),
        )
        for name in names
    )


_PRIMITIVES: Final[dict[type, TypeDesc]] = {
    bool: Bool(),
    int: Int(),
    float: Float(),
    str: Str(),
    bytes: Bytes(),
    types.NoneType: NONE,
    object: ANY,
}

_SEQUENCES: Final[dict[Any, type]] = {
    list: list,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}

_MAPPINGS: Final = frozenset(
    (dict, collections.abc.Mapping, collections.abc.MutableMapping)
)


def _describe_class(cls: type) -> TypeDesc:
    # We do exact type comparisons instead of calls to `issubclass` to avoid
    # running into problems with inheritance (`bool` is an `int`...)
    if cls in _PRIMITIVES:
        return _PRIMITIVES[cls]
    if cls in _SEQUENCES:
        return Sequence(ANY, _SEQUENCES[cls])
    if cls is tuple:
        return Array(ANY)
    if cls in _MAPPINGS:
        return Mapping(ANY, ANY)
    if issubclass(cls, enum.Enum):
        return Enum(cls)
    if _is_record(cls):
        return Record(cls)
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        return Interface(cls)
    return Unsupported(cls)


def _describe_tuple(args: tuple[Any, ...]) -> Array | Tuple:
    # `tuple[()]` is reported as `((),)` before python 3.11
    if args in ((), ((),)):
        return Array(ANY, 0)
    if len(args) == 2 and args[1] is Ellipsis:
        return Array(describe(args[0]))
    elems = tuple(describe(arg) for arg in args)
    if len(set(elems)) == 1:
        return Array(elems[0], len(elems))
    return Tuple(elems)


def describe(hint: Any) -> TypeDesc:
    """Get the descriptor for a type hint.

    Descriptors are returned as is, which lets callers that do not work with
    type hints build their own:

      >>> describe(Int(bits=16))
      Int(bits=16, signed=True)
    """
    if isinstance(hint, TypeDesc):
        return hint
    if hint is None:
        return NONE
    if hint is Any:
        return ANY
    if isinstance(hint, typing.NewType):
        return Named(hint)
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Annotated:
        for meta in hint.__metadata__:
            if isinstance(meta, TypeDesc):
                return meta
        return describe(args[0])
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not types.NoneType]
        if len(members) == 1 and len(args) == 2:
            return Pointer(describe(members[0]))
        return Interface(members=tuple(describe(arg) for arg in args))
    if origin in _SEQUENCES:
        elem = args[0] if args else Any
        return Sequence(describe(elem), _SEQUENCES[origin])
    if origin is tuple:
        return _describe_tuple(args)
    if origin in _MAPPINGS:
        key, value = args if args else (Any, Any)
        return Mapping(describe(key), describe(value))
    if origin is not None and isinstance(origin, type):
        # User defined generics (e.g.: ``Box[int]``)
        return _describe_class(origin)
    if isinstance(hint, type):
        return _describe_class(hint)
    # Literal, TypeVar, forward references...
    return ANY


def describe_value(value: Any) -> TypeDesc:
    """Get the descriptor of the runtime type of *value*.

    >>> describe_value(True)
    Bool()
    >>> describe_value(None)
    Interface(cls=<class 'NoneType'>, members=())
    """
    return _describe_class(type(value))
