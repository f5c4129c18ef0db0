"""
``litgen.render``: Python literals
==================================

Turn runtime values into python expressions that rebuild them. The *declared*
type of a value drives the rendering; the value's own type is only used in
dynamically typed slots:

  >>> namer = imports.TypeNamer(imports.ImportRegistry())
  >>> print(render_literal(types.describe(list[int]), [1, 2], namer))
  [
  1,
  2,
  ]
  >>> print(render_literal(types.ANY, "string", namer))
  "string"

"""
from __future__ import annotations

import collections.abc
import math
import numbers
import operator
import re
import warnings
from typing import Any, Callable, Final, ParamSpec

from . import imports, types, utils
from .types import (
    Array,
    Bool,
    Bytes,
    Enum,
    Float,
    Int,
    Interface,
    Mapping,
    Pointer,
    Record,
    Sequence,
    Str,
    Tuple,
    TypeDesc,
)

__all__ = (
    "render_literal",
    "quote",
    "UnreadableFieldError",
    "LiteralFallbackWarning",
)

P = ParamSpec("P")

NAN: Final = 'float("nan")'
INFINITY: Final = 'float("inf")'


class UnreadableFieldError(AttributeError):
    """A field of a record could not be read."""


class LiteralFallbackWarning(UserWarning):
    """A value was written with :class:`str` because it has no literal form.

    The generated code is unlikely to be valid python.
    """


_ESCAPE_OR_QUOTE: Final = re.compile(r"\\.|\"", re.DOTALL)


def _requote(m: re.Match[str]) -> str:
    tok = m.group(0)
    if tok == '"':
        return '\\"'
    if tok == "\\'":
        return "'"
    return tok


def quote(s: str) -> str:
    """Quote *s* as a double quoted python string literal.

    Escaping follows :func:`repr`:

      >>> print(quote("string"))
      "string"
      >>> print(quote("it's"))
      "it's"
    """
    rep = str.__repr__(s)
    if rep[0] == '"':
        return rep
    return '"' + _ESCAPE_OR_QUOTE.sub(_requote, rep[1:-1]) + '"'


def _float(f: float) -> str:
    if math.isfinite(f):
        return repr(f)
    if math.isnan(f):
        return NAN
    if f == math.inf:
        return INFINITY
    assert f == -math.inf
    return "-" + INFINITY


def _expect(value: Any, ty: type | tuple[type, ...], desc: TypeDesc) -> None:
    if not isinstance(value, ty):
        raise TypeError(
            f"Expected a value of type {type(desc).__name__}, got "
            f"{type(value).__name__}: {utils.cram(repr(value), 40)}"
        )


def _expect_iterable(value: Any, desc: TypeDesc) -> None:
    if isinstance(value, str | bytes) or not isinstance(
        value, collections.abc.Iterable
    ):
        raise TypeError(
            f"Expected a collection for a {type(desc).__name__}, got "
            f"{type(value).__name__}"
        )


def _format_list(items: list[str], *, opar: str, cpar: str, empty: str) -> str:
    if not items:
        return empty
    return opar + "\n" + "".join(f"{item},\n" for item in items) + cpar


def _read_field(desc: Record, field: types.Field, value: Any) -> Any:
    if not field.visible:
        raise UnreadableFieldError(
            f"{desc.cls.__qualname__}.{field.name}: cannot read private field"
        )
    try:
        if desc.is_typeddict:
            return value[field.name]
        return getattr(value, field.name)
    except (AttributeError, KeyError) as e:
        raise UnreadableFieldError(
            f"{desc.cls.__qualname__}.{field.name}: field is not set"
        ) from e


def render_literal(
    desc: TypeDesc, value: Any, namer: imports.TypeNamer
) -> str:
    """Get the python expression for *value*.

    Args:
      desc: The declared type of *value*
      value:
      namer: Used to refer to types (it will register the modules we need to
        import)

    Raises:
      UnreadableFieldError: when a record has a private field.
      TypeError: if *value* doesn't match a primitive type in *desc*.
      ValueError: if *value* contains itself.
    """
    # ids of the containers we are currently in
    active = set[int]()

    def nested(
        v: Any, fn: Callable[P, str], *args: P.args, **kwargs: P.kwargs
    ) -> str:
        addr = id(v)
        if addr in active:
            raise ValueError("Recursive value found")
        active.add(addr)
        try:
            return fn(*args, **kwargs)
        finally:
            active.discard(addr)

    def record(desc: Record, v: Any) -> str:
        items = []
        for field in desc.fields:
            if (
                desc.is_typeddict
                and field.name not in v
                and field.name in desc.cls.__optional_keys__  # type: ignore
            ):
                continue
            fv = _read_field(desc, field, v)
            items.append(f"{field.name}={render(field.type, fv)}")
        name = namer.name(desc)
        return _format_list(items, opar=f"{name}(", cpar=")", empty=f"{name}()")

    def sequence(desc: Array | Sequence, v: Any) -> str:
        items = [render(desc.elem, x) for x in v]
        match desc:
            case Array(_, length) if length is not None and length != len(
                items
            ):
                raise ValueError(
                    f"Expected a tuple of length {length}, got {len(items)} "
                    "elements"
                )
            case Array():
                return _format_list(items, opar="(", cpar=")", empty="()")
            case Sequence(_, container) if container is list:
                return _format_list(items, opar="[", cpar="]", empty="[]")
        # Sets do not have a stable iteration order (e.g.: strings are
        # hashed with a random seed).
        assert isinstance(desc, Sequence)
        items.sort()
        if desc.container is set:
            return _format_list(items, opar="{", cpar="}", empty="set()")
        return _format_list(
            items, opar="frozenset({", cpar="})", empty="frozenset()"
        )

    def tuple_(desc: Tuple, v: Any) -> str:
        items = list(v)
        if len(items) != len(desc.elems):
            raise ValueError(
                f"Expected a tuple of length {len(desc.elems)}, got "
                f"{len(items)} elements"
            )
        return _format_list(
            [render(elem, x) for elem, x in zip(desc.elems, items)],
            opar="(",
            cpar=")",
            empty="()",
        )

    def mapping(desc: Mapping, v: Any) -> str:
        items = []
        for key, value in v.items():
            ek = render(desc.key, key)
            ev = render(desc.value, value)
            items.append(f"{ek}: {ev}")
        return _format_list(items, opar="{", cpar="}", empty="{}")

    def render(desc: TypeDesc, v: Any) -> str:
        match desc:
            case Pointer(elem):
                if v is None:
                    return "None"
                # Python names are references: there's no address-of
                # operator.
                return render(elem, v)
            case Record(cls):
                if desc.is_typeddict:
                    _expect(v, dict, desc)
                elif type(v) is not cls:
                    return render(types.describe_value(v), v)
                return nested(v, record, desc, v)
            case Enum(cls):
                _expect(v, cls, desc)
                return f"{namer.name(desc)}.{v.name}"
            case Str():
                _expect(v, str, desc)
                return quote(v)
            case Array() | Sequence():
                _expect_iterable(v, desc)
                return nested(v, sequence, desc, v)
            case Tuple():
                _expect_iterable(v, desc)
                return nested(v, tuple_, desc, v)
            case Mapping():
                _expect(v, collections.abc.Mapping, desc)
                return nested(v, mapping, desc, v)
            case Interface():
                if v is None:
                    return "None"
                own = types.describe_value(v)
                # Instances of `object` itself
                if isinstance(own, Interface):
                    return fallback(v)
                return render(own, v)
            case Bool():
                _expect(v, bool, desc)
                return repr(v)
            case Int(signed=True):
                i = operator.index(v)
                low, high = desc.bounds()
                if (low is not None and i < low) or (
                    high is not None and i > high
                ):
                    raise ValueError(f"{i} is out of range for {desc}")
                return str(i)
            case Int(signed=False):
                i = operator.index(v)
                _, high = desc.bounds()
                if i < 0:
                    raise ValueError(
                        f"{i}: unsigned integers can't be negative"
                    )
                if high is not None and i > high:
                    raise ValueError(f"{i} is out of range for {desc}")
                return str(i)
            case Float():
                _expect(v, numbers.Real, desc)
                return _float(float(v))
            case Bytes():
                _expect(v, bytes, desc)
                return repr(v)
        # Named types and classes we don't know how to build: try again with
        # the value's own type.
        own = types.describe_value(v)
        if own != desc:
            return render(own, v)
        return fallback(v)

    def fallback(v: Any) -> str:
        text = str(v)
        warnings.warn(
            f"Values of type {type(v).__qualname__!r} have no literal form, "
            f"falling back to `str`: {utils.cram(text, 40)}",
            LiteralFallbackWarning,
        )
        return text

    return render(desc, value)
