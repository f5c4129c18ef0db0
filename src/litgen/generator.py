"""
``litgen.generator``: Generate python modules
=============================================

A :class:`Generator` collects named values and writes them out as a python
module:

  >>> gen = Generator("consts")
  >>> _ = gen.add_literal("answer", 42)
  >>> _ = gen.add_typed_literal("names", list[str], ["a", "b"])
  >>> print(gen.dumps(), end="")
  # consts: generated by litgen. DO NOT EDIT.
  answer: int = 42
  names: list[str] = [
  "a",
  "b",
  ]

"""
from __future__ import annotations

import dataclasses
import io
from typing import Any, Final, TextIO

from . import imports, render, types

__all__ = ("DEFAULT_HEADER", "Generator", "Literal", "dumps")

#: First line of the generated modules. ``{name}`` is replaced by the name of
#: the module.
DEFAULT_HEADER: Final = "# {name}: generated by litgen. DO NOT EDIT."


@dataclasses.dataclass
class Literal:
    "A named value registered with a :class:`Generator`."

    name: str
    type: types.TypeDesc
    value: Any
    generator: Generator = dataclasses.field(repr=False)

    def render(self) -> str:
        "Get the python expression for the value"
        return render.render_literal(
            self.type, self.value, self.generator.namer
        )

    def declaration(self) -> str:
        annotation = self.generator.namer.name(self.type)
        return f"{self.name}: {annotation} = {self.render()}\n"

    def emit(self, out: TextIO) -> None:
        "Write the declaration of this value"
        out.write(self.declaration())

    def _repr_html_(self) -> str:
        from . import _ipy_utils

        return _ipy_utils.declaration_html(self.declaration())


class Generator:
    """Build a python module out of values.

    Args:
      name: The name of the module we are generating. This is used in the
        header and types defined in this module do not get imported.
      header: Template for the first line of the module.
    """

    name: str
    header: str
    registry: imports.ImportRegistry
    namer: imports.TypeNamer
    literals: list[Literal]

    def __init__(self, name: str, *, header: str = DEFAULT_HEADER) -> None:
        self.name = name
        self.header = header
        self.registry = imports.ImportRegistry(local=name)
        self.namer = imports.TypeNamer(self.registry)
        self.literals = []

    def add_literal(self, name: str, value: Any) -> Literal:
        """Add a value, using its runtime type as its declared type."""
        return self.add_typed_literal(name, type(value), value)

    def add_typed_literal(self, name: str, hint: Any, value: Any) -> Literal:
        """Add a value with an explicit type.

        Args:
          name: The name of the variable in the generated module. It is not
            checked.
          hint: A type hint or a :class:`~litgen.types.TypeDesc`.
          value:
        """
        desc = types.describe(hint)
        imports.walk_dependencies(self.registry, desc)
        lit = Literal(name=name, type=desc, value=value, generator=self)
        self.literals.append(lit)
        return lit

    def emit(self, out: TextIO) -> None:
        "Write the module to *out*"
        # Values in dynamically typed slots can require new imports so we
        # render everything before writing out the imports.
        decls = [lit.declaration() for lit in self.literals]
        out.write(self.header.format(name=self.name))
        out.write("\n")
        if self.registry:
            for path, alias in self.registry.items():
                out.write(f"import {path} as {alias}\n")
            out.write("\n")
        for decl in decls:
            out.write(decl)

    def dumps(self) -> str:
        "Get the source of the module"
        out = io.StringIO()
        self.emit(out)
        return out.getvalue()

    def _repr_html_(self) -> str:
        from . import _ipy_utils

        return _ipy_utils.module_html(self.dumps())


def dumps(name: str, /, **values: Any) -> str:
    """Get the source of a module that defines *values*

    >>> print(dumps("consts", pi=3.14, e=None), end="")
    # consts: generated by litgen. DO NOT EDIT.
    pi: float = 3.14
    e: None = None

    """
    gen = Generator(name)
    for ident, value in values.items():
        gen.add_literal(ident, value)
    return gen.dumps()
