from __future__ import annotations

import ast
import types
from typing import Any


def load(source: str) -> dict[str, Any]:
    """Run a generated module and return its globals."""
    module = types.ModuleType("generated")
    code = compile(source, filename="<generated>", mode="exec")
    exec(code, module.__dict__)
    return module.__dict__


def assert_eq_ast(left: str, right: str) -> None:
    """Check that two pieces of code parse to the same expression.

    This is useful because the generated code puts every element of a
    container on its own line.
    """
    assert ast.dump(ast.parse(left)) == ast.dump(ast.parse(right))
