from __future__ import annotations

import pydoc
import typing
from typing import Any, Protocol

locate = pydoc.locate
cram = pydoc.cram


@typing.runtime_checkable
class QualnameAddressable(Protocol):

    __name__: str
    __qualname__: str
    __module__: str


def get_import_path(v: Any) -> tuple[str, str]:
    """Get the module and the qualified name under which *v* can be imported.

    The module is empty for builtins since they never need to be imported:

      >>> get_import_path(int)
      ('', 'int')
      >>> get_import_path(pydoc.Doc)
      ('pydoc', 'Doc')
    """
    if not isinstance(v, QualnameAddressable):
        raise TypeError(f"Type {type(v).__name__!r} not supported")
    if v.__name__ == "<lambda>":
        raise TypeError("lambdas are not supported")
    if ".<locals>." in v.__qualname__:
        raise ValueError(
            f"{v.__qualname__!r}: values defined inside of functions are not "
            "supported."
        )
    if v.__module__ == "builtins":
        module, name = "", v.__qualname__
    else:
        module, name = v.__module__, v.__qualname__
    full_name = f"{module}.{name}" if module else name

    elt = locate(full_name)
    if elt is None:
        raise ValueError(
            f"Argument {v} cannot be reloaded via its name: {full_name!r}"
        )
    elif elt is not v:
        raise ValueError(
            f"Can't use {v}, it's overridden by {elt} as {full_name!r}"
        )
    return module, name
