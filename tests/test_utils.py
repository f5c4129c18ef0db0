import enum
import math

import pytest

from litgen import utils

from . import models


class C:
    class Inner:
        pass


class _Rebound:
    pass


REBOUND = _Rebound


class _Rebound:  # type: ignore[no-redef]  # noqa: F811
    pass


class Unbound:
    pass


UNBOUND = Unbound

del Unbound


def test_get_import_path():
    class Local:
        pass

    with pytest.raises(ValueError, match="defined inside of functions"):
        utils.get_import_path(Local)

    with pytest.raises(TypeError, match="lambdas"):
        utils.get_import_path(lambda: 5)

    with pytest.raises(TypeError, match="Type .* not supported"):
        utils.get_import_path(None)

    with pytest.raises(ValueError, match="it's overridden"):
        utils.get_import_path(REBOUND)

    with pytest.raises(ValueError, match="cannot be reloaded"):
        utils.get_import_path(UNBOUND)

    assert utils.get_import_path(models.Point) == ("tests.models", "Point")
    assert utils.get_import_path(C.Inner) == ("tests.test_utils", "C.Inner")
    assert utils.get_import_path(enum.Enum) == ("enum", "Enum")
    assert utils.get_import_path(models.UserId) == ("tests.models", "UserId")

    # builtins never need to be imported
    assert utils.get_import_path(float) == ("", "float")
    assert utils.locate("float") is float
    assert utils.get_import_path(math.floor) == ("math", "floor")
