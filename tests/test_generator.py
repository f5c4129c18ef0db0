from __future__ import annotations

import dataclasses
import http
import io
import math
from typing import Any

import pytest

import litgen
from litgen import generator, render, types

from . import models, utils

HEADER = "# out: generated by litgen. DO NOT EDIT.\n"


def test_any_string():
    gen = generator.Generator("a")
    v = models.Holder(A="string")
    [field] = types.fields(models.Holder)
    lit = gen.add_typed_literal("v", field.type, v.A)
    assert lit.render() == '"string"'

    buf = io.StringIO()
    lit.emit(buf)
    assert buf.getvalue() == 'v: object = "string"\n'


def test_emit():
    gen = generator.Generator("out")
    gen.add_typed_literal("p", models.Point, models.Point(1, 2))
    gen.add_literal("c", models.Color.GREEN)
    gen.add_literal("s", http.HTTPStatus.OK)
    buf = io.StringIO()
    gen.emit(buf)
    assert buf.getvalue() == (
        HEADER
        + "import tests.models as p0\n"
        + "import http as p1\n"
        + "\n"
        + "p: p0.Point = p0.Point(\nx=1,\ny=2,\n)\n"
        + "c: p0.Color = p0.Color.GREEN\n"
        + "s: p1.HTTPStatus = p1.HTTPStatus.OK\n"
    )


def test_no_imports():
    gen = generator.Generator("out")
    gen.add_literal("x", 1)
    gen.add_typed_literal("names", list[str], [])
    assert gen.dumps() == HEADER + "x: int = 1\nnames: list[str] = []\n"


def test_empty():
    assert generator.Generator("out").dumps() == HEADER


def test_header():
    gen = generator.Generator("pkg.consts", header='"""{name}"""')
    gen.add_literal("x", 1)
    assert gen.dumps() == '"""pkg.consts"""\nx: int = 1\n'


def test_local_types():
    gen = generator.Generator("tests.models")
    gen.add_literal("p", models.Point(0, 0))
    assert gen.dumps() == (
        "# tests.models: generated by litgen. DO NOT EDIT.\n"
        "p: Point = Point(\nx=0,\ny=0,\n)\n"
    )


def test_imports_found_while_rendering():
    gen = generator.Generator("out")
    gen.add_literal("x", 1)
    gen.add_typed_literal("v", Any, [models.Color.RED])
    # We can only find out we need to import `tests.models` by looking at
    # the value.
    assert len(gen.registry) == 0
    assert gen.dumps() == (
        HEADER
        + "import tests.models as p0\n"
        + "\n"
        + "x: int = 1\n"
        + "v: object = [\np0.Color.RED,\n]\n"
    )


def test_registration_order():
    gen = generator.Generator("out")
    gen.add_literal("b", 2)
    gen.add_literal("a", 1)
    gen.add_literal("c", 3)
    assert [lit.name for lit in gen.literals] == ["b", "a", "c"]
    assert gen.dumps().splitlines()[1:] == [
        "b: int = 2",
        "a: int = 1",
        "c: int = 3",
    ]


def test_failures_write_nothing():
    gen = generator.Generator("out")
    gen.add_literal("x", 1)
    gen.add_typed_literal("s", models.Secret, models.Secret("a", "b"))
    buf = io.StringIO()
    with pytest.raises(render.UnreadableFieldError):
        gen.emit(buf)
    assert buf.getvalue() == ""


def test_no_literal_form():
    gen = generator.Generator("out")
    gen.add_literal("o", object())
    gen.add_literal("f", math.floor)
    gen.add_typed_literal("g", Any, len)
    with pytest.warns(render.LiteralFallbackWarning):
        src = gen.dumps()
    assert src.splitlines()[1:] == [
        f"o: object = {gen.literals[0].value}",
        "f: object = <built-in function floor>",
        "g: object = <built-in function len>",
    ]


SHAPE = models.Shape(
    name="triangle",
    points=[models.Point(0, 0), models.Point(1, 0), models.Point(0, 1)],
    color=models.Color.GREEN,
    tags={"a", "b'", 'c"'},
    owner=models.UserId(5),
    extra={"k": [1, 2.5, None, "x"], "nested": {"t": (1, 2)}},
    origin=models.Point(0, 0),
)


@pytest.mark.parametrize(
    "value",
    (
        1,
        -2.5,
        True,
        None,
        "string",
        b"bytes",
        [1, "a", None],
        (1, 2),
        {1, 2},
        frozenset(["x"]),
        {"a": {"b": [1]}},
        models.Point(1, 2),
        models.Pair(1, "a"),
        models.Node(1, models.Node(2)),
        models.Derived(4),
        models.Color.RED,
        http.HTTPStatus.NOT_FOUND,
        SHAPE,
    ),
)
def test_roundtrip(value):
    gen = generator.Generator("out")
    gen.add_literal("value", value)
    assert utils.load(gen.dumps())["value"] == value


def test_roundtrip_typed():
    values = {
        "movie": (models.Movie, models.Movie(title="Alien", year=1979)),
        "shapes": (list[models.Shape], [SHAPE, SHAPE]),
        "maybe": (models.Point | None, None),
        "uid": (models.UserId, models.UserId(3)),
        "dyn": (dict[str, Any], {"p": models.Point(3, 4), "n": None}),
        "floats": (list[float], [math.inf, -math.inf, 0.1]),
        "pair": (tuple[models.Color, str], (models.Color.RED, "a")),
    }
    gen = generator.Generator("out")
    for name, (hint, value) in values.items():
        gen.add_typed_literal(name, hint, value)
    env = utils.load(gen.dumps())
    for name, (_, value) in values.items():
        assert env[name] == value
    [nan] = utils.load(litgen.dumps("out", nan=[math.nan]))["nan"]
    assert math.isnan(nan)


def test_generated_code_is_python():
    gen = generator.Generator("out")
    gen.add_literal("shape", SHAPE)
    utils.assert_eq_ast(
        gen.dumps(),
        "import tests.models as p0\n"
        "shape: p0.Shape = p0.Shape(name='triangle', points=["
        "p0.Point(x=0, y=0), p0.Point(x=1, y=0), p0.Point(x=0, y=1)],"
        "color=p0.Color.GREEN, tags={'a', 'b\\'', 'c\"'}, owner=5,"
        "extra={'k': [1, 2.5, None, 'x'], 'nested': {'t': (1, 2)}},"
        "origin=p0.Point(x=0, y=0))",
    )


def test_dumps():
    assert litgen.dumps("out", x=1, s="string") == (
        HEADER + 'x: int = 1\ns: str = "string"\n'
    )


def test_repr_html():
    gen = generator.Generator("out")
    lit = gen.add_literal("p", models.Point(1, 2))
    html = gen._repr_html_()
    assert html.startswith("<style>")
    assert "litgen-highlight" in html
    assert "Point" in html
    inline = lit._repr_html_()
    assert "<tt>" in inline


def test_literal_repr():
    gen = generator.Generator("out")
    lit = gen.add_literal("x", 1)
    assert repr(lit) == (
        "Literal(name='x', type=Int(bits=None, signed=True), value=1)"
    )
    assert dataclasses.replace(lit, value=2).render() == "2"
