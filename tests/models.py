from __future__ import annotations

import dataclasses
import enum
from typing import Any, NamedTuple, NewType, TypedDict

UserId = NewType("UserId", int)


class Color(enum.Enum):
    RED = 1
    GREEN = 2


@dataclasses.dataclass
class Single:
    A: int


@dataclasses.dataclass
class Holder:
    A: Any


@dataclasses.dataclass
class Point:
    x: int
    y: int


@dataclasses.dataclass
class ColorPoint(Point):
    color: Color = Color.RED


@dataclasses.dataclass
class Node:
    value: int
    next: Node | None = None


@dataclasses.dataclass
class Secret:
    name: str
    _token: str


@dataclasses.dataclass
class Derived:
    base: int
    double: int = dataclasses.field(init=False)

    def __post_init__(self) -> None:
        self.double = 2 * self.base


@dataclasses.dataclass
class Empty:
    pass


class Pair(NamedTuple):
    left: int
    right: str


class Movie(TypedDict, total=False):
    title: str
    year: int


@dataclasses.dataclass
class Shape:
    name: str
    points: list[Point]
    color: Color
    tags: set[str]
    owner: UserId
    extra: dict[str, Any]
    origin: Point | None = None


class Book(TypedDict):
    title: str
    author: str
