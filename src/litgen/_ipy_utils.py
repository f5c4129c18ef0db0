"""Display generated code in IPython"""
from __future__ import annotations

import functools
from typing import Any, Final, Iterable, Iterator

import pygments
import pygments.formatters
import pygments.lexers

CSS_CLASS: Final = "litgen-highlight"


@functools.lru_cache()
def _style_defs() -> str:
    formatter = pygments.formatters.HtmlFormatter(cssclass=CSS_CLASS)
    styles: str = formatter.get_style_defs(f".{CSS_CLASS}")
    return styles


class _InlineFormatter(
    pygments.formatters.HtmlFormatter  # type: ignore[type-arg]
):
    "Lay out a single declaration inside a line of text"

    def wrap(
        self, source: Iterable[tuple[int, str]], *args: Any, **kwargs: Any
    ) -> Iterator[tuple[int, str]]:
        yield 0, f'<span class="{self.cssclass}"><tt>'
        yield from source
        yield 0, "</tt></span>"


def _highlight(code: str, formatter: Any) -> str:
    lexer = pygments.lexers.PythonLexer()
    res: str = pygments.highlight(code, lexer, formatter)
    return res


def module_html(source: str) -> str:
    "A generated module as a standalone html fragment"
    block = pygments.formatters.HtmlFormatter(cssclass=CSS_CLASS)
    return f"<style>{_style_defs()}</style>" + _highlight(source, block)


def declaration_html(declaration: str) -> str:
    return _highlight(
        declaration.rstrip("\n"), _InlineFormatter(cssclass=CSS_CLASS)
    )
