"""Escaping template helper for building HTML-safe strings."""

from __future__ import annotations

from html import escape
from string import Template
from typing import Any


class HtmlString:
    """Markup that is already rendered and must not be escaped again."""

    __slots__ = ("value",)

    def __init__(self, value: str = ""):
        self.value = value

    def push(self, other: HtmlString) -> None:
        self.value = f"{self.value}\n{other.value}"

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"HtmlString({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HtmlString):
            return self.value == other.value
        return NotImplemented


def escape_html(data: Any) -> str:
    return escape(str(data), quote=False)


def _content(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, HtmlString):
        return value.value
    if isinstance(value, (list, tuple)) or hasattr(value, "__next__"):
        return "".join(_content(one) for one in value)
    return escape_html(value)


def html(template: str, **values: Any) -> HtmlString:
    """Fill ``$name`` placeholders in ``template``, escaping every value.

    ``HtmlString`` values are inserted verbatim, ``None`` renders as nothing,
    and sequences are flattened element by element.
    """
    return HtmlString(Template(template).substitute({key: _content(value) for key, value in values.items()}))
