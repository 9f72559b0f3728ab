"""Data contracts for the themed blog."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .markup import HtmlString


@dataclass(frozen=True)
class ThemeConfig:
    key: str
    title: str
    description: str
    path: str


@dataclass
class Post:
    title: str
    summary: str | HtmlString
    date: date
    path: str
    src: str
    theme: ThemeConfig
    content: HtmlString
    image: str | None = None


@dataclass
class ThemeGroup:
    theme: ThemeConfig
    posts: list[Post] = field(default_factory=list)


@dataclass
class StaticPage:
    name: str
    content: HtmlString
