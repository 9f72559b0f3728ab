"""Theme registry: static theme definitions and slug-to-theme lookup."""

from __future__ import annotations

from typing import Iterable

from .constants import (
    DEFAULT_THEME_KEY,
    THEME_FOUNDATIONS,
    THEME_FRONTIER,
    THEME_GENERATIVE,
    THEME_GRAPH_RL,
)
from .models import Post, ThemeConfig, ThemeGroup


THEMES: tuple[ThemeConfig, ...] = (
    ThemeConfig(
        key=THEME_FRONTIER,
        title="Frontier LLMs & Architectures",
        description=(
            "Transformers, mixture-of-experts, interpretability, retrieval, self-supervision, "
            "and training techniques for large models."
        ),
        path="/themes/frontier.html",
    ),
    ThemeConfig(
        key=THEME_GENERATIVE,
        title="Diffusion & Generative Modeling",
        description=(
            "Diffusion processes, flows, GAN/CTGAN, CFG tricks, and other approaches to "
            "high-dimensional generation."
        ),
        path="/themes/generative.html",
    ),
    ThemeConfig(
        key=THEME_GRAPH_RL,
        title="Graphs, Agents & RL",
        description="Graph neural networks, swarm simulations, and reinforcement-learning flavored explorations.",
        path="/themes/graph-rl.html",
    ),
    ThemeConfig(
        key=THEME_FOUNDATIONS,
        title="Math, Physics & Foundations",
        description=(
            "Hopfield networks, Kalman filters, Kolmogorov ideas, probability, information theory, "
            "and philosophical musings."
        ),
        path="/themes/foundations.html",
    ),
)

_THEMES_BY_KEY: dict[str, ThemeConfig] = {theme.key: theme for theme in THEMES}

_ASSIGNMENTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        THEME_FRONTIER,
        (
            "bertimbau",
            "transformer",
            "decoding",
            "llm-archs",
            "rag",
            "llm-quant",
            "kan",
            "sae",
            "ssl",
            "deepseek",
            "grpo",
            "mech-inter",
            "neural-collapse",
            "moe",
        ),
    ),
    (
        THEME_GENERATIVE,
        (
            "ctgan",
            "diffusion",
            "ddim_ddpm",
            "flow",
            "timeseries-diffusion",
            "cfg",
            "vaes",
        ),
    ),
    (
        THEME_GRAPH_RL,
        (
            "simple_rl",
            "gcn",
            "temporal-gnn",
            "swarm",
        ),
    ),
    (
        THEME_FOUNDATIONS,
        (
            "hopfield",
            "hopfield_from_scratch",
            "up",
            "kalman",
            "mandelbrot",
            "kolmogorov",
            "divergences",
            "iit",
            "plato",
            "prob",
        ),
    ),
)


def _build_slug_lookup() -> dict[str, ThemeConfig]:
    lookup: dict[str, ThemeConfig] = {}
    for key, slugs in _ASSIGNMENTS:
        theme = _THEMES_BY_KEY[key]
        for slug in slugs:
            lookup[slug.lower()] = theme
    return lookup


_SLUG_LOOKUP = _build_slug_lookup()

DEFAULT_THEME = _THEMES_BY_KEY[DEFAULT_THEME_KEY]


def resolve_theme(slug: str) -> ThemeConfig:
    """Return the theme assigned to ``slug``; unknown slugs get the default theme."""
    return _SLUG_LOOKUP.get(slug.lower(), DEFAULT_THEME)


def theme_by_key(key: str) -> ThemeConfig:
    return _THEMES_BY_KEY[key]


def group_posts_by_theme(posts: Iterable[Post]) -> list[ThemeGroup]:
    """Group posts in theme-definition order, dropping themes without posts."""
    groups = {theme.key: ThemeGroup(theme=theme) for theme in THEMES}
    for post in posts:
        groups.setdefault(post.theme.key, ThemeGroup(theme=post.theme)).posts.append(post)
    return [group for group in groups.values() if group.posts]
