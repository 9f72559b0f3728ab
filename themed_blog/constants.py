"""Project-wide constants for the themed blog."""

from __future__ import annotations

SITE_NAME = "mbottoni"
SITE_URL = "https://mbottoni.github.io"
SITE_BLURB = "Yet another programming blog by Maruan Bakri Ottoni aka mbottoni."

# Source file behind the generated listing pages, for the "Fix typo" link.
LISTING_SRC = "/src/templates.ts"

FEED_AUTHOR = "Alex Kladov"
FEED_LIMIT = 10

REPO_EDIT_URL = "https://github.com/mbottoni/mbottoni.github.io/edit/master"
CONTACT_EMAIL = "maruanbakriottoni@gmail.com"
GITHUB_URL = "https://github.com/mbottoni"

THEME_FRONTIER = "frontier"
THEME_GENERATIVE = "generative"
THEME_GRAPH_RL = "graph_rl"
THEME_FOUNDATIONS = "foundations"

ALL_THEME_KEYS = (
    THEME_FRONTIER,
    THEME_GENERATIVE,
    THEME_GRAPH_RL,
    THEME_FOUNDATIONS,
)

DEFAULT_THEME_KEY = THEME_FOUNDATIONS

# Standalone pages that pull an extra stylesheet.
PAGE_EXTRA_CSS = {
    "resume": "resume.css",
}
