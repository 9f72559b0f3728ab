"""Static publishing layer: writes rendered pages and the feed to a site directory."""

from __future__ import annotations

import logging
import shutil
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from .markup import HtmlString
from .models import Post, StaticPage
from .templates import SiteRenderer, yyyy_mm_dd
from .themes import group_posts_by_theme, resolve_theme
from .utils import ensure_dir, read_json

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a posts manifest is not shaped like one."""


def parse_date(raw: str) -> date:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on.
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    value = datetime.fromisoformat(raw)
    if len(raw) <= 10:
        return value.date()
    return value


def post_from_row(row: dict) -> Post:
    """Build a ``Post`` from one manifest row; raises ``KeyError`` for missing fields."""
    path = str(row["path"])
    slug = str(row.get("slug") or Path(path).stem)
    image = row.get("image")
    return Post(
        title=str(row["title"]),
        summary=str(row.get("summary") or ""),
        date=parse_date(str(row["date"])),
        path=path,
        src=str(row.get("src") or f"/content/posts/{slug}.dj"),
        image=str(image) if image else None,
        theme=resolve_theme(slug),
        content=HtmlString(str(row["content"])),
    )


def load_manifest(path: str | Path) -> tuple[list[Post], list[StaticPage]]:
    payload = read_json(path)
    if not isinstance(payload, dict) or not isinstance(payload.get("posts"), list):
        raise ManifestError(f"Manifest must be an object with a 'posts' list: {path}")

    posts: list[Post] = []
    for index, row in enumerate(payload["posts"]):
        try:
            posts.append(post_from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping manifest post #%d: %r", index, exc)

    pages: list[StaticPage] = []
    for index, row in enumerate(payload.get("pages") or []):
        try:
            pages.append(StaticPage(name=str(row["name"]), content=HtmlString(str(row["content"]))))
        except (KeyError, TypeError) as exc:
            logger.warning("Skipping manifest page #%d: %r", index, exc)

    return posts, pages


class SitePublisher:
    def __init__(self, site_dir: str, site_url: str | None = None, renderer: SiteRenderer | None = None):
        self.site_dir = Path(site_dir)
        self.renderer = renderer or SiteRenderer(site_url=site_url)

    def publish(
        self,
        posts: Iterable[Post],
        pages: Iterable[StaticPage] = (),
        spellcheck: bool = False,
        now: datetime | None = None,
    ) -> dict:
        all_posts = sorted(posts, key=lambda p: yyyy_mm_dd(p.date), reverse=True)
        pages = list(pages)
        groups = group_posts_by_theme(all_posts)

        staging = self.site_dir.parent / f"{self.site_dir.name}.staging"
        backup = self.site_dir.parent / f"{self.site_dir.name}.backup"

        if staging.exists():
            shutil.rmtree(staging)
        ensure_dir(staging)

        try:
            self._write(staging, "/index.html", self.renderer.post_list(groups))
            for group in groups:
                self._write(staging, group.theme.path, self.renderer.theme_page(group.theme, group.posts))
            for post in all_posts:
                self._write(staging, post.path, self.renderer.post(post, spellcheck))
            for page in pages:
                self._write(staging, f"/{page.name}.html", self.renderer.page(page.name, page.content))
            self._write(staging, "/feed.xml", self.renderer.feed(all_posts, updated=now))
        except Exception:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        if backup.exists():
            shutil.rmtree(backup)

        moved_old = False
        try:
            if self.site_dir.exists():
                self.site_dir.replace(backup)
                moved_old = True
            staging.replace(self.site_dir)
        except Exception:
            logger.exception("Failed to swap staged site into %s", self.site_dir)
            if moved_old:
                # site_dir, if present, is the half-moved new build.
                if self.site_dir.exists():
                    shutil.rmtree(self.site_dir, ignore_errors=True)
                backup.replace(self.site_dir)
                logger.info("Restored previous build in %s", self.site_dir)
            shutil.rmtree(staging, ignore_errors=True)
            raise

        if backup.exists():
            shutil.rmtree(backup)

        logger.info(
            "Published %d posts, %d pages, %d themes to %s",
            len(all_posts),
            len(pages),
            len(groups),
            self.site_dir,
        )
        return {
            "rendered_posts": len(all_posts),
            "rendered_pages": len(pages),
            "themes": [group.theme.key for group in groups],
            "site_dir": str(self.site_dir),
        }

    def _write(self, root: Path, site_path: str, body: HtmlString) -> None:
        out_path = root / site_path.lstrip("/")
        ensure_dir(out_path.parent)
        out_path.write_text(str(body), encoding="utf-8")
        logger.debug("Wrote %s", out_path)
