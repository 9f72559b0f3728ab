"""Page composition: layout shell, listing pages, single posts and the Atom feed."""

from __future__ import annotations

import os
from datetime import date, datetime, timezone
from typing import Iterable

from .constants import (
    CONTACT_EMAIL,
    FEED_AUTHOR,
    FEED_LIMIT,
    GITHUB_URL,
    LISTING_SRC,
    PAGE_EXTRA_CSS,
    REPO_EDIT_URL,
    SITE_BLURB,
    SITE_NAME,
    SITE_URL,
)
from .markup import HtmlString, html
from .models import Post, ThemeConfig, ThemeGroup

_STYLE = HtmlString(
    """
  @font-face {
    font-family: 'Open Sans'; src: url('/css/OpenSans-300-Normal.woff2') format('woff2');
    font-weight: 300; font-style: normal;
  }
  @font-face {
    font-family: 'JetBrains Mono'; src: url('/css/JetBrainsMono-400-Normal.woff2') format('woff2');
    font-weight: 400; font-style: normal;
  }
  @font-face {
    font-family: 'JetBrains Mono'; src: url('/css/JetBrainsMono-700-Normal.woff2') format('woff2');
    font-weight: 700; font-style: normal;
  }
  @font-face {
    font-family: 'EB Garamond'; src: url('/css/EBGaramond-400-Normal.woff2') format('woff2');
    font-weight: 400; font-style: normal;
  }
  @font-face {
    font-family: 'EB Garamond'; src: url('/css/EBGaramond-400-Italic.woff2') format('woff2');
    font-weight: 400; font-style: italic;
  }
  @font-face {
    font-family: 'EB Garamond'; src: url('/css/EBGaramond-700-Normal.woff2') format('woff2');
    font-weight: 700; font-style: normal;
  }
  @font-face {
    font-family: 'EB Garamond'; src: url('/css/EBGaramond-700-Italic.woff2') format('woff2');
    font-weight: 700; font-style: italic;
  }

  * { box-sizing: border-box; margin: 0; padding: 0; margin-block-start: 0; margin-block-end: 0; }

  body {
    max-width: 80ch;
    padding: 2ch;
    margin-left: auto;
    margin-right: auto;
  }

  header { margin-bottom: 2rem; }
  header > nav { display: flex; column-gap: 2ch; align-items: baseline; flex-wrap: wrap; }
  header a { font-style: normal; color: rgba(0, 0, 0, .8); text-decoration: none; }
  header a:hover { color: rgba(0, 0, 0, .8); text-decoration: underline; }
  header .title { font-size: 1.25em; flex-grow: 2; }

  footer { margin-top: 2rem; }
  footer > p { display: flex; column-gap: 2ch; justify-content: center; flex-wrap: wrap; }
  footer a { color: rgba(0, 0, 0, .8); text-decoration: none; white-space: nowrap; }
  footer i { vertical-align: middle; color: rgba(0, 0, 0, .8) }

  .theme-grid { display: grid; gap: 2rem; grid-template-columns: repeat(auto-fit, minmax(16rem, 1fr)); }
  .theme-card { border: 1px solid rgba(0,0,0,.12); border-radius: 1rem; padding: 1.5rem; display: flex; flex-direction: column; gap: .75rem; }
  .theme-card h2 { font-size: 1.35em; }
  .theme-card h2 a { text-decoration: none; color: #b32f1c; }
  .theme-card h2 a:hover { text-decoration: underline; }
  .theme-card p { color: rgba(0,0,0,.75); line-height: 1.5; }
  .theme-meta { font-size: .85em; color: rgba(0,0,0,.6); }

  .theme-page header h1 { font-size: 2em; margin-bottom: .5rem; }
  .theme-page header p { color: rgba(0,0,0,.65); line-height: 1.5; }
  .theme-page { display: flex; flex-direction: column; gap: 1.5rem; }

  .post-list { list-style: none; display: flex; flex-direction: column; gap: 1.5rem; padding: 0; }
  .post-card { display: grid; gap: 1rem; grid-template-columns: minmax(0, 1fr); }
  .post-card__media { display: none; }
  .post-card__body h3 { font-size: 1.1em; margin-bottom: .35rem; }
  .post-card__body p { color: rgba(0, 0, 0, .7); }
  .post-card__media a { display: block; border-radius: .75rem; overflow: hidden; }
  .post-card__media img { width: 100%; height: 100%; object-fit: cover; display: block; }
  @media (min-width: 720px) {
    .post-card { grid-template-columns: 260px 1fr; align-items: center; }
    .post-card__media { display: block; min-height: 160px; }
    .post-card__media:empty { display: block; }
  }

  .theme-pill, .theme-banner a { display: inline-flex; align-items: center; gap: .4rem; font-size: .8em; text-transform: uppercase; letter-spacing: .08em; border: 1px solid rgba(0, 0, 0, .15); border-radius: 999px; padding: .25rem .9rem; text-decoration: none; color: rgba(0, 0, 0, .7); }
  .theme-pill svg, .theme-banner svg { width: .75em; height: .75em; }
  .theme-banner { margin-bottom: 1rem; }
  .theme-banner span { font-size: .8em; color: rgba(0, 0, 0, .6); margin-right: .5rem; }

"""
)

_BASE = """
<!DOCTYPE html>
<html lang='en-US'>
<head>
  <meta charset='utf-8'>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>${title}</title>
  <meta name="description" content="${description}">
  <link rel="icon" href="/favicon.png" type="image/png">
  <link rel="icon" href="/favicon.svg" type="image/svg+xml">
  <link rel="canonical" href="${site_url}${path}">
  <link rel="alternate" type="application/rss+xml" title="${site_name}" href="${site_url}/feed.xml">
  <style>${style}  </style>

  <link rel="stylesheet" href="/css/main.css">
  ${extra_css}
</head>

<body>
  <header>
    <nav>
      <a class="title" href="/">${site_name}</a>
      <a href="/about.html">About</a>
      <a href="/resume.html">Resume</a>
      <a href="/links.html">Links</a>
    </nav>
  </header>

  <main>
  ${content}
  </main>

  <footer class="site-footer">
    <p>
      <a href="${edit_url}${src}">
        <svg class="icon"><use href="/assets/icons.svg#edit"/></svg>
        Fix typo
      </a>
      <a href="/feed.xml">
        <svg class="icon"><use href="/assets/icons.svg#rss"/></svg>
        Subscribe
      </a>
      <a href="mailto:${email}">
        <svg class="icon"><use href="/assets/icons.svg#email"/></svg>
        Get in touch
      </a>
      <a href="${github_url}">
        <svg class="icon"><use href="/assets/icons.svg#github"/></svg>
        ${site_name}
      </a>
    </p>
  </footer>
</body>

</html>
"""

_THEME_CARD = """
      <article class="theme-card">
        <div>
          <h2><a href="${path}">${title}</a></h2>
          <p>${description}</p>
        </div>
        <p class="theme-meta">
          ${count} post${plural}
          · Latest: ${latest}
        </p>
      </article>
    """

_POST_CARD = """
      <li class="post-card">
        <div class="post-card__media">
          ${media}
        </div>
        <div class="post-card__body">
          <h3>${date} · <a href="${path}">${title}</a></h3>
          <p>${summary}</p>
        </div>
      </li>
    """

_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
<link href="${site_url}/feed.xml" rel="self" type="application/atom+xml"/>
<link href="${site_url}" rel="alternate" type="text/html"/>
<updated>${updated}</updated>
<id>${site_url}/feed.xml</id>
<title type="html">${site_name}</title>
<subtitle>${subtitle}</subtitle>
<author><name>${author}</name></author>
${entries}
</feed>
"""

_FEED_ENTRY = """
<entry>
<title type="text">${title}</title>
<link href="${site_url}${path}" rel="alternate" type="text/html" title="${title}" />
<published>${day}T00:00:00+00:00</published>
<updated>${day}T00:00:00+00:00</updated>
<id>${site_url}${entry_id}</id>
<author><name>${author}</name></author>
<summary type="html"><![CDATA[${summary}]]></summary>
<content type="html" xml:base="${site_url}${path}"><![CDATA[${content}]]></content>
</entry>
"""


def _utc_day(value: date) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def yyyy_mm_dd(value: date) -> str:
    return _utc_day(value).isoformat()


def time(value: date) -> HtmlString:
    """Render a ``<time>`` element, e.g. ``Mar 7, 2024`` for 2024-03-07 (UTC)."""
    day = _utc_day(value)
    human = f"{day.strftime('%b')} {day.day}, {day.year}"
    return html('<time datetime="${machine}">${human}</time>', machine=day.isoformat(), human=human)


def _feed_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SiteRenderer:
    def __init__(
        self,
        site_url: str | None = None,
        site_name: str = SITE_NAME,
        blurb: str = SITE_BLURB,
        author: str = FEED_AUTHOR,
        feed_limit: int = FEED_LIMIT,
    ):
        self.site_url = (site_url or os.getenv("THEMED_BLOG_SITE_URL") or SITE_URL).rstrip("/")
        self.site_name = site_name
        self.blurb = blurb
        self.author = author
        self.feed_limit = feed_limit

    def base(
        self,
        *,
        content: HtmlString,
        src: str,
        title: str,
        description: str | HtmlString,
        path: str,
        extra_css: str | None = None,
    ) -> HtmlString:
        extra = html('<link rel="stylesheet" href="/css/${name}">', name=extra_css) if extra_css else None
        return html(
            _BASE,
            title=title,
            description=description,
            site_url=self.site_url,
            site_name=self.site_name,
            path=path,
            style=_STYLE,
            extra_css=extra,
            content=content,
            edit_url=REPO_EDIT_URL,
            src=src,
            email=CONTACT_EMAIL,
            github_url=GITHUB_URL,
        )

    def page(self, name: str, content: HtmlString) -> HtmlString:
        return self.base(
            path=f"/{name}",
            title=self.site_name,
            description=self.blurb,
            src=f"/content/{name}.dj",
            extra_css=PAGE_EXTRA_CSS.get(name),
            content=content,
        )

    def post_list(self, groups: Iterable[ThemeGroup]) -> HtmlString:
        cards = []
        for group in groups:
            count = len(group.posts)
            cards.append(
                html(
                    _THEME_CARD,
                    path=group.theme.path,
                    title=group.theme.title,
                    description=group.theme.description,
                    count=count,
                    plural="" if count == 1 else "s",
                    latest=time(group.posts[0].date),
                )
            )

        return self.base(
            path="",
            title=self.site_name,
            description=self.blurb,
            src=LISTING_SRC,
            content=html(
                """
      <section class="theme-grid">
        ${cards}
      </section>
    """,
                cards=cards,
            ),
        )

    def theme_page(self, theme: ThemeConfig, posts: Iterable[Post]) -> HtmlString:
        items = [
            html(
                _POST_CARD,
                media=(
                    html(
                        '<a href="${path}"><img src="${image}" alt="${title} preview"></a>',
                        path=post.path,
                        image=post.image,
                        title=post.title,
                    )
                    if post.image
                    else None
                ),
                date=time(post.date),
                path=post.path,
                title=post.title,
                summary=post.summary,
            )
            for post in posts
        ]

        return self.base(
            path=theme.path,
            title=f"{theme.title} — {self.site_name}",
            description=theme.description,
            src=LISTING_SRC,
            content=html(
                """
      <section class="theme-page">
        <header class="theme-section">
          <h1>${title}</h1>
          <p>${description}</p>
        </header>
        <ul class="post-list">
          ${items}
        </ul>
      </section>
    """,
                title=theme.title,
                description=theme.description,
                items=items,
            ),
        )

    def post(self, post: Post, spellcheck: bool = False) -> HtmlString:
        return self.base(
            src=post.src,
            title=post.title,
            description=post.summary,
            path=post.path,
            content=html(
                """
      <div class="theme-banner">
        <span>Filed under</span>
        <a class="theme-pill" href="${theme_path}">
          ${theme_title}
        </a>
      </div>
      <article ${editable}>
${content}</article>
    """,
                theme_path=post.theme.path,
                theme_title=post.theme.title,
                editable=HtmlString('contentEditable="true"') if spellcheck else None,
                content=post.content,
            ),
        )

    def feed(self, posts: Iterable[Post], updated: datetime | None = None) -> HtmlString:
        entries = [self.feed_entry(post) for post in list(posts)[: self.feed_limit]]
        return html(
            _FEED,
            site_url=self.site_url,
            updated=_feed_timestamp(updated or datetime.now(timezone.utc)),
            site_name=self.site_name,
            subtitle=self.blurb,
            author=self.author,
            entries=entries,
        )

    def feed_entry(self, post: Post) -> HtmlString:
        return html(
            _FEED_ENTRY,
            title=post.title,
            site_url=self.site_url,
            path=post.path,
            day=yyyy_mm_dd(post.date),
            entry_id=post.path.replace(".html", "", 1),
            author=self.author,
            summary=post.summary,
            content=post.content,
        )
