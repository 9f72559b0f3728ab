from __future__ import annotations

import os
import unittest
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

from themed_blog.markup import HtmlString
from themed_blog.models import Post, ThemeGroup
from themed_blog.templates import SiteRenderer, time
from themed_blog.themes import resolve_theme, theme_by_key


def _post(**overrides) -> Post:
    data = dict(
        title="Tips & <Tricks>",
        summary="a < b & c",
        date=date(2024, 3, 7),
        path="/2024/03/07/moe.html",
        src="/content/posts/moe.dj",
        theme=resolve_theme("moe"),
        content=HtmlString("<p>Body</p>"),
    )
    data.update(overrides)
    return Post(**data)


class TemplatesUnitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.renderer = SiteRenderer(site_url="https://example.com/")

    def test_site_url_from_environment(self) -> None:
        with patch.dict(os.environ, {"THEMED_BLOG_SITE_URL": "https://env.example/blog/"}):
            self.assertEqual(SiteRenderer().site_url, "https://env.example/blog")
        self.assertEqual(self.renderer.site_url, "https://example.com")

    def test_time_element(self) -> None:
        self.assertEqual(str(time(date(2024, 3, 7))), '<time datetime="2024-03-07">Mar 7, 2024</time>')
        late_evening = datetime(2024, 3, 7, 23, 30, tzinfo=timezone(timedelta(hours=-3)))
        self.assertEqual(str(time(late_evening)), '<time datetime="2024-03-08">Mar 8, 2024</time>')

    def test_post_page_escapes_data_fields(self) -> None:
        out = str(self.renderer.post(_post()))
        self.assertIn("<title>Tips &amp; &lt;Tricks&gt;</title>", out)
        self.assertIn('<meta name="description" content="a &lt; b &amp; c">', out)
        self.assertNotIn("<Tricks>", out)
        self.assertNotIn("a < b", out)
        self.assertIn("<p>Body</p></article>", out)
        self.assertIn('<link rel="canonical" href="https://example.com/2024/03/07/moe.html">', out)
        self.assertIn(
            "https://github.com/mbottoni/mbottoni.github.io/edit/master/content/posts/moe.dj",
            out,
        )

    def test_post_page_mentions_theme_once(self) -> None:
        out = str(self.renderer.post(_post()))
        self.assertEqual(out.count("Frontier LLMs &amp; Architectures"), 1)
        self.assertEqual(out.count("/themes/frontier.html"), 1)
        self.assertIn("<span>Filed under</span>", out)

    def test_post_spellcheck_toggles_content_editable(self) -> None:
        self.assertNotIn("contentEditable", str(self.renderer.post(_post())))
        self.assertIn('<article contentEditable="true">', str(self.renderer.post(_post(), spellcheck=True)))

    def test_post_list_cards(self) -> None:
        frontier = theme_by_key("frontier")
        graph_rl = theme_by_key("graph_rl")
        groups = [
            ThemeGroup(theme=frontier, posts=[_post(date=date(2024, 5, 2)), _post(date=date(2023, 1, 1))]),
            ThemeGroup(theme=graph_rl, posts=[_post(date=date(2022, 12, 25))]),
        ]
        out = str(self.renderer.post_list(groups))
        self.assertIn('<h2><a href="/themes/frontier.html">Frontier LLMs &amp; Architectures</a></h2>', out)
        self.assertIn("2 posts\n", out)
        self.assertIn("1 post\n", out)
        self.assertIn('Latest: <time datetime="2024-05-02">May 2, 2024</time>', out)
        self.assertIn('Latest: <time datetime="2022-12-25">Dec 25, 2022</time>', out)
        self.assertIn('<link rel="canonical" href="https://example.com">', out)
        self.assertIn("<title>mbottoni</title>", out)
        self.assertIn(
            '<a href="https://github.com/mbottoni/mbottoni.github.io/edit/master/src/templates.ts">',
            out,
        )

    def test_theme_page_lists_posts(self) -> None:
        theme = theme_by_key("graph_rl")
        posts = [
            _post(title="Swarm <1>", path="/swarm.html", image="/img/swarm.png", theme=theme),
            _post(title="GCN", path="/gcn.html", theme=theme),
        ]
        out = str(self.renderer.theme_page(theme, posts))
        self.assertIn("<title>Graphs, Agents &amp; RL — mbottoni</title>", out)
        self.assertIn('<link rel="canonical" href="https://example.com/themes/graph-rl.html">', out)
        self.assertIn('<a href="/swarm.html"><img src="/img/swarm.png" alt="Swarm &lt;1&gt; preview"></a>', out)
        self.assertEqual(out.count("<img"), 1)
        self.assertEqual(out.count('<li class="post-card">'), 2)
        self.assertIn('<a href="/gcn.html">GCN</a>', out)

    def test_page_uses_extra_css_for_resume(self) -> None:
        resume = str(self.renderer.page("resume", HtmlString("<h1>CV</h1>")))
        self.assertIn('<link rel="stylesheet" href="/css/resume.css">', resume)
        self.assertIn('<link rel="canonical" href="https://example.com/resume">', resume)
        self.assertIn("/edit/master/content/resume.dj", resume)
        self.assertIn("<h1>CV</h1>", resume)
        about = str(self.renderer.page("about", HtmlString("<h1>Hi</h1>")))
        self.assertNotIn("resume.css", about)

    def test_feed_keeps_first_ten_posts_in_order(self) -> None:
        posts = [_post(title=f"Post {n}", path=f"/2024/01/01/p{n}.html") for n in range(12)]
        out = str(self.renderer.feed(posts, updated=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)))
        self.assertTrue(out.startswith('<?xml version="1.0" encoding="utf-8"?>'))
        self.assertEqual(out.count("<entry>"), 10)
        self.assertIn("<updated>2024-01-02T03:04:05.000Z</updated>", out)
        self.assertNotIn('<title type="text">Post 10</title>', out)
        self.assertNotIn('<title type="text">Post 11</title>', out)
        positions = [out.index(f'<title type="text">Post {n}</title>') for n in range(10)]
        self.assertEqual(positions, sorted(positions))

    def test_feed_entry_fields(self) -> None:
        out = str(self.renderer.feed_entry(_post()))
        self.assertIn('<title type="text">Tips &amp; &lt;Tricks&gt;</title>', out)
        self.assertIn('<link href="https://example.com/2024/03/07/moe.html" rel="alternate" type="text/html"', out)
        self.assertIn("<published>2024-03-07T00:00:00+00:00</published>", out)
        self.assertIn("<updated>2024-03-07T00:00:00+00:00</updated>", out)
        self.assertIn("<id>https://example.com/2024/03/07/moe</id>", out)
        self.assertIn("<author><name>Alex Kladov</name></author>", out)
        self.assertIn('<summary type="html"><![CDATA[a &lt; b &amp; c]]></summary>', out)
        self.assertIn('xml:base="https://example.com/2024/03/07/moe.html"><![CDATA[<p>Body</p>]]></content>', out)


if __name__ == "__main__":
    unittest.main()
