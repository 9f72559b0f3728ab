#!/usr/bin/env python3
"""Render the themed blog from a posts manifest."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from themed_blog.publish import SitePublisher, load_manifest


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render themed blog pages and Atom feed")
    parser.add_argument("--manifest", default="content/posts.json")
    parser.add_argument("--site-dir", default="out/www")
    parser.add_argument("--site-url", default=None)
    parser.add_argument("--spellcheck", action="store_true", help="Make post bodies contentEditable")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    manifest_path = Path(args.manifest)
    if not manifest_path.exists():
        raise SystemExit(f"Manifest file not found: {manifest_path}")

    posts, pages = load_manifest(manifest_path)
    publisher = SitePublisher(site_dir=args.site_dir, site_url=args.site_url)
    summary = publisher.publish(posts, pages, spellcheck=args.spellcheck)
    print(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
