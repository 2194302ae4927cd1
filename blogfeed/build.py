#!/usr/bin/env python3
import argparse
import logging
import time

from .config import load_config
from .exceptions import BlogFeedError
from .feed import write_feed


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="blog-feed", description="Build the blog's RSS feed from its markdown posts."
    )
    parser.add_argument("--config", help="YAML site file (default: ./site.yml if present)")
    parser.add_argument("--site-url", help="absolute site URL, e.g. https://example.com")
    parser.add_argument("--base-path", help="path the site is mounted under, e.g. /Evernote")
    parser.add_argument("--posts-dir", help="directory holding the markdown posts")
    parser.add_argument("--output", help="where to write rss.xml")
    parser.add_argument("--serve", action="store_true", help="serve /rss.xml instead of writing a file")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


# ----------------------------
# Entry point
# ----------------------------
def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")
    logging.info("Starting feed build.")
    start = time.time()

    try:
        config = load_config(
            args.config,
            site_url=args.site_url,
            base_path=args.base_path,
            posts_dir=args.posts_dir,
            output=args.output,
        )
        if args.serve:
            from .server import create_app

            config.require_site_url()
            create_app(config).run(host=args.host, port=args.port)
            return 0
        write_feed(config)
    except BlogFeedError as e:
        logging.error(f"Build failed: {e}")
        return 1

    logging.info(f"Total process completed in {time.time() - start:.2f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
