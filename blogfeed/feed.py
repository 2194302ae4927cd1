import html
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from email.utils import format_datetime
from pathlib import Path
from urllib.parse import quote, unquote

from .posts import load_posts

FEED_CONTENT_TYPE = "application/rss+xml; charset=utf-8"

# Characters XML 1.0 does not allow, even as character references
INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _text(value) -> str:
    return html.escape(INVALID_XML_CHARS.sub("", value))


@dataclass(frozen=True)
class FeedItem:
    title: str
    pub_date: datetime
    description: str
    link: str


@dataclass(frozen=True)
class FeedDocument:
    title: str
    description: str
    site_url: str
    language: str
    self_link: str
    items: tuple = ()


# ----------------------------
# Filter, order, link
# ----------------------------
def is_draft(post, marker="") -> bool:
    if post.draft:
        return True
    return bool(marker) and marker in post.title


def sort_posts(posts):
    """Newest first; equal dates fall back to the source name, ascending."""
    by_source = sorted(posts, key=lambda p: p.source)
    return sorted(by_source, key=lambda p: p.date, reverse=True)


def _slug(source):
    name = source.rsplit("/", 1)[-1]
    return name[: -len(".md")] if name.endswith(".md") else name


def post_link(config, source) -> str:
    # Percent-encode everything, so spaces, "#" and CJK names stay in the path
    slug = quote(_slug(source), safe="")
    return f"{config.require_site_url()}{config.posts_prefix}{slug}/"


def slug_from_link(config, link) -> str:
    prefix = f"{config.require_site_url()}{config.posts_prefix}"
    if not link.startswith(prefix) or not link.endswith("/"):
        raise ValueError(f"{link} is not a post link under {prefix}")
    slug = link[len(prefix) : -1]
    if not slug or "/" in slug:
        raise ValueError(f"{link} is not a post link under {prefix}")
    return unquote(slug)


# ----------------------------
# Build
# ----------------------------
def build_feed(posts, config) -> FeedDocument:
    site_url = config.require_site_url()

    published = [p for p in posts if not is_draft(p, config.draft_marker)]
    skipped = len(posts) - len(published)

    items = tuple(
        FeedItem(
            title=post.title,
            pub_date=post.date,
            description=post.description or "",
            link=post_link(config, post.source),
        )
        for post in sort_posts(published)
    )
    logging.info(f"{len(items)} post(s) in feed, {skipped} draft(s) skipped.")

    return FeedDocument(
        title=config.title,
        description=config.description,
        site_url=site_url + "/",
        language=config.language,
        self_link=f"{site_url}{config.base_prefix}/rss.xml",
        items=items,
    )


def render_rss(document) -> str:
    """Serialize a FeedDocument as RSS 2.0.

    Nothing time-dependent is written (no lastBuildDate), so the same
    document always renders to the same bytes.
    """
    out = ['<?xml version="1.0" encoding="UTF-8" ?>\n']
    out.append('<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">\n<channel>\n')
    out.append(f"<title>{_text(document.title)}</title>\n")
    out.append(f"<link>{_text(document.site_url)}</link>\n")
    out.append(f"<description>{_text(document.description)}</description>\n")
    out.append(f"<language>{_text(document.language)}</language>\n")
    out.append(
        f'<atom:link href="{_text(document.self_link)}" rel="self" type="application/rss+xml" />\n'
    )

    for item in document.items:
        link = _text(item.link)
        out.append("<item>\n")
        out.append(f"<title>{_text(item.title)}</title>\n")
        out.append(f"<link>{link}</link>\n")
        out.append(f'<guid isPermaLink="true">{link}</guid>\n')
        out.append(f"<description>{_text(item.description)}</description>\n")
        out.append(f"<pubDate>{format_datetime(item.pub_date)}</pubDate>\n")
        out.append("</item>\n")

    out.append("</channel>\n</rss>\n")
    return "".join(out)


def generate_feed(config) -> str:
    # Fail on configuration before touching any content
    config.require_site_url()
    posts = load_posts(config.posts_dir)
    return render_rss(build_feed(posts, config))


def write_feed(config, output=None) -> Path:
    output = Path(output or config.output)
    rss = generate_feed(config)

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(rss)

    logging.info(f"RSS feed generated → {output}")
    return output
