"""
Pytest fixtures for feed tests.
"""

import pytest

from blogfeed.config import SiteConfig


@pytest.fixture
def posts_dir(tmp_path):
    """An empty posts directory."""
    d = tmp_path / "posts"
    d.mkdir()
    return d


@pytest.fixture
def write_post(posts_dir):
    """Write a markdown post with front matter and return its path."""

    def _write(name, title=None, date=None, description=None, draft=None, body="Body text.\n"):
        lines = ["---"]
        if title is not None:
            lines.append(f'title: "{title}"')
        if date is not None:
            lines.append(f"date: {date}")
        if description is not None:
            lines.append(f'description: "{description}"')
        if draft is not None:
            lines.append(f"draft: {draft}")
        lines.append("---")
        path = posts_dir / f"{name}.md"
        path.write_text("\n".join(lines) + "\n\n" + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config(tmp_path, posts_dir):
    """Site configuration pointing at the temporary posts directory."""
    return SiteConfig(
        site_url="https://example.com",
        posts_dir=posts_dir,
        output=tmp_path / "dist" / "rss.xml",
    )
