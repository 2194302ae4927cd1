import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .exceptions import ConfigurationError

SITE_FILE = "site.yml"

# === Defaults ===
DEFAULTS = {
    "site_url": None,
    "base_path": "/Evernote",
    "title": "Jeffrey0117 技術筆記",
    "description": "紀錄開發專案時學到的技術、踩過的坑、一些想法。",
    "language": "zh-TW",
    "posts_dir": "src/pages/posts",
    "output": "dist/rss.xml",
    "draft_marker": "（必填）",
}

PATH_KEYS = ("posts_dir", "output")


@dataclass(frozen=True)
class SiteConfig:
    site_url: str | None = DEFAULTS["site_url"]
    base_path: str = DEFAULTS["base_path"]
    title: str = DEFAULTS["title"]
    description: str = DEFAULTS["description"]
    language: str = DEFAULTS["language"]
    posts_dir: Path = Path(DEFAULTS["posts_dir"])
    output: Path = Path(DEFAULTS["output"])
    draft_marker: str = DEFAULTS["draft_marker"]

    def require_site_url(self) -> str:
        """Return the site URL without a trailing slash.

        Links in the feed are absolute, so a feed built without a site URL
        would point nowhere. Refuse instead.
        """
        if not self.site_url or not str(self.site_url).strip():
            raise ConfigurationError(
                "site_url is not configured; set it in site.yml or pass --site-url"
            )
        return str(self.site_url).strip().rstrip("/")

    @property
    def base_prefix(self) -> str:
        base = self.base_path.strip("/")
        return f"/{base}" if base else ""

    @property
    def posts_prefix(self) -> str:
        return f"{self.base_prefix}/posts/"


def _known(values):
    allowed = {f.name for f in fields(SiteConfig)}
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ConfigurationError(f"Unknown configuration key(s): {', '.join(unknown)}")
    return {k: v for k, v in values.items() if v is not None}


def _coerce(values):
    for key in PATH_KEYS:
        if key in values:
            values[key] = Path(values[key])
    return values


def read_site_file(path):
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise ConfigurationError(f"Site file {path} not found.") from None
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Site file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Site file {path} must contain a mapping.")

    # Paths in a site file are relative to the file, not the working directory
    for key in PATH_KEYS:
        if data.get(key) is not None and not Path(data[key]).is_absolute():
            data[key] = path.parent / data[key]
    return data


def load_config(path=None, **overrides) -> SiteConfig:
    """Build a SiteConfig from defaults, an optional site file and overrides.

    Later sources win: DEFAULTS, then the YAML site file, then keyword
    overrides. Overrides that are None are ignored so CLI options that were
    not given leave the file values alone.
    """
    values = dict(DEFAULTS)

    if path is None and Path(SITE_FILE).exists():
        path = SITE_FILE
    if path is not None:
        logging.debug(f"Reading site configuration from {path}")
        values.update(_known(read_site_file(path)))

    values.update(_known(overrides))
    return SiteConfig(**_coerce(values))
