import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from pathlib import Path

import yaml

from .exceptions import ConfigurationError, MalformedDocumentError


@dataclass(frozen=True)
class PostRecord:
    title: str
    date: datetime
    description: str = ""
    source: str = ""
    draft: bool = False
    path: Path | None = None


# ----------------------------
# Front matter
# ----------------------------
def split_front_matter(text, path="<string>"):
    """Split a markdown document into its YAML front matter and body.

    The document must open with a ``---`` line and the block must be closed
    by another ``---`` line. Returns ``(metadata, body)``.
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != "---":
        raise MalformedDocumentError(path, "missing front matter block")

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            break
    else:
        raise MalformedDocumentError(path, "front matter block is not closed")

    try:
        metadata = yaml.safe_load("".join(lines[1:end])) or {}
    except yaml.YAMLError as e:
        raise MalformedDocumentError(path, f"front matter is not valid YAML ({e})") from e
    except ValueError as e:
        # PyYAML raises plain ValueError for timestamps like 2024-13-45
        raise MalformedDocumentError(path, f"unparseable date ({e})") from e

    if not isinstance(metadata, dict):
        raise MalformedDocumentError(path, "front matter must be a mapping")

    return metadata, "".join(lines[end + 1 :]).strip()


def parse_date(value, path="<string>") -> datetime:
    """Turn a front matter date into an aware UTC datetime.

    PyYAML already converts unquoted ISO dates to date/datetime objects;
    quoted ones arrive as strings. Bare dates mean midnight UTC.
    """
    if value is None or value == "":
        raise MalformedDocumentError(path, "missing date")

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise MalformedDocumentError(path, f"unparseable date {value!r}") from None
    else:
        raise MalformedDocumentError(path, f"unparseable date {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# ----------------------------
# Loading
# ----------------------------
def load_post(path) -> PostRecord:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise MalformedDocumentError(path, "not UTF-8 encoded") from None

    metadata, _ = split_front_matter(text, path)

    title = metadata.get("title")
    if title is None or title == "":
        raise MalformedDocumentError(path, "missing title")
    if not isinstance(title, str) or not title.strip():
        raise MalformedDocumentError(path, f"title must be a non-empty string, got {title!r}")

    description = metadata.get("description")
    if description is None:
        description = ""

    draft = metadata.get("draft", False)
    if not isinstance(draft, bool):
        raise MalformedDocumentError(path, f"draft must be true or false, got {draft!r}")

    return PostRecord(
        title=title.strip(),
        date=parse_date(metadata.get("date"), path),
        description=str(description).strip(),
        source=path.stem,
        draft=draft,
        path=path,
    )


def load_posts(directory):
    """Load every post in ``directory``. The result is unordered."""
    directory = Path(directory)
    if not directory.is_dir():
        raise ConfigurationError(f"Posts directory '{directory}' not found.")

    md_files = [f for f in directory.glob("*.md") if not f.name.startswith("README")]
    if not md_files:
        logging.warning(f"No Markdown files found in {directory}.")

    posts = [load_post(f) for f in md_files]
    logging.debug(f"Loaded {len(posts)} post(s) from {directory}")
    return posts
