"""Blog post loading.

Reads markdown posts with optional YAML front matter. Dates come from the
``YYYY-MM-DD-`` filename prefix, titles and descriptions from front matter
with fallbacks derived from the filename and body.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

import frontmatter
import yaml

from letsbuild.core.permalink import map_file_path_to_url
from letsbuild.core.types import URLPath

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"
SKIPPED_SUFFIX = ".markdown"

DATED_STEM_PATTERN = re.compile(r"^([0-9]{4}-[0-9]{2}-[0-9]{2})-(.+)$", re.ASCII | re.DOTALL)

DESCRIPTION_MAX_LENGTH = 150
DESCRIPTION_ELLIPSIS = "..."


@dataclass(frozen=True)
class Post:
    """Blog post data."""

    title: str
    date: date | None
    source_path: Path
    permalink: URLPath
    description: str
    body: str

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "permalink": f"/{self.permalink}",
            "description": self.description,
        }


def load_post(source_path: Path) -> Post:
    """Load a post from a markdown file.

    Args:
        source_path: Path to the markdown source

    Returns:
        Post with metadata resolved

    Raises:
        FileNotFoundError: If the source file doesn't exist
    """
    if not source_path.is_file():
        raise FileNotFoundError(f"Post file not found: {source_path}")

    text = source_path.read_text(encoding="utf-8")
    metadata, body = _split_front_matter(text, source_path)

    post_date, filename_title = _parse_stem(source_path.stem)

    title = _metadata_str(metadata, "title") or filename_title
    description = _metadata_str(metadata, "description") or extract_description(body)

    return Post(
        title=title,
        date=post_date,
        source_path=source_path,
        permalink=map_file_path_to_url(source_path.as_posix()),
        description=description,
        body=body,
    )


def iter_post_files(source_dir: Path) -> Iterator[Path]:
    """Yield markdown post files directly inside source_dir, sorted by name."""
    for path in sorted(source_dir.iterdir()):
        if not path.is_file():
            continue
        if path.name.endswith(POST_SUFFIX):
            yield path
        elif path.name.endswith(SKIPPED_SUFFIX):
            logger.debug(f"Skipping {path}: only {POST_SUFFIX} files are posts")


def extract_description(text: str) -> str:
    """Extract a short description from markdown content.

    Markdown emphasis and heading markers are dropped and the first
    non-empty paragraph is used, truncated to fit DESCRIPTION_MAX_LENGTH.

    Args:
        text: Markdown body

    Returns:
        Plain text description, empty if the body is empty
    """
    plain = text.replace("#", "").replace("*", "").replace("_", "")

    for paragraph in plain.split("\n\n"):
        paragraph = paragraph.strip()
        if paragraph:
            return _truncate(paragraph)

    return _truncate(plain.strip())


def _truncate(text: str) -> str:
    if len(text) <= DESCRIPTION_MAX_LENGTH:
        return text
    keep = DESCRIPTION_MAX_LENGTH - len(DESCRIPTION_ELLIPSIS)
    return text[:keep].rstrip() + DESCRIPTION_ELLIPSIS


def _split_front_matter(text: str, source_path: Path) -> tuple[dict[str, object], str]:
    """Split front matter from body, falling back to the raw text on bad YAML."""
    try:
        metadata, body = frontmatter.parse(text)
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed front matter in {source_path}: {e}")
        return {}, text
    return dict(metadata), body


def _parse_stem(stem: str) -> tuple[date | None, str]:
    """Extract the date and a human title from a filename stem.

    Returns:
        Tuple of (date or None, title with dashes replaced by spaces)
    """
    match = DATED_STEM_PATTERN.match(stem)
    if match is None:
        return None, stem.replace("-", " ")

    date_text, slug = match.groups()
    try:
        post_date: date | None = datetime.strptime(date_text, "%Y-%m-%d").date()
    except ValueError:
        post_date = None

    return post_date, slug.replace("-", " ")


def _metadata_str(metadata: dict[str, object], key: str) -> str:
    value = metadata.get(key)
    if value is None:
        return ""
    return str(value).strip()
