"""Site structure for blog posts.

Holds the loaded posts with permalink lookups and the newest-first
listing used by index pages. SiteLoader builds the site from a content
directory and caches it until invalidated.
"""

import logging
from operator import attrgetter
from pathlib import Path

from letsbuild.core.posts import Post, iter_post_files, load_post

logger = logging.getLogger(__name__)


class Site:
    """Blog posts with O(1) permalink lookups.

    Posts keep their load order. The first post wins when two
    source files map to the same permalink.
    """

    __slots__ = ("_permalink_index", "_posts")

    def __init__(self, posts: list[Post]) -> None:
        """Initialize site structure.

        Args:
            posts: Loaded posts in source order
        """
        self._posts: list[Post] = []
        self._permalink_index: dict[str, Post] = {}
        for post in posts:
            key = post.permalink.strip("/")
            existing = self._permalink_index.get(key)
            if existing is not None:
                logger.warning(
                    f"Skipping {post.source_path}: permalink /{post.permalink} "
                    f"already used by {existing.source_path}"
                )
                continue
            self._posts.append(post)
            self._permalink_index[key] = post

    def __len__(self) -> int:
        return len(self._posts)

    @property
    def posts(self) -> list[Post]:
        """All posts in load order."""
        return list(self._posts)

    def get_post(self, path: str) -> Post | None:
        """Get post by permalink.

        Args:
            path: Permalink with or without surrounding slashes
                  (e.g., "2021/05/03/hello" or "/2021/05/03/hello/")

        Returns:
            Post if found, None otherwise
        """
        return self._permalink_index.get(path.strip("/"))

    def latest(self) -> list[Post]:
        """Return dated posts, newest first.

        Posts without a date are left out of listings but stay
        reachable through get_post().
        """
        dated = [post for post in self._posts if post.date is not None]
        return sorted(dated, key=attrgetter("date"), reverse=True)


class SiteLoader:
    """Loads a Site from a content directory and caches it."""

    def __init__(self, source_dir: Path) -> None:
        """Initialize loader.

        Args:
            source_dir: Directory containing markdown posts
        """
        self._source_dir = source_dir
        self._cached_site: Site | None = None

    @property
    def source_dir(self) -> Path:
        """Directory containing markdown posts."""
        return self._source_dir

    def load(self) -> Site:
        """Load site, reusing the cached instance when available.

        Posts that fail to load are logged and skipped.

        Raises:
            FileNotFoundError: If the content directory doesn't exist
        """
        if self._cached_site is not None:
            return self._cached_site

        if not self._source_dir.is_dir():
            raise FileNotFoundError(f"Content directory not found at {self._source_dir}")

        posts: list[Post] = []
        for source_path in iter_post_files(self._source_dir):
            try:
                posts.append(load_post(source_path))
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Error reading post {source_path}: {e}")

        logger.debug(f"Loaded {len(posts)} posts from {self._source_dir}")
        self._cached_site = Site(posts)
        return self._cached_site

    def invalidate(self) -> None:
        """Drop the cached site so the next load() rereads the directory."""
        self._cached_site = None
