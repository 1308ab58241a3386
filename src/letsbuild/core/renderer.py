"""Markdown rendering with caching.

Wraps the mistune converter with file-based caching and mtime tracking.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import mistune

from letsbuild.core.cache import FileCache
from letsbuild.core.posts import Post

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Result of rendering a post."""

    html: str
    source_path: Path
    from_cache: bool


class PostRenderer:
    """Renders post bodies to HTML with caching.

    Cache entries are keyed by permalink and invalidated when the
    source file mtime changes.
    """

    def __init__(self, cache: FileCache) -> None:
        """Initialize renderer.

        Args:
            cache: FileCache instance for caching rendered content
        """
        self._cache = cache
        self._markdown = mistune.Markdown(renderer=mistune.HTMLRenderer(escape=False))

    @property
    def cache(self) -> FileCache:
        """Cache used for rendered HTML."""
        return self._cache

    def render(self, post: Post) -> RenderResult:
        """Render a post body to HTML.

        Args:
            post: Post to render

        Returns:
            RenderResult with HTML

        Raises:
            FileNotFoundError: If the post source file no longer exists
        """
        source_path = post.source_path
        if not source_path.exists():
            raise FileNotFoundError(f"Source file not found: {source_path}")

        source_mtime = source_path.stat().st_mtime

        if post.permalink:
            cached = self._cache.get(post.permalink, source_mtime)
            if cached is not None:
                return RenderResult(html=cached.html, source_path=source_path, from_cache=True)

        html = self.convert(post.body)
        if post.permalink:
            self._cache.set(post.permalink, html, source_mtime)

        return RenderResult(html=html, source_path=source_path, from_cache=False)

    def convert(self, markdown_text: str) -> str:
        """Convert markdown text to HTML without caching."""
        logger.debug(f"Converting {len(markdown_text)} characters of markdown")
        html = self._markdown(markdown_text)
        return html if isinstance(html, str) else ""

    def invalidate(self, post: Post) -> None:
        """Invalidate cached content for a post.

        Args:
            post: Post to invalidate
        """
        if post.permalink:
            self._cache.invalidate(post.permalink)
