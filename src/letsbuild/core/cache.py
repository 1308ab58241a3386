"""File-based cache with mtime invalidation.

Cache structure:
    .cache/
    ├── pages/
    │   └── 2021/
    │       └── 05/
    │           └── 03/
    │               └── hello-world.html   # Rendered HTML
    └── meta/
        └── 2021/
            └── 05/
                └── 03/
                    └── hello-world.json   # Source mtime
"""

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

logger = logging.getLogger(__name__)


class CachedMetadata(TypedDict):
    """Cached page metadata structure."""

    source_mtime: float


@dataclass
class CacheEntry:
    """Result of cache lookup."""

    html: str
    meta: CachedMetadata


class FileCache:
    """File-based cache for rendered post HTML.

    Uses source file mtime for invalidation. Cache entries are considered valid
    when the cached mtime matches the current source file mtime.
    """

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"

    def __init__(self, cache_dir: Path) -> None:
        """Initialize cache with directory path.

        Args:
            cache_dir: Root directory for cache files (e.g., .cache/)
        """
        self._cache_dir = cache_dir
        self._pages_dir = cache_dir / "pages"
        self._meta_dir = cache_dir / "meta"

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    def _ensure_cache_dir(self) -> None:
        """Create cache directory with .gitignore if it doesn't exist."""
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = self._cache_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")

    def get(self, path: str, source_mtime: float) -> CacheEntry | None:
        """Retrieve cached entry if valid.

        Args:
            path: Post permalink (e.g., "2021/05/03/hello-world")
            source_mtime: Current mtime of source file

        Returns:
            CacheEntry if cache hit and valid, None otherwise
        """
        entry_paths = self._entry_paths(path)
        if entry_paths is None:
            return None
        html_path, meta_path = entry_paths

        if not html_path.exists() or not meta_path.exists():
            return None

        meta = self._read_meta(meta_path)
        if meta is None:
            return None

        if meta["source_mtime"] != source_mtime:
            return None

        try:
            html = html_path.read_text(encoding="utf-8")
        except OSError:
            return None

        return CacheEntry(html=html, meta=meta)

    def set(self, path: str, html: str, source_mtime: float) -> None:
        """Store entry in cache.

        Args:
            path: Post permalink (e.g., "2021/05/03/hello-world")
            html: Rendered HTML content
            source_mtime: Source file mtime for invalidation
        """
        entry_paths = self._entry_paths(path)
        if entry_paths is None:
            logger.warning(f"Not caching {path!r}: path is outside the cache directory")
            return
        html_path, meta_path = entry_paths

        self._ensure_cache_dir()

        html_path.parent.mkdir(parents=True, exist_ok=True)
        meta_path.parent.mkdir(parents=True, exist_ok=True)

        html_path.write_text(html, encoding="utf-8")

        meta: CachedMetadata = {"source_mtime": source_mtime}
        meta_path.write_text(json.dumps(meta), encoding="utf-8")

    def invalidate(self, path: str) -> None:
        """Remove entry from cache.

        Args:
            path: Post permalink to invalidate
        """
        entry_paths = self._entry_paths(path)
        if entry_paths is None:
            return
        html_path, meta_path = entry_paths

        if html_path.exists():
            html_path.unlink()
        if meta_path.exists():
            meta_path.unlink()

    def clear(self) -> None:
        """Remove all cached entries."""
        if self._pages_dir.exists():
            shutil.rmtree(self._pages_dir)
        if self._meta_dir.exists():
            shutil.rmtree(self._meta_dir)

    def _entry_paths(self, path: str) -> tuple[Path, Path] | None:
        """Return (html_path, meta_path) for a permalink.

        Returns None when either file would land outside its cache subdirectory.
        """
        html_path = self._pages_dir / f"{path}.html"
        meta_path = self._meta_dir / f"{path}.json"

        if not html_path.resolve().is_relative_to(self._pages_dir.resolve()):
            return None
        if not meta_path.resolve().is_relative_to(self._meta_dir.resolve()):
            return None
        return html_path, meta_path

    def _read_meta(self, meta_path: Path) -> CachedMetadata | None:
        """Read and validate metadata file.

        Args:
            meta_path: Path to metadata JSON file

        Returns:
            CachedMetadata if valid, None otherwise
        """
        try:
            data = json.loads(meta_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None
        if "source_mtime" not in data:
            return None

        return CachedMetadata(source_mtime=data["source_mtime"])
