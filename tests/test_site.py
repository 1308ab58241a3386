"""Tests for Site and SiteLoader."""

from datetime import date
from pathlib import Path

import pytest
from letsbuild.core.posts import Post
from letsbuild.core.site import Site, SiteLoader
from letsbuild.core.types import URLPath


def make_post(permalink: str, post_date: date | None = None, title: str = "Post") -> Post:
    return Post(
        title=title,
        date=post_date,
        source_path=Path(f"{permalink.replace('/', '-')}.md"),
        permalink=URLPath(permalink),
        description="",
        body="",
    )


class TestSite:
    """Tests for Site class."""

    def test__get_post__returns_post(self) -> None:
        """Get post by permalink."""
        post = make_post("2021/05/03/hello")
        site = Site([post])

        assert site.get_post("2021/05/03/hello") is post

    def test__get_post__normalizes_slashes(self) -> None:
        """Ignore leading and trailing slashes in lookups."""
        post = make_post("about")
        site = Site([post])

        assert site.get_post("/about") is post
        assert site.get_post("/about/") is post

    def test__trailing_slash_permalink__is_reachable(self) -> None:
        """Index permalinks ending in a slash under their normalized form."""
        post = make_post("2021/05/03/")
        site = Site([post])

        assert site.get_post("2021/05/03") is post
        assert site.get_post("/2021/05/03/") is post

    def test__get_post__not_found__returns_none(self) -> None:
        """Return None when no post has the permalink."""
        site = Site([make_post("about")])

        assert site.get_post("/nonexistent") is None

    def test__latest__sorted_newest_first(self) -> None:
        """Order dated posts newest first."""
        old = make_post("old", date(2020, 1, 1))
        new = make_post("new", date(2023, 1, 1))
        middle = make_post("middle", date(2021, 6, 1))
        site = Site([old, new, middle])

        assert site.latest() == [new, middle, old]

    def test__latest__omits_undated_posts(self) -> None:
        """Leave undated posts out of listings."""
        dated = make_post("dated", date(2020, 1, 1))
        undated = make_post("undated")
        site = Site([dated, undated])

        assert site.latest() == [dated]
        assert site.get_post("undated") is undated

    def test__duplicate_permalink__first_post_wins(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Keep the first post and log later duplicates."""
        first = make_post("about", title="First")
        second = make_post("about", title="Second")

        site = Site([first, second])

        assert len(site) == 1
        assert site.get_post("about") is first
        assert "already used" in caplog.text

    def test__posts__keeps_load_order(self) -> None:
        """Return posts in the order given."""
        a, b = make_post("a"), make_post("b")

        assert Site([a, b]).posts == [a, b]


class TestSiteLoader:
    """Tests for SiteLoader class."""

    def test__load__reads_posts(self, content_dir: Path) -> None:
        """Load every markdown post in the content directory."""
        (content_dir / "2021-05-03-hello.md").write_text("---\ntitle: Hello\n---\nHi.")
        (content_dir / "about.md").write_text("About me.")

        site = SiteLoader(content_dir).load()

        assert len(site) == 2
        post = site.get_post("2021/05/03/hello")
        assert post is not None
        assert post.title == "Hello"
        assert site.get_post("about") is not None

    def test__load__returns_cached_site(self, content_dir: Path) -> None:
        """Reuse the loaded site until invalidated."""
        loader = SiteLoader(content_dir)

        assert loader.load() is loader.load()

    def test__invalidate__reloads_posts(self, content_dir: Path) -> None:
        """Pick up new posts after invalidation."""
        loader = SiteLoader(content_dir)
        assert len(loader.load()) == 0

        (content_dir / "new.md").write_text("New post.")
        assert len(loader.load()) == 0

        loader.invalidate()
        assert len(loader.load()) == 1

    def test__unreadable_post__is_skipped(
        self, content_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Skip posts that aren't valid UTF-8 and log the error."""
        (content_dir / "good.md").write_text("Good.")
        (content_dir / "bad.md").write_bytes(b"\xff\xfe\x00bad")

        site = SiteLoader(content_dir).load()

        assert len(site) == 1
        assert site.get_post("good") is not None
        assert "Error reading post" in caplog.text

    def test__missing_directory__raises_file_not_found(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for a missing content directory."""
        loader = SiteLoader(tmp_path / "missing")

        with pytest.raises(FileNotFoundError, match="Content directory not found"):
            loader.load()

    def test__source_dir__exposed(self, content_dir: Path) -> None:
        """Expose the content directory."""
        assert SiteLoader(content_dir).source_dir == content_dir
