"""Tests for static site generation."""

from pathlib import Path

import pytest
from letsbuild.core.cache import FileCache
from letsbuild.core.generator import SiteGenerator
from letsbuild.core.posts import load_post
from letsbuild.core.renderer import PostRenderer


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    return tmp_path / "build"


@pytest.fixture
def generator(
    tmp_path: Path, content_dir: Path, build_dir: Path, template_path: Path
) -> SiteGenerator:
    renderer = PostRenderer(FileCache(tmp_path / ".cache"))
    return SiteGenerator(
        content_dir,
        build_dir,
        template_path,
        renderer,
        site_title="Test Blog",
        intro="<p>Welcome.</p>",
    )


class TestSiteGeneratorGenerate:
    """Tests for SiteGenerator.generate()."""

    def test__posts__written_at_permalinks(
        self, content_dir: Path, build_dir: Path, generator: SiteGenerator
    ) -> None:
        """Write each post to <permalink>/index.html."""
        (content_dir / "2023-05-15-first-post.md").write_text(
            "---\ntitle: First Post\n---\n# First Post\n\nThis is the first test post."
        )
        (content_dir / "about.md").write_text("About this blog.")

        result = generator.generate()

        post_page = build_dir / "2023" / "05" / "15" / "first-post" / "index.html"
        about_page = build_dir / "about" / "index.html"
        assert sorted(result.written) == sorted([post_page, about_page])
        assert result.failed == []

        html = post_page.read_text()
        assert "<title>First Post</title>" in html
        assert "This is the first test post." in html
        assert "{{content}}" not in html

    def test__index__lists_dated_posts_newest_first(
        self, content_dir: Path, build_dir: Path, generator: SiteGenerator
    ) -> None:
        """Generate an index listing dated posts newest first."""
        (content_dir / "2023-05-15-first-post.md").write_text("---\ntitle: First Post\n---\nOne.")
        (content_dir / "2023-05-16-second-post.md").write_text("---\ntitle: Second Post\n---\nTwo.")
        (content_dir / "no-date-post.md").write_text("---\ntitle: Undated\n---\nNone.")

        result = generator.generate()

        assert result.index_path == build_dir / "index.html"
        index = result.index_path.read_text()
        assert "<title>Test Blog</title>" in index
        assert "<p>Welcome.</p>" in index
        assert index.index("Second Post") < index.index("First Post")
        assert "May 16, 2023" in index
        assert 'href="/2023/05/15/first-post/"' in index
        assert "Undated" not in index

    def test__no_posts__skips_index(self, build_dir: Path, generator: SiteGenerator) -> None:
        """Skip the index when there are no posts."""
        result = generator.generate()

        assert result.written == []
        assert result.index_path is None
        assert build_dir.is_dir()
        assert not (build_dir / "index.html").exists()

    def test__missing_template__raises_file_not_found(
        self, tmp_path: Path, content_dir: Path, build_dir: Path
    ) -> None:
        """Fail when the template is missing."""
        generator = SiteGenerator(
            content_dir,
            build_dir,
            tmp_path / "missing.html",
            PostRenderer(FileCache(tmp_path / ".cache")),
        )

        with pytest.raises(FileNotFoundError, match="Template file not found"):
            generator.generate()

    def test__missing_content_dir__raises_file_not_found(
        self, tmp_path: Path, build_dir: Path, template_path: Path
    ) -> None:
        """Fail when the content directory is missing."""
        generator = SiteGenerator(
            tmp_path / "missing",
            build_dir,
            template_path,
            PostRenderer(FileCache(tmp_path / ".cache")),
        )

        with pytest.raises(FileNotFoundError, match="Content directory not found"):
            generator.generate()

    def test__empty_permalink__recorded_as_failure(
        self, content_dir: Path, generator: SiteGenerator, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Skip posts whose permalink is empty and keep building."""
        (content_dir / ".md").write_text("Nameless.")
        (content_dir / "fine.md").write_text("Fine.")

        result = generator.generate()

        assert result.failed == [content_dir / ".md"]
        assert len(result.written) == 1
        assert "empty permalink" in caplog.text

    def test__dot_permalinks__stay_inside_build_dir(
        self,
        tmp_path: Path,
        content_dir: Path,
        template_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Refuse "." and ".." permalinks instead of writing outside the post tree."""
        build_dir = tmp_path / "out" / "build"
        generator = SiteGenerator(
            content_dir,
            build_dir,
            template_path,
            PostRenderer(FileCache(tmp_path / ".cache")),
            site_title="Test Blog",
        )
        (content_dir / "...md").write_text("Escapes to the parent.")
        (content_dir / "..md").write_text("Lands on the index.")
        (content_dir / "2023-05-15-fine.md").write_text("Fine.")

        result = generator.generate()

        assert sorted(result.failed) == sorted([content_dir / "...md", content_dir / "..md"])
        assert result.written == [build_dir / "2023" / "05" / "15" / "fine" / "index.html"]
        assert not (tmp_path / "out" / "index.html").exists()
        assert "Lands on the index." not in (build_dir / "index.html").read_text()
        assert "outside the build directory" in caplog.text

    def test__trailing_slash_permalink__is_written(
        self, content_dir: Path, build_dir: Path, generator: SiteGenerator
    ) -> None:
        """Write a post whose permalink ends at the date directory."""
        (content_dir / "2021-05-03-.md").write_text("Dated but nameless.")

        result = generator.generate()

        assert result.failed == []
        assert result.written == [build_dir / "2021" / "05" / "03" / "index.html"]

    def test__output_path_for__uses_permalink(
        self, content_dir: Path, build_dir: Path, generator: SiteGenerator
    ) -> None:
        """Place posts in a directory named after the permalink."""
        source = content_dir / "2021-05-03-hello-world.md"
        source.write_text("Hello.")

        path = generator.output_path_for(load_post(source))

        assert path == build_dir / "2021" / "05" / "03" / "hello-world" / "index.html"
