"""Static site generation.

Writes one page per post at its permalink and an index page listing
dated posts, newest first:

    build/
    ├── index.html
    └── 2021/
        └── 05/
            └── 03/
                └── hello-world/
                    └── index.html
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from letsbuild.core.posts import Post
from letsbuild.core.renderer import PostRenderer
from letsbuild.core.site import Site, SiteLoader
from letsbuild.core.template import load_template, render_index, render_page

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"
DEFAULT_SITE_TITLE = "Let's Build"


@dataclass
class GenerateResult:
    """Result of a site build."""

    written: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)
    index_path: Path | None = None


class SiteGenerator:
    """Builds the static site from markdown posts."""

    def __init__(
        self,
        source_dir: Path,
        build_dir: Path,
        template_path: Path,
        renderer: PostRenderer,
        *,
        site_title: str = DEFAULT_SITE_TITLE,
        intro: str = "",
    ) -> None:
        """Initialize generator.

        Args:
            source_dir: Directory containing markdown posts
            build_dir: Output directory, created if missing
            template_path: HTML template with {{title}} and {{content}}
            renderer: PostRenderer used for post bodies
            site_title: Title of the index page
            intro: HTML placed above the post listing on the index page
        """
        self._source_dir = source_dir
        self._build_dir = build_dir
        self._template_path = template_path
        self._renderer = renderer
        self._site_title = site_title
        self._intro = intro

    def generate(self) -> GenerateResult:
        """Generate the site.

        Per-post failures are logged and recorded in the result,
        the build continues with the remaining posts.

        Returns:
            GenerateResult with written and failed files

        Raises:
            FileNotFoundError: If the template or content directory is missing
            OSError: If the build directory or index page can't be written
        """
        self._build_dir.mkdir(parents=True, exist_ok=True)

        template = load_template(self._template_path)
        site = SiteLoader(self._source_dir).load()

        result = GenerateResult()
        for post in site.posts:
            output_path = self._write_post(post, template)
            if output_path is None:
                result.failed.append(post.source_path)
            else:
                result.written.append(output_path)

        if len(site) > 0:
            result.index_path = self._write_index(site, template)

        return result

    def output_path_for(self, post: Post) -> Path:
        """Return the file a post is written to."""
        return self._build_dir / post.permalink / INDEX_FILENAME

    def is_inside_build_dir(self, post: Post) -> bool:
        """Check that a post's page directory lies strictly below build_dir.

        Permalinks such as "." or ".." would put the page on top of the
        site index or outside the build directory.
        """
        build_root = self._build_dir.resolve()
        post_dir = self.output_path_for(post).parent.resolve()
        return post_dir != build_root and post_dir.is_relative_to(build_root)

    def _write_post(self, post: Post, template: str) -> Path | None:
        if not post.permalink:
            logger.error(f"Skipping {post.source_path}: empty permalink")
            return None

        if not self.is_inside_build_dir(post):
            logger.error(
                f"Skipping {post.source_path}: permalink /{post.permalink} "
                f"is outside the build directory"
            )
            return None

        try:
            rendered = self._renderer.render(post)
            output = render_page(template, post.title, rendered.html)
            output_path = self.output_path_for(post)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing output for {post.source_path}: {e}")
            return None

        logger.info(f"Generated: {output_path}")
        return output_path

    def _write_index(self, site: Site, template: str) -> Path:
        content = render_index(site.latest(), self._intro)
        output = render_page(template, self._site_title, content)

        index_path = self._build_dir / INDEX_FILENAME
        index_path.write_text(output, encoding="utf-8")
        logger.info(f"Generated index: {index_path}")
        return index_path
