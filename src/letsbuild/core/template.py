"""HTML page templates.

Templates are plain HTML files with ``{{title}}`` and ``{{content}}``
placeholders, replaced verbatim for every page.
"""

from datetime import date
from html import escape
from pathlib import Path

from letsbuild.core.permalink import permalink_href
from letsbuild.core.posts import Post

TITLE_PLACEHOLDER = "{{title}}"
CONTENT_PLACEHOLDER = "{{content}}"


def load_template(template_path: Path) -> str:
    """Read a page template.

    Raises:
        FileNotFoundError: If the template doesn't exist
    """
    if not template_path.is_file():
        raise FileNotFoundError(f"Template file not found at {template_path}")
    return template_path.read_text(encoding="utf-8")


def render_page(template: str, title: str, content: str) -> str:
    """Fill a template with a page title and HTML content.

    Args:
        template: Template text
        title: Page title
        content: Rendered HTML body

    Returns:
        Complete HTML page
    """
    output = template.replace(TITLE_PLACEHOLDER, title)
    return output.replace(CONTENT_PLACEHOLDER, content)


def render_index(posts: list[Post], intro: str = "") -> str:
    """Render the index page body listing posts.

    Undated posts are skipped. Posts are listed in the order given,
    callers pass Site.latest() for newest first.

    Args:
        posts: Posts to list
        intro: HTML placed before the listing

    Returns:
        HTML fragment for the template content placeholder
    """
    parts = [intro, "<h2>Latest posts</h2>", "<ul>\n"]
    for post in posts:
        if post.date is None:
            continue
        parts.append(
            f"<li><strong>{format_post_date(post.date)}</strong> - "
            f'<a href="{escape(permalink_href(post.permalink))}">{escape(post.title)}</a>'
            f"<p>{escape(post.description)}</p></li>\n"
        )
    parts.append("</ul>")
    return "".join(parts)


def format_post_date(value: date) -> str:
    """Format a date as "January 2, 2006"."""
    return f"{value:%B} {value.day}, {value.year}"
