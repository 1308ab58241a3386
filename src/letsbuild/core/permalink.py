"""Permalinks for blog posts.

Maps post source files to the URL paths the blog published under Jekyll,
so existing links keep resolving after the move to this builder:

    2021-05-03-hello-world.md  ->  2021/05/03/hello-world
    about.md                   ->  about
"""

import re

from letsbuild.core.types import URLPath

# ASCII digits only and \Z instead of $ so a trailing newline never matches
DATE_PREFIX_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}-", re.ASCII)
MARKDOWN_SUFFIX_PATTERN = re.compile(r"\.md\Z")


def map_file_path_to_url(file: str) -> URLPath:
    """Map a post file path to its Jekyll compatible URL path.

    Only the last path segment is used. A leading ``YYYY-MM-DD-`` date prefix
    has its dashes turned into slashes and a trailing ``.md`` is removed.
    Anything else passes through unchanged.

    Args:
        file: Post file path (e.g., "src/content/posts/2021-05-03-hello.md")

    Returns:
        URL path without leading slash (e.g., "2021/05/03/hello")
    """
    segment = file.rsplit("/", 1)[-1]
    path = DATE_PREFIX_PATTERN.sub(lambda match: match.group(0).replace("-", "/"), segment)
    path = MARKDOWN_SUFFIX_PATTERN.sub("", path)
    return URLPath(path)


def permalink_href(url: str) -> str:
    """Return the site-relative link for a mapped URL path.

    Args:
        url: URL path as returned by map_file_path_to_url()

    Returns:
        Link with leading and trailing slash (e.g., "/2021/05/03/hello/")
    """
    stripped = url.strip("/")
    return f"/{stripped}/" if stripped else "/"
