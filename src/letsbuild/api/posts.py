"""Posts API endpoints.

Lists posts for the index and returns rendered posts with metadata.
"""

import logging
from datetime import UTC, datetime
from email.utils import formatdate
from hashlib import md5

from aiohttp import web

from letsbuild.app_keys import renderer_key, site_loader_key

logger = logging.getLogger(__name__)


def create_posts_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/posts", list_posts),
        web.get("/api/posts/{path:.*}", get_post),
    ]


async def list_posts(request: web.Request) -> web.Response:
    site = request.app[site_loader_key].load()
    return web.json_response({"items": [post.to_dict() for post in site.latest()]})


async def get_post(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    site = request.app[site_loader_key].load()
    renderer = request.app[renderer_key]

    post = site.get_post(path)
    if post is None:
        return web.json_response(
            {"error": "Post not found", "path": path},
            status=404,
        )

    try:
        result = renderer.render(post)
    except FileNotFoundError:
        logger.warning(f"Source of {path} disappeared since the site was loaded")
        return web.json_response(
            {"error": "Post not found", "path": path},
            status=404,
        )

    source_mtime = result.source_path.stat().st_mtime
    last_modified = datetime.fromtimestamp(source_mtime, tz=UTC)

    etag = _compute_etag(result.html)

    if_none_match = request.headers.get("If-None-Match")
    if if_none_match == etag:
        return web.Response(status=304)

    response_data = {
        "meta": {
            **post.to_dict(),
            "source_file": str(result.source_path),
            "last_modified": last_modified.isoformat(),
        },
        "content": result.html,
    }

    return web.json_response(
        response_data,
        headers={
            "ETag": etag,
            "Last-Modified": formatdate(source_mtime, usegmt=True),
            "Cache-Control": "private, max-age=60",
        },
    )


def _compute_etag(content: str) -> str:
    # First 16 hex chars (64 bits) are enough to detect changed content
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
