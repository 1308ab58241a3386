"""aiohttp preview server for letsbuild.

Application factory and route registration. Pages are rendered on
request from the content directory, so edits show up without a rebuild.
"""

from aiohttp import web

from letsbuild.api.config import create_config_routes
from letsbuild.api.posts import create_posts_routes
from letsbuild.app_keys import (
    config_key,
    live_reload_manager_key,
    renderer_key,
    site_loader_key,
    template_key,
)
from letsbuild.config import Config
from letsbuild.core.cache import FileCache
from letsbuild.core.renderer import PostRenderer
from letsbuild.core.site import SiteLoader
from letsbuild.core.template import load_template, render_index, render_page
from letsbuild.live import LiveReloadManager
from letsbuild.live.reload import create_live_reload_routes

LIVE_RELOAD_SCRIPT = """<script>
(() => {
  const ws = new WebSocket(`ws://${location.host}/ws/live-reload`);
  ws.onmessage = (event) => {
    const data = JSON.parse(event.data);
    const here = location.pathname.replace(/\\/+$/, "") || "/";
    if (data.type === "reload" && (data.path === here || here === "/")) {
      location.reload();
    }
  };
})();
</script>"""


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application

    Raises:
        FileNotFoundError: If the page template doesn't exist
    """
    app = web.Application()

    cache = FileCache(config.content.cache_dir)
    site_loader = SiteLoader(config.content.source_dir)

    app[config_key] = config
    app[renderer_key] = PostRenderer(cache)
    app[site_loader_key] = site_loader
    app[template_key] = load_template(config.content.template)

    # API routes (must be registered first to take precedence over page routes)
    app.router.add_routes(create_posts_routes())
    app.router.add_routes(create_config_routes())

    if config.live_reload.enabled:
        manager = LiveReloadManager(
            config.content.source_dir,
            watch_patterns=config.live_reload.watch_patterns,
            site_loader=site_loader,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    app.router.add_get("/", serve_index)
    # Post pages - must be last to catch all remaining routes
    app.router.add_get("/{path:.*}", serve_post)

    return app


async def serve_index(request: web.Request) -> web.Response:
    """Serve the index page listing dated posts."""
    config = request.app[config_key]
    site = request.app[site_loader_key].load()

    content = render_index(site.latest(), config.site.intro)
    page = render_page(request.app[template_key], config.site.title, content)
    return _html_response(request, page)


async def serve_post(request: web.Request) -> web.Response:
    """Serve a post page by permalink."""
    path = request.match_info["path"]
    site = request.app[site_loader_key].load()

    post = site.get_post(path)
    if post is None:
        raise web.HTTPNotFound(text=f"Post not found: /{path}")

    try:
        result = request.app[renderer_key].render(post)
    except FileNotFoundError as e:
        raise web.HTTPNotFound(text=f"Post not found: /{path}") from e

    page = render_page(request.app[template_key], post.title, result.html)
    return _html_response(request, page)


def _html_response(request: web.Request, page: str) -> web.Response:
    if live_reload_manager_key in request.app:
        if "</body>" in page:
            page = page.replace("</body>", f"{LIVE_RELOAD_SCRIPT}\n</body>", 1)
        else:
            page = f"{page}\n{LIVE_RELOAD_SCRIPT}"
    return web.Response(text=page, content_type="text/html")


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_manager_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
