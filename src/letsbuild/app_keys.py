"""Application keys for type-safe app configuration access."""

from aiohttp import web

from letsbuild.config import Config
from letsbuild.core.renderer import PostRenderer
from letsbuild.core.site import SiteLoader
from letsbuild.live import LiveReloadManager

config_key = web.AppKey("config", Config)
renderer_key = web.AppKey("renderer", PostRenderer)
site_loader_key = web.AppKey("site_loader", SiteLoader)
template_key = web.AppKey("template", str)
live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
