"""Live reload support for the preview server."""

from letsbuild.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
