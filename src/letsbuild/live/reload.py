"""WebSocket-based live reload for the preview server.

Monitors post sources for changes and notifies connected clients
via WebSocket to trigger page reloads.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from letsbuild.core.permalink import map_file_path_to_url
from letsbuild.core.site import SiteLoader

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher and connected WebSocket clients
    to provide automatic page refresh on post changes.
    """

    def __init__(
        self,
        source_dir: Path,
        watch_patterns: list[str] | None = None,
        *,
        site_loader: SiteLoader | None = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            source_dir: Directory to watch for changes, resolved to an absolute path
            watch_patterns: Glob patterns to watch (default: ["*.md"])
            site_loader: SiteLoader to invalidate when posts change
        """
        self._source_dir = source_dir.resolve()
        self._watch_patterns = watch_patterns or ["*.md"]
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None
        self._site_loader = site_loader

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch for file changes and broadcast reload events."""
        async for changes in awatch(self._source_dir):
            for change_type, path_str in changes:
                path = Path(path_str)
                if not self.matches_patterns(path):
                    continue

                # Deleted posts still change the index listing
                if self._site_loader:
                    self._site_loader.invalidate()

                if change_type == Change.deleted:
                    await self.broadcast_reload("/")
                    continue

                logger.debug(f"Post changed: {path}")
                await self.broadcast_reload(self.to_url_path(path))

    def matches_patterns(self, path: Path) -> bool:
        """Check if a path matches any watch pattern.

        Args:
            path: Path to check

        Returns:
            True if path is inside source_dir and matches any pattern
        """
        try:
            relative = path.resolve().relative_to(self._source_dir)
        except ValueError:
            return False

        return any(relative.match(pattern) for pattern in self._watch_patterns)

    def to_url_path(self, file_path: Path) -> str:
        """Convert a post source path to the URL path it is served at.

        Args:
            file_path: Absolute file path

        Returns:
            URL path (e.g., "/2021/05/03/hello-world")
        """
        return f"/{map_file_path_to_url(file_path.as_posix())}"

    async def broadcast_reload(self, path: str) -> None:
        """Broadcast reload event to all connected clients.

        Args:
            path: URL path that changed
        """
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "path": path})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
