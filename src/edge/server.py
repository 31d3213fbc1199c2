"""Asset edge server using aiohttp."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import signal
import urllib.parse
from typing import Optional

from aiohttp import web

from common.logging_utils import Timer
from constants import Constants

from .cache import CatalogCache
from .config import EdgeConfig
from .expand import Expander, NotFound, Outcome, Redirect, Serve
from .storage import VolumeStorage

logger = logging.getLogger(__name__)


class AssetEdgeServer:
    """HTTP front for the storage volume.

    Files that exist on the volume are served as they are; every other
    request goes through the expander, which resolves partial versions and
    default paths into canonical URIs.
    """

    def __init__(self, config: EdgeConfig, storage: Optional[VolumeStorage] = None):
        """Initialize the edge server.

        Args:
            config: Server configuration.
            storage: Storage volume; defaults to the configured mount path.
        """
        self._config = config
        self._app: Optional[web.Application] = None
        self._runner: Optional[web.AppRunner] = None

        self._storage = storage or VolumeStorage(config.volume_mount_path)
        self._catalog_cache = CatalogCache(
            self._storage.list_stored_assets, ttl=config.catalog_ttl
        )
        self._expander = Expander(
            self._storage, config, catalog=self._catalog_cache.snapshot
        )

    def _create_app(self) -> web.Application:
        """Create the aiohttp application."""
        app = web.Application()
        app.router.add_get(Constants.HEALTH_PATH, self._health_check)
        app.router.add_get("/{path:.*}", self._handle_request)
        app.on_startup.append(self._on_startup)
        app.on_cleanup.append(self._on_cleanup)
        return app

    async def _health_check(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        return web.json_response({
            "status": "ok",
            "config": self._config.as_dict(),
            "catalog_cache": self._catalog_cache.stats(),
        })

    async def _on_startup(self, app: web.Application) -> None:
        logger.info("Edge server starting on %s:%s", self._config.host, self._config.port)

    async def _on_cleanup(self, app: web.Application) -> None:
        logger.info("Edge server stopped")

    async def _handle_request(self, request: web.Request) -> web.StreamResponse:
        """Handle an incoming asset request.

        Args:
            request: Incoming HTTP request.

        Returns:
            HTTP response.
        """
        with Timer() as t:
            response = await self._respond(request.raw_path, depth=0)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method, request.raw_path, response.status, t.duration_ms(),
        )
        return response

    async def _respond(self, uri: str, depth: int) -> web.StreamResponse:
        """Answer the percent-encoded ``uri``, following internal redirects up to a fixed depth."""
        uri_path = urllib.parse.unquote(urllib.parse.urlsplit(uri).path)
        existing = self._storage.resolve_file(uri_path)
        if existing is not None:
            return web.FileResponse(existing)

        loop = asyncio.get_running_loop()
        outcome: Outcome = await loop.run_in_executor(None, self._expander.expand, uri)

        if isinstance(outcome, Redirect) and outcome.internal:
            if depth >= Constants.MAX_INTERNAL_REDIRECTS:
                logger.error("Too many internal redirects for %s", uri)
                return self._not_found_response()
            response = await self._respond(outcome.uri, depth + 1)
            response.headers.update(outcome.headers)
            return response

        return self._to_response(outcome, uri_path)

    def _to_response(self, outcome: Outcome, uri_path: str) -> web.StreamResponse:
        """Translate an expansion outcome into an HTTP response."""
        if isinstance(outcome, Serve):
            content_type, _ = mimetypes.guess_type(uri_path)
            response = web.Response(
                status=outcome.status,
                body=outcome.body,
                content_type=content_type or "application/octet-stream",
            )
            response.headers.update(outcome.headers)
            return response

        if isinstance(outcome, Redirect):
            headers = dict(outcome.headers)
            headers["Location"] = outcome.uri
            return web.Response(status=outcome.status, headers=headers)

        return self._not_found_response(outcome)

    def _not_found_response(self, outcome: Optional[NotFound] = None) -> web.StreamResponse:
        """The volume's not-found page with status 404, or a bare 404."""
        page = self._storage.resolve_file((outcome or NotFound()).uri)
        if page is not None:
            return web.FileResponse(page, status=404)
        return web.Response(status=404, text="Not Found")

    async def start(self) -> None:
        """Start the edge server."""
        self._app = self._create_app()
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()

        site = web.TCPSite(
            self._runner,
            self._config.host,
            self._config.port,
        )
        await site.start()

        logger.info(
            "A7 edge server listening on http://%s:%s",
            self._config.host, self._config.port,
        )
        logger.info("Volume: %s", self._storage.root)
        logger.info(
            "CORS all: %s, auto resolve: %s, serve files: %s",
            self._config.cors_all, self._config.path_auto_resolve, self._config.serve_files,
        )

    async def stop(self) -> None:
        """Stop the edge server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._app = None


def run_edge_server_sync(config: EdgeConfig) -> None:
    """Run the edge server synchronously.

    Installs signal handlers for SIGTERM and SIGINT for clean shutdown.

    Args:
        config: Server configuration.
    """
    server = AssetEdgeServer(config)
    loop = asyncio.new_event_loop()

    async def run():
        await server.start()
        stop_event = asyncio.Event()
        running_loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            running_loop.add_signal_handler(sig, stop_event.set)
        await stop_event.wait()
        logger.info("Shutdown signal received, stopping...")
        await server.stop()

    try:
        loop.run_until_complete(run())
    except KeyboardInterrupt:
        # Fallback for platforms where signal handlers don't work (Windows)
        loop.run_until_complete(server.stop())
    finally:
        loop.close()
        logger.info("Edge server shutdown complete")
