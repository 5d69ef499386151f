"""Read-only HTTP lookup server.

Usage: python -m skillshelf serve

Routes:
- GET  /health          → {"status": "ok", "skills": N}
- GET  /skills          → entry summaries (?tag=... or ?q=... to filter)
- GET  /skills/{name}   → full entry, 404 if unknown
- GET  /tags            → tag counts
- POST /reload          → re-read the tree, swap the catalog in whole
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import signal

from aiohttp import web

from skillshelf.catalog.loader import CatalogLoader, LoadResult
from skillshelf.catalog.lookup import by_name, by_tag, search
from skillshelf.config import SkillshelfConfig, load_config

logger = logging.getLogger(__name__)

_dumps = functools.partial(json.dumps, ensure_ascii=False, default=str)


def _json(data, status: int = 200) -> web.Response:
    return web.json_response(data, status=status, dumps=_dumps)


class CatalogServer:
    """Serves one in-memory catalog; reload replaces it atomically."""

    def __init__(self, config: SkillshelfConfig | None = None) -> None:
        self.config = config or load_config()
        self._loader = CatalogLoader(
            self.config.catalog.root,
            extensions=self.config.catalog.extensions,
            exclude_dirs=self.config.catalog.exclude_dirs,
        )
        self._result: LoadResult | None = None
        self._runner: web.AppRunner | None = None
        self._shutdown_event = asyncio.Event()

    @property
    def result(self) -> LoadResult:
        if self._result is None:
            self._result = self._loader.load()
        return self._result

    def reload(self) -> LoadResult:
        self._result = self._loader.load()
        return self._result

    # ── Routes ───────────────────────────────────────────────

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/health", self._handle_health)
        app.router.add_get("/skills", self._handle_list)
        app.router.add_get("/skills/{name}", self._handle_get)
        app.router.add_get("/tags", self._handle_tags)
        app.router.add_post("/reload", self._handle_reload)
        return app

    async def _handle_health(self, request: web.Request) -> web.Response:
        return _json({"status": "ok", "skills": len(self.result.catalog)})

    async def _handle_list(self, request: web.Request) -> web.Response:
        catalog = self.result.catalog
        tag = request.query.get("tag")
        query = request.query.get("q")
        if tag is not None and query is not None:
            return _json({"error": "use either tag or q, not both"}, status=400)
        if tag is not None:
            entries = by_tag(catalog, tag)
        elif query is not None:
            entries = search(catalog, query)
        else:
            entries = catalog.entries
        return _json({"skills": [e.summary() for e in entries]})

    async def _handle_get(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        found = by_name(self.result.catalog, name)
        if not found:
            return _json({"error": f"no skill named {name!r}"}, status=404)
        return _json(found[0].to_dict())

    async def _handle_tags(self, request: web.Request) -> web.Response:
        return _json({"tags": self.result.catalog.tag_counts()})

    async def _handle_reload(self, request: web.Request) -> web.Response:
        result = await asyncio.to_thread(self.reload)
        logger.info("Catalog reloaded via HTTP (%d skills)", len(result.catalog))
        return _json(
            {
                "skills": len(result.catalog),
                "issues": [i.to_dict() for i in result.issues],
            }
        )

    # ── Lifecycle ────────────────────────────────────────────

    async def start(self) -> None:
        self.reload()
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.config.server.host, self.config.server.port)
        await site.start()
        logger.info(
            "Skill catalog listening on http://%s:%d (%d skills)",
            self.config.server.host,
            self.config.server.port,
            len(self.result.catalog),
        )

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Skill catalog server stopped")

    def _setup_signals(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._handle_signal, sig)

    def _handle_signal(self, sig: signal.Signals) -> None:
        logger.info("Received %s, shutting down...", sig.name)
        self._shutdown_event.set()

    async def run(self) -> None:
        self._setup_signals()
        await self.start()
        try:
            await self._shutdown_event.wait()
        finally:
            await self.stop()
