# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 05:30
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Liveness endpoint so hosting platforms see a bound port
"""
import time
from datetime import datetime, UTC

from aiohttp import web
from loguru import logger

BANNER = "Chat Translator Bot is running!"

_STARTED_AT = time.monotonic()


async def health_handler(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime_seconds": round(time.monotonic() - _STARTED_AT, 3),
        }
    )


async def banner_handler(request: web.Request) -> web.Response:
    return web.Response(text=BANNER)


def create_health_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/health", health_handler)
    app.router.add_route("*", "/{tail:.*}", banner_handler)
    return app


async def start_health_server(port: int, host: str = "0.0.0.0") -> web.AppRunner:
    """Serve the liveness app on the running event loop; call ``runner.cleanup()`` to stop"""
    runner = web.AppRunner(create_health_app(), access_log=None)
    await runner.setup()
    site = web.TCPSite(runner, host=host, port=port)
    await site.start()

    logger.success(f"HTTP server listening on port {port}")
    logger.info(f"Health check available at http://localhost:{port}/health")
    return runner
