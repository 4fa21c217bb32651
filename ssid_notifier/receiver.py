"""Reference receiver that logs every SSID event it is sent.

Run with ``ssid-receiver`` and point SSID_ENDPOINT_URL at
``http://<host>:3000/log``.
"""

import json
import logging
import time
from datetime import datetime, timezone

from aiohttp import web

from ssid_notifier.adapters.driven.logging.logging_config import configure_logs

__all__ = ["create_app", "main"]

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
STARTED_AT = web.AppKey("started_at", float)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@web.middleware
async def access_log(request: web.Request, handler):
    logger.info(f"{request.method} {request.path}")
    return await handler(request)


async def log_event(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except json.JSONDecodeError:
        logger.warning("Rejected request with invalid JSON body")
        return web.json_response({"status": "error", "message": "invalid JSON"}, status=400)

    logger.info(f"SSID event received:\n{json.dumps(body, indent=2)}")
    return web.json_response({"status": "success", "timestamp": _iso_now()})


async def health(request: web.Request) -> web.Response:
    uptime = time.monotonic() - request.app[STARTED_AT]
    return web.json_response({"status": "healthy", "uptime": uptime})


def create_app() -> web.Application:
    """Build the receiver application (POST /log, GET /health)."""
    app = web.Application(middlewares=[access_log])
    app[STARTED_AT] = time.monotonic()
    app.router.add_post("/log", log_event)
    app.router.add_get("/health", health)
    return app


def main(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    configure_logs()
    logger.info(f"SSID receiver listening on http://{host}:{port}/log")
    web.run_app(create_app(), host=host, port=port, print=None)


if __name__ == "__main__":
    main()
