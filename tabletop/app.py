"""Web application assembly and the server command."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Any, TextIO

from aiohttp import web

from tabletop.api import register_api
from tabletop.applog import create_access_log_middleware, initialize_application_log
from tabletop.health import register_routes
from tabletop.rooms import RoomManager

logger = logging.getLogger(__name__)


@web.middleware
async def _cors(request: web.Request, handler: Any) -> web.StreamResponse:
    if "Origin" not in request.headers:
        return await handler(request)
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        headers = {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET,HEAD,PUT,PATCH,POST,DELETE",
            "Vary": "Origin, Access-Control-Request-Method, Access-Control-Request-Headers",
        }
        requested = request.headers.get("Access-Control-Request-Headers")
        if requested:
            headers["Access-Control-Allow-Headers"] = requested
        return web.Response(status=204, headers=headers)
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        response = exc
        raise
    finally:
        if response is not None:
            response.headers["Access-Control-Allow-Origin"] = "*"
            response.headers["Vary"] = "Origin"
    return response


@web.middleware
async def _recover(request: web.Request, handler: Any) -> web.StreamResponse:
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception:
        logger.exception("recovered from error in %s %s", request.method, request.path)
        return web.json_response({"message": "Internal Server Error"}, status=500)


def create_app(
    manager: RoomManager | None = None, access_log: TextIO | None = None
) -> web.Application:
    """Build the application with CORS, error recovery and optional access logging."""
    middlewares = [_cors, _recover]
    if access_log is not None:
        middlewares.append(create_access_log_middleware(access_log))
    app = web.Application(middlewares=middlewares)
    register_api(app, manager if manager is not None else RoomManager())
    register_routes(app)
    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Start the board game server."""
    parser = argparse.ArgumentParser(description="Board game server.")
    parser.add_argument("--host", default=None, help="address to bind (default: all)")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    parser.add_argument("--log-dir", default=".", help="directory for the log folder")
    args = parser.parse_args(argv)

    print("start board game")
    with initialize_application_log(args.log_dir) as access_log:
        web.run_app(create_app(RoomManager(), access_log), host=args.host, port=args.port)