"""Health-check endpoint that echoes the request back."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from aiohttp import web


@dataclass
class HttpResult:
    """A response envelope with a code, a message and optional data."""

    code: Any
    msg: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        result = {"code": self.code, "msg": self.msg}
        if self.data is not None:
            result["data"] = self.data
        return result


async def _bound_param(request: web.Request) -> dict[str, Any]:
    param: dict[str, Any] = {"data": None}
    raw = await request.read()
    if not raw.strip():
        return param
    try:
        decoded = json.loads(raw)
    except ValueError:
        return param
    if isinstance(decoded, dict):
        param["data"] = decoded.get("data")
    return param


async def _health_check(request: web.Request) -> web.Response:
    headers = {key: request.headers.getall(key) for key in request.headers.keys()}
    result = HttpResult(
        code=200,
        msg="OK",
        data={"header": headers, "body": await _bound_param(request)},
    )
    return web.json_response(result.to_dict())


def register_routes(app: web.Application) -> None:
    """Add ``/hanabi/healthCheck`` to ``app``."""
    app.router.add_get("/hanabi/healthCheck", _health_check)