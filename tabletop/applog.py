"""Application and access logging."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, TextIO

from aiohttp import web

PROJECT_NAME = "hanabi_log"
SERVER_LOG_FILE_NAME = "server.log"
ACCESS_LOG_FILE_NAME = "access.log"

BANNER = "\n" + "░" * 150 + "\n\n" + "▅" * 150

_HANDLER_NAME = "tabletop-server-log"
_FORMAT = (
    "%(asctime)s.%(msecs)03d %(funcName)-15s ▶ %(levelname).5s "
    "%(filename)-15s %(message)s"
)


def initialize_application_log(base_dir: str | Path = ".") -> TextIO:
    """Create the log files, send package logging to the server log.

    Returns the access log opened for appending; the caller closes it.
    """
    log_dir = Path(base_dir) / PROJECT_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    for name in (SERVER_LOG_FILE_NAME, ACCESS_LOG_FILE_NAME):
        if not (log_dir / name).exists():
            (log_dir / name).touch()
            print("created", log_dir / name)

    logger = logging.getLogger("tabletop")
    for old in [h for h in logger.handlers if h.name == _HANDLER_NAME]:
        logger.removeHandler(old)
        old.close()
    handler = logging.FileHandler(log_dir / SERVER_LOG_FILE_NAME, encoding="utf-8")
    handler.name = _HANDLER_NAME
    handler.setFormatter(logging.Formatter(_FORMAT, "%m%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    logger.info(BANNER)
    logger.info("Process initialize ... Env :")
    return (log_dir / ACCESS_LOG_FILE_NAME).open("a", encoding="utf-8")


def _dashboard_time(moment: datetime) -> str:
    fraction = f"{moment.microsecond:06d}".rstrip("0")
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S")
    return f"{stamp}.{fraction}" if fraction else stamp


def _human_latency(seconds: float) -> str:
    nanos = max(0, round(seconds * 1_000_000_000))
    for unit, suffix in ((10**9, "s"), (10**6, "ms"), (10**3, "µs")):
        if nanos >= unit:
            return f"{Decimal(nanos) / Decimal(unit)}{suffix}"
    return f"{nanos}ns"


def _real_ip(request: web.Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-Ip", "") or request.remote or ""


def _body_size(response: Any) -> int:
    body = getattr(response, "body", None)
    if isinstance(body, (bytes, bytearray)):
        return len(body)
    return getattr(response, "content_length", None) or 0


def create_access_log_middleware(output: TextIO) -> Any:
    """Return a middleware writing one JSON line per request to ``output``."""

    @web.middleware
    async def access_log(request: web.Request, handler: Any) -> web.StreamResponse:
        started = time.perf_counter()
        status, error, response = 500, "", None
        try:
            response = await handler(request)
            status = response.status
            return response
        except web.HTTPException as exc:
            status, error, response = exc.status, str(exc), exc
            raise
        except Exception as exc:
            error = str(exc)
            raise
        finally:
            record = {
                "transaction_id": request.headers.get("transaction-id", ""),
                "status_code": status,
                "E": error,
                "REMOTE_ADDR": _real_ip(request),
                "Client-Ip": request.headers.get("Client-Ip", ""),
                "time": _dashboard_time(datetime.now()),
                "return_time": _human_latency(time.perf_counter() - started),
                "I": request.content_length or 0,
                "O": _body_size(response),
                "method": request.method,
                "path": request.path_qs,
            }
            output.write(json.dumps(record, ensure_ascii=False) + "\n")
            output.flush()

    return access_log