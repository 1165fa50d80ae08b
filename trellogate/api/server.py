"""
HTTP tool server.

Exposes every access-gated tool as `POST /tools/{name}` with the tool args as
the JSON body. Handlers are sync and run in FastAPI's threadpool, so requests
may be in flight concurrently; each one runs its access check before any
mutating Trello call.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from trellogate.tools.registry import describe_tools, run_tool
from trellogate.tools.types import ToolResult

logger = logging.getLogger(__name__)

app = FastAPI(title="trellogate")

_STATUS_BY_KIND: Dict[str, int] = {
    "tool_missing": 400,
    "invalid_args": 400,
    "confirmation_required": 400,
    "access_denied": 403,
    "unknown_tool": 404,
    "board_not_resolvable": 404,
    "entity_lookup_failed": 404,
    "trello_error": 502,
    "internal_error": 500,
}


def _to_response(res: ToolResult) -> JSONResponse:
    if res.ok:
        return JSONResponse(status_code=200, content={"ok": True, "result": res.result})
    status = _STATUS_BY_KIND.get(res.error_kind or "", 500)
    return JSONResponse(status_code=status, content={"ok": False, "error": res.error, "errorKind": res.error_kind})


@app.middleware("http")
async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug("%s %s - %d (%.3fs)", request.method, request.url.path, response.status_code, process_time)
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception("%s %s - ERROR after %.3fs: %s", request.method, request.url.path, process_time, str(e))
        raise


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {"ok": True}


@app.get("/tools")
def tools_index() -> Dict[str, Any]:
    return {"ok": True, "tools": describe_tools()}


@app.post("/tools/{name}")
def call_tool(name: str, args: Optional[Dict[str, Any]] = Body(default=None)) -> JSONResponse:
    return _to_response(run_tool(name, args or {}))


def run(host: str = "127.0.0.1", port: int = 8080, log_level: Optional[str] = None) -> None:
    import uvicorn

    # Configure logging for the application
    log_level = (log_level or os.getenv("LOG_LEVEL", "info")).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn_log_level = (
        log_level.lower() if log_level.lower() in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )

    logger.info("Starting tool server on %s:%d (log_level=%s)", host, port, log_level)
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level)
