"""aiohttp transport for the livemap store.

Thin shell: validate the request, call one store operation, serialize the
result. All shared state lives in the :class:`LiveMapStore` held by the app.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from typing import Any, TypeVar

from aiohttp import web
from aiohttp.log import access_logger
from pydantic import BaseModel, ValidationError

from livemap.config import LiveMapConfig
from livemap.exceptions import LiveMapRequestError
from livemap.geo import format_distance
from livemap.models.requests import PlacePinRequest, PointQuery, PositionUpdateRequest
from livemap.models.results import OperationResult
from livemap.state.store import LiveMapStore

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", LiveMapStore)
CONFIG_KEY = web.AppKey("config", LiveMapConfig)

M = TypeVar("M", bound=BaseModel)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _validate(model: type[M], data: Mapping[str, Any]) -> M:
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise LiveMapRequestError(f"{field}: {first['msg']}" if field else first["msg"], field=field) from exc


async def _json_body(request: web.Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise LiveMapRequestError("Request body is not valid UTF-8 JSON") from exc
    if not isinstance(body, dict):
        raise LiveMapRequestError("Request body must be a JSON object")
    return body


def _subject_id(request: web.Request) -> str:
    subject_id = request.match_info["subject_id"].strip()
    if not subject_id:
        raise LiveMapRequestError("subject id must be non-empty", field="subjectId")
    return subject_id


def _result_response(result: OperationResult, *, reject_status: int = 409) -> web.Response:
    status = 200 if result.success else reject_status
    return web.json_response(result.to_wire(), status=status)


@web.middleware
async def _error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except LiveMapRequestError as exc:
        _logger.debug("Rejected %s %s: %s", request.method, request.path, exc)
        return web.json_response({"success": False, "error": str(exc)}, status=exc.status_code)


# ----------------------------------------------------------------------
# REST handlers
# ----------------------------------------------------------------------


async def _status(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def _snapshot(request: web.Request) -> web.Response:
    snapshot = request.app[STORE_KEY].read_snapshot()
    payload = snapshot.to_wire()
    payload["pollInterval"] = request.app[CONFIG_KEY].poll_interval
    return web.json_response(payload)


async def _position_count(request: web.Request) -> web.Response:
    return web.json_response({"count": request.app[STORE_KEY].position_count()})


async def _update_position(request: web.Request) -> web.Response:
    subject_id = _subject_id(request)
    body = _validate(PositionUpdateRequest, await _json_body(request))
    result = request.app[STORE_KEY].update_position(subject_id, body.latitude, body.longitude, body.name)
    return _result_response(result)


async def _remove_position(request: web.Request) -> web.Response:
    result = request.app[STORE_KEY].remove_position(_subject_id(request))
    return _result_response(result)


async def _place_pin(request: web.Request) -> web.Response:
    body = _validate(PlacePinRequest, await _json_body(request))
    result = request.app[STORE_KEY].place_pin(body.subject_id, body.name, body.latitude, body.longitude)
    return _result_response(result)


async def _nearest_pin(request: web.Request) -> web.Response:
    point = _validate(PointQuery, request.query)
    nearest = request.app[STORE_KEY].nearest_pin(point.latitude, point.longitude)
    if nearest is None:
        return web.json_response({"pin": None, "distance": None, "formatted": None})
    return web.json_response(
        {
            "pin": nearest.pin.to_wire(),
            "distance": nearest.distance,
            "formatted": format_distance(nearest.distance),
        }
    )


# ----------------------------------------------------------------------
# Form-action endpoint (browser client posts FormData with an "action")
# ----------------------------------------------------------------------


async def _form_action(request: web.Request) -> web.Response:
    form = await request.post()
    action = form.get("action")
    subject_id = str(form.get("userId") or "").strip()
    store = request.app[STORE_KEY]

    if action not in {"update", "remove", "police"}:
        return web.json_response({"success": False}, status=400)
    if not subject_id:
        raise LiveMapRequestError("userId must be non-empty", field="userId")

    if action == "remove":
        return _result_response(store.remove_position(subject_id))

    name_key = "name" if action == "update" else "userName"
    fields = {"latitude": form.get("latitude"), "longitude": form.get("longitude"), "name": form.get(name_key)}
    point = _validate(PositionUpdateRequest, {k: v for k, v in fields.items() if v is not None})
    if action == "update":
        result: OperationResult = store.update_position(subject_id, point.latitude, point.longitude, point.name)
    else:
        result = store.place_pin(subject_id, point.name, point.latitude, point.longitude)
    # The browser client reads success/error from the body, not the status.
    return _result_response(result, reject_status=200)


# ----------------------------------------------------------------------
# Background sweep
# ----------------------------------------------------------------------


async def _sweep_loop(store: LiveMapStore, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        store.sweep()


async def _sweep_ctx(app: web.Application) -> AsyncIterator[None]:
    interval = app[CONFIG_KEY].sweep_interval
    task: asyncio.Task[None] | None = None
    if interval > 0:
        _logger.debug("Background sweep every %.1fs", interval)
        task = asyncio.create_task(_sweep_loop(app[STORE_KEY], interval))
    yield
    if task is not None:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


def create_app(store: LiveMapStore | None = None, config: LiveMapConfig | None = None) -> web.Application:
    """Build the aiohttp application bound to one store."""
    if config is None:
        config = store.config if store is not None else LiveMapConfig()
    if store is None:
        store = LiveMapStore(config)

    app = web.Application(middlewares=[_error_middleware])
    app[STORE_KEY] = store
    app[CONFIG_KEY] = config
    app.cleanup_ctx.append(_sweep_ctx)

    app.router.add_get("/api/status", _status)
    app.router.add_get("/api/snapshot", _snapshot)
    app.router.add_get("/api/positions/count", _position_count)
    app.router.add_put("/api/positions/{subject_id}", _update_position)
    app.router.add_delete("/api/positions/{subject_id}", _remove_position)
    app.router.add_post("/api/pins", _place_pin)
    app.router.add_get("/api/pins/nearest", _nearest_pin)
    app.router.add_post("/", _form_action)
    return app


def run(config: LiveMapConfig) -> None:
    """Serve a fresh store until interrupted."""
    app = create_app(LiveMapStore(config), config)
    _logger.info("livemap listening on http://%s:%d", config.host, config.port)
    web.run_app(
        app,
        host=config.host,
        port=config.port,
        access_log=access_logger if config.access_log else None,
        print=None,
    )
