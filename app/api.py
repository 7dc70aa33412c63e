"""HTTP API for the voice weather service."""

from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .weather_handler import HandlerResult, WeatherHandler
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")

# Common methods are routed here; the rest reach the handler via unrouted_method_handler.
WEATHER_METHODS = ["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE", "HEAD"]

WEATHER_PATH = "/api/weather"

router = APIRouter()
HANDLER = WeatherHandler(settings)


async def _read_params(request: Request) -> Any:
    """Query parameters for GET, decoded JSON body for POST, {} when absent or unreadable."""
    if request.method == "GET":
        return dict(request.query_params)
    if request.method != "POST":
        return {}
    raw = await request.body()
    if not raw:
        return {}
    try:
        return await request.json()
    except ValueError:
        logger.info("Ignoring request body that is not valid JSON")
        return {}


def _render(result: HandlerResult) -> Response:
    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(content=result.body, status_code=result.status_code, headers=result.headers)


@router.api_route("/weather", methods=WEATHER_METHODS)
async def weather(request: Request) -> Response:
    """Current-day weather plus a speakable summary for `lat`/`lng`."""
    params = await _read_params(request)
    result = await run_in_threadpool(HANDLER.handle, request.method, params)
    return _render(result)


async def unrouted_method_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Let WeatherHandler answer methods outside WEATHER_METHODS (TRACE, WebDAV verbs, ...)."""
    if exc.status_code == 405 and request.url.path == WEATHER_PATH:
        return _render(HANDLER.handle(request.method))
    return await http_exception_handler(request, exc)
