"""FastAPI app for team, rankings and skills lookups.

Standalone: python -m robostats --serve   (port from PORT / config.json)
Or include elsewhere:
    from robostats.server import router
    app.include_router(router)   # app.state.client must hold a RobotEventsClient

Every matched route answers 200 with a JSON body, including error payloads
and the ``/text`` variants. Unmatched paths get a plain-text 404.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ._config import Settings, load_settings
from .client import RobotEventsClient
from .event_stats import (
    DEFAULT_LIMIT,
    get_rankings,
    get_rankings_text,
    get_skills,
    get_skills_text,
)
from .team_stats import get_team_stats

logger = logging.getLogger(__name__)

TEXT = "text/plain"
JSON = "application/json"


def get_client(request: Request) -> RobotEventsClient:
    return request.app.state.client


def _respond(payload: dict, media_type: str) -> Response:
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return Response(content=body, media_type=media_type)


# ── Router ─────────────────────────────────────────────────────────────

router = APIRouter(tags=["RobotEvents"])


@router.get("/team/{program}/{team_number}")
def team_stats(
    program: str,
    team_number: str,
    client: RobotEventsClient = Depends(get_client),
):
    """Season stats for one team; shape depends on the program."""
    return _respond(get_team_stats(client, program.upper(), team_number), TEXT)


@router.get("/rank/{sku}")
@router.get("/rankings/{sku}")
def rankings(
    sku: str,
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=50),
    client: RobotEventsClient = Depends(get_client),
):
    """Top N qualification rankings for an event."""
    return _respond(get_rankings(client, sku, limit), JSON)


@router.get("/rank/{sku}/{flavor}")
@router.get("/rankings/{sku}/{flavor}")
def rankings_flavored(
    sku: str,
    flavor: str,
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=50),
    client: RobotEventsClient = Depends(get_client),
):
    if flavor == "text":
        return _respond(get_rankings_text(client, sku, limit), TEXT)
    return _respond(get_rankings(client, sku, limit), JSON)


@router.get("/skills/{sku}")
def skills(
    sku: str,
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=50),
    client: RobotEventsClient = Depends(get_client),
):
    """Top N skills scores for an event."""
    return _respond(get_skills(client, sku, limit), JSON)


@router.get("/skills/{sku}/{flavor}")
def skills_flavored(
    sku: str,
    flavor: str,
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=50),
    client: RobotEventsClient = Depends(get_client),
):
    if flavor == "text":
        return _respond(get_skills_text(client, sku, limit), TEXT)
    return _respond(get_skills(client, sku, limit), JSON)


# ── App factory ────────────────────────────────────────────────────────

async def _not_found(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return PlainTextResponse("404 Not Found", status_code=404)
    return await http_exception_handler(request, exc)


def create_app(
    settings: Settings | None = None,
    client: RobotEventsClient | None = None,
) -> FastAPI:
    """Build the app around one client, created from settings if not given."""
    if client is None:
        settings = settings or load_settings()
        client = RobotEventsClient(settings.re_api_key, base_url=settings.base_url)

    app = FastAPI(title="RoboStats API", version="1.0.0")
    app.state.client = client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _not_found)
    app.include_router(router)

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "robostats"}

    return app


def serve(settings: Settings | None = None) -> None:
    import uvicorn

    settings = settings or load_settings()
    app = create_app(settings)
    logger.info("Starting RoboStats API on port %d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


# ── Standalone mode ────────────────────────────────────────────────────

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    serve()
