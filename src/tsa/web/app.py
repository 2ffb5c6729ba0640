"""Starlette ASGI application for the assistant UI."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.routing import Route

from tsa.output.markdown import render_markdown_report
from tsa.schemas.config import AppSettings
from tsa.shared.openai_service import OpenAIService
from tsa.web.controller import AssistantController, ServiceFactory
from tsa.web.render import render_page
from tsa.web.state import Session, SessionStore

logger = logging.getLogger(__name__)

SESSION_COOKIE = "tsa_session"


def create_app(
    settings: AppSettings | None = None,
    service_factory: ServiceFactory = OpenAIService,
    store: SessionStore | None = None,
) -> Starlette:
    """Build the Starlette application.

    Args:
        settings: App settings; defaults when omitted
        service_factory: Builds the analysis service for each request
        store: Session store; a fresh in-memory one when omitted
    """
    settings = settings or AppSettings()
    store = store or SessionStore(max_sessions=settings.max_sessions)

    def _session(request: Request) -> tuple[str, Session]:
        return store.get_or_create(request.cookies.get(SESSION_COOKIE))

    def _with_cookie(response: Response, session_id: str) -> Response:
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
        return response

    def _back_home(session_id: str) -> Response:
        return _with_cookie(RedirectResponse("/", status_code=303), session_id)

    def _controller(session: Session) -> AssistantController:
        return AssistantController(session.state, settings, service_factory)

    async def homepage(request: Request) -> Response:
        session_id, session = _session(request)
        html = render_page(session.state, notifications=session.pop_flashes(), settings=settings)
        return _with_cookie(HTMLResponse(html), session_id)

    async def save_api_key(request: Request) -> Response:
        session_id, session = _session(request)
        form = await request.form()
        _controller(session).set_api_key(str(form.get("api_key", "")))
        return _back_home(session_id)

    async def toggle_mode(request: Request) -> Response:
        session_id, session = _session(request)
        session.flash(_controller(session).toggle_mode())
        return _back_home(session_id)

    async def analyze(request: Request) -> Response:
        session_id, session = _session(request)
        form = await request.form()
        code = form.get("code")
        notes = await _controller(session).analyze(str(code) if code is not None else None)
        session.flash(notes)
        return _back_home(session_id)

    def _export_name(ext: str) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        return f'attachment; filename="typescript-analysis-{ts}.{ext}"'

    async def export_json(request: Request) -> Response:
        """Download the current analysis as JSON."""
        session_id, session = _session(request)
        analysis = session.state.analysis
        if analysis is None:
            return JSONResponse({"error": "No analysis available"}, status_code=404)
        return _with_cookie(
            Response(
                content=analysis.model_dump_json(by_alias=True, indent=2),
                media_type="application/json",
                headers={"Content-Disposition": _export_name("json")},
            ),
            session_id,
        )

    async def export_markdown(request: Request) -> Response:
        """Download the current analysis as a Markdown report."""
        session_id, session = _session(request)
        analysis = session.state.analysis
        if analysis is None:
            return PlainTextResponse("No analysis available", status_code=404)
        return _with_cookie(
            Response(
                content=render_markdown_report(analysis),
                media_type="text/markdown",
                headers={"Content-Disposition": _export_name("md")},
            ),
            session_id,
        )

    async def healthz(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "sessions": len(store)})

    routes = [
        Route("/", homepage),
        Route("/settings/api-key", save_api_key, methods=["POST"]),
        Route("/settings/mode", toggle_mode, methods=["POST"]),
        Route("/analyze", analyze, methods=["POST"]),
        Route("/export.json", export_json),
        Route("/export.md", export_markdown),
        Route("/healthz", healthz),
    ]

    logger.debug("Assistant app created (model=%s)", settings.model)
    return Starlette(routes=routes)
