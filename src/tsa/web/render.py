"""HTML page renderer — turns an AssistantState into the assistant page."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from tsa.schemas.config import AppSettings
from tsa.web.state import AssistantState, Notification

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_SEVERITY_CLASSES = {
    "high": "badge-high",
    "medium": "badge-medium",
    "low": "badge-low",
}

_TYPE_ICONS = {
    "error": "⚠",
    "warning": "⚠",
    "improvement": "💡",
    "optimization": "✨",
}


def severity_class(severity: str) -> str:
    return _SEVERITY_CLASSES.get(severity, "badge-neutral")


def type_icon(kind: str) -> str:
    return _TYPE_ICONS.get(kind, "</>")


def _make_env() -> Environment:
    env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)
    env.filters["severity_class"] = severity_class
    env.filters["type_icon"] = type_icon
    return env


_ENV = _make_env()


def render_page(
    state: AssistantState,
    *,
    notifications: list[Notification] | None = None,
    settings: AppSettings | None = None,
) -> str:
    """Render the full assistant page for one session."""
    template = _ENV.get_template("assistant.html")
    settings = settings or AppSettings()
    return template.render(
        state=state,
        analysis=state.analysis,
        notifications=notifications or [],
        model=settings.model,
        live_mode=state.use_openai and bool(state.api_key),
    )
