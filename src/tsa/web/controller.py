"""Event handlers for the assistant page.

The controller owns no state of its own: it mutates the ``AssistantState``
it is handed and returns the notifications the page should show.
"""

from __future__ import annotations

import logging
from typing import Callable

from tsa.schemas.config import AppSettings, OpenAIConfig
from tsa.schemas.response import Failure, Success, assert_never
from tsa.shared.openai_service import OpenAIService
from tsa.web.state import AssistantState, Notification

logger = logging.getLogger(__name__)

ServiceFactory = Callable[..., OpenAIService]
"""Signature: (config, *, mock_delay) -> OpenAIService."""

DEMO_API_KEY = "demo"

MSG_EMPTY_CODE = "Please enter some TypeScript code to analyze"
MSG_LIVE_SUCCESS = "Code analyzed successfully with OpenAI! 🎉"
MSG_DEMO_SUCCESS = "Code analyzed with demo mode! 🎉"
MSG_UNEXPECTED = "Failed to analyze code. Please try again."


class AssistantController:
    """Delegates UI actions on one session's state to the analysis service."""

    def __init__(
        self,
        state: AssistantState,
        settings: AppSettings,
        service_factory: ServiceFactory = OpenAIService,
    ) -> None:
        self.state = state
        self.settings = settings
        self._service_factory = service_factory

    @property
    def live_mode(self) -> bool:
        return self.state.use_openai and bool(self.state.api_key)

    def set_code(self, code: str) -> None:
        self.state.code = code

    def set_api_key(self, api_key: str) -> None:
        self.state.api_key = api_key.strip()

    def toggle_mode(self) -> list[Notification]:
        """Flip live/demo mode. Does nothing until a key has been entered."""
        if not self.state.api_key:
            return []
        self.state.use_openai = not self.state.use_openai
        label = "Using OpenAI" if self.state.use_openai else "Demo mode"
        return [Notification(level="info", message=f"Switched to: {label}")]

    async def analyze(self, code: str | None = None) -> list[Notification]:
        """Run one analysis and return the notifications to show."""
        if code is not None:
            self.set_code(code)

        if not self.state.code.strip():
            return [Notification(level="error", message=MSG_EMPTY_CODE)]

        self.state.is_analyzing = True
        logger.info("Starting code analysis (%s mode)", "live" if self.live_mode else "demo")

        try:
            if self.live_mode:
                config = self.settings.openai_config(self.state.api_key)
                success_message = MSG_LIVE_SUCCESS
            else:
                config = OpenAIConfig(api_key=DEMO_API_KEY)
                success_message = MSG_DEMO_SUCCESS

            service = self._service_factory(
                config, mock_delay=self.settings.mock_delay_seconds,
            )
            try:
                if self.live_mode:
                    result = await service.analyze_code(self.state.code)
                else:
                    result = await service.get_mock_analysis(self.state.code)
            finally:
                await service.close()

            if isinstance(result, Success):
                self.state.analysis = result.data
                return [Notification(level="success", message=success_message)]
            elif isinstance(result, Failure):
                # Leave any earlier analysis on screen.
                return [
                    Notification(
                        level="error", message=f"Analysis failed: {result.error.message}",
                    )
                ]
            else:
                assert_never(result)
        except Exception:
            logger.exception("Analysis error")
            return [Notification(level="error", message=MSG_UNEXPECTED)]
        finally:
            self.state.is_analyzing = False
