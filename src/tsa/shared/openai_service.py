"""Async OpenAI wrapper that turns a TypeScript snippet into a CodeAnalysis.

Two paths, one result shape:
- ``analyze_code`` — a single chat-completion round trip to OpenAI.
- ``get_mock_analysis`` — canned demo data after a short artificial delay.

Both return ``Success[CodeAnalysis]`` or ``Failure``; nothing raises.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any

import httpx
from openai import APIStatusError, AsyncOpenAI

from tsa.schemas.analysis import (
    AnalysisPayload,
    CodeAnalysis,
    ModernPattern,
    Suggestion,
    TypeIssue,
)
from tsa.schemas.config import OpenAIConfig
from tsa.schemas.response import ANALYSIS_FAILED, APIResponse, Success, failure
from tsa.shared.prompts import build_messages

logger = logging.getLogger(__name__)

MOCK_DELAY_SECONDS = 1.5


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from text that may contain markdown fences."""
    text = text.strip()

    # 1. Clean JSON response
    if text.startswith("{"):
        return _as_object(json.loads(text))

    # 2. ```json ... ``` or ``` ... ``` fenced block
    match = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if match:
        return _as_object(json.loads(match.group(1).strip()))

    raise ValueError(
        f"Could not extract JSON from model response (length={len(text)}). "
        f"First 300 chars: {text[:300]!r}"
    )


def _as_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def parse_analysis_payload(content: str) -> AnalysisPayload:
    """Parse the model's reply; missing arrays become empty."""
    return AnalysisPayload.model_validate(extract_json(content))


class OpenAIService:
    """Thin async wrapper around the OpenAI SDK for code analysis.

    ``http_client`` exists so tests can swap in an ``httpx.MockTransport``.
    The SDK's own retries are turned off: one request per call.
    """

    def __init__(
        self,
        config: OpenAIConfig,
        *,
        mock_delay: float = MOCK_DELAY_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._mock_delay = mock_delay
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            max_retries=0,
            http_client=http_client,
        )

    # ------------------------------------------------------------------
    # Live analysis
    # ------------------------------------------------------------------

    async def analyze_code(self, code: str) -> APIResponse[CodeAnalysis]:
        """Send *code* to OpenAI and parse the reply into a CodeAnalysis."""
        try:
            logger.info(
                "Analyzing TypeScript code with OpenAI (model=%s, %d chars)",
                self.config.model, len(code),
            )
            response = await self._client.chat.completions.create(
                model=self.config.model,
                messages=build_messages(code),
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )

            choices = getattr(response, "choices", None) or []
            content = getattr(choices[0].message, "content", None) if choices else None
            if not content:
                raise ValueError("No response content from OpenAI")

            payload = parse_analysis_payload(content)
            analysis = CodeAnalysis.from_payload(code, payload)

            logger.info(
                "Code analysis completed successfully (%d suggestions, %d type issues, "
                "%d patterns)",
                len(analysis.suggestions),
                len(analysis.type_issues),
                len(analysis.modern_patterns),
            )
            return Success[CodeAnalysis](data=analysis)

        except APIStatusError as exc:
            reason = exc.response.reason_phrase if exc.response is not None else ""
            message = f"OpenAI API error: {exc.status_code} {reason}".strip()
            logger.error("OpenAI analysis failed: %s", message)
            return failure(ANALYSIS_FAILED, message)
        except Exception as exc:
            logger.error("OpenAI analysis failed: %s", exc)
            return failure(ANALYSIS_FAILED, str(exc) or "Unknown error occurred")

    # ------------------------------------------------------------------
    # Demo mode
    # ------------------------------------------------------------------

    async def get_mock_analysis(self, code: str) -> APIResponse[CodeAnalysis]:
        """Return the canned demo analysis after the artificial delay."""
        await asyncio.sleep(self._mock_delay)

        analysis = CodeAnalysis(
            code=code,
            suggestions=MOCK_SUGGESTIONS,
            type_issues=MOCK_TYPE_ISSUES,
            modern_patterns=MOCK_PATTERNS,
        )
        logger.debug("Returning demo analysis %s", analysis.id)
        return Success[CodeAnalysis](data=analysis)

    async def close(self) -> None:
        await self._client.close()


# ======================================================================
# Demo data — zero API calls
# ======================================================================

MOCK_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion(
        type="improvement",
        message="Consider using const assertions for better type inference",
        line=1,
        severity="medium",
        modern_alternative='const config = { apiUrl: "..." } as const;',
    ),
    Suggestion(
        type="optimization",
        message="Use readonly arrays for immutable data structures",
        severity="low",
        modern_alternative="readonly string[] instead of string[]",
    ),
)

MOCK_TYPE_ISSUES: tuple[TypeIssue, ...] = (
    TypeIssue(
        message="Missing return type annotation",
        line=3,
        solution="Add explicit return type: (): Promise<User> =>",
    ),
)

MOCK_PATTERNS: tuple[ModernPattern, ...] = (
    ModernPattern(
        name="Branded Types",
        description="Create type-safe IDs using branded types",
        example="type UserId = string & { readonly __brand: unique symbol };",
        benefits=("Type safety", "Prevents mixing different ID types", "Zero runtime cost"),
    ),
    ModernPattern(
        name="Template Literal Types",
        description="Use template literal types for dynamic string types",
        example="type EventName<T> = `on${Capitalize<T>}`;",
        benefits=(
            "Compile-time string validation",
            "Better autocomplete",
            "Type-safe event handling",
        ),
    ),
)
