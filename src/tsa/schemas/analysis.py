"""Pydantic models for a code analysis and the pieces it is made of."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SuggestionType = Literal["improvement", "warning", "error", "optimization"]
Severity = Literal["low", "medium", "high"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Frozen(BaseModel):
    # Wire names stay camelCase (that's what the model is asked to emit);
    # either spelling is accepted on input.
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Suggestion(_Frozen):
    """A single actionable recommendation, optionally tied to a line."""

    type: SuggestionType
    message: str
    line: int | None = None
    severity: Severity
    modern_alternative: str | None = Field(default=None, alias="modernAlternative")


class TypeIssue(_Frozen):
    """A typing defect at a specific line, plus a proposed fix."""

    message: str
    line: int
    solution: str


class ModernPattern(_Frozen):
    """An educational recommendation not tied to a specific defect."""

    name: str
    description: str
    example: str
    benefits: tuple[str, ...] = ()


class AnalysisPayload(_Frozen):
    """The JSON object the model replies with.

    Missing or null arrays default to empty rather than failing validation.
    """

    suggestions: tuple[Suggestion, ...] = ()
    type_issues: tuple[TypeIssue, ...] = Field(default=(), alias="typeIssues")
    modern_patterns: tuple[ModernPattern, ...] = Field(default=(), alias="modernPatterns")

    @field_validator("suggestions", "type_issues", "modern_patterns", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return () if value is None else value


class CodeAnalysis(_Frozen):
    """Aggregate result of submitting a snippet for review."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    code: str
    suggestions: tuple[Suggestion, ...] = ()
    type_issues: tuple[TypeIssue, ...] = Field(default=(), alias="typeIssues")
    modern_patterns: tuple[ModernPattern, ...] = Field(default=(), alias="modernPatterns")
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_payload(cls, code: str, payload: AnalysisPayload) -> "CodeAnalysis":
        return cls(
            code=code,
            suggestions=payload.suggestions,
            type_issues=payload.type_issues,
            modern_patterns=payload.modern_patterns,
        )
