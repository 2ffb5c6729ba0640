"""Tests for the analysis models and the success/failure wrapper."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tsa.schemas.analysis import AnalysisPayload, CodeAnalysis, Suggestion, TypeIssue
from tsa.schemas.response import (
    ANALYSIS_FAILED,
    APIError,
    Failure,
    Success,
    assert_never,
    failure,
)


class TestSuggestion:
    def test_accepts_camel_case_wire_names(self) -> None:
        s = Suggestion.model_validate(
            {"type": "warning", "message": "m", "severity": "high", "modernAlternative": "x as const"}
        )
        assert s.modern_alternative == "x as const"
        assert s.line is None

    def test_accepts_snake_case_names(self) -> None:
        s = Suggestion(type="error", message="m", severity="low", modern_alternative="y")
        assert s.modern_alternative == "y"

    def test_rejects_unknown_severity(self) -> None:
        with pytest.raises(ValidationError):
            Suggestion(type="improvement", message="m", severity="critical")

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            Suggestion(type="style", message="m", severity="low")

    def test_is_frozen(self) -> None:
        s = Suggestion(type="improvement", message="m", severity="low")
        with pytest.raises(ValidationError):
            s.message = "changed"


class TestTypeIssue:
    def test_line_is_required(self) -> None:
        with pytest.raises(ValidationError, match="line"):
            TypeIssue(message="m", solution="s")


class TestAnalysisPayload:
    def test_missing_arrays_default_to_empty(self) -> None:
        payload = AnalysisPayload.model_validate({})
        assert payload.suggestions == ()
        assert payload.type_issues == ()
        assert payload.modern_patterns == ()

    def test_null_arrays_default_to_empty(self) -> None:
        payload = AnalysisPayload.model_validate(
            {"suggestions": None, "typeIssues": [], "modernPatterns": None}
        )
        assert payload.suggestions == ()
        assert payload.type_issues == ()
        assert payload.modern_patterns == ()

    def test_parses_camel_case_arrays(self) -> None:
        payload = AnalysisPayload.model_validate(
            {
                "typeIssues": [{"message": "m", "line": 4, "solution": "s"}],
                "modernPatterns": [
                    {"name": "n", "description": "d", "example": "e", "benefits": ["b1", "b2"]}
                ],
            }
        )
        assert payload.type_issues[0].line == 4
        assert payload.modern_patterns[0].benefits == ("b1", "b2")


class TestCodeAnalysis:
    def test_ids_are_unique(self) -> None:
        a = CodeAnalysis(code="let x = 1;")
        b = CodeAnalysis(code="let x = 1;")
        assert a.id != b.id

    def test_timestamp_is_timezone_aware(self) -> None:
        assert CodeAnalysis(code="x").timestamp.tzinfo is not None

    def test_json_uses_wire_names(self) -> None:
        dumped = CodeAnalysis(code="x").model_dump(by_alias=True)
        assert "typeIssues" in dumped
        assert "modernPatterns" in dumped


class TestResponse:
    def test_success_has_no_error(self) -> None:
        result = Success[CodeAnalysis](data=CodeAnalysis(code="x"))
        assert result.success is True
        assert not hasattr(result, "error")

    def test_failure_has_no_data(self) -> None:
        result = failure(ANALYSIS_FAILED, "boom")
        assert result.success is False
        assert result.error == APIError(code=ANALYSIS_FAILED, message="boom")
        assert not hasattr(result, "data")

    def test_success_cannot_carry_error(self) -> None:
        with pytest.raises(ValidationError):
            Success[CodeAnalysis](
                data=CodeAnalysis(code="x"), success=False,
            )

    def test_failure_requires_error(self) -> None:
        with pytest.raises(ValidationError):
            Failure()

    def test_parametrized_success_is_a_success(self) -> None:
        assert isinstance(Success[CodeAnalysis](data=CodeAnalysis(code="x")), Success)

    def test_failure_details(self) -> None:
        result = failure(ANALYSIS_FAILED, "boom", {"status": 500})
        assert result.error.details == {"status": 500}

    def test_assert_never_raises(self) -> None:
        with pytest.raises(AssertionError, match="Unexpected value"):
            assert_never("neither")  # type: ignore[arg-type]
