"""Tests for Markdown report generation."""

from __future__ import annotations

from tsa.output.markdown import render_markdown_report
from tsa.schemas.analysis import CodeAnalysis, ModernPattern, Suggestion, TypeIssue


def _make_analysis() -> CodeAnalysis:
    """Build a sample CodeAnalysis for testing."""
    return CodeAnalysis(
        code="const ids: string[] = [];",
        suggestions=(
            Suggestion(
                type="improvement",
                message="Prefer readonly arrays",
                line=1,
                severity="medium",
                modern_alternative="const ids: readonly string[] = [];",
            ),
            Suggestion(type="optimization", message="Hoist constant", severity="low"),
        ),
        type_issues=(
            TypeIssue(message="Type a | b is too wide", line=2, solution="Narrow it"),
        ),
        modern_patterns=(
            ModernPattern(
                name="Branded Types",
                description="Type-safe IDs",
                example="type UserId = string & { readonly __brand: unique symbol };",
                benefits=("Type safety", "Zero runtime cost"),
            ),
        ),
    )


class TestMarkdownReport:
    def test_contains_all_sections(self) -> None:
        md = render_markdown_report(_make_analysis())
        assert md.startswith("# TypeScript Analysis Report")
        assert "## Suggestions (2)" in md
        assert "## Type Issues (1)" in md
        assert "## Modern Patterns (1)" in md

    def test_code_is_fenced(self) -> None:
        md = render_markdown_report(_make_analysis())
        assert "```typescript\nconst ids: string[] = [];\n```" in md

    def test_suggestion_details(self) -> None:
        md = render_markdown_report(_make_analysis())
        assert "1. **[medium] improvement** (line 1): Prefer readonly arrays" in md
        assert "Modern alternative: `const ids: readonly string[] = [];`" in md
        assert "2. **[low] optimization**: Hoist constant" in md

    def test_table_cells_are_escaped(self) -> None:
        md = render_markdown_report(_make_analysis())
        assert "| 2 | Type a \\| b is too wide | Narrow it |" in md

    def test_pattern_benefits(self) -> None:
        md = render_markdown_report(_make_analysis())
        assert "### Branded Types" in md
        assert "- Type safety" in md
        assert "- Zero runtime cost" in md

    def test_empty_analysis(self) -> None:
        md = render_markdown_report(CodeAnalysis(code="x"))
        assert "No suggestions found. Your code looks good!" in md
        assert "No type issues detected!" in md
        assert "No modern patterns suggested at this time" in md
