"""Markdown report builder — renders a CodeAnalysis to a Markdown document."""

from __future__ import annotations

from tsa.schemas.analysis import CodeAnalysis


def render_markdown_report(analysis: CodeAnalysis) -> str:
    """Render a CodeAnalysis into a Markdown string."""
    sections: list[str] = []

    sections.append("# TypeScript Analysis Report\n")
    sections.append(f"*Analysis {analysis.id} — generated {analysis.timestamp.isoformat()}*\n")

    sections.append("## Code\n")
    sections.append(f"```typescript\n{analysis.code}\n```\n")

    # Suggestions
    sections.append(f"## Suggestions ({len(analysis.suggestions)})\n")
    if analysis.suggestions:
        for i, s in enumerate(analysis.suggestions, 1):
            where = f" (line {s.line})" if s.line is not None else ""
            sections.append(f"{i}. **[{s.severity}] {s.type}**{where}: {s.message}")
            if s.modern_alternative:
                sections.append(f"   - Modern alternative: `{s.modern_alternative}`")
        sections.append("")
    else:
        sections.append("No suggestions found. Your code looks good!\n")

    # Type issues
    sections.append(f"## Type Issues ({len(analysis.type_issues)})\n")
    if analysis.type_issues:
        sections.append("| Line | Issue | Solution |")
        sections.append("|------|-------|----------|")
        for issue in analysis.type_issues:
            sections.append(f"| {issue.line} | {_cell(issue.message)} | {_cell(issue.solution)} |")
        sections.append("")
    else:
        sections.append("No type issues detected!\n")

    # Modern patterns
    sections.append(f"## Modern Patterns ({len(analysis.modern_patterns)})\n")
    if analysis.modern_patterns:
        for pattern in analysis.modern_patterns:
            sections.append(f"### {pattern.name}\n")
            sections.append(f"{pattern.description}\n")
            sections.append(f"```typescript\n{pattern.example}\n```\n")
            if pattern.benefits:
                sections.append("**Benefits:**")
                for benefit in pattern.benefits:
                    sections.append(f"- {benefit}")
                sections.append("")
    else:
        sections.append("No modern patterns suggested at this time\n")

    return "\n".join(sections)


def _cell(text: str) -> str:
    """Escape pipes so text stays inside its table cell."""
    return text.replace("|", "\\|").replace("\n", " ")
