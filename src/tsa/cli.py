"""Typer CLI — ``tsa serve``, ``tsa analyze`` and ``tsa validate`` commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tsa.config import load_config

if TYPE_CHECKING:
    from tsa.schemas.analysis import CodeAnalysis
    from tsa.schemas.config import AppSettings

app = typer.Typer(
    name="tsa",
    help="TypeScript AI Assistant — AI-powered suggestions for modern TypeScript.",
    no_args_is_help=True,
)
console = Console()

_SEVERITY_STYLES = {"high": "red", "medium": "yellow", "low": "blue"}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO — noisy and unhelpful for users
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_settings(config: Optional[Path]) -> AppSettings:
    try:
        return load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to a settings YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a settings file without starting anything."""
    _setup_logging(verbose)
    cfg = _load_settings(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Server:       {cfg.host}:{cfg.port}")
    console.print(f"  Model:        {cfg.model}")
    console.print(f"  Max tokens:   {cfg.max_tokens}")
    console.print(f"  Temperature:  {cfg.temperature}")
    console.print(f"  API base URL: {cfg.api_base_url}")
    console.print(f"  Demo delay:   {cfg.mock_delay_seconds}s")
    console.print(f"  Max sessions: {cfg.max_sessions}")


@app.command()
def serve(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a settings YAML file"),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (overrides config)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (overrides config)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the browser UI."""
    import uvicorn

    from tsa.web.app import create_app

    _setup_logging(verbose)
    cfg = _load_settings(config)
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    console.print(f"[bold]TypeScript AI Assistant[/] on [cyan]http://{cfg.host}:{cfg.port}[/]")
    uvicorn.run(
        create_app(cfg),
        host=cfg.host,
        port=cfg.port,
        log_level="debug" if verbose else "info",
    )


@app.command()
def analyze(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="TypeScript file to analyze."),
    api_key: str = typer.Option("", "--api-key", "-k", help="OpenAI API key. Omit for demo mode."),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="gpt-4, gpt-4-turbo or gpt-3.5-turbo."),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens"),
    temperature: Optional[float] = typer.Option(None, "--temperature"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use demo data even when a key is given."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the analysis to .md or .json."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a settings YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Analyze a single file and print the results."""
    _setup_logging(verbose)
    cfg = _load_settings(config)
    overrides = {
        k: v
        for k, v in {"model": model, "max_tokens": max_tokens, "temperature": temperature}.items()
        if v is not None
    }
    if overrides:
        try:
            cfg = cfg.model_validate({**cfg.model_dump(), **overrides})
        except Exception as exc:
            console.print(f"[red]Invalid option:[/] {exc}")
            raise typer.Exit(code=1)

    code = file.read_text()
    if not code.strip():
        console.print("[red]Please enter some TypeScript code to analyze[/]")
        raise typer.Exit(code=1)

    live = bool(api_key) and not dry_run
    if not live:
        console.print("[yellow]DEMO mode — no API calls will be made.[/]\n")

    exit_code = asyncio.run(_run_analysis(cfg, code, api_key=api_key if live else "", output=output))
    if exit_code:
        raise typer.Exit(code=exit_code)


async def _run_analysis(
    cfg: AppSettings,
    code: str,
    *,
    api_key: str,
    output: "Path | None" = None,
) -> int:
    """Run one analysis and print it; returns the process exit code."""
    from tsa.output.markdown import render_markdown_report
    from tsa.schemas.config import OpenAIConfig
    from tsa.schemas.response import Failure, Success, assert_never
    from tsa.shared.openai_service import OpenAIService

    if api_key:
        service = OpenAIService(cfg.openai_config(api_key))
    else:
        service = OpenAIService(OpenAIConfig(api_key="demo"), mock_delay=cfg.mock_delay_seconds)

    try:
        with console.status("Analyzing...", spinner="dots"):
            if api_key:
                result = await service.analyze_code(code)
            else:
                result = await service.get_mock_analysis(code)
    finally:
        await service.close()

    if isinstance(result, Failure):
        console.print(f"[red]Analysis failed:[/] {escape(result.error.message)}")
        return 1
    elif not isinstance(result, Success):
        assert_never(result)

    analysis = result.data
    _print_analysis(analysis)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        if output.suffix.lower() == ".md":
            output.write_text(render_markdown_report(analysis))
        else:
            output.write_text(analysis.model_dump_json(by_alias=True, indent=2))
        console.print(f"\n[green]Analysis written to:[/] {output}")
    return 0


def _print_analysis(analysis: CodeAnalysis) -> None:
    """Print a human-readable summary to stdout."""
    console.print(f"\n[bold]── Suggestions ({len(analysis.suggestions)}) ──[/]\n")
    if analysis.suggestions:
        for s in analysis.suggestions:
            style = _SEVERITY_STYLES.get(s.severity, "white")
            where = f" line {s.line}" if s.line is not None else ""
            console.print(f"  [{style}]{s.severity:<6}[/] [bold]{s.type}[/]{where}: {escape(s.message)}")
            if s.modern_alternative:
                console.print(f"         [dim]{escape(s.modern_alternative)}[/]", highlight=False)
    else:
        console.print("  No suggestions found. Your code looks good! ✨")

    console.print(f"\n[bold]── Type Issues ({len(analysis.type_issues)}) ──[/]\n")
    if analysis.type_issues:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Line", justify="right")
        table.add_column("Issue", style="red")
        table.add_column("Solution", style="green")
        for issue in analysis.type_issues:
            table.add_row(str(issue.line), escape(issue.message), escape(issue.solution))
        console.print(table)
    else:
        console.print("  No type issues detected! 🎯")

    console.print(f"\n[bold]── Modern Patterns ({len(analysis.modern_patterns)}) ──[/]\n")
    if analysis.modern_patterns:
        for pattern in analysis.modern_patterns:
            body = f"{escape(pattern.description)}\n\n[dim]{escape(pattern.example)}[/]"
            if pattern.benefits:
                body += "\n\n" + "\n".join(f"• {escape(b)}" for b in pattern.benefits)
            console.print(Panel(body, title=f"[cyan]{escape(pattern.name)}[/]", expand=False))
    else:
        console.print("  No modern patterns suggested at this time 🔧")
