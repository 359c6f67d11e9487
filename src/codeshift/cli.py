"""codeshift CLI — Typer application with plan, frame, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from codeshift import __version__

app = typer.Typer(
    name="codeshift",
    help="Plan the animated transition between two versions of a code block.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    """Route codeshift's loggers through Rich on stderr."""
    from rich.logging import RichHandler

    from codeshift.config.schema import LOG_LEVELS

    logging.basicConfig(
        level=LOG_LEVELS[level],
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


def _load_config(config: Optional[str], verbose: bool):
    from codeshift.config.loader import load_config
    from codeshift.errors import CodeShiftError

    try:
        cfg = load_config(Path.cwd(), config)
    except CodeShiftError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    _configure_logging("debug" if verbose else cfg.logging.level)
    return cfg


def _read_inputs(prev_file: Path, next_file: Path, annotations: Optional[Path]):
    """Read both code files and the optional annotation file. Exits 2 on bad input."""
    from codeshift.errors import CodeShiftError
    from codeshift.models import FullTween, Tween
    from codeshift.sources import load_annotations, read_source

    try:
        lines = FullTween(prev=read_source(prev_file), next=read_source(next_file))
        descriptors = load_annotations(annotations) if annotations else Tween()
    except CodeShiftError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return lines, descriptors


def _run(cache, lines, descriptors, focus_prev, focus_next, lines_prev, lines_next, lang):
    """Plan through *cache*. Exits 2 when a range string is invalid."""
    from codeshift.errors import CodeShiftError
    from codeshift.models import Tween

    try:
        return cache.get_or_parse(
            lines,
            focus=Tween(prev=focus_prev, next=focus_next),
            line_nums=Tween(prev=lines_prev, next=lines_next),
            annotations=descriptors,
            lang=lang,
        )
    except CodeShiftError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


_FOCUS_HELP = "Focus string, e.g. '2,4:6,8[3:10]'"
_LINES_HELP = "Visible line-number range, e.g. '10:24'"


# ── plan ──────────────────────────────────────────────────────────────────────


@app.command()
def plan(
    prev_file: Path = typer.Argument(..., help="Code before the transition"),
    next_file: Path = typer.Argument(..., help="Code after the transition"),
    focus_prev: Optional[str] = typer.Option(None, "--focus-prev", help=_FOCUS_HELP),
    focus_next: Optional[str] = typer.Option(None, "--focus-next", help=_FOCUS_HELP),
    lines_prev: Optional[str] = typer.Option(None, "--lines-prev", help=_LINES_HELP),
    lines_next: Optional[str] = typer.Option(None, "--lines-next", help=_LINES_HELP),
    annotations: Optional[Path] = typer.Option(None, "--annotations", "-a", help="YAML annotation file"),
    lang: Optional[str] = typer.Option(None, "--lang", help="Language hint passed through to the plan"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .codeshift.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output with debug logging"),
) -> None:
    """Compute and print the transition plan for PREV_FILE → NEXT_FILE."""
    from codeshift.config.schema import OUTPUT_FORMATS
    from codeshift.output import json_report, terminal
    from codeshift.pipeline import PlanCache

    if format and format not in OUTPUT_FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)

    cfg = _load_config(config, verbose)
    if format:
        cfg.output.format = format  # type: ignore[assignment]

    lines, descriptors = _read_inputs(prev_file, next_file, annotations)
    shift = _run(
        PlanCache(cfg.cache.max_entries), lines, descriptors,
        focus_prev, focus_next, lines_prev, lines_next,
        lang if lang is not None else cfg.plan.lang,
    )

    if verbose:
        console.print(f"[dim]Prev: {prev_file} ({shift.line_count.prev} lines)[/dim]")
        console.print(f"[dim]Next: {next_file} ({shift.line_count.next} lines)[/dim]")

    report_text: Optional[str] = None
    if cfg.output.format == "json":
        report_text = json_report.render(shift)
        print(report_text)
    else:
        terminal.render(
            shift,
            show_summary=cfg.output.show_summary,
            show_tokens=cfg.output.show_tokens,
        )

    if output:
        Path(output).write_text(report_text or json_report.render(shift), encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")


# ── frame ─────────────────────────────────────────────────────────────────────


@app.command()
def frame(
    prev_file: Path = typer.Argument(..., help="Code before the transition"),
    next_file: Path = typer.Argument(..., help="Code after the transition"),
    at: List[float] = typer.Option(..., "--at", "-t", min=0.0, max=1.0, help="Progress in [0, 1], repeatable"),
    focus_prev: Optional[str] = typer.Option(None, "--focus-prev", help=_FOCUS_HELP),
    focus_next: Optional[str] = typer.Option(None, "--focus-next", help=_FOCUS_HELP),
    lines_prev: Optional[str] = typer.Option(None, "--lines-prev", help=_LINES_HELP),
    lines_next: Optional[str] = typer.Option(None, "--lines-next", help=_LINES_HELP),
    annotations: Optional[Path] = typer.Option(None, "--annotations", "-a", help="YAML annotation file"),
    lang: Optional[str] = typer.Option(None, "--lang", help="Language hint passed through to the plan"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .codeshift.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output with debug logging"),
) -> None:
    """Sample every line's position at each --at progress value."""
    from codeshift.output import terminal
    from codeshift.pipeline import PlanCache

    cfg = _load_config(config, verbose)
    lines, descriptors = _read_inputs(prev_file, next_file, annotations)

    # every frame asks for the plan, as a renderer would; only the first computes it
    cache = PlanCache(cfg.cache.max_entries)
    for progress in at:
        shift = _run(
            cache, lines, descriptors,
            focus_prev, focus_next, lines_prev, lines_next,
            lang if lang is not None else cfg.plan.lang,
        )
        terminal.render_frame(shift, progress)

    if verbose:
        console.print(f"[dim]Plan cache: {cache.hits} hit(s), {cache.misses} miss(es)[/dim]")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .codeshift.toml in the current directory."""
    from codeshift.config.defaults import DEFAULT_TOML
    from codeshift.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"codeshift {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """codeshift — plan animated transitions between two versions of code."""
