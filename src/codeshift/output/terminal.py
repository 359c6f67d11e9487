"""Rich terminal reporter — per-line plan table, frame sampling, summary."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from codeshift.models import CodeShift, LineWithElement, Move
from codeshift.tween.params import TweenParams

_MOVE_STYLE = {
    Move.STAY: "bold black on bright_cyan",
    Move.EXIT: "bold white on red",
    Move.ENTER: "bold white on green",
}

_MOVE_ICON = {
    Move.STAY: "=",
    Move.EXIT: "-",
    Move.ENTER: "+",
}


def _move_pill(move: Move) -> Text:
    return Text(f" {_MOVE_ICON[move]} {move.value.upper()} ", style=_MOVE_STYLE[move])


def _num(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


def _describe_tween(params: TweenParams) -> str:
    if params.fixed:
        return f"{params.value:g}"
    assert params.extremes is not None and params.interval is not None
    a, b = params.extremes
    start, end = params.interval
    ease = getattr(params.ease, "__name__", "?")
    return f"{a:g}→{b:g} [{start:.2f}, {end:.2f}] {ease}"


def _focus_marks(line: LineWithElement) -> str:
    return "".join("●" if f else "○" for f in (line.focused.prev, line.focused.next))


def _line_text(line: LineWithElement, show_tokens: bool) -> Text:
    if not show_tokens:
        return Text(line.text)
    text = Text()
    for i, group in enumerate(line.groups):
        if i:
            text.append("│", style="dim")
        style = "bold" if group.focused.prev or group.focused.next else ""
        text.append(group.element, style=style)
    return text


def render(
    shift: CodeShift,
    *,
    show_summary: bool = True,
    show_tokens: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print the plan as a table using Rich."""
    console = console or Console()

    table = Table(
        title="CodeShift Plan",
        show_lines=False,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Move", justify="center", width=11)
    table.add_column("Prev", justify="right", style="green")
    table.add_column("Next", justify="right", style="green")
    table.add_column("Focus", justify="center")
    table.add_column("Tween X", style="cyan")
    table.add_column("Tween Y", style="magenta")
    table.add_column("Code", min_width=20)

    for line in shift.lines:
        table.add_row(
            str(line.key),
            _move_pill(line.move),
            _num(line.line_number.prev),
            _num(line.line_number.next),
            _focus_marks(line),
            _describe_tween(line.tween_x),
            _describe_tween(line.tween_y),
            _line_text(line, show_tokens),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, shift)


def render_frame(shift: CodeShift, progress: float, *, console: Optional[Console] = None) -> None:
    """Print every line's sampled x / y at *progress*."""
    console = console or Console()
    table = Table(title=f"Frame at t={progress:.2f}", title_style="bold", border_style="dim")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Move", justify="center", width=11)
    table.add_column("x", justify="right", style="cyan")
    table.add_column("y", justify="right", style="magenta")
    table.add_column("Code", min_width=20)

    for line in shift.lines:
        table.add_row(
            str(line.key),
            _move_pill(line.move),
            f"{line.tween_x.sample(progress):.3f}",
            f"{line.tween_y.sample(progress):.3f}",
            line.text,
        )
    console.print(table)


def _print_summary(console: Console, shift: CodeShift) -> None:
    start, end = shift.vertical_interval
    console.print()
    console.print(f"[dim]Lines:[/dim]           {shift.line_count.prev} → {shift.line_count.next}")
    console.print(f"[dim]Exits:[/dim]           {shift.exit_count}")
    console.print(f"[dim]Enters:[/dim]          {shift.enter_count}")
    console.print(f"[dim]Vertical window:[/dim] [{start:.2f}, {end:.2f}]")
    console.print(
        f"[dim]Focused lines:[/dim]   "
        f"{_num(shift.first_focused_line_number.prev)}..{_num(shift.last_focused_line_number.prev)}"
        f" → {_num(shift.first_focused_line_number.next)}..{_num(shift.last_focused_line_number.next)}"
    )
    if shift.binding_misses:
        console.print(
            f"[yellow]⚠[/yellow]  {len(shift.binding_misses)} annotation(s) did not bind "
            "(run with --verbose for details)"
        )
