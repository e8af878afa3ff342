# display.py
# All terminal output for the ReACT agent loop.
#
# This module owns presentation entirely. agent.py never formats strings;
# it calls named functions here. Swap this file to change the entire UI.
#
# Colour language:
#   cyan: routing events (goal received, step boundaries)
#   magenta: ReACT internals (Action / Observation)
#   yellow: step budget
#   green: final answers
#   red: unregistered tools, tool and planner failures

from typing import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from react_loop.models import Message, Role

console = Console()

_ROLE_STYLE = {
    Role.USER: "cyan",
    Role.TOOL: "magenta",
    Role.ASSISTANT: "green",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _label(tag: str, color: str) -> Text:
    t = Text()
    t.append(f" {tag} ", style=f"bold white on {color}")
    return t


def _mono(value: str, max_len: int = 120) -> str:
    if len(value) > max_len:
        value = value[:max_len] + "…"
    return escape(value)


# ---------------------------------------------------------------------------
# Run entry
# ---------------------------------------------------------------------------


def banner(planner: str, tools: Sequence[str]) -> None:
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]ReACT Agent Loop[/bold cyan]\n"
            "[dim]Decide → Act → Observe, one tool call per step[/dim]\n\n"
            f"[dim]Planner :[/dim] [white]{escape(planner)}[/white]\n"
            f"[dim]Tools   :[/dim] [white]{escape(', '.join(tools)) or '—'}[/white]",
            border_style="cyan",
            padding=(1, 4),
        )
    )


def goal_received(goal: str, max_steps: int) -> None:
    console.print()
    console.print(Rule(f"[cyan]NEW GOAL — budget {max_steps} step(s)[/cyan]", style="cyan"))
    console.print(
        Panel(
            f"[white]{escape(goal)}[/white]",
            title=_label("GOAL", "cyan"),
            border_style="cyan",
            padding=(0, 2),
        )
    )


def step_start(step: int, max_steps: int) -> None:
    console.print(f"[bold cyan]  STEP [{step}/{max_steps}][/bold cyan]")


# ---------------------------------------------------------------------------
# ReACT internals
# ---------------------------------------------------------------------------


def react_action(tool: str, payload: str) -> None:
    console.print(
        f"  [magenta]Action[/magenta]   [bold white]{escape(tool)}[/bold white]"
        f"  [dim]{_mono(repr(payload), 80)}[/dim]"
    )


def react_observation(observation: str) -> None:
    console.print(f"  [magenta]Observe[/magenta]  [white]{_mono(observation, 140)}[/white]")


def tool_not_found(tool_name: str) -> None:
    console.print(
        f"  [bold red]✗ Tool[/bold red] [white]{escape(repr(tool_name))}[/white] "
        "[bold red]is not registered.[/bold red] [dim]Recorded as observation.[/dim]"
    )


def tool_failed(tool_name: str, diagnostic: str) -> None:
    console.print(
        f"  [bold red]✗ {escape(tool_name)} failed:[/bold red] [white]{_mono(diagnostic, 120)}[/white]"
    )


def planner_failed(diagnostic: str) -> None:
    console.print(f"  [bold red]✗ Planner failed:[/bold red] [white]{_mono(diagnostic, 120)}[/white]")


# ---------------------------------------------------------------------------
# Termination
# ---------------------------------------------------------------------------


def budget_exhausted(max_steps: int) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold yellow]Step budget of {max_steps} exhausted without a stop decision.[/bold yellow]\n"
            "[dim]Returning the fixed fallback answer. The planner is not consulted.[/dim]",
            title=_label("BUDGET EXHAUSTED", "yellow"),
            border_style="yellow",
            padding=(0, 2),
        )
    )


def final_result(result: str) -> None:
    console.print()
    console.print(
        Panel(
            f"[white]{escape(result)}[/white]",
            title=_label("ANSWER", "green"),
            border_style="green",
            padding=(1, 2),
        )
    )
    console.print()


# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------


def transcript_summary(memory: Sequence[Message]) -> None:
    console.print()
    table = Table(
        box=box.SIMPLE_HEAVY,
        border_style="dim",
        show_header=True,
        header_style="bold dim",
        padding=(0, 1),
    )
    table.add_column("#", justify="center", width=4)
    table.add_column("At", width=15)
    table.add_column("Role", width=10)
    table.add_column("Content", style="dim white")

    for index, message in enumerate(memory, start=1):
        style = _ROLE_STYLE[message.role]
        table.add_row(
            str(index),
            message.at.strftime("%H:%M:%S.%f")[:-3],
            f"[{style}]{message.role.value}[/{style}]",
            _mono(message.content, 80),
        )

    console.print(
        Panel(
            table,
            title="[dim]TRANSCRIPT[/dim]",
            border_style="dim",
            padding=(0, 1),
        )
    )
