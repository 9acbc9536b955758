"""Command line for building and inspecting reading plans.

Usage:
    quran-tracker plan --scope part:30 --amount 1 --start 2025-01-01
    quran-tracker validate --scope part:31 --amount 0
    quran-tracker chapter 2
"""

import json
from datetime import date

import typer
from rich.console import Console
from rich.table import Table

from quran_tracker.config.settings import settings
from quran_tracker.core.logger import configure_logging
from quran_tracker.errors import LocationIndexError
from quran_tracker.index.location_index import LocationIndex, load_location_index
from quran_tracker.plans.generator import generate_plan
from quran_tracker.plans.types import Goal, NamedChapter, NamedPart, ReadingUnit, Scope, WholeText
from quran_tracker.plans.validators import validate_goal
from quran_tracker.utils.calendar import ALL_WEEKDAYS

console = Console()

app = typer.Typer(
    name="quran-tracker",
    help="Quran reading goals - plan generation and inspection",
    add_completion=False,
)

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    configure_logging(debug)


def parse_scope(value: str) -> Scope:
    """Parse "whole", "part:<n>" or "chapter:<n>" into a scope.

    A bare "part" or "chapter" yields a scope with no index, which validation
    reports.
    """
    kind, _, raw_index = value.strip().lower().partition(":")
    if kind == "whole" and not raw_index:
        return WholeText()
    if kind not in ("part", "chapter"):
        raise typer.BadParameter(f"Unknown scope '{value}'. Use whole, part:<n> or chapter:<n>.")
    index: int | None = None
    if raw_index:
        try:
            index = int(raw_index)
        except ValueError:
            raise typer.BadParameter(f"Scope index must be a number, got '{raw_index}'") from None
    return NamedPart(index=index) if kind == "part" else NamedChapter(index=index)


def parse_weekdays(value: str) -> frozenset[int]:
    """Parse "all" or a comma-separated list of weekday indices (0 = Sunday)."""
    text = value.strip().lower()
    if text == "all":
        return ALL_WEEKDAYS
    if not text:
        return frozenset()
    try:
        return frozenset(int(part) for part in text.split(",") if part.strip())
    except ValueError:
        raise typer.BadParameter(f"Weekdays must be 'all' or numbers 0-6, got '{value}'") from None


def _build_goal(scope: str, unit: ReadingUnit, amount: int, start: str | None, deadline: str | None, days: str) -> Goal:
    return Goal(
        id="cli",
        scope=parse_scope(scope),
        unit=unit,
        daily_amount=amount,
        start_date=start or date.today(),
        deadline=deadline,
        active_weekdays=parse_weekdays(days),
    )


def _load_index() -> LocationIndex:
    try:
        return load_location_index(settings.location_index_path)
    except LocationIndexError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e


def _print_errors(errors: list[str]) -> None:
    console.print("[red]Goal is not valid:[/red]")
    for error in errors:
        console.print(f"  - {error}")


@app.command()
def plan(
    scope: str = typer.Option("whole", "--scope", "-s", help="whole, part:<n> or chapter:<n>"),
    unit: ReadingUnit = typer.Option(ReadingUnit.PAGE, "--unit", "-u", help="Pacing unit"),
    amount: int = typer.Option(1, "--amount", "-a", help="Units per reading day"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD), default today"),
    deadline: str | None = typer.Option(None, "--deadline", help="Optional deadline (YYYY-MM-DD)"),
    days: str = typer.Option("all", "--days", "-d", help="'all' or weekday indices, 0=Sunday, e.g. 1,3,5"),
    limit: int = typer.Option(0, "--limit", "-n", help="Show only the first N assignments (0 = all)"),
    as_json: bool = typer.Option(False, "--json", help="Print assignments as JSON"),
) -> None:
    """Generate and print the reading plan for a goal."""
    goal = _build_goal(scope, unit, amount, start, deadline, days)
    validation = validate_goal(goal)
    if not validation.valid:
        _print_errors(validation.errors)
        raise typer.Exit(1)

    assignments = generate_plan(goal, _load_index())
    shown = assignments[:limit] if limit > 0 else assignments

    if as_json:
        typer.echo(json.dumps([a.model_dump(mode="json") for a in shown], indent=2))
        return

    table = Table(title=f"Reading plan - {len(assignments)} days")
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Day")
    table.add_column("Pages", justify="right")
    table.add_column("Verses")
    for number, assignment in enumerate(shown, start=1):
        pages = (
            str(assignment.from_page)
            if assignment.from_page == assignment.to_page
            else f"{assignment.from_page}-{assignment.to_page}"
        )
        table.add_row(
            str(number),
            assignment.date.isoformat(),
            WEEKDAY_NAMES[assignment.date.isoweekday() % 7],
            pages,
            f"{assignment.from_verse} - {assignment.to_verse}",
        )
    console.print(table)
    if assignments:
        console.print(f"[green]Finishes on {assignments[-1].date.isoformat()}[/green]")
    else:
        console.print("[yellow]Nothing to schedule for this goal.[/yellow]")


@app.command()
def validate(
    scope: str = typer.Option("whole", "--scope", "-s", help="whole, part:<n> or chapter:<n>"),
    unit: ReadingUnit = typer.Option(ReadingUnit.PAGE, "--unit", "-u", help="Pacing unit"),
    amount: int = typer.Option(1, "--amount", "-a", help="Units per reading day"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD), default today"),
    deadline: str | None = typer.Option(None, "--deadline", help="Optional deadline (YYYY-MM-DD)"),
    days: str = typer.Option("all", "--days", "-d", help="'all' or weekday indices, 0=Sunday"),
) -> None:
    """Check a goal without generating its plan."""
    validation = validate_goal(_build_goal(scope, unit, amount, start, deadline, days))
    if not validation.valid:
        _print_errors(validation.errors)
        raise typer.Exit(1)
    console.print("[green]Goal is valid.[/green]")


@app.command()
def chapter(chapter_id: int = typer.Argument(..., help="Chapter number (1-114)")) -> None:
    """Show the page and verse span of a chapter."""
    bounds = _load_index().chapter_bounds(chapter_id)
    if bounds is None:
        console.print(f"[red]Unknown chapter {chapter_id}[/red]")
        raise typer.Exit(1)
    console.print(
        f"Chapter {bounds.chapter_id} ({bounds.name}): {bounds.verse_count} verses, "
        f"pages {bounds.start_page}-{bounds.end_page}, {bounds.start_verse} - {bounds.end_verse}"
    )


@app.command()
def part(part_id: int = typer.Argument(..., help="Part number (1-30)")) -> None:
    """Show the page and verse span of a part."""
    bounds = _load_index().part_bounds(part_id)
    if bounds is None:
        console.print(f"[red]Unknown part {part_id}[/red]")
        raise typer.Exit(1)
    console.print(
        f"Part {bounds.part_id}: pages {bounds.start_page}-{bounds.end_page}, "
        f"{bounds.start_verse} - {bounds.end_verse}"
    )


if __name__ == "__main__":
    app()
