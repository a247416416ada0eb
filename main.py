"""Stundenraster — Haupt-CLI.

Verwendung:
  python main.py config init              Standard-Konfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py generate                 Testdaten erzeugen und als JSON speichern
  python main.py validate                 Machbarkeits-Check
  python main.py solve                    Check → Stundenplan erzeugen → speichern
  python main.py show <klasse>            Stundenplan einer Klasse anzeigen
  python main.py move <klasse> <von-tag> <von-std> <nach-tag> <nach-std>
                                          Stunde verschieben / tauschen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfade für gespeicherte Daten
DEFAULT_DATA_JSON = Path("output/school_data.json")
DEFAULT_TIMETABLE_JSON = Path("output/timetable.json")


def _load_data_or_abort(json_path: str, config_path: Optional[str] = None):
    """Lädt den Datensatz (optional mit Config aus YAML) oder bricht ab."""
    from config.manager import ConfigManager
    from models.school_data import SchoolData

    p = Path(json_path)
    if not p.exists():
        console.print(
            f"[red]Keine Datendatei gefunden: {p}[/red]\n"
            "Verwenden Sie [bold]python main.py generate[/bold] oder geben Sie "
            "[bold]--data[/bold] an."
        )
        sys.exit(1)
    try:
        data = SchoolData.load_json(p)
        if config_path:
            data = data.model_copy(update={"config": ConfigManager().load(Path(config_path))})
    except (ValidationError, ValueError, FileNotFoundError) as e:
        console.print(f"[red bold]Daten ungültig:[/red bold]\n{e}")
        sys.exit(1)
    return data


def _load_timetable_or_abort(path: str):
    from solver.scheduler import ScheduleResult

    try:
        return ScheduleResult.load_json(Path(path))
    except (ValidationError, FileNotFoundError) as e:
        console.print(
            f"[red]{e}[/red]\n"
            "Erzeugen Sie zunächst einen Stundenplan mit [bold]python main.py solve[/bold]."
        )
        sys.exit(1)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Config überschreiben.")
def config_init(force: bool):
    """Legt die Standard-Konfiguration als YAML an."""
    from config.defaults import default_engine_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_engine_config())


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    from config.manager import ConfigManager

    try:
        config = ConfigManager().load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    week = config.week
    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  "
        f"{week.days_per_week} Tage ({', '.join(week.day_names[:week.days_per_week])})  |  "
        f"Standard: {week.standard_periods} Stunden/Tag",
        title="Engine-Konfiguration",
        border_style="cyan",
    ))


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--classes", "num_classes", default=4, help="Anzahl Klassen.")
@click.option("--teachers", "num_teachers", default=8, help="Anzahl Lehrkräfte.")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON), help="Pfad für JSON-Export.")
def cmd_generate(seed: int, num_classes: int, num_teachers: int, json_path: str):
    """Erzeugt Testdaten (Lehrkräfte, Klassen, Anforderungen)."""
    from config.manager import ConfigManager
    from data.fake_data import FakeDataGenerator

    try:
        config = ConfigManager().load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    gen = FakeDataGenerator(config, seed=seed)
    try:
        data = gen.generate(num_classes=num_classes, num_teachers=num_teachers)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    gen.print_summary(data)
    console.print(f"\n[dim]{data.summary()}[/dim]")

    out_path = Path(json_path)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.option("--data", "json_path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--config", "config_path", default=None, help="Alternative YAML-Konfiguration.")
def cmd_validate(json_path: str, config_path: Optional[str]):
    """Führt den Machbarkeits-Check auf dem Datensatz durch."""
    from models.school_data import UnknownReferenceError

    data = _load_data_or_abort(json_path, config_path)
    console.print(f"\n{data.summary()}\n")
    try:
        report = data.validate_feasibility()
    except UnknownReferenceError as e:
        console.print(f"[red bold]Datenfehler:[/red bold] {e}")
        sys.exit(1)
    report.print_rich()

    sys.exit(0 if report.is_feasible else 1)


# ─── SOLVE ────────────────────────────────────────────────────────────────────

@click.command("solve")
@click.option("--data", "json_path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--config", "config_path", default=None, help="Alternative YAML-Konfiguration.")
@click.option("--output", "-o", default=str(DEFAULT_TIMETABLE_JSON),
              help="Ausgabepfad für den Stundenplan.")
def cmd_solve(json_path: str, config_path: Optional[str], output: str):
    """Machbarkeits-Check, dann Stundenplan erzeugen und speichern."""
    from analysis.solution_validator import SolutionValidator
    from models.school_data import UnknownReferenceError

    data = _load_data_or_abort(json_path, config_path)
    try:
        report = data.validate_feasibility()
        if not report.is_feasible:
            report.print_rich()
            console.print("[red bold]Abbruch:[/red bold] Eingaben korrigieren und erneut versuchen.")
            sys.exit(1)
        result = data.generate()
    except UnknownReferenceError as e:
        console.print(f"[red bold]Datenfehler:[/red bold] {e}")
        sys.exit(1)

    console.print(f"[green]✓[/green] {len(result.slots)} Stunden platziert.")
    if result.message:
        console.print(f"[yellow]⚠ {result.message}[/yellow]")
        for w in result.warnings:
            console.print(f"  [yellow]• {w.class_id} {w.subject} ({w.teacher_id}): "
                          f"{w.dropped} fehlen[/yellow]")

    SolutionValidator().validate(result.slots, data).print_rich()

    out_path = Path(output)
    result.save_json(out_path)
    console.print(f"[green]✓[/green] Stundenplan gespeichert: {out_path}")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.argument("class_id")
@click.option("--data", "json_path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--timetable", default=str(DEFAULT_TIMETABLE_JSON),
              help="Pfad zum gespeicherten Stundenplan.")
def cmd_show(class_id: str, json_path: str, timetable: str):
    """Zeigt den Stundenplan einer Klasse als Raster."""
    data = _load_data_or_abort(json_path)
    result = _load_timetable_or_abort(timetable)

    cls = data.class_map().get(class_id)
    if cls is None:
        console.print(f"[red]Klasse nicht gefunden: {class_id}[/red]")
        sys.exit(1)

    week = data.config.week
    grid = result.grid()
    max_periods = max((cls.periods_on(d) for d in week.days), default=0)

    table = Table(title=f"{cls.name} ({cls.shift.value})", box=box.ROUNDED, show_lines=True)
    table.add_column("Std.", justify="right")
    for day in week.days:
        table.add_column(week.day_name(day))
    for period in range(1, max_periods + 1):
        row = [str(period)]
        for day in week.days:
            slot = grid.get((class_id, day, period))
            if slot is not None:
                row.append(f"{slot.subject}\n[dim]{slot.teacher_name}[/dim]")
            else:
                row.append("-" if period <= cls.periods_on(day) else "")
        table.add_row(*row)
    console.print(table)


# ─── MOVE ─────────────────────────────────────────────────────────────────────

@click.command("move")
@click.argument("class_id")
@click.argument("from_day")
@click.argument("from_period", type=int)
@click.argument("to_day")
@click.argument("to_period", type=int)
@click.option("--data", "json_path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--timetable", default=str(DEFAULT_TIMETABLE_JSON),
              help="Pfad zum gespeicherten Stundenplan.")
def cmd_move(class_id: str, from_day: str, from_period: int, to_day: str,
             to_period: int, json_path: str, timetable: str):
    """Verschiebt eine Stunde; ist das Ziel belegt, werden beide getauscht."""
    from models.school_data import UnknownReferenceError
    from solver.editing import ManualEditValidator

    data = _load_data_or_abort(json_path)
    result = _load_timetable_or_abort(timetable)

    week = data.config.week
    try:
        source_day = week.parse_day(from_day)
        target_day = week.parse_day(to_day)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    validator = ManualEditValidator(classes=data.classes, teachers=data.teachers)
    try:
        edit = validator.move(result.slots, class_id, source_day, from_period,
                              target_day, to_period)
    except UnknownReferenceError as e:
        console.print(f"[red bold]Datenfehler:[/red bold] {e}")
        sys.exit(1)
    if not edit.ok:
        console.print(f"[red bold]Abgelehnt:[/red bold] {edit.reason}")
        sys.exit(1)

    result.with_slots(edit.slots).save_json(Path(timetable))
    console.print(
        f"[green]✓[/green] {class_id}: {week.day_name(source_day)} {from_period}. → "
        f"{week.day_name(target_day)} {to_period}. gespeichert."
    )


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliches Logging.")
def cli(verbose: bool):
    """Stundenraster — konfliktfreie Wochenstundenpläne für Schulen."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_validate)
cli.add_command(cmd_solve)
cli.add_command(cmd_show)
cli.add_command(cmd_move)


if __name__ == "__main__":
    main()
