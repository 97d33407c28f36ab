"""Besprechungsplaner — Haupt-CLI.

Verwendung:
  python main.py config init              Standardkonfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py template                 Beispiel-Anfragedatei erzeugen
  python main.py plan <anfragen.yaml>     Anfragen einplanen und anzeigen
  python main.py plan <datei> --export    ... und als Excel exportieren
  python main.py demo                     Beispiel-Anfragen einplanen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfad für die Beispiel-Anfragedatei
DEFAULT_REQUESTS = Path("requests.yaml")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config_path: Optional[str]):
    """Lädt die Konfiguration (Standard, falls keine Datei existiert) oder bricht ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        return mgr.load_or_default(Path(config_path) if config_path else None)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
def config_init(force: bool):
    """Schreibt die Standardkonfiguration als YAML."""
    from config.defaults import default_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {mgr.DEFAULT_CONFIG}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_config())


@cmd_config.command("show")
@click.option("--config", "config_path", default=None, help="Pfad zur Konfigurationsdatei.")
def config_show(config_path: Optional[str]):
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config(config_path)
    console.print(Panel(f"[bold]{config.title}[/bold]", title="Konfiguration",
                        border_style="cyan"))

    table = Table(box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    pc = config.placement
    table.add_row("Besprechungsgrenze (h/Woche)", f"{pc.meeting_cap_hours_per_week:.2f}")
    table.add_row("Zufalls-Seed", "zufällig" if pc.random_seed is None else str(pc.random_seed))
    table.add_row("Woche 1 ab", config.export.base_date.strftime("%d.%m.%Y"))
    table.add_row("Ausgabe", str(Path(config.export.output_dir) / config.export.excel_filename))
    table.add_row("Log-Level", config.log_level)
    console.print(table)


# ─── TEMPLATE ─────────────────────────────────────────────────────────────────

@click.command("template")
@click.option("--output", "-o", default=str(DEFAULT_REQUESTS),
              help="Ausgabepfad für die Anfragedatei.")
def cmd_template(output: str):
    """Erzeugt eine Beispiel-Anfragedatei (YAML)."""
    from data.request_loader import write_template

    out_path = Path(output)
    write_template(out_path)
    console.print(f"[green]✓[/green] Vorlage gespeichert: {out_path}")


# ─── PLAN ─────────────────────────────────────────────────────────────────────

def _print_outcomes(outcomes) -> None:
    table = Table(title="Anfragen", box=box.ROUNDED)
    table.add_column("Art")
    table.add_column("Anfrage", style="bold")
    table.add_column("Status")
    table.add_column("Details")
    for o in outcomes:
        art = "Reservierung" if o.request_type == "reservation" else "Besprechung"
        if o.success:
            status = "[green]✓ eingeplant[/green]"
            details = o.message
            if o.request_type == "meeting":
                details += f"  (Woche {', '.join(str(w + 1) for w in o.weeks)})"
        else:
            status = f"[red]✗ {o.error_kind}[/red]"
            details = o.message
        table.add_row(art, o.label, status, details)
    console.print(table)


def _run_plan(batch, config, seed: Optional[int], export: Optional[str],
              validate: bool) -> int:
    """Plant einen Anfrage-Stapel ein, zeigt das Ergebnis und exportiert optional."""
    from solver.scheduler import MeetingScheduler
    from data.request_loader import run_batch
    from export.tui_renderer import render_load_table, render_schedule

    if seed is not None:
        config = config.model_copy(update={
            "placement": config.placement.model_copy(update={"random_seed": seed}),
        })
    scheduler = MeetingScheduler(config)
    outcomes = run_batch(scheduler, batch)
    _print_outcomes(outcomes)

    snapshot = scheduler.snapshot()
    for table in render_schedule(snapshot, config):
        console.print(table)
    console.print(render_load_table(snapshot, config.placement.meeting_cap_hours_per_week))

    exit_code = 0 if all(o.success for o in outcomes) else 2

    if validate:
        from analysis.schedule_validator import ScheduleValidator
        report = ScheduleValidator(config.placement.meeting_cap_hours_per_week).validate(snapshot)
        report.print_rich()
        if not report.is_valid:
            exit_code = 1

    if export is not None:
        from export.excel_export import ExcelExporter
        out_path = Path(export) if export else (
            Path(config.export.output_dir) / config.export.excel_filename
        )
        ExcelExporter(snapshot, config).export(out_path)
        console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")

    return exit_code


@click.command("plan")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--config", "config_path", default=None, help="Pfad zur Konfigurationsdatei.")
@click.option("--seed", type=int, default=None, help="Zufalls-Seed für die Wochenwahl.")
@click.option("--export", "export", default=None, is_flag=False, flag_value="",
              help="Excel-Export (optional mit Pfad).")
@click.option("--validate/--no-validate", default=True,
              help="Plan nach dem Einplanen validieren.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Ausgaben.")
def cmd_plan(datei: Path, config_path: Optional[str], seed: Optional[int],
             export: Optional[str], validate: bool, verbose: bool):
    """Plant Reservierungen und Besprechungen aus einer YAML-Datei ein."""
    from data.request_loader import load_requests, RequestFileError

    config = _load_config(config_path)
    _setup_logging("DEBUG" if verbose else config.log_level)

    console.print(f"[bold]Lade Anfragen:[/bold] {datei}")
    try:
        batch = load_requests(datei)
    except RequestFileError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{escape(str(e))}")
        sys.exit(1)

    sys.exit(_run_plan(batch, config, seed, export, validate))


# ─── DEMO ─────────────────────────────────────────────────────────────────────

@click.command("demo")
@click.option("--seed", type=int, default=42, help="Zufalls-Seed für die Wochenwahl.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Ausgaben.")
def cmd_demo(seed: int, verbose: bool):
    """Plant die eingebauten Beispiel-Anfragen ein."""
    from config.defaults import default_config, example_batch
    from data.request_loader import RequestBatch

    config = default_config()
    _setup_logging("DEBUG" if verbose else config.log_level)
    batch = RequestBatch.model_validate(example_batch())
    sys.exit(_run_plan(batch, config, seed, export=None, validate=True))


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Besprechungsplaner: 4 Wochen, Montag–Donnerstag, 09:00–16:30.

    Starten Sie mit: python main.py template && python main.py plan requests.yaml
    """


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_template)
cli.add_command(cmd_plan)
cli.add_command(cmd_demo)


if __name__ == "__main__":
    main()
