#!/usr/bin/env python3
"""
Health Core CLI - Unit conversion and health input validation

Command-line interface for converting clinical values between unit systems,
validating input payloads and printing calculated results.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from health_core.calculations import calculate_health_results, get_bmi_category
from health_core.config import settings
from health_core.fields import HealthFieldLibrary
from health_core.mappings import metric_for_field
from health_core.types import MetricType, SuggestionPriority, UnitSystem
from health_core.units import (
    UNIT_DEFS,
    coerce_unit_system,
    detect_unit_system,
    format_height_display,
    format_number,
    format_with_unit,
    get_unit_definition,
    range_for,
    to_canonical,
)
from health_core.utils import setup_logging
from health_core.validation import validate_health_inputs

app = typer.Typer(
    name="health-core",
    help="Clinical unit conversion and health input validation",
    add_completion=False,
)
console = Console()

PRIORITY_STYLES = {
    SuggestionPriority.URGENT: "bold red",
    SuggestionPriority.ATTENTION: "yellow",
    SuggestionPriority.INFO: "dim",
}


def resolve_unit_system(system: Optional[str]) -> UnitSystem:
    """Explicit option, then the configured locale, then the configured default."""
    if system:
        return coerce_unit_system(system.lower())
    if settings.DEFAULT_LOCALE:
        return detect_unit_system(settings.DEFAULT_LOCALE)
    return coerce_unit_system(settings.DEFAULT_UNIT_SYSTEM)


def load_payload(path: Path) -> Dict[str, Any]:
    """Read a JSON inputs payload, exiting with a message on failure."""
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON in {path}: {e}[/red]")
        raise typer.Exit(1)


def _system_or_exit(system: Optional[str]) -> UnitSystem:
    try:
        return resolve_unit_system(system)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def convert(
    value: float = typer.Argument(..., help="Value in the source unit system"),
    metric: str = typer.Option(..., "-m", "--metric", help="Metric type, e.g. ldl, weight, hba1c"),
    to_system: str = typer.Option(..., "-t", "--to-system", help="Target unit system: si or conventional"),
    from_system: str = typer.Option("si", "-f", "--from-system", help="Source unit system"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Convert a value between unit systems."""
    setup_logging(level="DEBUG" if verbose else "WARNING")

    try:
        unit_def = get_unit_definition(metric)
        source = coerce_unit_system(from_system.lower())
        target = coerce_unit_system(to_system.lower())
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    canonical = to_canonical(unit_def.metric, value, source)
    source_text = f"{format_number(value, unit_def.decimal_places[source])} {unit_def.labels[source]}".strip()
    console.print(f"{source_text} = [bold green]{format_with_unit(unit_def.metric, canonical, target)}[/bold green]")


@app.command()
def units(
    system: Optional[str] = typer.Option(None, "-s", "--system", help="Unit system: si or conventional"),
):
    """Show unit labels, precision and valid ranges."""
    unit_system = _system_or_exit(system)

    table = Table(title=f"Units ({unit_system.value})")
    table.add_column("Field", style="cyan")
    table.add_column("Metric")
    table.add_column("Unit")
    table.add_column("Decimals", justify="right")
    table.add_column("Valid range", justify="right")

    for rule in HealthFieldLibrary.all_rules():
        if not rule.has_unit:
            continue
        field, metric = rule.key, rule.metric
        unit_def = UNIT_DEFS[metric]
        decimals = unit_def.decimal_places[unit_system]
        low, high = range_for(metric, unit_system)
        table.add_row(
            field,
            metric.value,
            unit_def.labels[unit_system],
            str(decimals),
            f"{format_number(low, decimals)} - {format_number(high, decimals)}",
        )

    console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="JSON file with canonical (SI) health inputs"),
    system: Optional[str] = typer.Option(None, "-s", "--system", help="Unit system for messages"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Validate a health inputs payload."""
    setup_logging(level="DEBUG" if verbose else "WARNING")
    unit_system = _system_or_exit(system)
    outcome = validate_health_inputs(load_payload(file))

    if not outcome.ok:
        table = Table(title="Validation Errors")
        table.add_column("Field", style="cyan")
        table.add_column("Error", style="red")
        for field, message in outcome.errors_for(unit_system).items():
            table.add_row(field, message)
        console.print(table)
        raise typer.Exit(1)

    table = Table(title="Validated Inputs")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    for field, value in outcome.data.items():
        metric = metric_for_field(field)
        rule = HealthFieldLibrary.get(field)
        table.add_row(
            rule.display_name if rule else field,
            format_with_unit(metric, value, unit_system) if metric else str(value),
        )
    console.print(table)
    console.print("[bold green]✓ Inputs are valid[/bold green]")


@app.command()
def results(
    file: Path = typer.Argument(..., help="JSON file with canonical (SI) health inputs"),
    system: Optional[str] = typer.Option(None, "-s", "--system", help="Unit system for display"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Calculate results and suggestions for a health inputs payload."""
    setup_logging(level="DEBUG" if verbose else "WARNING")
    unit_system = _system_or_exit(system)
    outcome = validate_health_inputs(load_payload(file))

    if not outcome.ok:
        for field, message in outcome.errors_for(unit_system).items():
            console.print(f"[red]{field}: {message}[/red]")
        raise typer.Exit(1)

    inputs = outcome.inputs()
    health = calculate_health_results(inputs, unit_system)

    table = Table(title="Health Results")
    table.add_column("Result", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Height", format_height_display(inputs.height_cm, unit_system))
    table.add_row("Ideal body weight", format_with_unit(MetricType.WEIGHT, health.ideal_body_weight, unit_system))
    table.add_row("Protein target", f"{health.protein_target} g/day")
    if health.bmi is not None:
        table.add_row("BMI", f"{health.bmi} ({get_bmi_category(health.bmi)})")
    if health.waist_to_height_ratio is not None:
        table.add_row("Waist-to-height", f"{health.waist_to_height_ratio}")
    if health.non_hdl_cholesterol is not None:
        table.add_row("Non-HDL cholesterol", format_with_unit(MetricType.LDL, health.non_hdl_cholesterol, unit_system))
    if health.egfr is not None:
        table.add_row("eGFR", f"{health.egfr:g} mL/min/1.73m²")
    if health.age is not None:
        table.add_row("Age", str(health.age))
    console.print(table)

    for suggestion in health.suggestions:
        style = PRIORITY_STYLES.get(suggestion.priority, "")
        console.print(Panel(
            suggestion.description,
            title=f"[{style}]{suggestion.title}[/{style}]" if style else suggestion.title,
            subtitle=suggestion.category.value,
        ))


if __name__ == "__main__":
    app()
