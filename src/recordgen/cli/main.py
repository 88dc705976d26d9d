"""
recordgen CLI - Main entry point.

Provides commands for expanding marked struct/class declarations with a
full-field constructor and withers, and for inspecting how fields are treated.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from recordgen.config.loader import (
    DEFAULT_CONFIG_NAME,
    create_config_from_args,
    generate_default_config,
    load_config_from_yaml,
    merge_cli_overrides,
)
from recordgen.config.models import RecordGenConfig
from recordgen.exceptions import (
    ConfigurationError,
    DeclarationSourceError,
    SynthesisError,
)
from recordgen.languages.registry import get_plugin
from recordgen.synthesis.assembler import describe_fields

app = typer.Typer(
    name="recordgen",
    help="Generate full-field constructors and withers for struct and class declarations",
    no_args_is_help=True,
)

console = Console()


# =============================================================================
# Helper Functions
# =============================================================================


def configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(name)s: %(message)s")


def validate_path(path: str, must_exist: bool = True) -> Path:
    """Validate and return a Path object."""
    p = Path(path)
    if must_exist and not p.exists():
        raise typer.BadParameter(f"Path does not exist: {path}")
    return p


def resolve_config(
    config: Optional[str],
    language: Optional[str],
    strict: bool = False,
    output: Optional[str] = None,
) -> RecordGenConfig:
    """Load the YAML config if given, then apply CLI flags."""
    output_path = Path(output) if output else None
    if config:
        cfg = load_config_from_yaml(validate_path(config))
        return merge_cli_overrides(cfg, strict=strict, language=language, output_path=output_path)
    return create_config_from_args(language=language, strict=strict, output_path=output_path)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def expand(
    source: str = typer.Argument(..., help="Source file containing marked declarations"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the expanded source here"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to configuration YAML file"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Source language (swift/java)"),
    strict: bool = typer.Option(False, "--strict", help="Fail on fields without a name or type annotation"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Expand every marked declaration of a source file.

    Examples:
        recordgen expand Sources/User.swift
        recordgen expand src/User.java -o build/User.java --strict
    """
    configure_logging(verbose)

    try:
        source_path = validate_path(source)
        cfg = resolve_config(config, language, strict=strict, output=output)
        plugin = get_plugin(cfg.language, source_path)

        with open(source_path, "r", encoding="utf-8") as f:
            source_code = f.read()

        result = plugin.expand_source(source_code, cfg)

        if cfg.output.output_path:
            cfg.output.output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(cfg.output.output_path, "w", encoding="utf-8") as f:
                f.write(result.source)
            console.print(
                f"[green]✓[/green] Expanded {len(result.expanded)} declarations "
                f"({result.member_count} members) -> {cfg.output.output_path}"
            )
        else:
            typer.echo(result.source, nl=False)

        for name in result.skipped:
            console.print(f"[yellow]Skipped {name}: not a struct or class[/yellow]")

    except ConfigurationError as e:
        console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        raise typer.Exit(1)
    except (SynthesisError, DeclarationSourceError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


@app.command()
def inspect(
    source: str = typer.Argument(..., help="Source file to inspect"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Source language (swift/java)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Show how the fields of every declaration in a file are classified.
    """
    configure_logging(verbose)

    try:
        source_path = validate_path(source)
        cfg = create_config_from_args(language=language)
        plugin = get_plugin(cfg.language, source_path)
        declarations = plugin.parse_file(source_path, cfg.synthesis.marker)
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        raise typer.Exit(1)
    except (DeclarationSourceError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not declarations:
        console.print("[yellow]No declarations found.[/yellow]")
        return

    for declaration in declarations:
        marked = declaration.span is not None and declaration.span.marker_start is not None
        title = f"{declaration.name} ({declaration.kind.value})"
        if marked:
            title += f" @{cfg.synthesis.marker}"

        table = Table(title=title)
        table.add_column("Field", style="cyan")
        table.add_column("Type")
        table.add_column("Kind")
        table.add_column("Mutable", justify="center")
        table.add_column("Private", justify="center")
        table.add_column("Default", justify="center")
        table.add_column("Wither", justify="center")

        def mark(flag: bool) -> str:
            return "[green]✓[/green]" if flag else ""

        for report in describe_fields(declaration):
            kind = report.classification
            if kind == "stored" and not report.representable:
                kind = "[yellow]unrepresentable[/yellow]"
            table.add_row(
                escape(report.name or "<pattern>"),
                escape(report.type or ""),
                kind,
                mark(report.mutable),
                mark(report.private),
                mark(report.has_default),
                mark(report.wither),
            )
        console.print(table)


@app.command()
def init(
    output: str = typer.Option(f"./{DEFAULT_CONFIG_NAME}", "--output", "-o", help="Output path for config file"),
):
    """
    Generate a default configuration file.
    """
    output_path = Path(output)

    if output_path.exists():
        if not typer.confirm(f"{output} already exists. Overwrite?"):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Abort()

    generate_default_config(output_path)
    console.print(f"[green]✓[/green] Generated configuration file: {output}")
    console.print(
        Panel(
            "Set [bold]synthesis.marker[/bold] to the attribute that selects declarations,\n"
            "and [bold]synthesis.strict[/bold] to fail on untyped fields.",
            title="Next steps",
            border_style="cyan",
        )
    )


# =============================================================================
# Entry Point
# =============================================================================


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
