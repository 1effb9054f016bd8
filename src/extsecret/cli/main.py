"""
extsecret CLI
Main entry point for the command-line interface

Usage:
    extsecret edit --missing missing.yaml   # Populate missing ExternalSecret properties
    extsecret template TEXT -s NAME -p KEY  # Evaluate a value template
    extsecret backends                      # List secret store editors
    extsecret version                       # Show version information
"""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from extsecret import __version__
from extsecret.cli.commands import edit, template
from extsecret.secrets.editors import EditorRegistry

app = typer.Typer(
    name="extsecret",
    help="extsecret - populate missing ExternalSecret properties",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

app.command(name="edit", help="Edit any missing properties in the ExternalSecret resources")(edit.edit)
app.command(name="template", help="Evaluate a value template")(template.template)


@app.command()
def backends():
    """List the secret store backends that can be written to"""
    table = Table(title="Secret editors", border_style="cyan")
    table.add_column("Backend type")
    for backend_type in EditorRegistry.available():
        table.add_row(backend_type.value)
    console.print(table)


@app.command()
def version():
    """Show extsecret version information"""
    console.print(Panel.fit(
        "[bold cyan]extsecret[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n",
        title="About extsecret",
        border_style="cyan"
    ))


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
