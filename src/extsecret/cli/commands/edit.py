"""
Edit Command - populate missing ExternalSecret properties

Asks for (or computes from templates) every property the verify pass
reported as missing, then writes each key back to its secret store.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from extsecret.secrets.application import ErrorPolicy, ResolutionReport, SecretEditService
from extsecret.secrets.domain.exceptions import ExtSecretError, PropertyResolutionError, ResolutionFailedError
from extsecret.secrets.infrastructure import MissingReportVerifier, RichInput, YamlSchemaProvider
from extsecret.shared.infrastructure.config import settings
from extsecret.shared.infrastructure.logging import configure_logging, get_logger

console = Console()
logger = get_logger(__name__)


def _print_failures(failures: list[PropertyResolutionError]) -> None:
    table = Table(title="Failed keys", border_style="red")
    table.add_column("ExternalSecret")
    table.add_column("Key")
    table.add_column("Property")
    table.add_column("Error", overflow="fold")
    for failure in failures:
        table.add_row(str(failure.secret), failure.key, failure.property or "-", str(failure.cause))
    console.print(table)


def _print_report(report: ResolutionReport) -> None:
    table = Table(title="Populated keys", border_style="green")
    table.add_column("ExternalSecret")
    table.add_column("Backend")
    table.add_column("Key")
    table.add_column("Properties")
    for batch in report.written:
        table.add_row(str(batch.secret), batch.secret.backend_type.value, batch.key, ", ".join(batch.property_names()))
    console.print(table)
    console.print(f"[dim]{report.prompted} prompted, {report.templated} from templates[/dim]")


def edit(
    missing: Path = typer.Option(
        ..., "--missing", "-m", exists=True, dir_okay=False,
        help="Report of missing properties produced by the verify pass",
    ),
    namespace: Optional[str] = typer.Option(
        None, "--ns", "-n", help="The namespace to filter the ExternalSecret resources"
    ),
    directory: Path = typer.Option(
        Path("."), "--dir", "-d", help="The directory to look for the .jx/gitops/secret-schema.yaml file"
    ),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", help="Stop at the first key that cannot be populated"
    ),
):
    """
    Edit any missing properties in the ExternalSecret resources

    Example:
        extsecret edit --missing missing.yaml
        extsecret edit -m missing.yaml --ns jx --fail-fast
    """
    configure_logging()

    try:
        gaps = MissingReportVerifier.load(missing).verify(namespace)
        if not gaps:
            console.print("[green]The ExternalSecrets are populated[/green]")
            return

        schema = YamlSchemaProvider.load(directory / settings.schema_file)
        service = SecretEditService.for_directory(directory)
        policy = ErrorPolicy.FAIL_FAST if fail_fast else None
        report = service.run(gaps, schema, RichInput(), error_policy=policy)
    except ResolutionFailedError as e:
        if e.report is not None and e.report.written:
            _print_report(e.report)
        _print_failures(e.failures)
        console.print(f"[red]Error: {len(e.failures)} key(s) could not be populated[/red]")
        raise typer.Exit(1)
    except PropertyResolutionError as e:
        _print_failures([e])
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except ExtSecretError as e:
        logger.error("edit_failed", error=str(e))
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _print_report(report)
