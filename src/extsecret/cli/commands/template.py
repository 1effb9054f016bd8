"""
Template Command - evaluate a value template

Useful to check what a schema ``template`` would produce against the
secrets currently in the cluster.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from extsecret.secrets.application import SecretEditService
from extsecret.secrets.domain.exceptions import ExtSecretError
from extsecret.shared.infrastructure.logging import configure_logging

console = Console(stderr=True)


def template(
    template_text: Optional[str] = typer.Argument(
        None, help="Template text; read from --file or stdin when omitted"
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="Read the template from a file"
    ),
    secret_name: str = typer.Option(..., "--secret", "-s", help="Secret the value is computed for"),
    property: str = typer.Option(..., "--property", "-p", help="Property the value is computed for"),
    namespace: str = typer.Option("default", "--ns", "-n", help="Namespace for unqualified secret lookups"),
    directory: Path = typer.Option(
        Path("."), "--dir", "-d", help="The directory containing jx-requirements.yml"
    ),
):
    """
    Evaluate a value template and print the result

    Example:
        extsecret template '{{ auth("docker-auth", "username", "password") }}' -s docker -p auth
        extsecret template -f htpasswd.tmpl -s bucketrepo -p htpasswd --ns jx
    """
    configure_logging()

    if file is not None:
        text = file.read_text(encoding="utf-8")
    elif template_text is not None:
        text = template_text
    else:
        text = sys.stdin.read()

    try:
        service = SecretEditService.for_directory(directory)
        value = service.evaluate_template(namespace, secret_name, property, text)
    except ExtSecretError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    typer.echo(value, nl=False)
