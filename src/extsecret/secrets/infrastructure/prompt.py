"""Terminal prompts using rich."""

from rich.console import Console
from rich.prompt import Confirm, Prompt

from extsecret.secrets.domain.exceptions import PromptError


class RichInput:
    """InputSurface asking the operator on the terminal."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def _show_help(self, help: str) -> None:
        if help:
            self.console.print(f"[dim]{help}[/dim]")

    def pick_password(self, message: str, help: str) -> str:
        self._show_help(help)
        try:
            return Prompt.ask(message, password=True, console=self.console)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptError(f"input aborted for {message}") from e

    def confirm(self, message: str, help: str) -> bool:
        self._show_help(help)
        try:
            return Confirm.ask(message, console=self.console)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptError(f"input aborted for {message}") from e
