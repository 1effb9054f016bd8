"""Command execution for external secret store CLIs."""

from .command_executor import CommandExecutor, CommandResult

__all__ = ["CommandExecutor", "CommandResult"]
