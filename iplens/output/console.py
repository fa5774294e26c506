"""
Rich console output for IPLens diagnostics

Everything printed here goes to stderr; stdout carries only results.
"""

from rich.console import Console
from rich.markup import escape


class ConsoleOutput:
    """Human-readable errors and warnings on the error stream"""

    def __init__(self):
        self.console = Console(stderr=True, soft_wrap=True)

    def print_error(self, message: str):
        """Print error message"""
        self.console.print(f"[bold red]Error:[/] {escape(message)}")

    def print_warning(self, message: str):
        """Print warning message"""
        self.console.print(f"[yellow]Warning:[/] {escape(message)}")
