"""Base class for gateway wrappers that echo commands before running them."""

import click

from forkflow.output import user_output


class PrintingBase:
    """Shared plumbing for printing wrappers.

    Subclasses also inherit a gateway ABC, print the command for each mutating
    operation and then delegate to the wrapped implementation. Queries are
    delegated silently.
    """

    def __init__(self, wrapped, *, quiet: bool = False) -> None:
        """Create a printing wrapper.

        Args:
            wrapped: The implementation to delegate to (usually a Real* gateway)
            quiet: Suppress the echoed commands
        """
        self._wrapped = wrapped
        self._quiet = quiet

    def _emit(self, message: str) -> None:
        if not self._quiet:
            user_output(message)

    def _format_command(self, command: str) -> str:
        return click.style(f"$ {command}", dim=True)
