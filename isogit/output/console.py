# isogit Console Output
# Rich-based console output for user-friendly display

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for repository operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, stderr: bool = False):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            stderr: Write to stderr instead of stdout.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored, highlight=False, soft_wrap=True, stderr=stderr)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_command(self, command_line: str) -> None:
        """Echo a command line about to run. Verbose only."""
        if self.verbose:
            self._console.print(f"[dim]$ {escape(command_line)}[/dim]", markup=True, soft_wrap=True)

    def print_raw(self, text: str) -> None:
        """Print text without markup or wrapping, e.g. file content."""
        buffer = getattr(self._console.file, "buffer", None)
        if buffer is None:
            self._console.out(text, end="", highlight=False)
            return
        # Write bytes so content that is not valid UTF-8 reaches the stream unchanged
        self._console.file.flush()
        buffer.write(text.encode("utf-8", "surrogateescape"))
        buffer.flush()

    def print_tags(self, url: str, tags: list[str]) -> None:
        """
        Print tag names of a repository.

        Args:
            url: Repository url.
            tags: Tag names in remote order.
        """
        if not tags:
            self._console.print(f"[dim]No tags found for {escape(url)}[/dim]")
            return

        if not self.verbose:
            for tag in tags:
                self._console.out(tag, highlight=False)
            return

        title = f"Tags ({url})"
        table = Table(title=title, show_header=True, header_style="bold", min_width=len(title) + 4)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Tag", style="cyan")
        for index, tag in enumerate(tags, start=1):
            table.add_row(str(index), tag)

        self._console.print()
        self._console.print(table)
        self._console.print()

    def print_reference(self, value: str, resolved: Optional[str]) -> None:
        """Print the result of a reference lookup."""
        if resolved is None:
            self.print_warning(f"{value} does not resolve")
            return
        if self.verbose:
            self._console.print(f"[cyan]{escape(value)}[/cyan] → {escape(resolved)}")
        else:
            self._console.out(resolved, highlight=False)


def create_console(*, verbose: bool = False, colored: bool = True, stderr: bool = False) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.
        stderr: Write to stderr instead of stdout.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored, stderr=stderr)
