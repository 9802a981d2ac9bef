"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from permitgen.domain.identity.model.record import IdentityRecord
from permitgen.domain.identity.model.value import GenerationOutcome, GenerationStatus
from permitgen.domain.identity.util.card import PermitCard
from permitgen.domain.identity.util.formatting import format_date

_STATUS_STYLES = {
    GenerationStatus.NOT_STARTED: "dim",
    GenerationStatus.IN_PROGRESS: "yellow",
    GenerationStatus.COMPLETED: "green",
    GenerationStatus.FAILED: "red",
}


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {escape(message)}")
        if hint:
            self._err_console.print(f"  [dim]{escape(hint)}[/dim]")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (pass-through to rich)."""
        self._console.print(*args, **kwargs)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def record_table(self, records: tuple[IdentityRecord, ...], cursor: int | None = None) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", style="dim", width=3)
        for header in ("Name", "Surname", "Nationality", "Birthdate", "ID Number", "Photo"):
            table.add_column(header)

        for i, record in enumerate(records):
            marker = "▶" if i == cursor else ""
            table.add_row(
                f"{marker}{i + 1}",
                escape(str(record.name)),
                escape(str(record.surname)),
                escape(str(record.nationality)),
                escape(format_date(record.birthdate)),
                escape(str(record.id_number)),
                self._status_text(record.generation.status),
            )
        self._console.print(table)

    def permit_card(self, card: PermitCard, status: GenerationStatus) -> None:
        """Print both sides of a permit card."""
        photo = "[green]photo attached[/green]" if card.photo_url else "[dim]no photo[/dim]"

        def side(fields) -> str:
            return "\n".join(
                f"[red]{escape(f.label)}[/red]\n[bold]{escape(f.value)}[/bold]" for f in fields
            )

        self._console.print(
            Panel(
                side(card.front),
                title="[bold]İKAMET İZNİ BELGESİ / RESIDENCE PERMIT DOCUMENT[/bold]",
                subtitle=f"{photo} · {self._status_text(status)}",
                border_style="red",
                padding=(1, 2),
            )
        )
        self._console.print(
            Panel(
                side(card.back),
                subtitle=f"[dim]{escape(card.notice)}[/dim]",
                border_style="red",
                padding=(1, 2),
            )
        )

    def outcome(self, outcome: GenerationOutcome) -> None:
        if outcome.status == GenerationStatus.COMPLETED and outcome.accepted:
            self.success(outcome.message or f"Photo generated for record {outcome.index + 1}")
        elif outcome.status == GenerationStatus.FAILED:
            self.error(outcome.message or f"Photo generation failed for record {outcome.index + 1}")
        elif outcome.message:
            self.warning(outcome.message)

    def status(self, message: str):
        """Return a status context manager for long operations."""
        return self._console.status(message)

    @staticmethod
    def _status_text(status: GenerationStatus) -> str:
        style = _STATUS_STYLES[status]
        return f"[{style}]{status.value.replace('_', ' ')}[/{style}]"


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
