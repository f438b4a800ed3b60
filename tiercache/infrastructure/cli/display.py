import logging
from typing import Any, List, Optional, Sequence

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tiercache.domain.interfaces.user_interface import UserInterface
from tiercache.domain.models.common import LevelSnapshot

logger = logging.getLogger(__name__)


def format_level_line(level: LevelSnapshot) -> str:
    """Plain one-line rendering: ``L1 Cache: A: 1 C: 3``."""
    contents = " ".join(f"{key}: {value}" for key, value in level.entries)
    return f"{level.label} Cache: {contents}".rstrip()


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Prints a result line. User-supplied keys and values are never parsed as markup."""
        self.console.print(Text(str(output), style=kwargs.get("style", "")))

    def get_prompt(self, prompt_message: str = "> ") -> str:
        return self.console.input(f"[bold green]{prompt_message}[/bold green]")

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(Text(info_message, style="blue"))

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        self.console.print(Text(warning_message, style="yellow"))

    def display_levels(self, levels: Sequence[LevelSnapshot], **kwargs: Any) -> None:
        """Renders the level chain as a table, one row per level, fastest first.

        Args:
            levels: Snapshots ordered fastest first.
            **kwargs: ``title`` overrides the table title.
        """
        if not levels:
            self.display_info("The cache has no levels.")
            return

        table = Table(title=kwargs.get("title", "Cache Levels"), box=ROUNDED, border_style="cyan", padding=(0, 1))
        table.add_column("Level", style="bold cyan", no_wrap=True)
        table.add_column("Policy", style="magenta", no_wrap=True)
        table.add_column("Used", justify="right", no_wrap=True)
        table.add_column("Entries", style="white")

        for level in levels:
            used_style = "red" if level.size > level.capacity else "green"
            entries = Text(" ".join(f"{key}: {value}" for key, value in level.entries) or "-")
            table.add_row(
                level.label,
                level.policy.value,
                f"[{used_style}]{level.size}/{level.capacity}[/{used_style}]",
                entries,
            )
        self.console.print(table)
        logger.debug(f"Displayed {len(levels)} cache levels")

    def display_stats(self, levels: Sequence[LevelSnapshot], **kwargs: Any) -> None:
        table = Table(title="Cache Statistics", box=SIMPLE, padding=(0, 1))
        table.add_column("Level", style="bold cyan")
        table.add_column("Hits", justify="right")
        table.add_column("Misses", justify="right")
        table.add_column("Evictions", justify="right")
        table.add_column("Hit rate", justify="right")
        for level in levels:
            stats = level.stats
            table.add_row(
                level.label,
                str(stats.hits),
                str(stats.misses),
                str(stats.evictions),
                f"{stats.hit_rate:.0%}",
            )
        self.console.print(table)

    def display_session_header(self, level_labels: List[str]) -> None:
        chain = " -> ".join(level_labels) if level_labels else "no levels"
        table = Table(show_header=False, box=ROUNDED, border_style="cyan", padding=(0, 1))
        table.add_column("Content", style="cyan")
        table.add_row("[bold cyan]tiercache interactive shell[/bold cyan]")
        table.add_row(f"Levels: [bold]{chain}[/bold]")
        table.add_row("Commands: put KEY VALUE | get KEY | delete KEY | add CAPACITY POLICY")
        table.add_row("          remove INDEX | show | stats | clear | quit")
        self.console.print(table)
