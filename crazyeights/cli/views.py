"""Composable view primitives for the Crazy Eights CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Suit
from ..state import Phase, Player, Snapshot

_PHASE_LABELS = {
    Phase.NOT_STARTED: "Not started",
    Phase.IN_PROGRESS: "In progress",
    Phase.AWAITING_SUIT_CHOICE: "Choosing suit",
    Phase.FINISHED: "Finished",
}


@dataclass(slots=True)
class TableSummaryView:
    """Renderable summarising a snapshot of the table."""

    snapshot: Snapshot
    playable: FrozenSet[str]
    reveal_opponent: bool
    card_formatter: Callable[..., str]
    suit_formatter: Callable[[Suit], str]

    def _hand_markup(self, cards: Sequence[Card], visible: bool) -> str:
        if not visible:
            return f"{len(cards)} card(s)"
        if not cards:
            return "—"
        return " ".join(
            self.card_formatter(card, playable=card.id in self.playable) for card in cards
        )

    def _metadata_panel(self) -> Panel:
        snapshot = self.snapshot
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Draw pile[/cyan]: {snapshot.draw_pile_size} card(s)")
        top_card = snapshot.top_card
        if top_card is not None:
            grid.add_row(
                f"[cyan]Discard[/cyan]: {self.card_formatter(top_card)} ({len(snapshot.discard_pile)} card(s))"
            )
        else:
            grid.add_row("[cyan]Discard[/cyan]: —")
        if snapshot.active_suit is not None:
            grid.add_row(f"[cyan]Called suit[/cyan]: {self.suit_formatter(snapshot.active_suit)}")
        grid.add_row(f"[cyan]Phase[/cyan]: {_PHASE_LABELS[snapshot.phase]}")
        return Panel(grid, title="Table", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        snapshot = self.snapshot
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Seat", justify="left", style="bold")
        table.add_column("Hand", justify="left")
        table.add_column("Status", justify="left")

        for player in (Player.AI, Player.HUMAN):
            name = player.label
            if snapshot.turn is player and snapshot.phase is not Phase.FINISHED:
                name = f"[bold yellow]{name}[/bold yellow]"
            visible = player is Player.HUMAN or self.reveal_opponent
            status = ""
            if snapshot.winner is player:
                status = "[bold green]Winner[/bold green]"
            elif snapshot.turn is player and snapshot.phase is not Phase.FINISHED:
                status = "To act"
            table.add_row(name, self._hand_markup(snapshot.hand(player), visible), status)

        return Group(table, self._metadata_panel())
