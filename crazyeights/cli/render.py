"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Suit
from ..state import Snapshot
from .views import TableSummaryView

_SUIT_COLORS = {
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "red",
    Suit.CLUBS: "white",
    Suit.SPADES: "white",
}


def format_suit(suit: Suit) -> str:
    color = _SUIT_COLORS[suit]
    return f"[{color}]{suit.symbol} {suit.value}[/{color}]"


def format_card(card: Card, *, playable: bool = False) -> str:
    """Return a Rich-rendered label for ``card``."""

    color = _SUIT_COLORS[card.suit]
    label = f"[{color}]{card.rank.value}{card.suit.symbol}[/{color}]"
    if playable:
        return f"[bold reverse]{label}[/bold reverse]"
    return label


def render_state(
    snapshot: Snapshot,
    *,
    playable: Iterable[str] = (),
    reveal_opponent: bool = False,
    title: str = "Crazy Eights",
) -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = TableSummaryView(
        snapshot=snapshot,
        playable=frozenset(playable),
        reveal_opponent=reveal_opponent,
        card_formatter=format_card,
        suit_formatter=format_suit,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
