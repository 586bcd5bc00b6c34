"""Textual-powered interactive Crazy Eights interface."""

from __future__ import annotations

import random
from functools import partial
from typing import Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Footer, Header, OptionList, Static
from textual.widgets.option_list import Option

from ... import scoreboard
from ...actions import Action, DrawAction, apply_action, describe_action, legal_play_actions
from ...cards import Suit
from ...engine import CrazyEightsGame, Transition
from ...logging_utils import get_logger
from ...opponents import OpponentPolicy, take_turn
from ...state import GameConfig, Phase, Player
from ..render import format_suit, render_state

logger = get_logger(__name__)


class EventLog(Static):
    """Rolling log mirroring the game's event history."""

    lines: reactive[tuple[str, ...]] = reactive((), init=False)

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        self._refresh()

    def watch_lines(self, value: tuple[str, ...]) -> None:
        self._refresh(value)

    def _refresh(self, lines: tuple[str, ...] | None = None) -> None:
        content = Table.grid(padding=(0, 1))
        content.expand = True
        content.add_column(justify="left")
        rows = lines if lines is not None else self.lines
        if rows:
            for line in rows:
                content.add_row(Text(line))
        else:
            content.add_row(Text.from_markup("[dim]Event log will appear here[/dim]"))
        self.update(Panel(content, title="Events", border_style="magenta"))


class InfoPanel(Static):
    """Wrapper that expects ``update_panel`` calls with Rich renderables."""

    def update_panel(self, title: str, body) -> None:
        self.update(Panel(body, title=title, border_style="cyan"))


class ScorePanel(Static):
    """Displays the running session tally."""

    def update_scores(self, history: scoreboard.MatchHistory) -> None:
        table = Table(box=box.SIMPLE_HEAVY, expand=True)
        table.add_column("Seat", justify="left")
        table.add_column("Wins", justify="right")
        for total in history.totals():
            table.add_row(total.player.label, str(total.wins))
        table.add_row("[dim]Games[/dim]", str(len(history.games)))
        self.update(Panel(table, title="Session", border_style="bright_blue"))


class StatusStrip(Static):
    """Single line status helper."""

    message: reactive[str] = reactive("", init=False)

    def watch_message(self, value: str) -> None:
        self.update(Panel(Text.from_markup(value or "[dim]Ready[/dim]"), border_style="green"))


class ActionPalette(OptionList):
    """Interactive list used for card and suit selection."""

    class Choice(Message):
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(self, entries: Sequence[str]) -> None:
        options = [
            Option(f"[bold]{idx + 1}[/bold] {entry}", id=str(idx))
            for idx, entry in enumerate(entries)
        ]
        super().__init__(*options)
        if options:
            self.highlighted = 0

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:  # pragma: no cover - Textual glue
        event.stop()
        if event.option.id is None:
            return
        self.post_message(self.Choice(int(event.option.id)))

    def on_key(self, event: events.Key) -> None:  # pragma: no cover - driven by UI interaction
        if event.key.isdigit() and event.key != "0":
            index = int(event.key) - 1
            if 0 <= index < self.option_count:
                self.highlighted = index
                self.post_message(self.Choice(index))
                event.stop()


class CrazyEightsApp(App):
    """Textual Crazy Eights game UI."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #main {
        layout: horizontal;
        height: 1fr;
    }

    #left {
        width: 2fr;
        padding: 0 1;
    }

    #right {
        width: 1fr;
        padding: 0 1;
    }

    ActionPalette {
        border: heavy $accent;
        height: auto;
        max-height: 16;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "new_game", "New game"),
        Binding("h", "toggle_reveal", "Reveal opponent"),
    ]

    def __init__(self, *, seed: int | None, config: GameConfig) -> None:
        super().__init__()
        if seed is None:
            seed = random.SystemRandom().randrange(0, 2**63)
        self.seed = seed
        self.rng = random.Random(seed)
        self.config = config
        self.policy = OpponentPolicy()
        self.match_history = scoreboard.MatchHistory()
        self.reveal_opponent = False
        self.game: CrazyEightsGame | None = None
        self.turns = 0

        self._active_palette: ActionPalette | None = None
        self._pending_kind: str | None = None
        self._pending_actions: list[Action] = []

        self.status_strip: StatusStrip | None = None
        self.table_panel: InfoPanel | None = None
        self.actions_container: Vertical | None = None
        self.event_log: EventLog | None = None
        self.score_panel: ScorePanel | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self.status_strip = StatusStrip(id="status")
        yield self.status_strip

        self.table_panel = InfoPanel(id="table")
        self.table_panel.update_panel("Table", Text.from_markup("[dim]Shuffling…[/dim]"))
        self.actions_container = Vertical(Static(Text.from_markup("[dim]Waiting…[/dim]")), id="actions")
        self.event_log = EventLog(id="events")
        self.score_panel = ScorePanel(id="scores")
        self.score_panel.update_scores(self.match_history)

        yield Horizontal(
            Vertical(self.table_panel, self.actions_container, id="left"),
            Vertical(self.event_log, self.score_panel, id="right"),
            id="main",
        )
        yield Footer()

    async def on_mount(self) -> None:
        await self._start_game()

    async def action_new_game(self) -> None:
        if self.game is not None and self.game.state.phase is not Phase.FINISHED:
            logger.info("abandoning unfinished game")
        await self._start_game()

    async def action_toggle_reveal(self) -> None:
        self.reveal_opponent = not self.reveal_opponent
        self._refresh_ui()

    async def _start_game(self) -> None:
        await self._dismiss_palette()
        self.game = CrazyEightsGame(self.config, rng=self.rng)
        self.game.start()
        self.turns = 0
        self._refresh_ui()
        await self._process_turn()

    async def _process_turn(self) -> None:
        game = self.game
        if game is None:
            return
        snapshot = game.snapshot
        if snapshot.phase is Phase.FINISHED:
            self._handle_game_end()
        elif snapshot.phase is Phase.AWAITING_SUIT_CHOICE:
            await self._prompt_suit()
        elif snapshot.turn is Player.HUMAN:
            await self._prompt_play()
        else:
            self._set_status("[cyan]Opponent is thinking…[/cyan]")
            self.set_timer(self.config.ai_delay, partial(self._perform_ai_turn, game))

    async def _prompt_play(self) -> None:
        assert self.game is not None
        state = self.game.state
        options: list[Action] = list(legal_play_actions(state, Player.HUMAN))
        options.append(DrawAction())
        entries = [describe_action(state, Player.HUMAN, action) for action in options]
        self._set_status("[yellow]Your turn[/yellow]: play a highlighted card or draw")
        await self._mount_palette(ActionPalette(entries), "play", options)

    async def _prompt_suit(self) -> None:
        self._set_status("[yellow]Crazy eight![/yellow] Choose the new suit")
        entries = [format_suit(suit) for suit in Suit]
        await self._mount_palette(ActionPalette(entries), "suit", [])

    async def _perform_ai_turn(self, game: CrazyEightsGame) -> None:
        if game is not self.game or not game.snapshot.ai_to_act:
            return
        transition = take_turn(game, self.policy, Player.AI)
        self._after_transition(transition)
        await self._process_turn()

    @on(ActionPalette.Choice)
    async def _on_palette_choice(self, message: ActionPalette.Choice) -> None:
        if self.game is None or self._pending_kind is None:
            return
        kind = self._pending_kind
        pending = list(self._pending_actions)
        await self._dismiss_palette()
        if kind == "suit":
            transition = self.game.resolve_suit_choice(list(Suit)[message.index])
        else:
            transition = apply_action(self.game, Player.HUMAN, pending[message.index])
        self._after_transition(transition)
        await self._process_turn()

    def _after_transition(self, transition: Transition) -> None:
        self.turns += 1
        if not transition.ok and transition.rejection is not None:
            self.notify(transition.rejection.message, severity="warning")
        self._refresh_ui()

    def _handle_game_end(self) -> None:
        assert self.game is not None
        state = self.game.state
        summary = scoreboard.summarise_game(self.match_history.next_game_number(), state, self.turns)
        self.match_history.record(summary)
        if self.score_panel:
            self.score_panel.update_scores(self.match_history)
        outcome = "[bold green]You win![/bold green]" if state.winner is Player.HUMAN else "[bold red]Opponent wins.[/bold red]"
        self._set_status(f"{outcome} Press [bold]N[/bold] for a new game or [bold]Q[/bold] to quit.")

    def _refresh_ui(self) -> None:
        if self.game is None:
            return
        snapshot = self.game.snapshot
        if self.table_panel:
            self.table_panel.update_panel(
                "Table",
                render_state(
                    snapshot,
                    playable=self.game.legal_moves(Player.HUMAN),
                    reveal_opponent=self.reveal_opponent or snapshot.phase is Phase.FINISHED,
                ),
            )
        if self.event_log:
            self.event_log.lines = snapshot.history

    async def _mount_palette(self, palette: ActionPalette, kind: str, actions: list[Action]) -> None:
        await self._dismiss_palette()
        if self.actions_container is None:
            return
        await self.actions_container.remove_children()
        await self.actions_container.mount(palette)
        self._active_palette = palette
        self._pending_kind = kind
        self._pending_actions = actions
        palette.focus()

    async def _dismiss_palette(self) -> None:
        palette = self._active_palette
        self._active_palette = None
        self._pending_kind = None
        self._pending_actions = []
        if palette is not None:
            await palette.remove()

    def _set_status(self, message: str) -> None:
        if self.status_strip:
            self.status_strip.message = message


def run_textual_app(*, seed: int | None, config: GameConfig) -> None:
    """Launch the Textual UI."""

    app = CrazyEightsApp(seed=seed, config=config)
    app.run()
