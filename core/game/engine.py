"""Klondike game engine with undo history and phase state machine."""

from random import Random
from typing import Callable, Iterator

from transitions import Machine

from core.cards import Card, create_deck, shuffle
from core.rules import can_stack_on_foundation, can_stack_on_tableau, get_tableau_build
from core.game.board import NUM_COLUMNS, NUM_FOUNDATIONS, Board
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.history import DEFAULT_UNDO_LIMIT, UndoHistory
from core.game.moves import Move, MoveKind
from core.game.state import GamePhase, GameState

# A validated move: mutates the board and returns the events it produced.
Action = Callable[[], list[GameEvent]]


def _valid_index(value: object, size: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < size


class KlondikeGame:
    """
    Klondike solitaire engine.

    Every command validates first and returns False without touching the
    table when the move is illegal. A legal command snapshots the table into
    the undo history, mutates it and returns True. Commands never raise for
    rule violations, so callers can probe freely.
    """

    # State machine states
    STATES = [p.name.lower() for p in GamePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "complete", "source": "in_progress", "dest": "won"},
        {"trigger": "reopen", "source": "won", "dest": "in_progress"},
        {"trigger": "restart", "source": "*", "dest": "in_progress"},
    ]

    def __init__(
        self,
        rng: Random | None = None,
        undo_limit: int = DEFAULT_UNDO_LIMIT,
    ) -> None:
        """
        Create a game and deal the first hand.

        Args:
            rng: Random number generator for reproducible deals
            undo_limit: Maximum number of undoable moves kept
        """
        self._rng = rng or Random()
        self._board = Board()
        self._history = UndoHistory(undo_limit)
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="in_progress",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self.init()

    @property
    def phase(self) -> GamePhase:
        """Get current game phase as enum."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def init(self) -> None:
        """Shuffle a fresh deck, deal it and forget all undo history."""
        deck = shuffle(create_deck(), self._rng)
        self._board = Board.deal(deck)
        self._history.clear()
        self.restart()
        self.events.emit_new(
            EventType.GAME_STARTED,
            stock=len(self._board.stock),
            tableau=[len(column) for column in self._board.tableau],
        )

    # ------------------------------------------------------------------
    # Queries

    def get_state(self) -> GameState:
        """Return an immutable view of the current table."""
        return self._board.view()

    def can_undo(self) -> bool:
        """Check if there is a move to undo."""
        return bool(self._history)

    def is_win(self) -> bool:
        """Check if every foundation holds a complete suit."""
        return all(len(pile) == 13 for pile in self._board.foundations)

    @property
    def undo_depth(self) -> int:
        """Return the number of moves that can currently be undone."""
        return len(self._history)

    # ------------------------------------------------------------------
    # Commands

    def draw_one(self) -> bool:
        """
        Turn the top stock card onto the waste.

        With an empty stock the waste is turned back over to form a new stock
        in the original draw order. Fails only when both piles are empty.
        """
        return self._commit("draw_one", self._plan_draw())

    def undo(self) -> bool:
        """Restore the table to the snapshot taken before the last move."""
        previous = self._history.pop()
        if previous is None:
            self._reject("undo")
            return False
        self._board = previous
        events = [GameEvent(EventType.MOVE_UNDONE, {"remaining": len(self._history)})]
        self._publish(events + self._sync_phase())
        return True

    def move_waste_to_foundation(self) -> bool:
        """Move the waste card to the first foundation (0..3) that accepts it."""
        return self._commit("move_waste_to_foundation", self._plan_waste_to_foundation(None))

    def move_waste_to_foundation_to(self, foundation_index: int) -> bool:
        """Move the waste card to one specific foundation."""
        return self._commit(
            "move_waste_to_foundation_to",
            self._plan_waste_to_foundation(foundation_index, scan=False),
        )

    def move_waste_to_tableau(self, column: int) -> bool:
        """Move the waste card onto a tableau column."""
        return self._commit("move_waste_to_tableau", self._plan_waste_to_tableau(column))

    def move_tableau_to_foundation(self, column: int, card_index: int) -> bool:
        """Move a column's top card to the first foundation (0..3) that accepts it."""
        return self._commit(
            "move_tableau_to_foundation",
            self._plan_tableau_to_foundation(column, card_index, None),
        )

    def move_tableau_to_foundation_to(
        self, column: int, card_index: int, foundation_index: int
    ) -> bool:
        """Move a column's top card to one specific foundation."""
        return self._commit(
            "move_tableau_to_foundation_to",
            self._plan_tableau_to_foundation(column, card_index, foundation_index, scan=False),
        )

    def move_tableau_to_tableau(self, from_column: int, from_index: int, to_column: int) -> bool:
        """Move the build starting at ``from_index`` onto another column."""
        return self._commit(
            "move_tableau_to_tableau",
            self._plan_tableau_to_tableau(from_column, from_index, to_column),
        )

    def move_foundation_to_tableau(self, foundation_index: int, to_column: int) -> bool:
        """Move a foundation's top card back onto a tableau column."""
        return self._commit(
            "move_foundation_to_tableau",
            self._plan_foundation_to_tableau(foundation_index, to_column),
        )

    # ------------------------------------------------------------------
    # Move dispatch, probes and hints

    def apply(self, move: Move) -> bool:
        """Perform a move described by a ``Move`` value."""
        return self._commit(str(move), self._plan(move))

    def can_apply(self, move: Move) -> bool:
        """Check if a move is legal right now without performing it."""
        return self._plan(move) is not None

    def auto_move_waste(self) -> bool:
        """
        Send the waste card to the first place that takes it.

        Foundations are tried before tableau columns, each in ascending order.
        """
        candidates = [Move.waste_to_foundation()]
        candidates += [Move.waste_to_tableau(col) for col in range(NUM_COLUMNS)]
        for move in candidates:
            if self.can_apply(move):
                return self.apply(move)
        self._reject("auto_move_waste")
        return False

    def legal_moves(self) -> Iterator[Move]:
        """Yield every move that is legal in the current position."""
        board = self._board
        candidates: list[Move] = [Move.draw()]
        for f in range(NUM_FOUNDATIONS):
            candidates.append(Move.waste_to_foundation(f))
            for col in range(NUM_COLUMNS):
                candidates.append(Move.foundation_to_tableau(f, col))
        for col, column in enumerate(board.tableau):
            candidates.append(Move.waste_to_tableau(col))
            if column:
                for f in range(NUM_FOUNDATIONS):
                    candidates.append(Move.tableau_to_foundation(col, len(column) - 1, f))
            for index, card in enumerate(column):
                if not card.face_up:
                    continue
                for to_col in range(NUM_COLUMNS):
                    if to_col != col:
                        candidates.append(Move.tableau_to_tableau(col, index, to_col))
        for move in candidates:
            if self.can_apply(move):
                yield move

    # ------------------------------------------------------------------
    # Internals

    def _plan(self, move: Move) -> Action | None:
        """Validate a ``Move`` and return the action that performs it."""
        if move.kind == MoveKind.DRAW:
            return self._plan_draw()
        if move.kind == MoveKind.WASTE_TO_FOUNDATION:
            return self._plan_waste_to_foundation(move.foundation, scan=move.foundation is None)
        if move.kind == MoveKind.WASTE_TO_TABLEAU:
            return self._plan_waste_to_tableau(move.to_column)
        if move.kind == MoveKind.TABLEAU_TO_FOUNDATION:
            return self._plan_tableau_to_foundation(
                move.column, move.card_index, move.foundation, scan=move.foundation is None
            )
        if move.kind == MoveKind.TABLEAU_TO_TABLEAU:
            return self._plan_tableau_to_tableau(move.column, move.card_index, move.to_column)
        if move.kind == MoveKind.FOUNDATION_TO_TABLEAU:
            return self._plan_foundation_to_tableau(move.foundation, move.to_column)
        return None

    def _commit(self, name: str, action: Action | None) -> bool:
        """Snapshot then run a validated action, or report the rejection."""
        if action is None:
            self._reject(name)
            return False
        self._history.push(self._board)
        events = action()
        self._publish(events + self._sync_phase())
        return True

    def _reject(self, name: str) -> None:
        self.events.emit_new(EventType.INVALID_MOVE, move=name)

    def _publish(self, events: list[GameEvent]) -> None:
        """Emit events once the table and phase are settled."""
        for event in events:
            self.events.emit(event)

    def _sync_phase(self) -> list[GameEvent]:
        """Keep the phase machine in step with the foundations."""
        won = self.is_win()
        if won and self.phase == GamePhase.IN_PROGRESS:
            self.complete()
            return [GameEvent(EventType.GAME_WON)]
        if not won and self.phase == GamePhase.WON:
            self.reopen()
        return []

    def _find_foundation(self, card: Card, index: int | None, scan: bool) -> int | None:
        """Pick the target foundation: explicit index, or first match scanning 0..3."""
        foundations = self._board.foundations
        if scan:
            for i in range(NUM_FOUNDATIONS):
                if can_stack_on_foundation(card, foundations[i]):
                    return i
            return None
        if not _valid_index(index, NUM_FOUNDATIONS):
            return None
        return index if can_stack_on_foundation(card, foundations[index]) else None  # type: ignore[index]

    def _column_top(self, col: int) -> Card | None:
        column = self._board.tableau[col]
        return column[-1] if column else None

    def _plan_draw(self) -> Action | None:
        board = self._board
        if board.stock:
            def draw() -> list[GameEvent]:
                card = board.stock.pop().flipped(True)
                board.waste.append(card)
                return [GameEvent(EventType.CARD_DRAWN, {"card": card.label, "card_id": card.id})]

            return draw

        if board.waste:
            def recycle() -> list[GameEvent]:
                count = len(board.waste)
                board.stock = [card.flipped(False) for card in reversed(board.waste)]
                board.waste = []
                return [GameEvent(EventType.STOCK_RECYCLED, {"cards": count})]

            return recycle

        return None

    def _plan_waste_to_foundation(self, index: int | None, scan: bool = True) -> Action | None:
        board = self._board
        if not board.waste:
            return None
        card = board.waste[-1]
        target = self._find_foundation(card, index, scan)
        if target is None:
            return None

        def move() -> list[GameEvent]:
            board.foundations[target].append(board.waste.pop())
            return [self._moved([card], "waste", f"foundation:{target}")]

        return move

    def _plan_waste_to_tableau(self, col: int | None) -> Action | None:
        board = self._board
        if not board.waste or not _valid_index(col, NUM_COLUMNS):
            return None
        card = board.waste[-1]
        if not can_stack_on_tableau(card, self._column_top(col)):  # type: ignore[arg-type]
            return None

        def move() -> list[GameEvent]:
            board.tableau[col].append(board.waste.pop())  # type: ignore[index]
            return [self._moved([card], "waste", f"tableau:{col}")]

        return move

    def _plan_tableau_to_foundation(
        self,
        col: int | None,
        card_index: int | None,
        index: int | None,
        scan: bool = True,
    ) -> Action | None:
        board = self._board
        if not _valid_index(col, NUM_COLUMNS):
            return None
        column = board.tableau[col]  # type: ignore[index]
        if not _valid_index(card_index, len(column)) or card_index != len(column) - 1:
            return None
        card = column[-1]
        if not card.face_up:
            return None
        target = self._find_foundation(card, index, scan)
        if target is None:
            return None

        def move() -> list[GameEvent]:
            board.foundations[target].append(column.pop())
            revealed = self._reveal(col)  # type: ignore[arg-type]
            return [self._moved([card], f"tableau:{col}", f"foundation:{target}")] + revealed

        return move

    def _plan_tableau_to_tableau(
        self,
        from_col: int | None,
        from_index: int | None,
        to_col: int | None,
    ) -> Action | None:
        board = self._board
        if not _valid_index(from_col, NUM_COLUMNS) or not _valid_index(to_col, NUM_COLUMNS):
            return None
        if from_col == to_col:
            return None
        src = board.tableau[from_col]  # type: ignore[index]
        if not _valid_index(from_index, len(src)):
            return None
        build = get_tableau_build(src, from_index)  # type: ignore[arg-type]
        if not build or not all(card.face_up for card in build):
            return None
        if not can_stack_on_tableau(build[0], self._column_top(to_col)):  # type: ignore[arg-type]
            return None

        def move() -> list[GameEvent]:
            del src[from_index:]
            board.tableau[to_col].extend(build)  # type: ignore[index]
            revealed = self._reveal(from_col)  # type: ignore[arg-type]
            return [self._moved(build, f"tableau:{from_col}", f"tableau:{to_col}")] + revealed

        return move

    def _plan_foundation_to_tableau(self, index: int | None, to_col: int | None) -> Action | None:
        board = self._board
        if not _valid_index(index, NUM_FOUNDATIONS) or not _valid_index(to_col, NUM_COLUMNS):
            return None
        pile = board.foundations[index]  # type: ignore[index]
        if not pile:
            return None
        card = pile[-1]
        if not can_stack_on_tableau(card, self._column_top(to_col)):  # type: ignore[arg-type]
            return None

        def move() -> list[GameEvent]:
            board.tableau[to_col].append(pile.pop())  # type: ignore[index]
            return [self._moved([card], f"foundation:{index}", f"tableau:{to_col}")]

        return move

    def _moved(self, cards: list[Card], source: str, target: str) -> GameEvent:
        return GameEvent(
            EventType.CARDS_MOVED,
            {
                "cards": [card.label for card in cards],
                "card_ids": [card.id for card in cards],
                "source": source,
                "target": target,
            },
        )

    def _reveal(self, col: int) -> list[GameEvent]:
        card = self._board.reveal_top(col)
        if card is None:
            return []
        return [GameEvent(EventType.CARD_REVEALED, {"card": card.label, "column": col})]
