"""Bounded undo history of full board snapshots."""

from collections import deque

from core.game.board import Board

DEFAULT_UNDO_LIMIT = 200


class UndoHistory:
    """
    LIFO stack of board snapshots with a fixed capacity.

    Pushing past capacity silently drops the oldest snapshot.
    """

    def __init__(self, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError("Undo limit must be at least 1")
        self._snapshots: deque[Board] = deque(maxlen=limit)

    def push(self, board: Board) -> None:
        """Store an independent copy of ``board``."""
        self._snapshots.append(board.copy())

    def pop(self) -> Board | None:
        """Remove and return the newest snapshot, or None if empty."""
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def clear(self) -> None:
        self._snapshots.clear()

    @property
    def limit(self) -> int:
        return self._snapshots.maxlen or 0

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return bool(self._snapshots)
