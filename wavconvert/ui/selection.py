"""Highlighted-row state for the inventory list."""

from __future__ import annotations

from enum import Enum, auto


class LoopState(Enum):
    RUNNING = auto()
    EXITING = auto()


class Command(Enum):
    MOVE_DOWN = auto()
    MOVE_UP = auto()
    TERMINATE = auto()


class SelectionState:
    """Single highlighted index over a list of fixed length.

    The index saturates at ``[0, count - 1]`` and is 0 for an empty list.
    Once terminated, navigation commands are ignored.
    """

    def __init__(self, count: int) -> None:
        self._count = max(0, count)
        self._index = 0
        self._state = LoopState.RUNNING

    @property
    def index(self) -> int:
        return self._index

    @property
    def count(self) -> int:
        return self._count

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is LoopState.RUNNING

    def reset(self, count: int) -> None:
        """Point at a new list, keeping the index in range."""
        self._count = max(0, count)
        self._index = min(self._index, self._last_index())

    def move_down(self) -> int:
        if self.is_running:
            self._index = min(self._index + 1, self._last_index())
        return self._index

    def move_up(self) -> int:
        if self.is_running and self._index > 0:
            self._index -= 1
        return self._index

    def terminate(self) -> None:
        self._state = LoopState.EXITING

    def dispatch(self, command: Command) -> bool:
        """Apply *command* and return True while the loop should keep running."""
        if command is Command.MOVE_DOWN:
            self.move_down()
        elif command is Command.MOVE_UP:
            self.move_up()
        elif command is Command.TERMINATE:
            self.terminate()
        return self.is_running

    def _last_index(self) -> int:
        return max(0, self._count - 1)
