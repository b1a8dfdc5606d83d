"""Input events coming from a display backend, and the commands they turn into."""

import enum
from dataclasses import dataclass
from typing import Optional

DOWN = "down"
UP = "up"
DRAG = "drag"
MOVE = "move"

BACKSPACE = "backspace"


@dataclass(frozen=True)
class KeyEvent:
    char: Optional[str] = None
    special: Optional[str] = None


@dataclass(frozen=True)
class PointerEvent:
    kind: str
    column: int
    row: int


class CommandKind(enum.Enum):
    QUIT = "quit"
    RESET = "reset"
    SET_ATTRACTOR = "set_attractor"
    UPDATE_ATTRACTOR = "update_attractor"
    CLEAR_ATTRACTOR = "clear_attractor"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    x: float = 0.0
    y: float = 0.0

    @property
    def point(self):
        return self.x, self.y


class InputRouter:
    """Translates raw events into commands, tracking whether a button is held."""

    def __init__(self):
        self.held = False

    def route(self, event):
        if isinstance(event, KeyEvent):
            if event.char == "q":
                return Command(CommandKind.QUIT)
            if event.special == BACKSPACE:
                return Command(CommandKind.RESET)
            return None

        if isinstance(event, PointerEvent):
            # Pointer rows are whole cells, the simulation works in sub-rows
            x, y = float(event.column), float(event.row * 2)
            if event.kind in (DOWN, DRAG):
                self.held = True
                return Command(CommandKind.SET_ATTRACTOR, x, y)
            if event.kind == UP:
                self.held = False
                return Command(CommandKind.CLEAR_ATTRACTOR)
            if event.kind == MOVE and self.held:
                return Command(CommandKind.UPDATE_ATTRACTOR, x, y)

        return None
