"""
Window display backend.

Emulates the character grid in a pygame window: every cell is
CELL_WIDTH x CELL_HEIGHT pixels, top half in the foreground colour and bottom
half in the background colour.
"""

import logging

import pygame

import config
from input_router import BACKSPACE, DOWN, DRAG, MOVE, UP, KeyEvent, PointerEvent

logger = logging.getLogger(__name__)


def translate_event(
    event, cell_width=config.CELL_WIDTH, cell_height=config.CELL_HEIGHT
):
    """Turn a pygame event into a KeyEvent / PointerEvent, or None."""
    if event.type == pygame.QUIT:
        return KeyEvent(char="q")

    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_BACKSPACE:
            return KeyEvent(special=BACKSPACE)
        if event.unicode:
            return KeyEvent(char=event.unicode)
        return None

    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
        px, py = event.pos
        column, row = px // cell_width, py // cell_height
        if event.type == pygame.MOUSEBUTTONDOWN:
            # Wheel shows up as buttons 4 and 5
            if event.button > 3:
                return None
            return PointerEvent(DOWN, column, row)
        if event.type == pygame.MOUSEBUTTONUP:
            if event.button > 3:
                return None
            return PointerEvent(UP, column, row)
        kind = DRAG if any(event.buttons) else MOVE
        return PointerEvent(kind, column, row)

    return None


class WindowDisplay:
    def __init__(
        self,
        columns=config.WINDOW_COLUMNS,
        rows=config.WINDOW_ROWS,
        cell_width=config.CELL_WIDTH,
        cell_height=config.CELL_HEIGHT,
    ):
        self.columns = columns
        self.rows = rows
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.screen = None

    def __enter__(self):
        try:
            pygame.init()
            self.screen = pygame.display.set_mode(
                (self.columns * self.cell_width, self.rows * self.cell_height)
            )
            pygame.display.set_caption("particle_terminal")
        except pygame.error as err:
            pygame.quit()
            raise OSError(f"cannot open window: {err}") from err
        logger.debug("Window opened, %dx%d cells", self.columns, self.rows)
        return self

    def __exit__(self, exc_type, exc, tb):
        pygame.quit()
        self.screen = None
        return False

    def size(self):
        return self.columns, self.rows

    def poll(self, timeout):
        milliseconds = int(timeout * 1000)
        try:
            # wait() without a positive timeout blocks forever
            if milliseconds > 0:
                first = pygame.event.wait(milliseconds)
            else:
                first = pygame.event.poll()
            if first.type == pygame.NOEVENT:
                return []
            pending = [first] + pygame.event.get()
        except pygame.error as err:
            raise OSError(f"window event queue failed: {err}") from err

        events = []
        for event in pending:
            translated = translate_event(event, self.cell_width, self.cell_height)
            if translated is not None:
                events.append(translated)
        return events

    def draw(self, buffer):
        # surfarray is indexed (x, y), the image is (y, x)
        image = buffer.to_image().transpose(1, 0, 2)
        try:
            surface = pygame.surfarray.make_surface(image)
            pygame.transform.scale(surface, self.screen.get_size(), self.screen)
            pygame.display.flip()
        except pygame.error as err:
            raise OSError(f"window drawing failed: {err}") from err
