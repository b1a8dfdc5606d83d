"""
Terminal display backend.

Puts the terminal in raw mode on the alternate screen with SGR mouse reporting,
draws frames with 24-bit ANSI colours and reads keys and mouse reports with
select. Everything is put back on exit.
"""

import codecs
import errno
import logging
import os
import re
import select
import sys
import termios
import tty
from io import StringIO

from input_router import BACKSPACE, DOWN, DRAG, MOVE, UP, KeyEvent, PointerEvent

logger = logging.getLogger(__name__)

ALT_SCREEN_ON = "\033[?1049h"
ALT_SCREEN_OFF = "\033[?1049l"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
# Button-event tracking (press, release, drag) with SGR coordinates
MOUSE_ON = "\033[?1002h\033[?1006h"
MOUSE_OFF = "\033[?1006l\033[?1002l"
CLEAR = "\033[2J\033[H"
RESET_STYLE = "\033[0m"

SGR_MOUSE = re.compile(r"\x1b\[<(\d+);(\d+);(\d+)([Mm])")
CSI = re.compile(r"\x1b\[[0-9;?<]*[@-~]")
SS3 = re.compile(r"\x1bO.")
# An escape sequence whose final byte has not arrived yet
CSI_PREFIX = re.compile(r"\x1b(\[[0-9;?<]*|O)?\Z")


def mouse_event(code, column, row, final):
    """Decode one SGR mouse report. Columns and rows arrive 1-based."""
    if code & 64:
        # Scroll wheel
        return None
    column -= 1
    row -= 1
    if final == "m":
        return PointerEvent(UP, column, row)
    if code & 32:
        kind = MOVE if code & 3 == 3 else DRAG
        return PointerEvent(kind, column, row)
    return PointerEvent(DOWN, column, row)


def parse_input(data):
    """
    Split raw terminal input into events.
    Returns (events, rest) where rest is an incomplete escape sequence that
    should be prepended to the next read.
    """
    events = []
    i = 0
    while i < len(data):
        char = data[i]
        if char != "\x1b":
            if char in ("\x7f", "\x08"):
                events.append(KeyEvent(special=BACKSPACE))
            else:
                events.append(KeyEvent(char=char))
            i += 1
            continue

        match = SGR_MOUSE.match(data, i)
        if match:
            code, column, row, final = match.groups()
            event = mouse_event(int(code), int(column), int(row), final)
            if event is not None:
                events.append(event)
            i = match.end()
            continue

        match = CSI.match(data, i) or SS3.match(data, i)
        if match:
            # Arrows, function keys and the like
            i = match.end()
            continue

        if CSI_PREFIX.match(data, i):
            return events, data[i:]
        events.append(KeyEvent(special="escape"))
        i += 1

    return events, ""


def encode_frame(buffer):
    """ANSI text drawing the whole buffer, switching colours only when they change."""
    output = StringIO()
    glyphs = buffer.glyphs.tolist()
    fg = buffer.fg.tolist()
    bg = buffer.bg.tolist()

    for y in range(buffer.height):
        output.write(f"\033[{y + 1};1H")
        current_fg = None
        current_bg = None
        for x in range(buffer.width):
            cell_fg = fg[y][x]
            cell_bg = bg[y][x]
            if cell_fg != current_fg:
                output.write("\033[38;2;{};{};{}m".format(*cell_fg))
                current_fg = cell_fg
            if cell_bg != current_bg:
                output.write("\033[48;2;{};{};{}m".format(*cell_bg))
                current_bg = cell_bg
            output.write(glyphs[y][x])
    output.write(RESET_STYLE)
    return output.getvalue()


class TerminalDisplay:
    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.old_settings = None
        self.pending = ""
        # Multibyte characters can be split across reads
        self.decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

    def __enter__(self):
        fd = self.stdin.fileno()
        try:
            self.old_settings = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as err:
            raise OSError(errno.ENOTTY, f"cannot set up terminal: {err}") from err
        try:
            self.write(ALT_SCREEN_ON + HIDE_CURSOR + MOUSE_ON + CLEAR)
            logger.debug("Terminal acquired, size %sx%s", *self.size())
        except BaseException:
            # Never leave the terminal in raw mode
            self.restore_settings()
            raise
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.write(RESET_STYLE + MOUSE_OFF + SHOW_CURSOR + ALT_SCREEN_OFF)
        finally:
            self.restore_settings()
            logger.debug("Terminal restored")
        return False

    def restore_settings(self):
        if self.old_settings is None:
            return
        old_settings, self.old_settings = self.old_settings, None
        try:
            termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, old_settings)
        except termios.error as err:
            raise OSError(errno.EIO, f"cannot restore terminal: {err}") from err

    def write(self, text):
        self.stdout.write(text)
        self.stdout.flush()

    def size(self):
        size = os.get_terminal_size(self.stdout.fileno())
        return size.columns, size.lines

    def poll(self, timeout):
        fd = self.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return []
        data = os.read(fd, 4096)
        if not data:
            raise OSError(errno.EIO, "terminal input closed")
        events, self.pending = parse_input(self.pending + self.decoder.decode(data))
        return events

    def draw(self, buffer):
        self.write(encode_frame(buffer))
