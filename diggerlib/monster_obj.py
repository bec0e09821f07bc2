"""Nobbins and hobbins: the monsters' sprite state and animation.

A monster is alive, a zombie (squashed but still on screen) or gone.
While alive it cycles through three animation frames; a nobbin has one
image set, a hobbin has one set for each horizontal direction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from diggerlib.record import DIR_LEFT, DIR_NONE, DIR_RIGHT
from diggerlib.sprite import FIRSTMONSTER, MONSTERS, SpriteManager

__all__ = ["Position", "Monster", "MON_NOBBIN", "MON_HOBBIN"]

MON_NOBBIN = True
MON_HOBBIN = False

_NOBBIN_IMAGE = 69
_NOBBIN_DEAD_IMAGE = 72
_HOBBIN_RIGHT_IMAGE = 73
_HOBBIN_RIGHT_DEAD_IMAGE = 76
_HOBBIN_LEFT_IMAGE = 77
_HOBBIN_LEFT_DEAD_IMAGE = 80
_WIDTH = 4
_HEIGHT = 15

_log = logging.getLogger(__name__)


@dataclass
class Position:
    """Screen position of an object and the direction it faces."""

    x: int = 0
    y: int = 0
    direction: int = DIR_NONE


class Monster:
    """One monster drawn as sprite ``FIRSTMONSTER + m_id``."""

    def __init__(self, sprites: SpriteManager, m_id: int, nobbin: bool = MON_NOBBIN,
                 direction: int = DIR_LEFT, x: int = 0, y: int = 0) -> None:
        if not 0 <= m_id < MONSTERS:
            raise IndexError(f"monster number out of range: {m_id!r}")
        self._sprites = sprites
        self.m_id = m_id
        self._nobbin = bool(nobbin)
        self._pos = Position(x, y, direction)
        self._alive = True
        self._zombie = False
        self._frame = 0
        self._frame_step = 1

    @property
    def sprite_id(self) -> int:
        return FIRSTMONSTER + self.m_id

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def zombie(self) -> bool:
        """True once squashed and until killed."""
        return self._zombie

    @property
    def nobbin(self) -> bool:
        return self._nobbin

    def _update_sprite(self) -> None:
        direction = self._pos.direction
        sid = self.sprite_id
        if self._alive:
            if self._nobbin:
                self._sprites.init(sid, self._frame + _NOBBIN_IMAGE, _WIDTH, _HEIGHT, 0, 0)
            elif direction == DIR_RIGHT:
                self._sprites.init(sid, self._frame + _HOBBIN_RIGHT_IMAGE, _WIDTH, _HEIGHT, 0, 0)
            elif direction == DIR_LEFT:
                self._sprites.init(sid, self._frame + _HOBBIN_LEFT_IMAGE, _WIDTH, _HEIGHT, 0, 0)
        elif self._zombie:
            if self._nobbin:
                self._sprites.init(sid, _NOBBIN_DEAD_IMAGE, _WIDTH, _HEIGHT, 0, 0)
            elif direction == DIR_RIGHT:
                self._sprites.init(sid, _HOBBIN_RIGHT_DEAD_IMAGE, _WIDTH, _HEIGHT, 0, 0)
            elif direction == DIR_LEFT:
                self._sprites.init(sid, _HOBBIN_LEFT_DEAD_IMAGE, _WIDTH, _HEIGHT - 1, 0, 0)

    def _draw(self) -> None:
        self._sprites.draw(self.sprite_id, self._pos.x, self._pos.y)

    def put(self) -> None:
        """Show the monster at its position for the first time."""
        self._update_sprite()
        self._sprites.move_draw(self.sprite_id, self._pos.x, self._pos.y)

    def mutate(self) -> None:
        """Turn a nobbin into a hobbin or back."""
        self._nobbin = not self._nobbin
        self._update_sprite()
        self._draw()

    def animate(self) -> None:
        """Advance the animation and redraw; a gone monster is not drawn."""
        if self._alive:
            self._frame += self._frame_step
            if self._frame in (0, 2):
                self._frame_step = -self._frame_step
            self._frame = min(max(self._frame, 0), 2)
            self._update_sprite()
            self._draw()
        elif self._zombie:
            self._update_sprite()
            self._draw()

    def damage(self) -> None:
        """Squash the monster: it stays on screen as a zombie."""
        if not self._alive and not self._zombie:
            raise RuntimeError(f"monster {self.m_id} is already gone")
        self._zombie = True
        self._alive = False
        self._update_sprite()
        self._draw()

    def kill(self) -> None:
        """Remove the monster from the screen."""
        if not self._alive and not self._zombie:
            raise RuntimeError(f"monster {self.m_id} is already gone")
        self._alive = False
        self._zombie = False
        self._sprites.erase(self.sprite_id)

    def get_position(self) -> Position:
        """A copy of the monster's position."""
        return replace(self._pos)

    def set_position(self, pos: Position) -> None:
        """Move the monster (without redrawing) to a copy of ``pos``."""
        old = self._pos
        if (old.x, old.y) != (pos.x, pos.y):
            _log.debug("monster(%d): moved by %d,%d", self.m_id, old.x - pos.x, old.y - pos.y)
        if old.direction != pos.direction:
            _log.debug("monster(%d): changed direction from %d to %d",
                       self.m_id, old.direction, pos.direction)
        self._pos = replace(pos)