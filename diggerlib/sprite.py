"""Sprite bookkeeping: saving backgrounds, redrawing overlaps and collisions.

Sprites are drawn through a :class:`DrawApi`.  Before a sprite is drawn the
background under it is grabbed into its ``mov`` buffer, so that erasing or
moving it restores what was there.  Sprites overlapping a changed one are
restored and redrawn too.  After :meth:`SpriteManager.draw` the sprites whose
collision boxes touch the drawn one are available per kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from diggerlib.sound import DIGGERS, FIREBALLS

__all__ = [
    "DrawApi", "SpriteManager",
    "BONUSES", "BAGS", "MONSTERS", "FIREBALLS", "DIGGERS", "SPRITES", "TYPES",
    "FIRSTBONUS", "LASTBONUS", "FIRSTBAG", "LASTBAG", "FIRSTMONSTER",
    "LASTMONSTER", "FIRSTFIREBALL", "LASTFIREBALL", "FIRSTDIGGER", "LASTDIGGER",
    "KIND_BONUS", "KIND_BAG", "KIND_MONSTER", "KIND_FIREBALL", "KIND_DIGGER",
]

BONUSES = 1
BAGS = 7
MONSTERS = 6
SPRITES = BONUSES + BAGS + MONSTERS + FIREBALLS + DIGGERS
TYPES = 5

FIRSTBONUS = 0
LASTBONUS = FIRSTBONUS + BONUSES
FIRSTBAG = LASTBONUS
LASTBAG = FIRSTBAG + BAGS
FIRSTMONSTER = LASTBAG
LASTMONSTER = FIRSTMONSTER + MONSTERS
FIRSTFIREBALL = LASTMONSTER
LASTFIREBALL = FIRSTFIREBALL + FIREBALLS
FIRSTDIGGER = LASTFIREBALL
LASTDIGGER = FIRSTDIGGER + DIGGERS

KIND_BONUS, KIND_BAG, KIND_MONSTER, KIND_FIREBALL, KIND_DIGGER = range(TYPES)

_KIND_RANGES = (
    range(FIRSTBONUS, LASTBONUS),
    range(FIRSTBAG, LASTBAG),
    range(FIRSTMONSTER, LASTMONSTER),
    range(FIRSTFIREBALL, LASTFIREBALL),
    range(FIRSTDIGGER, LASTDIGGER),
)

_MISC = SPRITES


class DrawApi:
    """Drawing surface used by sprites; the base class draws nothing."""

    def geti(self, x: int, y: int, buf: Any, w: int, h: int) -> None:
        """Save the screen area at (x, y) into ``buf``."""

    def puti(self, x: int, y: int, buf: Any, w: int, h: int) -> None:
        """Restore a saved screen area from ``buf``."""

    def putim(self, x: int, y: int, ch: int, w: int, h: int) -> None:
        """Draw image ``ch`` masked over the screen at (x, y)."""


@dataclass
class _Sprite:
    x: int = 0
    y: int = 0
    ch: int = 0
    wid: int = 0
    hei: int = 0
    bwid: int = 0
    bhei: int = 0
    nch: int = 0
    nwid: int = 0
    nhei: int = 0
    nbwid: int = 0
    nbhei: int = 0
    mov: Any = None
    enabled: bool = False

    def take_next(self) -> None:
        self.ch = self.nch
        self.wid = self.nwid
        self.hei = self.nhei
        self.bwid = self.nbwid
        self.bhei = self.nbhei


class SpriteManager:
    """Keeps the screen consistent while sprites are drawn, moved and erased."""

    def __init__(self, draw_api: DrawApi | None = None) -> None:
        self.draw_api = draw_api if draw_api is not None else DrawApi()
        self._spr = [_Sprite() for _ in range(SPRITES + 1)]
        self._redraw = [False] * (SPRITES + 1)
        self._rec = [False] * (SPRITES + 1)
        self._collisions: list[list[int]] = [[] for _ in range(TYPES)]

    @staticmethod
    def _check(n: int) -> None:
        if not 0 <= n < SPRITES:
            raise IndexError(f"sprite number out of range: {n!r}")

    def create(self, n: int, ch: int, mov: Any, wid: int, hei: int,
               bwid: int, bhei: int) -> None:
        """Define sprite ``n`` with its image, background buffer and boxes."""
        self._check(n)
        s = self._spr[n]
        s.nch = s.ch = ch
        s.mov = mov
        s.nwid = s.wid = wid
        s.nhei = s.hei = hei
        s.nbwid = s.bwid = bwid
        s.nbhei = s.bhei = bhei
        s.enabled = False

    def init(self, n: int, ch: int, wid: int, hei: int, bwid: int, bhei: int) -> None:
        """Set the image and sizes sprite ``n`` takes on its next draw."""
        self._check(n)
        s = self._spr[n]
        s.nch, s.nwid, s.nhei, s.nbwid, s.nbhei = ch, wid, hei, bwid, bhei

    def move_draw(self, n: int, x: int, y: int) -> None:
        """Place sprite ``n`` at (x, y) and show it."""
        self._check(n)
        s = self._spr[n]
        s.x = x & -4
        s.y = y
        s.take_next()
        self._clear_redraw()
        self._set_redraw(n)
        self._restore_backgrounds()
        self.draw_api.geti(s.x, s.y, s.mov, s.wid, s.hei)
        s.enabled = True
        self._redraw[n] = True
        self._put_images()

    def erase(self, n: int) -> None:
        """Hide sprite ``n``, restoring the background under it."""
        self._check(n)
        s = self._spr[n]
        if not s.enabled:
            return
        self.draw_api.puti(s.x, s.y, s.mov, s.wid, s.hei)
        s.enabled = False
        self._clear_redraw()
        self._set_redraw(n)
        self._put_images()

    def draw(self, n: int, x: int, y: int) -> None:
        """Draw sprite ``n`` at (x, y) and work out what it collides with."""
        self._check(n)
        s = self._spr[n]
        x &= -4
        self._clear_redraw()
        self._set_redraw(n)
        saved = (s.x, s.y, s.wid, s.hei)
        s.x, s.y, s.wid, s.hei = x, y, s.nwid, s.nhei
        self._rec = [False] * (SPRITES + 1)
        self._set_redraw(n)
        s.x, s.y, s.wid, s.hei = saved
        self._redraw[n] = True
        self._restore_backgrounds()
        s.enabled = True
        s.x = x
        s.y = y
        s.take_next()
        self.draw_api.geti(s.x, s.y, s.mov, s.wid, s.hei)
        self._put_images()
        self._find_collisions(n)

    def init_misc(self, x: int, y: int, wid: int, hei: int) -> None:
        """Clear sprites overlapping an area about to be drawn over."""
        m = self._spr[_MISC]
        m.x, m.y, m.wid, m.hei = x, y, wid, hei
        self._clear_redraw()
        self._set_redraw(_MISC)
        self._restore_backgrounds()

    def get_images(self) -> None:
        """Re-grab backgrounds of cleared sprites and draw them again."""
        for i in range(SPRITES):
            if self._redraw[i]:
                s = self._spr[i]
                self.draw_api.geti(s.x, s.y, s.mov, s.wid, s.hei)
        self._put_images()

    def draw_misc(self, x: int, y: int, ch: int, wid: int, hei: int) -> None:
        """Draw an image that is not one of the managed sprites."""
        m = self._spr[_MISC]
        m.x, m.y, m.ch, m.wid, m.hei = x & -4, y, ch, wid, hei
        self.draw_api.putim(m.x, m.y, m.ch, m.wid, m.hei)

    def collisions(self, kind: int) -> list[int]:
        """Sprites of the given kind that the last drawn sprite touches."""
        if not 0 <= kind < TYPES:
            raise ValueError(f"unknown sprite kind: {kind!r}")
        return list(self._collisions[kind])

    def _clear_redraw(self) -> None:
        self._rec = [False] * (SPRITES + 1)
        self._redraw = [False] * (SPRITES + 1)

    def _set_redraw(self, n: int) -> None:
        if self._rec[n]:
            return
        self._rec[n] = True
        for i in range(SPRITES):
            if self._spr[i].enabled and i != n and self._collide(i, n):
                self._redraw[i] = True
                self._set_redraw(i)

    def _collide(self, bx: int, si: int) -> bool:
        b, s = self._spr[bx], self._spr[si]
        if b.x >= s.x:
            if b.x > (s.wid << 2) + s.x - 1:
                return False
        elif s.x > (b.wid << 2) + b.x - 1:
            return False
        if b.y >= s.y:
            return b.y <= s.hei + s.y - 1
        return s.y <= b.hei + b.y - 1

    def _bcollide(self, bx: int, si: int) -> bool:
        b, s = self._spr[bx], self._spr[si]
        if b.x >= s.x:
            if b.x + b.bwid > (s.wid << 2) + s.x - s.bwid - 1:
                return False
        elif s.x + s.bwid > (b.wid << 2) + b.x - b.bwid - 1:
            return False
        if b.y >= s.y:
            return b.y + b.bhei <= s.hei + s.y - s.bhei - 1
        return s.y + s.bhei <= b.hei + b.y - b.bhei - 1

    def _put_images(self) -> None:
        for i in range(SPRITES):
            if self._redraw[i]:
                s = self._spr[i]
                self.draw_api.putim(s.x, s.y, s.ch, s.wid, s.hei)

    def _restore_backgrounds(self) -> None:
        for i in range(SPRITES):
            if self._redraw[i]:
                s = self._spr[i]
                self.draw_api.puti(s.x, s.y, s.mov, s.wid, s.hei)

    def _find_collisions(self, spr: int) -> None:
        self._collisions = [
            [spc for spc in indices
             if self._spr[spc].enabled and spc != spr and self._bcollide(spr, spc)]
            for indices in _KIND_RANGES
        ]