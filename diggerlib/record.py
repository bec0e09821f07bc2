"""Recording and playback of games in the DRF text format.

A DRF file starts with a header of newline-separated fields (magic,
version, game mode, bonus score and eight level maps).  The rest is a
stream in which line breaks carry no meaning: run-length encoded moves,
eight-digit hexadecimal random seeds, entered initials and ``EOL`` / ``EOG``
markers.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from os import PathLike

__all__ = [
    "DIR_NONE", "DIR_RIGHT", "DIR_UP", "DIR_LEFT", "DIR_DOWN",
    "MWIDTH", "MHEIGHT", "LEVELS", "MAX_REC_BUFFER", "DIGGER_VERSION",
    "KLUDGE_VERSION", "DEFAULT_NAME",
    "GameSettings", "DrfError", "EndOfRecording", "Recorder", "Playback",
    "parse_drf", "load_drf", "default_filename",
]

DIR_NONE = -1
DIR_RIGHT = 0
DIR_UP = 2
DIR_LEFT = 4
DIR_DOWN = 6

MWIDTH = 15
MHEIGHT = 10
LEVELS = 8

MAX_REC_BUFFER = 262144
DIGGER_VERSION = "MS MPL 20190212"
KLUDGE_VERSION = "AJ DOS 19981125"
_KLUDGE_DATE = 19981125
DEFAULT_NAME = "DIGGER.DRF"

_DIR_CHARS = {"s": DIR_NONE, "r": DIR_RIGHT, "u": DIR_UP, "l": DIR_LEFT, "d": DIR_DOWN}


def _blank_levels() -> list[list[str]]:
    return [[" " * MWIDTH for _ in range(MHEIGHT)] for _ in range(LEVELS)]


@dataclass
class GameSettings:
    """Game options stored in a recording's header."""

    gauntlet: bool = False
    gtime: int = 0
    startlev: int = 1
    nplayers: int = 1
    diggers: int = 1
    bonusscore: int = 20000
    leveldat: list[list[str]] = field(default_factory=_blank_levels)


class DrfError(ValueError):
    """The recording is malformed or truncated."""


class EndOfRecording(Exception):
    """Playback reached the end of the recorded moves."""


def _atol(text: str) -> int:
    text = text.lstrip(" \t\n\r\v\f")
    sign = 1
    if text[:1] in "+-" and text[:1]:
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if ch not in string.digits:
            break
        digits += ch
    return sign * int(digits) if digits else 0


def _dir_char(direction: int, fire: bool) -> str:
    d = "s" if direction == DIR_NONE else "ruld"[direction >> 1]
    return d.upper() if fire else d


class Recorder:
    """Accumulates a DRF recording in memory."""

    def __init__(self, kludge: bool = False) -> None:
        self.kludge = kludge
        self.valid = True
        self._buf: list[str] = []
        self._len = 0
        self._linechars = 0
        self._runlen = 0
        self._rundir = ""

    def _emit(self, text: str) -> None:
        self._buf.append(text)
        self._len += len(text)
        if self._len > MAX_REC_BUFFER - 80:
            # The recording is too long: start over.
            self._buf.clear()
            self._len = 0

    def start(self, settings: GameSettings) -> None:
        """Begin a recording with a header describing ``settings``."""
        self._buf.clear()
        self._len = 0
        self.valid = True
        self._emit("DRF\n")
        self._emit((KLUDGE_VERSION if self.kludge else DIGGER_VERSION) + "\n")
        if settings.diggers > 1:
            self._emit(f"M{settings.diggers}")
            if settings.gauntlet:
                self._emit(f"G{settings.gtime}")
        elif settings.gauntlet:
            self._emit(f"G{settings.gtime}")
        else:
            self._emit(f"{settings.nplayers}")
        if settings.startlev > 1:
            self._emit(f"I{settings.startlev}")
        self._emit(f"\n{settings.bonusscore}\n")
        for level in settings.leveldat[:LEVELS]:
            for row in level[:MHEIGHT]:
                self._emit(row.ljust(MWIDTH)[:MWIDTH] + "\n")
        self._linechars = self._runlen = 0

    def _put_run(self) -> None:
        if self._runlen > 1:
            self._emit(f"{self._rundir}{self._runlen}")
            self._linechars += 1 + len(str(self._runlen))
        else:
            self._emit(self._rundir)
            self._linechars += 1
        if self._linechars >= 60:
            self._emit("\n")
            self._linechars = 0

    def put_dir(self, direction: int, fire: bool) -> None:
        """Record one frame's movement and fire state."""
        d = _dir_char(direction, fire)
        if self._runlen == 0:
            self._rundir = d
        if self._rundir != d:
            self._put_run()
            self._rundir = d
            self._runlen = 1
        else:
            if self._runlen == 999:
                self._put_run()
                self._runlen = 0
            self._runlen += 1

    def put_rand(self, randv: int) -> None:
        """Record a random seed."""
        self._emit(f"{randv & 0xFFFFFFFF:08X}\n")
        self._linechars = self._runlen = 0

    def put_init(self, initials: str) -> None:
        """Record the initials entered for a high score."""
        self._emit("*" + initials.ljust(3)[:3] + "\n")

    def put_eol(self) -> None:
        """Mark the end of a level."""
        if self._runlen > 0:
            self._put_run()
        if self._linechars > 0:
            self._emit("\n")
        self._emit("EOL\n")

    def put_eog(self) -> None:
        """Mark the end of the game."""
        self._emit("EOG\n")

    def getvalue(self) -> str:
        """The recording so far."""
        return "".join(self._buf)

    def save(self, path: str | PathLike) -> bool:
        """Write the recording to ``path``; return False if it is not valid."""
        if not self.valid:
            return False
        with open(path, "w", encoding="latin-1") as out:
            out.write(self.getvalue())
        return True


class Playback:
    """Reads moves and seeds back from a recording's stream."""

    def __init__(self, settings: GameSettings, stream: str, kludge: bool = False) -> None:
        self.settings = settings
        self.kludge = kludge
        self._stream = stream
        self._pos = 0
        self._runleft = 0
        self._rundir = ""
        self._direction = DIR_NONE

    def _peek(self) -> str:
        return self._stream[self._pos] if self._pos < len(self._stream) else ""

    def _decode(self, ch: str) -> tuple[int, bool]:
        fire = "A" <= ch <= "Z"
        direction = _DIR_CHARS.get(ch.lower() if fire else ch)
        if direction is not None:
            self._direction = direction
        return self._direction, fire

    def get_dir(self) -> tuple[int, bool]:
        """Return the next frame's (direction, fire); raise at the end."""
        if self._runleft > 0:
            self._runleft -= 1
            return self._decode(self._rundir)
        ch = self._peek()
        if ch in ("", "E", "e"):
            raise EndOfRecording
        self._rundir = ch
        self._pos += 1
        while self._peek().isdigit() and self._peek() in string.digits:
            self._runleft = self._runleft * 10 + int(self._peek())
            self._pos += 1
        result = self._decode(self._rundir)
        if self._runleft > 0:
            self._runleft -= 1
        return result

    def get_rand(self) -> int:
        """Read the next random seed, skipping recorded initials."""
        if self._peek() == "*":
            self._pos += 4
        value = 0
        for i in range(8):
            ch = self._peek()
            self._pos += 1
            if ch and ch in string.hexdigits:
                value |= int(ch, 16) << ((7 - i) * 4)
        return value

    def skip_eol(self) -> None:
        """Skip an end-of-level marker."""
        self._pos += 3


def parse_drf(text: str) -> Playback:
    """Parse a DRF recording into a :class:`Playback`."""
    lines = iter(text.split("\n"))
    consumed = 0

    def next_line() -> str:
        nonlocal consumed
        try:
            line = next(lines)
        except StopIteration:
            raise DrfError("recording is truncated") from None
        consumed += len(line) + 1
        if consumed > len(text):
            raise DrfError("recording is truncated")
        return line.removesuffix("\r")

    if not next_line().startswith("DRF"):
        raise DrfError("not a DRF recording")
    kludge = _atol(next_line()[7:]) <= _KLUDGE_DATE

    settings = GameSettings()
    buf = next_line()

    def at(i: int) -> str:
        return buf[i] if i < len(buf) else ""

    if at(0) in ("1", "2"):
        settings.nplayers = int(at(0))
        x = 1
    else:
        if at(0) == "M":
            if not at(1).isdigit():
                raise DrfError(f"bad digger count in mode {buf!r}")
            settings.diggers = int(at(1))
            x = 2
        else:
            x = 0
        if at(x) == "G":
            settings.gauntlet = True
            x += 1
            settings.gtime = _atol(buf[x:])
            while at(x) and at(x) in string.digits:
                x += 1
    if at(x) == "U":  # unlimited lives are ignored on playback
        x += 1
    if at(x) == "I":
        settings.startlev = _atol(buf[x + 1:])

    settings.bonusscore = _atol(next_line())
    settings.leveldat = [
        [next_line().ljust(MWIDTH)[:MWIDTH] for _ in range(MHEIGHT)]
        for _ in range(LEVELS)
    ]
    stream = "".join(ch for ch in text[consumed:] if ch >= " ")
    return Playback(settings, stream, kludge)


def load_drf(path: str | PathLike) -> Playback:
    """Read and parse a DRF file."""
    with open(path, "rb") as inp:
        return parse_drf(inp.read().decode("latin-1"))


def default_filename(initials: str, score: int, nplayers: int) -> str:
    """The file name a recording is saved under when none was given."""
    if nplayers == 2:
        return DEFAULT_NAME
    init = "".join(
        ch if ch in string.ascii_letters else "_" for ch in initials.ljust(3, "_")[:3]
    )
    if score < 100000:
        name = f"{init}{score}"
    elif init[2] == "_":
        name = f"{init[0]}{init[1]}{score}"
    elif init[0] == "_":
        name = f"{init[1]}{init[2]}{score}"
    else:
        name = f"{init[0]}{init[2]}{score}"
    return name + ".drf"