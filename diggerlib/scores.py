"""Player scores, bonus-life thresholds and the high-score table.

The high-score file is a 512-byte block holding four 111-byte tables:
one for each combination of normal/gauntlet mode and one/two diggers.
A table starts with ``s`` followed by ten 11-character lines of three
initials, two spaces and a six-character right-aligned score.
"""

from __future__ import annotations

import os
from os import PathLike

__all__ = [
    "format_score", "HighScoreTable", "ScoreFile", "PlayerScores",
    "TABLE_SIZE", "RECORD_SIZE", "BLOCK_SIZE", "LEVEL_FILE_OFFSET",
    "DEFAULT_BONUS_SCORE", "MAX_SCORE",
]

TABLE_SIZE = 10
RECORD_SIZE = 1 + TABLE_SIZE * 11
BLOCK_SIZE = 512
LEVEL_FILE_OFFSET = 1202
DEFAULT_BONUS_SCORE = 20000
MAX_SCORE = 999999
_EMPTY_INITIALS = "..."


def format_score(n: int) -> str:
    """Six-character, right-aligned score text; only the last six digits are kept."""
    if n < 0:
        raise ValueError(f"score must not be negative: {n!r}")
    return str(n)[-6:].rjust(6)


def _atol(text: str) -> int:
    text = text.lstrip(" \t\n\r\v\f")
    sign = 1
    if text[:1] in ("+", "-") and text:
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = []
    for ch in text:
        if not ("0" <= ch <= "9"):
            break
        digits.append(ch)
    return sign * int("".join(digits)) if digits else 0


def _slot(gauntlet: bool, diggers: int) -> int:
    p = 111 if gauntlet else 0
    if diggers == 2:
        p += 222
    return p


class HighScoreTable:
    """The ten best scores, best first, each with three initials."""

    def __init__(self, entries=None) -> None:
        entries = list(entries or [])
        if len(entries) > TABLE_SIZE:
            raise ValueError(f"a table holds at most {TABLE_SIZE} entries")
        self.entries: list[tuple[str, int]] = [
            (str(initials), int(score)) for initials, score in entries
        ]
        self.entries.extend(
            (_EMPTY_INITIALS, 0) for _ in range(TABLE_SIZE - len(self.entries))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HighScoreTable):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"HighScoreTable({self.entries!r})"

    def qualifies(self, score: int) -> bool:
        """Whether ``score`` beats the lowest entry."""
        return score > self.entries[-1][1]

    def insert(self, initials: str, score: int) -> int:
        """Place a score in the table and return its 0-based position.

        The entry goes below every strictly higher score and above equal
        ones; the lowest entry drops off the end.
        """
        j = 1
        for pos in range(TABLE_SIZE, 1, -1):
            if score < self.entries[pos - 2][1]:
                j = pos
                break
        self.entries.insert(j - 1, (initials, score))
        del self.entries[TABLE_SIZE:]
        return j - 1

    def lines(self) -> list[str]:
        """The table as displayed: initials, two spaces and the score."""
        return [f"{initials}  {format_score(score)}" for initials, score in self.entries]

    def to_record(self) -> bytes:
        """The 111-byte form stored in the score file."""
        body = "".join(
            f"{initials.ljust(3)[:3]}  {format_score(score)}"
            for initials, score in self.entries
        )
        return ("s" + body).encode("latin-1")

    @classmethod
    def from_record(cls, data: bytes) -> "HighScoreTable":
        """Parse a stored table; anything not starting with ``s`` gives an empty table."""
        data = bytes(data).ljust(RECORD_SIZE, b"\0")
        if data[:1] != b"s":
            return cls()
        text = data.decode("latin-1")
        entries = []
        p = 1
        for _ in range(TABLE_SIZE):
            initials = text[p:p + 3]
            score = _atol(text[p + 5:p + 11])
            entries.append((initials, score))
            p += 11
        return cls(entries)


class ScoreFile:
    """A score block stored in a file, optionally at an offset in a level file."""

    def __init__(self, path: str | PathLike, offset: int = 0) -> None:
        self.path = path
        self.offset = offset

    def _read(self) -> bytearray:
        try:
            with open(self.path, "rb") as inp:
                inp.seek(self.offset)
                data = inp.read(BLOCK_SIZE)
        except FileNotFoundError:
            return bytearray(BLOCK_SIZE)
        buf = bytearray(data.ljust(BLOCK_SIZE, b"\0"))
        if len(data) < BLOCK_SIZE:
            buf[0] = 0
        return buf

    def load(self, gauntlet: bool = False, diggers: int = 1) -> HighScoreTable:
        """Read the table for the given game mode."""
        p = _slot(gauntlet, diggers)
        return HighScoreTable.from_record(bytes(self._read()[p:p + RECORD_SIZE]))

    def save(self, table: HighScoreTable, gauntlet: bool = False, diggers: int = 1) -> bool:
        """Store the table for the given game mode; False if the file cannot be written."""
        buf = self._read()
        p = _slot(gauntlet, diggers)
        buf[p:p + RECORD_SIZE] = table.to_record()
        if self.offset == 0:
            with open(self.path, "wb") as out:
                out.write(buf)
            return True
        if not os.path.exists(self.path):
            return False
        with open(self.path, "r+b") as out:
            out.seek(self.offset)
            out.write(buf)
        return True


class PlayerScores:
    """Running scores of the two players and their bonus thresholds."""

    def __init__(self, bonusscore: int = DEFAULT_BONUS_SCORE, diggers: int = 1) -> None:
        self.bonusscore = bonusscore
        self.diggers = diggers
        self.reset()

    def reset(self) -> None:
        """Zero both players' scores and bonus thresholds."""
        self._score = [0, 0]
        self._tscore = [0, 0]
        self._nextbs = [self.bonusscore, self.bonusscore]

    def add_score(self, n: int, score: int) -> bool:
        """Add points to player ``n``; return True if a bonus was earned.

        A score above 999999 is moved to the player's total and restarts
        from zero.  Player 2 needs one point more than the threshold.
        """
        self._score[n] += score
        if self._score[n] > MAX_SCORE:
            self._tscore[n] += self._score[n]
            self._score[n] = 0
        if self._score[n] >= self._nextbs[n] + n:
            self._nextbs[n] += self.bonusscore
            return True
        return False

    def score(self, n: int) -> int:
        """Displayed score of player ``n``."""
        return self._score[n]

    def total(self, n: int) -> int:
        """Total score of player ``n`` including rolled-over points."""
        return self._tscore[n] + self._score[n]

    def kill(self, n: int) -> bool:
        return self.add_score(n, 250)

    def kill_shared(self) -> tuple[bool, bool]:
        """A kill credited half to each of two diggers."""
        return self.add_score(0, 125), self.add_score(1, 125)

    def emerald(self, n: int) -> bool:
        return self.add_score(n, 25)

    def octave(self, n: int) -> bool:
        return self.add_score(n, 250)

    def gold(self, n: int) -> bool:
        return self.add_score(n, 500)

    def bonus(self, n: int) -> bool:
        return self.add_score(n, 1000)

    def eat_monster(self, n: int, msc: int) -> bool:
        return self.add_score(n, msc * 200)