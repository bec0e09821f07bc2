# diggerlib

The engine parts of a classic tunnelling arcade game, in pure Python with no
dependencies beyond the standard library.

## Modules

- `diggerlib.soundgen`: `SoundGenerator` is a thread-safe square-wave band
  synthesiser. Each band either generates a tone (`set_band`) or modulates the
  summed output between two gains (`set_band_mod`). Bands can be muted
  (`set_mute`) and their phase can be read and set (`get_phase`, `set_phase`).
  `get_sample()` returns the next signed 16-bit sample.
- `diggerlib.sound`: `SoundEngine` sequences the game's effects (`fall`,
  `break_`, `wobble`, `fire`, `explode`, `bonus`, `em`, `emerald`, `gold`,
  `eat_monster`, `digger_die`, `one_up`), its three tunes (`music(0)` bonus
  jingle, `music(1)` background tune, `music(2)` dirge) and the
  level-complete jingle (`start_level_done`). Each call to `sound_int()`
  advances everything by one tick and programs a `SoundDriver` with the two
  speaker timer values. The base `SoundDriver` makes no sound.
- `diggerlib.newsnd`: `SpeakerSynth` is a `SoundDriver` that emulates the two
  PC speaker timers on a two-band `SoundGenerator`. Once bound to an engine it
  runs the engine's `sound_int()` from inside the sample stream, about 72.8
  times per second of audio. `get_sample()` and `samples(count)` produce the
  audio.
- `diggerlib.record`: `Recorder` builds a DRF game recording in memory. It
  holds a header from `GameSettings`, then run-length encoded moves, random
  seeds, initials and end-of-level / end-of-game markers. `parse_drf` and
  `load_drf` turn a recording into a `Playback`, which hands back the moves
  (`get_dir`, raising `EndOfRecording` at the end) and the seeds (`get_rand`).
  A malformed recording raises `DrfError`. `default_filename` gives the name a
  recording is saved under when none was chosen.
- `diggerlib.scores`: `PlayerScores` keeps two players' scores. It rolls a
  score over past 999999 and reports when a bonus threshold is crossed.
  `HighScoreTable` holds the ten best scores. `ScoreFile` reads and writes the
  512-byte score block, which has one table for each of normal or gauntlet
  mode with one or two diggers, in its own file or at an offset in a level
  file. `format_score` gives the six-character score text.
- `diggerlib.sprite`: `SpriteManager` draws, moves and erases sprites through a
  `DrawApi` that you supply (`geti`, `puti`, `putim`). It saves the background
  under each sprite, redraws overlapping sprites, and after `draw` reports
  collisions by kind through `collisions(kind)`.
- `diggerlib.monster_obj`: `Monster` is a nobbin or hobbin drawn through a
  `SpriteManager`. It handles animation frames, `mutate` between the two forms,
  `damage` (squashed, still on screen) and `kill` (removed). `Position` holds
  its coordinates and direction.

## Installation

```
pip install .
```

## Example: synthesised sound

```python
from diggerlib.newsnd import SpeakerSynth
from diggerlib.sound import SoundEngine

synth = SpeakerSynth(44100)
engine = SoundEngine(synth)
synth.bind(engine)
engine.init_sound()
engine.music(1, 1.0)               # background tune
pcm = list(synth.samples(44100))   # one second of 16-bit samples
```

## Example: recording and playing back a game

```python
from diggerlib.record import DIR_RIGHT, EndOfRecording, GameSettings, Recorder, parse_drf

rec = Recorder(False)
rec.start(GameSettings())
rec.put_rand(0x1234ABCD)
rec.put_dir(DIR_RIGHT, False)
rec.put_eol()
rec.put_eog()

play = parse_drf(rec.getvalue())
assert play.get_rand() == 0x1234ABCD
assert play.get_dir() == (DIR_RIGHT, False)
try:
    play.get_dir()
except EndOfRecording:
    pass
```

## Example: high scores

```python
from diggerlib.scores import HighScoreTable, ScoreFile

scores = ScoreFile("digger.sco")
table = scores.load(gauntlet=False, diggers=1)
if table.qualifies(12500):
    table.insert("ABC", 12500)
    scores.save(table, gauntlet=False, diggers=1)
print("\n".join(table.lines()))
```

## What the package does not do

This is a library of parts, not a playable game. It has no command to start,
no window or screen drawing of its own, no audio output device (you play the
samples yourself), and no keyboard input. It also lacks the game loop, the
level field and tunnel logic, the monsters' movement and chasing, the bags,
the fireballs and the diggers themselves. Nothing here asks the player for
initials; you pass them to `HighScoreTable.insert` and `Recorder.put_init`.

## Tests

```
pip install .[test]
pytest
```