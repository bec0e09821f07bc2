"""Engine parts of a classic tunnelling arcade game: speaker sound, DRF recordings, scores, sprites and monsters."""

__version__ = "0.1.0"

__all__ = ["monster_obj", "newsnd", "record", "scores", "sound", "soundgen", "sprite"]