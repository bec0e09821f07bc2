import pytest

from diggerlib.sprite import (
    DrawApi,
    SpriteManager,
    SPRITES,
    FIRSTMONSTER,
    FIRSTBAG,
    KIND_MONSTER,
    KIND_BAG,
    KIND_DIGGER,
)


class LogApi(DrawApi):
    def __init__(self):
        self.calls = []

    def geti(self, x, y, buf, w, h):
        self.calls.append(("geti", x, y, buf, w, h))

    def puti(self, x, y, buf, w, h):
        self.calls.append(("puti", x, y, buf, w, h))

    def putim(self, x, y, ch, w, h):
        self.calls.append(("putim", x, y, ch, w, h))


@pytest.fixture
def api():
    return LogApi()


@pytest.fixture
def mgr(api):
    return SpriteManager(api)


def _probe(mgr, n, x, y):
    """Draw sprite n at (x, y) and return the monsters it overlaps."""
    mgr.create(n, 99, "probe", 4, 15, 0, 0)
    mgr.draw(n, x, y)
    return mgr.collisions(KIND_MONSTER)


def test_move_draw_saves_background_then_draws(mgr, api):
    mgr.create(FIRSTMONSTER, 69, "buf", 4, 15, 0, 0)
    mgr.move_draw(FIRSTMONSTER, 100, 50)
    assert api.calls == [
        ("geti", 100, 50, "buf", 4, 15),
        ("putim", 100, 50, 69, 4, 15),
    ]
    hits = _probe(mgr, FIRSTMONSTER + 1, 100, 50)
    assert hits == [FIRSTMONSTER]


def test_erase_disabled_sprite_does_nothing(mgr, api):
    mgr.create(FIRSTMONSTER, 69, "buf", 4, 15, 0, 0)
    mgr.erase(FIRSTMONSTER)
    assert api.calls == []
    hits = _probe(mgr, FIRSTMONSTER + 1, 0, 0)
    assert hits == []


def test_erase_restores_background(mgr, api):
    mgr.create(FIRSTMONSTER, 69, "buf", 4, 15, 0, 0)
    mgr.move_draw(FIRSTMONSTER, 100, 50)
    api.calls.clear()
    mgr.erase(FIRSTMONSTER)
    assert api.calls == [("puti", 100, 50, "buf", 4, 15)]
    api.calls.clear()
    mgr.erase(FIRSTMONSTER)
    assert api.calls == []
    hits = _probe(mgr, FIRSTMONSTER + 1, 100, 50)
    assert hits == []


def test_erase_redraws_overlapping_sprite(mgr, api):
    mgr.create(FIRSTMONSTER, 69, "a", 4, 15, 0, 0)
    mgr.create(FIRSTMONSTER + 1, 70, "b", 4, 15, 0, 0)
    mgr.move_draw(FIRSTMONSTER, 100, 50)
    mgr.move_draw(FIRSTMONSTER + 1, 104, 50)
    api.calls.clear()
    mgr.erase(FIRSTMONSTER)
    assert api.calls == [
        ("puti", 100, 50, "a", 4, 15),
        ("putim", 104, 50, 70, 4, 15),
    ]
    hits = _probe(mgr, FIRSTMONSTER + 2, 100, 50)
    assert hits == [FIRSTMONSTER + 1]


def test_draw_reports_collisions(mgr):
    mgr.create(FIRSTMONSTER, 69, "a", 4, 15, 0, 0)
    mgr.create(FIRSTMONSTER + 1, 70, "b", 4, 15, 0, 0)
    mgr.create(FIRSTMONSTER + 2, 71, "c", 4, 15, 0, 0)
    mgr.move_draw(FIRSTMONSTER + 1, 104, 50)
    mgr.move_draw(FIRSTMONSTER + 2, 200, 50)
    mgr.draw(FIRSTMONSTER, 100, 50)
    assert mgr.collisions(KIND_MONSTER) == [FIRSTMONSTER + 1]
    assert mgr.collisions(KIND_DIGGER) == []
    assert mgr.collisions(KIND_BAG) == []


def test_collisions_by_kind(mgr):
    mgr.create(FIRSTMONSTER, 69, "a", 4, 15, 0, 0)
    mgr.create(FIRSTBAG, 62, "bag", 4, 15, 0, 0)
    mgr.move_draw(FIRSTBAG, 100, 50)
    mgr.draw(FIRSTMONSTER, 100, 50)
    assert mgr.collisions(KIND_BAG) == [FIRSTBAG]
    assert mgr.collisions(KIND_MONSTER) == []


def test_draw_uses_next_image(mgr, api):
    mgr.create(FIRSTMONSTER, 69, "a", 4, 15, 0, 0)
    mgr.init(FIRSTMONSTER, 73, 4, 15, 0, 0)
    mgr.draw(FIRSTMONSTER, 100, 50)
    assert ("putim", 100, 50, 73, 4, 15) in api.calls
    assert api.calls[-1] == ("putim", 100, 50, 73, 4, 15)
    hits = _probe(mgr, FIRSTMONSTER + 1, 100, 50)
    assert hits == [FIRSTMONSTER]


def test_draw_misc(mgr, api):
    mgr.draw_misc(8, 20, 5, 2, 3)
    assert api.calls == [("putim", 8, 20, 5, 2, 3)]
    hits = _probe(mgr, FIRSTMONSTER, 8, 20)
    assert hits == []


def test_init_misc_and_get_images(mgr, api):
    mgr.create(FIRSTMONSTER, 69, "a", 4, 15, 0, 0)
    mgr.move_draw(FIRSTMONSTER, 100, 50)
    api.calls.clear()
    mgr.init_misc(100, 50, 4, 15)
    assert api.calls == [("puti", 100, 50, "a", 4, 15)]
    api.calls.clear()
    mgr.get_images()
    assert api.calls == [
        ("geti", 100, 50, "a", 4, 15),
        ("putim", 100, 50, 69, 4, 15),
    ]
    hits = _probe(mgr, FIRSTMONSTER + 1, 100, 50)
    assert hits == [FIRSTMONSTER]


def test_bad_sprite_number(mgr):
    with pytest.raises(IndexError):
        mgr.erase(SPRITES)
    with pytest.raises(IndexError):
        mgr.move_draw(-1, 0, 0)


def test_bad_kind(mgr):
    with pytest.raises(ValueError):
        mgr.collisions(5)