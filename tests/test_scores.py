import pytest

from diggerlib.scores import (
    HighScoreTable,
    PlayerScores,
    ScoreFile,
    format_score,
    LEVEL_FILE_OFFSET,
    RECORD_SIZE,
)


def test_format_score_zero():
    assert format_score(0) == "     0"


def test_format_score_right_aligned():
    text = format_score(42)
    assert len(text) == 6
    assert text.strip() == "42"
    assert format_score(123456) == "123456"


def test_format_score_keeps_last_six_digits():
    assert format_score(1000000) == "000000"


def test_format_score_negative():
    with pytest.raises(ValueError):
        format_score(-1)


def test_default_table_lines():
    table = HighScoreTable()
    lines = table.lines()
    assert len(lines) == 10
    assert all(line == "...  " + format_score(0) for line in lines)


def test_qualifies():
    table = HighScoreTable()
    assert table.qualifies(1)
    assert not table.qualifies(0)


def test_insert_keeps_descending_order():
    table = HighScoreTable()
    table.insert("AAA", 500)
    table.insert("BBB", 1000)
    pos = table.insert("CCC", 700)
    assert pos == 1
    assert [s for _, s in table.entries[:3]] == [1000, 700, 500]
    assert [i for i, _ in table.entries[:3]] == ["BBB", "CCC", "AAA"]
    assert len(table.entries) == 10


def test_insert_drops_lowest():
    table = HighScoreTable([(f"P{i:02d}"[:3], 100 - i) for i in range(10)])
    table.insert("NEW", 1000)
    assert table.entries[0] == ("NEW", 1000)
    assert ("P09", 91) not in table.entries
    assert len(table.entries) == 10


def test_too_many_entries():
    with pytest.raises(ValueError):
        HighScoreTable([("AAA", 1)] * 11)


def test_record_round_trip():
    table = HighScoreTable([("ABC", 12345), ("XYZ", 999)])
    record = table.to_record()
    assert len(record) == RECORD_SIZE
    assert record[:1] == b"s"
    assert HighScoreTable.from_record(record) == table


def test_record_without_marker_is_empty():
    table = HighScoreTable.from_record(b"x" * RECORD_SIZE)
    assert table == HighScoreTable()


def test_score_file_round_trip(tmp_path):
    path = tmp_path / "digger.sco"
    sf = ScoreFile(path)
    table = HighScoreTable([("ABC", 5000)])
    assert sf.save(table)
    assert sf.load() == table
    assert path.stat().st_size == 512


def test_score_file_slots_are_independent(tmp_path):
    sf = ScoreFile(tmp_path / "digger.sco")
    normal = HighScoreTable([("ABC", 5000)])
    gauntlet = HighScoreTable([("DEF", 7000)])
    sf.save(normal)
    sf.save(gauntlet, gauntlet=True, diggers=2)
    assert sf.load() == normal
    assert sf.load(gauntlet=True, diggers=2) == gauntlet
    assert sf.load(gauntlet=True) == HighScoreTable()


def test_score_file_missing(tmp_path):
    assert ScoreFile(tmp_path / "none.sco").load() == HighScoreTable()


def test_level_file_offset(tmp_path):
    path = tmp_path / "level.dlf"
    missing = ScoreFile(tmp_path / "absent.dlf", LEVEL_FILE_OFFSET)
    assert missing.save(HighScoreTable()) is False
    path.write_bytes(b"L" * LEVEL_FILE_OFFSET)
    sf = ScoreFile(path, LEVEL_FILE_OFFSET)
    table = HighScoreTable([("QQQ", 300)])
    assert sf.save(table)
    data = path.read_bytes()
    assert data[:LEVEL_FILE_OFFSET] == b"L" * LEVEL_FILE_OFFSET
    assert data[LEVEL_FILE_OFFSET:LEVEL_FILE_OFFSET + 1] == b"s"
    assert sf.load() == table


def test_add_and_reset():
    ps = PlayerScores()
    ps.gold(0)
    ps.emerald(0)
    assert ps.score(0) == 500 + 25
    ps.reset()
    assert ps.score(0) == 0
    assert ps.total(0) == 0


def test_rollover_moves_score_to_total():
    ps = PlayerScores()
    for _ in range(2000):
        ps.gold(0)
    assert ps.score(0) == 0
    assert ps.total(0) == 2000 * 500


def test_bonus_threshold_player_one():
    ps = PlayerScores(bonusscore=1000)
    assert ps.add_score(0, 999) is False
    assert ps.add_score(0, 1) is True
    assert ps.add_score(0, 999) is False
    assert ps.add_score(0, 1) is True


def test_bonus_threshold_player_two_needs_one_more():
    ps = PlayerScores(bonusscore=1000, diggers=2)
    assert ps.add_score(1, 1000) is False
    assert ps.add_score(1, 1) is True


def test_kill_shared():
    ps = PlayerScores(diggers=2)
    ps.kill_shared()
    assert ps.score(0) == 125
    assert ps.score(1) == 125


def test_eat_monster_scales():
    ps = PlayerScores()
    ps.eat_monster(0, 3)
    assert ps.score(0) == 3 * 200
    ps.kill(0)
    assert ps.score(0) == 3 * 200 + 250