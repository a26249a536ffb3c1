import datetime as dt

import pytest

from groupfun.marriage import GroupSettings, Marriage, Registry, slice_name


@pytest.fixture
def registry(tmp_path):
    reg = Registry(tmp_path / "marriage.db")
    yield reg
    reg.close()


NOW = dt.datetime(2023, 1, 2, 10, 0, 0)


def test_default_settings(registry):
    s = registry.settings(42)
    assert s == GroupSettings(gid=42, updatetime="", can_match=True, can_ntr=True, cd_hours=12.0)


def test_settings_round_trip(registry):
    registry.update_settings(GroupSettings(gid=7, can_match=False, can_ntr=False, cd_hours=3.0))
    s = registry.settings(7)
    assert (s.can_match, s.can_ntr, s.cd_hours) == (False, False, 3.0)
    assert registry.settings(8).can_match is True


def test_open_day_resets_on_new_day(registry):
    day = dt.date(2023, 1, 2)
    assert registry.open_day(1, day) is True
    assert registry.settings(1).updatetime == "2023/01/02"
    registry.register(1, 10, 20, "a", "b", NOW)
    assert registry.open_day(1, day) is False
    assert registry.lookup(1, 10) is not None
    assert registry.open_day(1, day + dt.timedelta(days=1)) is True
    assert registry.lookup(1, 10) is None


def test_open_day_keeps_settings(registry):
    registry.update_settings(GroupSettings(gid=3, can_ntr=False, cd_hours=5.0))
    registry.open_day(3, dt.date(2023, 1, 2))
    s = registry.settings(3)
    assert s.can_ntr is False and s.cd_hours == 5.0


def test_lookup_by_user_and_target(registry):
    registry.register(1, 10, 20, "husband", "wife", NOW)
    expected = Marriage(10, 20, "husband", "wife", "10:00:00")
    assert registry.lookup(1, 10) == expected
    assert registry.lookup(1, 20) == expected
    assert registry.lookup(1, 30) is None
    assert registry.lookup(2, 10) is None


def test_register_replaces_same_husband(registry):
    registry.register(1, 10, 20, "a", "b", NOW)
    registry.register(1, 10, 30, "a", "c", NOW)
    assert registry.lookup(1, 10).target == 30
    assert registry.lookup(1, 20) is None


def test_single_noble(registry):
    record = registry.register(1, 10, 0, "", "", NOW)
    assert record.is_single_noble
    assert registry.lookup(1, 10).is_single_noble
    assert not Marriage(1, 2, "x", "y", "").is_single_noble


def test_roster_skips_single_nobles(registry):
    registry.register(1, 10, 20, "a", "b", NOW)
    registry.register(1, 11, 0, "", "", NOW)
    registry.register(1, 12, 22, "c", "d", NOW)
    assert registry.roster(1) == [("a", "10", "b", "20"), ("c", "12", "d", "22")]
    assert registry.roster(2) == []


def test_clear_group(registry):
    registry.register(1, 10, 20, "a", "b", NOW)
    registry.register(2, 10, 20, "a", "b", NOW)
    registry.record_cd(1, 10, "嫁娶", NOW)
    registry.record_cd(2, 10, "嫁娶", NOW)
    registry.clear(1)
    assert registry.roster(1) == []
    assert len(registry.roster(2)) == 1
    assert registry.check_cd(1, 10, "嫁娶", 12, NOW) is True
    assert registry.check_cd(2, 10, "嫁娶", 12, NOW) is False


def test_clear_all(registry):
    registry.register(1, 10, 20, "a", "b", NOW)
    registry.update_settings(GroupSettings(gid=1, can_match=False))
    registry.record_cd(1, 10, "NTR", NOW)
    registry.clear()
    assert registry.roster(1) == []
    assert registry.settings(1).can_match is True
    assert registry.check_cd(1, 10, "NTR", 12, NOW) is True


def test_cooldown_cycle(registry):
    assert registry.check_cd(1, 10, "离婚", 12, NOW) is True
    registry.record_cd(1, 10, "离婚", NOW)
    assert registry.check_cd(1, 10, "离婚", 12, NOW + dt.timedelta(hours=1)) is False
    assert registry.check_cd(1, 10, "做媒", 12, NOW) is True
    later = NOW + dt.timedelta(hours=13)
    assert registry.check_cd(1, 10, "离婚", 12, later) is True
    # the expired record was removed, so even a long cooldown now passes
    assert registry.check_cd(1, 10, "离婚", 1000, NOW) is True


def test_divorce(registry):
    registry.register(1, 10, 20, "a", "b", NOW)
    registry.register(1, 11, 21, "c", "d", NOW)
    assert registry.divorce_wife(1, 20) == 1
    assert registry.lookup(1, 10) is None
    assert registry.divorce_husband(1, 11) == 1
    assert registry.lookup(1, 21) is None
    assert registry.divorce_husband(1, 99) == 0


def test_slice_name_short_name_unchanged():
    assert slice_name("abc", lambda ch: 50) == "abc"


def test_slice_name_long_name_truncated():
    name = "abcdefghij"
    result = slice_name(name, lambda ch: 100)
    assert result.endswith("......")
    assert name.startswith(result[: -len("......")])
    assert len(result) - len("......") < len(name)
    assert result == "a......"


def test_context_manager(tmp_path):
    with Registry(tmp_path / "x.db") as reg:
        reg.register(5, 1, 2, "p", "q", "08:00:00")
        assert reg.lookup(5, 2).updatetime == "08:00:00"