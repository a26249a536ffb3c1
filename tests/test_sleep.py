import datetime as dt

import pytest

from groupfun.sleep import (
    SleepDB,
    good_morning_text,
    good_night_text,
    is_evening,
    is_morning,
    time_duration,
)


@pytest.fixture
def db(tmp_path):
    database = SleepDB(tmp_path / "manage.db")
    yield database
    database.close()


def test_first_sleep_has_no_duration(db):
    position, delta = db.sleep(1, 10, dt.datetime(2023, 1, 1, 22, 0))
    assert delta == dt.timedelta(0)
    assert position == 1


def test_positions_grow_within_one_night(db):
    night = dt.datetime(2023, 1, 1, 22, 0)
    first, _ = db.sleep(1, 10, night)
    second, _ = db.sleep(1, 11, night + dt.timedelta(minutes=30))
    assert second == first + 1


def test_other_groups_are_not_counted(db):
    night = dt.datetime(2023, 1, 1, 22, 0)
    a, _ = db.sleep(1, 10, night)
    b, _ = db.sleep(2, 11, night + dt.timedelta(minutes=1))
    assert a == b


def test_repeat_sleep_reports_awake_time(db):
    night = dt.datetime(2023, 1, 1, 22, 0)
    first, _ = db.sleep(1, 10, night)
    position, delta = db.sleep(1, 10, night + dt.timedelta(hours=1))
    assert delta == dt.timedelta(hours=1)
    assert position == first


def test_previous_night_is_not_counted(db):
    first, _ = db.sleep(1, 10, dt.datetime(2023, 1, 1, 22, 0))
    position, _ = db.sleep(1, 11, dt.datetime(2023, 1, 2, 22, 0))
    assert position == first


def test_after_midnight_counts_previous_evening(db):
    a, _ = db.sleep(1, 10, dt.datetime(2023, 1, 1, 23, 0))
    b, _ = db.sleep(1, 11, dt.datetime(2023, 1, 2, 1, 0))
    assert b == a + 1


def test_get_up_reports_time_slept(db):
    db.sleep(1, 10, dt.datetime(2023, 1, 1, 23, 0))
    _, delta = db.get_up(1, 10, dt.datetime(2023, 1, 2, 7, 30))
    assert delta == dt.timedelta(hours=8, minutes=30)


def test_get_up_ignores_times_before_six(db):
    first, _ = db.get_up(1, 10, dt.datetime(2023, 1, 2, 7, 0))
    db.sleep(1, 11, dt.datetime(2023, 1, 2, 3, 0))
    position, _ = db.get_up(1, 12, dt.datetime(2023, 1, 2, 8, 0))
    assert position == first + 1


def test_records_persist(tmp_path):
    path = tmp_path / "manage.db"
    night = dt.datetime(2023, 1, 1, 22, 0)
    with SleepDB(path) as database:
        database.sleep(1, 10, night)
    with SleepDB(path) as database:
        _, delta = database.sleep(1, 10, night + dt.timedelta(minutes=45))
    assert delta == dt.timedelta(minutes=45)


def test_time_duration_splits_units():
    assert time_duration(dt.timedelta(hours=2, minutes=3, seconds=4)) == (2, 3, 4)


def test_time_duration_drops_fractions():
    assert time_duration(dt.timedelta(minutes=5, microseconds=999_999)) == (0, 5, 0)


def test_time_duration_of_long_span():
    assert time_duration(dt.timedelta(days=1, hours=1)) == (25, 0, 0)


@pytest.mark.parametrize("hour,expected", [(5, False), (6, True), (12, True), (13, False)])
def test_is_morning(hour, expected):
    assert is_morning(hour) is expected


@pytest.mark.parametrize("hour,expected", [(3, True), (4, False), (20, False), (21, True), (0, True)])
def test_is_evening(hour, expected):
    assert is_evening(hour) is expected


def test_good_morning_without_duration():
    assert good_morning_text(3, dt.timedelta(0)) == "早安成功！你是今天第3个起床的"


def test_good_morning_too_long_is_short_form():
    assert good_morning_text(4, dt.timedelta(hours=24)) == "早安成功！你是今天第4个起床的"


def test_good_night_with_duration():
    text = good_night_text(2, dt.timedelta(hours=1, minutes=2, seconds=3))
    assert text == "晚安成功！你的清醒时长为1时2分3秒,你是今天第2个睡觉的"


def test_good_morning_with_duration():
    text = good_morning_text(5, dt.timedelta(hours=7, seconds=9))
    assert text == "早安成功！你的睡眠时长为7时0分9秒,你是今天第5个起床的"