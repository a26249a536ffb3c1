import datetime as dt

import pytest

from groupfun.qzone import LOVE_TAG, Emotion, QzoneDB, Status


@pytest.fixture
def db(tmp_path):
    with QzoneDB(tmp_path / "qzone.db") as database:
        yield database


def _at(minute):
    return dt.datetime(2022, 1, 2, 3, minute, 0)


def test_cookie_round_trip(db):
    db.insert_or_update(10001, "token")
    assert db.get_by_uin(10001) == "token"
    db.insert_or_update(10001, "placeholder")
    assert db.get_by_uin(10001) == "placeholder"


def test_missing_account_raises(db):
    with pytest.raises(LookupError):
        db.get_by_uin(42)


def test_save_and_get(db):
    first = db.save_emotion(Emotion(qq=1, msg="hello", created_at=_at(1)))
    second = db.save_emotion(Emotion(qq=2, msg="world", anonymous=True, created_at=_at(2)))
    assert second > first
    got = db.get_emotions([second, first])
    assert [e.msg for e in got] == ["hello", "world"]
    assert got[1].anonymous is True
    assert got[0].status == Status.WAIT
    assert got[0].created_at == _at(1)
    assert got[0].tag == LOVE_TAG


def test_get_emotions_empty(db):
    assert db.get_emotions([]) == []


def test_paging_newest_first(db):
    ids = [db.save_emotion(Emotion(qq=i, msg=str(i), created_at=_at(i))) for i in range(7)]
    first = db.love_emotions(Status.WAIT, 0)
    second = db.love_emotions(Status.WAIT, 1)
    assert len(first) == 5
    assert len(second) == 2
    got = [e.id for e in first + second]
    assert got == list(reversed(ids))


def test_status_filter_and_update(db):
    a = db.save_emotion(Emotion(qq=1, msg="a", created_at=_at(1)))
    b = db.save_emotion(Emotion(qq=2, msg="b", created_at=_at(2)))
    db.update_status([a], Status.AGREE)
    assert [e.id for e in db.love_emotions(Status.AGREE, 0)] == [a]
    assert [e.id for e in db.love_emotions(Status.WAIT, 0)] == [b]
    assert {e.id for e in db.love_emotions(0, 0)} == {a, b}


def test_other_tags_not_on_wall(db):
    db.save_emotion(Emotion(qq=1, msg="x", tag="other", created_at=_at(1)))
    assert db.love_emotions(0, 0) == []


def test_text_brief():
    emotion = Emotion(qq=123, msg="hi", id=7, created_at=dt.datetime(2022, 1, 2, 3, 4, 5))
    assert emotion.text_brief() == (
        "序号: 7\nQQ: 123\n创建时间: 2022-01-02 03:04:05\n状态: 审核中\n匿名: 否"
    )


def test_text_brief_anonymous_refused():
    emotion = Emotion(qq=1, msg="m", status=Status.DISAGREE, anonymous=True, created_at=_at(0))
    brief = emotion.text_brief()
    assert "状态: 拒绝\n" in brief
    assert brief.endswith("匿名: 是")