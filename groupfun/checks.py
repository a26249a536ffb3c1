"""Preconditions of the marriage skills; each raises Rejected with the reply to send."""

from __future__ import annotations

import datetime as dt

from groupfun.marriage import Registry

CD_MESSAGE = "你的技能还在CD中..."


class Rejected(Exception):
    """A skill may not be used; reason is the text to tell the user."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def _require_cd(registry: Registry, gid: int, uid: int, mode: str, cd_hours: float, now: dt.datetime) -> None:
    if not registry.check_cd(gid, uid, mode, cd_hours, now):
        raise Rejected(CD_MESSAGE)


def check_single(registry: Registry, gid: int, uid: int, fiancee: int, today: dt.date, now: dt.datetime) -> None:
    """Whether uid may marry fiancee by choice."""
    registry.open_day(gid, today)
    settings = registry.settings(gid)
    if not settings.can_match:
        raise Rejected("你群包分配,别在娶妻上面下功夫，好好水群")
    _require_cd(registry, gid, uid, "嫁娶", settings.cd_hours, now)
    info = registry.lookup(gid, uid)
    if info is not None:
        if info.is_single_noble:
            raise Rejected("今天的你是单身贵族噢")
        if fiancee in (info.target, info.user):
            raise Rejected("笨蛋！你们已经在一起了！")
        if info.user == uid:
            raise Rejected("笨蛋~你家里还有个吃白饭的w")
        if info.target == uid:
            raise Rejected("该是0就是0,当0有什么不好")
    other = registry.lookup(gid, fiancee)
    if other is not None:
        if other.is_single_noble:
            raise Rejected("今天的ta是单身贵族噢")
        if other.user == fiancee:
            raise Rejected("他有别的女人了，你该放下了")
        if other.target == fiancee:
            raise Rejected("ta被别人娶了,你来晚力")


def check_mistress(registry: Registry, gid: int, uid: int, fiancee: int, today: dt.date, now: dt.datetime) -> None:
    """Whether uid may try to take fiancee from their partner."""
    registry.open_day(gid, today)
    settings = registry.settings(gid)
    if not settings.can_ntr:
        raise Rejected("你群发布了牛头人禁止令，放弃吧")
    _require_cd(registry, gid, uid, "嫁娶", settings.cd_hours, now)
    other = registry.lookup(gid, fiancee)
    if other is None:
        raise Rejected("ta现在还是单身哦,快向ta表白吧!")
    if other.is_single_noble:
        raise Rejected("今天的ta是单身贵族噢")
    if uid in (other.target, other.user):
        raise Rejected("笨蛋！你们已经在一起了！")
    info = registry.lookup(gid, uid)
    if info is not None:
        if info.is_single_noble:
            raise Rejected("今天的你是单身贵族噢")
        if info.user == uid:
            raise Rejected("打灭，不给纳小妾！")
        if info.target == uid:
            raise Rejected("该是0就是0,当0有什么不好")


def check_divorce(registry: Registry, gid: int, uid: int, today: dt.date, now: dt.datetime) -> None:
    """Whether uid may ask for a divorce."""
    registry.open_day(gid, today)
    if registry.lookup(gid, uid) is None:
        raise Rejected("今天你还没结婚哦")
    settings = registry.settings(gid)
    _require_cd(registry, gid, uid, "离婚", settings.cd_hours, now)


def check_matchmaker(
    registry: Registry, gid: int, uid: int, one: int, zero: int, today: dt.date, now: dt.datetime
) -> None:
    """Whether uid may match one (husband) with zero (wife)."""
    if uid in (one, zero):
        raise Rejected("禁止自己给自己做媒!")
    if one == zero:
        raise Rejected("你这个媒人XP很怪咧,不能这样噢")
    registry.open_day(gid, today)
    settings = registry.settings(gid)
    _require_cd(registry, gid, uid, "做媒", settings.cd_hours, now)
    one_info = registry.lookup(gid, one)
    if one_info is not None:
        if one_info.is_single_noble:
            raise Rejected("今天的攻方是单身贵族噢")
        if zero in (one_info.target, one_info.user):
            raise Rejected("笨蛋!ta们已经在一起了!")
        raise Rejected("攻方不是单身,不允许给这种人做媒!")
    if registry.lookup(gid, zero) is not None:
        raise Rejected("受方不是单身,不允许给这种人做媒!")