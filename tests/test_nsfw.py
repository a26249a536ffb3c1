from groupfun.nsfw import HSO_IMAGE, Picture, autojudge, judge


def test_neutral_picture_is_plain():
    assert judge(Picture(neutral=0.5, porn=0.9)) == "普通哦"


def test_low_neutral_counts_as_drawing():
    assert judge(Picture(neutral=0.1)) == "二次元"


def test_border_neutral_without_drawing_is_real():
    assert judge(Picture(neutral=0.3, drawings=0.1)) == "三次元"


def test_judge_lists_all_tags_in_order():
    result = judge(Picture(neutral=0.1, hentai=0.5, porn=0.5, sexy=0.5))
    assert result.split() == ["二次元", "hentai", "porn", "hso"]


def test_autojudge_silent_on_neutral():
    assert autojudge(Picture(neutral=0.5, porn=0.9)) is None


def test_autojudge_silent_without_tags():
    assert autojudge(Picture(neutral=0.1, drawings=0.1)) is None


def test_autojudge_uses_drawings_only():
    result = autojudge(Picture(neutral=0.1, drawings=0.1, porn=0.5))
    assert result.split() == ["三次元", "porn"]


def test_autojudge_drawing_with_sexy():
    result = autojudge(Picture(neutral=0.0, drawings=0.9, sexy=0.8))
    assert result.split() == ["二次元", "hso"]


def test_hso_image_is_url():
    assert HSO_IMAGE.startswith("https://")