import random

import pytest

from rss_shorts.synthesizers import (
    BASE_HASHTAGS,
    END_CARD,
    INTRO_LINES,
    OUTRO_LINE,
    clean_title_for_narration,
    make_hashtags,
    make_script,
    make_thumbnail_text,
    make_title,
    shorten,
    suggest_visuals,
)

from conftest import PinnedChoice, make_item


def test_shorten():
    assert shorten("short", 10) == "short"
    assert shorten("exactly10!", 10) == "exactly10!"
    assert shorten("this is too long", 10) == "this is t…"
    assert len(shorten("x" * 100, 48)) == 48


@pytest.mark.parametrize("title, expected", [
    ("SpaceX Launch - TechCrunch", "SpaceX Launch"),
    ("Mars rover finds water | Space.com", "Mars rover finds water"),
    ("Webb telescope spots galaxy - Live Science | Yahoo", "Webb telescope spots galaxy"),
    ("Plain headline", "Plain headline"),
    ("Wi-Fi 7 routers arrive", "Wi-Fi 7 routers arrive"),
])
def test_clean_title_for_narration(title, expected):
    assert clean_title_for_narration(title) == expected


def test_make_title_single_story():
    assert make_title([make_item("NASA picks new Artemis crew")]) == "NASA picks new Artemis crew | TechSpace AI"

    long_title = "A" * 100
    title = make_title([make_item(long_title)])
    assert title == "A" * 69 + "… | TechSpace AI"


def test_make_title_multiple_stories():
    stories = [
        make_item("Apple unveils M5: faster chips"),
        make_item("Rocket Lab: Neutron update"),
        make_item("A very long headline without any colon at all here"),
        make_item("Ignored fourth story"),
    ]
    assert make_title(stories) == (
        "Apple unveils M5 • Rocket Lab • A very long headline without … | TechSpace AI"
    )


def test_make_title_always_branded():
    for stories in ([], [make_item("One")], [make_item("One"), make_item("Two")]):
        assert make_title(stories).endswith(" | TechSpace AI")


def test_make_hashtags_derived_first_then_base():
    tags = make_hashtags([make_item("NASA Artemis mission delays: what we know")])
    assert tags == ["#Nasa", "#Artemis", "#Mission", "#Delays", "#What", "#TechNews", "#Space", "#AI"]


def test_make_hashtags_cap_applies_across_stories():
    stories = [make_item("Quantum chips arrive"), make_item("Robots learn faster today")]
    tags = make_hashtags(stories)
    assert tags[:5] == ["#Quantum", "#Chips", "#Arrive", "#Robots", "#Learn"]
    assert "#Faster" not in tags
    assert len(tags) == 8


def test_make_hashtags_deduplicates():
    tags = make_hashtags([make_item("Space space AI"), make_item("SPACE news")])
    assert tags == ["#Space", "#News", "#TechNews", "#AI", "#Science", "#Shorts"]
    assert len(tags) == len(set(tags))


def test_make_hashtags_without_stories():
    assert make_hashtags([]) == BASE_HASHTAGS


def test_make_script_with_pinned_intro():
    stories = [make_item("SpaceX Launch - TechCrunch", source="TechCrunch")]
    assert make_script(stories, rng=PinnedChoice(1)) == (
        "Quick tech & space update!\n"
        "• SpaceX Launch — via TechCrunch.\n"
        "Follow for daily TechSpace AI updates!"
    )


def test_make_script_omits_empty_source_and_caps_stories():
    stories = [make_item(f"Story {i}", source="") for i in range(5)]
    script = make_script(stories, rng=PinnedChoice(0))
    lines = script.split("\n")
    assert lines[0] == INTRO_LINES[0]
    assert lines[1:4] == ["• Story 0.", "• Story 1.", "• Story 2."]
    assert lines[-1] == OUTRO_LINE
    assert "via" not in script


def test_make_script_is_truncated():
    stories = [make_item("word " * 120, source="Some Publisher") for _ in range(3)]
    script = make_script(stories, rng=random.Random(7))
    assert len(script) == 900
    assert script.endswith("…")


def test_make_script_uses_one_of_the_intros():
    script = make_script([make_item("Headline")])
    assert script.split("\n")[0] in INTRO_LINES


def test_make_script_without_stories():
    assert make_script([], rng=PinnedChoice(2)) == f"{INTRO_LINES[2]}\n{OUTRO_LINE}"


def test_make_thumbnail_text_single_story():
    stories = [make_item("SpaceX Launch - TechCrunch", source="TechCrunch")]
    assert make_thumbnail_text(stories) == "SpaceX Launch"


def test_make_thumbnail_text_joins_two_then_caps():
    stories = [
        make_item("Mars rover finds ancient lakebed - Space.com"),
        make_item("New AI chip doubles speed | The Verge"),
        make_item("Third story never shown"),
    ]
    text = make_thumbnail_text(stories)
    assert len(text) == 48
    assert text.startswith("Mars rover finds ancient lakebed • New AI chip")
    assert text.endswith("…")
    assert "Third" not in text


def test_make_thumbnail_text_is_bounded():
    assert make_thumbnail_text([]) == ""
    assert len(make_thumbnail_text([make_item("x" * 300)])) <= 48
    assert make_thumbnail_text([make_item("Short A"), make_item("Short B")]) == "Short A • Short B"


@pytest.mark.parametrize("count", [0, 1, 2, 3, 5])
def test_suggest_visuals_length(count):
    stories = [make_item(f"Story {i} - Publisher") for i in range(count)]
    visuals = suggest_visuals(stories)
    assert len(visuals) == min(3, count) + 1
    assert visuals[-1] == END_CARD


def test_suggest_visuals_prompt_uses_clean_title():
    visuals = suggest_visuals([make_item("SpaceX Launch - TechCrunch")])
    assert visuals[0] == (
        '9:16 clip: dynamic headline animation for "SpaceX Launch", '
        "cosmic gradient background, subtle HUD lines"
    )
