import pytest

from branded_docs.core.calculations.color_math import (
    RGB,
    clamp_channel,
    mix_channel,
    mix_color,
    parse_hex_color,
    rgb_to_css,
    rgb_to_hex,
    rgb_to_pdf,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#2563EB", RGB(37, 99, 235)),
        ("2563eb", RGB(37, 99, 235)),
        ("  #fff ", RGB(255, 255, 255)),
        ("#0a3", RGB(0, 170, 51)),
    ],
)
def test_parse_hex_color_accepts_short_and_long_forms(value, expected):
    assert parse_hex_color(value) == expected


@pytest.mark.parametrize("value", [None, "", "#", "#12", "#12345", "#1234567", "#GGGGGG", "blue", "#12 345"])
def test_parse_hex_color_returns_none_for_invalid_input(value):
    assert parse_hex_color(value) is None


@pytest.mark.parametrize("value", ["#abc", "#ABCDEF", "#000", "#7f7f7f", "#D946EF"])
def test_hex_parse_serialize_is_idempotent(value):
    once = rgb_to_hex(parse_hex_color(value))
    assert rgb_to_hex(parse_hex_color(once)) == once
    assert len(once) == 7


def test_mix_channel_rounds_halves_up_and_clamps_weight():
    assert mix_channel(0, 255, 0.5) == 128
    assert mix_channel(10, 20, -3) == 10
    assert mix_channel(10, 20, 7) == 20


def test_mix_color_is_channel_wise():
    assert mix_color(RGB(0, 100, 200), RGB(100, 100, 0), 0.25) == RGB(25, 100, 150)


def test_serializers_clamp_channels():
    assert clamp_channel(300) == 255
    assert clamp_channel(-4) == 0
    assert rgb_to_hex(RGB(300, -1, 16)) == "#ff0010"
    assert rgb_to_css(RGB(37, 99, 235)) == "37 99 235"
    assert rgb_to_pdf(RGB(255, 0, 51)) == "1 0 0.2"
