import pytest

from framekit.domain.entities.geometry import GeometrySpec
from framekit.domain.enums.resize_mode import ResizeMode
from framekit.domain.errors import ConfigurationError


@pytest.mark.parametrize(
    "text,mode",
    [
        ("320x240", ResizeMode.keep_aspect),
        ("320x240!", ResizeMode.exact),
        ("320x240#", ResizeMode.pad),
        ("320x240<", ResizeMode.enlarge_only),
        ("320x240>", ResizeMode.shrink_only),
    ],
)
def test_trailing_modifier_selects_mode(text, mode):
    spec = GeometrySpec.parse(text)
    assert spec.mode is mode
    assert spec.target_width == 320
    assert spec.target_height == 240
    assert str(spec) == text


def test_empty_height_is_none():
    spec = GeometrySpec.parse("200x")
    assert spec.target_width == 200
    assert spec.target_height is None
    assert spec.width_driven is True


def test_height_only_is_height_driven():
    spec = GeometrySpec.parse("x480>")
    assert spec.target_width is None
    assert spec.target_height == 480
    assert spec.width_driven is False
    assert spec.mode is ResizeMode.shrink_only


def test_pad_color_defaults_to_black_and_can_be_set():
    assert GeometrySpec.parse("100x100#").pad_color == "black"
    assert GeometrySpec.parse("100x100#", pad_color=" white ").pad_color == "white"


@pytest.mark.parametrize(
    "text",
    ["", "   ", "abc", "320", "320x240x10", "x", "x!", "0x240", "320x0", "320x240!!", "-320x240", "320*240"],
)
def test_malformed_geometry_rejected(text):
    with pytest.raises(ConfigurationError):
        GeometrySpec.parse(text)


def test_exact_needs_both_halves():
    with pytest.raises(ConfigurationError):
        GeometrySpec.parse("320x!")
    with pytest.raises(ConfigurationError):
        GeometrySpec.parse("x240!")


def test_pad_needs_width():
    with pytest.raises(ConfigurationError):
        GeometrySpec.parse("x240#")


def test_blank_pad_color_rejected():
    with pytest.raises(ConfigurationError):
        GeometrySpec.parse("100x100#", pad_color="  ")
