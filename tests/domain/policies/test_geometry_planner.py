import pytest

from framekit.domain.entities.geometry import GeometrySpec
from framekit.domain.entities.media_metadata import MediaMetadata
from framekit.domain.entities.resolved import ResolvedParameters, Skip
from framekit.domain.enums.policies import PadOffsetRounding
from framekit.domain.policies.geometry_planner import GeometryPlanner, even, round_half_up

VGA = MediaMetadata(dimensions=(640, 480), aspect_ratio=640 / 480, frame_rate=25.0)
HD = MediaMetadata(dimensions=(1920, 1080), aspect_ratio=16 / 9, frame_rate=30.0)


@pytest.fixture()
def planner():
    return GeometryPlanner()


def test_even_truncates_down():
    assert even(151) == 150
    assert even(150) == 150
    assert even(1) == 0
    assert round_half_up(74.5) == 75
    assert round_half_up(74.4999) == 74


def test_keep_aspect_width_only(planner):
    out = planner.resolve(GeometrySpec.parse("200x"), VGA)
    assert isinstance(out, ResolvedParameters)
    assert (out.width, out.height) == (200, 150)
    assert out.output_flags() == {"s": "200x150"}
    assert out.input_flags() == {}


@pytest.mark.parametrize("w", [100, 200, 333, 640, 1000, 1281])
def test_keep_aspect_height_follows_source_aspect(planner, w):
    out = planner.resolve(GeometrySpec.parse(f"{w}x9999"), HD)
    assert out.width == even(w)
    assert out.height == even(round_half_up(w / (16 / 9)))


def test_keep_aspect_rounds_to_even(planner):
    # 251 / (4/3) = 188.25 -> 188; odd width 251 -> 250
    out = planner.resolve(GeometrySpec.parse("251x"), VGA)
    assert out.width == 250
    assert out.height == even(round_half_up(251 * 3 / 4))


def test_exact_ignores_aspect(planner):
    out = planner.resolve(GeometrySpec.parse("301x99!"), HD)
    assert (out.width, out.height) == (300, 98)


def test_enlarge_only(planner):
    spec = GeometrySpec.parse("1280x<")
    grown = planner.resolve(spec, VGA)
    assert grown == planner.resolve(GeometrySpec.parse("1280x"), VGA)
    assert isinstance(planner.resolve(spec, HD), Skip)
    # equal width is not an enlargement
    assert isinstance(planner.resolve(GeometrySpec.parse("640x<"), VGA), Skip)


def test_shrink_only(planner):
    spec = GeometrySpec.parse("320x>")
    shrunk = planner.resolve(spec, VGA)
    assert shrunk == planner.resolve(GeometrySpec.parse("320x"), VGA)
    assert isinstance(planner.resolve(GeometrySpec.parse("1280x>"), VGA), Skip)
    assert isinstance(planner.resolve(GeometrySpec.parse("640x>"), VGA), Skip)


def test_skip_carries_reason(planner):
    out = planner.resolve(GeometrySpec.parse("2000x>"), HD)
    assert isinstance(out, Skip)
    assert "shrink" in out.reason


def test_pad_adds_vertical_bars(planner):
    out = planner.resolve(GeometrySpec.parse("100x100#"), VGA)
    assert out.video_filter == "scale=100:75,pad=100:100:0:12:black"
    assert (out.width, out.height) == (100, 100)
    # a filter replaces the plain size flag
    assert out.output_flags() == {"vf": "scale=100:75,pad=100:100:0:12:black"}


def test_pad_fractional_offset_policy():
    planner = GeometryPlanner(pad_offset_rounding=PadOffsetRounding.fractional)
    out = planner.resolve(GeometrySpec.parse("100x100#", pad_color="white"), VGA)
    assert out.video_filter == "scale=100:75,pad=100:100:0:12.5:white"


def test_pad_crops_when_frame_already_tall_enough(planner):
    # 320 wide at 4:3 -> 240 high, target 200 -> crop, never pad
    out = planner.resolve(GeometrySpec.parse("320x200#"), VGA)
    assert out.video_filter == "scale=320:240,crop=320:240"
    assert "pad=" not in out.video_filter
    assert (out.width, out.height) == (320, 240)


def test_pad_exact_fit_crops(planner):
    out = planner.resolve(GeometrySpec.parse("320x240#"), VGA)
    assert out.video_filter.startswith("scale=320:240,crop=")


def test_pad_anamorphic_source_scales_to_display_aspect(planner):
    # PAL DV: 720x576 stored pixels, SAR 64:45, DAR 16:9
    pal = MediaMetadata(dimensions=(720, 576), aspect_ratio=16 / 9, frame_rate=25.0)
    out = planner.resolve(GeometrySpec.parse("640x480#"), pal)
    assert out.video_filter == "scale=640:360,pad=640:480:0:60:black"

    scale, pad = out.video_filter.split(",")
    scaled_h = int(scale.split(":")[1])
    padded_h = int(pad.split("=")[1].split(":")[1])
    assert scaled_h <= padded_h


def test_crop_anamorphic_source_keeps_display_height(planner):
    pal = MediaMetadata(dimensions=(720, 576), aspect_ratio=16 / 9, frame_rate=25.0)
    out = planner.resolve(GeometrySpec.parse("640x300#"), pal)
    assert out.video_filter == "scale=640:360,crop=640:360"
    assert (out.width, out.height) == (640, 360)


def test_height_only_keep_aspect(planner):
    out = planner.resolve(GeometrySpec.parse("x360"), HD)
    assert (out.width, out.height) == (640, 360)


def test_height_only_shrink_compares_heights(planner):
    assert isinstance(planner.resolve(GeometrySpec.parse("x720>"), VGA), Skip)
    out = planner.resolve(GeometrySpec.parse("x240>"), VGA)
    assert (out.width, out.height) == (320, 240)


def test_missing_geometry_only_format_flags(planner):
    out = planner.resolve(GeometrySpec.parse("320x240"), MediaMetadata(), "jpg", time_offset=5)
    assert out.width is None and out.height is None
    assert out.video_filter is None
    assert out.input_flags() == {"ss": "5"}
    assert out.output_flags() == {"vframes": "1", "f": "image2"}


def test_constraint_modes_do_not_skip_without_geometry(planner):
    out = planner.resolve(GeometrySpec.parse("320x>"), MediaMetadata())
    assert out == ResolvedParameters()


@pytest.mark.parametrize("fmt", ["jpg", "JPEG", ".png", "gif", "webp", "bmp"])
def test_still_image_flags(planner, fmt):
    out = planner.resolve(GeometrySpec.parse("320x"), VGA, fmt, time_offset=3)
    assert out.seek_seconds == 3.0
    assert out.frame_count == 1
    assert out.container == "image2"
    assert out.output_flags() == {"s": "320x240", "vframes": "1", "f": "image2"}


@pytest.mark.parametrize("fmt", [None, "", "mp4", "webm"])
def test_video_formats_get_no_image_flags(planner, fmt):
    out = planner.resolve(None, VGA, fmt)
    assert out == ResolvedParameters()
    assert planner.is_still_image(fmt) is False


def test_fractional_time_offset_is_kept(planner):
    out = planner.resolve(None, VGA, "png", time_offset=1.5)
    assert out.input_flags() == {"ss": "1.5"}
