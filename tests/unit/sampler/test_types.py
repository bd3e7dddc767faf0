"""Unit tests for color value types and hex conversion."""

import pytest

from colorsampler.sampler.types import ColorSample, CropRect, RawPhoto, hex_to_rgb, rgb_to_hex


class TestRgbToHex:

    def test_known_value(self):
        assert rgb_to_hex(52, 199, 89) == "#34C759"

    def test_zero_padding(self):
        assert rgb_to_hex(0, 1, 15) == "#00010F"

    def test_uppercase_digits(self):
        assert rgb_to_hex(171, 205, 239) == "#ABCDEF"

    def test_extremes(self):
        assert rgb_to_hex(0, 0, 0) == "#000000"
        assert rgb_to_hex(255, 255, 255) == "#FFFFFF"

    @pytest.mark.parametrize("rgb", [(0, 128, 255), (7, 77, 177), (254, 1, 16)])
    def test_parse_recovers_channels(self, rgb):
        assert hex_to_rgb(rgb_to_hex(*rgb)) == rgb

    def test_parse_recovers_every_channel_value(self):
        for value in range(256):
            for rgb in ((value, 0, 0), (0, value, 0), (0, 0, value), (value, 255 - value, value)):
                assert hex_to_rgb(rgb_to_hex(*rgb)) == rgb

    @pytest.mark.parametrize("bad", [(-1, 0, 0), (0, 256, 0), (0, 0, 1000)])
    def test_out_of_range_rejected(self, bad):
        with pytest.raises(ValueError):
            rgb_to_hex(*bad)

    def test_non_int_rejected(self):
        with pytest.raises(TypeError):
            rgb_to_hex(1.5, 0, 0)


class TestHexToRgb:

    def test_without_hash(self):
        assert hex_to_rgb("34c759") == (52, 199, 89)

    @pytest.mark.parametrize("bad", ["#123", "#GGGGGG", "", "#1234567", "#+1+1+1", "#-1-1-1", "# 1 1 1", "0x1234"])
    def test_malformed(self, bad):
        with pytest.raises(ValueError):
            hex_to_rgb(bad)


class TestColorSample:

    def test_from_rgb_derives_hex(self):
        sample = ColorSample.from_rgb(52, 199, 89)
        assert sample.hex == "#34C759"
        assert sample.rgb == (52, 199, 89)

    def test_mismatched_hex_rejected(self):
        with pytest.raises(ValueError):
            ColorSample(r=1, g=2, b=3, hex="#FFFFFF")

    def test_lowercase_hex_rejected(self):
        with pytest.raises(ValueError):
            ColorSample(r=171, g=205, b=239, hex="#abcdef")

    def test_from_hex(self):
        assert ColorSample.from_hex("#8000e0") == ColorSample.from_rgb(128, 0, 224)

    def test_from_hex_rejects_signed_digits(self):
        with pytest.raises(ValueError):
            ColorSample.from_hex("#+1+1+1")

    def test_is_frozen(self):
        sample = ColorSample.from_rgb(1, 2, 3)
        with pytest.raises(AttributeError):
            sample.r = 9

    def test_equal_values_compare_equal(self):
        assert ColorSample.from_rgb(9, 8, 7) == ColorSample.from_rgb(9, 8, 7)


class TestGeometry:

    def test_crop_box(self):
        assert CropRect(x=5, y=10, width=50, height=50).box == (5, 10, 55, 60)

    def test_raw_photo_size(self, tmp_path):
        photo = RawPhoto(path=tmp_path / "p.jpg", width=4032, height=3024)
        assert photo.size == (4032, 3024)
