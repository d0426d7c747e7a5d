"""
Tests for hex <-> normalized RGBA conversion.
"""
import pytest

from services.lottie.colors import hex_to_normalized_rgba, normalized_rgba_to_hex, lighten
from services.lottie.errors import InvalidColorFormat


class TestHexToNormalizedRgba:

    def test_converts_coral(self):
        r, g, b, a = hex_to_normalized_rgba("#FF6B6B")
        assert r == 1.0
        assert g == pytest.approx(0.4196, abs=1e-4)
        assert b == pytest.approx(0.4196, abs=1e-4)
        assert a == 1.0

    def test_hash_is_optional_and_case_insensitive(self):
        assert hex_to_normalized_rgba("1e90ff") == hex_to_normalized_rgba("#1E90FF")

    def test_black_and_white(self):
        assert hex_to_normalized_rgba("#000000") == [0.0, 0.0, 0.0, 1.0]
        assert hex_to_normalized_rgba("#FFFFFF") == [1.0, 1.0, 1.0, 1.0]

    @pytest.mark.parametrize("value", ["blue", "#FFF", "#FF6B6", "#FF6B6B0", "##FF6B6B", "#GG0000", "", " #FF6B6B"])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidColorFormat):
            hex_to_normalized_rgba(value)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidColorFormat):
            hex_to_normalized_rgba(0xFF6B6B)

    def test_error_names_the_field(self):
        with pytest.raises(InvalidColorFormat) as exc_info:
            hex_to_normalized_rgba("blue", field="primary_color")
        assert exc_info.value.field == "primary_color"
        assert exc_info.value.value == "blue"
        assert "primary_color" in str(exc_info.value)


class TestNormalizedRgbaToHex:

    def test_formats_upper_case(self):
        assert normalized_rgba_to_hex([30 / 255, 144 / 255, 1.0, 1.0]) == "#1E90FF"

    def test_alpha_is_optional(self):
        assert normalized_rgba_to_hex([1.0, 0.0, 0.0]) == "#FF0000"

    def test_clamps_out_of_range(self):
        assert normalized_rgba_to_hex([1.3, -0.2, 0.5]) == "#FF0080"

    def test_rejects_short_input(self):
        with pytest.raises(ValueError):
            normalized_rgba_to_hex([1.0, 0.0])

    def test_every_byte_survives_a_round_trip(self):
        """Each 8-bit channel value comes back exactly, on every channel position."""
        for value in range(256):
            for position in range(3):
                channels = [0, 0, 0]
                channels[position] = value
                hex_color = "#{:02X}{:02X}{:02X}".format(*channels)
                assert normalized_rgba_to_hex(hex_to_normalized_rgba(hex_color)) == hex_color


class TestLighten:

    def test_adds_point_three(self):
        assert lighten([0.1, 0.2, 0.3]) == pytest.approx([0.4, 0.5, 0.6])

    def test_clamps_at_one(self):
        assert lighten([1.0, 0.9, 0.5]) == pytest.approx([1.0, 1.0, 0.8])

    def test_drops_alpha(self):
        assert len(lighten([0.0, 0.0, 0.0, 1.0])) == 3
