"""Unit tests for gamut.py — OKLCH chroma reduction into RGB gamuts."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import pytest

from ramp_studio.services.gamut import (
    clamp_to_gamut,
    gamut_space,
    in_gamut,
    max_chroma_in_gamut,
)


# ─────────────────────────────────────────────────────────────────────────────
# Tests: max chroma boundary
# ─────────────────────────────────────────────────────────────────────────────

class TestMaxChroma:
    def test_zero_at_black(self):
        assert max_chroma_in_gamut(0, 264) == 0

    def test_zero_at_white(self):
        assert max_chroma_in_gamut(1, 264) == 0

    def test_positive_at_mid_lightness(self):
        assert max_chroma_in_gamut(0.5, 264) > 0

    def test_yellow_wider_than_blue_when_light(self):
        yellow = max_chroma_in_gamut(0.85, 100, "srgb")
        blue = max_chroma_in_gamut(0.85, 264, "srgb")
        assert yellow > blue

    def test_p3_at_least_srgb(self):
        assert max_chroma_in_gamut(0.6, 150, "p3") >= max_chroma_in_gamut(0.6, 150, "srgb")

    def test_rec2020_at_least_p3(self):
        assert max_chroma_in_gamut(0.6, 150, "rec2020") >= max_chroma_in_gamut(0.6, 150, "p3")

    def test_defaults_to_srgb(self):
        assert max_chroma_in_gamut(0.5, 264) == pytest.approx(
            max_chroma_in_gamut(0.5, 264, "srgb"), abs=1e-6)

    def test_boundary_is_in_gamut(self):
        c = max_chroma_in_gamut(0.7, 30, "srgb")
        assert in_gamut(0.7, c, 30, "srgb")
        assert not in_gamut(0.7, c + 0.01, 30, "srgb")


# ─────────────────────────────────────────────────────────────────────────────
# Tests: clamp
# ─────────────────────────────────────────────────────────────────────────────

class TestClampToGamut:
    def test_in_gamut_unchanged(self):
        assert clamp_to_gamut(0.5, 0.01, 120, "srgb") == (0.5, 0.01, 120)

    def test_out_of_gamut_reduces_chroma_only(self):
        l, c, h = clamp_to_gamut(0.6, 0.4, 30, "srgb")
        assert l == 0.6
        assert h == 30
        assert 0 < c < 0.4
        assert in_gamut(l, c, h, "srgb")

    def test_wider_gamut_keeps_more_chroma(self):
        _, c_srgb, _ = clamp_to_gamut(0.6, 0.4, 150, "srgb")
        _, c_p3, _ = clamp_to_gamut(0.6, 0.4, 150, "p3")
        assert c_p3 >= c_srgb

    def test_lightness_outside_range_degrades_to_zero_chroma(self):
        assert clamp_to_gamut(1.2, 0.1, 40, "srgb") == (1.2, 0.0, 40)

    def test_negative_chroma_treated_as_zero(self):
        assert clamp_to_gamut(0.5, -0.2, 40, "srgb")[1] == 0.0

    def test_nan_hue_becomes_zero(self):
        _, _, h = clamp_to_gamut(0.5, 0.0, float("nan"), "srgb")
        assert h == 0.0


class TestGamutSpace:
    def test_known_names(self):
        assert gamut_space("srgb") == "srgb"
        assert gamut_space("p3") == "display-p3"
        assert gamut_space("rec2020") == "rec2020"

    def test_unknown_falls_back_to_srgb(self):
        assert gamut_space("cmyk") == "srgb"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
