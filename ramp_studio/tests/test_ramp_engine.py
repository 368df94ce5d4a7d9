"""Unit tests for ramp_engine.py — neutral and hue ramp generation."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import re

import pytest

from ramp_studio.services.color_format import BLACK, WHITE, Swatch, parse_color
from ramp_studio.services.gamut import max_chroma_in_gamut
from ramp_studio.services.params import ColorParams, coerce_params, preset
from ramp_studio.services.ramp_engine import (
    generate,
    generate_neutrals,
    generate_palette,
    lightness_profile,
    palette_hue_offsets,
    relative_saturation,
    step_labels,
    swatch_contrast,
    warmth_tint,
)

HEX = re.compile(r"^#[0-9a-f]{6}$")


@pytest.fixture
def light():
    return coerce_params(preset("light"))


@pytest.fixture
def dark():
    return coerce_params(preset("dark"))


# ─────────────────────────────────────────────────────────────────────────────
# Tests: lightness profile
# ─────────────────────────────────────────────────────────────────────────────

class TestLightnessProfile:
    def test_light_endpoints(self, light):
        profile = lightness_profile(light)
        assert profile[0] == 1.0
        assert profile[-1] == 0.0

    def test_dark_endpoints(self, dark):
        profile = lightness_profile(dark)
        assert profile[0] == 0.0
        assert profile[-1] == 1.0

    def test_light_decreasing(self, light):
        profile = lightness_profile(light)
        assert all(a >= b for a, b in zip(profile, profile[1:]))

    def test_nudger_only_moves_its_step(self, light):
        base = lightness_profile(light)
        nudged = lightness_profile(light.with_lightness_nudger(5, 0.1))
        assert nudged[5] == pytest.approx(min(1.0, base[5] + 0.1))
        assert [v for i, v in enumerate(nudged) if i != 5] == \
            [v for i, v in enumerate(base) if i != 5]

    def test_nudged_endpoints_stay_pinned(self, light):
        params = coerce_params({"lightnessNudgers": [-0.5] * 11})
        profile = lightness_profile(params)
        assert (profile[0], profile[-1]) == (1.0, 0.0)
        assert all(0.0 <= v <= 1.0 for v in profile)


class TestStepLabels:
    def test_eleven(self):
        assert step_labels(11) == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

    def test_three(self):
        assert step_labels(3) == [0, 50, 100]

    def test_one(self):
        assert step_labels(1) == [0]


# ─────────────────────────────────────────────────────────────────────────────
# Tests: neutrals
# ─────────────────────────────────────────────────────────────────────────────

class TestNeutrals:
    def test_fixture_endpoints(self, light):
        neutrals = generate_neutrals(light)
        assert neutrals[0].hex == "#ffffff"
        assert neutrals[-1].hex == "#000000"

    def test_dark_reversed(self, dark):
        neutrals = generate_neutrals(dark)
        assert neutrals[0].hex == "#000000"
        assert neutrals[-1].hex == "#ffffff"

    def test_warmth_zero_is_achromatic(self):
        neutrals = generate_neutrals(coerce_params({"warmth": 0}))
        assert all(s.c == 0.0 for s in neutrals)

    def test_warm_and_cool_hues(self):
        warm = generate_neutrals(coerce_params({"warmth": 10}))
        cool = generate_neutrals(coerce_params({"warmth": -10}))
        assert warm[5].h == pytest.approx(60.0)
        assert cool[5].h == pytest.approx(250.0)
        assert warm[5].hex != cool[5].hex

    def test_warmth_tint_fades_at_extremes(self):
        assert warmth_tint(1.0, 10)[0] == 0.0
        assert warmth_tint(0.0, -10)[0] == 0.0
        assert warmth_tint(0.5, 10) == pytest.approx((0.008, 60.0))


# ─────────────────────────────────────────────────────────────────────────────
# Tests: hue ramps
# ─────────────────────────────────────────────────────────────────────────────

class TestPalettes:
    def test_hue_offsets(self):
        assert palette_hue_offsets(4) == [0.0, 90.0, 180.0, 270.0]
        assert palette_hue_offsets(0) == []

    def test_first_palette_keeps_base_hue(self, light):
        ramp = generate_palette(light, 0.0, palette_index=0)
        assert ramp[5].h == pytest.approx(parse_color(light.base_color).h)

    def test_palette_endpoints(self, light):
        for ramp in generate(light).palettes:
            assert ramp[0] == WHITE
            assert ramp[-1] == BLACK

    def test_gray_base_gives_gray_palettes(self):
        state = generate(coerce_params({"baseColor": "#808080"}))
        assert all(s.c == 0.0 for ramp in state.palettes for s in ramp)

    def test_relative_saturation_of_gray(self):
        assert relative_saturation(parse_color("#808080"), "srgb") == 0.0

    def test_chroma_multiplier_zero(self):
        state = generate(coerce_params({"chromaMultiplier": 0}))
        assert all(s.c == 0.0 for ramp in state.palettes for s in ramp)

    def test_gamut_fraction_consistent_across_hues(self, light):
        state = generate(light)
        fractions = []
        for ramp in state.palettes:
            s = ramp[5]
            limit = max_chroma_in_gamut(s.l, s.h, "srgb")
            fractions.append(s.c / limit)
        assert max(fractions) - min(fractions) < 0.05

    def test_hue_nudger_isolated(self, light):
        before = generate(light)
        after = generate(light.with_hue_nudger(3, 20))
        assert after.palettes[3] != before.palettes[3]
        assert after.neutrals == before.neutrals
        for p in range(len(before.palettes)):
            if p != 3:
                assert after.palettes[p] == before.palettes[p]


# ─────────────────────────────────────────────────────────────────────────────
# Tests: full pipeline
# ─────────────────────────────────────────────────────────────────────────────

class TestGenerate:
    def test_default_shape(self, light):
        state = generate(light)
        assert len(state.neutrals) == 11
        assert len(state.palettes) == 11
        assert all(len(ramp) == 11 for ramp in state.palettes)
        assert all(HEX.match(h) for h in state.neutrals_hex())
        assert all(HEX.match(h) for ramp in state.palettes_hex() for h in ramp)

    def test_deterministic(self, light):
        assert generate(light) == generate(light)

    def test_no_accumulation(self, light):
        first = generate(light)
        generate(coerce_params({"warmth": 15, "numColors": 5, "theme": "dark"}))
        assert generate(light) == first

    def test_reset_after_nudge(self, light):
        first = generate(light)
        generate(light.with_lightness_nudger(5, 0.3))
        assert generate(light.with_lightness_nudger(5, 0.0)).neutrals == first.neutrals

    def test_lightness_nudger_isolated(self, light):
        before = generate(light)
        after = generate(light.with_lightness_nudger(5, 0.1))
        for i in range(11):
            if i == 5:
                assert after.neutrals[i] != before.neutrals[i]
                continue
            assert after.neutrals[i] == before.neutrals[i]
            for p in range(11):
                assert after.palettes[p][i] == before.palettes[p][i]

    def test_extreme_inputs_keep_endpoints(self):
        params = coerce_params({
            "numColors": 100, "numPalettes": 3, "lightnessNudgers": [0.5] * 100,
            "chromaMultiplier": 99, "gamutSpace": "p3", "warmth": 20,
        })
        state = generate(params)
        assert state.neutrals[0] == WHITE and state.neutrals[-1] == BLACK
        for ramp in state.palettes:
            assert ramp[0] == WHITE and ramp[-1] == BLACK

    def test_no_palettes(self):
        state = generate(coerce_params({"numPalettes": 0}))
        assert state.palettes == ()
        assert state.palette_names == ()

    def test_single_color(self):
        state = generate(coerce_params({"numColors": 1}))
        assert state.neutrals == (WHITE,)
        assert state.steps == (0,)
        assert state.contrast_low == WHITE

    def test_accepts_dict(self):
        state = generate({"numColors": 5, "numPalettes": 2})
        assert len(state.neutrals) == 5
        assert len(state.palettes) == 2

    def test_palette_names(self, light):
        names = generate(light).palette_names
        assert len(names) == 11
        assert all(name not in ("white", "black", "Unnamed") for name in names)


class TestContrastReferences:
    def test_auto_light(self, light):
        state = generate(light)
        assert state.contrast_low == WHITE
        assert state.contrast_high == BLACK

    def test_auto_dark(self, dark):
        state = generate(dark)
        assert state.contrast_low == state.neutrals[2]
        assert state.contrast_high == WHITE

    def test_manual(self):
        state = generate(coerce_params({
            "contrastMode": "manual", "manualLow": "#ff0000", "manualHigh": "#0000ff"}))
        assert state.contrast_low.hex == "#ff0000"
        assert state.contrast_high.hex == "#0000ff"

    def test_swatch_contrast(self, light):
        result = swatch_contrast(generate(light), "WCAG21")
        assert result["algorithm"] == "WCAG21"
        assert result["neutrals"][0] == {"low": 1.0, "high": 21.0}
        assert len(result["palettes"]) == 11

    def test_swatch_contrast_within_bounds(self, light):
        result = swatch_contrast(generate(light), "WCAG21")
        for pair in result["neutrals"]:
            assert 1.0 <= pair["low"] <= 21.0
            assert 1.0 <= pair["high"] <= 21.0


class TestToDict:
    def test_keys(self, light):
        data = generate(light).to_dict()
        assert set(data) == {"neutrals", "palettes", "contrastLow", "contrastHigh",
                             "paletteNames", "steps"}
        assert data["contrastLow"] == "#ffffff"

    def test_display_oklch(self, light):
        data = generate(light).to_dict(display_space="oklch")
        assert data["display"]["neutrals"][0] == "oklch(100% 0 0)"
        assert data["display"]["neutrals"][-1] == "oklch(0% 0 0)"

    def test_display_hsl_of_gray_neutrals(self):
        data = generate(coerce_params({"warmth": 0})).to_dict(display_space="hsl")
        assert all(s.startswith("hsl(0 0% ") for s in data["display"]["neutrals"])

    def test_display_p3(self):
        params = coerce_params({"gamutSpace": "p3"})
        data = generate(params).to_dict(display_space="hex", gamut=params.gamut)
        assert data["display"]["palettes"][0][5].startswith("color(display-p3")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
