"""Tests for easing curves and easing-name resolution."""

import pytest

from easing import (
    EASING_FUNCTIONS,
    Easing,
    cinematic,
    cubic_in_out,
    lerp,
    linear,
    parse_easing,
    quintic_in_out,
    resolve_easing,
)

SAMPLES = [i / 200 for i in range(201)]


class TestLerp:

    def test_endpoints(self):
        assert lerp(10, 20, 0) == 10
        assert lerp(10, 20, 1) == 20

    def test_midpoint(self):
        assert lerp(0, 100, 0.5) == 50

    def test_extrapolates_outside_unit_range(self):
        assert lerp(0, 10, 1.5) == 15
        assert lerp(0, 10, -0.5) == -5


class TestSymmetricCurves:

    @pytest.mark.parametrize("fn", [cubic_in_out, quintic_in_out])
    def test_boundaries(self, fn):
        assert fn(0) == 0
        assert fn(1) == 1
        assert fn(0.5) == 0.5

    @pytest.mark.parametrize("fn", [cubic_in_out, quintic_in_out])
    @pytest.mark.parametrize("x", SAMPLES)
    def test_point_symmetry(self, fn, x):
        assert fn(x) + fn(1 - x) == pytest.approx(1.0, abs=1e-12)

    def test_quintic_starts_slower_than_cubic(self):
        assert quintic_in_out(0.25) < cubic_in_out(0.25)

    def test_quintic_steeper_in_the_middle(self):
        assert quintic_in_out(0.45) < cubic_in_out(0.45)
        assert quintic_in_out(0.55) > cubic_in_out(0.55)


class TestCinematic:

    def test_boundaries(self):
        assert cinematic(0) == 0
        assert cinematic(1) == 1

    def test_half_the_move_by_blend_point(self):
        assert cinematic(0.3) == pytest.approx(0.5)

    def test_continuous_at_blend_point(self):
        eps = 1e-9
        assert cinematic(0.3 - eps) == pytest.approx(cinematic(0.3), abs=1e-6)

    def test_monotonic_non_decreasing(self):
        values = [cinematic(i / 1000) for i in range(1001)]
        for a, b in zip(values, values[1:]):
            assert b >= a

    def test_front_loaded(self):
        assert cinematic(0.5) > 0.8
        assert cinematic(0.5) > cubic_in_out(0.5)


class TestResolveEasing:

    def test_every_profile_has_a_function(self):
        assert set(EASING_FUNCTIONS) == set(Easing)

    def test_resolves_by_name(self):
        assert resolve_easing("cinematic")(0.3) == pytest.approx(0.5)
        assert resolve_easing("cubic")(0.5) == 0.5
        assert resolve_easing("quintic")(0.5) == 0.5
        assert resolve_easing("linear")(0.73) == 0.73

    def test_resolves_enum_members(self):
        assert resolve_easing(Easing.LINEAR) is linear
        assert resolve_easing(Easing.CUBIC) is cubic_in_out

    @pytest.mark.parametrize("name", ["bounce", "", "Cubic", "ease-in"])
    def test_unknown_name_raises(self, name):
        with pytest.raises(ValueError, match="Unknown easing"):
            resolve_easing(name)

    def test_parse_returns_member(self):
        assert parse_easing("quintic") is Easing.QUINTIC

    @pytest.mark.parametrize("easing", list(Easing))
    def test_all_profiles_stay_in_unit_range(self, easing):
        fn = resolve_easing(easing)
        for t in SAMPLES:
            assert 0.0 <= fn(t) <= 1.0
