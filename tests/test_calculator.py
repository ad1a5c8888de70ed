"""
Calculator test suite

Covers heating time (one-term conduction), pasteurization (D/z model),
the total-time composer and the temperature curves.
"""

import math

import numpy as np
import pytest

from sousvide import (
    UNREACHABLE,
    FoodCategory,
    Geometry,
    InvalidInputError,
    ProcessInput,
    ProcessResult,
    SousVideCalculator,
    check_input,
    compute_heating_time,
    compute_pasteurization_time,
    compute_temperature_curve,
    compute_total_time,
    safety_warnings,
    temperature_at,
    trim_to_plateau,
)
from sousvide.calculator import TemperaturePoint, bath_range_for_doneness, default_bath_for_doneness

MEATS = [FoodCategory.BEEF, FoodCategory.PORK, FoodCategory.POULTRY, FoodCategory.FISH]


@pytest.fixture
def steak():
    """25 mm beef steak from the fridge, 58°C bath, 56°C core."""
    return ProcessInput(
        category='beef',
        geometry='slab',
        thickness_mm=25,
        temp_bath=58,
        temp_start=4,
        temp_core=56,
    )


def with_changes(process_input, **changes):
    values = dict(process_input.__dict__)
    values.update(changes)
    return ProcessInput(**values)


class TestProcessInput:

    def test_keys_resolve_to_enums(self, steak):
        assert steak.category is FoodCategory.BEEF
        assert steak.geometry is Geometry.SLAB

    def test_radius_is_half_thickness_in_meters(self, steak):
        assert steak.radius == pytest.approx(0.0125)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            ProcessInput('lamb', 'slab', 25, 58, 4, 56)

    def test_vegetable_process_only_for_vegetables(self, steak):
        assert steak.vegetable_process is None
        assert with_changes(steak, vegetable='broccoli').vegetable_process is None
        broccoli = with_changes(steak, category=FoodCategory.VEGETABLES, vegetable='broccoli')
        assert broccoli.vegetable_process.time == 40


class TestHeatingTime:

    def test_steak_heating_time(self, steak):
        heating = compute_heating_time(steak)
        # Fo = -ln((2/54) / 1.273) / 2.467, t = Fo * r² / alpha
        expected = -math.log((2 / 54) / 1.273) / 2.467 * 0.0125**2 / 1.11e-7 / 60
        assert heating == pytest.approx(expected)
        assert 30 < heating < 40

    @pytest.mark.parametrize("category", list(FoodCategory))
    @pytest.mark.parametrize("geometry", list(Geometry))
    def test_zero_when_core_equals_start(self, category, geometry):
        assert SousVideCalculator.heating_time(category, geometry, 30, 60, 20, 20) == 0.0

    @pytest.mark.parametrize("category", list(FoodCategory))
    @pytest.mark.parametrize("geometry", list(Geometry))
    @pytest.mark.parametrize("temp_core", [60, 61, 90])
    def test_unreachable_when_core_not_below_bath(self, category, geometry, temp_core):
        result = SousVideCalculator.heating_time(category, geometry, 30, 60, 4, temp_core)
        assert result is UNREACHABLE

    def test_unreachable_is_not_a_number(self, steak):
        result = compute_heating_time(with_changes(steak, temp_core=58))
        assert not isinstance(result, float)

    @pytest.mark.parametrize("geometry", list(Geometry))
    def test_increases_with_thickness(self, geometry):
        times = [
            SousVideCalculator.heating_time(FoodCategory.BEEF, geometry, thickness, 58, 4, 56)
            for thickness in (5, 10, 25, 50, 100)
        ]
        assert times == sorted(times)
        assert len(set(times)) == len(times)

    def test_scales_with_square_of_thickness(self, steak):
        thin = compute_heating_time(steak)
        thick = compute_heating_time(with_changes(steak, thickness_mm=50))
        assert thick == pytest.approx(4 * thin)

    def test_sphere_faster_than_cylinder_faster_than_slab(self, steak):
        slab = compute_heating_time(steak)
        cylinder = compute_heating_time(with_changes(steak, geometry=Geometry.CYLINDER))
        sphere = compute_heating_time(with_changes(steak, geometry=Geometry.SPHERE))
        assert sphere < cylinder < slab

    def test_target_close_to_start_is_small_positive(self, steak):
        heating = compute_heating_time(with_changes(steak, temp_core=4.1))
        assert 0 < heating < 5

    def test_accepts_string_keys(self):
        by_key = SousVideCalculator.heating_time('pork', 'cylinder', 40, 60, 4, 58)
        by_enum = SousVideCalculator.heating_time(FoodCategory.PORK, Geometry.CYLINDER, 40, 60, 4, 58)
        assert by_key == by_enum


class TestPasteurizationTime:

    def test_beef_at_56(self, steak):
        # D = 3.2 * 10^((60 - 56) / 6) = 14.853 min, 6.5 log
        assert compute_pasteurization_time(steak) == pytest.approx(96.545, abs=1e-3)

    @pytest.mark.parametrize("category", MEATS)
    def test_at_reference_temperature(self, category):
        params = category.pasteurization
        result = SousVideCalculator.pasteurization_time(category, params.t_ref)
        assert result == pytest.approx(params.d_ref * params.target_log)

    @pytest.mark.parametrize("category", MEATS)
    def test_strictly_decreasing_in_temperature(self, category):
        times = [SousVideCalculator.pasteurization_time(category, t) for t in np.arange(45, 75, 0.5)]
        assert all(a > b for a, b in zip(times, times[1:]))

    def test_one_z_value_is_one_decade(self):
        hot = SousVideCalculator.pasteurization_time(FoodCategory.POULTRY, 60)
        cold = SousVideCalculator.pasteurization_time(FoodCategory.POULTRY, 54)
        assert cold == pytest.approx(10 * hot)

    def test_vegetables_not_modeled(self):
        assert SousVideCalculator.pasteurization_time(FoodCategory.VEGETABLES, 85) == 0.0
        assert SousVideCalculator.pasteurization_time('vegetables', 20, log_reduction=7) == 0.0

    def test_log_reduction_override(self, steak):
        default = compute_pasteurization_time(steak)
        custom = compute_pasteurization_time(with_changes(steak, log_reduction=13))
        assert custom == pytest.approx(2 * default)

    def test_low_temperature_is_not_capped(self):
        result = SousVideCalculator.pasteurization_time(FoodCategory.BEEF, 30)
        assert result == pytest.approx(3.2 * 10**5 * 6.5)


class TestTotalTime:

    def test_steak_total(self, steak):
        result = compute_total_time(steak)
        assert result.heating_time == 34
        assert result.pasteurization_time == 97
        # ceil(33.64 + 96.55)
        assert result.total_time == 131

    def test_each_figure_is_ceiled_from_its_own_value(self, steak):
        heating = compute_heating_time(steak)
        pasteurization = compute_pasteurization_time(steak)
        result = compute_total_time(steak)
        assert result.heating_time == math.ceil(heating)
        assert result.pasteurization_time == math.ceil(pasteurization)
        assert result.total_time == math.ceil(heating + pasteurization)

    @pytest.mark.parametrize("temp_core", [58, 59])
    def test_unreachable_nulls_everything(self, steak, temp_core):
        result = compute_total_time(with_changes(steak, temp_core=temp_core))
        assert result == ProcessResult(None, None, None)
        assert not result.is_reachable

    def test_results_are_whole_minutes(self, steak):
        result = compute_total_time(with_changes(steak, geometry='sphere', thickness_mm=37))
        assert all(isinstance(v, int) for v in (result.heating_time, result.pasteurization_time,
                                                result.total_time))

    def test_already_at_core_temperature(self, steak):
        result = compute_total_time(with_changes(steak, temp_start=56))
        assert result.heating_time == 0
        assert result.total_time == result.pasteurization_time

    def test_broccoli_uses_table(self, steak):
        broccoli = with_changes(steak, category='vegetables', vegetable='broccoli')
        result = compute_total_time(broccoli)
        assert result == ProcessResult(None, None, 40)
        assert broccoli.vegetable_process.temp == 85

    def test_repeated_calls_are_identical(self, steak):
        assert compute_total_time(steak) == compute_total_time(steak)


class TestTemperatureCurve:

    @pytest.mark.parametrize("geometry", list(Geometry))
    @pytest.mark.parametrize("duration", [0.5, 30, 131, 600])
    def test_spans_duration_within_bounds(self, steak, geometry, duration):
        points = compute_temperature_curve(with_changes(steak, geometry=geometry), duration)
        step = max(1, duration / 50)

        assert points[0].time_minutes == 0
        assert duration - step < points[-1].time_minutes <= duration
        times = [p.time_minutes for p in points]
        assert times == sorted(times)
        for p in points:
            assert 4 <= p.temperature_celsius <= 58

    def test_starts_at_start_temperature(self, steak):
        points = compute_temperature_curve(steak, 120)
        assert points[0].temperature_celsius == pytest.approx(4)

    def test_fifty_one_samples(self, steak):
        points = compute_temperature_curve(steak, 131)
        assert len(points) == 51
        assert points[-1].time_minutes == pytest.approx(131)

    def test_non_decreasing_and_approaches_bath(self, steak):
        points = compute_temperature_curve(steak, 600)
        temps = [p.temperature_celsius for p in points]
        assert all(a <= b for a, b in zip(temps, temps[1:]))
        assert temps[-1] == pytest.approx(58, abs=0.1)

    def test_matches_heating_time(self, steak):
        heating = compute_heating_time(steak)
        points = SousVideCalculator.temperature_curve(steak, heating, steps=1)
        assert points[-1].time_minutes == pytest.approx(heating)
        assert points[-1].temperature_celsius == pytest.approx(56)

    def test_restartable(self, steak):
        assert compute_temperature_curve(steak, 90) == compute_temperature_curve(steak, 90)

    def test_points_have_named_fields(self, steak):
        point = compute_temperature_curve(steak, 10)[0]
        assert isinstance(point, TemperaturePoint)
        assert point.time_minutes == 0


class TestVegetableCurve:

    def test_broccoli_ramp_and_hold(self, steak):
        broccoli = with_changes(steak, category='vegetables', vegetable='broccoli')
        points = compute_temperature_curve(broccoli, 40)

        assert points[0] == (0, 4)
        # ramp over max(10, 0.25 * 40) = 10 minutes
        assert temperature_at(points, 5) == pytest.approx(4 + 0.5 * 81)
        assert all(p.temperature_celsius == 85 for p in points if p.time_minutes >= 10)
        assert points[-1] == (40, 85)

    def test_quarter_ramp_for_long_process(self):
        points = SousVideCalculator.vegetable_curve(120, 85, 20)
        assert temperature_at(points, 15) == pytest.approx(20 + 0.5 * 65)
        assert temperature_at(points, 30) == pytest.approx(85)

    def test_final_point_forced_to_total(self):
        points = SousVideCalculator.vegetable_curve(25.5, 75, 4)
        assert points[-1] == (25.5, 75)
        assert points[-2].time_minutes == 25


class TestCurveHelpers:

    @pytest.fixture
    def points(self):
        return [TemperaturePoint(t, T) for t, T in [(0, 4), (10, 24), (20, 44), (30, 54), (40, 55.8),
                                                    (50, 56), (60, 56), (70, 56)]]

    def test_temperature_at_interpolates(self, points):
        assert temperature_at(points, 5) == pytest.approx(14)
        assert temperature_at(points, 25) == pytest.approx(49)
        assert temperature_at(points, 70) == pytest.approx(56)

    def test_temperature_at_outside_range(self, points):
        assert temperature_at(points, -1) is None
        assert temperature_at(points, 71) is None
        assert temperature_at([], 0) is None

    def test_trim_to_plateau(self, points):
        # first within 0.5°C at index 4; keep (8 - 4) // 10 = 0 extra samples
        trimmed = trim_to_plateau(points, 56)
        assert trimmed == points[:5]

    def test_trim_keeps_ten_percent_context(self):
        points = [TemperaturePoint(t, 56 if t >= 10 else 4) for t in range(41)]
        trimmed = trim_to_plateau(points, 56)
        # plateau at 10, (41 - 10) // 10 = 3 more samples
        assert trimmed[-1].time_minutes == 13

    def test_trim_without_plateau_keeps_everything(self, points):
        assert trim_to_plateau(points, 80) == points


class TestChecksAndWarnings:

    def test_valid_input_passes(self, steak):
        check_input(steak)

    @pytest.mark.parametrize("changes", [
        {'thickness_mm': 0},
        {'thickness_mm': -10},
        {'temp_bath': float('nan')},
        {'temp_core': float('inf')},
        {'log_reduction': 0},
        {'category': 'vegetables', 'vegetable': 'kale'},
    ])
    def test_invalid_input(self, steak, changes):
        with pytest.raises(InvalidInputError):
            check_input(with_changes(steak, **changes))

    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInputError, ValueError)

    def test_no_warnings_for_steak(self, steak):
        assert safety_warnings(steak) == []

    def test_warnings(self, steak):
        assert safety_warnings(with_changes(steak, temp_bath=51, temp_core=50)) == ['warning_temp_low']
        assert safety_warnings(with_changes(steak, thickness_mm=71)) == ['warning_thick']

    def test_bath_window_for_doneness(self):
        assert bath_range_for_doneness(55) == (55.5, 60)
        assert default_bath_for_doneness(55) == 57
