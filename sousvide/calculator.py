"""
Sous-vide process calculations.

Heating uses the one-term series solution for the centre of a slab,
infinite cylinder or sphere:

    Y = (T_bath - T_core) / (T_bath - T_start) = c1 * exp(-c2 * Fo)
    Fo = alpha * t / r**2

Pasteurization uses the thermal death time relation
D(T) = D_ref * 10**((T_ref - T) / z).

References:
- Baldwin, D. E. (2012). A Practical Guide to Sous Vide Cooking.
- Myhrvold, N., et al. (2011). Modernist Cuisine.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from sousvide import config
from sousvide.tables import VEGETABLE_DATA, FoodCategory, Geometry, VegetableProcess

logger = logging.getLogger(__name__)

# Floor for the Fourier number when the one-term inversion goes negative
MIN_FOURIER = 0.01


class Unreachable(Enum):
    """Outcome of a heating request the bath can never satisfy"""
    TARGET_NOT_BELOW_BATH = 'target_not_below_bath'


UNREACHABLE = Unreachable.TARGET_NOT_BELOW_BATH


class InvalidInputError(ValueError):
    """Raised by check_input for values outside the model's domain"""


@dataclass(frozen=True)
class ProcessInput:
    category: FoodCategory
    geometry: Geometry
    thickness_mm: float  # full slab thickness or full diameter
    temp_bath: float
    temp_start: float
    temp_core: float
    log_reduction: Optional[float] = None
    vegetable: Optional[str] = None

    def __post_init__(self):
        # Widgets hand over keys such as 'beef' and 'slab'
        object.__setattr__(self, 'category', FoodCategory(self.category))
        object.__setattr__(self, 'geometry', Geometry(self.geometry))

    @property
    def radius(self) -> float:
        """Characteristic radius in meters"""
        return self.thickness_mm / 1000 / 2

    @property
    def vegetable_process(self) -> Optional[VegetableProcess]:
        if self.category is not FoodCategory.VEGETABLES or self.vegetable is None:
            return None
        return VEGETABLE_DATA.get(self.vegetable)


@dataclass(frozen=True)
class ProcessResult:
    """Process times in whole minutes; None where there is nothing to show"""
    heating_time: Optional[int]
    pasteurization_time: Optional[int]
    total_time: Optional[int]

    @classmethod
    def unreachable(cls) -> 'ProcessResult':
        return cls(None, None, None)

    @property
    def is_reachable(self) -> bool:
        return self.total_time is not None


class TemperaturePoint(NamedTuple):
    time_minutes: float
    temperature_celsius: float


def _sample_times(duration_minutes: float, steps: int) -> np.ndarray:
    """Sample times from 0 in steps of max(1, duration / steps)"""
    step = max(1.0, duration_minutes / steps)
    count = max(int(np.floor(duration_minutes / step + 1e-9)), 0)
    times = np.arange(count + 1) * step
    return np.minimum(times, max(duration_minutes, 0.0))


class SousVideCalculator:
    """Heating, pasteurization and core temperature for a sous-vide cook"""

    @staticmethod
    def heating_time(category, geometry, thickness_mm, temp_bath, temp_start, temp_core):
        """Minutes for the centre to reach temp_core, or UNREACHABLE"""
        if temp_core >= temp_bath:
            return UNREACHABLE
        if temp_core <= temp_start:
            return 0.0

        category = FoodCategory(category)
        geometry = Geometry(geometry)

        # Unaccomplished temperature change, strictly in (0, 1)
        Y = (temp_bath - temp_core) / (temp_bath - temp_start)

        Fo = -np.log(Y / geometry.leading_coefficient) / geometry.decay_rate
        if Fo < 0:
            # One-term series is only valid for longer times
            logger.debug("Fourier number %.4f below zero for Y=%.4f, using %.2f", Fo, Y, MIN_FOURIER)
            Fo = MIN_FOURIER

        r = thickness_mm / 1000 / 2  # meters
        time_seconds = Fo * r**2 / category.diffusivity
        return float(time_seconds / 60)

    @staticmethod
    def pasteurization_time(category, hold_temp, log_reduction=None):
        """Minutes at hold_temp for the target log reduction"""
        params = FoodCategory(category).pasteurization
        if params.d_ref == 0:
            return 0.0

        target_log = params.target_log if log_reduction is None else log_reduction
        d_value = params.d_ref * np.power(10.0, (params.t_ref - hold_temp) / params.z)
        return float(d_value * target_log)

    @staticmethod
    def total_time(process_input: ProcessInput) -> ProcessResult:
        """Heating plus pasteurization at the core temperature, ceiled.

        The core is the coldest point, so pasteurization is only counted once
        it has reached temp_core. Each figure is rounded up from its own
        unrounded value: total is ceil(heating + pasteurization), which can be
        one minute less than the sum of the two displayed parts.
        """
        vegetable = process_input.vegetable_process
        if vegetable is not None:
            return ProcessResult(None, None, vegetable.time)

        heating = SousVideCalculator.heating_time(
            process_input.category, process_input.geometry, process_input.thickness_mm,
            process_input.temp_bath, process_input.temp_start, process_input.temp_core)
        if heating is UNREACHABLE:
            logger.debug("Core %.1f°C not below bath %.1f°C", process_input.temp_core, process_input.temp_bath)
            return ProcessResult.unreachable()

        pasteurization = SousVideCalculator.pasteurization_time(
            process_input.category, process_input.temp_core, process_input.log_reduction)

        return ProcessResult(
            heating_time=math.ceil(heating),
            pasteurization_time=math.ceil(pasteurization),
            total_time=math.ceil(heating + pasteurization),
        )

    @staticmethod
    def temperature_curve(process_input: ProcessInput, duration_minutes,
                          steps=config.CURVE_STEPS) -> List[TemperaturePoint]:
        """Core temperature over [0, duration_minutes]"""
        category = process_input.category
        geometry = process_input.geometry
        r = process_input.radius

        times = _sample_times(duration_minutes, steps)
        Fo = category.diffusivity * times * 60 / r**2
        # Clamp the initial overshoot of the one-term series
        Y = np.minimum(geometry.leading_coefficient * np.exp(-geometry.decay_rate * Fo), 1.0)
        temps = process_input.temp_bath - Y * (process_input.temp_bath - process_input.temp_start)

        return [TemperaturePoint(float(t), float(T)) for t, T in zip(times, temps)]

    @staticmethod
    def vegetable_curve(total_time, target_temp, start_temp,
                        steps=config.VEGETABLE_CURVE_STEPS) -> List[TemperaturePoint]:
        """Linear ramp over the first quarter (at least 10 min), then hold"""
        ramp_minutes = max(10.0, total_time * 0.25)

        times = _sample_times(total_time, steps)
        ramp = start_temp + (times / ramp_minutes) * (target_temp - start_temp)
        temps = np.where(times <= ramp_minutes, ramp, target_temp)

        points = [TemperaturePoint(float(t), float(T)) for t, T in zip(times, temps)]
        if points[-1].time_minutes < total_time:
            points.append(TemperaturePoint(float(total_time), float(target_temp)))
        return points


def compute_heating_time(process_input: ProcessInput) -> Union[float, Unreachable]:
    return SousVideCalculator.heating_time(
        process_input.category, process_input.geometry, process_input.thickness_mm,
        process_input.temp_bath, process_input.temp_start, process_input.temp_core)


def compute_pasteurization_time(process_input: ProcessInput) -> float:
    return SousVideCalculator.pasteurization_time(
        process_input.category, process_input.temp_core, process_input.log_reduction)


def compute_total_time(process_input: ProcessInput) -> ProcessResult:
    return SousVideCalculator.total_time(process_input)


def compute_temperature_curve(process_input: ProcessInput, duration_minutes) -> List[TemperaturePoint]:
    """Core temperature samples; vegetables get the ramp-and-hold profile"""
    vegetable = process_input.vegetable_process
    if vegetable is not None:
        return SousVideCalculator.vegetable_curve(duration_minutes, vegetable.temp, process_input.temp_start)
    return SousVideCalculator.temperature_curve(process_input, duration_minutes)


def temperature_at(points: Sequence[TemperaturePoint], time_minutes) -> Optional[float]:
    """Linearly interpolated temperature, None outside the sampled range"""
    if not points:
        return None
    times = np.array([p.time_minutes for p in points])
    temps = np.array([p.temperature_celsius for p in points])
    if time_minutes < times[0] or time_minutes > times[-1]:
        return None
    return float(np.interp(time_minutes, times, temps))


def trim_to_plateau(points: Sequence[TemperaturePoint], target_temp,
                    tolerance=config.PLATEAU_TOLERANCE_C) -> List[TemperaturePoint]:
    """Cut the curve shortly after it first comes within tolerance of target.

    10% of the remaining samples are kept after the plateau for context.
    """
    points = list(points)
    plateau_index = len(points) - 1
    for i, point in enumerate(points):
        if abs(point.temperature_celsius - target_temp) < tolerance:
            plateau_index = min(len(points) - 1, i + (len(points) - i) // 10)
            break
    return points[:plateau_index + 1]


def safety_warnings(process_input: ProcessInput) -> List[str]:
    warnings = []
    if process_input.temp_bath < config.LOW_BATH_WARNING_C:
        warnings.append('warning_temp_low')
    if process_input.thickness_mm > config.THICK_WARNING_MM:
        warnings.append('warning_thick')
    return warnings


def bath_range_for_doneness(target_temp) -> Tuple[float, float]:
    """Bath temperatures offered once a doneness preset fixes the core"""
    return target_temp + config.BATH_MIN_OFFSET, target_temp + config.BATH_MAX_OFFSET


def default_bath_for_doneness(target_temp) -> float:
    return target_temp + config.BATH_DEFAULT_OFFSET


def check_input(process_input: ProcessInput) -> None:
    """Raise InvalidInputError for values the model cannot handle"""
    if not process_input.thickness_mm > 0:
        raise InvalidInputError(f"Thickness must be positive, got {process_input.thickness_mm} mm")

    for name in ('temp_bath', 'temp_start', 'temp_core'):
        value = getattr(process_input, name)
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be a finite temperature, got {value}")

    if process_input.log_reduction is not None and process_input.log_reduction <= 0:
        raise InvalidInputError(f"Log reduction must be positive, got {process_input.log_reduction}")

    if process_input.vegetable is not None and process_input.vegetable not in VEGETABLE_DATA:
        raise InvalidInputError(f"Unknown vegetable '{process_input.vegetable}'")
