from sousvide.calculator import (
    UNREACHABLE,
    InvalidInputError,
    ProcessInput,
    ProcessResult,
    SousVideCalculator,
    TemperaturePoint,
    Unreachable,
    check_input,
    compute_heating_time,
    compute_pasteurization_time,
    compute_temperature_curve,
    compute_total_time,
    safety_warnings,
    temperature_at,
    trim_to_plateau,
)
from sousvide.tables import (
    DONENESS_PRESETS,
    VEGETABLE_DATA,
    DonenessPreset,
    FoodCategory,
    Geometry,
    PasteurizationParams,
    VegetableProcess,
    get_doneness_presets,
)

__version__ = "1.0.0"
