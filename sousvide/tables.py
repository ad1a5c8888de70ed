"""
Physical constants and reference tables.

Thermal diffusivity values follow Baldwin's advice to use the lowest
reported values (beef round ~1.11e-7 m²/s, Sanz et al. 1987).
Pasteurization targets are 6D to 7D reductions of Listeria/Salmonella.
"""
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple, Tuple


class PasteurizationParams(NamedTuple):
    d_ref: float       # D-value at t_ref [min]
    t_ref: float       # reference temperature [°C]
    z: float           # °C per decimal change of D
    target_log: float  # default log reduction


class FoodCategory(Enum):
    """Food category carrying its thermal diffusivity and kinetics"""

    BEEF = ('beef', 1.11e-7, PasteurizationParams(3.2, 60.0, 6.0, 6.5))
    PORK = ('pork', 1.11e-7, PasteurizationParams(3.2, 60.0, 6.0, 6.5))
    POULTRY = ('poultry', 1.11e-7, PasteurizationParams(5.0, 60.0, 6.0, 7.0))
    FISH = ('fish', 1.11e-7, PasteurizationParams(3.0, 60.0, 6.0, 6.0))
    # Pasteurization is not the goal for vegetable texture
    VEGETABLES = ('vegetables', 1.4e-7, PasteurizationParams(0.0, 0.0, 0.0, 0.0))

    def __init__(self, key, diffusivity, pasteurization):
        self.key = key
        self.diffusivity = diffusivity  # m²/s
        self.pasteurization = pasteurization

    @classmethod
    def _missing_(cls, value):
        for member in cls:
            if member.key == value:
                return member
        return None

    @property
    def is_meat(self):
        return self is not FoodCategory.VEGETABLES


class Geometry(Enum):
    """Canonical shape with its one-term series constants (c1, c2)

    Centre temperature ratio: Y = c1 * exp(-c2 * Fo)
    """

    SLAB = ('slab', 1.273, 2.467)
    CYLINDER = ('cylinder', 1.602, 5.783)
    SPHERE = ('sphere', 2.0, 9.87)

    def __init__(self, key, leading_coefficient, decay_rate):
        self.key = key
        self.leading_coefficient = leading_coefficient
        self.decay_rate = decay_rate

    @classmethod
    def _missing_(cls, value):
        for member in cls:
            if member.key == value:
                return member
        return None


class DonenessPreset(NamedTuple):
    label: str
    temp: float


class VegetableProcess(NamedTuple):
    time: int    # minutes
    temp: float  # °C
    label: str


# First entry of each list is the default selection
DONENESS_PRESETS = MappingProxyType({
    FoodCategory.BEEF: (
        DonenessPreset('doneness_rare', 52),
        DonenessPreset('doneness_med_rare', 55),
        DonenessPreset('doneness_medium', 60),
        DonenessPreset('doneness_med_well', 65),
        DonenessPreset('doneness_well', 70),
    ),
    FoodCategory.PORK: (
        DonenessPreset('doneness_med_rare', 58),
        DonenessPreset('doneness_medium', 62),
        DonenessPreset('doneness_well', 70),
    ),
    FoodCategory.POULTRY: (
        DonenessPreset('doneness_juicy', 62),
        DonenessPreset('doneness_traditional', 70),
    ),
    FoodCategory.FISH: (
        DonenessPreset('doneness_mi_cuit', 45),
        DonenessPreset('doneness_medium', 52),
        DonenessPreset('doneness_well', 60),
    ),
    FoodCategory.VEGETABLES: (
        DonenessPreset('doneness_tender', 85),
    ),
})

VEGETABLE_DATA = MappingProxyType({
    'asparagus_green': VegetableProcess(20, 85, 'veg_asparagus_green'),
    'potatoes_sliced': VegetableProcess(40, 75, 'veg_potatoes_sliced'),
    'leeks': VegetableProcess(60, 85, 'veg_leeks'),
    'potatoes_chunks': VegetableProcess(60, 75, 'veg_potatoes_chunks'),
    'carrots_sliced': VegetableProcess(40, 85, 'veg_carrots_sliced'),
    'zucchini_cubes': VegetableProcess(30, 75, 'veg_zucchini_cubes'),
    'eggplant_halves': VegetableProcess(40, 75, 'veg_eggplant_halves'),
    'artichokes_wedges': VegetableProcess(40, 85, 'veg_artichokes_wedges'),
    'artichokes_whole': VegetableProcess(70, 85, 'veg_artichokes_whole'),
    'onions_whole': VegetableProcess(80, 90, 'veg_onions_whole'),
    'broccoli': VegetableProcess(40, 85, 'veg_broccoli'),
    'cauliflower_florets': VegetableProcess(40, 85, 'veg_cauliflower_florets'),
    'peppers_strips': VegetableProcess(50, 80, 'veg_peppers_strips'),
    'celeriac_cubes': VegetableProcess(60, 82, 'veg_celeriac_cubes'),
    'pumpkin_puree': VegetableProcess(120, 85, 'veg_pumpkin_puree'),
})


def get_doneness_presets(category) -> Tuple[DonenessPreset, ...]:
    """Ordered doneness presets for a category (enum member or key)"""
    try:
        category = FoodCategory(category)
    except ValueError:
        return ()
    return DONENESS_PRESETS.get(category, ())
