"""
Application Defaults & Limits
=============================
Central registry for the values the front end needs: the default input
state, widget bounds, warning thresholds and curve sampling.

Everything here is in °C, mm and minutes; display units are applied by
``sousvide.units``.
"""
import logging
import os

# Default input state (beef steak straight from the fridge)
DEFAULT_STATE = {
    'category': 'meat',
    'food_type': 'beef',
    'shape': 'slab',
    'thickness': 25.0,
    'temp_bath': 58.0,
    'temp_core': 56.0,
    'temp_start': 4.0,
    'unit': 'C',
    'length_unit': 'mm',
}

# Input bounds
TEMP_MIN_C = 40.0
TEMP_MAX_C = 95.0
TEMP_STEP_C = 0.5
THICKNESS_MIN_MM = 5.0
THICKNESS_MAX_MM = 150.0

START_TEMPERATURES = {
    'fridge': 4.0,
    'room': 20.0,
}

# Bath window offered around a doneness preset
BATH_MIN_OFFSET = 0.5
BATH_MAX_OFFSET = 5.0
BATH_DEFAULT_OFFSET = 2.0

# Warnings
LOW_BATH_WARNING_C = 52.0
THICK_WARNING_MM = 70.0

# Chart
CURVE_STEPS = 50
VEGETABLE_CURVE_STEPS = 40
CHART_EXTRA_MINUTES = 30
PLATEAU_TOLERANCE_C = 0.5
DANGER_ZONE_C = (4.0, 60.0)
SLOW_GROWTH_C = 52.0

LOG_LEVEL = getattr(logging, os.environ.get('SOUSVIDE_LOG_LEVEL', 'INFO').upper(), logging.INFO)
LOG_FILE = os.environ.get('SOUSVIDE_LOG_FILE') or None
