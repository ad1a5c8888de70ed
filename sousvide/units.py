"""Display unit conversion and formatting. The model itself only uses °C, mm and minutes."""
import math


def c_to_f(celsius):
    return round(celsius * 9 / 5 + 32, 1)


def f_to_c(fahrenheit):
    return round((fahrenheit - 32) * 5 / 9, 1)


def mm_to_in(mm):
    return round(mm / 25.4, 2)


def in_to_mm(inches):
    return round(inches * 25.4, 1)


def format_time(minutes):
    """Format minutes as '1h 5m' or '45m'; '--' when there is no value"""
    if minutes is None or not math.isfinite(minutes):
        return "--"

    hours = int(minutes // 60)
    rest = minutes % 60
    rest = int(rest) if float(rest).is_integer() else round(rest, 1)
    if hours > 0:
        return f"{hours}h {rest}m"
    return f"{rest}m"


def format_temp(celsius, unit='C'):
    if unit == 'F':
        return f"{c_to_f(celsius)}°F"
    return f"{celsius}°C"
