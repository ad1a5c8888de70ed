"""Display unit conversion and formatting."""

import pytest

from sousvide.units import c_to_f, f_to_c, format_temp, format_time, in_to_mm, mm_to_in


class TestConversion:

    @pytest.mark.parametrize("celsius,fahrenheit", [(0, 32), (100, 212), (56, 132.8), (4, 39.2)])
    def test_temperature(self, celsius, fahrenheit):
        assert c_to_f(celsius) == pytest.approx(fahrenheit)
        assert f_to_c(fahrenheit) == pytest.approx(celsius)

    def test_length(self):
        assert mm_to_in(25.4) == 1
        assert mm_to_in(25) == 0.98
        assert in_to_mm(1) == 25.4
        assert in_to_mm(0.98) == 24.9


class TestFormatting:

    @pytest.mark.parametrize("minutes,expected", [
        (0, "0m"),
        (45, "45m"),
        (60, "1h 0m"),
        (131, "2h 11m"),
        (None, "--"),
        (float('inf'), "--"),
    ])
    def test_format_time(self, minutes, expected):
        assert format_time(minutes) == expected

    def test_format_temp(self):
        assert format_temp(56) == "56°C"
        assert format_temp(56, 'F') == "132.8°F"
