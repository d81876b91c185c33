"""Unit conversion tables: temperature, length and weight"""

from typing import Callable, Dict

from jarvis.errors import UnsupportedConversion

Converter = Callable[[float], float]

CONVERSIONS: Dict[str, Dict[str, Converter]] = {
    # Temperature
    "celsius": {
        "fahrenheit": lambda n: n * 9 / 5 + 32,
        "kelvin": lambda n: n + 273.15,
    },
    "fahrenheit": {
        "celsius": lambda n: (n - 32) * 5 / 9,
        "kelvin": lambda n: (n - 32) * 5 / 9 + 273.15,
    },
    "kelvin": {
        "celsius": lambda n: n - 273.15,
        "fahrenheit": lambda n: (n - 273.15) * 9 / 5 + 32,
    },
    # Length
    "meters": {
        "feet": lambda n: n * 3.28084,
        "inches": lambda n: n * 39.3701,
        "miles": lambda n: n * 0.000621371,
        "kilometers": lambda n: n / 1000,
    },
    "feet": {
        "meters": lambda n: n / 3.28084,
        "inches": lambda n: n * 12,
        "miles": lambda n: n / 5280,
        "kilometers": lambda n: n / 3280.84,
    },
    "kilometers": {
        "meters": lambda n: n * 1000,
        "miles": lambda n: n * 0.621371,
        "feet": lambda n: n * 3280.84,
    },
    "miles": {
        "kilometers": lambda n: n / 0.621371,
        "meters": lambda n: n * 1609.34,
        "feet": lambda n: n * 5280,
    },
    # Weight
    "kilograms": {
        "pounds": lambda n: n * 2.20462,
        "ounces": lambda n: n * 35.274,
        "grams": lambda n: n * 1000,
    },
    "pounds": {
        "kilograms": lambda n: n / 2.20462,
        "ounces": lambda n: n * 16,
        "grams": lambda n: n * 453.592,
    },
    "grams": {
        "kilograms": lambda n: n / 1000,
        "pounds": lambda n: n / 453.592,
        "ounces": lambda n: n / 28.3495,
    },
}

AVAILABLE_UNITS = (
    "temperature (celsius, fahrenheit, kelvin), "
    "length (meters, feet, inches, miles, kilometers), "
    "weight (kilograms, pounds, ounces, grams)"
)


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert value between units; unit names are case-insensitive

    Raises:
        UnsupportedConversion: no rule from from_unit to to_unit
    """
    rule = CONVERSIONS.get(from_unit.lower(), {}).get(to_unit.lower())
    if rule is None:
        raise UnsupportedConversion(
            f"Conversion from {from_unit} to {to_unit} is not supported. Available units: {AVAILABLE_UNITS}"
        )
    return rule(value)
