"""Unit conversion for the length, weight and temperature converters.

Length and weight are linear: each unit has a factor to the category's
base unit (metre, kilogram). Temperature goes through Celsius.
"""

from __future__ import annotations

from enum import Enum


class ConversionCategory(str, Enum):
    """Converter categories."""

    LENGTH = "length"
    WEIGHT = "weight"
    TEMPERATURE = "temperature"


# Factor from each unit to the category's base unit
_FACTORS: dict[ConversionCategory, dict[str, float]] = {
    ConversionCategory.LENGTH: {
        "m": 1.0,
        "km": 1000.0,
        "cm": 0.01,
        "mm": 0.001,
    },
    ConversionCategory.WEIGHT: {
        "kg": 1.0,
        "g": 0.001,
        "lb": 0.453592,
        "oz": 0.0283495,
    },
}

_TEMPERATURE_UNITS = ("C", "F", "K")


def units(category: ConversionCategory | str) -> list[str]:
    """List the unit names accepted for a category."""
    cat = ConversionCategory(category)
    if cat == ConversionCategory.TEMPERATURE:
        return list(_TEMPERATURE_UNITS)
    return list(_FACTORS[cat])


def _to_celsius(value: float, unit: str) -> float:
    if unit == "C":
        return value
    if unit == "F":
        return (value - 32) * 5 / 9
    return value - 273.15


def _from_celsius(value: float, unit: str) -> float:
    if unit == "C":
        return value
    if unit == "F":
        return value * 9 / 5 + 32
    return value + 273.15


def convert(
    value: float,
    category: ConversionCategory | str,
    from_unit: str,
    to_unit: str,
) -> float:
    """Convert ``value`` between two units of the same category.

    Args:
        value: Quantity in ``from_unit``.
        category: Converter category (e.g. "length").
        from_unit: Source unit (e.g. "km").
        to_unit: Target unit (e.g. "m").

    Returns:
        The quantity expressed in ``to_unit``.

    Raises:
        ValueError: on an unknown category or a unit outside the category.
    """
    cat = ConversionCategory(category)
    known = units(cat)
    for unit in (from_unit, to_unit):
        if unit not in known:
            raise ValueError(
                f"Unknown {cat.value} unit: {unit!r} (choose from {', '.join(known)})"
            )

    if cat == ConversionCategory.TEMPERATURE:
        return _from_celsius(_to_celsius(value, from_unit), to_unit)

    factors = _FACTORS[cat]
    return value * factors[from_unit] / factors[to_unit]
