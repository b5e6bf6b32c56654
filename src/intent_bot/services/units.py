"""Unit conversion backed by pint."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

import pint

from intent_bot.errors import ConversionError
from intent_bot.logging import get_logger

logger = get_logger(__name__)

_IRREGULAR_PLURALS: dict[str, str] = {
    "foot": "feet",
    "inch": "inches",
    "century": "centuries",
    "hertz": "hertz",
    "kelvin": "kelvin",
    "siemens": "siemens",
    "lux": "lux",
    "degree_Celsius": "degrees Celsius",
    "degree_Fahrenheit": "degrees Fahrenheit",
    "degree_Rankine": "degrees Rankine",
}

_AMOUNT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def pluralize(name: str) -> str:
    if name in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[name]
    # "kilometer / hour" -> "kilometers / hour"
    head, sep, tail = name.partition(" / ")
    if sep:
        return f"{pluralize(head)}{sep}{tail}"
    word = head.replace("_", " ")
    if re.search(r"(s|x|z|ch|sh)$", word):
        return f"{word}es"
    if re.search(r"[^aeiou]y$", word):
        return f"{word[:-1]}ies"
    return f"{word}s"


@dataclass(frozen=True)
class UnitInfo:
    name: str
    plural: str
    abbr: str


@dataclass(frozen=True)
class Conversion:
    amount: str
    value: float
    unit_from: UnitInfo
    unit_to: UnitInfo

    def message(self) -> str:
        return (
            f"{self.amount} {self.unit_from.plural}({self.unit_from.abbr}) "
            f"is equal to {self.value:.6g} {self.unit_to.plural}({self.unit_to.abbr})."
        )


class UnitConverter:
    """Converts an amount between two units named the way people type them."""

    def __init__(self, registry: Optional[pint.UnitRegistry] = None):
        self.ureg = registry or pint.UnitRegistry()

    def describe(self, unit: str) -> UnitInfo:
        try:
            parsed = self.ureg.Unit(unit.strip())
        except Exception as e:
            raise ConversionError(f"Unknown unit: {unit!r}") from e
        name = str(parsed)
        if not name or name == "dimensionless":
            raise ConversionError(f"Unknown unit: {unit!r}")
        return UnitInfo(name=name, plural=pluralize(name), abbr=f"{parsed:~}")

    def convert(
        self,
        amount: Optional[str],
        unit_from: Optional[str],
        unit_to: Optional[str],
    ) -> Conversion:
        """
        Convert ``amount`` from ``unit_from`` to ``unit_to``.

        Raises:
            ConversionError: missing slot, non-numeric amount, unknown unit,
                or units of different dimensions
        """
        if not amount or not unit_from or not unit_to:
            raise ConversionError("Amount, source unit and target unit are required")
        amount = amount.strip()
        if not _AMOUNT_RE.match(amount):
            raise ConversionError(f"Not a number: {amount!r}")

        info_from = self.describe(unit_from)
        info_to = self.describe(unit_to)
        try:
            quantity = self.ureg.Quantity(float(amount), info_from.name)
            value = quantity.to(info_to.name).magnitude
        except Exception as e:
            raise ConversionError(
                f"Cannot convert {info_from.name} to {info_to.name}: {e}"
            ) from e

        logger.debug(f"Converted {amount} {info_from.name} -> {value} {info_to.name}")
        return Conversion(
            amount=amount,
            value=float(value),
            unit_from=info_from,
            unit_to=info_to,
        )
