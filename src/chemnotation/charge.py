"""Electric charge parsing from species names.

Three notations are recognised, tried in this order:

1. Repeated trailing signs: ``Fe+++`` (+3), ``SO4--`` (-2).
2. Number and sign inside trailing brackets: ``Fe[3+]`` (+3), ``e[-]`` (-1).
3. A sign followed by a number: ``CO3-2`` (-2), ``Fe[+3]`` (+3), ``Na+`` (+1).

A trailing suffix group such as ``(aq)`` is ignored.
"""

from __future__ import annotations

import logging
import re

from chemnotation.errors import ChargeParseError
from chemnotation.formula import split_species_name_suffix

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _sign_value(char: str) -> float:
    if char == "+":
        return 1.0
    if char == "-":
        return -1.0
    return 0.0


def charge_from_trailing_signs(formula: str) -> float:
    if not formula:
        return 0.0
    sign = _sign_value(formula[-1])
    if sign == 0.0:
        return 0.0
    count = len(formula) - len(formula.rstrip(formula[-1]))
    return count * sign


def charge_from_bracketed_number(formula: str) -> float:
    if not formula.endswith("]"):
        return 0.0
    opening = formula.rfind("[")
    if opening < 0:
        return 0.0
    sign = _sign_value(formula[-2])
    if sign == 0.0:
        return 0.0
    digits = formula[opening + 1:-2]
    if not digits:
        return sign
    try:
        return sign * float(digits)
    except ValueError:
        raise ChargeParseError(
            f"Cannot parse the electric charge in `{formula}`: "
            f"`{digits}` is not a number.",
            formula,
        ) from None


def charge_from_sign_number(formula: str) -> float:
    index = max(formula.rfind("+"), formula.rfind("-"))
    if index < 0:
        return 0.0
    sign = _sign_value(formula[index])
    if index == len(formula) - 1:
        return sign
    match = _LEADING_NUMBER.match(formula, index + 1)
    if match is None:
        raise ChargeParseError(
            f"Cannot parse the electric charge in `{formula}`: "
            f"expecting a number after `{formula[index]}`.",
            formula,
        )
    return sign * float(match.group())


_MODES = (
    charge_from_trailing_signs,
    charge_from_bracketed_number,
    charge_from_sign_number,
)


def parse_charge(formula: str) -> float:
    """Return the electric charge encoded in a species name, 0.0 if none."""
    name, _ = split_species_name_suffix(formula)
    for mode in _MODES:
        charge = mode(name)
        if charge != 0.0:
            logger.debug("Charge of %s is %g (%s)", formula, charge, mode.__name__)
            return charge
    return 0.0
