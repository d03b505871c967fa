"""Chemical formula parsing.

A formula is scanned left to right and every element token contributes
``scalar * count`` atoms, where ``scalar`` is the multiplier context built up
by leading numbers and parenthesised groups. Supported notation:

- Element tokens with optional counts: ``H2O``, ``Ab2Xyz3``, ``C6H12O6``.
- Leading multipliers: ``2NaNO3*NH4NO3``.
- Nested groups with multipliers: ``CaMg(CO3)2``, ``(Ef(AbCd)3)2``.
- Hydrate/complex separators ``*`` and ``:``, which reset the multiplier:
  ``CaCl2*10H2O`` has 20 H, and so does ``2CaCl2*10H2O`` for the water part.
- Aggregate-state groups made of lowercase letters, such as ``(aq)`` or
  ``(cr)``, end the scan.
- Charge and bracket annotations starting with ``+``, ``-`` or ``[`` end the
  scan; they are read by :func:`chemnotation.charge.parse_charge`.
"""

from __future__ import annotations

import logging

from chemnotation.constants import (
    ANNOTATION_STARTS,
    ELECTRON_PREFIXES,
    HYDRATE_SEPARATORS,
    NUMBER_CHARACTERS,
    ROUNDOFF_SHIFT,
)
from chemnotation.errors import FormulaParseError
from chemnotation.terms import ElementTerm

logger = logging.getLogger(__name__)


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def cleanup_roundoff(value: float) -> float:
    """Remove floating residue from an accumulated coefficient.

    For example ``Na2SO4*(NH4)2SO4*4H2O`` may accumulate 15.99999998 atoms of
    H instead of 16. Applying the cleanup twice gives the same result as once.
    """
    return (value + ROUNDOFF_SHIFT) - ROUNDOFF_SHIFT


def _read_number(formula: str, begin: int, end: int) -> tuple[float, int]:
    """Read the number starting at ``begin``, defaulting to 1.0 if there is none."""
    stop = begin
    while stop < end and formula[stop] in NUMBER_CHARACTERS:
        stop += 1
    if stop == begin:
        return 1.0, begin
    digits = formula[begin:stop]
    try:
        return float(digits), stop
    except ValueError:
        raise FormulaParseError(
            f"Error while parsing chemical formula: {formula}. "
            f"Found the invalid number: {digits}",
            formula,
        ) from None


def _symbol_end(formula: str, begin: int, end: int) -> int:
    stop = begin + 1
    while stop < end and _is_lower(formula[stop]):
        stop += 1
    return stop


def _find_closing_parenthesis(formula: str, begin: int, end: int) -> int:
    depth = 0
    for index in range(begin + 1, end):
        if formula[index] == "(":
            depth += 1
        elif formula[index] == ")":
            depth -= 1
            if depth == -1:
                return index
    return -1


def parse_formula(formula: str) -> list[ElementTerm]:
    """Parse a chemical formula into element symbols and atom counts.

    Args:
        formula: Formula or species name, e.g. ``"CaCl2*10H2O"`` or ``"HCO3-"``.

    Returns:
        Element terms in order of first appearance, one per symbol.

    Raises:
        FormulaParseError: On a space, an unmatched parenthesis, a malformed
            number or any character outside the notation.

    Example:
        >>> parse_formula("Ca(OH)2")
        [ElementTerm(symbol='Ca', coefficient=1.0), ElementTerm(symbol='O', coefficient=2.0), ElementTerm(symbol='H', coefficient=2.0)]
    """
    if formula.startswith(ELECTRON_PREFIXES):
        return []

    counts: dict[str, float] = {}

    # Regions still to scan as (position, end, scalar); the top is scanned next.
    pending: list[tuple[int, int, float]] = [(0, len(formula), 1.0)]

    while pending:
        position, end, scalar = pending.pop()
        while position < end:
            char = formula[position]
            if char in NUMBER_CHARACTERS:
                number, position = _read_number(formula, position, end)
                scalar *= number
            elif _is_upper(char):
                stop = _symbol_end(formula, position, end)
                symbol = formula[position:stop]
                count, position = _read_number(formula, stop, end)
                counts[symbol] = counts.get(symbol, 0.0) + scalar * count
            elif char == "(":
                closing = _find_closing_parenthesis(formula, position, end)
                if closing < 0:
                    raise FormulaParseError(
                        f"Error while parsing chemical formula: {formula}. "
                        f"Found an unmatched parenthesis at position {position}.",
                        formula,
                    )
                group = formula[position + 1:closing]
                if all(_is_lower(c) for c in group):
                    logger.debug("Aggregate state (%s) ends formula %s", group, formula)
                    pending.clear()
                    break
                multiplier, after = _read_number(formula, closing + 1, end)
                pending.append((after, end, scalar))
                pending.append((position + 1, closing, scalar * multiplier))
                break
            elif char in HYDRATE_SEPARATORS:
                scalar = 1.0
                position += 1
            elif char in ANNOTATION_STARTS:
                pending.clear()
                break
            elif char == " ":
                raise FormulaParseError(
                    f"Error while parsing chemical formula: {formula}. "
                    "Space characters are not allowed.",
                    formula,
                )
            else:
                raise FormulaParseError(
                    f"Error while parsing chemical formula: {formula}. "
                    f"Found the invalid character: {char}",
                    formula,
                )

    return [ElementTerm(symbol, cleanup_roundoff(count)) for symbol, count in counts.items()]


def split_species_name_suffix(name: str) -> tuple[str, str]:
    """Split a trailing suffix group such as ``(aq)`` off a species name.

    >>> split_species_name_suffix("CaCO3(aq)")
    ('CaCO3', 'aq')
    >>> split_species_name_suffix("Ca(OH)")
    ('Ca(OH)', '')
    """
    if not name.endswith(")"):
        return name, ""
    depth = 0
    for index in range(len(name) - 2, -1, -1):
        if name[index] == ")":
            depth += 1
        elif name[index] == "(":
            if depth == 0:
                break
            depth -= 1
    else:
        return name, ""

    suffix = name[index + 1:-1]
    if index == 0 or any(_is_upper(c) for c in suffix):
        return name, ""
    return name[:index], suffix
