"""Formula matrices and reaction balance checks over parsed species.

The formula matrix ``A`` has one row per element (plus an optional charge row)
and one column per species, so for a reaction with coefficients ``nu`` the
residual ``A @ nu`` is zero exactly when the reaction conserves atoms and
charge.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence, Union

import numpy as np

from chemnotation.constants import CHARGE_LABEL
from chemnotation.errors import UnknownSpeciesError
from chemnotation.formula import cleanup_roundoff
from chemnotation.models import ChemicalFormula, Reaction, Species

logger = logging.getLogger(__name__)

SpeciesLike = Union[Species, ChemicalFormula, str]


def as_formula(item: SpeciesLike) -> ChemicalFormula:
    if isinstance(item, ChemicalFormula):
        return item
    if isinstance(item, Species):
        return item.chemical_formula
    return ChemicalFormula.parse(item)


def element_symbols(species: Iterable[SpeciesLike]) -> list[str]:
    """Element symbols across all species, in order of first appearance."""
    symbols: dict[str, None] = {}
    for item in species:
        for symbol in as_formula(item).elements:
            symbols.setdefault(symbol)
    return list(symbols)


def formula_matrix(
    species: Sequence[SpeciesLike],
    elements: Sequence[str] | None = None,
    include_charge: bool = False,
) -> np.ndarray:
    """Build the element-by-species formula matrix.

    Args:
        species: Species, parsed formulas or formula strings (the columns).
        elements: Row order; defaults to :func:`element_symbols` of ``species``.
        include_charge: Append a final row with the species charges.

    Returns:
        Array of shape ``(len(elements) + include_charge, len(species))``.
    """
    formulas = [as_formula(item) for item in species]
    if elements is None:
        elements = element_symbols(formulas)

    rows = len(elements) + (1 if include_charge else 0)
    matrix = np.zeros((rows, len(formulas)))
    for column, formula in enumerate(formulas):
        for row, symbol in enumerate(elements):
            matrix[row, column] = formula.coefficient(symbol)
        if include_charge:
            matrix[-1, column] = formula.charge
    return matrix


def balance_residual(
    reaction: Reaction,
    species: Mapping[str, SpeciesLike],
    include_charge: bool = True,
) -> dict[str, float]:
    """Net amount of each element (and charge, under ``"Z"``) a reaction creates."""
    names = list(reaction.stoichiometry)
    for name in names:
        if name not in species:
            raise UnknownSpeciesError(name)

    formulas = [as_formula(species[name]) for name in names]
    symbols = element_symbols(formulas)
    matrix = formula_matrix(formulas, symbols, include_charge=include_charge)
    coefficients = np.array([reaction.stoichiometry[name] for name in names], dtype=float)

    residual = matrix @ coefficients
    labels = symbols + ([CHARGE_LABEL] if include_charge else [])
    return {label: cleanup_roundoff(float(value)) for label, value in zip(labels, residual)}


def is_balanced(
    reaction: Reaction,
    species: Mapping[str, SpeciesLike],
    include_charge: bool = True,
    atol: float = 1e-10,
) -> bool:
    residual = balance_residual(reaction, species, include_charge=include_charge)
    balanced = bool(np.allclose(list(residual.values()), 0.0, rtol=0.0, atol=atol))
    if not balanced:
        logger.debug("Reaction %s is unbalanced: %s", reaction.name, residual)
    return balanced
