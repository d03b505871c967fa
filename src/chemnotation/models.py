"""Data structures for formulas, species and reactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from chemnotation.charge import parse_charge
from chemnotation.formula import parse_formula, split_species_name_suffix
from chemnotation.reaction import parse_reaction_equation

AGGREGATE_STATES = {
    "aq": "aqueous",
    "g": "gas",
    "l": "liquid",
    "s": "solid",
    "cr": "solid",
}


@dataclass(frozen=True)
class ChemicalFormula:
    """Element counts and charge parsed from a formula string.

    Attributes:
        formula: The text the formula was parsed from.
        elements: Atom count per element symbol, in order of first appearance.
        charge: Electric charge.

    Instances compare by value but are unhashable, since ``elements`` is a dict.
    """

    formula: str
    elements: Mapping[str, float]
    charge: float = 0.0

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def parse(cls, formula: str) -> ChemicalFormula:
        return cls(
            formula=formula,
            elements=dict(parse_formula(formula)),
            charge=parse_charge(formula),
        )

    def symbols(self) -> list[str]:
        return list(self.elements)

    def coefficient(self, symbol: str) -> float:
        return self.elements.get(symbol, 0.0)

    def equivalent(self, other: ChemicalFormula | str) -> bool:
        """Check whether both formulas have the same atoms and charge.

        ``CaCO3`` and ``Ca(CO3)`` are equivalent, ``CO3--`` and ``CO3-2`` too.
        """
        if isinstance(other, str):
            other = ChemicalFormula.parse(other)
        mine = {s: c for s, c in self.elements.items() if c != 0.0}
        theirs = {s: c for s, c in other.elements.items() if c != 0.0}
        return mine == theirs and self.charge == other.charge

    def __str__(self) -> str:
        return self.formula


@dataclass(frozen=True)
class Species:
    name: str
    formula: str
    phase: str = ""

    @classmethod
    def from_name(cls, name: str, phase: str | None = None) -> Species:
        """Build a species whose formula is its name without the state suffix.

        ``H2O(l)`` gets formula ``H2O`` and phase ``liquid``; unknown suffixes
        are kept verbatim as the phase.
        """
        formula, suffix = split_species_name_suffix(name)
        if phase is None:
            phase = AGGREGATE_STATES.get(suffix, suffix)
        return cls(name=name, formula=formula, phase=phase)

    @property
    def chemical_formula(self) -> ChemicalFormula:
        return ChemicalFormula.parse(self.formula)

    @property
    def elements(self) -> dict[str, float]:
        return dict(parse_formula(self.formula))

    @property
    def charge(self) -> float:
        return parse_charge(self.formula)


@dataclass(frozen=True)
class Reaction:
    name: str
    stoichiometry: Mapping[str, float]
    reversible: bool = False

    # Unhashable: stoichiometry is a dict.
    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def from_equation(
        cls, equation: str, name: str | None = None, reversible: bool = False
    ) -> Reaction:
        """Build a reaction from ``reactants = products`` text.

        Species appearing on both sides are netted into one coefficient.
        """
        stoichiometry: dict[str, float] = {}
        for species, coefficient in parse_reaction_equation(equation):
            stoichiometry[species] = stoichiometry.get(species, 0.0) + coefficient
        return cls(name=name or equation, stoichiometry=stoichiometry, reversible=reversible)

    @property
    def reactants(self) -> dict[str, float]:
        return {s: -c for s, c in self.stoichiometry.items() if c < 0.0}

    @property
    def products(self) -> dict[str, float]:
        return {s: c for s, c in self.stoichiometry.items() if c > 0.0}
