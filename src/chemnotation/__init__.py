"""chemnotation core package."""

from chemnotation.charge import parse_charge
from chemnotation.errors import (
    ChargeParseError,
    ChemicalNotationError,
    EquationParseError,
    FormulaParseError,
    UnknownSpeciesError,
)
from chemnotation.formula import cleanup_roundoff, parse_formula, split_species_name_suffix
from chemnotation.models import ChemicalFormula, Reaction, Species
from chemnotation.reaction import (
    parse_number_string_pairs,
    parse_reaction_equation,
    parse_tagged_terms,
)
from chemnotation.system import balance_residual, formula_matrix, is_balanced
from chemnotation.terms import ElementTerm, ReactionTerm

__all__ = [
    "ChargeParseError",
    "ChemicalFormula",
    "ChemicalNotationError",
    "ElementTerm",
    "EquationParseError",
    "FormulaParseError",
    "Reaction",
    "ReactionTerm",
    "Species",
    "UnknownSpeciesError",
    "balance_residual",
    "cleanup_roundoff",
    "formula_matrix",
    "is_balanced",
    "parse_charge",
    "parse_formula",
    "parse_number_string_pairs",
    "parse_reaction_equation",
    "parse_tagged_terms",
    "split_species_name_suffix",
]
