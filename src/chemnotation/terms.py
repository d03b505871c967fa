"""Pair types produced by the parsers."""

from __future__ import annotations

from typing import NamedTuple


class ElementTerm(NamedTuple):
    symbol: str
    coefficient: float


class ReactionTerm(NamedTuple):
    """A species and its stoichiometric coefficient (negative for reactants)."""

    species: str
    coefficient: float
