"""Reaction equation and tagged term list parsing."""

from __future__ import annotations

import logging
import re
from typing import Iterator

from chemnotation.errors import EquationParseError
from chemnotation.terms import ReactionTerm

logger = logging.getLogger(__name__)

_COEFFICIENT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _to_float(value: str, token: str, text: str) -> float:
    if _COEFFICIENT.fullmatch(value) is None:
        raise EquationParseError(
            f"Cannot parse `{text}`: the coefficient `{value}` in `{token}` "
            "is not a number.",
            text,
        )
    return float(value)


def _split_tagged(token: str, text: str) -> ReactionTerm:
    coefficient, separator, species = token.partition(":")
    if not separator or not species:
        raise EquationParseError(
            f"Cannot parse `{text}`: expecting `coefficient:species` "
            f"but found `{token}`.",
            text,
        )
    return ReactionTerm(species, _to_float(coefficient, token, text))


def parse_tagged_terms(text: str) -> list[ReactionTerm]:
    """Parse a list such as ``"-1:H2O 1:H+ 1:OH-"`` without merging repeats.

    Each term is returned as ``(species, coefficient)``, the same order as
    :func:`parse_reaction_equation`, even though the text puts the
    coefficient first.
    """
    return [_split_tagged(token, text) for token in text.split()]


def parse_number_string_pairs(text: str) -> dict[str, float]:
    """Parse ``coefficient:species`` tokens, summing repeated species.

    >>> parse_number_string_pairs("1:Na 2:Cl 1:Na")
    {'Na': 2.0, 'Cl': 2.0}
    """
    pairs: dict[str, float] = {}
    for token in text.split():
        species, coefficient = _split_tagged(token, text)
        pairs[species] = pairs.get(species, 0.0) + coefficient
    return pairs


def _side_terms(side: str, equation: str) -> Iterator[tuple[str, float]]:
    for token in side.split():
        if token == "+":
            continue
        head, separator, tail = token.partition("*")
        # Only a numeric head is a coefficient; CaCl2*2H2O is a species name.
        if separator and _COEFFICIENT.fullmatch(head):
            if not tail:
                raise EquationParseError(
                    f"Cannot parse the reaction equation `{equation}`: "
                    f"missing species name after `{token}`.",
                    equation,
                )
            yield tail, float(head)
            continue
        yield token, 1.0


def parse_reaction_equation(equation: str) -> list[ReactionTerm]:
    """Parse ``reactants = products`` into signed stoichiometric terms.

    Reactant coefficients are negated. An equation without ``=`` has reactants
    only. Repeated species are kept as separate terms.

    Args:
        equation: e.g. ``"2*H2 + O2 = 2*H2O"``.

    Returns:
        Terms in the order they appear, reactants first.

    Raises:
        EquationParseError: If more than one ``=`` is present.
    """
    sides = equation.split("=")
    if len(sides) > 2:
        raise EquationParseError(
            f"Cannot parse the reaction equation `{equation}`. Expecting an "
            "equation with at most a single equal sign `=` separating "
            "reactants from products.",
            equation,
        )
    reactants = sides[0]
    products = sides[1] if len(sides) == 2 else ""

    terms = [ReactionTerm(species, -number) for species, number in _side_terms(reactants, equation)]
    terms += [ReactionTerm(species, number) for species, number in _side_terms(products, equation)]
    logger.debug("Parsed %d terms from %s", len(terms), equation)
    return terms
