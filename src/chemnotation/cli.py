"""Command-line entrypoints for chemnotation."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, Dict, Iterator

import typer

from chemnotation.charge import parse_charge
from chemnotation.constants import CHARGE_LABEL
from chemnotation.errors import ChemicalNotationError, ConfigError, UnknownSpeciesError
from chemnotation.models import ChemicalFormula, Reaction, Species
from chemnotation.reaction import (
    parse_number_string_pairs,
    parse_reaction_equation,
    parse_tagged_terms,
)
from chemnotation.system import balance_residual, element_symbols, formula_matrix, is_balanced

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)


@contextmanager
def _exit_on_error() -> Iterator[None]:
    try:
        yield
    except (ChemicalNotationError, ConfigError, UnknownSpeciesError) as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=1) from error


def _parse_species(data: Dict[str, Any]) -> Dict[str, Species]:
    entries = data.get("species")
    if isinstance(entries, list):
        for name in entries:
            if not isinstance(name, str):
                raise ConfigError(f"Species names must be strings, found {name!r}.")
        return {name: Species.from_name(name) for name in entries}
    if isinstance(entries, dict):
        species = {}
        for name, formula in entries.items():
            if not isinstance(formula, str):
                raise ConfigError(f"Formula of species `{name}` must be a string, found {formula!r}.")
            # The state suffix may sit on the formula or on the name.
            parsed = Species.from_name(formula)
            phase = parsed.phase or Species.from_name(name).phase
            species[name] = Species(name=name, formula=parsed.formula, phase=phase)
        return species
    raise ConfigError("Configuration key `species` must be a list of names or a name-to-formula object.")


def _parse_reactions(data: Dict[str, Any]) -> Dict[str, Reaction]:
    entries = data.get("reactions", {})
    if not isinstance(entries, dict):
        raise ConfigError("Configuration key `reactions` must be a name-to-equation object.")
    return {
        name: Reaction.from_equation(str(equation), name=name)
        for name, equation in entries.items()
    }


def build_report(config: Dict[str, Any]) -> Dict[str, Any]:
    """Parse the species and reactions of a configuration into a JSON-ready report."""
    if not isinstance(config, dict):
        raise ConfigError("Configuration must be a JSON object.")
    species = _parse_species(config)
    reactions = _parse_reactions(config)
    include_charge = bool(config.get("include_charge", True))
    try:
        atol = float(config.get("atol", 1e-10))
    except (TypeError, ValueError):
        raise ConfigError(f"Configuration key `atol` must be a number, found {config['atol']!r}.") from None

    members = list(species.values())
    symbols = element_symbols(members)
    matrix = formula_matrix(members, symbols, include_charge=include_charge)

    report: Dict[str, Any] = {
        "species": {},
        "elements": symbols + ([CHARGE_LABEL] if include_charge else []),
        "formula_matrix": matrix.tolist(),
        "reactions": {},
    }
    for name, s in species.items():
        report["species"][name] = {
            "formula": s.formula,
            "phase": s.phase,
            "elements": s.elements,
            "charge": s.charge,
        }
    for name, reaction in reactions.items():
        report["reactions"][name] = {
            "stoichiometry": dict(reaction.stoichiometry),
            "residual": balance_residual(reaction, species, include_charge=include_charge),
            "balanced": is_balanced(reaction, species, include_charge=include_charge, atol=atol),
        }
    return report


def _load_config(config_file: Path) -> Any:
    with open(config_file, "r") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as error:
            raise ConfigError(f"Configuration file {config_file} is not valid JSON: {error}") from error


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log parser decisions.")
    ] = False,
) -> None:
    """Parse chemical formulas, charges and reaction equations."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger("chemnotation").setLevel(level)


@app.command()
def formula(
    text: Annotated[str, typer.Argument(help="Chemical formula or species name.")],
) -> None:
    """Print the elements and charge of a formula."""
    with _exit_on_error():
        parsed = ChemicalFormula.parse(text)
    payload = {
        "formula": parsed.formula,
        "elements": dict(parsed.elements),
        "charge": parsed.charge,
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def charge(
    text: Annotated[str, typer.Argument(help="Species name carrying a charge.")],
) -> None:
    """Print the electric charge of a species name."""
    with _exit_on_error():
        value = parse_charge(text)
    typer.echo(repr(value))


@app.command()
def equation(
    text: Annotated[str, typer.Argument(help="Equation such as '2*H2 + O2 = 2*H2O'.")],
) -> None:
    """Print the signed species coefficients of a reaction equation."""
    with _exit_on_error():
        parsed = parse_reaction_equation(text)
    typer.echo(json.dumps([list(term) for term in parsed], indent=2))


@app.command()
def terms(
    text: Annotated[str, typer.Argument(help="Tagged list such as '-1:H2O 1:H+ 1:OH-'.")],
) -> None:
    """Print the terms of a tagged list as given."""
    with _exit_on_error():
        parsed = parse_tagged_terms(text)
    typer.echo(json.dumps([list(term) for term in parsed], indent=2))


@app.command()
def pairs(
    text: Annotated[str, typer.Argument(help="Tagged list such as '1:Na 2:Cl 1:Na'.")],
) -> None:
    """Print a tagged list with repeated species summed."""
    with _exit_on_error():
        parsed = parse_number_string_pairs(text)
    typer.echo(json.dumps(parsed, indent=2))


@app.command()
def check(
    config_file: Annotated[
        Path, typer.Argument(help="Path to JSON configuration file.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
) -> None:
    """Parse species and check reaction balances from a config file."""
    with _exit_on_error():
        report = build_report(_load_config(config_file))

    unbalanced = [name for name, r in report["reactions"].items() if not r["balanced"]]
    if unbalanced:
        logger.warning("Unbalanced reactions: %s", ", ".join(unbalanced))

    json_output = json.dumps(report, indent=2)
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)
