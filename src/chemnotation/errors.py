"""Exceptions raised by the notation parsers and the system helpers."""

from __future__ import annotations


class ChemicalNotationError(ValueError):
    """Base class for parse failures; ``text`` is the input that failed."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class FormulaParseError(ChemicalNotationError):
    pass


class ChargeParseError(ChemicalNotationError):
    pass


class EquationParseError(ChemicalNotationError):
    pass


class UnknownSpeciesError(KeyError):
    """A reaction refers to a species that was not supplied."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown species: {self.name}"


class ConfigError(ValueError):
    pass
