"""Notation constants shared by the parsers."""

# Shift used to wash floating residue out of accumulated atom counts:
# (x + ROUNDOFF_SHIFT) - ROUNDOFF_SHIFT.
ROUNDOFF_SHIFT = 1e8

# Species names that denote a bare electron (no elements).
ELECTRON_PREFIXES = ("e-", "e[-]")

HYDRATE_SEPARATORS = "*:"
ANNOTATION_STARTS = "+-["
NUMBER_CHARACTERS = "0123456789."

# Row label used for the charge balance in formula matrices and residuals.
CHARGE_LABEL = "Z"
