import unittest

import numpy as np

from chemnotation.errors import UnknownSpeciesError
from chemnotation.models import ChemicalFormula, Reaction, Species
from chemnotation.system import balance_residual, element_symbols, formula_matrix, is_balanced


class TestFormulaMatrix(unittest.TestCase):
    def test_elements_in_first_order(self):
        self.assertEqual(element_symbols(["H2O", "CO2", "CaCO3"]), ["H", "O", "C", "Ca"])

    def test_matrix(self):
        matrix = formula_matrix(["H2O", "H2", "O2"])
        np.testing.assert_array_equal(matrix, [[2.0, 2.0, 0.0], [1.0, 0.0, 2.0]])

    def test_matrix_with_charge_row(self):
        matrix = formula_matrix(["Na+", "Cl-", "NaCl"], include_charge=True)
        np.testing.assert_array_equal(
            matrix,
            [[1.0, 0.0, 1.0], [0.0, 1.0, 1.0], [1.0, -1.0, 0.0]],
        )

    def test_explicit_elements_and_mixed_inputs(self):
        species = [Species.from_name("H2O(l)"), ChemicalFormula.parse("OH-"), "e-"]
        matrix = formula_matrix(species, elements=["O", "H", "N"], include_charge=True)
        self.assertEqual(matrix.shape, (4, 3))
        np.testing.assert_array_equal(matrix[:, 1], [1.0, 1.0, 0.0, -1.0])
        np.testing.assert_array_equal(matrix[:, 2], [0.0, 0.0, 0.0, -1.0])


class TestBalance(unittest.TestCase):
    def setUp(self):
        self.species = {
            name: Species.from_name(name)
            for name in ["H2(g)", "O2(g)", "H2O(l)", "NaCl(s)", "Na+", "Cl-"]
        }

    def test_balanced_reaction(self):
        reaction = Reaction.from_equation("2*H2(g) + O2(g) = 2*H2O(l)")
        self.assertTrue(is_balanced(reaction, self.species))
        self.assertEqual(balance_residual(reaction, self.species), {"H": 0.0, "O": 0.0, "Z": 0.0})

    def test_unbalanced_reaction(self):
        reaction = Reaction.from_equation("H2(g) + O2(g) = H2O(l)")
        self.assertFalse(is_balanced(reaction, self.species))
        self.assertEqual(balance_residual(reaction, self.species)["O"], -1.0)

    def test_charge_balance(self):
        reaction = Reaction.from_equation("NaCl(s) = Na+ + Cl-")
        self.assertTrue(is_balanced(reaction, self.species))
        ionisation = Reaction.from_equation("Na = Na+")
        species = {"Na": "Na", "Na+": "Na+"}
        self.assertFalse(is_balanced(ionisation, species))
        self.assertTrue(is_balanced(ionisation, species, include_charge=False))

    def test_formula_strings_as_species(self):
        reaction = Reaction.from_equation("CaCO3 = CaO + CO2")
        species = {"CaCO3": "CaCO3", "CaO": "CaO", "CO2": "CO2"}
        self.assertTrue(is_balanced(reaction, species))

    def test_unknown_species(self):
        reaction = Reaction.from_equation("H2(g) + Cl2 = 2*HCl")
        with self.assertRaises(UnknownSpeciesError) as context:
            balance_residual(reaction, self.species)
        self.assertEqual(context.exception.name, "Cl2")


if __name__ == '__main__':
    unittest.main()
