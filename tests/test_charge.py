import unittest

from chemnotation.charge import (
    charge_from_bracketed_number,
    charge_from_sign_number,
    charge_from_trailing_signs,
    parse_charge,
)
from chemnotation.errors import ChargeParseError


class TestParseCharge(unittest.TestCase):
    def test_trailing_signs(self):
        self.assertEqual(parse_charge("Fe+++"), 3.0)
        self.assertEqual(parse_charge("SO4--"), -2.0)
        self.assertEqual(parse_charge("Na+"), 1.0)
        self.assertEqual(parse_charge("Cl-"), -1.0)

    def test_sign_then_number(self):
        self.assertEqual(parse_charge("CO3-2"), -2.0)
        self.assertEqual(parse_charge("Ca+2"), 2.0)

    def test_brackets(self):
        self.assertEqual(parse_charge("Fe[+3]"), 3.0)
        self.assertEqual(parse_charge("Fe[3+]"), 3.0)
        self.assertEqual(parse_charge("SO4[2-]"), -2.0)
        self.assertEqual(parse_charge("e[-]"), -1.0)

    def test_neutral(self):
        self.assertEqual(parse_charge("H2O"), 0.0)
        self.assertEqual(parse_charge(""), 0.0)
        self.assertEqual(parse_charge("CaCO3(aq)"), 0.0)

    def test_suffix_is_ignored(self):
        self.assertEqual(parse_charge("Fe+++(aq)"), 3.0)
        self.assertEqual(parse_charge("CO3-2(aq)"), -2.0)

    def test_electron(self):
        self.assertEqual(parse_charge("e-"), -1.0)

    def test_later_sign_wins(self):
        self.assertEqual(parse_charge("X-+2"), 2.0)
        self.assertEqual(parse_charge("X+-2"), -2.0)

    def test_sign_without_number_is_rejected(self):
        with self.assertRaises(ChargeParseError) as context:
            parse_charge("Na+x")
        self.assertIn("Na+x", str(context.exception))

    def test_bracket_without_number_is_rejected(self):
        with self.assertRaises(ChargeParseError):
            parse_charge("Fe[a+]")


class TestChargeModes(unittest.TestCase):
    def test_modes_fall_through_with_zero(self):
        self.assertEqual(charge_from_trailing_signs("Fe[+3]"), 0.0)
        self.assertEqual(charge_from_bracketed_number("Fe[+3]"), 0.0)
        self.assertEqual(charge_from_sign_number("Fe[+3]"), 3.0)

    def test_sign_number_without_signs(self):
        self.assertEqual(charge_from_sign_number("CaCO3"), 0.0)


if __name__ == '__main__':
    unittest.main()
