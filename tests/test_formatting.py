from decimal import Decimal
import unittest

from formatting import (
    clamp_percentage,
    format_euro,
    format_number,
    format_percent,
    round_half_up,
    to_decimal,
    to_int,
)


class ParsingTests(unittest.TestCase):
    def test_to_decimal_accepts_french_notation(self) -> None:
        self.assertEqual(to_decimal("1 234,5"), Decimal("1234.5"))
        self.assertEqual(to_decimal("12 000"), Decimal("12000"))
        self.assertEqual(to_decimal(Decimal("7.25")), Decimal("7.25"))
        self.assertEqual(to_decimal(format_number(1234567)), Decimal("1234567"))

    def test_to_decimal_falls_back_to_zero(self) -> None:
        for value in (None, "", "abc", True, "NaN", Decimal("Infinity")):
            with self.subTest(value=value):
                self.assertEqual(to_decimal(value), Decimal("0"))

    def test_to_int_truncates(self) -> None:
        self.assertEqual(to_int("12,9"), 12)
        self.assertEqual(to_int("oops"), 0)


class RoundingTests(unittest.TestCase):
    def test_round_half_up_rounds_away_from_zero(self) -> None:
        self.assertEqual(round_half_up(Decimal("2.5")), Decimal("3"))
        self.assertEqual(round_half_up(Decimal("-2.5")), Decimal("-3"))
        self.assertEqual(round_half_up(Decimal("1.25"), 1), Decimal("1.3"))

    def test_clamp_percentage(self) -> None:
        self.assertEqual(clamp_percentage(150), 100.0)
        self.assertEqual(clamp_percentage(-5), 0.0)
        self.assertEqual(clamp_percentage("42,5"), 42.5)


class DisplayTests(unittest.TestCase):
    def test_format_euro_uses_narrow_space_thousands_and_comma_decimals(self) -> None:
        self.assertEqual(format_euro(1234567), "1\u202f234\u202f567 €")
        self.assertEqual(format_euro(Decimal("1234.5"), 2), "1\u202f234,50 €")

    def test_format_percent(self) -> None:
        self.assertEqual(format_percent(Decimal("12.345")), "12,3 %")
        self.assertEqual(format_percent(85, 0), "85 %")
        self.assertEqual(format_percent(None), "—")

    def test_format_number(self) -> None:
        self.assertEqual(format_number("1500.25", 1), "1\u202f500,3")
        self.assertEqual(format_number(42), "42")
