import unittest
from datetime import date

from nextdns_logs.errors import InvalidTimeExpression
from nextdns_logs.time_expr import TimeKind, parse_time_expression


class TestTimeExpression(unittest.TestCase):
    def test_accepts_relative_offsets(self):
        for text, amount, unit in [("-1h", 1, "h"), ("-3d", 3, "d"), ("-999m", 999, "m"), ("-30s", 30, "s")]:
            expr = parse_time_expression(text)
            self.assertEqual(expr.kind, TimeKind.RELATIVE)
            self.assertEqual(expr.amount, amount)
            self.assertEqual(expr.unit, unit)
            self.assertEqual(str(expr), text)

    def test_accepts_now(self):
        expr = parse_time_expression("now")
        self.assertEqual(expr.kind, TimeKind.NOW)
        self.assertEqual(str(expr), "now")

    def test_accepts_calendar_date(self):
        expr = parse_time_expression("2022-09-01")
        self.assertEqual(expr.kind, TimeKind.DATE)
        self.assertEqual(expr.day, date(2022, 9, 1))
        self.assertEqual(str(expr), "2022-09-01")

    def test_rejects_everything_else(self):
        bad = [
            "",
            "1h",
            "-1",
            "-1000h",
            "-1hh",
            "-1H",
            "+1h",
            "Now",
            "yesterday",
            "2022-9-1",
            "22-09-01",
            "2022-09-01T00:00:00",
            "x-1h",
            "nowhere",
            " now",
            "now\n",
            " now\n",
            "\t-1h ",
            "2022-09-01 ",
        ]
        for text in bad:
            with self.subTest(text=text):
                with self.assertRaises(InvalidTimeExpression):
                    parse_time_expression(text)

    def test_rejects_impossible_dates(self):
        with self.assertRaises(InvalidTimeExpression):
            parse_time_expression("2022-13-01")
        with self.assertRaises(InvalidTimeExpression):
            parse_time_expression("2022-02-30")


if __name__ == "__main__":
    unittest.main()
