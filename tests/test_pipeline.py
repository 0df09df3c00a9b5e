import unittest
from datetime import datetime
from pathlib import Path

from bank_import import (
    FieldCountMismatch,
    NoLines,
    ParseOptions,
    TypedValue,
    ValueType,
    parse,
)
from bank_import.loader import load_text

ROOT = Path(__file__).resolve().parents[1]
SAMPLES = ROOT / "sample-data"

STATEMENT = (
    "Date,Amount,Balance,Description\n"
    "2023-01-05,-12.50,100.00,Coffee Shop\n"
    "2023-01-06,50.00,150.00,Salary"
)


def parse_sample(name: str, **option_overrides):
    text = load_text(SAMPLES / name)["text"]
    return parse(text, ParseOptions(**option_overrides))


class ParseScenarioTests(unittest.TestCase):
    def test_comma_statement_with_header(self):
        result = parse(STATEMENT)

        self.assertEqual(result.separator, ",")
        self.assertEqual(result.header, ["Date", "Amount", "Balance", "Description"])
        self.assertEqual(len(result.records), 2)
        self.assertEqual(result.num_columns, 4)
        self.assertEqual(
            result.column_guesses.to_dict(),
            {"date": 0, "amount": 1, "balance": 2, "description": 3},
        )
        self.assertEqual(
            result.typed_records[0],
            [
                TypedValue.date(datetime(2023, 1, 5)),
                TypedValue.number(-12.5),
                TypedValue.number(100.0),
                TypedValue.text("Coffee Shop"),
            ],
        )

    def test_semicolon_statement_with_european_numbers(self):
        result = parse("05.01.2023;-12,50;100,00;Kaffee")

        self.assertEqual(result.separator, ";")
        self.assertIsNone(result.header)
        self.assertEqual(result.typed_records[0][1], TypedValue.number(-12.5))
        self.assertEqual(result.typed_records[0][0], TypedValue.date(datetime(2023, 1, 5)))
        self.assertEqual(result.column_guesses.amount, 1)

    def test_strict_mode_rejects_ragged_input(self):
        with self.assertRaises(FieldCountMismatch) as ctx:
            parse("a,b\nc,d,e", ParseOptions(strict=True))
        self.assertEqual(ctx.exception.line_number, 2)
        self.assertEqual((ctx.exception.expected, ctx.exception.found), (2, 3))

    def test_lenient_mode_pads_ragged_input(self):
        result = parse("alpha,beta\ngamma,delta,epsilon")
        self.assertIsNone(result.header)
        self.assertEqual(result.num_columns, 3)
        self.assertEqual(
            result.records,
            [["alpha", "beta", ""], ["gamma", "delta", "epsilon"]],
        )

    def test_empty_input(self):
        for text in ["", "\n\n", "  \r\n  "]:
            with self.subTest(text=text):
                with self.assertRaises(NoLines):
                    parse(text)

    def test_single_numeric_column_is_amount(self):
        result = parse("12.50\n-3.25\n7.00")

        self.assertIsNone(result.header)
        self.assertEqual(result.column_guesses.amount, 0)
        self.assertIsNone(result.column_guesses.balance)


    def test_month_name_descriptions_stay_text(self):
        result = parse("2023-01-05,-1.50,May\n2023-01-06,-2.50,June")

        self.assertEqual(
            result.column_types,
            [ValueType.DATE, ValueType.NUMBER, ValueType.TEXT],
        )
        self.assertEqual(result.column_guesses.date, 0)
        self.assertEqual(result.column_guesses.description, 2)


class ParseResultShapeTests(unittest.TestCase):
    def test_header_row_is_removed_from_records(self):
        result = parse(STATEMENT)
        self.assertNotIn(result.header, result.records)
        self.assertEqual(len(result.records), len(result.typed_records))

    def test_every_record_has_num_columns_fields(self):
        result = parse("a,b\nc\nd,e,f\n")
        for record, typed in zip(result.records, result.typed_records):
            self.assertEqual(len(record), result.num_columns)
            self.assertEqual(len(typed), result.num_columns)

    def test_to_dict_keys(self):
        payload = parse(STATEMENT).to_dict()
        self.assertEqual(
            set(payload),
            {"header", "records", "typed_records", "num_columns", "column_types", "column_guesses"},
        )
        self.assertEqual(payload["column_types"], ["date", "number", "number", "text"])
        self.assertEqual(payload["typed_records"][0][0], "2023-01-05T00:00:00")
        self.assertEqual(set(payload["column_guesses"]), {"date", "amount", "balance", "description"})

    def test_header_warning(self):
        self.assertIn("First row treated as a header", parse(STATEMENT).warnings)
        self.assertEqual(parse("12.50\n7.00").warnings, [])

    def test_keyword_matching_switch(self):
        text = (
            "Date,Balance,Amount\n"
            "2023-01-05,100.50,-12.50\n"
            "2023-01-06,150.50,50.25"
        )
        with_keywords = parse(text).column_guesses
        without_keywords = parse(text, ParseOptions(header_keyword_matching=False)).column_guesses

        self.assertEqual((with_keywords.amount, with_keywords.balance), (2, 1))
        self.assertEqual((without_keywords.amount, without_keywords.balance), (1, 2))


class SampleStatementTests(unittest.TestCase):
    def test_uk_statement(self):
        for keywords in (True, False):
            with self.subTest(keywords=keywords):
                result = parse_sample("uk_statement.csv", header_keyword_matching=keywords)
                self.assertEqual(result.separator, ",")
                self.assertEqual(result.header, ["Date", "Description", "Value", "Balance"])
                self.assertEqual(result.records[0][1], "COFFEE SHOP, HIGH ST")
                self.assertEqual(result.typed_records[0][3], TypedValue.number(1087.5))
                self.assertEqual(
                    result.column_guesses.to_dict(),
                    {"date": 0, "amount": 2, "balance": 3, "description": 1},
                )

    def test_de_statement(self):
        result = parse_sample("de_statement.csv")

        self.assertEqual(result.separator, ";")
        self.assertEqual(result.header[0], "Buchungstag")
        self.assertEqual(result.typed_records[1][2], TypedValue.number(2500.0))
        self.assertEqual(
            result.column_guesses.to_dict(),
            {"date": 0, "amount": 2, "balance": 3, "description": 1},
        )

    def test_headerless_tab_statement(self):
        result = parse_sample("no_header.tsv")

        self.assertEqual(result.separator, "\t")
        self.assertIsNone(result.header)
        self.assertEqual(len(result.records), 3)
        self.assertEqual(
            result.column_guesses.to_dict(),
            {"date": 0, "amount": 2, "balance": 1, "description": 3},
        )

    def test_ragged_statement_lenient(self):
        result = parse_sample("ragged.csv")

        self.assertEqual(result.num_columns, 4)
        self.assertEqual(result.header, ["Date", "Description", "Amount", ""])
        self.assertEqual(
            result.column_types,
            [ValueType.DATE, ValueType.TEXT, None, None],
        )
        self.assertIsNone(result.column_guesses.amount)
        self.assertEqual(result.column_guesses.description, 1)
        self.assertIn("Padded 3 short record(s) to 4 fields", result.warnings)

    def test_ragged_statement_strict(self):
        with self.assertRaises(FieldCountMismatch) as ctx:
            parse_sample("ragged.csv", strict=True)
        self.assertEqual(ctx.exception.line_number, 3)
        self.assertEqual((ctx.exception.expected, ctx.exception.found), (3, 4))


if __name__ == "__main__":
    unittest.main()
