import unittest

from bank_import.options import ParseOptions
from bank_import.tokenizer import (
    detect_separator,
    split_lines,
    strip_quoted,
    tokenize,
    tokenize_line,
)


class SplitLinesTests(unittest.TestCase):
    def test_crlf_and_lf_are_both_line_breaks(self):
        self.assertEqual(split_lines("a,b\r\nc,d\ne,f"), ["a,b", "c,d", "e,f"])

    def test_lines_are_trimmed_and_blank_lines_dropped(self):
        self.assertEqual(split_lines("  a,b  \n\n   \n\tc,d\n"), ["a,b", "c,d"])

    def test_empty_input_gives_no_lines(self):
        self.assertEqual(split_lines(""), [])


class SeparatorDetectionTests(unittest.TestCase):
    def test_semicolon_wins_when_most_frequent(self):
        self.assertEqual(detect_separator(["05.01.2023;-12,50;100,00;Kaffee"]), ";")

    def test_tab_is_detected(self):
        self.assertEqual(detect_separator(["a\tb\tc", "d\te\tf"]), "\t")

    def test_separators_inside_quotes_are_ignored(self):
        lines = ['"a;b;c;d",x,y', "'e;f;g',z"]
        self.assertEqual(detect_separator(lines), ",")

    def test_ties_go_to_the_earlier_candidate(self):
        self.assertEqual(detect_separator(["a,b;c"]), ",")
        self.assertEqual(detect_separator(["a;b\tc"]), ";")

    def test_no_candidates_falls_back_to_comma(self):
        self.assertEqual(detect_separator(["hello world"]), ",")

    def test_only_the_first_twenty_lines_are_sampled(self):
        lines = ["a;b"] * 20 + ["a,b,c,d,e,f,g,h"] * 10
        self.assertEqual(detect_separator(lines), ";")

    def test_sample_size_and_candidates_come_from_options(self):
        options = ParseOptions(separators=("|", ","), sample_lines=1)
        self.assertEqual(detect_separator(["a|b|c", "a,b,c,d,e"], options), "|")

    def test_detection_is_deterministic(self):
        lines = ["x;y,z", "'q,r';s", '"t\tu"\tv']
        self.assertEqual(detect_separator(lines), detect_separator(list(lines)))

    def test_strip_quoted_removes_both_quote_styles(self):
        self.assertEqual(strip_quoted("""a,"b,c",'d,e',f"""), "a,,,f")


class TokenizeTests(unittest.TestCase):
    def test_plain_split_and_trim(self):
        self.assertEqual(tokenize_line(" a , b ,c ", ","), ["a", "b", "c"])

    def test_quoted_field_keeps_separator(self):
        self.assertEqual(
            tokenize_line('05/01/2023,"COFFEE SHOP, HIGH ST",-12.50', ","),
            ["05/01/2023", "COFFEE SHOP, HIGH ST", "-12.50"],
        )

    def test_quote_after_leading_spaces_still_opens_span(self):
        self.assertEqual(tokenize_line("a,   'b,c'", ","), ["a", "b,c"])

    def test_apostrophe_inside_unquoted_text_is_literal(self):
        self.assertEqual(
            tokenize_line("O'Brien,rent, it's,x", ","),
            ["O'Brien", "rent", "it's", "x"],
        )

    def test_other_quote_kind_inside_span_is_literal(self):
        self.assertEqual(
            tokenize_line('"O\'Brien, Pat",10', ","),
            ["O'Brien, Pat", "10"],
        )

    def test_quote_characters_are_trimmed_unconditionally(self):
        self.assertEqual(tokenize_line("abc\",'x'y'", ","), ["abc", "x'y"])

    def test_empty_fields_are_kept(self):
        self.assertEqual(tokenize_line("a,,b,", ","), ["a", "", "b", ""])

    def test_unterminated_quote_swallows_rest_of_line(self):
        self.assertEqual(tokenize_line('a,"b,c', ","), ["a", "b,c"])

    def test_tokenize_maps_every_line(self):
        self.assertEqual(tokenize(["a;b", "c;d;e"], ";"), [["a", "b"], ["c", "d", "e"]])

    def test_join_round_trip_without_quotes(self):
        line = "2023-01-05, -12.50 ,Coffee Shop"
        fields = tokenize_line(line, ",")
        self.assertEqual(",".join(fields), ",".join(part.strip() for part in line.split(",")))


if __name__ == "__main__":
    unittest.main()
