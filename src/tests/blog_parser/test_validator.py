import unittest
from pathlib import Path

from blog_parser.expression import Error, Heading, Newline, Paragraph, ParseError, Text
from blog_parser.parser import parse
from blog_parser.validator import Diagnostic, DiagnosticLocation, validate


class TestValidator(unittest.TestCase):
    """Test suite for turning parse errors into diagnostics."""

    def test_valid_page(self):
        self.assertEqual(validate(parse("# Title\nBody text\n")), [])

    def test_error_after_paragraph_skips_newlines(self):
        expressions = [
            Paragraph([Text("A")]),
            Newline(),
            Error(ParseError.unexpected_eof()),
        ]
        diagnostics = validate(expressions)
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].location, DiagnosticLocation(after="A"))
        self.assertEqual(
            str(diagnostics[0]), "unexpected end of input (after expression 'A')"
        )

    def test_error_at_beginning_of_file(self):
        diagnostics = validate([Newline(), Error(ParseError.unexpected_eof())])
        self.assertTrue(diagnostics[0].location.at_beginning)
        self.assertEqual(str(diagnostics[0].location), "at beginning of file")

    def test_consecutive_errors_locate_past_each_other(self):
        expressions = [
            Heading(level=1, text="Top"),
            Error(ParseError.unexpected_eof()),
            Error(ParseError.unrecognized_control("video")),
        ]
        diagnostics = validate(expressions)
        self.assertEqual(
            [d.location.describe() for d in diagnostics],
            ["after expression '# Top'", "after expression '# Top'"],
        )

    def test_errors_inside_paragraph(self):
        expressions = [
            Paragraph([Text("lead"), Error(ParseError.unexpected_eof())]),
        ]
        diagnostics = validate(expressions)
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].location.after, "lead")

    def test_diagnostics_in_source_order(self):
        diagnostics = validate(parse("]\n# Ok\n::video [x]\n"))
        self.assertEqual(
            [d.message for d in diagnostics],
            [
                "no parselet available for token class 'CloseSquare'",
                "unrecognized control sequence 'video'",
            ],
        )
        self.assertEqual(diagnostics[1].location.after, "# Ok")

    def test_filename_in_message(self):
        diagnostics = validate(parse("**a*"), filename="source/post.txt")
        self.assertEqual(diagnostics[0].filename, Path("source/post.txt"))
        self.assertEqual(
            str(diagnostics[0]),
            "could not parse file 'source/post.txt': "
            "mismatched emphasis delimiters ('**' closed by '*') (at beginning of file)",
        )

    def test_diagnostic_keeps_parse_error(self):
        error = ParseError.unexpected_eof()
        diagnostic = validate([Error(error)])[0]
        self.assertIsInstance(diagnostic, Diagnostic)
        self.assertIs(diagnostic.error, error)


if __name__ == "__main__":
    unittest.main()
