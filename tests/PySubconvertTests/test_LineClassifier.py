import unittest

from PySubconvert.ComparisonDiffer import compare_lines
from PySubconvert.ConversionApplier import ConversionApplier
from PySubconvert.Diagnostics import audit_translation, iter_content_lines
from PySubconvert.Helpers.TestCases import LoggedTestCase
from PySubconvert.Helpers.Tests import log_input_expected_result
from PySubconvert.LineClassifier import is_script_format, is_section_header, is_structural, strip_bom

class TestLineClassifier(LoggedTestCase):
    structural_cases = [
        ("", True),
        ("   ", True),
        ("1", True),
        (" 42 ", True),
        ("123456789", True),
        ("1234567890", False),
        ("00:00:01,000 --> 00:00:02,000", True),
        ("00:00:01.000 --> 00:00:02.000 X1:40", True),
        ("你好", False),
        ("１２", False),
        ("12a", False),
        ("Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,你好", False),
    ]

    def test_is_structural(self):
        for line, expected in self.structural_cases:
            with self.subTest(line=line):
                result = is_structural(line)
                log_input_expected_result(repr(line), expected, result)
                self.assertEqual(result, expected)

    def test_is_section_header(self):
        cases = [
            ("[Events]", True),
            ("  [Script Info]  ", True),
            ("[V4+ Styles]", True),
            ("[a[b]", False),
            ("Dialogue: [x]", False),
            ("[Events", False),
            ("你好", False),
        ]
        for line, expected in cases:
            with self.subTest(line=line):
                result = is_section_header(line)
                log_input_expected_result(repr(line), expected, result)
                self.assertEqual(result, expected)

    def test_strip_bom(self):
        self.assertLoggedEqual("strip_bom", "1", strip_bom("\ufeff1"))
        self.assertLoggedTrue("BOM line is structural", is_structural(strip_bom("\ufeff1")))

    def test_is_script_format(self):
        self.assertLoggedTrue("ass extension", is_script_format([], "movie.ASS"))
        self.assertLoggedTrue("ssa extension", is_script_format([], "movie.ssa"))
        self.assertLoggedTrue("events header", is_script_format(["[Script Info]", "Title: x"]))
        self.assertLoggedFalse("srt content", is_script_format(["1", "00:00:01,000 --> 00:00:02,000", "你好"], "movie.srt"))

class TestStructuralAgreement(LoggedTestCase):
    """
    Conversion, content extraction, auditing and comparison must agree on which lines are structural
    """
    sample_lines = [
        "1",
        "00:00:01,000 --> 00:00:02,000",
        "这个",
        "",
        "   ",
        "987654321",
        "9876543210",
        "２",
        "00:00:03,000-->00:00:04,000",
        "软件 123",
    ]

    def setUp(self):
        super().setUp()
        self.applier = ConversionApplier(lambda text: f"#{text}")

    def test_all_passes_agree(self):
        content_numbers = { content.line_number for content in iter_content_lines(self.sample_lines) }
        converted = [ self.applier.apply(line) for line in self.sample_lines ]
        audit_issues = { issue.line: issue.message for issue in audit_translation(self.sample_lines, converted) }
        rows = compare_lines(self.sample_lines, self.sample_lines, self.applier)

        for line_number, line in enumerate(self.sample_lines, 1):
            structural = is_structural(line)
            with self.subTest(line=line):
                log_input_expected_result(repr(line), structural, converted[line_number - 1] == line)
                self.assertEqual(structural, converted[line_number - 1] == line)
                self.assertEqual(structural, line_number not in content_numbers)
                self.assertEqual(structural, line_number not in audit_issues)
                self.assertEqual(structural, rows[line_number - 1].expected == line)

    def test_structural_changes_are_flagged_as_structure_mismatch(self):
        altered = [ f"#{line}" for line in self.sample_lines ]
        issues = audit_translation(self.sample_lines, altered)

        for issue in issues:
            line = self.sample_lines[issue.line - 1]
            expected = "Structure mismatch" if is_structural(line) else "Non-Han content changed"
            self.assertLoggedEqual(f"audit of {repr(line)}", expected, issue.message)

if __name__ == '__main__':
    unittest.main()
