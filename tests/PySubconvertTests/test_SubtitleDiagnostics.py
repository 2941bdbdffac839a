import os
import unittest

from PySubconvert import diagnose_file
from PySubconvert.Diagnostics import TypoRuleset
from PySubconvert.Helpers.TestCases import ConversionTestCase
from PySubconvert.SubtitleDiagnostics import SubtitleDiagnostics
from PySubconvert.SubtitleIssue import FILE_LEVEL, IssueCategory

class TestSubtitleDiagnostics(ConversionTestCase):
    damaged_srt = (
        "1\n"
        "00:00:01,000 --> 00:00:02,000\n"
        "他以经走了\n"
        "\n"
        "2\n"
        "00:00:05,000 --> 00:00:04,000\n"
        "我们开车\n"
    )

    clean_srt = (
        "1\n"
        "00:00:01,000 --> 00:00:02,000\n"
        "这个软件\n"
        "\n"
        "2\n"
        "00:00:03,000 --> 00:00:04,000\n"
        "我们开车\n"
        "\n"
    )

    script = (
        "[Script Info]\n"
        "Title: 以经\n"
        "\n"
        "[Events]\n"
        "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text\n"
        "Dialogue: 0,0:00:05.00,0:00:04.00,Default,,0,0,0,,他以经走了\n"
    )

    def setUp(self):
        super().setUp()
        self.ruleset = TypoRuleset(typos={ "以经": "已經" })
        self.diagnostics = SubtitleDiagnostics(self.ruleset, self.options)

    def test_damaged_timed_text(self):
        path = self.write_file("damaged.srt", self.damaged_srt)
        issues = self.diagnostics.diagnose_file(path)
        summary = [ (issue.line, issue.category) for issue in issues ]

        self.assertIn((FILE_LEVEL, IssueCategory.STRUCTURAL), summary)
        self.assertIn((2, IssueCategory.STRUCTURAL), summary)
        self.assertIn((3, IssueCategory.ADVISORY), summary)
        self.assertLoggedEqual("defects", 2, sum(1 for issue in issues if not issue.is_advisory))

    def test_single_trailing_newline_is_reported_at_line_zero(self):
        path = self.write_file("single.srt", "1\n00:00:01,000 --> 00:00:02,000\nlast line\n")
        issues = diagnose_file(path, options=self.options)

        self.assertLoggedEqual("issue count", 1, len(issues))
        self.assertLoggedEqual("line", 0, issues[0].line)

    def test_clean_file(self):
        path = self.write_file("clean.srt", self.clean_srt)
        self.assertLoggedEqual("issues", [], self.diagnostics.diagnose_file(path))

    def test_utf16_file_with_blank_line(self):
        path = self.write_file("utf16.srt", self.clean_srt.encode('utf-16'))
        self.assertLoggedEqual("issues", [], self.diagnostics.diagnose_file(path))

    def test_utf16_file_without_blank_line(self):
        path = self.write_file("utf16.srt", "1\n00:00:01,000 --> 00:00:02,000\n这个\n".encode('utf-16'))
        issues = self.diagnostics.diagnose_file(path)

        self.assertLoggedSequenceEqual("issues", [(FILE_LEVEL, IssueCategory.STRUCTURAL)], [ (issue.line, issue.category) for issue in issues ])

    def test_script_file(self):
        path = self.write_file("episode.ass", self.script)
        issues = self.diagnostics.diagnose_file(path)
        summary = [ (issue.line, issue.source_line, issue.is_advisory) for issue in issues ]

        # Timing error on record 1 (file line 6), typo in the payload only, no terminator check
        self.assertLoggedSequenceEqual("issues", [(1, 6, False), (6, None, True)], summary)

    def test_missing_file(self):
        issues = self.diagnostics.diagnose_file(os.path.join(self.temp_dir, "missing.srt"))

        self.assertLoggedEqual("issue count", 1, len(issues))
        self.assertLoggedEqual("line", FILE_LEVEL, issues[0].line)
        self.assertLoggedEqual("category", IssueCategory.INPUT, issues[0].category)

if __name__ == '__main__':
    unittest.main()
