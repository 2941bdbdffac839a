import unittest

from PySubconvert.Diagnostics import RedundancyDetector, iter_content_lines
from PySubconvert.Helpers.TestCases import LoggedTestCase

class TestRedundancyDetector(LoggedTestCase):
    def setUp(self):
        super().setUp()
        self.detector = RedundancyDetector()

    def test_line_repeated_in_every_group(self):
        lines = [
            "1", "00:00:01,000 --> 00:00:02,000", "第一句", "字幕组出品", "",
            "2", "00:00:03,000 --> 00:00:04,000", "第二句", "字幕组出品", "",
            "3", "00:00:05,000 --> 00:00:06,000", "第三句", "字幕组出品",
        ]
        issues = self.detector.detect(iter_content_lines(lines))

        self.assertLoggedEqual("issue count", 1, len(issues))
        self.assertLoggedEqual("line", 4, issues[0].line)
        self.assertLoggedEqual("message", "[Redundant] Repeated in every subtitle: '字幕组出品'", issues[0].message)
        self.assertLoggedTrue("advisory", issues[0].is_advisory)

    def test_line_missing_from_one_group(self):
        lines = [
            "1", "00:00:01,000 --> 00:00:02,000", "第一句", "字幕组出品", "",
            "2", "00:00:03,000 --> 00:00:04,000", "第二句", "",
        ]
        self.assertLoggedEqual("issues", [], self.detector.detect(iter_content_lines(lines)))

    def test_single_group_is_never_redundant(self):
        lines = ["1", "00:00:01,000 --> 00:00:02,000", "第一句", "第一句"]
        self.assertLoggedEqual("issues", [], self.detector.detect(iter_content_lines(lines)))

    def test_groups(self):
        lines = ["1", "00:00:01,000 --> 00:00:02,000", "甲", "乙", "", "2", "00:00:03,000 --> 00:00:04,000", "丙"]
        groups = [ content.group for content in iter_content_lines(lines) ]
        self.assertLoggedSequenceEqual("groups", [0, 0, 1], groups)

if __name__ == '__main__':
    unittest.main()
