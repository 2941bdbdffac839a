import unittest

from PySubconvert.Helpers.TestCases import LoggedTestCase
from PySubconvert.Helpers.Tests import log_input_expected_result
from PySubconvert.ProtectedZoneGuard import ProtectedZoneGuard, SpanKind

class TestProtectedZoneGuard(LoggedTestCase):
    def setUp(self):
        super().setUp()
        self.guard = ProtectedZoneGuard()

    def test_is_forbidden_zone(self):
        cases = [
            ("", "", True),
            ("   ", "[Events]", True),
            ("; 这是注释", "[Events]", True),
            ("Style: Default,微软雅黑,20", "[V4+ Styles]", True),
            ("Style: Default,Arial,20", "[V4 Styles]", True),
            ("Format: Name, Fontname", "[V4+ Styles]", False),
            ("Title: 这个", "[Script Info]", True),
            ("Last Style Storage: Default", "[Aegisub Project Garbage]", True),
            ("fontname: 黑体.ttf", "[Fonts]", True),
            ("Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,你好", "[Events]", False),
            ("你好", "", False),
        ]
        for line, section, expected in cases:
            with self.subTest(line=line, section=section):
                result = self.guard.is_forbidden_zone(line, section)
                log_input_expected_result(f"{section} {repr(line)}", expected, result)
                self.assertEqual(result, expected)

    def test_is_record_line(self):
        self.assertLoggedTrue("Dialogue in events", self.guard.is_record_line("Dialogue: 0,a", "[Events]"))
        self.assertLoggedTrue("Comment in events", self.guard.is_record_line("Comment: 0,a", "[Events]"))
        self.assertLoggedFalse("Dialogue outside events", self.guard.is_record_line("Dialogue: 0,a", ""))
        self.assertLoggedFalse("Format in events", self.guard.is_record_line("Format: Layer, Start", "[Events]"))

    def test_split_record(self):
        line = "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,你好"
        prefix, payload = self.guard.split_record(line)
        self.assertLoggedEqual("prefix", "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,", prefix)
        self.assertLoggedEqual("payload", "你好", payload)

    def test_split_record_keeps_commas_in_payload(self):
        prefix, payload = self.guard.split_record("Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,你好,世界")
        self.assertLoggedEqual("payload", "你好,世界", payload)
        self.assertLoggedTrue("prefix ends at separator", prefix.endswith(",,"))

    def test_split_record_with_too_few_fields(self):
        line = "Dialogue: 0,0:00:01.00,0:00:02.00"
        self.assertLoggedEqual("split", (line, ""), self.guard.split_record(line))

    def test_find_protected_spans(self):
        text = "{\\b1}你好\\N世界<i>!</i>"
        spans = self.guard.find_protected_spans(text)

        self.assertLoggedSequenceEqual("span text", ["{\\b1}", "\\N", "<i>", "</i>"], [ span.text(text) for span in spans ], input_value=text)
        self.assertLoggedSequenceEqual("span kinds", [SpanKind.OVERRIDE, SpanKind.ESCAPE, SpanKind.TAG, SpanKind.TAG], [ span.kind for span in spans ])

        for first, second in zip(spans, spans[1:]):
            self.assertLessEqual(first.end, second.start)

    def test_hard_space_is_protected(self):
        spans = self.guard.find_protected_spans("你好\\h世界")
        self.assertLoggedSequenceEqual("spans", [(2, 4)], [ (span.start, span.end) for span in spans ])

    def test_lowercase_newline_escape_is_not_protected(self):
        self.assertLoggedEqual("spans", [], self.guard.find_protected_spans("你好\\n世界"))

    def test_override_blocks_do_not_nest(self):
        text = "{a{b}c}"
        spans = self.guard.find_protected_spans(text)
        self.assertLoggedSequenceEqual("span text", ["{a{b}"], [ span.text(text) for span in spans ], input_value=text)

    def test_unterminated_opener_is_plain_text(self):
        for text in ["{\\b1 你好", "a < b", "你好<"]:
            with self.subTest(text=text):
                self.assertLoggedEqual("spans", [], self.guard.find_protected_spans(text), input_value=text)

    def test_mask_protected_spans(self):
        self.assertLoggedEqual("mask", " 你好 世界", self.guard.mask_protected_spans("{\\i1}你好\\N世界"))

if __name__ == '__main__':
    unittest.main()
