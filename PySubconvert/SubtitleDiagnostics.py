from __future__ import annotations
import logging

from PySubconvert.Diagnostics import (
    ConsistencyClusterer,
    RedundancyDetector,
    TimingValidator,
    TypoRuleset,
    TypoScanner,
    check_terminator,
    iter_content_lines,
)
from PySubconvert.LineClassifier import is_script_format
from PySubconvert.Options import Options
from PySubconvert.ProtectedZoneGuard import ProtectedZoneGuard
from PySubconvert.SubtitleError import SubtitleInputError
from PySubconvert.SubtitleIssue import FILE_LEVEL, IssueCategory, SubtitleIssue
from PySubconvert.SubtitleReader import SubtitleText, read_subtitle_file

class SubtitleDiagnostics:
    """
    Runs every check over a subtitle file and collects the issues.

    Issues are collected rather than raised: a file with no issues is the success case.
    The terminator check only applies to line-based timed text, since sectioned
    script files have no blank-line framing.
    """
    def __init__(self, ruleset : TypoRuleset|None = None, options : Options|None = None, guard : ProtectedZoneGuard|None = None):
        self.options = options or Options()
        self.guard = guard or ProtectedZoneGuard()
        self.timing_validator = TimingValidator()
        self.typo_scanner = TypoScanner(ruleset)
        self.clusterer = ConsistencyClusterer(max_terms=self.options.max_consistency_terms)
        self.redundancy_detector = RedundancyDetector()

    def diagnose_file(self, path : str) -> list[SubtitleIssue]:
        try:
            subtitle_text = read_subtitle_file(path)
        except SubtitleInputError as e:
            logging.warning(f"Skipping diagnostics for {path}: {str(e)}")
            return [ SubtitleIssue(FILE_LEVEL, str(e), IssueCategory.INPUT) ]

        return self.diagnose_text(subtitle_text, path)

    def diagnose_text(self, subtitle_text : SubtitleText, path : str|None = None) -> list[SubtitleIssue]:
        lines = subtitle_text.lines
        script_format = is_script_format(lines, path)

        issues : list[SubtitleIssue] = []
        if script_format:
            issues.extend(self.timing_validator.validate_script(lines))
        else:
            issues.extend(check_terminator(subtitle_text.line_data))
            issues.extend(self.timing_validator.validate_timed_text(lines))

        content_lines = list(iter_content_lines(lines, self.guard))
        issues.extend(self.typo_scanner.scan(content_lines))
        issues.extend(self.clusterer.cluster(content_lines))
        issues.extend(self.redundancy_detector.detect(content_lines))

        advisories = sum(1 for issue in issues if issue.is_advisory)
        logging.debug(f"Diagnostics for {path or 'subtitles'}: {len(issues) - advisories} defects, {advisories} advisories")
        return issues

def diagnose_file(path : str, ruleset : TypoRuleset|None = None, options : Options|None = None) -> list[SubtitleIssue]:
    """
    Run all diagnostics over a subtitle file, returning the issues found
    """
    return SubtitleDiagnostics(ruleset, options).diagnose_file(path)
