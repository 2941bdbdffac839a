from __future__ import annotations
from collections.abc import Sequence

from PySubconvert.Helpers.Text import StripHanCharacters
from PySubconvert.LineClassifier import is_structural
from PySubconvert.SubtitleIssue import FILE_LEVEL, IssueCategory, SubtitleIssue

def audit_translation(original_lines : Sequence[str], translated_lines : Sequence[str]) -> list[SubtitleIssue]:
    """
    Verify a converted file against its source.

    Structural lines must be identical, and content lines may only differ in their
    Han characters, since script conversion should never touch anything else.
    """
    issues : list[SubtitleIssue] = []

    if len(original_lines) != len(translated_lines):
        issues.append(SubtitleIssue(FILE_LEVEL, f"Line count mismatch: source has {len(original_lines)} lines, output has {len(translated_lines)}", IssueCategory.VERIFICATION))

    for line_number, (original, translated) in enumerate(zip(original_lines, translated_lines), 1):
        if is_structural(original) or is_structural(translated):
            if original != translated:
                issues.append(SubtitleIssue(line_number, "Structure mismatch", IssueCategory.VERIFICATION))

        elif StripHanCharacters(original) != StripHanCharacters(translated):
            issues.append(SubtitleIssue(line_number, "Non-Han content changed", IssueCategory.VERIFICATION))

    return issues
