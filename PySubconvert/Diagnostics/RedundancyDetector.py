from __future__ import annotations
from collections.abc import Iterable

from PySubconvert.Diagnostics.ContentLines import ContentLine
from PySubconvert.SubtitleIssue import IssueCategory, SubtitleIssue

class RedundancyDetector:
    """
    Finds boilerplate repeated in every subtitle group, e.g. a disclaimer appended to each subtitle.

    A line of the first group that appears verbatim in every other group is reported.
    At least two groups are needed for a line to count as repeated.
    """
    def find_redundant_lines(self, content_lines : Iterable[ContentLine]) -> list[ContentLine]:
        contents = list(content_lines)
        groups : dict[int, set[str]] = {}
        for content in contents:
            groups.setdefault(content.group, set()).add(content.line)

        if len(groups) < 2:
            return []

        first_group = [ content for content in contents if content.group == contents[0].group ]

        redundant : list[ContentLine] = []
        reported : set[str] = set()
        for candidate in first_group:
            if not candidate.line.strip() or candidate.line in reported:
                continue

            if all(candidate.line in group for group in groups.values()):
                redundant.append(candidate)
                reported.add(candidate.line)

        return redundant

    def detect(self, content_lines : Iterable[ContentLine]) -> list[SubtitleIssue]:
        return [
            SubtitleIssue(content.line_number, f"[Redundant] Repeated in every subtitle: '{content.line.strip()}'", IssueCategory.ADVISORY)
            for content in self.find_redundant_lines(content_lines)
        ]
