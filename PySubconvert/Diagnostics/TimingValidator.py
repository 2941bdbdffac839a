from __future__ import annotations
from collections.abc import Iterable
from datetime import timedelta

import pysubs2.time
import srt # type: ignore

from PySubconvert.LineClassifier import TIMESTAMP_ARROW, is_section_header
from PySubconvert.ProtectedZoneGuard import EVENTS_SECTION, RECORD_MARKERS
from PySubconvert.SubtitleIssue import IssueCategory, SubtitleIssue

DEFAULT_EVENT_FORMAT = ['layer', 'start', 'end', 'style', 'name', 'marginl', 'marginr', 'marginv', 'effect', 'text']

class TimingValidator:
    """
    Checks that every subtitle record starts no later than it ends.

    Records are numbered from 1 in file order. A record whose timestamps cannot be
    parsed is reported as such rather than skipped.
    """
    def validate_timed_text(self, lines : Iterable[str]) -> list[SubtitleIssue]:
        """
        Validate the timestamp range lines of a line-based (SRT) file
        """
        issues : list[SubtitleIssue] = []
        record = 0
        for line_number, line in enumerate(lines, 1):
            if TIMESTAMP_ARROW not in line:
                continue

            record += 1
            start_text, _, end_text = line.partition(TIMESTAMP_ARROW)
            end_fields = end_text.split()
            end_text = end_fields[0] if end_fields else ""

            try:
                start = srt.srt_timestamp_to_timedelta(start_text.strip())
                end = srt.srt_timestamp_to_timedelta(end_text)
            except ValueError:
                issues.append(self._unparseable(record, line_number, line))
                continue

            if start > end:
                issues.append(self._out_of_order(record, line_number, start, end))

        return issues

    def validate_script(self, lines : Iterable[str]) -> list[SubtitleIssue]:
        """
        Validate the Dialogue and Comment records in the events section of an SSA/ASS file
        """
        issues : list[SubtitleIssue] = []
        record = 0
        section = ""
        event_format = DEFAULT_EVENT_FORMAT

        for line_number, line in enumerate(lines, 1):
            if is_section_header(line):
                section = line.strip()
                continue

            if section != EVENTS_SECTION:
                continue

            if line.startswith("Format:"):
                event_format = [ field.strip().lower() for field in line[len("Format:"):].split(',') ]
                continue

            if not line.startswith(RECORD_MARKERS):
                continue

            record += 1
            fields = line.split(':', 1)[1].split(',', len(event_format) - 1)
            try:
                start = self._parse_script_time(fields[event_format.index('start')])
                end = self._parse_script_time(fields[event_format.index('end')])
            except (ValueError, IndexError):
                issues.append(self._unparseable(record, line_number, line))
                continue

            if start > end:
                issues.append(self._out_of_order(record, line_number, start, end))

        return issues

    def _parse_script_time(self, text : str) -> timedelta:
        match = pysubs2.time.TIMESTAMP.fullmatch(text.strip())
        if not match:
            raise ValueError(f"Unparseable timestamp '{text}'")

        return timedelta(milliseconds=pysubs2.time.timestamp_to_ms(match.groups()))

    def _out_of_order(self, record : int, line_number : int, start : timedelta, end : timedelta) -> SubtitleIssue:
        return SubtitleIssue(
            line=record,
            message=f"Timing logic error: subtitle ends before it starts ({srt.timedelta_to_srt_timestamp(start)} > {srt.timedelta_to_srt_timestamp(end)})",
            category=IssueCategory.STRUCTURAL,
            source_line=line_number
        )

    def _unparseable(self, record : int, line_number : int, line : str) -> SubtitleIssue:
        return SubtitleIssue(
            line=record,
            message=f"Unparseable timestamp: '{line.strip()}'",
            category=IssueCategory.STRUCTURAL,
            source_line=line_number
        )
