from __future__ import annotations
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
import logging

from rapidfuzz.distance import Indel

from PySubconvert.ConversionApplier import ConversionApplier
from PySubconvert.Diagnostics import TimingValidator, needs_terminator_fix
from PySubconvert.LineClassifier import is_script_format
from PySubconvert.SectionTracker import ConversionContext
from PySubconvert.SubtitleReader import read_subtitle_file

class RowStatus(str, Enum):
    PASS = "pass"
    MISMATCH = "mismatch"
    MISSING = "missing"     # Candidate has fewer lines than the reference
    EXTRA = "extra"         # Candidate has more lines than the reference
    TIMING = "timing"       # Timing logic error on this line in either file

@dataclass(frozen=True)
class DiffSegment:
    tag : str
    text : str

    @property
    def changed(self) -> bool:
        return self.tag != 'equal'

def _append_segment(track : list[DiffSegment], tag : str, text : str) -> None:
    """ Add text to a track, merging it into the previous segment when the tags match """
    if not text:
        return

    if track and track[-1].tag == tag:
        track[-1] = DiffSegment(tag, track[-1].text + text)
    else:
        track.append(DiffSegment(tag, text))

@dataclass
class CharacterDiff:
    """
    Character level difference between expected and candidate text, as two tracks.

    The left track holds equal and deleted segments of the expected text,
    the right track equal and inserted segments of the candidate text.
    The equal segments form a longest common subsequence of the two texts.
    """
    left : list[DiffSegment] = field(default_factory=list)
    right : list[DiffSegment] = field(default_factory=list)

    @classmethod
    def between(cls, expected : str, candidate : str) -> CharacterDiff:
        diff = cls()
        for opcode in Indel.opcodes(expected, candidate):
            expected_text = expected[opcode.src_start:opcode.src_end]
            candidate_text = candidate[opcode.dest_start:opcode.dest_end]
            if opcode.tag == 'equal':
                _append_segment(diff.left, 'equal', expected_text)
                _append_segment(diff.right, 'equal', candidate_text)
            else:
                _append_segment(diff.left, 'delete', expected_text)
                _append_segment(diff.right, 'insert', candidate_text)
        return diff

    @property
    def changed(self) -> bool:
        return any(segment.changed for segment in self.left + self.right)

@dataclass
class LineComparison:
    line_number : int
    status : RowStatus
    reference : str|None = None
    expected : str|None = None
    candidate : str|None = None
    diff : CharacterDiff|None = None
    message : str|None = None

@dataclass
class ComparisonReport:
    """
    Line by line comparison of a candidate file with the expected conversion of a reference file
    """
    reference_path : str|None = None
    candidate_path : str|None = None
    rows : list[LineComparison] = field(default_factory=list)
    reference_terminator_ok : bool|None = None
    candidate_terminator_ok : bool|None = None

    @property
    def mismatches(self) -> list[LineComparison]:
        return [ row for row in self.rows if row.status != RowStatus.PASS ]

    @property
    def counts(self) -> Counter:
        return Counter(row.status for row in self.rows)

    @property
    def passed(self) -> bool:
        return not self.mismatches and self.candidate_terminator_ok is not False

def _timing_errors(lines : Sequence[str], script_format : bool) -> dict[int, str]:
    """
    Map file line numbers to timing error messages
    """
    validator = TimingValidator()
    issues = validator.validate_script(lines) if script_format else validator.validate_timed_text(lines)
    return { issue.source_line : issue.message for issue in issues if issue.source_line }

def compare_lines(reference : Sequence[str], candidate : Sequence[str], applier : ConversionApplier, script_format : bool|None = None) -> list[LineComparison]:
    """
    Compare each candidate line with the conversion of the matching reference line.

    Lines are paired by position and never realigned: surplus lines on either side
    are reported as missing or extra.
    """
    if script_format is None:
        script_format = is_script_format(reference)

    timing_errors = _timing_errors(candidate, script_format)
    timing_errors.update(_timing_errors(reference, script_format))

    rows : list[LineComparison] = []
    context = ConversionContext()
    for index in range(max(len(reference), len(candidate))):
        line_number = index + 1
        if index >= len(reference):
            rows.append(LineComparison(line_number, RowStatus.EXTRA, candidate=candidate[index]))
            continue

        context, expected = applier.process_line(context, reference[index])
        if index >= len(candidate):
            rows.append(LineComparison(line_number, RowStatus.MISSING, reference=reference[index], expected=expected))
            continue

        row = LineComparison(line_number, RowStatus.PASS, reference[index], expected, candidate[index])
        if line_number in timing_errors:
            row.status = RowStatus.TIMING
            row.message = timing_errors[line_number]
        elif expected != candidate[index]:
            row.status = RowStatus.MISMATCH
            row.diff = CharacterDiff.between(expected, candidate[index])

        rows.append(row)

    return rows

def compare_files(reference_path : str, candidate_path : str, applier : ConversionApplier) -> ComparisonReport:
    """
    Compare a converted file against the expected conversion of its source.

    Raises SubtitleInputError if either file cannot be read.
    """
    reference_text = read_subtitle_file(reference_path)
    candidate_text = read_subtitle_file(candidate_path)

    reference_lines = reference_text.lines
    script_format = is_script_format(reference_lines, reference_path)

    report = ComparisonReport(reference_path, candidate_path)
    report.rows = compare_lines(reference_lines, candidate_text.lines, applier, script_format)

    if not script_format:
        report.reference_terminator_ok = not needs_terminator_fix(reference_text.line_data)
        report.candidate_terminator_ok = not needs_terminator_fix(candidate_text.line_data)

    logging.info(f"Compared {reference_path} with {candidate_path}: {len(report.mismatches)} of {len(report.rows)} lines differ")
    return report
