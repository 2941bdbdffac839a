from __future__ import annotations
from collections.abc import Iterable, Iterator
from typing import NamedTuple

from PySubconvert.LineClassifier import is_section_header, is_structural
from PySubconvert.ProtectedZoneGuard import ProtectedZoneGuard
from PySubconvert.SectionTracker import SectionTracker

class ContentLine(NamedTuple):
    """
    A line carrying translatable text.

    text is the translatable part of the line with protected spans blanked out,
    group counts the subtitle groups (runs of content between structural lines) seen so far.
    """
    line_number : int
    line : str
    text : str
    group : int

def iter_content_lines(lines : Iterable[str], guard : ProtectedZoneGuard|None = None) -> Iterator[ContentLine]:
    """
    Yield the content lines of a file, skipping structural lines, headers and forbidden zones
    """
    guard = guard or ProtectedZoneGuard()
    tracker = SectionTracker()
    group = 0
    in_group = False

    for line_number, line in enumerate(lines, 1):
        tracker.observe(line)
        section = tracker.current()

        if is_structural(line):
            if in_group:
                group += 1
                in_group = False
            continue

        if is_section_header(line) or guard.is_forbidden_zone(line, section):
            continue

        if guard.is_record_line(line, section):
            _, payload = guard.split_record(line)
            text = guard.mask_protected_spans(payload)
        else:
            text = guard.mask_protected_spans(line)

        in_group = True
        yield ContentLine(line_number, line, text, group)
