from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from PySubconvert.LineClassifier import is_section_header

EVENTS_SECTION = "[Events]"
STYLE_SECTIONS = ("[V4+ Styles]", "[V4 Styles]")
METADATA_SECTIONS = ("[Script Info]", "[Aegisub Project Garbage]", "[Fonts]", "[Graphics]")

COMMENT_MARKER = ';'
STYLE_MARKER = "Style:"
RECORD_MARKERS = ("Dialogue:", "Comment:")

FIELD_SEPARATOR = ','
RECORD_FIELD_COUNT = 9

FORCED_BREAKS = ("\\N", "\\h")

class SpanKind(Enum):
    ESCAPE = "escape"
    OVERRIDE = "override"
    TAG = "tag"

@dataclass(frozen=True)
class ProtectedSpan:
    """
    Half-open range [start, end) of text that must not be converted
    """
    start : int
    end : int
    kind : SpanKind

    def text(self, line : str) -> str:
        return line[self.start:self.end]

class ProtectedZoneGuard:
    """
    Decides which parts of a line must pass through conversion untouched.

    Whole lines are exempt when they are comments, style definitions or lie in a
    metadata section. Within a line, forced breaks (\\N, \\h), override blocks
    ({...}) and angle-bracket tags (<...>) are protected.

    Override blocks and tags do not nest: a block ends at the first closing
    delimiter, so with "{a{b}c}" the block is "{a{b}" and "c}" is converted.
    """
    def __init__(self,
                 style_sections : tuple[str, ...] = STYLE_SECTIONS,
                 metadata_sections : tuple[str, ...] = METADATA_SECTIONS):
        self.style_sections = style_sections
        self.metadata_sections = metadata_sections

    def is_forbidden_zone(self, line : str, current_section : str) -> bool:
        """
        True if the entire line must be passed through unconverted
        """
        text = line.strip()
        if not text or text.startswith(COMMENT_MARKER):
            return True

        if current_section in self.style_sections and text.startswith(STYLE_MARKER):
            return True

        return current_section in self.metadata_sections

    def is_section_header(self, line : str) -> bool:
        return is_section_header(line)

    def is_record_line(self, line : str, current_section : str) -> bool:
        """
        True for Dialogue/Comment records in the events section
        """
        return current_section == EVENTS_SECTION and line.startswith(RECORD_MARKERS)

    def split_record(self, line : str) -> tuple[str, str]:
        """
        Split a record into its metadata prefix (up to and including the 9th comma) and free-text payload.

        Separators are counted literally, without any quoting rules.
        A line with fewer than 9 separators is all metadata.
        """
        count = 0
        for index, char in enumerate(line):
            if char == FIELD_SEPARATOR:
                count += 1
                if count == RECORD_FIELD_COUNT:
                    return line[:index + 1], line[index + 1:]

        return line, ""

    def find_protected_spans(self, text : str) -> list[ProtectedSpan]:
        """
        Scan the text left to right for forced breaks, override blocks and tags
        """
        spans : list[ProtectedSpan] = []
        position = 0
        length = len(text)

        while position < length:
            char = text[position]

            if char == '\\' and text[position:position + 2] in FORCED_BREAKS:
                spans.append(ProtectedSpan(position, position + 2, SpanKind.ESCAPE))
                position += 2
                continue

            if char in '{<':
                closer = '}' if char == '{' else '>'
                end = text.find(closer, position + 1)
                if end >= 0:
                    kind = SpanKind.OVERRIDE if char == '{' else SpanKind.TAG
                    spans.append(ProtectedSpan(position, end + 1, kind))
                    position = end + 1
                    continue

            position += 1

        return spans

    def mask_protected_spans(self, text : str, replacement : str = ' ') -> str:
        """
        Replace every protected span with a single replacement character, leaving only free text
        """
        parts = []
        last_end = 0
        for span in self.find_protected_spans(text):
            parts.append(text[last_end:span.start])
            parts.append(replacement)
            last_end = span.end

        parts.append(text[last_end:])
        return ''.join(parts)
