from __future__ import annotations
from collections.abc import Iterable, Iterator

from PySubconvert.LineClassifier import is_section_header, is_structural
from PySubconvert.ProtectedZoneGuard import ProtectedZoneGuard
from PySubconvert.ScriptConverter import ConvertFunction
from PySubconvert.SectionTracker import ConversionContext

class ConversionApplier:
    """
    Applies a script conversion function to the translatable parts of subtitle lines.

    Structural lines, section headers and forbidden zones are returned unchanged.
    Dialogue and Comment records in the events section only have their free-text
    payload converted. Protected spans are copied verbatim and every gap between
    them is passed through the conversion function.
    """
    def __init__(self, convert_fn : ConvertFunction, guard : ProtectedZoneGuard|None = None):
        self.convert_fn = convert_fn
        self.guard = guard or ProtectedZoneGuard()

    def apply(self, line : str, section : str = "") -> str:
        """
        Convert a single line given the section it belongs to
        """
        if is_section_header(line) or self.guard.is_forbidden_zone(line, section) or is_structural(line):
            return line

        if self.guard.is_record_line(line, section):
            prefix, payload = self.guard.split_record(line)
            return prefix + self.convert_text(payload)

        return self.convert_text(line)

    def convert_text(self, text : str) -> str:
        """
        Convert the text outside protected spans, preserving the spans in place
        """
        parts : list[str] = []
        last_end = 0
        for span in self.guard.find_protected_spans(text):
            if span.start > last_end:
                parts.append(self.convert_fn(text[last_end:span.start]))
            parts.append(span.text(text))
            last_end = span.end

        if last_end < len(text):
            parts.append(self.convert_fn(text[last_end:]))

        return ''.join(parts)

    def process_line(self, context : ConversionContext, line : str) -> tuple[ConversionContext, str]:
        """
        Advance the pass context over a line and return the new context with the converted line
        """
        context = context.advance(line)
        return context, self.apply(line, context.section)

    def convert_lines(self, lines : Iterable[str], context : ConversionContext|None = None) -> Iterator[str]:
        """
        Convert a stream of lines from one file, tracking sections as they are encountered
        """
        context = context or ConversionContext()
        for line in lines:
            context, converted = self.process_line(context, line)
            yield converted
