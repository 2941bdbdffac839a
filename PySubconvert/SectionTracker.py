from __future__ import annotations
from dataclasses import dataclass, replace

from PySubconvert.LineClassifier import is_section_header

@dataclass(frozen=True)
class ConversionContext:
    """
    Immutable state for a single pass over a file.

    section is the most recently seen section header (empty before the first one),
    line_number is the 1-based number of the last line observed.
    """
    section : str = ""
    line_number : int = 0

    def advance(self, line : str) -> ConversionContext:
        """
        Return the context after observing a line
        """
        section = line.strip() if is_section_header(line) else self.section
        return replace(self, section=section, line_number=self.line_number + 1)

class SectionTracker:
    """
    Tracks the current section of a multi-part subtitle file during a forward scan.

    A tracker belongs to one file pass: create a new one (or call reset) for each file.
    """
    def __init__(self, context : ConversionContext|None = None):
        self._context = context or ConversionContext()

    @property
    def context(self) -> ConversionContext:
        return self._context

    def current(self) -> str:
        return self._context.section

    def observe(self, line : str) -> bool:
        """
        Observe the next line, returning True if it was a section header
        """
        self._context = self._context.advance(line)
        return is_section_header(line)

    def reset(self) -> None:
        self._context = ConversionContext()
