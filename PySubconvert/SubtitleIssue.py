from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

FILE_LEVEL = 0

class IssueCategory(str, Enum):
    """ Kinds of finding produced by diagnostics """
    STRUCTURAL = "structural"       # Recoverable formatting defect
    INPUT = "input"                 # File could not be read or decoded
    ADVISORY = "advisory"           # Informative only, never blocks output
    VERIFICATION = "verification"   # Converted output does not match its source

@dataclass(frozen=True)
class SubtitleIssue:
    """
    A single diagnostic finding.

    line is the 1-based line (or record position, for timing issues), 0 for file-level issues.
    source_line is the file line a record-level issue came from, when it differs from line.
    """
    line : int
    message : str
    category : IssueCategory = IssueCategory.STRUCTURAL
    source_line : int|None = None

    @property
    def is_advisory(self) -> bool:
        return self.category == IssueCategory.ADVISORY

    def __str__(self) -> str:
        return f"L{self.line:03d} {self.message}"
