from __future__ import annotations
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import NamedTuple

from PySubconvert.SubtitleIssue import SubtitleIssue

class ResultStatus(str, Enum):
    SUCCESS = "Success"
    VERIF_WARNING = "VerifWarning"
    CONVERT_ERROR = "ConvertError"

class TranslatedPair(NamedTuple):
    """ One processed line: 1-based index, the original text and the converted text """
    line_index : int
    original_text : str
    translated_text : str

    @property
    def changed(self) -> bool:
        return self.original_text != self.translated_text

@dataclass
class FileReport:
    """
    Outcome of converting a single file in a batch
    """
    input_path : str
    output_path : str|None = None
    status : ResultStatus = ResultStatus.SUCCESS
    issues : list[SubtitleIssue] = field(default_factory=list)
    verification_issues : list[SubtitleIssue] = field(default_factory=list)
    translated_pairs : list[TranslatedPair] = field(default_factory=list)
    duration : timedelta = field(default_factory=timedelta)
    terminator_fixed : bool = False
    error : str|None = None
    log_path : str|None = None

    @property
    def succeeded(self) -> bool:
        return self.status != ResultStatus.CONVERT_ERROR

    @property
    def changed_pairs(self) -> list[TranslatedPair]:
        return [ pair for pair in self.translated_pairs if pair.changed ]
