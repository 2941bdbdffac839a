from __future__ import annotations
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import json
import logging
import os

import regex

from PySubconvert.Diagnostics.ContentLines import ContentLine
from PySubconvert.SubtitleError import RulesetError
from PySubconvert.SubtitleIssue import IssueCategory, SubtitleIssue

@dataclass
class TypoRuleset:
    """
    Known typos and advisory patterns.

    typos maps an exact wrong string to its correction, regex_overrides maps a
    pattern to a tip shown whenever it matches. Pattern order is preserved.
    """
    typos : dict[str, str] = field(default_factory=dict)
    regex_overrides : dict[str, str] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return not self.typos and not self.regex_overrides

    @classmethod
    def from_dict(cls, data : Mapping) -> TypoRuleset:
        typos = data.get('typos') or {}
        overrides = data.get('regex_overrides') or {}
        if not isinstance(typos, Mapping) or not isinstance(overrides, Mapping):
            raise RulesetError("Typo ruleset entries must be objects mapping strings to strings")

        return cls(
            typos={ str(k): str(v) for k, v in typos.items() if k },
            regex_overrides={ str(k): str(v) for k, v in overrides.items() if k }
        )

    @classmethod
    def load(cls, path : str) -> TypoRuleset:
        """
        Load a ruleset from a JSON file, raising RulesetError if it is unreadable or malformed
        """
        try:
            with open(path, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RulesetError(f"Unable to load typo ruleset from {path}", e)

        if not isinstance(data, Mapping):
            raise RulesetError(f"Typo ruleset {path} must contain a JSON object")

        return cls.from_dict(data)

    @classmethod
    def load_or_default(cls, path : str|None) -> TypoRuleset:
        """
        Load a ruleset if one is available, falling back to an empty ruleset
        """
        if not path:
            return cls()

        if not os.path.exists(path):
            logging.warning(f"Typo ruleset {path} not found, typo checks are disabled")
            return cls()

        try:
            ruleset = cls.load(path)
        except RulesetError as e:
            logging.warning(f"{str(e)}, typo checks are disabled")
            return cls()

        logging.info(f"Loaded {len(ruleset.typos)} typos and {len(ruleset.regex_overrides)} pattern rules from {path}")
        return ruleset

class TypoScanner:
    """
    Advisory scan of content lines for known typos and suspicious patterns.

    All known typos are matched in a single overlapped pass over each line, so a
    typo contained in another typo is reported as well. Pattern rules are applied
    in ruleset order. Text is never modified.
    """
    def __init__(self, ruleset : TypoRuleset|None = None):
        self.ruleset = ruleset or TypoRuleset()
        self._typo_pattern = self._compile_typos(self.ruleset.typos)
        self._pattern_rules = self._compile_rules(self.ruleset.regex_overrides)

    def scan_line(self, text : str, line_number : int) -> list[SubtitleIssue]:
        issues : list[SubtitleIssue] = []

        if self._typo_pattern:
            for match in self._typo_pattern.finditer(text, overlapped=True):
                wrong = match.group(0)
                right = self.ruleset.typos[wrong]
                issues.append(SubtitleIssue(line_number, f"[Typo] '{wrong}' -> '{right}'", IssueCategory.ADVISORY))

        for pattern, tip in self._pattern_rules:
            for match in pattern.finditer(text):
                issues.append(SubtitleIssue(line_number, f"[Pattern] '{match.group(0)}' ({pattern.pattern}) -> {tip}", IssueCategory.ADVISORY))

        return issues

    def scan(self, content_lines : Iterable[ContentLine]) -> list[SubtitleIssue]:
        issues : list[SubtitleIssue] = []
        for content in content_lines:
            issues.extend(self.scan_line(content.text, content.line_number))
        return issues

    def _compile_typos(self, typos : dict[str, str]) -> regex.Pattern|None:
        if not typos:
            return None

        # Longest first, so that at any position the longest known typo wins
        alternatives = sorted(typos.keys(), key=lambda wrong: (-len(wrong), wrong))
        return regex.compile('|'.join(regex.escape(wrong) for wrong in alternatives))

    def _compile_rules(self, overrides : dict[str, str]) -> list[tuple[regex.Pattern, str]]:
        rules = []
        for pattern, tip in overrides.items():
            try:
                rules.append((regex.compile(pattern), tip))
            except regex.error as e:
                logging.warning(f"Skipping invalid typo pattern '{pattern}': {e}")
        return rules
