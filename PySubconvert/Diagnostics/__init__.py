"""
PySubconvert.Diagnostics - checks over subtitle files and conversion results

Structural checks (timing order, file terminator) report recoverable defects.
Lexical checks (typos, inconsistent terms, redundant lines) are advisory only.
"""
from PySubconvert.Diagnostics.ConsistencyClusterer import ConsistencyClusterer
from PySubconvert.Diagnostics.ContentLines import ContentLine, iter_content_lines
from PySubconvert.Diagnostics.RedundancyDetector import RedundancyDetector
from PySubconvert.Diagnostics.TerminatorChecker import check_terminator, needs_terminator_fix
from PySubconvert.Diagnostics.TimingValidator import TimingValidator
from PySubconvert.Diagnostics.TranslationAuditor import audit_translation
from PySubconvert.Diagnostics.TypoScanner import TypoRuleset, TypoScanner
