"""
PySubconvert - Simplified to Traditional Chinese subtitle conversion

Converts the text of SRT and SSA/ASS subtitle files while leaving timing,
structure, styling and override tags untouched, and reports defects and
suspicious text found along the way.

Basic Usage
-----------

# Configure options
opts = init_options(phrase_mode=True, typo_file="typos.json")

# Convert a single line
applier = init_converter(opts)
convert_line("这个软件", applier=applier)

# Diagnose a file without converting it
issues = diagnose_file("movie.srt", options=opts)

# Convert a batch of files
converter = SubtitleConverter(opts)
reports = converter.ConvertFiles(["movie.srt", "episode.ass"])

# Compare a converted file with the expected conversion of its source
report = compare_files("movie.srt", "movie.zh-Hant.srt", applier)
"""
from __future__ import annotations

from PySubconvert.ComparisonDiffer import ComparisonReport, compare_files, compare_lines
from PySubconvert.ConversionApplier import ConversionApplier
from PySubconvert.ConversionEvents import ConversionEvents
from PySubconvert.Diagnostics import TypoRuleset
from PySubconvert.FileReport import FileReport, ResultStatus, TranslatedPair
from PySubconvert.Options import LoadSettingsFile, Options
from PySubconvert.ScriptConverter import ConvertFunction, create_converter
from PySubconvert.SettingsType import SettingType, SettingsType
from PySubconvert.SubtitleConverter import SubtitleConverter, convert_file
from PySubconvert.SubtitleDiagnostics import SubtitleDiagnostics, diagnose_file
from PySubconvert.SubtitleError import ConverterError, SubtitleError, SubtitleInputError
from PySubconvert.SubtitleIssue import SubtitleIssue
from PySubconvert.version import __version__

def init_options(**settings : SettingType) -> Options:
    """
    Create an :class:`Options` instance for a conversion run.

    Settings that are not specified are given default values, e.g.

    opts = init_options(phrase_mode=True, log_directory="./logs")
    """
    return Options(SettingsType(settings))

def init_converter(options : Options|None = None, convert_fn : ConvertFunction|None = None) -> ConversionApplier:
    """
    Create a :class:`ConversionApplier` using the conversion configured in options.

    Raises ConverterError if the conversion tables cannot be loaded.
    """
    options = options or Options()
    return ConversionApplier(convert_fn or create_converter(options.conversion))

def convert_line(line : str, section : str = "", applier : ConversionApplier|None = None) -> str:
    """
    Convert a single line outside of any file context
    """
    applier = applier or init_converter()
    return applier.apply(line, section)

__all__ = [
    '__version__',
    'ComparisonReport',
    'ConversionApplier',
    'ConversionEvents',
    'ConverterError',
    'FileReport',
    'LoadSettingsFile',
    'Options',
    'ResultStatus',
    'SettingsType',
    'SubtitleConverter',
    'SubtitleDiagnostics',
    'SubtitleError',
    'SubtitleInputError',
    'SubtitleIssue',
    'TranslatedPair',
    'TypoRuleset',
    'compare_files',
    'compare_lines',
    'convert_file',
    'convert_line',
    'diagnose_file',
    'init_converter',
    'init_options',
]
