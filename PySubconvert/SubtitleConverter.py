from __future__ import annotations
from collections.abc import Sequence
import logging
import time
from datetime import datetime, timedelta

from PySubconvert.AuditLog import WriteAuditLog
from PySubconvert.ConversionApplier import ConversionApplier
from PySubconvert.ConversionEvents import ConversionEvents
from PySubconvert.Diagnostics import TypoRuleset, audit_translation, needs_terminator_fix
from PySubconvert.FileReport import FileReport, ResultStatus, TranslatedPair
from PySubconvert.Helpers import GetLogPath, GetOutputPath
from PySubconvert.LineClassifier import is_script_format
from PySubconvert.Options import Options
from PySubconvert.ScriptConverter import ConvertFunction, create_converter
from PySubconvert.SectionTracker import ConversionContext
from PySubconvert.SubtitleDiagnostics import SubtitleDiagnostics
from PySubconvert.SubtitleError import SubtitleError
from PySubconvert.SubtitleReader import read_subtitle_file, split_lines

def convert_subtitle_lines(lines : Sequence[str], applier : ConversionApplier) -> list[TranslatedPair]:
    """
    Convert the lines of one file, keeping a pair for every line so that indexes stay continuous
    """
    pairs : list[TranslatedPair] = []
    context = ConversionContext()
    for line in lines:
        context, translated = applier.process_line(context, line)
        pairs.append(TranslatedPair(context.line_number, line, translated))
    return pairs

def convert_file(input_path : str, output_path : str, applier : ConversionApplier, fix_terminator : bool|None = None) -> list[TranslatedPair]:
    """
    Convert a subtitle file, writing the result as UTF-8.

    If fix_terminator is True a blank line is appended to the output. When it is None,
    the blank line is added if the input is timed text that lacks one.
    The input file is never modified.

    Raises SubtitleInputError if the input cannot be read, OSError if the output cannot be written.
    """
    subtitle_text = read_subtitle_file(input_path)
    lines = subtitle_text.lines

    if fix_terminator is None:
        fix_terminator = not is_script_format(lines, input_path) and needs_terminator_fix(subtitle_text.line_data)

    pairs = convert_subtitle_lines(lines, applier)

    content = ''.join(f"{pair.translated_text}\n" for pair in pairs)
    if fix_terminator:
        content += "\n"

    with open(output_path, 'w', encoding='utf-8', newline='') as output_file:
        output_file.write(content)

    logging.debug(f"Converted {len(pairs)} lines from {input_path} to {output_path}")
    return pairs

class SubtitleConverter:
    """
    Converts a batch of subtitle files, one at a time.

    Each file is diagnosed, converted, then verified against its output. A failure
    on one file is recorded in its report and does not stop the batch.

    The conversion function is created up front, so a missing conversion table
    raises ConverterError before any file is touched.
    """
    def __init__(self, options : Options|None = None, convert_fn : ConvertFunction|None = None, ruleset : TypoRuleset|None = None, events : ConversionEvents|None = None):
        self.options = options or Options()
        self.applier = ConversionApplier(convert_fn or create_converter(self.options.conversion))
        self.ruleset = ruleset if ruleset is not None else TypoRuleset.load_or_default(self.options.typo_file)
        self.diagnostics = SubtitleDiagnostics(self.ruleset, self.options, self.applier.guard)
        self.events = events or ConversionEvents()

    def ConvertFiles(self, paths : Sequence[str], output_dir : str|None = None) -> list[FileReport]:
        reports = []
        for index, path in enumerate(paths, 1):
            logging.info(f"[{index}/{len(paths)}] Converting {path}")
            reports.append(self.ConvertFile(path, output_dir=output_dir))
        return reports

    def ConvertFile(self, input_path : str, output_path : str|None = None, output_dir : str|None = None) -> FileReport:
        """
        Diagnose, convert and verify a single file
        """
        self.events.file_started.send(self, path=input_path)
        start_time = time.monotonic()

        output_path = output_path or GetOutputPath(input_path, self.options.get_str('output_tag'), output_dir)
        report = FileReport(input_path=input_path, output_path=output_path)

        try:
            report.issues = self.diagnostics.diagnose_file(input_path)
            subtitle_text = read_subtitle_file(input_path)
            original_lines = subtitle_text.lines

            script_format = is_script_format(original_lines, input_path)
            report.terminator_fixed = self.options.fix_terminator and not script_format and needs_terminator_fix(subtitle_text.line_data)

            report.translated_pairs = convert_file(input_path, output_path, self.applier, report.terminator_fixed)
            report.verification_issues = self._verify_output(original_lines, output_path, report.terminator_fixed)

        except (SubtitleError, OSError) as e:
            logging.error(f"Failed to convert {input_path}: {str(e)}")
            report.status = ResultStatus.CONVERT_ERROR
            report.output_path = None
            report.error = str(e)

        except Exception as e:
            logging.exception(f"Unexpected error converting {input_path}")
            report.status = ResultStatus.CONVERT_ERROR
            report.output_path = None
            report.error = f"{type(e).__name__}: {str(e)}"

        else:
            has_defects = any(not issue.is_advisory for issue in report.issues)
            if report.terminator_fixed or has_defects or report.verification_issues:
                report.status = ResultStatus.VERIF_WARNING

            if report.terminator_fixed:
                logging.warning(f"{input_path} was missing the final blank line, it has been added to the output")

        report.duration = timedelta(seconds=time.monotonic() - start_time)

        for issue in report.issues + report.verification_issues:
            self.events.issue_found.send(self, path=input_path, issue=issue)

        self._write_audit_log(report)

        if report.succeeded:
            self.events.file_converted.send(self, report=report)
        else:
            self.events.file_failed.send(self, report=report)

        return report

    def _verify_output(self, original_lines : list[str], output_path : str, terminator_fixed : bool) -> list:
        """
        Re-read the written output and audit it against the source lines
        """
        with open(output_path, 'r', encoding='utf-8', newline='') as output_file:
            output_lines = split_lines(output_file.read())

        if terminator_fixed and output_lines and output_lines[-1] == '':
            output_lines.pop()

        return audit_translation(original_lines, output_lines)

    def _write_audit_log(self, report : FileReport) -> None:
        log_directory = self.options.log_directory
        if not log_directory:
            return

        date_format = self.options.get_str('log_file_date_format') or "%Y-%m-%d"
        log_filename = self.options.GetLogFilename(report.input_path, datetime.now().strftime(date_format))
        log_path = GetLogPath(log_directory, log_filename)

        try:
            WriteAuditLog(report, log_path)
            report.log_path = log_path
        except OSError as e:
            logging.warning(f"Unable to write audit log {log_path}: {str(e)}")
