import logging
import sys

from check_imports import check_required_imports
check_required_imports(['PySubconvert', 'opencc', 'rich', 'rapidfuzz'])

from subconvert_common import (
    InitLogger,
    CreateArgParser,
    CreateOptions,
)

from rich.console import Console

from PySubconvert import SubtitleConverter, compare_files, init_converter
from PySubconvert.ConversionApplier import ConversionApplier
from PySubconvert.Diagnostics import TypoRuleset
from PySubconvert.FileReport import FileReport
from PySubconvert.Helpers.Rendering import RenderComparison, RenderPreview, RenderSummary
from PySubconvert.Options import Options
from PySubconvert.SubtitleDiagnostics import SubtitleDiagnostics
from PySubconvert.SubtitleError import ConverterError, SubtitleError
from PySubconvert.SubtitleIssue import IssueCategory

console = Console()

def ConvertStdin(applier : ConversionApplier) -> int:
    """ Convert standard input line by line, with no section context """
    for line in sys.stdin:
        text = line.rstrip('\r\n')
        sys.stdout.write(applier.apply(text) + "\n")
    return 0

def CompareFiles(applier : ConversionApplier, options : Options, reference_path : str, candidate_path : str) -> int:
    try:
        report = compare_files(reference_path, candidate_path, applier)
    except SubtitleError as e:
        logging.error(str(e))
        return 1

    column_width = options.get_int('compare_column_width') or 40
    console.print(RenderComparison(report, column_width=column_width, show_passed=options.get_bool('full_preview')))
    return 0 if report.passed else 1

def DiagnoseFiles(options : Options, paths : list[str]) -> int:
    diagnostics = SubtitleDiagnostics(TypoRuleset.load_or_default(options.typo_file), options)
    failed = False
    for path in paths:
        issues = diagnostics.diagnose_file(path)
        console.print(f"[bold]{path}[/bold]: {len(issues)} issues")
        for issue in issues:
            style = "dim" if issue.is_advisory else "yellow"
            console.print(f"  {str(issue)}", style=style, markup=False, highlight=False)
        failed = failed or any(issue.category == IssueCategory.INPUT for issue in issues)
    return 1 if failed else 0

def ConvertFiles(applier : ConversionApplier, options : Options, paths : list[str], output_dir : str|None) -> int:
    converter = SubtitleConverter(options, convert_fn=applier.convert_fn)

    def on_file_converted(sender, report : FileReport):
        console.print(f"[green]{report.status.value}[/green] {report.input_path} -> {report.output_path}")
        if options.verbosity > 0 and report.translated_pairs:
            console.print(RenderPreview(report, full_preview=options.get_bool('full_preview')))

    def on_file_failed(sender, report : FileReport):
        console.print(f"[bold red]{report.status.value}[/bold red] {report.input_path}: {report.error}")

    converter.events.file_converted.connect(on_file_converted)
    converter.events.file_failed.connect(on_file_failed)

    reports = converter.ConvertFiles(paths, output_dir=output_dir)
    console.print(RenderSummary(reports))

    return 0 if all(report.succeeded for report in reports) else 1

parser = CreateArgParser("Converts Simplified Chinese subtitles to Traditional Chinese")
args = parser.parse_args()

options : Options = CreateOptions(args)
logger_options = InitLogger("cw-subconvert", args.debug, options)
logging.debug(f"Effective options: {dict(options)}")

if not (args.files or args.compare or args.stdin):
    parser.print_help()
    sys.exit(1)

try:
    applier = init_converter(options)
    logging.debug(f"Using conversion '{options.conversion}'")

    if args.stdin:
        exit_code = ConvertStdin(applier)
    elif args.compare:
        exit_code = CompareFiles(applier, options, args.compare[0], args.compare[1])
    elif args.diagnose:
        exit_code = DiagnoseFiles(options, args.files)
    else:
        exit_code = ConvertFiles(applier, options, args.files, args.output_dir)

except ConverterError as e:
    logging.error(str(e))
    sys.exit(1)

sys.exit(exit_code)
