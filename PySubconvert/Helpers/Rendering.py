from __future__ import annotations
from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from PySubconvert.ComparisonDiffer import CharacterDiff, ComparisonReport, DiffSegment, RowStatus
from PySubconvert.FileReport import FileReport, ResultStatus
from PySubconvert.Helpers.Text import TruncateText

VISIBLE_SPACE = '·'

DELETED_STYLE = "red"
INSERTED_STYLE = "white on red"

STATUS_STYLES = {
    ResultStatus.SUCCESS: "green",
    ResultStatus.VERIF_WARNING: "yellow",
    ResultStatus.CONVERT_ERROR: "bold red",
    RowStatus.PASS: "green",
    RowStatus.MISMATCH: "red",
    RowStatus.MISSING: "magenta",
    RowStatus.EXTRA: "magenta",
    RowStatus.TIMING: "yellow",
}

def RenderTrack(segments : Sequence[DiffSegment], changed_style : str) -> Text:
    """
    Render one track of a character diff, making spaces visible in changed segments
    """
    text = Text()
    for segment in segments:
        if segment.changed:
            text.append(segment.text.replace(' ', VISIBLE_SPACE), style=changed_style)
        else:
            text.append(segment.text)
    return text

def RenderDiff(diff : CharacterDiff) -> tuple[Text, Text]:
    return RenderTrack(diff.left, DELETED_STYLE), RenderTrack(diff.right, INSERTED_STYLE)

def RenderComparison(report : ComparisonReport, column_width : int = 40, show_passed : bool = False) -> Table:
    """
    Render a comparison as a two-track table: expected text on the left, candidate text on the right
    """
    table = Table(title=f"{report.reference_path or 'reference'} vs {report.candidate_path or 'candidate'}", show_lines=False)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Status")
    table.add_column("Expected", width=column_width, no_wrap=True, overflow="crop")
    table.add_column("Candidate", width=column_width, no_wrap=True, overflow="crop")

    for row in report.rows:
        if row.status == RowStatus.PASS and not show_passed:
            continue

        status = Text(row.status.value, style=STATUS_STYLES[row.status])
        if row.diff is not None:
            left, right = RenderDiff(row.diff)
        elif row.status == RowStatus.TIMING:
            left, right = Text(row.expected or ""), Text(row.message or "", style=STATUS_STYLES[row.status])
        else:
            left = Text(row.expected or "<missing>", style="" if row.expected is not None else "dim")
            right = Text(row.candidate or "<missing>", style="" if row.candidate is not None else "dim")

        table.add_row(f"{row.line_number}", status, left, right)

    counts = report.counts
    table.caption = ", ".join(f"{status.value}: {counts.get(status, 0)}" for status in RowStatus)
    if report.candidate_terminator_ok is False:
        table.caption += " | candidate is missing the final blank line"

    return table

def RenderPreview(report : FileReport, full_preview : bool = False, max_length : int = 60) -> Table:
    """
    Render the converted lines of a file, only the changed ones unless full_preview is set
    """
    table = Table(title=report.output_path or report.input_path)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Original")
    table.add_column("Converted", style="cyan")

    pairs = report.translated_pairs if full_preview else report.changed_pairs
    for pair in pairs:
        table.add_row(f"{pair.line_index}", TruncateText(pair.original_text, max_length), TruncateText(pair.translated_text, max_length))

    return table

def RenderSummary(reports : Sequence[FileReport]) -> Table:
    table = Table(title="Conversion summary")
    table.add_column("File")
    table.add_column("Status")
    table.add_column("Lines", justify="right")
    table.add_column("Changed", justify="right")
    table.add_column("Issues", justify="right")
    table.add_column("Time", justify="right")

    for report in reports:
        issue_count = len(report.issues) + len(report.verification_issues)
        table.add_row(
            report.input_path,
            Text(report.status.value, style=STATUS_STYLES[report.status]),
            f"{len(report.translated_pairs)}",
            f"{len(report.changed_pairs)}",
            f"{issue_count}",
            f"{report.duration.total_seconds():.2f}s"
        )

    return table
