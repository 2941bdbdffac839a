from __future__ import annotations
from datetime import datetime
import os

from PySubconvert.FileReport import FileReport

SEPARATOR = "-" * 40

def FormatAuditEntry(report : FileReport, timestamp : datetime|None = None) -> str:
    """
    Format the audit log entry for a converted file
    """
    timestamp = timestamp or datetime.now()
    lines = [
        "",
        f"Batch: {timestamp.strftime('%Y-%m-%d %H:%M:%S')} | Source: {report.input_path} | Output: {report.output_path or 'N/A'}"
    ]
    lines.extend(str(issue) for issue in report.issues)
    lines.extend(f"{str(issue)} (verification)" for issue in report.verification_issues)
    if report.error:
        lines.append(f"Error: {report.error}")
    lines.append(f"[ Status: {report.status.value} ]")
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"

def WriteAuditLog(report : FileReport, log_path : str) -> None:
    """
    Append an entry for the report to the audit log, creating the log directory if needed
    """
    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    with open(log_path, 'a', encoding='utf-8') as log_file:
        log_file.write(FormatAuditEntry(report))
