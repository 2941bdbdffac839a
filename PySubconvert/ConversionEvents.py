from blinker import Signal

class ConversionEvents:
    """
    Container for blinker signals emitted while converting a batch of files.

    Signals:
        file_started(sender, path):
            Emitted before a file is read

        file_converted(sender, report):
            Emitted after a file has been converted and verified

        file_failed(sender, report):
            Emitted when a file could not be converted; the batch continues

        issue_found(sender, path, issue):
            Emitted for each diagnostic or verification issue in a file
    """
    file_started: Signal
    file_converted: Signal
    file_failed: Signal
    issue_found: Signal

    def __init__(self):
        self.file_started = Signal("conversion-file-started")
        self.file_converted = Signal("conversion-file-converted")
        self.file_failed = Signal("conversion-file-failed")
        self.issue_found = Signal("conversion-issue-found")
