from PySubconvert.SubtitleIssue import FILE_LEVEL, IssueCategory, SubtitleIssue

VALID_TERMINATORS = (b"\n\n", b"\n\r\n")

def needs_terminator_fix(data : bytes) -> bool:
    """
    True unless the data ends with a blank line, i.e. two consecutive line terminators.

    Covers empty files, one-byte files and files ending in a single newline.
    """
    return not data.endswith(VALID_TERMINATORS)

def check_terminator(data : bytes) -> list[SubtitleIssue]:
    if not needs_terminator_fix(data):
        return []

    return [ SubtitleIssue(FILE_LEVEL, "File ending is damaged: missing the blank line required after the last subtitle", IssueCategory.STRUCTURAL) ]
