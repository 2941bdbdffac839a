"""
Classification of raw subtitle lines.

Every pass over a file (conversion, diagnostics, auditing and comparison) must
use these predicates rather than its own copy, so that all passes agree on
which lines carry subtitle framing.
"""
BYTE_ORDER_MARK = '\ufeff'
TIMESTAMP_ARROW = '-->'

# Longer runs of digits are treated as subtitle text rather than a sequence index
MAX_INDEX_DIGITS = 10

def is_structural(line : str) -> bool:
    """
    True if the line is subtitle framing: blank, a timestamp range or a bare sequence index
    """
    text = line.strip()
    if not text or TIMESTAMP_ARROW in text:
        return True

    return len(text) < MAX_INDEX_DIGITS and text.isascii() and text.isdigit()

def is_section_header(line : str) -> bool:
    """
    True if the whole trimmed line is wrapped in a single pair of square brackets, e.g. [Events]
    """
    text = line.strip()
    if len(text) < 2 or not (text.startswith('[') and text.endswith(']')):
        return False

    inner = text[1:-1]
    return '[' not in inner and ']' not in inner

def strip_bom(text : str) -> str:
    """
    Remove byte order marks, which some editors leave at the start of a file (or of concatenated files)
    """
    return text.replace(BYTE_ORDER_MARK, '')

SCRIPT_EXTENSIONS = ('.ass', '.ssa')
SCRIPT_SECTIONS = ('[Script Info]', '[V4+ Styles]', '[V4 Styles]', '[Events]')

def is_script_format(lines : list[str], path : str|None = None) -> bool:
    """
    True for sectioned script/styling files (SSA/ASS) as opposed to line-based timed text (SRT).

    Recognised by a .ass or .ssa extension, or by the presence of a known section header.
    """
    if path and path.lower().endswith(SCRIPT_EXTENSIONS):
        return True

    return any(line.strip() in SCRIPT_SECTIONS for line in lines)
