import regex

# CJK Unified Ideographs and Extension A
HAN_CHARACTER = r'[\u3400-\u4DBF\u4E00-\u9FFF]'

_HAN_PATTERN = regex.compile(HAN_CHARACTER)
_HAN_RUN_PATTERN = regex.compile(HAN_CHARACTER + '+')

def StripHanCharacters(text : str) -> str:
    """
    Remove Han characters, leaving the text that script conversion should never touch
    """
    return _HAN_PATTERN.sub('', text)

def FindHanRuns(text : str) -> list[str]:
    """
    Find maximal runs of consecutive Han characters
    """
    return _HAN_RUN_PATTERN.findall(text)

def TruncateText(text : str, max_length : int, ellipsis : str = "...") -> str:
    if len(text) <= max_length:
        return text
    return text[:max(0, max_length - len(ellipsis))] + ellipsis
