from __future__ import annotations
from collections.abc import Callable
import logging

from opencc import OpenCC

from PySubconvert.SubtitleError import ConverterError

ConvertFunction = Callable[[str], str]

def create_converter(conversion : str = 's2t') -> ConvertFunction:
    """
    Create a text conversion function backed by the OpenCC conversion tables.

    conversion is an OpenCC configuration name, e.g. 's2t' (characters only)
    or 's2twp' (Taiwan standard with phrase substitution).

    Raises ConverterError if the tables cannot be loaded. This is fatal for the
    whole run, so callers should create the converter before processing any files.
    """
    try:
        converter = OpenCC(conversion)
        converter.convert("")

    except Exception as e:
        raise ConverterError(f"Unable to initialise OpenCC conversion '{conversion}'", e)

    logging.debug(f"Initialised OpenCC conversion '{conversion}'")
    return converter.convert

def create_mapping_converter(mapping : dict[str, str]) -> ConvertFunction:
    """
    Create a character-for-character conversion function from a mapping, e.g. for testing
    """
    table = str.maketrans({ source: target for source, target in mapping.items() if len(source) == 1 })
    phrases = sorted(((s, t) for s, t in mapping.items() if len(s) > 1), key=lambda item: -len(item[0]))

    def convert(text : str) -> str:
        for source, target in phrases:
            text = text.replace(source, target)
        return text.translate(table)

    return convert
