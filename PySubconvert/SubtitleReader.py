from __future__ import annotations
from dataclasses import dataclass
import codecs
import logging

import chardet
import regex

from PySubconvert.LineClassifier import strip_bom
from PySubconvert.SubtitleError import SubtitleInputError

# Confidence below which a detected encoding is not trusted
MIN_DETECTION_CONFIDENCE = 0.2

@dataclass
class SubtitleText:
    """
    Decoded subtitle file content
    """
    raw : bytes
    text : str
    encoding : str

    @property
    def lines(self) -> list[str]:
        return split_lines(self.text)

    @property
    def line_data(self) -> bytes:
        """
        The content as bytes in which line terminators are single ASCII bytes.

        This is the raw data unless the encoding is not ASCII compatible (e.g. UTF-16),
        in which case the decoded text is re-encoded as UTF-8.
        """
        if is_ascii_compatible(self.encoding):
            return self.raw
        return self.text.encode('utf-8')

def is_ascii_compatible(encoding : str) -> bool:
    try:
        return "\r\n".encode(encoding) == b"\r\n"
    except LookupError:
        return False

_LINE_BREAK = regex.compile(r'\r\n|\r|\n')

def split_lines(text : str) -> list[str]:
    """
    Split text into lines without terminators or byte order marks.

    Lines end at a newline, a carriage return and newline pair or a lone carriage return.
    A final terminator does not start a new line.
    """
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == '':
        lines.pop()

    return [ strip_bom(line) for line in lines ]

def decode_subtitle_bytes(raw : bytes) -> tuple[str, str]:
    """
    Decode raw bytes, returning the text and the encoding used.

    UTF-8 is tried first, then the encoding detected by chardet.
    """
    if raw.startswith(codecs.BOM_UTF8):
        return raw.decode('utf-8-sig'), 'utf-8-sig'

    try:
        return raw.decode('utf-8'), 'utf-8'
    except UnicodeDecodeError:
        pass

    detection = chardet.detect(raw)
    encoding = detection.get('encoding')
    confidence = detection.get('confidence') or 0.0
    if not encoding or confidence < MIN_DETECTION_CONFIDENCE:
        raise SubtitleInputError(f"Unable to detect the text encoding (best guess {encoding}, confidence {confidence:.2f})")

    try:
        text = raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise SubtitleInputError(f"Unable to decode the file as {encoding}", e)

    logging.debug(f"Detected encoding {encoding} with confidence {confidence:.2f}")
    return text, encoding

def read_subtitle_file(path : str) -> SubtitleText:
    """
    Read and decode a subtitle file.

    Raises SubtitleInputError if the file cannot be read or decoded.
    """
    try:
        with open(path, 'rb') as f:
            raw = f.read()
    except OSError as e:
        raise SubtitleInputError(f"Unable to read {path}", e)

    text, encoding = decode_subtitle_bytes(raw)
    return SubtitleText(raw=raw, text=strip_bom(text), encoding=encoding)
