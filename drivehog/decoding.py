from __future__ import annotations
import logging
from typing import List, NamedTuple

logger = logging.getLogger(__name__)

DECODE_ERROR = "<STRING DECODE ERROR>"
LINE_DELIMITER = b"\n"
ENCODING = "ascii"


class DecodeResult(NamedTuple):
    text: str
    # True when some bytes were not valid ASCII and were dropped from `text`
    degraded: bool


def split_lines(buffer: bytes) -> List[bytes]:
    # bytes.split keeps empty segments, so joining on the delimiter is lossless
    return buffer.split(LINE_DELIMITER)


def decode_segment(segment: bytes) -> DecodeResult:
    try:
        return DecodeResult(segment.decode(ENCODING), False)
    except UnicodeDecodeError:
        pass
    try:
        return DecodeResult(segment.decode(ENCODING, errors="ignore"), True)
    except (UnicodeError, LookupError):
        logger.warning("could not decode %d byte segment", len(segment))
        return DecodeResult(DECODE_ERROR, True)


def decode_lossy(segment: bytes) -> str:
    """Best-effort text for a matched substring; invalid bytes are dropped."""
    return decode_segment(segment).text


def render(result: DecodeResult) -> str:
    """Text shown to a human: a degraded decode collapses to the sentinel."""
    if result.degraded:
        return DECODE_ERROR
    return result.text
