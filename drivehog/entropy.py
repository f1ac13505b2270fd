import math
from typing import List

BASE64_CHARS = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/="
HEX_CHARS = b"1234567890abcdefABCDEF"

BASE64_THRESHOLD = 4.5
HEX_THRESHOLD = 3.0
MIN_LENGTH = 20


def shannon_entropy(s: str) -> float:
    if not s:
        return 0.0
    # calculate character distribution
    freq = {}
    for ch in s:
        freq[ch] = freq.get(ch, 0) + 1
    entropy = 0.0
    length = len(s)
    for count in freq.values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


def strings_of_set(word: bytes, charset: bytes, min_length: int = MIN_LENGTH) -> List[str]:
    """Runs of `word` made only of `charset` bytes that are at least `min_length` long."""
    allowed = set(charset)
    found: List[str] = []
    run = bytearray()
    for b in word:
        if b in allowed:
            run.append(b)
            continue
        if len(run) >= min_length:
            found.append(run.decode("ascii"))
        run.clear()
    if len(run) >= min_length:
        found.append(run.decode("ascii"))
    return found


def entropy_findings(
    line: bytes,
    base64_threshold: float = BASE64_THRESHOLD,
    hex_threshold: float = HEX_THRESHOLD,
    min_length: int = MIN_LENGTH,
) -> List[str]:
    found: List[str] = []
    for word in line.split():
        for s in strings_of_set(word, BASE64_CHARS, min_length):
            if shannon_entropy(s) > base64_threshold:
                found.append(s)
        for s in strings_of_set(word, HEX_CHARS, min_length):
            if shannon_entropy(s) > hex_threshold:
                found.append(s)
    return found
