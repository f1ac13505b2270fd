from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, NamedTuple, Pattern, Tuple

from .decoding import decode_lossy
from .entropy import BASE64_THRESHOLD, HEX_THRESHOLD, MIN_LENGTH, entropy_findings

ENTROPY_REASON = "Entropy"

Span = Tuple[int, int]


class Detection(NamedTuple):
    reason: str
    strings: List[str]


class LineDetector(ABC):
    """Inspects one line of raw bytes at a time."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short detector name, used in logs."""

    @abstractmethod
    def detect(self, line: bytes) -> Iterable[Detection]:
        """Yield zero or more detections for `line`."""


class PatternDetector(LineDetector):
    def __init__(self, rules: Mapping[str, Pattern[bytes]]):
        self._rules: Dict[str, Pattern[bytes]] = dict(rules)

    @property
    def name(self) -> str:
        return "regex"

    @property
    def rules(self) -> Dict[str, Pattern[bytes]]:
        return dict(self._rules)

    def matches(self, line: bytes) -> Dict[str, List[Span]]:
        out: Dict[str, List[Span]] = {}
        for reason, pattern in self._rules.items():
            spans = [m.span() for m in pattern.finditer(line)]
            if spans:
                out[reason] = spans
        return out

    def detect(self, line: bytes) -> Iterable[Detection]:
        for reason, spans in self.matches(line).items():
            secrets = [decode_lossy(line[start:end]) for start, end in spans]
            if any(secrets):
                yield Detection(reason, secrets)


class EntropyDetector(LineDetector):
    def __init__(
        self,
        base64_threshold: float = BASE64_THRESHOLD,
        hex_threshold: float = HEX_THRESHOLD,
        min_length: int = MIN_LENGTH,
    ):
        self.base64_threshold = base64_threshold
        self.hex_threshold = hex_threshold
        self.min_length = min_length

    @property
    def name(self) -> str:
        return "entropy"

    def findings(self, line: bytes) -> List[str]:
        return entropy_findings(
            line,
            base64_threshold=self.base64_threshold,
            hex_threshold=self.hex_threshold,
            min_length=self.min_length,
        )

    def detect(self, line: bytes) -> Iterable[Detection]:
        found = self.findings(line)
        if found:
            yield Detection(ENTROPY_REASON, found)
