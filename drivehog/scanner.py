from __future__ import annotations
import logging
from typing import Any, Dict, List, Pattern, Set

from .config import compile_custom_patterns
from .decoding import decode_segment, render, split_lines
from .drive import DocumentClient
from .detectors import Detection, EntropyDetector, LineDetector, PatternDetector
from .entropy import BASE64_THRESHOLD, HEX_THRESHOLD, MIN_LENGTH
from .models import FileInfo, Finding
from .patterns import PATTERNS

logger = logging.getLogger(__name__)


def build_finding(file_info: FileInfo, line: bytes, detection: Detection) -> Finding:
    decoded = decode_segment(line)
    if decoded.degraded:
        logger.debug("line in %s is not clean ascii, context replaced", file_info.file_id)
    return Finding(
        date=file_info.modified_time,
        diff=render(decoded),
        path=file_info.path,
        strings_found=tuple(detection.strings),
        g_drive_id=file_info.file_id,
        reason=detection.reason,
        web_link=file_info.web_link,
    )


class Scanner:
    """
    Read-only detector configuration plus the per-document scan loop.
    Build once (directly or with ScannerBuilder) and share between scans;
    nothing here is mutated while scanning.
    """

    def __init__(
        self,
        pattern_detector: PatternDetector | None = None,
        entropy_detector: EntropyDetector | None = None,
        scan_entropy: bool = False,
    ):
        self.pattern_detector = pattern_detector or PatternDetector(PATTERNS)
        self.entropy_detector = entropy_detector or EntropyDetector()
        # used when a scan call leaves scan_entropy unset
        self.scan_entropy = scan_entropy

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Scanner":
        ent = cfg.get("entropy") or {}
        return (
            ScannerBuilder()
            .with_rules({**PATTERNS, **compile_custom_patterns(cfg)})
            .with_entropy_thresholds(
                base64_threshold=float(ent.get("base64_threshold", BASE64_THRESHOLD)),
                hex_threshold=float(ent.get("hex_threshold", HEX_THRESHOLD)),
                min_length=int(ent.get("min_length", MIN_LENGTH)),
            )
            .with_scan_entropy(bool(cfg.get("scan_entropy", False)))
            .build()
        )

    def detectors(self, scan_entropy: bool | None = None) -> List[LineDetector]:
        if scan_entropy is None:
            scan_entropy = self.scan_entropy
        active: List[LineDetector] = [self.pattern_detector]
        if scan_entropy:
            active.append(self.entropy_detector)
        return active

    def scan_content(self, content: bytes, file_info: FileInfo, scan_entropy: bool | None = None) -> Set[Finding]:
        detectors = self.detectors(scan_entropy)
        findings: Set[Finding] = set()
        for line in split_lines(content):
            for detector in detectors:
                for detection in detector.detect(line):
                    findings.add(build_finding(file_info, line, detection))
        return findings

    def perform_scan(self, file_info: FileInfo, client: DocumentClient, scan_entropy: bool | None = None) -> Set[Finding]:
        """
        Export the document through `client` and scan it line by line.
        A RetrievalError from the export propagates and no findings are returned.
        With scan_entropy left as None the scanner's configured default applies.
        """
        content = client.export(file_info.file_id, file_info.mime_type)
        findings = self.scan_content(content, file_info, scan_entropy)
        logger.debug("scanned %s (%d bytes): %d findings", file_info.path, len(content), len(findings))
        return findings


class ScannerBuilder:
    def __init__(self):
        self._rules: Dict[str, Pattern[bytes]] = dict(PATTERNS)
        self._entropy: Dict[str, Any] = {}
        self._scan_entropy = False

    def with_rules(self, rules: Dict[str, Pattern[bytes]]) -> "ScannerBuilder":
        self._rules = dict(rules)
        return self

    def add_rule(self, name: str, pattern: Pattern[bytes]) -> "ScannerBuilder":
        self._rules[name] = pattern
        return self

    def with_entropy_thresholds(self, **kwargs: Any) -> "ScannerBuilder":
        self._entropy.update(kwargs)
        return self

    def with_scan_entropy(self, enabled: bool) -> "ScannerBuilder":
        self._scan_entropy = enabled
        return self

    def build(self) -> Scanner:
        return Scanner(PatternDetector(self._rules), EntropyDetector(**self._entropy), self._scan_entropy)


_default_scanner: Scanner | None = None


def perform_scan(
    file_info: FileInfo,
    client: DocumentClient,
    scan_entropy: bool | None = None,
    scanner: Scanner | None = None,
) -> Set[Finding]:
    global _default_scanner
    if scanner is None:
        if _default_scanner is None:
            _default_scanner = Scanner()
        scanner = _default_scanner
    return scanner.perform_scan(file_info, client, scan_entropy)
