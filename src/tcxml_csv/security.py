"""Pre-flight security scanner for raw XML input.

Rejects dangerous input before the document is handed to the parser: empty
input, entity declarations (billion laughs / XXE prevention) and documents
that are not well-formed.  Size, nesting depth and test-case count are
checked only when the matching ``ConverterConfig`` limit is set.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from tcxml_csv.config import ConverterConfig
from tcxml_csv.errors import ConversionIssue, ErrorCode

logger = logging.getLogger("tcxml_csv")


class XMLSecurityScanner:
    """Run pre-flight checks on raw XML bytes.

    Returns a list of findings.  Every finding has an ``E_*`` code and means
    the input must not be processed further; the scanner stops at the first
    one.
    """

    def __init__(self, config: ConverterConfig) -> None:
        self.config = config

    def scan(self, data: bytes) -> list[ConversionIssue]:
        """Run all pre-flight checks against *data*."""
        issues: list[ConversionIssue] = []

        # --- 1. Empty input ---
        if not data or not data.strip():
            issues.append(
                ConversionIssue(
                    code=ErrorCode.E_INPUT_EMPTY,
                    message="XML input is empty",
                    stage="security",
                )
            )
            return issues

        # --- 2. Size limit ---
        limit_mb = self.config.max_input_size_mb
        if limit_mb is not None and len(data) > limit_mb * 1024 * 1024:
            issues.append(
                ConversionIssue(
                    code=ErrorCode.E_INPUT_TOO_LARGE,
                    message=(
                        f"Input size {len(data)} bytes exceeds limit of "
                        f"{limit_mb * 1024 * 1024} bytes ({limit_mb} MB)"
                    ),
                    stage="security",
                )
            )
            return issues

        # --- 3. Entity declaration scan ---
        raw_upper = data.upper()
        if b"<!ENTITY" in raw_upper:
            issues.append(
                ConversionIssue(
                    code=ErrorCode.E_SECURITY_ENTITY_DECLARATION,
                    message="Input contains <!ENTITY declaration (potential billion laughs / XXE attack)",
                    stage="security",
                )
            )
            return issues

        if b"<!DOCTYPE" in raw_upper:
            doctype_pos = raw_upper.find(b"<!DOCTYPE")
            bracket_pos = data.find(b"[", doctype_pos)
            close_pos = data.find(b">", doctype_pos)
            if bracket_pos != -1 and (close_pos == -1 or bracket_pos < close_pos):
                issues.append(
                    ConversionIssue(
                        code=ErrorCode.E_SECURITY_ENTITY_DECLARATION,
                        message="Input contains <!DOCTYPE with internal subset (potential entity expansion attack)",
                        stage="security",
                    )
                )
                return issues

        # --- 4. Well-formedness ---
        try:
            root = ET.fromstring(data)  # noqa: S314
        except ET.ParseError as exc:
            issues.append(
                ConversionIssue(
                    code=ErrorCode.E_XML_MALFORMED,
                    message=f"Invalid XML: {exc}",
                    stage="security",
                )
            )
            return issues

        # --- 5. Depth check ---
        max_depth = self.config.max_depth
        if max_depth is not None:
            depth = _measure_depth(root)
            if depth > max_depth:
                issues.append(
                    ConversionIssue(
                        code=ErrorCode.E_SECURITY_DEPTH_BOMB,
                        message=f"XML nesting depth {depth} exceeds limit of {max_depth}",
                        stage="security",
                    )
                )
                return issues

        # --- 6. Test-case count ---
        max_test_cases = self.config.max_test_cases
        if max_test_cases is not None:
            count = sum(1 for _ in root.iter("test-case"))
            if count > max_test_cases:
                issues.append(
                    ConversionIssue(
                        code=ErrorCode.E_INPUT_TOO_LARGE,
                        message=(
                            f"Test case count {count} exceeds limit of "
                            f"{max_test_cases}"
                        ),
                        stage="security",
                    )
                )

        return issues


def _measure_depth(element: ET.Element, _current: int = 1) -> int:
    """Measure the maximum nesting depth of an XML tree (iteratively)."""
    max_depth = _current
    stack = [(element, _current)]
    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            max_depth = depth
        stack.extend((child, depth + 1) for child in node)
    return max_depth
