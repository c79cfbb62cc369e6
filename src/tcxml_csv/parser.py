"""Loading and structural validation of test-case XML documents.

``parse_document()`` turns raw bytes into the root ``test`` element, after
the pre-flight scan and the dialect checks below have passed:

1. The root element must be ``<test>``.
2. At least one ``<test-case>`` must exist under it.
3. Every ``<test-case>`` needs a non-empty ``id`` and at least one direct
   step child (``event``, ``request`` or ``q``).

Rules 1 and 2 fail immediately; rule 3 is checked for every test case and
all violations are reported together.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from tcxml_csv.config import ConverterConfig
from tcxml_csv.errors import (
    ErrorCode,
    MalformedInputError,
    ResourceLimitError,
    StructuralValidationError,
)
from tcxml_csv.models import is_step_tag
from tcxml_csv.security import XMLSecurityScanner

logger = logging.getLogger("tcxml_csv")

ROOT_TAG = "test"
TEST_CASE_TAG = "test-case"


def parse_document(data: bytes, config: ConverterConfig | None = None) -> ET.Element:
    """Parse and validate *data*, returning the root element.

    Raises
    ------
    MalformedInputError
        If the input is empty, declares entities or is not well-formed XML.
    ResourceLimitError
        If a limit set in *config* is exceeded.
    StructuralValidationError
        If the document does not follow the test-case dialect.
    """
    config = config or ConverterConfig()

    issues = XMLSecurityScanner(config).scan(data)
    if issues:
        issue = issues[0]
        if issue.code in ResourceLimitError.CODES:
            raise ResourceLimitError.from_issue(issue)
        raise MalformedInputError.from_issue(issue)

    try:
        root = ET.fromstring(data)  # noqa: S314
    except ET.ParseError as exc:
        raise MalformedInputError(
            code=ErrorCode.E_XML_MALFORMED,
            message=f"Invalid XML: {exc}",
            stage="parse",
        ) from exc

    validate_document(root)
    return root


def validate_document(root: ET.Element) -> None:
    """Check *root* against the dialect's structural rules."""
    if root.tag != ROOT_TAG:
        raise StructuralValidationError(
            [f"Invalid XML: expected root element <{ROOT_TAG}>, found <{root.tag}>"],
            code=ErrorCode.E_STRUCTURE_ROOT,
            header=None,
        )

    test_cases = find_test_cases(root)
    if not test_cases:
        raise StructuralValidationError(
            [f"XML contains no test cases (<{TEST_CASE_TAG}>)"],
            code=ErrorCode.E_STRUCTURE_NO_TEST_CASES,
            header=None,
        )

    violations: list[str] = []
    for test_case in test_cases:
        violations.extend(validate_test_case(test_case))

    if violations:
        logger.debug("tcxml_csv | validation | violations=%d", len(violations))
        raise StructuralValidationError(violations)


def validate_test_case(test_case: ET.Element) -> list[str]:
    """Return the violations of a single ``test-case`` element."""
    violations: list[str] = []
    case_id = test_case.get("id", "")
    if not case_id:
        violations.append("Test case without ID")
    if not any(is_step_tag(child.tag) for child in test_case):
        violations.append(f"Test case {case_id} has no steps")
    return violations


def find_test_cases(root: ET.Element) -> list[ET.Element]:
    """All ``test-case`` elements under *root*, in document order."""
    return list(root.iter(TEST_CASE_TAG))
