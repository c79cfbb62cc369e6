"""Error codes, structured error model, and raisable exceptions for tcxml-csv.

``ErrorCode`` is the complete code taxonomy.  ``ConversionIssue`` is a
Pydantic model describing a single finding; the exception classes wrap it
so callers can ``raise``/``except`` while still having a serialisable
record of what went wrong.

Four failure families are exposed to callers:

* ``MalformedInputError`` -- the bytes are not a well-formed (or safe)
  XML document.
* ``ResourceLimitError`` -- the document exceeds a configured size, depth
  or test-case limit.
* ``StructuralValidationError`` -- the document is well-formed but breaks
  the test-case dialect; every violation is reported at once.
* ``ConversionFailureError`` -- anything else that went wrong while
  parsing, rendering, or writing.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for XML-to-CSV conversion.

    Values equal their names so they are stable strings suitable for
    logging and alerting.  Every code is fatal (``E_`` prefix).
    """

    # Input / security
    E_INPUT_EMPTY = "E_INPUT_EMPTY"
    E_INPUT_TOO_LARGE = "E_INPUT_TOO_LARGE"
    E_SECURITY_ENTITY_DECLARATION = "E_SECURITY_ENTITY_DECLARATION"
    E_SECURITY_DEPTH_BOMB = "E_SECURITY_DEPTH_BOMB"

    # Parse
    E_XML_MALFORMED = "E_XML_MALFORMED"

    # Dialect structure
    E_STRUCTURE_ROOT = "E_STRUCTURE_ROOT"
    E_STRUCTURE_NO_TEST_CASES = "E_STRUCTURE_NO_TEST_CASES"
    E_STRUCTURE_TEST_CASE = "E_STRUCTURE_TEST_CASE"

    # Unexpected faults
    E_CONVERSION_FAILED = "E_CONVERSION_FAILED"


class ConversionIssue(BaseModel):
    """Structured description of one conversion problem."""

    code: ErrorCode
    message: str
    stage: str | None = None
    recoverable: bool = False


class TestCaseConversionError(Exception):
    """Base exception for all conversion failures.

    Carries the structured ``ConversionIssue`` as the ``.issue`` attribute
    for inspection and serialization.
    """

    __test__ = False  # keep pytest from collecting this as a test class

    def __init__(self, **kwargs: object) -> None:
        self.issue = ConversionIssue(**kwargs)  # type: ignore[arg-type]
        super().__init__(self.issue.message)

    @property
    def code(self) -> ErrorCode:
        return self.issue.code

    @property
    def message(self) -> str:
        return self.issue.message

    @property
    def stage(self) -> str | None:
        return self.issue.stage


class MalformedInputError(TestCaseConversionError):
    """The input is empty, not a well-formed XML document, or declares
    entities."""

    @classmethod
    def from_issue(cls, issue: ConversionIssue) -> MalformedInputError:
        return cls(**issue.model_dump())


class ResourceLimitError(TestCaseConversionError):
    """The input exceeds one of the opt-in limits of ``ConverterConfig``."""

    CODES = frozenset({ErrorCode.E_INPUT_TOO_LARGE, ErrorCode.E_SECURITY_DEPTH_BOMB})

    @classmethod
    def from_issue(cls, issue: ConversionIssue) -> ResourceLimitError:
        return cls(**issue.model_dump())


class StructuralValidationError(TestCaseConversionError):
    """The document is well-formed but violates the test-case dialect.

    ``violations`` holds every individual violation message; the exception
    message is a header followed by all of them, one per line.
    """

    HEADER = "XML validation failed:"

    def __init__(
        self,
        violations: list[str],
        code: ErrorCode = ErrorCode.E_STRUCTURE_TEST_CASE,
        header: str | None = HEADER,
    ) -> None:
        self.violations = list(violations)
        lines = ([header] if header else []) + self.violations
        super().__init__(
            code=code,
            message="\n".join(lines),
            stage="validate",
        )


class ConversionFailureError(TestCaseConversionError):
    """Any unexpected fault during parsing, rendering, or writing.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, stage: str, detail: str) -> None:
        super().__init__(
            code=ErrorCode.E_CONVERSION_FAILED,
            message=f"Conversion failed during {stage}: {detail}",
            stage=stage,
        )
