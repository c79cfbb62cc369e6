"""tcxml-csv -- test-case XML to test-management CSV converter.

Public API re-exports for convenient access.
"""

from tcxml_csv.config import ConverterConfig
from tcxml_csv.converter import TestCaseConverter, convert, output_file_name
from tcxml_csv.csv_writer import CSV_HEADER, write_csv
from tcxml_csv.errors import (
    ConversionFailureError,
    ConversionIssue,
    ErrorCode,
    MalformedInputError,
    ResourceLimitError,
    StructuralValidationError,
    TestCaseConversionError,
)
from tcxml_csv.json_format import format_json
from tcxml_csv.models import (
    ConversionParams,
    EventStep,
    FieldResult,
    QuestionStep,
    RequestStep,
    StateResult,
    Step,
    TestCase,
)
from tcxml_csv.security import XMLSecurityScanner

__all__ = [
    "TestCaseConverter",
    "ConverterConfig",
    "ConversionParams",
    "convert",
    "output_file_name",
    "write_csv",
    "CSV_HEADER",
    "format_json",
    "ErrorCode",
    "ConversionIssue",
    "TestCaseConversionError",
    "MalformedInputError",
    "ResourceLimitError",
    "StructuralValidationError",
    "ConversionFailureError",
    "TestCase",
    "Step",
    "EventStep",
    "RequestStep",
    "QuestionStep",
    "StateResult",
    "FieldResult",
    "XMLSecurityScanner",
]
