"""TestCaseConverter -- orchestrator and public API for XML-to-CSV conversion.

Routes one XML document through the full pipeline:

1. Pre-flight scan and parse via :func:`parse_document`.
2. Structural validation of the test-case dialect.
3. Per ``test-case``: mock-data preconditions and step grouping.
4. Assemble :class:`TestCase` records.
5. Serialize to BOM-prefixed CSV via :func:`write_csv`.

Malformed input, exceeded limits and dialect violations propagate
unchanged; any other fault is wrapped in :class:`ConversionFailureError`
naming the failing stage.
"""

from __future__ import annotations

import asyncio
import logging
import time
import xml.etree.ElementTree as ET
from pathlib import Path

from tcxml_csv.config import ConverterConfig
from tcxml_csv.csv_writer import write_csv
from tcxml_csv.errors import ConversionFailureError, TestCaseConversionError
from tcxml_csv.grouping import group_steps
from tcxml_csv.mock_data import render_preconditions
from tcxml_csv.models import ConversionParams, TestCase, file_stem
from tcxml_csv.parser import find_test_cases, parse_document

logger = logging.getLogger("tcxml_csv")

DEFAULT_OUTPUT_NAME = "conversion-result.csv"
_SAMPLE_BYTES = 200


def output_file_name(file_name: str | None) -> str:
    """Name of the CSV produced for an input file called *file_name*."""
    stem = file_stem(file_name)
    if not stem:
        return DEFAULT_OUTPUT_NAME
    return f"{stem}.csv"


def build_test_case(
    element: ET.Element,
    params: ConversionParams,
    config: ConverterConfig,
) -> TestCase:
    """Build a :class:`TestCase` from a validated ``test-case`` element."""
    return TestCase.create(
        name=element.get("id", ""),
        precondition=render_preconditions(element, config.json_indent),
        steps=group_steps(element),
        params=params,
    )


class TestCaseConverter:
    """Top-level orchestrator for the conversion pipeline.

    Parameters
    ----------
    config:
        Converter configuration.  Uses defaults when *None*.

    The instance holds no per-call state and may be shared between threads.
    """

    __test__ = False  # keep pytest from collecting this as a test class

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self._config = config or ConverterConfig()

    @property
    def config(self) -> ConverterConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_test_cases(
        self,
        data: bytes | str,
        params: ConversionParams | None = None,
    ) -> list[TestCase]:
        """Parse *data* into test-case records without writing CSV."""
        params = params or ConversionParams()
        raw = data.encode("utf-8") if isinstance(data, str) else data

        if self._config.log_sample_data:
            logger.debug(
                "tcxml_csv | file=%s | sample=%r",
                params.file_name,
                raw[:_SAMPLE_BYTES],
            )

        # ==============================================================
        # Step 1-2: Parse and validate
        # ==============================================================
        try:
            root = parse_document(raw, self._config)
        except TestCaseConversionError:
            raise
        except Exception as exc:
            raise ConversionFailureError("parse", str(exc)) from exc

        # ==============================================================
        # Step 3-4: Group steps and assemble records
        # ==============================================================
        try:
            return [
                build_test_case(element, params, self._config)
                for element in find_test_cases(root)
            ]
        except Exception as exc:
            raise ConversionFailureError("render", str(exc)) from exc

    def convert(
        self,
        data: bytes | str,
        params: ConversionParams | None = None,
    ) -> bytes:
        """Convert an XML document to CSV bytes.

        Parameters
        ----------
        data:
            Raw XML; ``str`` input is encoded as UTF-8.
        params:
            Metadata copied onto every row.  Uses empty values when *None*.

        Returns
        -------
        bytes
            UTF-8 CSV with a leading byte-order mark.

        Raises
        ------
        MalformedInputError
            The input is empty, declares entities or is not well-formed.
        ResourceLimitError
            A limit set in the config is exceeded.
        StructuralValidationError
            The document violates the test-case dialect.
        ConversionFailureError
            Any other fault, with the failing stage in ``.stage``.
        """
        overall_start = time.monotonic()
        params = params or ConversionParams()
        filename = params.file_name or "<inline>"

        try:
            test_cases = self.parse_test_cases(data, params)

            # ==========================================================
            # Step 5: Write CSV
            # ==========================================================
            try:
                output = write_csv(
                    test_cases,
                    line_terminator=self._config.line_terminator,
                    json_indent=self._config.json_indent,
                )
            except Exception as exc:
                raise ConversionFailureError("write", str(exc)) from exc
        except TestCaseConversionError as exc:
            logger.error(
                "tcxml_csv | file=%s | code=%s | detail=%s",
                filename,
                exc.code.value,
                exc.message,
            )
            raise

        elapsed = time.monotonic() - overall_start
        logger.info(
            "tcxml_csv | file=%s | test_cases=%d | bytes=%d | time=%.3fs",
            filename,
            len(test_cases),
            len(output),
            elapsed,
        )
        return output

    def convert_file(
        self,
        path: str | Path,
        params: ConversionParams | None = None,
        output_path: str | Path | None = None,
    ) -> Path:
        """Convert an XML file and write the CSV next to it.

        ``params.file_name`` defaults to the input's file name, so Suite and
        Story are derived from it unless given explicitly.  Returns the path
        of the written CSV.  Raises ``FileExistsError`` when the target would
        be the input file itself.
        """
        source = Path(path)
        params = params or ConversionParams()
        if params.file_name is None:
            params = params.model_copy(update={"file_name": source.name})

        target = (
            Path(output_path)
            if output_path is not None
            else source.with_name(output_file_name(source.name))
        )
        if target.resolve() == source.resolve():
            raise FileExistsError(f"Refusing to overwrite the input file: {source}")

        output = self.convert(source.read_bytes(), params)
        target.write_bytes(output)
        return target

    async def aconvert(
        self,
        data: bytes | str,
        params: ConversionParams | None = None,
    ) -> bytes:
        """Async wrapper around :meth:`convert`.

        Offloads the synchronous ``convert()`` call to a thread via
        ``asyncio.to_thread()``.
        """
        return await asyncio.to_thread(self.convert, data, params)


def convert(
    data: bytes | str,
    params: ConversionParams | None = None,
    config: ConverterConfig | None = None,
) -> bytes:
    """Convert *data* with a one-off :class:`TestCaseConverter`."""
    return TestCaseConverter(config).convert(data, params)
