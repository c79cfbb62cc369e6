"""Command-line entry point: convert a test-case XML file to import CSV.

Usage:
    tcxml-csv cases.xml                       # writes cases.csv next to it
    tcxml-csv cases.xml -o out/import.csv --owner qa --epic BOT-1
    tcxml-csv cases.xml --config converter.yaml --crlf -v
"""

from __future__ import annotations

import argparse
import logging
import sys

import yaml

from tcxml_csv.config import ConverterConfig
from tcxml_csv.converter import TestCaseConverter
from tcxml_csv.errors import TestCaseConversionError
from tcxml_csv.models import METADATA_FIELDS, ConversionParams


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tcxml-csv",
        description="Convert a test-case XML file into a test-management import CSV.",
    )
    parser.add_argument("input", help="Path to the XML file")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output CSV path (default: <input stem>.csv next to the input)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML or JSON file with converter settings",
    )
    parser.add_argument(
        "--crlf",
        action="store_true",
        help="Terminate rows with CRLF instead of LF",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress at INFO level",
    )
    for name in METADATA_FIELDS:
        parser.add_argument(
            f"--{name}",
            default="",
            help=f"Value for the '{name}' column of every row",
        )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    params = ConversionParams(**{name: getattr(args, name) for name in METADATA_FIELDS})

    try:
        config = ConverterConfig.from_file(args.config) if args.config else ConverterConfig()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"error: invalid config {args.config}: {exc}", file=sys.stderr)
        return 1
    if args.crlf:
        config = config.model_copy(update={"line_terminator": "\r\n"})

    try:
        target = TestCaseConverter(config).convert_file(
            args.input, params, output_path=args.output
        )
    except TestCaseConversionError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(target)
    return 0


if __name__ == "__main__":
    sys.exit(main())
