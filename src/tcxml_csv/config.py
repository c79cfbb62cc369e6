"""Configuration model for the tcxml-csv converter.

Provides ``ConverterConfig`` with all tunable parameters and sensible
defaults.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.
"""

from __future__ import annotations

import json
import pathlib

import yaml
from pydantic import BaseModel, model_validator


class ConverterConfig(BaseModel):
    """All tunable parameters with sensible defaults for XML-to-CSV conversion."""

    # --- Identity ---
    parser_version: str = "tcxml_csv:1.0.0"

    # --- Resource Limits (None disables the check) ---
    max_input_size_mb: int | None = None
    max_depth: int | None = None
    max_test_cases: int | None = None

    # --- Rendering ---
    json_indent: int = 2

    # --- Output ---
    line_terminator: str = "\n"

    # --- Logging / PII Safety ---
    log_sample_data: bool = False

    @model_validator(mode="after")
    def _validate_fields(self) -> ConverterConfig:
        allowed_terminators = {"\n", "\r\n"}
        if self.line_terminator not in allowed_terminators:
            raise ValueError("line_terminator must be '\\n' or '\\r\\n'")
        if self.json_indent < 0:
            raise ValueError("json_indent must be >= 0")
        for name in ("max_input_size_mb", "max_depth", "max_test_cases"):
            limit = getattr(self, name)
            if limit is not None and limit < 0:
                raise ValueError(f"{name} must be >= 0")
        return self

    @classmethod
    def from_file(cls, path: str) -> ConverterConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Any keys present in the file override the
        corresponding defaults; keys not present retain their defaults.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            with open(file_path, encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path, encoding="utf-8") as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}

        return cls(**data)
