"""Shared test fixtures for tcxml-csv tests."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from tcxml_csv.config import ConverterConfig
from tcxml_csv.models import ConversionParams


@pytest.fixture
def default_config() -> ConverterConfig:
    """Return a default ConverterConfig."""
    return ConverterConfig()


@pytest.fixture
def default_params() -> ConversionParams:
    """Return ConversionParams with every field empty."""
    return ConversionParams()


@pytest.fixture
def test_case_element():
    """Factory fixture: parse a ``<test-case>`` snippet and return the element."""

    def _parse(body: str, case_id: str = "tc-1") -> ET.Element:
        return ET.fromstring(f'<test-case id="{case_id}">{body}</test-case>')

    return _parse


@pytest.fixture
def tmp_xml_file(tmp_path: Path):
    """Factory fixture to write XML string to a temp .xml file and return the path."""

    def _write(xml_content: str, filename: str = "cases.xml") -> Path:
        file_path = tmp_path / filename
        file_path.write_text(xml_content, encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def sample_xml_simple() -> str:
    """One test case with a question and a bot answer."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<test>
    <test-case id="greeting">
        <q>Hello</q>
        <a state="greet">Hi there</a>
    </test-case>
</test>"""


@pytest.fixture
def sample_xml_full() -> str:
    """Two test cases covering mocks, all step kinds and both result kinds."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<test>
    <test-case id="order-status">
        <mockData>
            <query method="get">/orders/${orderId}</query>
            <response status="200">{"status": "shipped", "items": [1, 2]}</response>
            <parameters><orderId>77</orderId><lang>ru</lang></parameters>
        </mockData>
        <event>start</event>
        <a state="/start">Welcome</a>
        <q>Where is my order?</q>
        <a state="/order">Your order is shipped</a>
        <a>Anything else?</a>
    </test-case>
    <test-case id="api-call">
        <request>{"query": "ping"}</request>
        <responseData field="replies">pong</responseData>
        <responseData field="status"></responseData>
        <responseData field="code">200</responseData>
    </test-case>
</test>"""
