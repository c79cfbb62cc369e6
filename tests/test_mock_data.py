"""Unit tests for tcxml_csv.mock_data -- URL building and precondition text."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from tcxml_csv.mock_data import MockData, build_url, render_mock, render_preconditions


class TestBuildUrl:
    """Placeholder substitution and query-parameter appending."""

    def test_placeholder_substituted(self):
        assert build_url("/users/${id}", {"id": "42"}) == "/users/42"

    def test_missing_placeholder_appended(self):
        assert build_url("/users", {"id": "42"}) == "/users?id=42"

    def test_second_parameter_uses_ampersand(self):
        assert build_url("/users", {"id": "42", "page": "2"}) == "/users?id=42&page=2"

    def test_existing_query_uses_ampersand(self):
        assert build_url("/users?sort=asc", {"id": "42"}) == "/users?sort=asc&id=42"

    def test_mixed_substitution_and_append(self):
        url = build_url("/orders/${orderId}", {"orderId": "7", "lang": "ru"})
        assert url == "/orders/7?lang=ru"

    def test_repeated_placeholder_replaced_everywhere(self):
        assert build_url("/${v}/x/${v}", {"v": "1"}) == "/1/x/1"

    def test_no_parameters(self):
        assert build_url("/health", {}) == "/health"

    def test_unknown_placeholder_left_alone(self):
        assert build_url("/users/${id}", {}) == "/users/${id}"

    def test_values_inserted_verbatim(self):
        assert build_url("/a/${x}", {"y": "${x}", "x": "1"}) == "/a/1?y=${x}"

    def test_substituted_value_not_resubstituted(self):
        assert build_url("/a/${x}/${y}", {"x": "${y}", "y": "2"}) == "/a/${y}/2"


class TestMockDataFromElement:
    """Reading mockData elements."""

    def test_all_parts(self):
        el = ET.fromstring(
            "<mockData>"
            '<query method="post"> /api/items </query>'
            '<response status="201"> {"ok": true} </response>'
            "<parameters><a>1</a><b> 2 </b></parameters>"
            "</mockData>"
        )
        mock = MockData.from_element(el)
        assert mock.method == "post"
        assert mock.url == "/api/items"
        assert mock.status == "201"
        assert mock.body == '{"ok": true}'
        assert mock.parameters == {"a": "1", "b": "2"}
        assert list(mock.parameters) == ["a", "b"]

    def test_missing_parts_are_empty(self):
        mock = MockData.from_element(ET.fromstring("<mockData/>"))
        assert mock.method == ""
        assert mock.url == ""
        assert mock.status == ""
        assert mock.body == ""
        assert mock.parameters == {}

    def test_processed_url(self):
        el = ET.fromstring(
            "<mockData><query method='GET'>/users/${id}</query>"
            "<response status='200'/><parameters><id>42</id></parameters></mockData>"
        )
        assert MockData.from_element(el).processed_url == "/users/42"


class TestRenderMock:
    """Output format of one mock."""

    def test_format(self):
        mock = MockData(method="get", url="/users", status="200", body='{"id":1}',
                        parameters={"id": "42"})
        assert render_mock(mock, 1) == (
            "1. **GET** /users?id=42\n"
            "**Статус:** 200 \n"
            "**Ответ:** \n"
            '`{\n  "id": 1\n}`\n'
        )

    def test_plain_body_kept(self):
        mock = MockData(method="DELETE", url="/x", status="204", body="no content")
        assert render_mock(mock, 3).endswith("`no content`\n")
        assert render_mock(mock, 3).startswith("3. **DELETE** /x\n")


class TestRenderPreconditions:
    """Joining all mocks of a test case."""

    def test_no_mocks_is_empty(self, test_case_element):
        assert render_preconditions(test_case_element("<q>hi</q>")) == ""

    def test_mocks_numbered_and_joined(self, test_case_element):
        el = test_case_element(
            "<mockData><query method='get'>/a</query><response status='200'>A</response></mockData>"
            "<q>hi</q>"
            "<mockData><query method='put'>/b</query><response status='500'>B</response></mockData>"
        )
        text = render_preconditions(el)
        first, second = text.split("\n\n")
        assert first.startswith("1. **GET** /a\n")
        assert second.startswith("2. **PUT** /b\n")
        assert text == (
            "1. **GET** /a\n**Статус:** 200 \n**Ответ:** \n`A`\n"
            "\n"
            "2. **PUT** /b\n**Статус:** 500 \n**Ответ:** \n`B`\n"
        )

    @pytest.mark.parametrize(
        ("url", "params", "expected"),
        [
            ("/users/${id}", "<id>42</id>", "/users/42\n"),
            ("/users", "<id>42</id>", "/users?id=42\n"),
        ],
    )
    def test_url_in_output(self, test_case_element, url, params, expected):
        el = test_case_element(
            f"<mockData><query method='get'>{url}</query><response status='200'/>"
            f"<parameters>{params}</parameters></mockData>"
        )
        assert render_preconditions(el).startswith(f"1. **GET** {expected}")
