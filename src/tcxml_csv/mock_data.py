"""Rendering of ``mockData`` elements into the CSV precondition column.

Each ``mockData`` element describes one recorded HTTP interaction::

    <mockData>
        <query method="GET">/users/${id}</query>
        <response status="200">{"name": "Ann"}</response>
        <parameters><id>42</id></parameters>
    </mockData>

Parameters are substituted into ``${name}`` placeholders of the URL;
parameters without a placeholder are appended as query parameters.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from pydantic import BaseModel, ConfigDict

from tcxml_csv.json_format import format_json
from tcxml_csv.models import element_text

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


class MockData(BaseModel):
    """One recorded request/response pair."""

    model_config = ConfigDict(frozen=True)

    method: str = ""
    url: str = ""
    status: str = ""
    body: str = ""
    parameters: dict[str, str] = {}

    @classmethod
    def from_element(cls, element: ET.Element) -> MockData:
        """Read the first ``query``, ``response`` and ``parameters`` descendants."""
        query = element.find(".//query")
        response = element.find(".//response")
        params_el = element.find(".//parameters")

        parameters: dict[str, str] = {}
        if params_el is not None:
            for child in params_el:
                parameters[child.tag] = element_text(child)

        return cls(
            method=query.get("method", "") if query is not None else "",
            url=element_text(query) if query is not None else "",
            status=response.get("status", "") if response is not None else "",
            body=element_text(response) if response is not None else "",
            parameters=parameters,
        )

    @property
    def processed_url(self) -> str:
        return build_url(self.url, self.parameters)


def build_url(url: str, parameters: dict[str, str]) -> str:
    """Substitute ``${name}`` placeholders and append the unused parameters.

    >>> build_url("/users/${id}", {"id": "42"})
    '/users/42'
    >>> build_url("/users", {"id": "42", "page": "2"})
    '/users?id=42&page=2'

    Placeholders are looked up in the raw *url* only, so parameter values are
    inserted verbatim.
    """
    result = _PLACEHOLDER.sub(lambda m: parameters.get(m.group(1), m.group(0)), url)
    query = "&".join(
        f"{name}={value}"
        for name, value in parameters.items()
        if "${" + name + "}" not in url
    )
    if query:
        separator = "&" if "?" in url else "?"
        result = f"{result}{separator}{query}"
    return result


def render_mock(mock: MockData, index: int, json_indent: int = 2) -> str:
    """Render one mock as a markdown-ish block; *index* is 1-based."""
    return (
        f"{index}. **{mock.method.upper()}** {mock.processed_url}\n"
        f"**Статус:** {mock.status} \n"
        f"**Ответ:** \n"
        f"`{format_json(mock.body, json_indent)}`\n"
    )


def render_preconditions(test_case: ET.Element, json_indent: int = 2) -> str:
    """Render every ``mockData`` of *test_case*, in document order.

    Returns an empty string when the test case has no mocks.
    """
    return "\n".join(
        render_mock(MockData.from_element(el), index, json_indent)
        for index, el in enumerate(test_case.iter("mockData"), start=1)
    )
