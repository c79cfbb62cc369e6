"""Pydantic models for the test-case dialect and its CSV rendering.

Contains the step and expected-result variants (discriminated unions),
``Step``, ``TestCase`` with its scenario renderer, and the caller-supplied
``ConversionParams`` metadata record.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tcxml_csv.json_format import format_json

FULL_NAME_PREFIX = "JAICP "
SUITE_PREFIX = "JIACP"

METADATA_FIELDS = (
    "tag",
    "link",
    "parameter",
    "lead",
    "owner",
    "suite",
    "component",
    "story",
    "feature",
    "epic",
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ----------------------------------------------------------------------
# Step attributes
# ----------------------------------------------------------------------


class EventStep(_Frozen):
    """``<event>`` -- trigger a bot event."""

    kind: Literal["event"] = "event"
    text: str

    @property
    def description(self) -> str:
        return f"Вызвать ивент:\n{self.text}"

    @property
    def sub_steps(self) -> list[str]:
        return []


class RequestStep(_Frozen):
    """``<request>`` -- send a raw request; the body becomes the only sub-step."""

    kind: Literal["request"] = "request"
    text: str

    @property
    def description(self) -> str:
        return "Отправить запрос:"

    @property
    def sub_steps(self) -> list[str]:
        return [self.text]


class QuestionStep(_Frozen):
    """``<q>`` -- send user text to the bot."""

    kind: Literal["question"] = "question"
    text: str

    @property
    def description(self) -> str:
        return f"Отправить текст в бота:\n{self.text}"

    @property
    def sub_steps(self) -> list[str]:
        return []


StepAttributes = Annotated[
    Union[EventStep, RequestStep, QuestionStep],
    Field(discriminator="kind"),
]

_STEP_TAGS = {
    "event": EventStep,
    "request": RequestStep,
    "q": QuestionStep,
}


def is_step_tag(tag: str) -> bool:
    return tag in _STEP_TAGS


def step_attributes_from_tag(tag: str, text: str) -> StepAttributes:
    """Build the step variant for an XML tag; raises ``KeyError`` for other tags."""
    return _STEP_TAGS[tag](text=text)


# ----------------------------------------------------------------------
# Expected results
# ----------------------------------------------------------------------


class StateResult(_Frozen):
    """``<a state="...">text</a>`` -- expected bot state and/or reply."""

    kind: Literal["state"] = "state"
    state: str = ""
    bot_response: str = ""

    def format(self) -> str:
        parts: list[str] = []
        if self.state:
            parts.append(f"state = '{self.state}'")
        if self.bot_response:
            parts.append(f"Ответ бота:\n{self.bot_response}")
        return "\n".join(parts)


class FieldResult(_Frozen):
    """``<responseData field="...">text</responseData>`` -- response body check."""

    kind: Literal["field"] = "field"
    field: str
    field_value: str = ""

    def format(self) -> str:
        if self.field == "replies":
            return f"Ожидаемое тело:\n{self.field_value}"
        if not self.field_value:
            return f"Ключ {self.field} не равен NULL/существует в ответе"
        return f"Элемент тела\n {self.field}\nимеет значение\n{self.field_value}"


ExpectedResult = Annotated[
    Union[StateResult, FieldResult],
    Field(discriminator="kind"),
]

RESULT_TAGS = frozenset({"a", "responseData"})


def is_result_tag(tag: str) -> bool:
    return tag in RESULT_TAGS


def element_text(element: ET.Element) -> str:
    """Concatenated text of *element* and its descendants, trimmed."""
    return "".join(element.itertext()).strip()


def expected_results_from_element(element: ET.Element) -> list[ExpectedResult]:
    """Convert a result-bearing element into its expected results.

    Non-result tags yield an empty list.
    """
    if element.tag == "a":
        return [
            StateResult(
                state=element.get("state", ""),
                bot_response=element_text(element),
            )
        ]
    if element.tag == "responseData":
        return [
            FieldResult(
                field=element.get("field", ""),
                field_value=element_text(element),
            )
        ]
    return []


# ----------------------------------------------------------------------
# Step / TestCase
# ----------------------------------------------------------------------


class Step(_Frozen):
    """One interaction with the bot plus the results expected after it."""

    attributes: StepAttributes
    expected_results: tuple[ExpectedResult, ...] = ()

    @property
    def sub_steps(self) -> list[str]:
        return self.attributes.sub_steps

    @property
    def has_sub_steps(self) -> bool:
        return bool(self.attributes.sub_steps)

    @property
    def has_expected_results(self) -> bool:
        return bool(self.expected_results)

    @property
    def description(self) -> str:
        return self.attributes.description

    @property
    def last_expected_result(self) -> str | None:
        if not self.expected_results:
            return None
        return self.expected_results[-1].format()


class ConversionParams(BaseModel):
    """Caller-supplied metadata copied onto every CSV row.

    None of these come from the XML.  ``file_name`` is the name of the
    uploaded file, used to derive ``Suite``/``Story`` when they are not
    given explicitly.
    """

    tag: str = ""
    link: str = ""
    parameter: str = ""
    lead: str = ""
    owner: str = ""
    suite: str = ""
    component: str = ""
    story: str = ""
    feature: str = ""
    epic: str = ""
    file_name: str | None = None

    @field_validator(*METADATA_FIELDS, mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


def file_stem(file_name: str | None) -> str:
    """Strip the last extension from *file_name*; dot-files keep their name."""
    if not file_name:
        return ""
    last_dot = file_name.rfind(".")
    return file_name[:last_dot] if last_dot > 0 else file_name


class TestCase(_Frozen):
    """A fully parsed test case, ready to be rendered as one CSV row."""

    __test__ = False  # keep pytest from collecting this as a test class

    name: str
    precondition: str = ""
    steps: tuple[Step, ...] = ()
    file_name: str | None = None

    tag: str = ""
    link: str = ""
    parameter: str = ""
    lead: str = ""
    owner: str = ""
    suite: str = ""
    component: str = ""
    story: str = ""
    feature: str = ""
    epic: str = ""

    @classmethod
    def create(
        cls,
        name: str,
        precondition: str,
        steps: list[Step],
        params: ConversionParams,
    ) -> TestCase:
        return cls(
            name=name,
            precondition=precondition,
            steps=tuple(steps),
            **params.model_dump(),
        )

    @property
    def full_name(self) -> str:
        return FULL_NAME_PREFIX + self.name

    @property
    def final_expected_result(self) -> str:
        for step in reversed(self.steps):
            if step.has_expected_results:
                return step.last_expected_result or ""
        return ""

    @property
    def suite_value(self) -> str:
        if self.suite:
            return self.suite
        if self.file_name:
            return SUITE_PREFIX + file_stem(self.file_name)
        return ""

    @property
    def story_value(self) -> str:
        if self.story:
            return self.story
        return file_stem(self.file_name)

    @property
    def scenario(self) -> str:
        return self.render_scenario()

    def render_scenario(self, json_indent: int = 2) -> str:
        """Render the steps as the numbered, tab-indented scenario text."""
        lines: list[str] = []
        for i, step in enumerate(self.steps, start=1):
            lines.append(f"[step {i}] {step.description}\n")

            for j, sub_step in enumerate(step.sub_steps, start=1):
                lines.append(f"\t[step {i}.{j}] {format_json(sub_step, json_indent)}\n")

            if step.has_expected_results:
                lines.append(f"\t[expected {i}.1] Expected Result\n")
                for j, result in enumerate(step.expected_results, start=1):
                    text = format_json(result.format(), json_indent)
                    lines.append(f"\t\t[expected.step {i}.1.{j}] {text}\n")

        return "".join(lines).rstrip()

    def to_row(self, json_indent: int = 2) -> tuple[str, ...]:
        """Return the 16 CSV fields in header order."""
        return (
            self.name,
            self.full_name,
            "",  # description
            self.precondition,
            self.final_expected_result,
            self.render_scenario(json_indent),
            self.tag,
            self.link,
            self.parameter,
            self.lead,
            self.owner,
            self.suite_value,
            self.component,
            self.story_value,
            self.feature,
            self.epic,
        )
