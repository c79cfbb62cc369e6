"""Grouping of ``test-case`` children into steps with expected results.

The children of a ``test-case`` element form a flat sequence such as::

    <q/> <a/> <a/> <event/> <request/> <responseData/>

Each step-defining element (``event``, ``request``, ``q``) opens a step;
the result-bearing elements (``a``, ``responseData``) that follow it,
up to the next step-defining element, become that step's expected results.

The scan is a reducer over an immutable ``GroupingState`` with two modes:
*idle* (``current is None``) and *accumulating*.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from functools import reduce
from typing import NamedTuple

from tcxml_csv.models import (
    ExpectedResult,
    Step,
    StepAttributes,
    element_text,
    expected_results_from_element,
    is_result_tag,
    is_step_tag,
    step_attributes_from_tag,
)


class GroupingState(NamedTuple):
    """Reducer state: closed steps, the open step, and its pending results."""

    steps: tuple[Step, ...] = ()
    current: StepAttributes | None = None
    pending: tuple[ExpectedResult, ...] = ()

    @property
    def idle(self) -> bool:
        return self.current is None


def close_step(state: GroupingState) -> GroupingState:
    """Move the open step (if any) with its pending results into ``steps``."""
    if state.current is None:
        return state
    step = Step(attributes=state.current, expected_results=state.pending)
    return GroupingState(steps=state.steps + (step,))


def reduce_element(state: GroupingState, element: ET.Element) -> GroupingState:
    """Advance the grouping state by one child element."""
    tag = element.tag
    if is_step_tag(tag):
        closed = close_step(state)
        attributes = step_attributes_from_tag(tag, element_text(element))
        return closed._replace(current=attributes, pending=())

    if is_result_tag(tag) and not state.idle:
        results = tuple(expected_results_from_element(element))
        return state._replace(pending=state.pending + results)

    return state


def group_steps(test_case: ET.Element) -> list[Step]:
    """Group the direct children of *test_case* into an ordered list of steps."""
    final = reduce(reduce_element, test_case, GroupingState())
    return list(close_step(final).steps)
