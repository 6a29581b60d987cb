"""
Tests for selection resolution.

Exactly one source is used, chosen by fixed priority.
"""

import logging

import pytest
from pydantic import ValidationError

from replaycheck.core.errors import SelectionError
from replaycheck.core.selection import (
    FilePatternSource,
    QuerySource,
    SelectionConfig,
    TaskQueueSource,
    WorkflowIdsSource,
)


def _warnings(caplog):
    return [r for r in caplog.records if r.levelno == logging.WARNING]


def test_resolve_each_single_source():
    assert SelectionConfig(history_path="h/*.json").resolve() == FilePatternSource("h/*.json")
    assert SelectionConfig(workflow_ids=["a", "b"]).resolve() == WorkflowIdsSource(("a", "b"))
    assert SelectionConfig(task_queue="orders").resolve() == TaskQueueSource("orders")
    assert SelectionConfig(query="WorkflowType='X'").resolve() == QuerySource("WorkflowType='X'")


@pytest.mark.parametrize(
    "fields, expected",
    [
        ({"history_path": "h/*.json", "workflow_ids": ["a"], "task_queue": "q", "query": "x"}, FilePatternSource),
        ({"workflow_ids": ["a"], "task_queue": "q", "query": "x"}, WorkflowIdsSource),
        ({"task_queue": "q", "query": "x"}, TaskQueueSource),
    ],
)
def test_highest_priority_wins_with_warning(caplog, fields, expected):
    caplog.set_level(logging.WARNING)

    source = SelectionConfig(**fields).resolve()

    assert isinstance(source, expected)
    assert any("Multiple selection methods" in r.getMessage() for r in _warnings(caplog))


def test_single_source_does_not_warn(caplog):
    caplog.set_level(logging.WARNING)

    SelectionConfig(query="x").resolve()

    assert _warnings(caplog) == []


def test_nothing_populated_raises():
    with pytest.raises(SelectionError, match="at least one workflow selection method"):
        SelectionConfig().resolve()


def test_blank_values_count_as_unpopulated():
    config = SelectionConfig(history_path="  ", workflow_ids=[], task_queue="", query=" ")

    assert not config.is_populated()
    with pytest.raises(SelectionError):
        config.resolve()


def test_workflow_ids_from_comma_separated_string():
    config = SelectionConfig(workflow_ids=" wf-1, wf-2 ,,wf-3 ")

    assert config.workflow_ids == ["wf-1", "wf-2", "wf-3"]


def test_task_queue_query_synthesis():
    assert TaskQueueSource("orders").to_query() == 'TaskQueue="orders"'


def test_max_histories_must_be_positive():
    with pytest.raises(ValidationError):
        SelectionConfig(query="x", max_histories=0)

    assert SelectionConfig(query="x").max_histories == 100
