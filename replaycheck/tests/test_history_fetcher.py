"""
Tests for history selection and fetching.

File and ID sources skip bad items; query sources fail as a whole.
"""

import logging

import pytest

from replaycheck.core.errors import EngineRequiredError, FetchError, SelectionError
from replaycheck.core.selection import SelectionConfig
from replaycheck.history import select_histories
from replaycheck.tests.fakes import FakeEngine, history, write_history


def _warnings(caplog):
    return [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]


# --- file pattern ---------------------------------------------------------


def test_files_loaded_in_sorted_order(tmp_path):
    write_history(tmp_path, "history2.json", history("wf-2"))
    write_history(tmp_path, "history1.json", history("wf-1"))

    histories = select_histories(SelectionConfig(history_path=str(tmp_path / "*.json")))

    assert histories == [history("wf-1"), history("wf-2")]


def test_files_do_not_need_engine(tmp_path):
    write_history(tmp_path, "h.json", history("wf-1"))

    assert len(select_histories(SelectionConfig(history_path=str(tmp_path / "*.json")), None)) == 1


def test_zero_matches_warns_and_returns_empty(tmp_path, caplog):
    caplog.set_level(logging.WARNING)

    histories = select_histories(SelectionConfig(history_path=str(tmp_path / "*.json")))

    assert histories == []
    assert any("No history files found" in m for m in _warnings(caplog))


def test_bad_file_is_skipped_with_warning(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    write_history(tmp_path, "a.json", history("wf-a"))
    write_history(tmp_path, "b.json", "{not json")
    write_history(tmp_path, "c.json", history("wf-c"))

    histories = select_histories(SelectionConfig(history_path=str(tmp_path / "*.json")))

    assert [h["workflowId"] for h in histories] == ["wf-a", "wf-c"]
    warnings = _warnings(caplog)
    assert len(warnings) == 1
    assert "b.json" in warnings[0]


def test_max_histories_truncates_files(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    for i in range(1, 4):
        write_history(tmp_path, f"history{i}.json", history(f"wf-{i}"))

    histories = select_histories(
        SelectionConfig(history_path=str(tmp_path / "*.json"), max_histories=2)
    )

    assert [h["workflowId"] for h in histories] == ["wf-1", "wf-2"]
    assert any("Limiting to first 2 files (out of 3 found)" in m for m in _warnings(caplog))


def test_files_within_limit_do_not_warn(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    for i in range(1, 3):
        write_history(tmp_path, f"history{i}.json", history(f"wf-{i}"))

    histories = select_histories(
        SelectionConfig(history_path=str(tmp_path / "*.json"), max_histories=2)
    )

    assert len(histories) == 2
    assert _warnings(caplog) == []


def test_recursive_pattern_skips_directories(tmp_path):
    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / "dir.json").mkdir()
    write_history(nested, "deep.json", history("wf-deep"))

    histories = select_histories(SelectionConfig(history_path=str(tmp_path / "**" / "*.json")))

    assert histories == [history("wf-deep")]


# --- workflow IDs ---------------------------------------------------------


def test_ids_fetched_in_input_order():
    engine = FakeEngine(histories_by_id={"wf-1": history("wf-1"), "wf-2": history("wf-2")})

    histories = select_histories(SelectionConfig(workflow_ids=["wf-2", "wf-1"]), engine)

    assert histories == [history("wf-2"), history("wf-1")]
    assert engine.fetched_ids == ["wf-2", "wf-1"]


def test_missing_id_is_skipped_with_warning(caplog):
    caplog.set_level(logging.WARNING)
    engine = FakeEngine(histories_by_id={"wf-1": history("wf-1"), "wf-3": history("wf-3")})

    histories = select_histories(SelectionConfig(workflow_ids=["wf-1", "wf-2", "wf-3"]), engine)

    assert [h["workflowId"] for h in histories] == ["wf-1", "wf-3"]
    assert any("Failed to fetch history for wf-2" in m for m in _warnings(caplog))


def test_ids_truncated_to_max_histories(caplog):
    caplog.set_level(logging.WARNING)
    engine = FakeEngine(histories_by_id={f"wf-{i}": history(f"wf-{i}") for i in range(5)})

    histories = select_histories(
        SelectionConfig(workflow_ids=[f"wf-{i}" for i in range(5)], max_histories=3), engine
    )

    assert len(histories) == 3
    assert engine.fetched_ids == ["wf-0", "wf-1", "wf-2"]
    assert any("Limiting to first 3 workflow IDs" in m for m in _warnings(caplog))


def test_server_source_requires_engine():
    with pytest.raises(EngineRequiredError):
        select_histories(SelectionConfig(workflow_ids=["wf-1"]), None)
    with pytest.raises(EngineRequiredError):
        select_histories(SelectionConfig(query="x"), None)


def test_nothing_selected_raises_selection_error():
    with pytest.raises(SelectionError):
        select_histories(SelectionConfig(), FakeEngine())


# --- task queue / query ---------------------------------------------------


def test_task_queue_becomes_query():
    engine = FakeEngine(listed=[history("wf-1")])

    histories = select_histories(SelectionConfig(task_queue="orders"), engine)

    assert engine.queries == ['TaskQueue="orders"']
    assert histories == [history("wf-1")]


def test_query_passed_verbatim():
    engine = FakeEngine(listed=[])

    select_histories(SelectionConfig(query="WorkflowType = 'Order'"), engine)

    assert engine.queries == ["WorkflowType = 'Order'"]


def test_query_stops_at_cap_without_draining(caplog):
    caplog.set_level(logging.WARNING)

    def unbounded():
        i = 0
        while True:
            yield history(f"wf-{i}")
            i += 1

    engine = FakeEngine(listed=unbounded())

    histories = select_histories(SelectionConfig(query="x", max_histories=3), engine)

    assert [h["workflowId"] for h in histories] == ["wf-0", "wf-1", "wf-2"]
    assert engine.pulled == 4
    assert any("Reached max histories limit of 3" in m for m in _warnings(caplog))


@pytest.mark.parametrize("count", [0, 2, 3])
def test_query_within_cap_returns_all_without_warning(caplog, count):
    caplog.set_level(logging.WARNING)
    engine = FakeEngine(listed=[history(f"wf-{i}") for i in range(count)])

    histories = select_histories(SelectionConfig(query="x", max_histories=3), engine)

    assert len(histories) == count
    assert _warnings(caplog) == []


def test_query_listing_failure_raises_fetch_error():
    engine = FakeEngine(list_error=ValueError("invalid query syntax"))

    with pytest.raises(FetchError, match="Failed to fetch workflow histories: invalid query syntax"):
        select_histories(SelectionConfig(query="bad ((("), engine)


def test_query_iteration_failure_aborts_batch():
    engine = FakeEngine(listed=[history("wf-1"), RuntimeError("connection reset")])

    with pytest.raises(FetchError, match="connection reset"):
        select_histories(SelectionConfig(task_queue="orders"), engine)
