"""
Tests for the schedule generation worker task, run in-process.
"""

import pytest

from doubles_scheduler.tasks.scheduler_tasks import generate_schedule_task


@pytest.fixture(autouse=True)
def no_result_backend(monkeypatch):
    states = []
    monkeypatch.setattr(generate_schedule_task, "update_state", lambda **kw: states.append(kw))
    return states


def _payload(n, **settings):
    return {
        "players": [{"id": f"p{i}", "name": f"Player {i}", "gender": "F", "level": 4} for i in range(n)],
        "settings": dict({"session_date": "2026-10-18", "start_time": "10:00", "end_time": "10:24"}, **settings),
    }


def test_task_returns_schedule(no_result_backend):
    result = generate_schedule_task(_payload(7))

    assert result["success"] is True
    assert result["total_matches"] == 2
    assert no_result_backend[-1]["state"] == "PROGRESS"


def test_task_reports_errors():
    result = generate_schedule_task(_payload(7, officials_per_court=5))

    assert result["success"] is False
    assert "error" in result
