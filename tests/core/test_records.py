# tests/core/test_records.py

from datetime import date

from hangar_timeline.core.records import (
    PROJECT_COLUMNS,
    TASK_COLUMNS,
    project_from_row,
    project_to_row,
    projects_from_rows,
    task_from_row,
    task_to_row,
    tasks_from_rows,
)
from hangar_timeline.core.schedule.types import Project, Task, TaskType


def test_task_row_uses_snake_case_columns():
    task = Task(
        id="UNIT-1",
        title="T",
        type=TaskType.SHEET_METAL,
        start=2,
        start_hour=8,
        duration=3,
        duration_hours=4,
        progress=40,
        project="UNIT",
        dependencies=("UNIT-0",),
    )

    row = task_to_row(task)

    assert tuple(row.keys()) == TASK_COLUMNS
    assert row["type"] == "SM"
    assert row["start_hour"] == 8
    assert row["duration_hours"] == 4
    assert row["dependencies"] == ["UNIT-0"]
    assert task_from_row(row) == task


def test_task_from_sparse_row_applies_defaults():
    task = task_from_row({"id": 7, "type": "PAINT", "start": "3"})

    assert task.id == "7"
    assert task.description == ""
    assert task.dependencies == ()
    assert task.duration == 1
    assert task.start == 3
    assert task.type == "PAINT"


def test_project_row_round_trip_with_optional_metadata():
    project = Project(name="UNIT-A22", customer="C", ac="B737", wo="WO-1", start_date=date(2024, 5, 1), interval_days=30, pm="ANA")
    row = project_to_row(project)

    assert tuple(row.keys()) == PROJECT_COLUMNS
    assert row["start_date"] == "2024-05-01"
    assert row["interval_days"] == 30
    assert project_from_row(row) == project


def test_project_missing_metadata_defaults_to_none():
    project = project_from_row({"name": "X", "start_date": "2024-05-01T00:00:00Z", "model": "", "interval_days": None})

    assert project.start_date == date(2024, 5, 1)
    assert project.model is None
    assert project.msn is None
    assert project.interval_days == 45


def test_bulk_helpers_preserve_order():
    tasks = tasks_from_rows([{"id": "b"}, {"id": "a"}])
    projects = projects_from_rows([{"name": "Z", "start_date": "2024-01-01"}, {"name": "A", "start_date": "2024-01-02"}])

    assert [t.id for t in tasks] == ["b", "a"]
    assert list(projects) == ["Z", "A"]
