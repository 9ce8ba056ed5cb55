# tests/core/state/test_views_and_seed.py

from datetime import date, datetime

from hangar_timeline.core.config.settings import TimelineSettings
from hangar_timeline.core.schedule.types import Project, Task, TaskType
from hangar_timeline.core.state.seed import SEED_PROJECT, seed_state
from hangar_timeline.core.state.snapshot import ALL_PROJECTS, ScheduleSnapshot
from hangar_timeline.core.state.views import ViewFilter, current_project, filter_tasks, view_start_date


def _fleet_snapshot(active=ALL_PROJECTS):
    projects = {
        "A": Project(name="A", customer="ACME", start_date=date(2024, 1, 5)),
        "B": Project(name="B", customer="BETA", start_date=date(2024, 1, 1)),
    }
    tasks = [
        Task(id="a1", title="Engine wash", project="A", start=0, duration=2, progress=100),
        Task(id="a2", title="Cabin", description="seat covers", project="A", start=3, duration=1, progress=20),
        Task(id="b1", title="Radar", project="B", start=1, duration=1, progress=0),
    ]
    return ScheduleSnapshot(version=1, tasks=tasks, projects=projects, active_project=active)


def test_seed_state_contents(fixed_today):
    snapshot = seed_state(fixed_today)

    assert snapshot.active_project == SEED_PROJECT
    project = snapshot.projects[SEED_PROJECT]
    assert project.customer == "X-TREME AVIATION"
    assert project.interval_days == 30
    assert project.start_date == fixed_today
    assert [t.type for t in snapshot.tasks] == [TaskType.AIRFRAME, TaskType.INTERIOR, TaskType.AVIONICS]
    assert snapshot.task("3").dependencies == ("2",)


def test_view_start_date_rules(fixed_today):
    assert view_start_date(_fleet_snapshot()) == date(2024, 1, 1)
    assert view_start_date(_fleet_snapshot(active="A")) == date(2024, 1, 5)
    assert view_start_date(ScheduleSnapshot(), today=fixed_today) == fixed_today


def test_filter_by_active_project_and_pending():
    snapshot = _fleet_snapshot(active="A")

    assert [t.id for t in filter_tasks(snapshot)] == ["a1", "a2"]
    assert [t.id for t in filter_tasks(snapshot, view_filter=ViewFilter.PENDING)] == ["a2"]


def test_search_is_case_insensitive_over_text_fields():
    snapshot = _fleet_snapshot()

    assert [t.id for t in filter_tasks(snapshot, query="SEAT")] == ["a2"]
    assert [t.id for t in filter_tasks(snapshot, query="radar")] == ["b1"]
    assert [t.id for t in filter_tasks(snapshot, query="a1")] == ["a1"]
    assert [t.id for t in filter_tasks(snapshot, query=" b ")] == ["a2", "b1"]


def test_today_filter_uses_view_start():
    snapshot = _fleet_snapshot()
    # ALL começa em 2024-01-01; 2024-01-03 10h → dia 2
    now = datetime(2024, 1, 3, 10, 0)

    assert [t.id for t in filter_tasks(snapshot, view_filter="TODAY", now=now)] == ["a1", "b1"]


def test_current_project_placeholder_for_all():
    project = current_project(_fleet_snapshot(), TimelineSettings())

    assert project.name == ALL_PROJECTS
    assert project.interval_days == 80
    assert project.start_date == date(2024, 1, 1)
    assert current_project(_fleet_snapshot(active="B")).name == "B"
