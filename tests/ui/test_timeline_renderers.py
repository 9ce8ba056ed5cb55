# tests/ui/test_timeline_renderers.py
"""
Testes do adapter de renderização da linha do tempo.

Os testes asseguram que:
- apenas as linhas da janela visível são desenhadas
- cada linha é posicionada pelo índice absoluto
- o marcador de hoje aparece somente depois do início do projeto
- tarefas concluídas usam a cor de conclusão e o marcador ✓
- o fallback textual é sempre preenchido
- a renderização não altera as tarefas

Limites explícitos:
    - Não valida CSS nem aparência no navegador
"""

import copy
from datetime import date, datetime

from hangar_timeline.core.config.settings import TimelineSettings
from hangar_timeline.core.schedule.stress import generate_stress_tasks
from hangar_timeline.core.schedule.types import Project
from hangar_timeline.core.timeline.windower import compute_visible_window
from hangar_timeline.ui.renderers import (
    RenderResult,
    render_project_card_html,
    render_today_marker_html,
    render_window,
)


def _project(start=date(2024, 1, 1)):
    return Project(name="STRESS-UNIT", customer="QA", start_date=start, interval_days=20)


def test_only_visible_rows_are_rendered():
    tasks = generate_stress_tasks(1000)
    window = compute_visible_window(tasks, scroll_top=4800, viewport_height=800)

    result = render_window(window, _project(), now=datetime(2024, 1, 3, 12, 0))

    assert isinstance(result, RenderResult)
    assert result.html.count("class='row'") == len(window) == 29
    assert "data-index='93'" in result.html
    assert "data-index='92'" not in result.html
    assert f"top:{93 * 48}px" in result.html
    assert f"height:{1000 * 48 + 56}px" in result.html


def test_today_marker_position(seed_snapshot, fixed_now):
    project = seed_snapshot.projects["UNIT-A22"]
    window = compute_visible_window(seed_snapshot.tasks, scroll_top=0, viewport_height=800)

    result = render_window(window, project, now=fixed_now)

    assert "today-marker" in result.html
    assert "left:150px" in result.html
    assert "HOY" in result.html
    assert result.text.splitlines()[0] == "UNIT-A22 rows 0..3 today=2.50"


def test_no_marker_before_project_start(seed_snapshot):
    project = seed_snapshot.projects["UNIT-A22"]
    window = compute_visible_window(seed_snapshot.tasks, scroll_top=0, viewport_height=800)

    result = render_window(window, project, now=datetime(2023, 12, 30))

    assert "today-marker" not in result.html


def test_completed_task_styling(seed_snapshot, fixed_now):
    project = seed_snapshot.projects["UNIT-A22"]
    window = compute_visible_window(seed_snapshot.tasks, scroll_top=0, viewport_height=800)

    html = render_window(window, project, now=fixed_now).html

    assert "✓ INSPECCIÓN ESTRUCTURAL FUSELAJE" in html
    assert "background:#15803d" in html
    # 7h de início => 17.5px ; 5 dias => 300px
    assert "left:17.5px;width:300px" in html


def test_text_fallback_lists_each_row(seed_snapshot, fixed_now):
    project = seed_snapshot.projects["UNIT-A22"]
    window = compute_visible_window(seed_snapshot.tasks, scroll_top=0, viewport_height=800)

    lines = render_window(window, project, now=fixed_now).text.splitlines()

    assert len(lines) == 1 + len(seed_snapshot.tasks)
    assert "[INT]" in lines[2]


def test_render_does_not_mutate_tasks():
    tasks = generate_stress_tasks(50)
    before = copy.deepcopy(tasks)
    window = compute_visible_window(tasks, scroll_top=0, viewport_height=800)

    render_window(window, _project(), settings=TimelineSettings(day_width=40), now=datetime(2024, 1, 2))

    assert tasks == before


def test_marker_and_card_helpers():
    assert "left:80px" in render_today_marker_html(2.0, TimelineSettings(day_width=40))

    card = render_project_card_html(_project(), title="Unit")
    assert "<h3 style='margin:0 0 6px 0;'>Unit</h3>" in card
    assert "2024-01-01" in card
