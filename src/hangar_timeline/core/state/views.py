# src/hangar_timeline/core/state/views.py
"""
Visões filtradas de um snapshot publicado.

Regras:
    - o projeto ativo restringe as tarefas (`ALL` mostra todas)
    - a busca é case-insensitive sobre título, descrição, id e projeto
    - PENDING → progresso < 100
    - TODAY   → `start <= d <= start + duration`, com `d` o dia corrente
      (offset truncado) a partir da data de início da visão

A data de início da visão é a do projeto ativo; em `ALL`, a menor data
entre todos os projetos; sem projetos, o dia corrente.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from ..config.settings import TimelineSettings
from ..schedule.types import Project, Task
from ..timeline.geometry import today_offset_days
from .snapshot import ALL_PROJECTS, ScheduleSnapshot


class ViewFilter(str, Enum):
    ALL = "ALL"
    PENDING = "PENDING"
    TODAY = "TODAY"


def view_start_date(snapshot: ScheduleSnapshot, today: Optional[date] = None) -> date:
    active = snapshot.projects.get(snapshot.active_project)
    if active is not None:
        return active.start_date
    if snapshot.projects:
        return min(p.start_date for p in snapshot.projects.values())
    return today if today is not None else date.today()


def current_project(snapshot: ScheduleSnapshot, settings: Optional[TimelineSettings] = None) -> Project:
    """Projeto ativo, ou um projeto sintético `ALL` cobrindo a frota."""
    active = snapshot.projects.get(snapshot.active_project)
    if active is not None:
        return active
    settings = settings or TimelineSettings()
    return Project(
        name=ALL_PROJECTS,
        customer="FLEET",
        start_date=view_start_date(snapshot),
        interval_days=settings.default_interval_days,
    )


def _matches(task: Task, needle: str) -> bool:
    if not needle:
        return True
    haystack = (task.title, task.description, task.id, task.project)
    return any(needle in (field or "").lower() for field in haystack)


def filter_tasks(
    snapshot: ScheduleSnapshot,
    query: str = "",
    view_filter: ViewFilter = ViewFilter.ALL,
    now: Optional[datetime] = None,
) -> List[Task]:
    """Tarefas visíveis para o projeto ativo, a busca e o filtro."""
    view_filter = ViewFilter(view_filter)
    needle = (query or "").strip().lower()
    today_index = math.floor(today_offset_days(view_start_date(snapshot), now))

    out: List[Task] = []
    for task in snapshot.project_tasks(snapshot.active_project):
        if not _matches(task, needle):
            continue
        if view_filter is ViewFilter.PENDING and task.progress >= 100:
            continue
        if view_filter is ViewFilter.TODAY and not (task.start <= today_index <= task.start + task.duration):
            continue
        out.append(task)
    return out
